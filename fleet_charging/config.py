"""Configuration management for the fleet charging scheduler."""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Database Configuration
DB_CONFIG = {
    'user': os.getenv('fleet_db_user'),
    'password': os.getenv('fleet_db_pswd'),
    'database': os.getenv('fleet_db_name'),
    'host': os.getenv('fleet_db_host'),
    'port': os.getenv('fleet_db_port', '5432')
}

# Application Configuration
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
# Empty string disables the log file
LOG_FILE = os.getenv('LOG_FILE', 'fleet_charging.log')

# Default Scheduling Parameters
DEFAULT_TIME_HORIZON_HOURS = int(os.getenv('DEFAULT_TIME_HORIZON_HOURS', '8'))
DEFAULT_DATA_SOURCE = os.getenv('FLEET_DATA_SOURCE', 'memory')
DEFAULT_DATA_FILE = os.getenv('FLEET_DATA_FILE')
DEFAULT_SITE_ID = int(os.getenv('FLEET_SITE_ID', '1'))
DEFAULT_MAX_RETRIES = int(os.getenv('FLEET_MAX_RETRIES', '0'))

DATA_SOURCE_KINDS = ('memory', 'json', 'database')
