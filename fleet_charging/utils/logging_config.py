"""Logging configuration for the application."""
import logging
import sys
from fleet_charging.config import LOG_LEVEL, LOG_FILE

def setup_logging():
    """Configure application logging."""
    log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    handlers = [logging.StreamHandler(sys.stdout)]
    if LOG_FILE:
        handlers.append(logging.FileHandler(LOG_FILE))

    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
        format=log_format,
        handlers=handlers
    )
    
    return logging.getLogger('fleet_charging')

logger = setup_logging()
