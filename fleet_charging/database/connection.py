"""Database connection management."""
import psycopg2
from psycopg2.extras import RealDictCursor
from fleet_charging.config import DB_CONFIG
from fleet_charging.utils.logging_config import logger


class DatabaseConnection:
    """Read-only access to the fleet tables in PostgreSQL."""

    def __init__(self, config=None):
        """
        Args:
            config: Connection settings (defaults to DB_CONFIG from the environment)
        """
        self.config = config or DB_CONFIG
        self._connection = None

    def connect(self):
        """Open the connection on first use and reuse it afterwards."""
        if self._connection is not None:
            return self._connection
        try:
            self._connection = psycopg2.connect(
                user=self.config['user'],
                password=self.config['password'],
                database=self.config['database'],
                host=self.config['host'],
                port=self.config['port']
            )
            logger.info(f"Connected to fleet database {self.config['database']} "
                        f"at {self.config['host']}:{self.config['port']}")
            return self._connection
        except psycopg2.Error as e:
            logger.error(f"Fleet database connection failed: {e}")
            raise

    def execute_query(self, query, params=None):
        """
        Run a read query.

        Args:
            query: SQL query string
            params: Query parameters

        Returns:
            List of rows as dictionaries
        """
        conn = self.connect()
        try:
            with conn.cursor(cursor_factory=RealDictCursor) as cursor:
                cursor.execute(query, params)
                return cursor.fetchall()
        except psycopg2.Error as e:
            # Leave the connection usable for the next read
            conn.rollback()
            logger.error(f"Fleet query failed: {e}")
            raise


# Global database connection instance
db = DatabaseConnection()
