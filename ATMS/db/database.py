"""
Database Configuration and Connection Management
Handles MySQL connection pooling and configuration for the ATM Withdrawal System
"""

import mysql.connector
from mysql.connector import pooling, Error
import os
import logging
from contextlib import contextmanager

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

class DatabaseConfig:
    """Database configuration management"""

    def __init__(self):
        self.config = {
            'host': os.getenv('DB_HOST', 'localhost'),
            'port': int(os.getenv('DB_PORT', 3306)),
            'database': os.getenv('DB_NAME', 'atm_db'),
            'user': os.getenv('DB_USER', 'root'),
            'password': os.getenv('DB_PASSWORD', ''),
            'charset': 'utf8mb4',
            'collation': 'utf8mb4_unicode_ci',
            'autocommit': False,
            'pool_name': 'atm_pool',
            'pool_size': int(os.getenv('DB_POOL_SIZE', 5)),
            'pool_reset_session': True
        }

        self.connection_pool = None

    def _initialize_pool(self):
        """Initialize connection pool"""
        try:
            self.connection_pool = pooling.MySQLConnectionPool(**self.config)
            logger.info("Database connection pool initialized successfully")
        except Error as e:
            logger.error(f"Error creating connection pool: {e}")
            raise

    def get_connection(self):
        """Get connection from pool, creating the pool on first use"""
        if self.connection_pool is None:
            self._initialize_pool()
        try:
            return self.connection_pool.get_connection()
        except Error as e:
            logger.error(f"Error getting connection from pool: {e}")
            raise

class DatabaseManager:
    """Database operations manager"""

    def __init__(self):
        self.db_config = DatabaseConfig()

    @contextmanager
    def get_connection(self):
        """Context manager for database connections"""
        connection = None
        try:
            connection = self.db_config.get_connection()
            yield connection
        except Error as e:
            if connection:
                connection.rollback()
            logger.error(f"Database error: {e}")
            raise
        finally:
            if connection and connection.is_connected():
                connection.close()

    def execute_query(self, query: str, params: tuple = None, fetch_one: bool = False, fetch_all: bool = False):
        """Execute a query and return results"""
        with self.get_connection() as connection:
            cursor = connection.cursor(dictionary=True)
            try:
                cursor.execute(query, params or ())

                if fetch_one:
                    return cursor.fetchone()
                elif fetch_all:
                    return cursor.fetchall()
                else:
                    connection.commit()
                    return cursor.lastrowid
            finally:
                cursor.close()

    def execute_many(self, query: str, params_list: list):
        """Execute query with multiple parameter sets in one transaction"""
        with self.get_connection() as connection:
            cursor = connection.cursor()
            try:
                connection.start_transaction()
                cursor.executemany(query, params_list)
                connection.commit()
                return cursor.rowcount
            finally:
                cursor.close()

# Global database manager instance; the pool opens on first query
db_manager = DatabaseManager()
