"""
Base Repository Class
Provides common database operations for all repositories
"""

from abc import ABC
from typing import List, Optional, Dict, Any
import logging
from mysql.connector import Error

from db.database import db_manager
from utils.exceptions import DatabaseException, ValidationException

logger = logging.getLogger(__name__)

class BaseRepository(ABC):
    """Base repository with common CRUD operations"""

    def __init__(self, table_name: str, primary_key: str = 'id', db=None):
        self.table_name = table_name
        self.primary_key = primary_key
        self.db = db or db_manager

    def create(self, data: Dict[str, Any]) -> int:
        """Insert a new record and return its generated ID"""
        try:
            clean_data = {k: v for k, v in data.items() if v is not None}

            if not clean_data:
                raise ValidationException("No data provided for creation")

            columns = ', '.join(clean_data.keys())
            placeholders = ', '.join(['%s'] * len(clean_data))
            values = tuple(clean_data.values())

            query = f"INSERT INTO {self.table_name} ({columns}) VALUES ({placeholders})"

            result = self.db.execute_query(query, values)
            logger.info(f"Created record in {self.table_name} with ID: {result}")
            return result

        except Error as e:
            logger.error(f"Error creating record in {self.table_name}: {e}")
            raise DatabaseException(f"Failed to create record: {str(e)}")

    def upsert(self, data: Dict[str, Any]) -> None:
        """Insert a record, or overwrite every column if the primary key exists"""
        try:
            if self.primary_key not in data:
                raise ValidationException(f"{self.primary_key} is required to save a record")

            columns = ', '.join(data.keys())
            placeholders = ', '.join(['%s'] * len(data))
            updates = ', '.join(f"{k} = VALUES({k})" for k in data if k != self.primary_key)

            query = (
                f"INSERT INTO {self.table_name} ({columns}) VALUES ({placeholders}) "
                f"ON DUPLICATE KEY UPDATE {updates}"
            )

            self.db.execute_query(query, tuple(data.values()))

        except Error as e:
            logger.error(f"Error saving record in {self.table_name}: {e}")
            raise DatabaseException(f"Failed to save record: {str(e)}")

    def upsert_many(self, rows: List[Dict[str, Any]]) -> int:
        """Save several records with the same columns in one transaction"""
        if not rows:
            return 0
        try:
            columns = list(rows[0].keys())
            placeholders = ', '.join(['%s'] * len(columns))
            updates = ', '.join(f"{k} = VALUES({k})" for k in columns if k != self.primary_key)

            query = (
                f"INSERT INTO {self.table_name} ({', '.join(columns)}) VALUES ({placeholders}) "
                f"ON DUPLICATE KEY UPDATE {updates}"
            )

            params = [tuple(row[c] for c in columns) for row in rows]
            count = self.db.execute_many(query, params)
            logger.info(f"Saved {len(rows)} records in {self.table_name}")
            return count

        except Error as e:
            logger.error(f"Error saving records in {self.table_name}: {e}")
            raise DatabaseException(f"Failed to save records: {str(e)}")

    def find_by_id(self, record_id: Any) -> Optional[Dict[str, Any]]:
        """Find record by primary key"""
        try:
            query = f"SELECT * FROM {self.table_name} WHERE {self.primary_key} = %s"
            return self.db.execute_query(query, (record_id,), fetch_one=True)

        except Error as e:
            logger.error(f"Error finding record by ID in {self.table_name}: {e}")
            raise DatabaseException(f"Failed to find record: {str(e)}")

    def find_all(self, order_by: str = None) -> List[Dict[str, Any]]:
        """Find all records, ordered by primary key unless told otherwise"""
        try:
            query = f"SELECT * FROM {self.table_name} ORDER BY {order_by or self.primary_key}"
            result = self.db.execute_query(query, (), fetch_all=True)
            return result or []

        except Error as e:
            logger.error(f"Error finding all records in {self.table_name}: {e}")
            raise DatabaseException(f"Failed to find records: {str(e)}")

    def find_by_field(self, field_name: str, field_value: Any, order_by: str = None) -> List[Dict[str, Any]]:
        """Find records by specific field"""
        try:
            query = f"SELECT * FROM {self.table_name} WHERE {field_name} = %s"
            if order_by:
                query += f" ORDER BY {order_by}"
            result = self.db.execute_query(query, (field_value,), fetch_all=True)
            return result or []

        except Error as e:
            logger.error(f"Error finding records by {field_name} in {self.table_name}: {e}")
            raise DatabaseException(f"Failed to find records: {str(e)}")
