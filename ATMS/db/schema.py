"""
Database Schema
Creates the ATM tables when they do not exist yet
"""

import logging

from db.database import db_manager

logger = logging.getLogger(__name__)

TABLES = {
    'accounts': """
        CREATE TABLE IF NOT EXISTS accounts (
            account_number INT PRIMARY KEY,
            pin_hash VARCHAR(60) NOT NULL,
            balance DECIMAL(12, 2) NOT NULL DEFAULT 0.00,
            name VARCHAR(50) NOT NULL,
            login_attempts INT NOT NULL DEFAULT 0,
            locked TINYINT(1) NOT NULL DEFAULT 0,
            CHECK (balance >= 0)
        )
    """,
    'atm_inventory': """
        CREATE TABLE IF NOT EXISTS atm_inventory (
            inventory_id INT PRIMARY KEY,
            note_2000 INT NOT NULL DEFAULT 0,
            note_500 INT NOT NULL DEFAULT 0,
            note_200 INT NOT NULL DEFAULT 0,
            note_100 INT NOT NULL DEFAULT 0
        )
    """,
    'transactions': """
        CREATE TABLE IF NOT EXISTS transactions (
            txn_id INT AUTO_INCREMENT PRIMARY KEY,
            account_number INT NOT NULL,
            txn_type VARCHAR(32) NOT NULL,
            amount DECIMAL(12, 2) NOT NULL,
            balance_after_txn DECIMAL(12, 2) NOT NULL,
            txn_time DATETIME NOT NULL,
            INDEX idx_transactions_account (account_number, txn_time)
        )
    """,
}

def initialize_schema(db=None):
    """Create all tables; safe to call on every start"""
    db = db or db_manager
    for table_name, ddl in TABLES.items():
        db.execute_query(ddl)
        logger.info(f"Ensured table {table_name}")
