"""
Runtime settings for the ATM Withdrawal System
Values come from environment variables with sensible defaults
"""

import os

ADMIN_PIN = os.getenv('ATM_ADMIN_PIN', '999999')
MAX_LOGIN_ATTEMPTS = int(os.getenv('ATM_MAX_LOGIN_ATTEMPTS', 3))
PIN_HASH_ROUNDS = int(os.getenv('ATM_PIN_HASH_ROUNDS', 12))
LOG_DIR = os.getenv('ATM_LOG_DIR', 'logs')

# Denominations in dispensing order (largest first)
DENOMINATIONS = (2000, 500, 200, 100)

# Used when the machine has no stored inventory yet
DEFAULT_INVENTORY = {2000: 10, 500: 20, 200: 50, 100: 100}

# Seeded when the accounts table is empty
SAMPLE_ACCOUNTS = [
    {'account_number': 1001, 'pin': '1234', 'balance': '15000.00', 'name': 'Zaid'},
    {'account_number': 1002, 'pin': '2345', 'balance': '5000.00', 'name': 'Anita'},
    {'account_number': 1003, 'pin': '3456', 'balance': '20000.00', 'name': 'Ravi'},
]
