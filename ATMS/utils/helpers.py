"""
Helper Utilities
Common utility functions for ATM operations
"""

from decimal import Decimal, ROUND_HALF_UP
from datetime import datetime
from typing import Dict, Any, Union
import logging

import bcrypt

from utils.settings import PIN_HASH_ROUNDS

logger = logging.getLogger(__name__)

class NumberUtils:
    """Utility functions for number operations"""

    @staticmethod
    def round_currency(amount: Union[Decimal, int, str]) -> Decimal:
        """Round amount to 2 decimal places for currency"""
        if not isinstance(amount, Decimal):
            amount = Decimal(str(amount))
        return amount.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)

class StringUtils:
    """Utility functions for string operations"""

    @staticmethod
    def mask_account_number(account_number: Union[int, str]) -> str:
        """Mask account number for display (show only last 2 digits)"""
        account_number = str(account_number)
        if len(account_number) <= 2:
            return account_number

        return "*" * (len(account_number) - 2) + account_number[-2:]

    @staticmethod
    def format_currency(amount: Union[Decimal, int], currency_symbol: str = "₹") -> str:
        """Format amount as currency string"""
        return f"{currency_symbol}{amount:,.2f}"

class SecurityUtils:
    """Security utility functions"""

    @staticmethod
    def hash_pin(pin: str, rounds: int = None) -> str:
        """Hash PIN using bcrypt"""
        salt = bcrypt.gensalt(rounds=rounds or PIN_HASH_ROUNDS)
        return bcrypt.hashpw(str(pin).strip().encode('utf-8'), salt).decode('utf-8')

    @staticmethod
    def verify_pin(pin: str, hashed: str) -> bool:
        """Verify PIN against hash"""
        try:
            return bcrypt.checkpw(str(pin).strip().encode('utf-8'), hashed.encode('utf-8'))
        except ValueError:
            logger.warning("Stored PIN is not a bcrypt hash")
            return False

class LoggingUtils:
    """Logging utility functions"""

    @staticmethod
    def log_transaction(transaction_type: str, account_number: int, amount: Union[Decimal, int],
                        details: Dict[str, Any] = None):
        """Log transaction for audit trail"""
        log_data = {
            'transaction_type': transaction_type,
            'account_number': account_number,
            'amount': str(amount),
            'timestamp': datetime.now().isoformat(),
            'details': details or {}
        }

        logger.info(f"Transaction: {transaction_type}", extra=log_data)

    @staticmethod
    def log_security_event(event_type: str, account_number: int = None,
                           details: Dict[str, Any] = None):
        """Log security events"""
        log_data = {
            'event_type': event_type,
            'account_number': account_number,
            'timestamp': datetime.now().isoformat(),
            'details': details or {}
        }

        logger.warning(f"Security Event: {event_type}", extra=log_data)

    @staticmethod
    def log_business_event(event_type: str, entity_type: str, entity_id: Any,
                           details: Dict[str, Any] = None):
        """Log business events"""
        log_data = {
            'event_type': event_type,
            'entity_type': entity_type,
            'entity_id': entity_id,
            'timestamp': datetime.now().isoformat(),
            'details': details or {}
        }

        logger.info(f"Business Event: {event_type}", extra=log_data)
