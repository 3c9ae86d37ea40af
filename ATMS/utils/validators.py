"""
Input Validation Utilities
Provides validation functions for ATM inputs
"""

import math
import re
from decimal import Decimal
from typing import Mapping, Union

from utils.exceptions import (
    ValidationException, InvalidAmountException, InvalidRefillAmountException
)
from utils.settings import DENOMINATIONS

class ATMValidator:
    """Validation utilities for ATM operations"""

    @staticmethod
    def validate_withdrawal_amount(amount: Union[int, float, Decimal], unit: int = DENOMINATIONS[-1]) -> int:
        """Validate a withdrawal request and return it as whole rupees"""
        if isinstance(amount, bool) or not isinstance(amount, (int, float, Decimal)):
            raise InvalidAmountException("Amount must be a number")

        if isinstance(amount, Decimal):
            finite = amount.is_finite()
        else:
            finite = isinstance(amount, int) or math.isfinite(amount)
        if not finite:
            raise InvalidAmountException("Amount must be a finite number")

        if amount <= 0:
            raise InvalidAmountException("Invalid amount. Must be greater than zero")

        if amount != int(amount) or int(amount) % unit != 0:
            raise InvalidAmountException(f"Amount must be a multiple of {unit}")

        return int(amount)

    @staticmethod
    def validate_account_number(account_number: Union[int, str]) -> int:
        """Validate account number and return it as an int"""
        if account_number is None or str(account_number).strip() == "":
            raise ValidationException("Account number is required")

        if not re.match(r'^\d{1,9}$', str(account_number).strip()):
            raise ValidationException("Account number must be numeric")

        return int(str(account_number).strip())

    @staticmethod
    def validate_pin(pin: Union[int, str]) -> str:
        """Validate PIN format and return it as a string"""
        if pin is None or str(pin).strip() == "":
            raise ValidationException("PIN is required")

        pin = str(pin).strip()
        if not re.match(r'^\d{4,6}$', pin):
            raise ValidationException("PIN must be 4-6 digits")

        return pin

    @staticmethod
    def validate_refill(deltas: Mapping[int, int]) -> dict:
        """Validate refill counts per denomination"""
        clean = {}
        for denomination, delta in deltas.items():
            if denomination not in DENOMINATIONS:
                raise InvalidRefillAmountException(f"Unsupported denomination: {denomination}")

            if isinstance(delta, bool) or not isinstance(delta, int):
                raise InvalidRefillAmountException(f"Refill count for {denomination} must be a whole number")

            if delta < 0:
                raise InvalidRefillAmountException("Invalid (negative) input. Operation cancelled")

            clean[denomination] = delta

        return clean
