"""
Custom Exceptions for the ATM Withdrawal System
"""

class ATMSystemException(Exception):
    """Base exception for all ATM system errors"""
    def __init__(self, message: str, error_code: str = None):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)

class ValidationException(ATMSystemException):
    """Raised when input validation fails"""
    pass

class InvalidAmountException(ValidationException):
    """Raised when a withdrawal amount is non-positive or not a multiple of 100"""
    pass

class InvalidRefillAmountException(ValidationException):
    """Raised when a refill delta is negative"""
    pass

class InsufficientFundsException(ATMSystemException):
    """Raised when account has insufficient funds for operation"""
    pass

class InsufficientTotalCashException(ATMSystemException):
    """Raised when the machine holds less cash in total than requested"""
    pass

class InfeasibleWithdrawalException(ATMSystemException):
    """Raised when no combination of available notes matches the amount"""
    def __init__(self, message: str, greedy_plan=None, error_code: str = None):
        self.greedy_plan = greedy_plan
        super().__init__(message, error_code)

class InsufficientNotesException(ATMSystemException):
    """Raised when a plan asks for more notes than the machine holds"""
    pass

class AccountNotFoundException(ATMSystemException):
    """Raised when referenced account does not exist"""
    pass

class AuthenticationException(ATMSystemException):
    """Raised when authentication fails"""
    def __init__(self, message: str, attempts_remaining: int = None, error_code: str = None):
        self.attempts_remaining = attempts_remaining
        super().__init__(message, error_code)

class AccountLockedException(AuthenticationException):
    """Raised when trying to log in to a locked account"""
    pass

class DatabaseException(ATMSystemException):
    """Raised when database operations fail"""
    pass
