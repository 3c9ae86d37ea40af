"""
Account Ledger
Business logic for account login, balances and debits
"""

from collections import OrderedDict
from decimal import Decimal
from typing import List, Optional, Union
import logging

from core.repositories.account_repository import AccountRepository
from core.repositories.transaction_repository import TransactionRepository
from core.models.entities import Account, TransactionKind, TransactionRecord
from utils.exceptions import (
    AccountNotFoundException, AccountLockedException, AuthenticationException,
    ATMSystemException, InsufficientFundsException
)
from utils.helpers import NumberUtils, SecurityUtils, StringUtils, LoggingUtils
from utils.settings import MAX_LOGIN_ATTEMPTS

logger = logging.getLogger(__name__)

class AccountLedger:
    """Owns the in-memory account records for the session

    Accounts are loaded once, changed in place and written back through the
    repository after every state change. A write that fails is logged and
    the in-memory change stands for the rest of the session.
    """

    def __init__(self, accounts: List[Account] = None, account_repo: AccountRepository = None,
                 transaction_repo: TransactionRepository = None,
                 max_login_attempts: int = MAX_LOGIN_ATTEMPTS):
        self.account_repo = account_repo or AccountRepository()
        self.transaction_repo = transaction_repo or TransactionRepository()
        self.max_login_attempts = max_login_attempts
        self._accounts = OrderedDict(
            (a.account_number, a) for a in sorted(accounts or [], key=lambda a: a.account_number)
        )

    @classmethod
    def from_storage(cls, account_repo: AccountRepository = None,
                     transaction_repo: TransactionRepository = None) -> 'AccountLedger':
        """Load all accounts, seeding the sample set into an empty table"""
        account_repo = account_repo or AccountRepository()
        accounts = account_repo.seed_sample_accounts()
        logger.info(f"Loaded {len(accounts)} accounts")
        return cls(accounts, account_repo, transaction_repo)

    def find(self, account_number: int) -> Account:
        account = self._accounts.get(account_number)
        if account is None:
            raise AccountNotFoundException(f"Account {account_number} not found")
        return account

    def accounts(self) -> List[Account]:
        return list(self._accounts.values())

    def authenticate(self, account_number: int, pin: str) -> Account:
        """Check the PIN, locking the account after too many failures"""
        account = self.find(account_number)

        if account.locked:
            LoggingUtils.log_security_event("login_rejected_locked", account_number)
            raise AccountLockedException(
                "Account is locked due to multiple failed login attempts. Contact admin."
            )

        if SecurityUtils.verify_pin(pin, account.pin_hash):
            if account.login_attempts:
                account.login_attempts = 0
                self.persist(account)
            LoggingUtils.log_security_event("login_success", account_number)
            return account

        account.login_attempts += 1
        remaining = self.max_login_attempts - account.login_attempts

        if remaining <= 0:
            account.locked = True
            self.persist(account)
            LoggingUtils.log_security_event(
                "account_locked", account_number,
                details={'attempts': account.login_attempts}
            )
            raise AccountLockedException(
                f"Incorrect PIN. Account locked after {self.max_login_attempts} failed attempts.",
                attempts_remaining=0
            )

        self.persist(account)
        LoggingUtils.log_security_event(
            "login_failed", account_number, details={'attempts_remaining': remaining}
        )
        raise AuthenticationException(
            f"Incorrect PIN. Attempts remaining: {remaining}", attempts_remaining=remaining
        )

    def unlock(self, account_number: int) -> Account:
        """Clear the lock and the failure counter"""
        account = self.find(account_number)
        account.locked = False
        account.login_attempts = 0
        self.persist(account)
        LoggingUtils.log_security_event("account_unlocked", account_number)
        return account

    def ensure_sufficient_funds(self, account: Account, amount: Union[int, Decimal]) -> None:
        if Decimal(amount) > account.balance:
            raise InsufficientFundsException(
                f"Insufficient balance. Available: {StringUtils.format_currency(account.balance)}, "
                f"Requested: {StringUtils.format_currency(Decimal(amount))}"
            )

    def debit(self, account_number: int, amount: Union[int, Decimal]) -> Decimal:
        """Subtract from the balance in memory and return the new balance"""
        account = self.find(account_number)
        self.ensure_sufficient_funds(account, amount)
        account.balance = NumberUtils.round_currency(account.balance - Decimal(amount))
        return account.balance

    def inquire(self, account_number: int) -> Decimal:
        """Return the balance; every inquiry is journaled"""
        account = self.find(account_number)
        self.journal(account, TransactionKind.BALANCE_INQUIRY, Decimal('0.00'))
        return account.balance

    def history(self, account_number: int) -> List[TransactionRecord]:
        self.find(account_number)
        return self.transaction_repo.find_by_account(account_number)

    def journal(self, account: Account, kind: TransactionKind,
                amount: Union[int, Decimal]) -> Optional[TransactionRecord]:
        """Append a journal record; returns None if it could not be stored"""
        record = TransactionRecord(
            account_number=account.account_number,
            kind=kind,
            amount=NumberUtils.round_currency(amount),
            balance_after_txn=account.balance
        )
        try:
            return self.transaction_repo.append(record)
        except ATMSystemException as e:
            logger.warning(f"Transaction not logged for account {account.account_number}: {e}")
            return None

    def persist(self, account: Account) -> bool:
        try:
            self.account_repo.save_account(account)
            return True
        except ATMSystemException as e:
            logger.error(f"Unable to save account {account.account_number}: {e}")
            return False

    def persist_all(self) -> bool:
        try:
            self.account_repo.save_accounts(self.accounts())
            return True
        except ATMSystemException as e:
            logger.error(f"Unable to save accounts: {e}")
            return False
