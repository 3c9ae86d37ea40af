"""
Account Repository
Handles database operations for accounts table
"""

from typing import List, Dict, Any
from decimal import Decimal
import logging

from core.repositories.base_repository import BaseRepository
from core.models.entities import Account
from utils.exceptions import ValidationException
from utils.helpers import NumberUtils, SecurityUtils
from utils.settings import SAMPLE_ACCOUNTS

logger = logging.getLogger(__name__)

class AccountRepository(BaseRepository):
    """Repository for accounts table operations"""

    def __init__(self, db=None):
        super().__init__('accounts', 'account_number', db=db)

    def load_accounts(self) -> List[Account]:
        """Load every account, ordered by account number"""
        return [self._dict_to_account(row) for row in self.find_all()]

    def save_account(self, account: Account) -> None:
        """Write one account back to storage"""
        if account.account_number is None:
            raise ValidationException("Account number is required")

        self.upsert(self._account_to_dict(account))

    def save_accounts(self, accounts: List[Account]) -> None:
        """Write all given accounts back to storage"""
        self.upsert_many([self._account_to_dict(account) for account in accounts])

    def seed_sample_accounts(self) -> List[Account]:
        """Create the demo accounts when the table is empty"""
        existing = self.load_accounts()
        if existing:
            return existing

        accounts = [
            Account(
                account_number=sample['account_number'],
                pin_hash=SecurityUtils.hash_pin(sample['pin']),
                balance=Decimal(sample['balance']),
                name=sample['name']
            )
            for sample in SAMPLE_ACCOUNTS
        ]
        self.save_accounts(accounts)
        logger.info(f"No accounts found; created {len(accounts)} sample accounts")
        return accounts

    def _account_to_dict(self, account: Account) -> Dict[str, Any]:
        return {
            'account_number': account.account_number,
            'pin_hash': account.pin_hash,
            'balance': NumberUtils.round_currency(account.balance),
            'name': account.name,
            'login_attempts': account.login_attempts,
            'locked': 1 if account.locked else 0
        }

    def _dict_to_account(self, account_data: dict) -> Account:
        """Convert dictionary to Account object"""
        return Account(
            account_number=int(account_data['account_number']),
            pin_hash=account_data['pin_hash'],
            balance=NumberUtils.round_currency(Decimal(str(account_data['balance']))),
            name=account_data['name'],
            login_attempts=int(account_data.get('login_attempts') or 0),
            locked=bool(account_data.get('locked'))
        )
