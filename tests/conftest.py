from decimal import Decimal
from dataclasses import replace

import pytest

from core.models.entities import Account
from core.models.note_inventory import NoteInventory
from core.services.account_ledger import AccountLedger
from core.services.admin_service import AdminService
from core.services.withdrawal_service import WithdrawalCoordinator
from utils.exceptions import DatabaseException
from utils.helpers import SecurityUtils


def hashed(pin):
    return SecurityUtils.hash_pin(pin, rounds=4)


class MemoryAccountRepository:
    def __init__(self, accounts=None):
        self.rows = {a.account_number: replace(a) for a in accounts or []}
        self.fail = False
        self.error = DatabaseException("storage unavailable")
        self.saves = 0

    def _check(self):
        if self.fail:
            raise self.error

    def seed_sample_accounts(self):
        return [replace(a) for a in self.rows.values()]

    def save_account(self, account):
        self._check()
        self.saves += 1
        self.rows[account.account_number] = replace(account)

    def save_accounts(self, accounts):
        self._check()
        for account in accounts:
            self.rows[account.account_number] = replace(account)


class MemoryInventoryRepository:
    def __init__(self, counts=None):
        self.saved = dict(counts) if counts else None
        self.fail = False
        self.error = DatabaseException("storage unavailable")

    def load_inventory(self):
        return NoteInventory(self.saved)

    def save_inventory(self, inventory):
        if self.fail:
            raise self.error
        self.saved = inventory.counts()


class MemoryTransactionRepository:
    def __init__(self):
        self.records = []
        self.fail = False
        self.error = DatabaseException("storage unavailable")

    def append(self, record):
        if self.fail:
            raise self.error
        stored = replace(record, txn_id=len(self.records) + 1)
        self.records.append(stored)
        return stored

    def find_by_account(self, account_number):
        return [r for r in self.records if r.account_number == account_number]


@pytest.fixture
def accounts():
    return [
        Account(account_number=1001, pin_hash=hashed('1234'), balance=Decimal('15000.00'), name='Zaid'),
        Account(account_number=1002, pin_hash=hashed('2345'), balance=Decimal('500.00'), name='Anita'),
        Account(account_number=1003, pin_hash=hashed('3456'), balance=Decimal('20000.00'), name='Ravi'),
    ]


@pytest.fixture
def account_repo(accounts):
    return MemoryAccountRepository(accounts)


@pytest.fixture
def transaction_repo():
    return MemoryTransactionRepository()


@pytest.fixture
def inventory():
    return NoteInventory({2000: 10, 500: 20, 200: 50, 100: 100})


@pytest.fixture
def inventory_repo(inventory):
    return MemoryInventoryRepository(inventory.counts())


@pytest.fixture
def ledger(accounts, account_repo, transaction_repo):
    return AccountLedger(accounts, account_repo, transaction_repo)


@pytest.fixture
def coordinator(ledger, inventory, inventory_repo):
    return WithdrawalCoordinator(ledger, inventory, inventory_repo)


@pytest.fixture
def admin(ledger, inventory, inventory_repo):
    return AdminService(ledger, inventory, inventory_repo, admin_pin='999999')
