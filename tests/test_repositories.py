from datetime import datetime
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from mysql.connector import Error

from core.models.entities import Account, TransactionKind, TransactionRecord
from core.models.note_inventory import NoteInventory
from core.repositories.account_repository import AccountRepository
from core.repositories.inventory_repository import InventoryRepository
from core.repositories.transaction_repository import TransactionRepository
from db.schema import TABLES, initialize_schema
from utils.exceptions import DatabaseException
from utils.helpers import SecurityUtils


def test_account_round_trip_mapping():
    db = MagicMock()
    db.execute_query.return_value = [
        {'account_number': 1001, 'pin_hash': '$2b$04$hash', 'balance': Decimal('15000.50'),
         'name': 'Zaid', 'login_attempts': 2, 'locked': 0},
    ]
    repo = AccountRepository(db)

    accounts = repo.load_accounts()

    assert accounts == [Account(1001, '$2b$04$hash', Decimal('15000.50'), 'Zaid', 2, False)]
    query = db.execute_query.call_args[0][0]
    assert query.startswith("SELECT * FROM accounts ORDER BY account_number")


def test_save_account_upserts_all_columns():
    db = MagicMock()
    repo = AccountRepository(db)

    repo.save_account(Account(1002, '$2b$04$hash', Decimal('4500'), 'Anita', 0, True))

    query, params = db.execute_query.call_args[0]
    assert "ON DUPLICATE KEY UPDATE" in query
    assert params == (1002, '$2b$04$hash', Decimal('4500.00'), 'Anita', 0, 1)


def test_seed_only_when_empty():
    db = MagicMock()
    db.execute_query.return_value = []
    repo = AccountRepository(db)

    seeded = repo.seed_sample_accounts()

    assert [a.account_number for a in seeded] == [1001, 1002, 1003]
    rows = db.execute_many.call_args[0][1]
    assert rows[0][0] == 1001
    assert rows[0][2:] == (Decimal('15000.00'), 'Zaid', 0, 0)
    assert rows[0][1] != '1234'
    assert SecurityUtils.verify_pin('1234', rows[0][1])
    assert not SecurityUtils.verify_pin('2345', rows[0][1])


def test_driver_errors_become_database_exceptions():
    db = MagicMock()
    db.execute_query.side_effect = Error("server has gone away")
    repo = AccountRepository(db)

    with pytest.raises(DatabaseException):
        repo.save_account(Account(1001, '$2b$04$hash', Decimal('1'), 'Zaid'))
    with pytest.raises(DatabaseException):
        repo.load_accounts()


def test_inventory_load_and_save():
    db = MagicMock()
    db.execute_query.return_value = {
        'inventory_id': 1, 'note_2000': 3, 'note_500': 4, 'note_200': 5, 'note_100': 6
    }
    repo = InventoryRepository(db)

    inventory = repo.load_inventory()
    assert inventory.counts() == {2000: 3, 500: 4, 200: 5, 100: 6}

    repo.save_inventory(NoteInventory({2000: 1, 500: 2, 200: 3, 100: 4}))
    query, params = db.execute_query.call_args[0]
    assert query.startswith("INSERT INTO atm_inventory (inventory_id, note_2000, note_500, note_200, note_100)")
    assert params == (1, 1, 2, 3, 4)


def test_missing_inventory_uses_defaults():
    db = MagicMock()
    db.execute_query.return_value = None
    repo = InventoryRepository(db)

    inventory = repo.load_inventory()

    assert inventory.counts() == {2000: 10, 500: 20, 200: 50, 100: 100}
    assert db.execute_query.call_args[0][1] == (1, 10, 20, 50, 100)


def test_journal_append_and_read():
    db = MagicMock()
    db.execute_query.return_value = 7
    repo = TransactionRepository(db)
    when = datetime(2026, 1, 2, 9, 30, 0)

    stored = repo.append(TransactionRecord(1001, TransactionKind.WITHDRAWAL,
                                           Decimal('2300.00'), Decimal('12700.00'), when))

    assert stored.txn_id == 7
    query, params = db.execute_query.call_args[0]
    assert query.startswith("INSERT INTO transactions")
    assert params == (1001, 'Withdrawal', Decimal('2300.00'), Decimal('12700.00'), when)

    db.execute_query.return_value = [
        {'txn_id': 7, 'account_number': 1001, 'txn_type': 'Withdrawal', 'amount': Decimal('2300.00'),
         'balance_after_txn': Decimal('12700.00'), 'txn_time': when},
    ]
    history = repo.find_by_account(1001)
    assert history == [stored]
    assert history[0].timestamp == '2026-01-02 09:30:00'


def test_initialize_schema_creates_every_table():
    db = MagicMock()
    initialize_schema(db)
    assert db.execute_query.call_count == len(TABLES)


def test_account_number_zero_is_a_valid_key():
    db = MagicMock()
    db.execute_query.return_value = 3

    AccountRepository(db).save_account(Account(0, '$2b$04$hash', Decimal('500'), 'Zero'))
    stored = TransactionRepository(db).append(
        TransactionRecord(0, TransactionKind.WITHDRAWAL, Decimal('500.00'), Decimal('0.00'))
    )

    assert stored.txn_id == 3
    assert db.execute_query.call_count == 2
