from decimal import Decimal

import pytest

from core.models.entities import Account, TransactionKind
from core.services.account_ledger import AccountLedger
from utils.exceptions import (
    AccountLockedException, AccountNotFoundException, AuthenticationException,
    InsufficientFundsException, ValidationException
)


def test_correct_pin_logs_in(ledger):
    account = ledger.authenticate(1001, '1234')
    assert account.name == 'Zaid'
    assert account.login_attempts == 0


def test_wrong_pin_reports_attempts_left(ledger):
    with pytest.raises(AuthenticationException) as exc:
        ledger.authenticate(1001, '0000')
    assert exc.value.attempts_remaining == 2
    assert ledger.find(1001).login_attempts == 1


def test_success_resets_failure_counter(ledger, account_repo):
    with pytest.raises(AuthenticationException):
        ledger.authenticate(1001, '0000')
    ledger.authenticate(1001, '1234')
    assert ledger.find(1001).login_attempts == 0
    assert account_repo.rows[1001].login_attempts == 0


def test_three_wrong_pins_lock_account(ledger, account_repo):
    for _ in range(2):
        with pytest.raises(AuthenticationException):
            ledger.authenticate(1001, '0000')
    with pytest.raises(AccountLockedException):
        ledger.authenticate(1001, '0000')

    assert ledger.find(1001).locked
    assert account_repo.rows[1001].locked

    # correct PIN no longer helps
    with pytest.raises(AccountLockedException):
        ledger.authenticate(1001, '1234')


def test_unlock_clears_lock_and_counter(ledger, account_repo):
    for _ in range(3):
        with pytest.raises(AuthenticationException):
            ledger.authenticate(1002, '9999')

    ledger.unlock(1002)
    account = ledger.authenticate(1002, '2345')
    assert not account.locked
    assert account_repo.rows[1002].login_attempts == 0
    assert not account_repo.rows[1002].locked


def test_unknown_account(ledger):
    with pytest.raises(AccountNotFoundException):
        ledger.authenticate(4242, '1234')
    with pytest.raises(AccountNotFoundException):
        ledger.unlock(4242)


def test_debit_returns_new_balance(ledger):
    assert ledger.debit(1001, 2300) == Decimal('12700.00')
    assert ledger.find(1001).balance == Decimal('12700.00')


def test_debit_more_than_balance_fails(ledger):
    with pytest.raises(InsufficientFundsException):
        ledger.debit(1002, 600)
    assert ledger.find(1002).balance == Decimal('500.00')


def test_debit_whole_balance(ledger):
    assert ledger.debit(1002, 500) == Decimal('0.00')


def test_inquiry_is_journaled(ledger, transaction_repo):
    assert ledger.inquire(1003) == Decimal('20000.00')
    record = transaction_repo.records[-1]
    assert record.kind == TransactionKind.BALANCE_INQUIRY
    assert record.amount == Decimal('0.00')
    assert record.balance_after_txn == Decimal('20000.00')


def test_inquiry_survives_journal_failure(ledger, transaction_repo):
    transaction_repo.fail = True
    assert ledger.inquire(1003) == Decimal('20000.00')
    assert transaction_repo.records == []


def test_lock_stays_in_memory_when_storage_fails(ledger, account_repo):
    account_repo.fail = True
    for _ in range(2):
        with pytest.raises(AuthenticationException):
            ledger.authenticate(1003, '0000')
    with pytest.raises(AccountLockedException):
        ledger.authenticate(1003, '0000')
    assert ledger.find(1003).locked


def test_pin_checked_against_stored_hash(ledger):
    stored = ledger.find(1001).pin_hash
    assert stored.startswith('$2b$')
    with pytest.raises(AuthenticationException):
        ledger.authenticate(1001, stored)


def test_unhashed_stored_pin_never_matches(account_repo, transaction_repo):
    ledger = AccountLedger([Account(1004, pin_hash='1234', balance=Decimal('10.00'), name='Old')],
                           account_repo, transaction_repo)
    with pytest.raises(AuthenticationException):
        ledger.authenticate(1004, '1234')


def test_persist_reports_rejected_save(ledger, account_repo):
    account_repo.fail = True
    account_repo.error = ValidationException("Account number is required")
    assert ledger.persist(ledger.find(1002)) is False


def test_history_only_for_account(ledger):
    ledger.inquire(1001)
    ledger.inquire(1002)
    ledger.inquire(1001)
    history = ledger.history(1001)
    assert len(history) == 2
    assert all(r.account_number == 1001 for r in history)


def test_accounts_are_ordered_by_number(accounts, account_repo, transaction_repo):
    ledger = AccountLedger(list(reversed(accounts)), account_repo, transaction_repo)
    assert [a.account_number for a in ledger.accounts()] == [1001, 1002, 1003]


def test_from_storage_loads_repository_accounts(account_repo, transaction_repo):
    ledger = AccountLedger.from_storage(account_repo, transaction_repo)
    assert ledger.find(1003).name == 'Ravi'
