"""
Withdrawal Service
Coordinates validation, note selection and the combined account/inventory debit
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Dict, Union
import logging
import threading

from core.models.entities import (
    DenominationPlan, PendingWithdrawal, TransactionKind, WithdrawalState
)
from core.models.note_inventory import NoteInventory
from core.repositories.inventory_repository import InventoryRepository
from core.services.account_ledger import AccountLedger
from core.services.denomination_solver import DenominationSolver
from utils.exceptions import (
    ATMSystemException, AccountLockedException,
    InfeasibleWithdrawalException, InsufficientNotesException,
    InsufficientTotalCashException, ValidationException
)
from utils.helpers import LoggingUtils
from utils.validators import ATMValidator

logger = logging.getLogger(__name__)

class WithdrawalCoordinator:
    """Runs a withdrawal from request to commit

    Requested -> Validated -> Solved -> Confirmed -> Committed, with any
    failure ending in Rejected. Nothing is changed before confirmation, and
    the account and inventory debits are applied together or not at all.
    """

    def __init__(self, ledger: AccountLedger, inventory: NoteInventory,
                 inventory_repo: InventoryRepository = None, solver: DenominationSolver = None):
        self.ledger = ledger
        self.inventory = inventory
        self.inventory_repo = inventory_repo or InventoryRepository()
        self.solver = solver or DenominationSolver()
        self._commit_lock = threading.RLock()

    def prepare(self, account_number: int, amount: Union[int, Decimal]) -> PendingWithdrawal:
        """Validate the request and work out the notes; changes nothing"""
        pending = PendingWithdrawal(account_number=account_number, amount=amount)
        try:
            pending.amount = ATMValidator.validate_withdrawal_amount(amount)

            account = self.ledger.find(account_number)
            if account.locked:
                raise AccountLockedException(f"Account {account_number} is locked")
            self.ledger.ensure_sufficient_funds(account, pending.amount)
            pending.state = WithdrawalState.VALIDATED

            if not self.inventory.can_afford(pending.amount):
                raise InsufficientTotalCashException("ATM does not have enough cash.")

            result = self.solver.solve(pending.amount, self.inventory)
            if not result.feasible:
                raise InfeasibleWithdrawalException(
                    "ATM cannot dispense the requested amount with available denominations.",
                    greedy_plan=result.plan
                )

            pending.plan = result.plan
            pending.state = WithdrawalState.SOLVED
            return pending

        except ATMSystemException as e:
            self._reject(pending, e)
            raise

    def confirm(self, pending: PendingWithdrawal) -> Dict[str, Any]:
        """Apply both debits, journal the withdrawal and save state"""
        if pending.state != WithdrawalState.SOLVED:
            raise ValidationException(
                f"Withdrawal is not awaiting confirmation (state: {pending.state.value})"
            )
        pending.state = WithdrawalState.CONFIRMED

        with self._commit_lock:
            try:
                account = self.ledger.find(pending.account_number)
                self.ledger.ensure_sufficient_funds(account, pending.amount)
                if not self.inventory.covers(pending.plan):
                    raise InsufficientNotesException(
                        "Inventory changed since the notes were selected; please try again."
                    )

                old_balance = account.balance
                self.inventory.debit(pending.plan)
                new_balance = self.ledger.debit(pending.account_number, pending.amount)
            except ATMSystemException as e:
                self._reject(pending, e)
                raise

            pending.state = WithdrawalState.COMMITTED
            record = self.ledger.journal(account, TransactionKind.WITHDRAWAL, pending.amount)

        persisted = self.ledger.persist(account)
        persisted = self._persist_inventory() and persisted

        LoggingUtils.log_transaction(
            "withdrawal",
            pending.account_number,
            pending.amount,
            details={'notes': pending.plan.as_dict(), 'new_balance': str(new_balance)}
        )

        return {
            'txn_id': record.txn_id if record else None,
            'account_number': pending.account_number,
            'txn_type': TransactionKind.WITHDRAWAL.value,
            'amount': pending.amount,
            'plan': pending.plan,
            'old_balance': old_balance,
            'new_balance': new_balance,
            'timestamp': record.txn_time if record else datetime.now(),
            'status': 'SUCCESS',
            'journaled': record is not None,
            'persisted': persisted
        }

    def decline(self, pending: PendingWithdrawal) -> None:
        """Customer said no; nothing is changed"""
        pending.state = WithdrawalState.REJECTED
        LoggingUtils.log_business_event(
            "withdrawal_cancelled", "account", pending.account_number,
            details={'amount': str(pending.amount)}
        )

    def withdraw(self, account_number: int, amount: Union[int, Decimal],
                 prompt_confirmation: Callable[[DenominationPlan], bool]) -> Dict[str, Any]:
        """Run the whole withdrawal, asking the caller to confirm the notes"""
        pending = self.prepare(account_number, amount)

        if not prompt_confirmation(pending.plan):
            self.decline(pending)
            return {
                'account_number': account_number,
                'amount': pending.amount,
                'plan': pending.plan,
                'status': 'CANCELLED'
            }

        return self.confirm(pending)

    def _persist_inventory(self) -> bool:
        try:
            self.inventory_repo.save_inventory(self.inventory)
            return True
        except ATMSystemException as e:
            logger.error(f"Unable to save ATM inventory: {e}")
            return False

    def _reject(self, pending: PendingWithdrawal, error: ATMSystemException) -> None:
        failed_at = pending.state
        pending.state = WithdrawalState.REJECTED
        LoggingUtils.log_business_event(
            "withdrawal_rejected", "account", pending.account_number,
            details={
                'amount': str(pending.amount),
                'stage': failed_at.value,
                'reason': type(error).__name__,
                'error': str(error)
            }
        )
        logger.info(f"Withdrawal of {pending.amount} for account {pending.account_number} rejected: {error}")
