"""
Data Models for the ATM Withdrawal System
Dataclasses representing accounts, dispense plans and journal records
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional, Dict, List, Tuple
from enum import Enum

from utils.settings import DENOMINATIONS

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

class TransactionKind(Enum):
    BALANCE_INQUIRY = 'Balance Inquiry'
    WITHDRAWAL = 'Withdrawal'

class WithdrawalState(Enum):
    REQUESTED = 'requested'
    VALIDATED = 'validated'
    SOLVED = 'solved'
    CONFIRMED = 'confirmed'
    COMMITTED = 'committed'
    REJECTED = 'rejected'

@dataclass
class Account:
    """Account entity"""
    account_number: int = 0
    pin_hash: str = ""
    balance: Decimal = Decimal('0.00')
    name: str = ""
    login_attempts: int = 0
    locked: bool = False

@dataclass
class DenominationPlan:
    """Number of notes to dispense per denomination"""
    notes: Dict[int, int] = field(default_factory=lambda: {d: 0 for d in DENOMINATIONS})

    def count(self, denomination: int) -> int:
        return self.notes.get(denomination, 0)

    def total(self) -> int:
        """Cash value of the plan"""
        return sum(d * c for d, c in self.notes.items())

    def note_count(self) -> int:
        return sum(self.notes.values())

    def lines(self) -> List[Tuple[int, int]]:
        """Non-zero (denomination, count) pairs, largest denomination first"""
        return [(d, self.notes[d]) for d in sorted(self.notes, reverse=True) if self.notes[d]]

    def as_dict(self) -> Dict[int, int]:
        return dict(self.notes)

@dataclass
class SolverResult:
    """Outcome of a dispense calculation

    When ``feasible`` is False the plan holds the greedy figures that failed.
    """
    plan: DenominationPlan
    feasible: bool
    backtracked: bool = False

@dataclass(frozen=True)
class TransactionRecord:
    """Journal entry; never mutated once created"""
    account_number: int
    kind: TransactionKind
    amount: Decimal
    balance_after_txn: Decimal
    txn_time: datetime = field(default_factory=lambda: datetime.now().replace(microsecond=0))
    txn_id: Optional[int] = None

    @property
    def timestamp(self) -> str:
        return self.txn_time.strftime(TIMESTAMP_FORMAT)

@dataclass
class PendingWithdrawal:
    """A solved withdrawal waiting for the customer's confirmation"""
    account_number: int
    amount: int
    plan: Optional[DenominationPlan] = None
    state: WithdrawalState = WithdrawalState.REQUESTED
    requested_at: datetime = field(default_factory=datetime.now)
