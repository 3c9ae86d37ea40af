"""
Note Inventory
Tracks how many notes of each denomination the machine holds
"""

from typing import Dict, Mapping
import logging

from core.models.entities import DenominationPlan
from utils.exceptions import (
    InsufficientNotesException, InvalidRefillAmountException, ValidationException
)
from utils.settings import DENOMINATIONS

logger = logging.getLogger(__name__)

class NoteInventory:
    """Counts of notes per denomination, never negative"""

    def __init__(self, counts: Mapping[int, int] = None):
        counts = counts or {}
        unknown = set(counts) - set(DENOMINATIONS)
        if unknown:
            raise ValidationException(f"Unsupported denominations: {sorted(unknown)}")
        self._counts = {d: int(counts.get(d, 0)) for d in DENOMINATIONS}
        if any(c < 0 for c in self._counts.values()):
            raise ValidationException("Note counts cannot be negative")

    def count(self, denomination: int) -> int:
        return self._counts[denomination]

    def counts(self) -> Dict[int, int]:
        """Snapshot of the counts; changing it does not affect the inventory"""
        return dict(self._counts)

    def total_value(self) -> int:
        return sum(d * c for d, c in self._counts.items())

    def can_afford(self, amount: int) -> bool:
        """True when the total cash covers the amount

        A sufficient total does not mean the amount can be made from the notes.
        """
        return self.total_value() >= amount

    def covers(self, plan: DenominationPlan) -> bool:
        return all(plan.count(d) <= self._counts[d] for d in DENOMINATIONS)

    def debit(self, plan: DenominationPlan) -> None:
        """Remove the plan's notes; nothing changes if any count falls short"""
        for denomination, wanted in plan.notes.items():
            available = self._counts.get(denomination, 0)
            if wanted < 0 or wanted > available:
                raise InsufficientNotesException(
                    f"Cannot dispense {wanted} x {denomination}: only {available} available"
                )

        for denomination, wanted in plan.notes.items():
            self._counts[denomination] -= wanted

        logger.info(f"Inventory debited by {plan.as_dict()}, remaining {self._counts}")

    def credit(self, deltas: Mapping[int, int]) -> None:
        """Add notes during a refill; rejects negative deltas before changing anything"""
        for denomination, delta in deltas.items():
            if denomination not in self._counts:
                raise InvalidRefillAmountException(f"Unsupported denomination: {denomination}")
            if delta is None or int(delta) < 0:
                raise InvalidRefillAmountException(
                    f"Refill count for {denomination} cannot be negative"
                )

        for denomination, delta in deltas.items():
            self._counts[denomination] += int(delta)

        logger.info(f"Inventory credited by {dict(deltas)}, now {self._counts}")

    def __eq__(self, other):
        if not isinstance(other, NoteInventory):
            return NotImplemented
        return self._counts == other._counts

    def __repr__(self) -> str:
        return f"NoteInventory({self._counts})"
