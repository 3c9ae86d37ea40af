"""
Denomination Solver
Works out which notes to dispense for a withdrawal amount
"""

from typing import Dict, List, Mapping, Optional, Sequence, Union
import logging

from core.models.entities import DenominationPlan, SolverResult
from core.models.note_inventory import NoteInventory
from utils.settings import DENOMINATIONS

logger = logging.getLogger(__name__)

class DenominationSolver:
    """Greedy note selection with a bounded backtracking fallback.

    The greedy pass takes as many notes of each denomination as fit, largest
    first, capped by what the machine holds. If that leaves a remainder the
    solver searches the counts of every denomination except the smallest,
    each from its greedy count down to zero, and lets the smallest
    denomination absorb the residual. The first combination found in that
    order wins, so large notes are kept whenever possible.

    The search never raises a count above its greedy value, so some amounts
    that could be paid with a different mix are still reported infeasible.
    Results are not minimum-note-count optimal either.
    """

    def __init__(self, denominations: Sequence[int] = DENOMINATIONS):
        self.denominations = tuple(sorted(denominations, reverse=True))
        self.search_window = self.denominations[:-1]
        self.absorber = self.denominations[-1]

    def solve(self, amount: int, inventory: Union[NoteInventory, Mapping[int, int]]) -> SolverResult:
        """Compute a plan against a read-only snapshot of the inventory"""
        available = self._snapshot(inventory)

        greedy = self._greedy(amount, available)
        if self._value(greedy) == amount:
            return SolverResult(plan=DenominationPlan(greedy), feasible=True)

        found = self._search(amount, greedy, available, 0, [])
        if found is not None:
            logger.info(f"Greedy pass failed for {amount}; backtracking found {found}")
            return SolverResult(plan=DenominationPlan(found), feasible=True, backtracked=True)

        logger.info(f"No note combination for {amount} with inventory {available}")
        return SolverResult(plan=DenominationPlan(greedy), feasible=False)

    def _snapshot(self, inventory) -> Dict[int, int]:
        counts = inventory.counts() if isinstance(inventory, NoteInventory) else dict(inventory)
        return {d: int(counts.get(d, 0)) for d in self.denominations}

    def _greedy(self, amount: int, available: Dict[int, int]) -> Dict[int, int]:
        remaining = amount
        plan = {}
        for denomination in self.denominations:
            use = min(remaining // denomination, available[denomination])
            plan[denomination] = use
            remaining -= use * denomination
        return plan

    def _search(self, amount: int, greedy: Dict[int, int], available: Dict[int, int],
                depth: int, chosen: List[int]) -> Optional[Dict[int, int]]:
        """Depth-first over the search window, highest counts first"""
        if depth == len(self.search_window):
            residual = amount - sum(d * n for d, n in zip(self.search_window, chosen))
            if residual < 0 or residual % self.absorber != 0:
                return None
            needed = residual // self.absorber
            if needed > available[self.absorber]:
                return None
            plan = dict(zip(self.search_window, chosen))
            plan[self.absorber] = needed
            return plan

        denomination = self.search_window[depth]
        for count in range(greedy[denomination], -1, -1):
            found = self._search(amount, greedy, available, depth + 1, chosen + [count])
            if found is not None:
                return found
        return None

    @staticmethod
    def _value(plan: Mapping[int, int]) -> int:
        return sum(d * n for d, n in plan.items())
