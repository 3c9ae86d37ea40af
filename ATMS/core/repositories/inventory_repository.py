"""
Inventory Repository
Handles database operations for the atm_inventory table
"""

from typing import Dict, Any
import logging

from core.repositories.base_repository import BaseRepository
from core.models.note_inventory import NoteInventory
from utils.settings import DEFAULT_INVENTORY, DENOMINATIONS

logger = logging.getLogger(__name__)

# Single-terminal system: the machine's inventory lives in one row
TERMINAL_ID = 1

class InventoryRepository(BaseRepository):
    """Repository for atm_inventory table operations"""

    def __init__(self, db=None, terminal_id: int = TERMINAL_ID):
        super().__init__('atm_inventory', 'inventory_id', db=db)
        self.terminal_id = terminal_id

    def load_inventory(self) -> NoteInventory:
        """Load the note counts, storing the default inventory if none exist"""
        row = self.find_by_id(self.terminal_id)
        if not row:
            inventory = NoteInventory(DEFAULT_INVENTORY)
            logger.info(f"No inventory stored; using defaults {DEFAULT_INVENTORY}")
            self.save_inventory(inventory)
            return inventory

        return self._dict_to_inventory(row)

    def save_inventory(self, inventory: NoteInventory) -> None:
        """Write the current note counts"""
        self.upsert(self._inventory_to_dict(inventory))
        logger.info(f"Saved inventory {inventory.counts()}")

    def _inventory_to_dict(self, inventory: NoteInventory) -> Dict[str, Any]:
        data = {'inventory_id': self.terminal_id}
        for denomination in DENOMINATIONS:
            data[f'note_{denomination}'] = inventory.count(denomination)
        return data

    def _dict_to_inventory(self, row: dict) -> NoteInventory:
        return NoteInventory({d: int(row.get(f'note_{d}') or 0) for d in DENOMINATIONS})
