"""
Terminal bootstrap
Loads the accounts and note inventory once and wires up the services
"""

from dataclasses import dataclass
import logging

from core.models.note_inventory import NoteInventory
from core.repositories.account_repository import AccountRepository
from core.repositories.inventory_repository import InventoryRepository
from core.repositories.transaction_repository import TransactionRepository
from core.services.account_ledger import AccountLedger
from core.services.admin_service import AdminService
from core.services.withdrawal_service import WithdrawalCoordinator
from db.schema import initialize_schema
from utils.exceptions import DatabaseException

logger = logging.getLogger(__name__)

@dataclass
class Terminal:
    """Everything one ATM session needs"""
    ledger: AccountLedger
    inventory: NoteInventory
    withdrawals: WithdrawalCoordinator
    admin: AdminService

    @classmethod
    def start(cls, db=None, create_schema: bool = True) -> 'Terminal':
        if create_schema:
            initialize_schema(db)

        account_repo = AccountRepository(db)
        inventory_repo = InventoryRepository(db)
        transaction_repo = TransactionRepository(db)

        ledger = AccountLedger.from_storage(account_repo, transaction_repo)
        inventory = inventory_repo.load_inventory()
        logger.info(f"Terminal started with inventory {inventory.counts()}")

        return cls(
            ledger=ledger,
            inventory=inventory,
            withdrawals=WithdrawalCoordinator(ledger, inventory, inventory_repo),
            admin=AdminService(ledger, inventory, inventory_repo)
        )

    def shutdown(self) -> bool:
        """Write accounts and inventory back before exiting"""
        saved = self.ledger.persist_all()
        try:
            self.withdrawals.inventory_repo.save_inventory(self.inventory)
        except DatabaseException as e:
            logger.error(f"Unable to save ATM inventory on shutdown: {e}")
            saved = False
        return saved
