"""
Admin Service
Inventory refills, account unlocks and machine status for the operator
"""

from typing import Any, Dict, List, Mapping
import logging

from core.models.note_inventory import NoteInventory
from core.repositories.inventory_repository import InventoryRepository
from core.services.account_ledger import AccountLedger
from utils.exceptions import AuthenticationException, DatabaseException
from utils.helpers import LoggingUtils, SecurityUtils
from utils.settings import ADMIN_PIN
from utils.validators import ATMValidator

logger = logging.getLogger(__name__)

class AdminService:
    """Service class for operator actions"""

    def __init__(self, ledger: AccountLedger, inventory: NoteInventory,
                 inventory_repo: InventoryRepository = None, admin_pin: str = ADMIN_PIN):
        self.ledger = ledger
        self.inventory = inventory
        self.inventory_repo = inventory_repo or InventoryRepository()
        self.admin_pin_hash = SecurityUtils.hash_pin(admin_pin)

    def verify_admin_pin(self, pin: str) -> bool:
        if not SecurityUtils.verify_pin(pin, self.admin_pin_hash):
            LoggingUtils.log_security_event("admin_login_failed")
            raise AuthenticationException("Invalid admin PIN.")
        LoggingUtils.log_security_event("admin_login_success")
        return True

    def inventory_summary(self) -> Dict[str, Any]:
        return {
            'counts': self.inventory.counts(),
            'note_count': sum(self.inventory.counts().values()),
            'total_value': self.inventory.total_value()
        }

    def refill(self, deltas: Mapping[int, int]) -> Dict[str, Any]:
        """Add notes to the machine and save the new counts"""
        deltas = ATMValidator.validate_refill(deltas)
        self.inventory.credit(deltas)

        try:
            self.inventory_repo.save_inventory(self.inventory)
            persisted = True
        except DatabaseException as e:
            logger.error(f"Unable to save ATM inventory after refill: {e}")
            persisted = False

        LoggingUtils.log_security_event("atm_refilled", details={'added': deltas})
        summary = self.inventory_summary()
        summary['persisted'] = persisted
        return summary

    def unlock_account(self, account_number: int) -> Dict[str, Any]:
        account = self.ledger.unlock(account_number)
        return {'account_number': account.account_number, 'locked': account.locked}

    def list_accounts(self) -> List[Dict[str, Any]]:
        return [
            {
                'account_number': a.account_number,
                'name': a.name,
                'balance': a.balance,
                'locked': a.locked,
                'login_attempts': a.login_attempts
            }
            for a in self.ledger.accounts()
        ]
