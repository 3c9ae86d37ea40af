"""
Transaction Repository
Append-only journal of balance inquiries and withdrawals
"""

from typing import List
from decimal import Decimal
from dataclasses import replace

from core.repositories.base_repository import BaseRepository
from core.models.entities import TransactionRecord, TransactionKind
from utils.exceptions import ValidationException

class TransactionRepository(BaseRepository):
    """Repository for transactions table operations"""

    def __init__(self, db=None):
        super().__init__('transactions', 'txn_id', db=db)

    def append(self, record: TransactionRecord) -> TransactionRecord:
        """Append a journal record and return it with its generated ID"""
        if record.account_number is None:
            raise ValidationException("Account number is required")

        if record.amount < 0:
            raise ValidationException("Journal amount cannot be negative")

        txn_id = self.create({
            'account_number': record.account_number,
            'txn_type': record.kind.value,
            'amount': record.amount,
            'balance_after_txn': record.balance_after_txn,
            'txn_time': record.txn_time
        })

        return replace(record, txn_id=txn_id)

    def find_by_account(self, account_number: int) -> List[TransactionRecord]:
        """Journal records for one account, oldest first"""
        rows = self.find_by_field('account_number', account_number, order_by='txn_time, txn_id')
        return [self._dict_to_transaction(row) for row in rows]

    def _dict_to_transaction(self, txn_data: dict) -> TransactionRecord:
        """Convert dictionary to TransactionRecord object"""
        return TransactionRecord(
            txn_id=txn_data.get('txn_id'),
            account_number=int(txn_data['account_number']),
            kind=TransactionKind(txn_data['txn_type']),
            amount=Decimal(str(txn_data['amount'])),
            balance_after_txn=Decimal(str(txn_data['balance_after_txn'])),
            txn_time=txn_data['txn_time']
        )
