# src/logic/sorter.py

from typing import List
from src.core.enums.transaction_type import TransactionType
from src.core.models.transaction import InventoryTransaction

# Buys on a given date are applied before sells on the same date
_TYPE_ORDER = {TransactionType.BUY: 0, TransactionType.SELL: 1}

class TransactionSorter:
    """
    Responsible for ordering transactions before they are replayed through a ledger.
    """

    def sort_transactions(
        self,
        transactions: List[InventoryTransaction]
    ) -> List[InventoryTransaction]:
        """
        Sorts transactions into application order.

        Sorting Rules:
        1. Primary sort: transaction_date ascending.
        2. Secondary sort: BUY before SELL (for transactions on the same date).
        Transactions with equal keys keep their input order, so same-day buys
        become lots in the order they were given.

        Args:
            transactions: The parsed InventoryTransaction objects.

        Returns:
            A new, sorted list of the transactions.
        """
        return sorted(
            transactions,
            key=lambda txn: (txn.transaction_date, _TYPE_ORDER[txn.transaction_type])
        )
