# src/services/valuation_processor.py

import logging
from typing import Any, Callable, Optional, Tuple

from src.core.enums.transaction_type import TransactionType
from src.core.exceptions import InventoryValuationError
from src.core.models.response import ErroredTransaction, ProcessedTransaction
from src.core.models.transaction import InventoryTransaction
from src.logic.error_reporter import ErrorReporter
from src.logic.lot_ledger import LotLedger
from src.logic.parser import TransactionParser
from src.logic.sorter import TransactionSorter

logger = logging.getLogger(__name__)


def _apply_buy(ledger: LotLedger, transaction: InventoryTransaction) -> ProcessedTransaction:
    average_price = ledger.buy(transaction.units, transaction.unit_price)
    return ProcessedTransaction(
        transaction_id=transaction.transaction_id,
        transaction_type=transaction.transaction_type,
        units=transaction.units,
        unit_price=transaction.unit_price,
        average_purchase_price=average_price,
    )


def _apply_sell(ledger: LotLedger, transaction: InventoryTransaction) -> ProcessedTransaction:
    units_before = ledger.units()
    profit_by_average, profit_by_lot = ledger.sell(transaction.units, transaction.unit_price)
    return ProcessedTransaction(
        transaction_id=transaction.transaction_id,
        transaction_type=transaction.transaction_type,
        units=transaction.units,
        unit_price=transaction.unit_price,
        units_sold=units_before - ledger.units(),
        profit_by_average=profit_by_average,
        profit_by_lot=profit_by_lot,
        average_purchase_price=ledger.average_purchase_price(),
    )


class ValuationProcessor:
    """
    Replays a batch of buy/sell transactions through a fresh LotLedger.
    It combines parsing, sorting, ledger application and error reporting.
    """
    def __init__(
        self,
        parser: TransactionParser,
        sorter: TransactionSorter,
        error_reporter: ErrorReporter
    ):
        self._parser = parser
        self._sorter = sorter
        self._error_reporter = error_reporter
        self._handlers: dict[TransactionType, Callable[[LotLedger, InventoryTransaction], ProcessedTransaction]] = {
            TransactionType.BUY: _apply_buy,
            TransactionType.SELL: _apply_sell,
        }

    def process_transactions(
        self,
        transactions_raw: list[dict[str, Any]],
        method: Any,
        allow_negative_inventory: Optional[bool] = False
    ) -> Tuple[LotLedger, list[ProcessedTransaction], list[ErroredTransaction]]:
        """
        Builds a ledger with the given options and applies every valid transaction to it
        in date order. Transactions the ledger rejects are reported and skipped; the
        ledger is left as it was before each rejected transaction.

        Raises ConfigError if the ledger options are invalid.
        """
        options = {}
        if allow_negative_inventory is not None:
            options["allow_negative_inventory"] = allow_negative_inventory
        ledger = LotLedger(method, **options)

        logger.info(f"Starting valuation of {len(transactions_raw)} transactions using {ledger.method.value}.")

        parsed_transactions = self._parser.parse_transactions(transactions_raw)
        sorted_transactions = self._sorter.sort_transactions(parsed_transactions)

        processed_transactions: list[ProcessedTransaction] = []
        for transaction in sorted_transactions:
            handler = self._handlers[transaction.transaction_type]
            try:
                processed_transactions.append(handler(ledger, transaction))
            except InventoryValuationError as e:
                logger.warning(f"Transaction {transaction.transaction_id} rejected by ledger: {e.message}")
                self._error_reporter.add_error(transaction.transaction_id, e.message)

        errored_transactions = self._error_reporter.get_errors()
        logger.info(
            f"Finished valuation. Applied {len(processed_transactions)} transactions, "
            f"{len(errored_transactions)} errors reported. Final units: {ledger.units()}."
        )

        # The reporter is shared per processor instance, so reset it for the next batch
        self._error_reporter.clear()

        return ledger, processed_transactions, errored_transactions
