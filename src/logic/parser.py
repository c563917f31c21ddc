# src/logic/parser.py

import logging
from typing import Any
from pydantic import ValidationError, TypeAdapter

from src.core.models.transaction import InventoryTransaction
from src.logic.error_reporter import ErrorReporter

logger = logging.getLogger(__name__)

class TransactionParser:
    """
    Parses raw transaction dictionaries into validated InventoryTransaction objects.
    Invalid entries are reported to the shared ErrorReporter and left out of the result.
    """
    def __init__(self, error_reporter: ErrorReporter):
        self._single_transaction_adapter = TypeAdapter(InventoryTransaction)
        self._error_reporter = error_reporter

    def parse_transactions(
        self, raw_transactions_data: list[dict[str, Any]]
    ) -> list[InventoryTransaction]:
        parsed_transactions: list[InventoryTransaction] = []

        for index, raw_txn_data in enumerate(raw_transactions_data):
            transaction_id = str(raw_txn_data.get("transaction_id", f"UNKNOWN_ID_{index}"))
            try:
                validated_txn = self._single_transaction_adapter.validate_python(raw_txn_data)
            except ValidationError as e:
                error_messages = "; ".join([f"{err['loc'][0]}: {err['msg']}" for err in e.errors()])
                error_reason = f"Validation error: {error_messages}"
                logger.warning(f"TransactionParser: Rejected transaction {transaction_id}: {error_reason}")
                self._error_reporter.add_error(transaction_id, error_reason)
                continue
            parsed_transactions.append(validated_txn)

        logger.debug(f"TransactionParser: Parsed {len(parsed_transactions)} of {len(raw_transactions_data)} transactions.")
        return parsed_transactions
