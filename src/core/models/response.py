# src/core/models/response.py

from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field

from src.core.enums.transaction_type import TransactionType
from src.core.enums.valuation_method import ValuationMethod

class ErroredTransaction(BaseModel):
    """
    Represents a transaction that failed processing, along with the reason for failure.
    """
    transaction_id: str = Field(..., description="The ID of the transaction that failed.")
    error_reason: str = Field(..., description="The reason why the transaction processing failed.")


class ProcessedTransaction(BaseModel):
    """
    A transaction applied to the ledger, with the figures the ledger produced for it.
    """
    transaction_id: str
    transaction_type: TransactionType
    units: Decimal = Field(..., description="Units requested by the transaction")
    unit_price: Decimal
    units_sold: Optional[Decimal] = Field(None, description="Units actually taken from inventory (SELL only)")
    profit_by_average: Optional[Decimal] = Field(None, description="Realized profit against the average purchase price (SELL only)")
    profit_by_lot: Optional[Decimal] = Field(None, description="Realized profit against the consumed lots' prices (SELL only)")
    average_purchase_price: Optional[Decimal] = Field(None, description="Average purchase price after the transaction")


class LotSnapshot(BaseModel):
    units: Decimal
    unit_price: Decimal


class ValuationResponse(BaseModel):
    """
    Represents the output response from the inventory valuation API.
    """
    method: ValuationMethod
    processed_transactions: List[ProcessedTransaction] = Field(
        ...,
        description="Transactions successfully applied to the ledger, in application order."
    )
    errored_transactions: List[ErroredTransaction] = Field(
        default_factory=list,
        description="Transactions that failed validation or were rejected by the ledger."
    )
    inventory: List[LotSnapshot] = Field(..., description="Remaining lots, oldest first.")
    units: Decimal
    average_purchase_price: Optional[Decimal] = None
