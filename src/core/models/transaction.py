# src/core/models/transaction.py

from datetime import date
from decimal import Decimal
from pydantic import BaseModel, Field, ConfigDict

from src.core.enums.transaction_type import TransactionType

class InventoryTransaction(BaseModel):
    """
    Represents a single buy or sell event applied to an inventory ledger.
    Units and price ranges are checked by the ledger itself, so that out-of-range
    values are reported as ledger errors against the event.
    """
    transaction_id: str = Field(..., description="Unique identifier for the transaction")
    transaction_type: TransactionType = Field(..., description="BUY or SELL")
    transaction_date: date = Field(..., description="Date the transaction occurred (ISO format)")
    units: Decimal = Field(..., description="Number of units bought or sold")
    unit_price: Decimal = Field(..., description="Purchase or selling price per unit")

    model_config = ConfigDict(
        populate_by_name=True,
        from_attributes=True,
        extra='ignore'
    )
