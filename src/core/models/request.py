# src/core/models/request.py

from typing import Optional
from pydantic import BaseModel, Field, ConfigDict

class ValuationRequest(BaseModel):
    """
    Represents the input payload for the inventory valuation API.
    """
    # Kept as plain values so the ledger reports configuration problems itself
    method: Optional[str] = Field(
        None,
        description="LIFO or FIFO. Defaults to the configured VALUATION_METHOD."
    )
    allow_negative_inventory: Optional[bool] = Field(
        None,
        description="Clamp oversized sales instead of rejecting them. Defaults to ALLOW_NEGATIVE_INVENTORY."
    )
    transactions: list[dict] = Field(
        ...,
        description="Buy and sell events (raw dictionaries) to replay through a fresh ledger."
    )

    model_config = ConfigDict(
        json_schema_extra = {
            "example": {
                "method": "LIFO",
                "allow_negative_inventory": False,
                "transactions": [
                    {
                        "transaction_id": "buy_001",
                        "transaction_type": "BUY",
                        "transaction_date": "2023-01-01",
                        "units": 100,
                        "unit_price": 1500
                    },
                    {
                        "transaction_id": "buy_002",
                        "transaction_type": "BUY",
                        "transaction_date": "2023-01-05",
                        "units": 150,
                        "unit_price": 1600
                    },
                    {
                        "transaction_id": "sell_001",
                        "transaction_type": "SELL",
                        "transaction_date": "2023-01-10",
                        "units": 50,
                        "unit_price": 1700
                    }
                ]
            }
        },
        extra='ignore'
    )
