# src/core/models/ledger_options.py

from typing import Any
from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.core.enums.valuation_method import ValuationMethod

class LedgerOptions(BaseModel):
    """
    Construction options of a LotLedger.
    Unknown keys are rejected so that misspelled options never go unnoticed.
    """
    method: ValuationMethod = Field(..., description="Lot consumption order: LIFO or FIFO")
    allow_negative_inventory: bool = Field(
        default=False,
        description="Clamp oversized sales to the available inventory instead of failing. None means False."
    )

    model_config = ConfigDict(extra='forbid', frozen=True)

    @field_validator("allow_negative_inventory", mode="before")
    @classmethod
    def none_means_not_allowed(cls, value: Any) -> Any:
        return False if value is None else value
