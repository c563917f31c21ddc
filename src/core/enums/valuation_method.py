# src/core/enums/valuation_method.py

from enum import Enum

class ValuationMethod(str, Enum):
    """
    Defines the lot consumption orders available to the ledger.
    """
    LIFO = "LIFO"
    FIFO = "FIFO"
