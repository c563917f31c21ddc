# src/logic/lot.py

from decimal import Decimal
from typing import Tuple


class Lot:
    """Represents a batch of units bought at one unit price and not yet fully sold."""
    def __init__(self, units: Decimal, unit_price: Decimal):
        self.units = units
        self.unit_price = unit_price

    @property
    def total_cost(self) -> Decimal:
        """Calculates the cost of the units still held in this lot."""
        return self.units * self.unit_price

    def as_tuple(self) -> Tuple[Decimal, Decimal]:
        return self.units, self.unit_price

    def __repr__(self) -> str:
        return f"Lot(units={self.units}, unit_price={self.unit_price})"
