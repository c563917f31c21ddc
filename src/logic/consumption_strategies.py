# src/logic/consumption_strategies.py

import logging
from typing import Protocol, Deque

from src.core.enums.valuation_method import ValuationMethod
from src.logic.lot import Lot

logger = logging.getLogger(__name__)

# --- Consumption Strategy Protocol ---

class ConsumptionStrategy(Protocol):
    """
    Decides which end of the lot deque a sale draws from.
    Lots are always stored oldest first; only the consuming end differs.
    """
    def next_lot(self, lots: Deque[Lot]) -> Lot:
        """Returns the lot that the next sold unit is taken from, without removing it."""
        ...

    def remove_lot(self, lots: Deque[Lot]) -> Lot:
        """Removes and returns the lot returned by next_lot."""
        ...

# --- FIFO Consumption Strategy Implementation ---

class FIFOConsumptionStrategy:
    """
    First-In, First-Out: the oldest lot (the head of the deque) is sold first.
    """
    def next_lot(self, lots: Deque[Lot]) -> Lot:
        return lots[0]

    def remove_lot(self, lots: Deque[Lot]) -> Lot:
        lot = lots.popleft()
        logger.debug(f"FIFO: Removed exhausted lot {lot} from head. Remaining lots: {len(lots)}.")
        return lot

# --- LIFO Consumption Strategy Implementation ---

class LIFOConsumptionStrategy:
    """
    Last-In, First-Out: the most recently appended lot (the tail of the deque) is sold first.
    """
    def next_lot(self, lots: Deque[Lot]) -> Lot:
        return lots[-1]

    def remove_lot(self, lots: Deque[Lot]) -> Lot:
        lot = lots.pop()
        logger.debug(f"LIFO: Removed exhausted lot {lot} from tail. Remaining lots: {len(lots)}.")
        return lot


_STRATEGIES = {
    ValuationMethod.FIFO: FIFOConsumptionStrategy,
    ValuationMethod.LIFO: LIFOConsumptionStrategy,
}

def get_consumption_strategy(method: ValuationMethod) -> ConsumptionStrategy:
    """
    Provides a new strategy instance for the given valuation method.
    Raises ValueError if the method is not a ValuationMethod value.
    """
    return _STRATEGIES[ValuationMethod(method)]()
