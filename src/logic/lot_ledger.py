# src/logic/lot_ledger.py

import logging
from collections import deque
from decimal import Decimal, InvalidOperation
from typing import Any, Deque, List, NamedTuple, Optional, Tuple

from pydantic import ValidationError

from src.core.enums.valuation_method import ValuationMethod
from src.core.exceptions import ConfigError, InvalidArgumentError, OversellError
from src.core.models.ledger_options import LedgerOptions
from src.logic.consumption_strategies import ConsumptionStrategy, get_consumption_strategy
from src.logic.lot import Lot

logger = logging.getLogger(__name__)


class SaleResult(NamedTuple):
    """
    The two realized profit figures of a sale.
    profit_by_average uses the blended average purchase price held before the sale,
    profit_by_lot uses the actual purchase prices of the lots consumed.
    """
    profit_by_average: Optional[Decimal]
    profit_by_lot: Decimal


def _to_decimal(value: Any, name: str) -> Decimal:
    if isinstance(value, bool):
        raise InvalidArgumentError(f"{name} must be a number, got {value!r}")
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidArgumentError(f"{name} must be a number, got {value!r}")
    if not result.is_finite():
        raise InvalidArgumentError(f"{name} must be finite, got {value!r}")
    return result


def _validate_trade(units: Any, unit_price: Any) -> Tuple[Decimal, Decimal]:
    units = _to_decimal(units, "Units")
    unit_price = _to_decimal(unit_price, "Unit price")
    if units <= 0:
        raise InvalidArgumentError(f"Units must be > 0, got {units}")
    if unit_price < 0:
        raise InvalidArgumentError(f"Unit price must be >= 0, got {unit_price}")
    return units, unit_price


class LotLedger:
    """
    Tracks the purchase lots of a single inventory and values sales against them.

    Lots are kept oldest first. A sale consumes lots from the tail (LIFO) or the
    head (FIFO) and reports two realized profits: one against the weighted-average
    purchase price, one against the actual prices of the consumed lots.
    """
    def __init__(self, method: Optional[Any] = None, **options: Any):
        if method is not None:
            options["method"] = method
        try:
            self._options = LedgerOptions.model_validate(options)
        except ValidationError as e:
            error_messages = "; ".join(
                [f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in e.errors()]
            )
            raise ConfigError(f"Invalid ledger configuration: {error_messages}")

        self._strategy: ConsumptionStrategy = get_consumption_strategy(self._options.method)
        self._lots: Deque[Lot] = deque()
        self._units = Decimal(0)
        self._average_purchase_price: Optional[Decimal] = None
        logger.debug(
            f"LotLedger initialized: method={self._options.method.value}, "
            f"allow_negative_inventory={self._options.allow_negative_inventory}."
        )

    @property
    def method(self) -> ValuationMethod:
        return self._options.method

    @property
    def allow_negative_inventory(self) -> bool:
        return self._options.allow_negative_inventory

    def buy(self, units: Any, unit_price: Any) -> Decimal:
        """
        Adds units to the inventory and returns the new average purchase price.
        A buy at the same price as the most recently added lot is merged into that lot.
        """
        units, unit_price = _validate_trade(units, unit_price)

        old_units = self._units
        if self._lots and self._lots[-1].unit_price == unit_price:
            self._lots[-1].units += units
            logger.debug(f"Buy: Merged {units} @ {unit_price} into tail lot {self._lots[-1]}.")
        else:
            self._lots.append(Lot(units=units, unit_price=unit_price))
            logger.debug(f"Buy: Appended lot {self._lots[-1]}. Lots held: {len(self._lots)}.")

        self._units = old_units + units
        if self._average_purchase_price is None:
            self._average_purchase_price = unit_price
        else:
            self._average_purchase_price = (
                old_units * self._average_purchase_price + units * unit_price
            ) / self._units

        logger.debug(f"Buy: Units now {self._units}, average purchase price {self._average_purchase_price}.")
        return self._average_purchase_price

    def sell(self, units: Any, unit_price: Any) -> SaleResult:
        """
        Takes units out of the inventory, consuming lots in the ledger's method order.

        Raises OversellError when more units are requested than held, unless the ledger
        allows negative inventory, in which case the sale is clamped to what is held.
        """
        units, unit_price = _validate_trade(units, unit_price)

        if units > self._units:
            if not self.allow_negative_inventory:
                raise OversellError(requested=units, available=self._units)
            logger.warning(f"Sell: Requested {units} but only {self._units} held. Selling {self._units}.")
            units = self._units

        remaining = units
        original_average_price = self._average_purchase_price
        profit_by_lot = Decimal(0)

        while remaining > 0 and self._lots:
            lot = self._strategy.next_lot(self._lots)
            if lot.units > remaining:
                consumed = remaining
                lot.units -= consumed
            else:
                consumed = lot.units
                self._strategy.remove_lot(self._lots)

            remaining -= consumed
            self._reduce_holdings(consumed, lot.unit_price)
            profit_by_lot += consumed * (unit_price - lot.unit_price)
            logger.debug(
                f"Sell: Took {consumed} @ {lot.unit_price}. Remaining to sell: {remaining}. "
                f"Profit by lot so far: {profit_by_lot}."
            )

        if original_average_price is None:
            profit_by_average = None
        else:
            profit_by_average = units * (unit_price - original_average_price)

        return SaleResult(profit_by_average=profit_by_average, profit_by_lot=profit_by_lot)

    def _reduce_holdings(self, units: Decimal, unit_price: Decimal):
        old_units = self._units
        self._units -= units
        if not self._lots:
            self._units = Decimal(0)
            self._average_purchase_price = None
        elif self._units <= 0:
            # Rounded totals drifted from the lots still held; rebuild them from the lots
            self._units = sum((lot.units for lot in self._lots), Decimal(0))
            self._average_purchase_price = (
                sum((lot.total_cost for lot in self._lots), Decimal(0)) / self._units
            )
            logger.debug(f"Sell: Recomputed holdings from lots: {self._units} @ {self._average_purchase_price}.")
        else:
            self._average_purchase_price = (
                old_units * self._average_purchase_price - units * unit_price
            ) / self._units

    def inventory(self) -> List[Tuple[Decimal, Decimal]]:
        """
        Returns the current lots as (units, unit_price) pairs, oldest first.
        """
        return [lot.as_tuple() for lot in self._lots]

    def units(self) -> Decimal:
        return self._units

    def average_purchase_price(self) -> Optional[Decimal]:
        """
        Returns the weighted average purchase price, or None when the inventory is empty.
        """
        return self._average_purchase_price

    def summary(self) -> Tuple[Decimal, Optional[Decimal]]:
        return self._units, self._average_purchase_price

    def __repr__(self) -> str:
        return (f"LotLedger(method={self.method.value}, units={self._units}, "
                f"average_purchase_price={self._average_purchase_price}, lots={len(self._lots)})")
