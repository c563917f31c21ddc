# src/tests/unit/test_lot_ledger.py

import pytest
from decimal import Decimal

from src.logic.lot_ledger import LotLedger, SaleResult
from src.core.enums.valuation_method import ValuationMethod
from src.core.exceptions import ConfigError, InvalidArgumentError, OversellError

@pytest.fixture
def lifo_ledger():
    """Provides an empty LIFO ledger."""
    return LotLedger(method="LIFO")

@pytest.fixture
def fifo_ledger():
    """Provides an empty FIFO ledger."""
    return LotLedger(method="FIFO")

@pytest.fixture
def stocked_lifo_ledger(lifo_ledger):
    """LIFO ledger holding 100 @ 1500 and 150 @ 1600."""
    lifo_ledger.buy(100, 1500)
    lifo_ledger.buy(150, 1600)
    return lifo_ledger

@pytest.fixture
def stocked_fifo_ledger(fifo_ledger):
    """FIFO ledger holding 100 @ 1500 and 150 @ 1600."""
    fifo_ledger.buy(100, 1500)
    fifo_ledger.buy(150, 1600)
    return fifo_ledger

# --- Construction ---

def test_new_ledger_is_empty(lifo_ledger):
    assert lifo_ledger.inventory() == []
    assert lifo_ledger.units() == Decimal("0")
    assert lifo_ledger.average_purchase_price() is None
    assert lifo_ledger.method == ValuationMethod.LIFO
    assert lifo_ledger.allow_negative_inventory is False

def test_method_accepts_enum_and_positional():
    assert LotLedger(ValuationMethod.FIFO).method == ValuationMethod.FIFO
    assert LotLedger("LIFO", allow_negative_inventory=True).allow_negative_inventory is True

def test_missing_method_raises_config_error():
    with pytest.raises(ConfigError) as excinfo:
        LotLedger()
    assert "method" in str(excinfo.value)

@pytest.mark.parametrize("method", ["AVERAGE", "lifo", "", "FIFO "])
def test_invalid_method_raises_config_error(method):
    with pytest.raises(ConfigError):
        LotLedger(method=method)

def test_unknown_option_raises_config_error():
    with pytest.raises(ConfigError) as excinfo:
        LotLedger(method="FIFO", allow_negative_stock=True)
    assert "allow_negative_stock" in str(excinfo.value)

# --- Buy ---

def test_first_buy_sets_average_price(lifo_ledger):
    average = lifo_ledger.buy(100, 1500)
    assert average == Decimal("1500")
    assert lifo_ledger.inventory() == [(100, 1500)]
    assert lifo_ledger.units() == 100
    assert lifo_ledger.average_purchase_price() == 1500

def test_buys_accumulate_weighted_average(stocked_lifo_ledger):
    assert stocked_lifo_ledger.inventory() == [(100, 1500), (150, 1600)]
    assert stocked_lifo_ledger.units() == 250
    assert stocked_lifo_ledger.average_purchase_price() == 1560

def test_many_buys_match_units_weighted_mean(fifo_ledger):
    buys = [(10, "2.5"), (4, "3.75"), (6, "2.5"), (1, "10"), (9, "0")]
    for units, price in buys:
        fifo_ledger.buy(units, price)

    total_units = sum(Decimal(units) for units, _ in buys)
    total_cost = sum(Decimal(units) * Decimal(price) for units, price in buys)
    assert fifo_ledger.units() == total_units
    assert fifo_ledger.average_purchase_price() == pytest.approx(total_cost / total_units)

def test_consecutive_buys_at_same_price_merge(fifo_ledger):
    fifo_ledger.buy(100, 1500)
    fifo_ledger.buy(50, 1500)
    assert fifo_ledger.inventory() == [(150, 1500)]
    assert fifo_ledger.average_purchase_price() == 1500

def test_merge_only_considers_tail_lot(lifo_ledger):
    lifo_ledger.buy(100, 1500)
    lifo_ledger.buy(100, 1600)
    lifo_ledger.buy(100, 1500)
    assert lifo_ledger.inventory() == [(100, 1500), (100, 1600), (100, 1500)]

def test_buy_accepts_float_and_string_input(fifo_ledger):
    fifo_ledger.buy(0.1, "12.5")
    assert fifo_ledger.inventory() == [(Decimal("0.1"), Decimal("12.5"))]

@pytest.mark.parametrize("units, unit_price", [(-1, 100), (0, 100), (10, -1), ("abc", 100), (10, None), (True, 100), ("NaN", 1)])
def test_buy_rejects_invalid_arguments(stocked_fifo_ledger, units, unit_price):
    with pytest.raises(InvalidArgumentError):
        stocked_fifo_ledger.buy(units, unit_price)
    assert stocked_fifo_ledger.inventory() == [(100, 1500), (150, 1600)]
    assert stocked_fifo_ledger.units() == 250
    assert stocked_fifo_ledger.average_purchase_price() == 1560

def test_buy_at_zero_price_is_allowed(fifo_ledger):
    fifo_ledger.buy(10, 0)
    assert fifo_ledger.average_purchase_price() == 0

# --- Sell ---

def test_lifo_sell_consumes_latest_lot(stocked_lifo_ledger):
    result = stocked_lifo_ledger.sell(50, 1700)

    assert result == (7000, 5000)
    assert stocked_lifo_ledger.inventory() == [(100, 1500), (100, 1600)]
    assert stocked_lifo_ledger.units() == 200
    assert stocked_lifo_ledger.average_purchase_price() == 1550

def test_fifo_sell_consumes_oldest_lot(stocked_fifo_ledger):
    result = stocked_fifo_ledger.sell(50, 1700)

    assert result == (7000, 10000)
    assert stocked_fifo_ledger.inventory() == [(50, 1500), (150, 1600)]
    assert stocked_fifo_ledger.units() == 200
    assert stocked_fifo_ledger.average_purchase_price() == 1575

def test_sell_returns_named_result(stocked_fifo_ledger):
    result = stocked_fifo_ledger.sell(50, 1700)
    assert isinstance(result, SaleResult)
    assert result.profit_by_average == Decimal("7000")
    assert result.profit_by_lot == Decimal("10000")

def test_lifo_sell_across_several_lots():
    """Walks through a buy/sell series where one sale spans three lots."""
    ledger = LotLedger(method="LIFO")
    ledger.buy(100, 1500)
    ledger.buy(150, 1600)
    ledger.sell(50, 1700)

    assert ledger.buy(200, 1500) == 1525
    assert ledger.inventory() == [(100, 1500), (100, 1600), (200, 1500)]
    assert ledger.units() == 400

    # 200 @ 1500, 100 @ 1600, then 50 of the first 100 @ 1500
    assert ledger.sell(350, 1800) == (96250, 95000)
    assert ledger.inventory() == [(50, 1500)]
    assert ledger.summary() == (50, 1500)

    with pytest.raises(OversellError):
        ledger.sell(60, 1800)

def test_fifo_sell_across_several_lots(stocked_fifo_ledger):
    stocked_fifo_ledger.buy(50, 1400)
    # 100 @ 1500 and 120 of 150 @ 1600
    profit_by_average, profit_by_lot = stocked_fifo_ledger.sell(220, 1650)

    assert profit_by_lot == 100 * 150 + 120 * 50
    assert stocked_fifo_ledger.inventory() == [(30, 1600), (50, 1400)]
    assert stocked_fifo_ledger.units() == 80
    assert stocked_fifo_ledger.average_purchase_price() == pytest.approx(Decimal("1475"))

def test_selling_everything_empties_inventory(stocked_fifo_ledger):
    stocked_fifo_ledger.sell(250, 1600)
    assert stocked_fifo_ledger.inventory() == []
    assert stocked_fifo_ledger.units() == 0
    assert stocked_fifo_ledger.average_purchase_price() is None

@pytest.mark.parametrize("method", ["LIFO", "FIFO"])
def test_buy_then_sell_at_same_price_has_no_profit(method):
    ledger = LotLedger(method=method)
    ledger.buy(40, "12.34")
    assert ledger.sell(40, "12.34") == (0, 0)
    assert ledger.average_purchase_price() is None

def test_oversell_raises_and_leaves_ledger_unchanged(lifo_ledger):
    lifo_ledger.buy(10, 100)
    with pytest.raises(OversellError) as excinfo:
        lifo_ledger.sell(60, 100)

    assert excinfo.value.requested == 60
    assert excinfo.value.available == 10
    assert lifo_ledger.units() == 10
    assert lifo_ledger.inventory() == [(10, 100)]
    assert lifo_ledger.average_purchase_price() == 100

def test_oversell_is_clamped_when_negative_inventory_allowed():
    ledger = LotLedger(method="LIFO", allow_negative_inventory=True)
    ledger.buy(100, 1500)

    assert ledger.sell(150, 1600) == (10000, 10000)
    assert ledger.units() == 0
    assert ledger.inventory() == []
    assert ledger.average_purchase_price() is None

def test_clamped_oversell_across_lots():
    ledger = LotLedger(method="LIFO", allow_negative_inventory=True)
    ledger.buy(100, 1500)
    ledger.buy(150, 1600)
    assert ledger.sell(300, 1700) == (35000, 35000)

def test_clamped_sell_on_empty_ledger_is_a_no_op():
    ledger = LotLedger(method="FIFO", allow_negative_inventory=True)
    result = ledger.sell(10, 100)
    assert result.profit_by_average is None
    assert result.profit_by_lot == 0
    assert ledger.inventory() == []

@pytest.mark.parametrize("units, unit_price", [(-1, 100), (0, 100), (10, -5)])
def test_sell_rejects_invalid_arguments(stocked_lifo_ledger, units, unit_price):
    with pytest.raises(InvalidArgumentError):
        stocked_lifo_ledger.sell(units, unit_price)
    assert stocked_lifo_ledger.inventory() == [(100, 1500), (150, 1600)]
    assert stocked_lifo_ledger.units() == 250

def test_invalid_argument_is_a_value_error(lifo_ledger):
    with pytest.raises(ValueError):
        lifo_ledger.buy(-1, 100)

def test_inventory_is_a_snapshot(stocked_lifo_ledger):
    snapshot = stocked_lifo_ledger.inventory()
    stocked_lifo_ledger.sell(10, 1700)
    assert snapshot == [(100, 1500), (150, 1600)]
    assert stocked_lifo_ledger.inventory() == [(100, 1500), (140, 1600)]

def test_none_negative_inventory_option_means_not_allowed():
    ledger = LotLedger("LIFO", allow_negative_inventory=None)
    assert ledger.allow_negative_inventory is False
    ledger.buy(1, 10)
    with pytest.raises(OversellError):
        ledger.sell(2, 10)

def test_selling_rounded_total_keeps_small_lot_and_its_average():
    """Units of very different magnitude round the running total; the remaining lot must still be valued."""
    ledger = LotLedger(method="FIFO")
    ledger.buy(Decimal("1e30"), 1)
    ledger.buy(Decimal("1e-10"), 2)

    ledger.sell(ledger.units(), 1)

    assert ledger.inventory() == [(Decimal("1e-10"), Decimal("2"))]
    assert ledger.units() == Decimal("1e-10")
    assert ledger.average_purchase_price() == Decimal("2")

    ledger.buy(Decimal("1e-10"), 4)
    assert ledger.average_purchase_price() == Decimal("3")
