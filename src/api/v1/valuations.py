# src/api/v1/valuations.py

from fastapi import APIRouter, Depends, HTTPException
from src.core.config.settings import settings
from src.core.exceptions import ConfigError
from src.core.models.request import ValuationRequest
from src.core.models.response import LotSnapshot, ValuationResponse
from src.logic.error_reporter import ErrorReporter
from src.logic.parser import TransactionParser
from src.logic.sorter import TransactionSorter
from src.services.valuation_processor import ValuationProcessor

router = APIRouter()

def get_valuation_processor() -> ValuationProcessor:
    """
    Provides a new instance of ValuationProcessor with its dependencies.
    """
    error_reporter = ErrorReporter()
    return ValuationProcessor(
        parser=TransactionParser(error_reporter=error_reporter),
        sorter=TransactionSorter(),
        error_reporter=error_reporter
    )

@router.post(
    "/valuations",
    response_model=ValuationResponse,
    summary="Value an inventory from a series of buys and sells",
    description="Replays the given transactions through a LIFO or FIFO lot ledger, "
                "returns both realized profit figures for every sale, the remaining "
                "lots and the average purchase price."
)
async def create_valuation_endpoint(
    request: ValuationRequest,
    processor: ValuationProcessor = Depends(get_valuation_processor)
) -> ValuationResponse:
    method = request.method if request.method is not None else settings.VALUATION_METHOD
    allow_negative_inventory = (
        request.allow_negative_inventory
        if request.allow_negative_inventory is not None
        else settings.ALLOW_NEGATIVE_INVENTORY
    )
    try:
        ledger, processed, errored = processor.process_transactions(
            transactions_raw=request.transactions,
            method=method,
            allow_negative_inventory=allow_negative_inventory
        )
    except ConfigError as e:
        raise HTTPException(status_code=422, detail=e.message)

    return ValuationResponse(
        method=ledger.method,
        processed_transactions=processed,
        errored_transactions=errored,
        inventory=[LotSnapshot(units=units, unit_price=unit_price) for units, unit_price in ledger.inventory()],
        units=ledger.units(),
        average_purchase_price=ledger.average_purchase_price()
    )
