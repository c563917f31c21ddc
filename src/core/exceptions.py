# src/core/exceptions.py

from decimal import Decimal


class InventoryValuationError(Exception):
    """Base exception for all inventory valuation errors."""
    def __init__(self, message="An unspecified error occurred in the inventory ledger."):
        self.message = message
        super().__init__(self.message)


class ConfigError(InventoryValuationError):
    """Raised when a ledger is constructed with a missing, invalid or unknown option."""
    def __init__(self, message="Invalid ledger configuration."):
        self.message = message
        super().__init__(self.message)


class InvalidArgumentError(InventoryValuationError, ValueError):
    """Raised when buy/sell receives non-positive units or a negative unit price."""
    def __init__(self, message="Invalid argument passed to the ledger."):
        self.message = message
        super().__init__(self.message)


class OversellError(InventoryValuationError):
    """Raised when a sale requests more units than the inventory holds."""
    def __init__(self, requested: Decimal, available: Decimal):
        self.requested = requested
        self.available = available
        self.message = (
            f"Attempted to oversell ({requested}, while inventory only has {available})"
        )
        super().__init__(self.message)
