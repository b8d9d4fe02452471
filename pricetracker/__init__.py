"""Price Tracker: a concurrency-safe in-memory item price store."""

__version__ = "0.1.0"

from pricetracker.errors import (  # noqa: E402
    InvalidPriceError,
    ItemExistsError,
    ItemNotFoundError,
    PriceTrackerError,
)
from pricetracker.models import Record  # noqa: E402
from pricetracker.store import PriceStore, create_price_store  # noqa: E402

__all__ = [
    "InvalidPriceError",
    "ItemExistsError",
    "ItemNotFoundError",
    "PriceTrackerError",
    "PriceStore",
    "Record",
    "create_price_store",
]
