#!/usr/bin/env python3
"""
Thread-safe in-memory price store for Price Tracker.

A single mapping from item name to price guarded by one reader/writer
lock. Listing and price lookups share the lock; create, update and delete
hold it exclusively, so a reader never sees a write in progress and
writes never interleave. Each call is its own unit of atomicity: it either
applies completely or raises and leaves the mapping untouched.
"""
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional

from pricetracker.config import PriceTrackerConfig
from pricetracker.errors import ItemExistsError, ItemNotFoundError
from pricetracker.locks import ReadWriteLock
from pricetracker.logging import logger
from pricetracker.models import Record, parse_price


class PriceStore:
    """
    Concurrency-safe mapping of item names to prices.

    Construct one per process and hand the same instance to every request
    handler.
    """

    def __init__(self, items: Optional[Mapping[str, Any]] = None) -> None:
        """
        Initialize the store, optionally pre-populated.

        Args:
            items: Initial name to price mapping; prices may be Decimal,
                int, float or numeric strings
        """
        self._prices: Dict[str, Decimal] = {}
        self._lock = ReadWriteLock()
        for name, price in (items or {}).items():
            record = Record(name, price)
            self._prices[record.name] = record.price
        logger.debug(f"Initialized price store with {len(self._prices)} items")

    def list_items(self) -> List[Record]:
        """
        Snapshot every (name, price) pair currently in the store.

        Returns:
            List of records in no particular order
        """
        with self._lock.read_locked():
            return [Record(name, price) for name, price in self._prices.items()]

    def get_price(self, name: str) -> Decimal:
        """
        Look up the price of an item.

        Raises:
            ItemNotFoundError: If the item does not exist
        """
        with self._lock.read_locked():
            try:
                return self._prices[name]
            except KeyError:
                raise ItemNotFoundError(name) from None

    def create(self, name: str, price_text: str) -> Record:
        """
        Add a new item. Never overwrites.

        The existence check runs before the price is parsed, so creating an
        existing item reports the conflict even when the price is malformed.

        Args:
            name: Item name
            price_text: Price as entered by the caller

        Returns:
            The stored record

        Raises:
            ItemExistsError: If the item already exists
            InvalidPriceError: If price_text is not a decimal number
        """
        with self._lock.write_locked():
            if name in self._prices:
                raise ItemExistsError(name, self._prices[name])
            price = parse_price(price_text)
            self._prices[name] = price

        logger.debug(f"Created item {name!r} with price {price}")
        return Record(name, price)

    def update(self, name: str, price_text: str) -> Record:
        """
        Replace the price of an existing item.

        Args:
            name: Item name
            price_text: New price as entered by the caller

        Returns:
            The stored record

        Raises:
            ItemNotFoundError: If the item does not exist
            InvalidPriceError: If price_text is not a decimal number
        """
        with self._lock.write_locked():
            if name not in self._prices:
                raise ItemNotFoundError(name)
            price = parse_price(price_text)
            self._prices[name] = price

        logger.debug(f"Updated item {name!r} to price {price}")
        return Record(name, price)

    def delete(self, name: str) -> str:
        """
        Remove an item.

        Returns:
            The name of the removed item

        Raises:
            ItemNotFoundError: If the item does not exist
        """
        with self._lock.write_locked():
            if name not in self._prices:
                raise ItemNotFoundError(name)
            del self._prices[name]

        logger.debug(f"Deleted item {name!r}")
        return name

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._prices)

    def __contains__(self, name: object) -> bool:
        with self._lock.read_locked():
            return name in self._prices


def create_price_store(config: Optional[PriceTrackerConfig] = None) -> PriceStore:
    """
    Create a new price store, seeded from configuration when one is given.

    Returns:
        PriceStore: A new thread-safe price store
    """
    return PriceStore(config.seed_items if config is not None else None)
