from __future__ import annotations

from typing import Callable, Dict, Optional, Type

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import PlainTextResponse

from pricetracker.config import PriceTrackerConfig
from pricetracker.errors import (
    InvalidPriceError,
    ItemExistsError,
    ItemNotFoundError,
    PriceTrackerError,
)
from pricetracker.logging import logger
from pricetracker.models import format_amount, format_price
from pricetracker.store import PriceStore, create_price_store

ROUTE_METHODS = ["GET", "POST"]


_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    "\"": "\\\"",
}


def quote_name(name: str) -> str:
    """
    Double-quote an item name for a response body.

    Printable characters pass through. Control characters use their C
    escape when one exists, otherwise ``\\xNN``. Other unprintable code
    points use ``\\uNNNN`` or ``\\UNNNNNNNN``.
    """
    out = []
    for ch in name:
        code = ord(ch)
        if ch in _ESCAPES:
            out.append(_ESCAPES[ch])
        elif ch.isprintable():
            out.append(ch)
        elif code < 0x20 or code == 0x7F:
            out.append(f"\\x{code:02x}")
        elif code < 0x10000:
            out.append(f"\\u{code:04x}")
        else:
            out.append(f"\\U{code:08x}")
    return '"' + "".join(out) + '"'


def _not_found(exc: ItemNotFoundError) -> str:
    return f"no such item: {quote_name(exc.name)}\n"


def _exists(exc: ItemExistsError) -> str:
    return f"Item {exc.name} already exists with price {format_price(exc.existing_price)}\n"


def _invalid(exc: InvalidPriceError) -> str:
    return "Provided price is invalid\n"


# One status code per failure kind
ERROR_RESPONSES: Dict[Type[PriceTrackerError], tuple] = {
    ItemNotFoundError: (404, _not_found),
    ItemExistsError: (409, _exists),
    InvalidPriceError: (406, _invalid),
}


def get_store(request: Request) -> PriceStore:
    return request.app.state.store


router = APIRouter(tags=["prices"])


@router.api_route("/list", methods=ROUTE_METHODS, response_class=PlainTextResponse)
def list_items(store: PriceStore = Depends(get_store)):
    return "".join(f"{record}\n" for record in store.list_items())


@router.api_route("/price", methods=ROUTE_METHODS, response_class=PlainTextResponse)
def price(item: str = "", store: PriceStore = Depends(get_store)):
    return f"{format_price(store.get_price(item))}\n"


@router.api_route("/create", methods=ROUTE_METHODS, response_class=PlainTextResponse)
def create(item: str = "", price: str = "", store: PriceStore = Depends(get_store)):
    record = store.create(item, price)
    return f"Item {record.name} created with price {format_amount(record.price)}\n"


@router.api_route("/update", methods=ROUTE_METHODS, response_class=PlainTextResponse)
def update(item: str = "", price: str = "", store: PriceStore = Depends(get_store)):
    record = store.update(item, price)
    return f"Item {record.name} updated with price {format_amount(record.price)}\n"


@router.api_route("/delete", methods=ROUTE_METHODS, response_class=PlainTextResponse)
def delete(item: str = "", store: PriceStore = Depends(get_store)):
    name = store.delete(item)
    return f"{quote_name(name)} deleted\n"


def _error_handler(status_code: int, render: Callable) -> Callable:
    async def handler(request: Request, exc: PriceTrackerError) -> PlainTextResponse:
        logger.info(f"{request.url.path} -> {status_code} [{exc.error_code}]")
        return PlainTextResponse(render(exc), status_code=status_code)

    return handler


def create_app(
    store: Optional[PriceStore] = None,
    config: Optional[PriceTrackerConfig] = None,
) -> FastAPI:
    """
    Build the HTTP app around a single shared store.

    Args:
        store: Store to serve; created from config when omitted
        config: Application configuration; defaults are used when omitted

    Returns:
        FastAPI: The configured application
    """
    if config is None:
        config = PriceTrackerConfig()
    if store is None:
        store = create_price_store(config)

    app = FastAPI(title=config.app_name, version=config.version)
    app.state.store = store
    app.state.config = config
    app.include_router(router)

    for error_cls, (status_code, render) in ERROR_RESPONSES.items():
        app.add_exception_handler(error_cls, _error_handler(status_code, render))

    return app
