from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation
import re
from typing import ClassVar

from pricetracker.errors import InvalidPriceError

# Largest finite float32
MAX_PRICE = Decimal(2**128 - 2**104)
# Magnitudes at or above this round to float32 infinity (max plus half an ulp)
PRICE_OVERFLOW = Decimal(2**128 - 2**103)

_PRICE_PATTERN = re.compile(r'^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$')
_CENTS = Decimal("0.01")
_FORMAT_CONTEXT = Context(prec=60)


def parse_price(text: str) -> Decimal:
    """
    Parse price text into a Decimal.

    Accepts an optional sign, digits with an optional fraction, and an
    optional exponent. Non-finite words are rejected, as are values
    that would round past the largest float32.

    Raises:
        InvalidPriceError: If the text is not a finite decimal number
    """
    if not isinstance(text, str) or not _PRICE_PATTERN.match(text):
        raise InvalidPriceError(text)
    try:
        price = Decimal(text)
    except InvalidOperation:
        raise InvalidPriceError(text)
    if price.copy_abs() >= PRICE_OVERFLOW:
        raise InvalidPriceError(text)
    return price


def format_amount(price: Decimal) -> str:
    """
    Render a price with exactly two decimals, e.g. ``50.00``.

    Rounds half-up on the exact decimal value, so ``0.125`` renders as
    ``0.13``; a float32 rendering of the same input would give ``0.12``.
    """
    return str(
        Decimal(price).quantize(_CENTS, rounding=ROUND_HALF_UP, context=_FORMAT_CONTEXT)
    )


def format_price(price: Decimal) -> str:
    """Render a price in dollars, e.g. ``$50.00``."""
    return f"${format_amount(price)}"


@dataclass(frozen=True)
class Record:
    name: str
    price: Decimal

    _SEPARATOR: ClassVar[str] = ": "

    def __post_init__(self):
        # Seed values may arrive as int/float/str; hold them to the same rules as input text
        object.__setattr__(self, "price", parse_price(str(self.price)))

    def __str__(self) -> str:
        return f"{self.name}{self._SEPARATOR}{format_price(self.price)}"
