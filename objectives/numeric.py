"""
Numeric text normalization for result-document statistics.

Result documents report numbers in whatever format the producing system
chose: ratios as percentages (``"12.5%"``), money with a currency symbol
(``"$1,234.56"``, ``"1,234.56 kr"``), and plain scalars (``"42.0"``,
``"1E-05"``).  ``parse_decimal`` turns any of these into an exact
``decimal.Decimal``.  Unparseable text raises ``ParseError``; nothing is ever
coerced to a default.

No binary floating point is involved at any stage.
"""
from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from functools import lru_cache
from typing import Any

from .currencies import find_currency_symbols
from .errors import ParseError

_PLAIN_NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)

# Integer part is either ungrouped digits or strict groups of three.
_CURRENCY_AMOUNT = r"(?:(?:\d{1,3}(?:,\d{3})+|\d+)(?:\.\d*)?|\.\d+)"


@lru_cache(maxsize=None)
def _currency_pattern(symbol: str) -> "re.Pattern[str]":
    """Currency grammar for one symbol: prefix or suffix placement, sign anywhere."""
    sym = re.escape(symbol)
    return re.compile(
        r"(?P<lead>[+-]?)\s*"
        r"(?:" + sym + r"\s*(?P<mid>[+-]?)\s*(?P<prefixed>" + _CURRENCY_AMOUNT + r")"
        r"|(?P<suffixed>" + _CURRENCY_AMOUNT + r")\s*" + sym + r")"
        r"\s*(?P<trail>[+-]?)",
        re.ASCII,
    )


def _to_decimal(literal: str, original: str) -> Decimal:
    try:
        value = Decimal(literal)
    except InvalidOperation as e:
        raise ParseError(f"Cannot parse {original!r} as a decimal number") from e
    if not value.is_finite():
        raise ParseError(f"Non-finite value {original!r} is not a valid statistic")
    return value


def parse_plain(text: str) -> Decimal:
    """Parse a plain decimal literal: '.' separator, no grouping, optional exponent."""
    token = text.strip()
    if not _PLAIN_NUMBER.fullmatch(token):
        raise ParseError(f"Cannot parse {text!r} as a decimal number")
    return _to_decimal(token, text)


def parse_percentage(text: str) -> Decimal:
    """Parse ``"<number>%"`` and scale it down by 100."""
    token = text.strip()
    if not token.endswith("%"):
        raise ParseError(f"Percentage {text!r} must end with '%'")
    return parse_plain(token[:-1]).scaleb(-2)


def parse_currency(text: str, symbol: str) -> Decimal:
    """Parse a currency-formatted amount using *symbol* as the currency sign.

    Accepts the symbol as prefix or suffix, ``,`` group separators, ``.``
    decimal separator, a ``-``/``+`` sign (leading, after a prefix symbol, or
    trailing), and accounting parentheses for negatives.
    """
    token = text.strip()
    negative = False
    if token.startswith("(") and token.endswith(")"):
        negative = True
        token = token[1:-1].strip()

    match = _currency_pattern(symbol).fullmatch(token)
    if match is None:
        raise ParseError(f"Cannot parse {text!r} as a {symbol!r} currency amount")

    signs = [s for s in (match.group("lead"), match.group("mid"), match.group("trail")) if s]
    if len(signs) > 1 or (signs and negative):
        raise ParseError(f"Currency amount {text!r} has more than one sign")
    if signs and signs[0] == "-":
        negative = True

    amount = match.group("prefixed") or match.group("suffixed")
    value = _to_decimal(amount.replace(",", ""), text)
    return -value if negative else value


def parse_decimal(text: str) -> Decimal:
    """Normalize a percentage, currency or plain numeric token into a ``Decimal``.

    Raises
    ------
    ParseError
        If the token is not a valid number in any supported format, or
        contains more than one distinct currency symbol.
    """
    if not isinstance(text, str):
        raise ParseError(f"Expected text, got {type(text).__name__}")
    token = text.strip()
    if not token:
        raise ParseError("Cannot parse an empty value")

    if token.endswith("%"):
        return parse_percentage(token)

    symbols = find_currency_symbols(token)
    if len(symbols) > 1:
        raise ParseError(
            f"Ambiguous currency in {text!r}: found {', '.join(symbols)}"
        )
    if symbols:
        return parse_currency(token, symbols[0])

    return parse_plain(token)


def to_text(value: Any) -> str:
    """Render a located document leaf as the text token ``parse_decimal`` expects."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        raise ParseError(f"Boolean value {value!r} is not a numeric statistic")
    if isinstance(value, (int, float, Decimal)):
        return str(value)
    raise ParseError(f"Expected a scalar statistic, got {type(value).__name__}")
