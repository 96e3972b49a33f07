"""
layout/formatting.py

Number formatting for chart text.

Format strings follow the d3-format mini-language persisted by the
control panel (``",.2f"``, ``".1%"``, ``"+,"``, ``".3s"``, ``"$,.2f"``)
plus the ``SMART_NUMBER`` preset. An unparseable format string falls
back to ``SMART_NUMBER`` rather than failing the render, as does a
format that cannot represent the value (``"c"`` past the code point
range). SI output beyond the yotta and yocto prefixes switches to
exponent notation.
"""

from __future__ import annotations

import logging
import math
import re

from layout.config import CurrencyFormat

logger = logging.getLogger(__name__)

SMART_NUMBER = "SMART_NUMBER"

_D3_FORMAT = re.compile(
    r"^(?:(?P<fill>.)?(?P<align>[<>=^]))?"
    r"(?P<sign>[-+( ])?"
    r"(?P<symbol>[$#])?"
    r"(?P<zero>0)?"
    r"(?P<width>\d+)?"
    r"(?P<comma>,)?"
    r"(?:\.(?P<precision>\d+))?"
    r"(?P<trim>~)?"
    r"(?P<type>[bcdefgoprsxX%])?$"
)

_SI_PREFIXES = ("y", "z", "a", "f", "p", "n", "µ", "m", "", "k", "M", "G", "T", "P", "E", "Z", "Y")
_SI_ZERO_INDEX = 8

_CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "CNY": "¥",
    "INR": "₹",
    "KRW": "₩",
    "BRL": "R$",
    "CAD": "CA$",
    "AUD": "A$",
    "CHF": "CHF",
}


def format_number(
    value: float | None,
    spec: str = SMART_NUMBER,
    currency: CurrencyFormat | None = None,
    placeholder: str = "—",
) -> str:
    """
    Format *value* with the d3-style *spec*.

    ``None`` and non-finite values render as *placeholder*. When *currency*
    is given, its symbol is placed before the digits (after any sign) or
    after them.
    """
    if value is None or not math.isfinite(value):
        return placeholder
    sign, body = _format_parts(value, spec)
    if currency is not None:
        symbol = _CURRENCY_SYMBOLS.get(currency.symbol.upper(), currency.symbol)
        if currency.symbol_position == "prefix":
            body = f"{symbol}{body}"
        else:
            body = f"{body} {symbol}"
    if sign == "(":
        return f"({body})"
    return f"{sign}{body}"


def format_percent(value: float | None, spec: str = ".1%", placeholder: str = "—") -> str:
    """Format a fractional change (``0.15`` → ``"15.0%"`` with ``".1%"``)."""
    return format_number(value, spec or ".1%", placeholder=placeholder)


def _format_parts(value: float, spec: str) -> tuple[str, str]:
    """Return ``(sign, body)`` for *value*; sign is ``""``, ``"-"``, ``"+"``, ``" "`` or ``"("``."""
    if not spec or spec == SMART_NUMBER:
        body = _smart_number(abs(value))
        return _sign_for(value, "-", body), body

    match = _D3_FORMAT.match(spec)
    if match is None:
        logger.debug("Unrecognised number format %r; using %s", spec, SMART_NUMBER)
        return _format_parts(value, SMART_NUMBER)

    parts = match.groupdict()
    format_type = parts["type"] or ""
    precision = int(parts["precision"]) if parts["precision"] is not None else None
    trim = parts["trim"] is not None
    magnitude = abs(value)

    if format_type == "":
        format_type, trim = "g", True
        if precision is None:
            precision = 12

    try:
        body = _format_body(magnitude, format_type, precision, trim, parts["comma"], parts["symbol"])
    except (ValueError, OverflowError):
        logger.debug("Number format %r cannot render %r; using %s", spec, value, SMART_NUMBER)
        return _format_parts(value, SMART_NUMBER)

    if parts["comma"] and format_type in {"s", "r", "p"}:
        body = _group_thousands(body)
    if parts["symbol"] == "$":
        body = f"${body}"

    sign = _sign_for(value, parts["sign"] or "-", body)
    return sign, _pad(sign, body, parts)


def _format_body(
    magnitude: float,
    format_type: str,
    precision: int | None,
    trim: bool,
    comma: str | None,
    symbol: str | None,
) -> str:
    if format_type == "s":
        return _si(magnitude, 6 if precision is None else max(1, precision), trim)
    if format_type == "r":
        body = _significant(magnitude, 6 if precision is None else max(1, precision))
        return _trim_zeros(body) if trim else body
    if format_type == "p":
        body = _significant(magnitude * 100, 6 if precision is None else max(1, precision))
        return f"{_trim_zeros(body) if trim else body}%"
    if format_type in {"b", "o", "x", "X", "c"}:
        # digit grouping only applies to decimal integers
        return format(int(round(magnitude)), format_type)
    if format_type == "d":
        return format(int(round(magnitude)), f"{comma or ''}d")
    python_spec = (
        f"{'#' if symbol == '#' else ''}"
        f"{comma or ''}"
        f"{'' if precision is None else f'.{precision}'}"
        f"{format_type}"
    )
    body = format(magnitude, python_spec)
    return _trim_zeros(body) if trim else body


def _sign_for(value: float, sign_option: str, body: str) -> str:
    is_zero = not any(ch in "123456789" for ch in body)
    if value < 0 and not is_zero:
        return "(" if sign_option == "(" else "-"
    if sign_option in {"+", " "}:
        return sign_option
    return ""


def _pad(sign: str, body: str, parts: dict[str, str | None]) -> str:
    width = int(parts["width"]) if parts["width"] else 0
    length = len(sign) + len(body) + (1 if sign == "(" else 0)
    if length >= width:
        return body
    fill = parts["fill"] or " "
    align = parts["align"] or ">"
    if parts["zero"] and not parts["align"]:
        fill, align = "0", "="
    padding = width - length
    if align == "=":
        return fill * padding + body
    # the sign is prepended after padding
    if align == "<":
        return body + fill * padding
    if align == "^":
        left = padding // 2
        return fill * left + body + fill * (padding - left)
    return fill * padding + body


def _smart_number(magnitude: float) -> str:
    if magnitude == 0:
        return "0"
    if magnitude >= 1000:
        return _si(magnitude, 3, trim=True)
    if magnitude >= 1:
        return _trim_zeros(f"{magnitude:,.2f}")
    if magnitude >= 0.001:
        return _trim_zeros(f"{magnitude:.4f}")
    return _si(magnitude, 3, trim=True)


def _si(magnitude: float, precision: int, trim: bool) -> str:
    exponent = 0
    if magnitude > 0:
        exponent = math.floor(math.log10(magnitude) / 3)
    if -_SI_ZERO_INDEX <= exponent <= _SI_ZERO_INDEX:
        body = _significant(magnitude / 10 ** (3 * exponent), precision)
        if float(body) >= 1000:
            exponent += 1
            body = _significant(magnitude / 10 ** (3 * exponent), precision)
    if not -_SI_ZERO_INDEX <= exponent <= _SI_ZERO_INDEX:
        # beyond yocto and yotta the digits are written in exponent notation
        body = f"{magnitude:.{precision - 1}e}"
        return _trim_zeros(body) if trim else body
    if trim:
        body = _trim_zeros(body)
    return f"{body}{_SI_PREFIXES[_SI_ZERO_INDEX + exponent]}"


def _significant(magnitude: float, precision: int) -> str:
    """Fixed-point text of *magnitude* rounded to *precision* significant digits."""
    if magnitude == 0:
        return f"{0:.{max(0, precision - 1)}f}"
    decimals = max(0, precision - 1 - math.floor(math.log10(magnitude)))
    return f"{magnitude:.{decimals}f}"


def _trim_zeros(body: str) -> str:
    """Drop insignificant trailing zeros from the fractional part of *body*."""
    match = re.match(r"^(?P<int>[\d,]+)\.(?P<frac>\d+)(?P<rest>.*)$", body)
    if match is None:
        return body
    fraction = match.group("frac").rstrip("0")
    integer = match.group("int")
    rest = match.group("rest")
    return f"{integer}.{fraction}{rest}" if fraction else f"{integer}{rest}"


def _group_thousands(body: str) -> str:
    match = re.match(r"^(?P<int>\d+)(?P<rest>.*)$", body)
    if match is None:
        return body
    return f"{int(match.group('int')):,}{match.group('rest')}"
