"""Mini README: Text formatting helpers shared by templates, charts and the CLI.

Structure:
    * CurrencyFormatter - renders amounts in the configured locale style.
    * format_currency - module-level shortcut using the default (BRL) style.
    * format_amount_input - amount text for pre-filled form fields.
    * escape_for_display - escape user text before interpolating it into HTML.
    * format_date - ``dd/mm/yyyy`` rendering of stored ISO dates.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from markupsafe import Markup

from ..configuration import FynovSettings
from ..finance.records import parse_date

_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
}
_ESCAPE_TABLE = str.maketrans(_ESCAPES)
_CENT = Decimal("0.01")


def _coerce_amount(value: object) -> float:
    try:
        amount = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(amount) or math.isinf(amount):
        return 0.0
    return amount


@dataclass(frozen=True, slots=True)
class CurrencyFormatter:
    """Locale description for currency strings such as ``R$ 1.234,56``."""

    symbol: str = "R$"
    thousands_separator: str = "."
    decimal_separator: str = ","

    @classmethod
    def from_settings(cls, settings: FynovSettings) -> "CurrencyFormatter":
        return cls(
            symbol=settings.currency_symbol,
            thousands_separator=settings.thousands_separator,
            decimal_separator=settings.decimal_separator,
        )

    def __call__(self, value: object) -> str:
        return self.format(value)

    def format(self, value: object) -> str:
        """Format ``value``; anything non-numeric renders as zero."""

        amount = Decimal(repr(_coerce_amount(value))).quantize(_CENT, rounding=ROUND_HALF_UP)
        grouped = f"{abs(amount):,.2f}"
        units, cents = grouped.split(".")
        units = units.replace(",", self.thousands_separator)
        sign = "-" if amount < 0 else ""
        return f"{sign}{self.symbol} {units}{self.decimal_separator}{cents}"


DEFAULT_FORMATTER = CurrencyFormatter()


def format_currency(value: object, formatter: Optional[CurrencyFormatter] = None) -> str:
    """Format ``value`` with ``formatter`` (defaults to Brazilian reais)."""

    return (formatter or DEFAULT_FORMATTER).format(value)


def format_amount_input(value: object) -> str:
    """Render an amount the way the forms read it back: comma decimals, no grouping.

    Text is returned untouched so re-rendered forms echo what the user typed.
    """

    if isinstance(value, str):
        return value
    amount = Decimal(repr(_coerce_amount(value))).normalize()
    return format(amount, "f").replace(".", ",")


def escape_for_display(text: object) -> Markup:
    """Escape ``& < > " '`` so user text can be placed inside markup.

    ``None`` and other falsy values render as an empty string, except the
    number zero which renders as ``"0"``.
    """

    is_zero = isinstance(text, (int, float)) and not isinstance(text, bool) and text == 0
    if not text and not is_zero:
        return Markup("")
    return Markup(str(text).translate(_ESCAPE_TABLE))


def format_date(value: object, empty: str = "") -> str:
    """Render an ISO date as ``dd/mm/yyyy``; unreadable dates give ``empty``."""

    parsed = parse_date(value)
    if parsed is None:
        return empty
    return parsed.strftime("%d/%m/%Y")
