"""Formatting helpers shared by the calculators and the letter templates.

Deterministic, locale-free renderings of money and dates in the en-GB long
style the letters use ("3 March 2026", "£120.00").
"""

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional, Union


CURRENCY_SYMBOLS: dict[str, str] = {
    "GBP": "£",
    "USD": "$",
    "EUR": "€",
}

Number = Union[int, float, Decimal]


def currency_symbol(currency: str) -> str:
    """Symbol for a known ISO code, otherwise the code itself."""
    return CURRENCY_SYMBOLS.get(currency, currency)


def parse_amount(value: Union[str, Number, None]) -> Decimal:
    """Lenient amount parsing: anything unparseable is zero."""
    if value is None or value == "":
        return Decimal("0")
    try:
        amount = Decimal(str(value).strip().replace(",", ""))
    except InvalidOperation:
        return Decimal("0")
    if not amount.is_finite():
        return Decimal("0")
    return amount


def fmt_plain_money(value: Number, currency: str = "GBP") -> str:
    """Currency without thousands separators, e.g. ``£1250.00``."""
    return f"{currency_symbol(currency)}{Decimal(str(value)):.2f}"


def fmt_long_date(value: date) -> str:
    """en-GB long date, e.g. ``3 March 2026``."""
    return f"{value.day} {value:%B} {value.year}"


def parse_iso_date(value: Optional[str]) -> Optional[date]:
    """Parse the leading ``YYYY-MM-DD`` of a string; ``None`` if it is not a date."""
    if not value:
        return None
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


def letter_footer(sent: date) -> str:
    """Attribution block appended to the calculator letters."""
    return f"---\nGenerated using NoReply (usenoreply.com)\nSent: {fmt_long_date(sent)}"
