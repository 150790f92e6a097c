"""
Currency Formatting

Amounts are shown in Indonesian Rupiah: symbol prefix, no decimal
subunits, dot as thousands separator (e.g. "Rp 1.250.000").

Formatting is for display only. Ledger values stay plain numbers/strings.
User-entered text (names, titles) is escaped here before the page
interpolates it into HTML or markdown.
"""

import html
import math
import re
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Optional

from bill_splitter.config import CurrencySettings, load_or_defaults
from bill_splitter.events import EventLogger
from bill_splitter.models.events import LedgerEventBuilder

_CONTEXT = Context(prec=400)

# Characters Streamlit markdown would interpret (including $ for math and : for emoji)
_MARKDOWN_SPECIAL = re.compile(r"([\\`*_{}\[\]()#+\-.!|~<>$&:])")


def resolve_currency(currency: Optional[CurrencySettings] = None) -> CurrencySettings:
    """
    Return the given currency settings, or the configured ones.

    Invalid configured values fall back to the Rupiah defaults with a
    logged warning, so a bad environment never breaks the summary.
    """
    if currency is not None:
        return currency

    currency, error = load_or_defaults(CurrencySettings)
    if error:
        EventLogger().log(LedgerEventBuilder.settings_invalid("currency", error))
    return currency


def format_idr(amount: float, currency: Optional[CurrencySettings] = None) -> str:
    """
    Format an amount as Rupiah.

    Args:
        amount: Value to format; rounded half-up to whole rupiah.
        currency: Currency settings (defaults to the configured ones).

    Returns:
        e.g. "Rp 15.000", "-Rp 2.500", "Rp 0"
    """
    currency = resolve_currency(currency)

    amount = float(amount)
    if not math.isfinite(amount):
        amount = 0.0

    rupiah = Decimal(repr(amount)).quantize(
        Decimal("1"), rounding=ROUND_HALF_UP, context=_CONTEXT
    )
    sign = "-" if rupiah < 0 else ""
    digits = f"{abs(int(rupiah)):,}".replace(",", currency.thousands_separator)

    return f"{sign}{currency.symbol} {digits}"


def html_text(value: str) -> str:
    """Escape user text for an HTML snippet rendered with unsafe_allow_html."""
    return html.escape(value, quote=True)


def markdown_text(value: str) -> str:
    """Backslash-escape user text so markdown shows it literally."""
    return _MARKDOWN_SPECIAL.sub(r"\\\1", value)
