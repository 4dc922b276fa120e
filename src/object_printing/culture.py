"""Locale-aware number formatting backed by Babel."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from babel import Locale
from babel.numbers import format_decimal

NUMBER_TYPES: tuple[type, ...] = (int, float, Decimal)


def parse_locale(locale: str | Locale) -> Locale:
    """Accept ``"ru_RU"``, ``"de-DE"`` or a ready ``babel.Locale``.

    Raises:
        ValueError: The identifier is malformed.
        babel.UnknownLocaleError: Babel has no data for the locale.
    """
    if isinstance(locale, Locale):
        return locale
    return Locale.parse(locale, sep="-" if "-" in locale else "_")


def format_number(value: Any, locale: Locale) -> str:
    """Format ``value`` with the locale's decimal symbol.

    Digits are never grouped or rounded, so the output differs from
    ``str(value)`` only in the decimal symbol and the minus sign. Non-numeric
    values fall back to ``str``; ``None`` prints as ``null``.
    """
    if value is None:
        return "null"
    if isinstance(value, bool) or not isinstance(value, NUMBER_TYPES):
        return str(value)
    return format_decimal(value, locale=locale, decimal_quantization=False, group_separator=False)
