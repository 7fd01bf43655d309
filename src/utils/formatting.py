from __future__ import annotations

from typing import Union

_SYMBOLS = {"USD": "$", "GBP": "£", "EUR": "€"}


def format_number(n: Union[int, float]) -> str:
    return f"{n:,}"


def format_currency(amount: Union[int, float], currency: str = "USD") -> str:
    """
    Whole-unit currency string, e.g. 1850 -> "$1,850".
    Unknown currency codes are used as a prefix ("CAD 1,850").
    """
    whole = int(round(amount))
    symbol = _SYMBOLS.get(currency.upper())
    sign = "-" if whole < 0 else ""
    body = format_number(abs(whole))
    if symbol is None:
        return f"{sign}{currency.upper()} {body}"
    return f"{sign}{symbol}{body}"
