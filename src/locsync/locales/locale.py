"""
Locale objects.

A Locale combines the catalog records of a language/region pair with the
number and currency formatting rules of its country.
"""

from __future__ import annotations

from typing import override

from .catalog import (
    NATIVE_LOCALE_NAME,
    CountryData,
    CurrencyData,
    get_country,
    get_currency,
    get_locale_data,
)


class Locale:
    """
    A supported locale, e.g. ``de_DE``.

    Attributes:
        name: Locale name, language and region code separated by ``_``
        label: Human readable name
    """

    def __init__(self, name: str) -> None:
        """
        Initialize the locale.

        Args:
            name: Locale name from the catalog

        Raises:
            LocaleNotFoundError: If the locale is not supported
        """
        data = get_locale_data(name)
        self.name: str = data.name
        self.label: str = data.label

    @property
    def language_code(self) -> str:
        return self.name.split("_")[0]

    @property
    def country_code(self) -> str:
        return self.name.split("_")[1].lower()

    @property
    def is_native(self) -> bool:
        """Whether this is the locale the source texts are written in."""
        return self.name == NATIVE_LOCALE_NAME

    @property
    def country(self) -> CountryData:
        return get_country(self.country_code)

    @property
    def currency(self) -> CurrencyData:
        return get_currency(self.country.currency_iso)

    def format_number(self, value: float, decimals: int = 0) -> str:
        """
        Format a number with the country's separators.

        Args:
            value: Number to format
            decimals: Number of decimal places

        Returns:
            The formatted number, with a leading ``-`` for negative values
        """
        country = self.country
        formatted = f"{abs(value):,.{decimals}f}"
        integer, _, fraction = formatted.partition(".")
        result = integer.replace(",", country.thousands_separator)
        if fraction:
            result = f"{result}{country.decimals_separator}{fraction}"
        return f"-{result}" if value < 0 else result

    def format_currency(self, amount: float, decimals: int = 2) -> str:
        """
        Format an amount in the country's currency.

        Args:
            amount: Amount to format
            decimals: Number of decimal places

        Returns:
            The amount rendered with the currency's structural template
        """
        currency = self.currency
        rendered = currency.template.format(
            symbol=currency.symbol,
            amount=self.format_number(abs(amount), decimals),
        )
        if amount >= 0:
            rendered = rendered.replace("-", "", 1)
        return rendered

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Locale):
            return NotImplemented
        return self.name == other.name

    @override
    def __hash__(self) -> int:
        return hash(self.name)

    @override
    def __repr__(self) -> str:
        return f"Locale({self.name!r})"
