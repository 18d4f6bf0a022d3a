"""
Static catalog of the supported currencies, countries and locales.

Every variant is a data record; lookups go through plain dictionaries so
an unknown code always results in an explicit not-found error.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..utils.core.exceptions import (
    CountryNotFoundError,
    CurrencyNotFoundError,
    LocaleNotFoundError,
)

# Name of the locale the source texts are written in
NATIVE_LOCALE_NAME = "en_UK"


@dataclass(frozen=True)
class CurrencyData:
    """
    Formatting data of a currency.

    Attributes:
        iso: ISO 4217 code
        symbol: Currency symbol
        singular: Singular name
        plural: Plural name
        symbol_on_front: Whether the symbol precedes the amount
        name_preferred: Whether the name reads better than the symbol
        template: Structural template with ``{symbol}`` and ``{amount}``;
            a leading ``-`` marks where the sign of negative amounts goes
    """

    iso: str
    symbol: str
    singular: str
    plural: str
    symbol_on_front: bool
    name_preferred: bool
    template: str


@dataclass(frozen=True)
class CountryData:
    """Number formatting rules and currency of a country."""

    code: str
    label: str
    thousands_separator: str
    decimals_separator: str
    currency_iso: str


@dataclass(frozen=True)
class LocaleData:
    """A language/region combination."""

    name: str
    label: str


CURRENCIES: dict[str, CurrencyData] = {
    currency.iso: currency
    for currency in (
        CurrencyData("EUR", "€", "Euro", "Euros", False, False, "-{amount} {symbol}"),
        CurrencyData("USD", "$", "Dollar", "Dollars", True, False, "-{symbol}{amount}"),
        CurrencyData("CAD", "$", "Canadian Dollar", "Canadian Dollars", True, False, "-{symbol}{amount}"),
        CurrencyData("MXN", "$", "Peso", "Pesos", True, False, "-{symbol}{amount}"),
        CurrencyData("GBP", "£", "Pound", "Pounds", True, False, "-{symbol}{amount}"),
        CurrencyData("PLN", "zł", "Złoty", "Złote", False, True, "-{amount} {symbol}"),
        CurrencyData("SEK", "kr", "Krona", "Kronor", False, True, "-{amount} {symbol}"),
        CurrencyData("RON", "lei", "Leu", "Lei", False, True, "-{amount} {symbol}"),
        CurrencyData("CHF", "CHF", "Swiss Franc", "Swiss Francs", True, False, "{symbol} -{amount}"),
    )
}

COUNTRIES: dict[str, CountryData] = {
    country.code: country
    for country in (
        CountryData("de", "Germany", ".", ",", "EUR"),
        CountryData("at", "Austria", ".", ",", "EUR"),
        CountryData("fr", "France", " ", ",", "EUR"),
        CountryData("es", "Spain", ".", ",", "EUR"),
        CountryData("it", "Italy", ".", ",", "EUR"),
        CountryData("us", "United States", ",", ".", "USD"),
        CountryData("uk", "United Kingdom", ",", ".", "GBP"),
        CountryData("ca", "Canada", ",", ".", "CAD"),
        CountryData("mx", "Mexico", ",", ".", "MXN"),
        CountryData("pl", "Poland", " ", ",", "PLN"),
        CountryData("se", "Sweden", " ", ",", "SEK"),
        CountryData("ro", "Romania", ".", ",", "RON"),
        CountryData("ch", "Switzerland", "'", ".", "CHF"),
        CountryData("zz", "Country-independent", ".", ",", "USD"),
    )
}

LOCALES: dict[str, LocaleData] = {
    locale.name: locale
    for locale in (
        LocaleData("de_DE", "German"),
        LocaleData("de_AT", "German (Austria)"),
        LocaleData("de_CH", "German (Switzerland)"),
        LocaleData("en_UK", "English (UK)"),
        LocaleData("en_US", "English (US)"),
        LocaleData("en_CA", "English (Canada)"),
        LocaleData("es_ES", "Spanish"),
        LocaleData("es_MX", "Spanish (Mexico)"),
        LocaleData("fr_FR", "French"),
        LocaleData("it_IT", "Italian"),
        LocaleData("pl_PL", "Polish"),
        LocaleData("ro_RO", "Romanian"),
        LocaleData("sv_SE", "Swedish"),
    )
}


def get_currency(iso: str) -> CurrencyData:
    """
    Look up a currency by ISO code (case-insensitive).

    Raises:
        CurrencyNotFoundError: If the currency is not in the catalog
    """
    currency = CURRENCIES.get(iso.upper())
    if currency is None:
        raise CurrencyNotFoundError(
            f"Unknown currency '{iso}'.",
            details=f"Available currencies: {', '.join(sorted(CURRENCIES))}",
        )
    return currency


def get_country(code: str) -> CountryData:
    """
    Look up a country by its two letter code (case-insensitive).

    Raises:
        CountryNotFoundError: If the country is not in the catalog
    """
    country = COUNTRIES.get(code.lower())
    if country is None:
        raise CountryNotFoundError(
            f"Unknown country '{code}'.",
            details=f"Available countries: {', '.join(sorted(COUNTRIES))}",
        )
    return country


def get_locale_data(name: str) -> LocaleData:
    """
    Look up a locale by name.

    Raises:
        LocaleNotFoundError: If the locale is not in the catalog
    """
    locale = LOCALES.get(name)
    if locale is None:
        raise LocaleNotFoundError(
            f"The locale '{name}' is not supported.",
            details=f"Supported locales: {', '.join(get_supported_locale_names())}",
        )
    return locale


def get_supported_locale_names() -> list[str]:
    """Get the names of all locales in the catalog, sorted."""
    return sorted(LOCALES)


def is_locale_supported(name: str) -> bool:
    return name in LOCALES
