"""Currencies a generated price may use."""

# ISO 4217 codes offered by the generator
CURRENCIES: dict[str, str] = {
    "AUD": "Australian Dollar",
    "BRL": "Brazilian Real",
    "CAD": "Canadian Dollar",
    "CHF": "Swiss Franc",
    "CNY": "Chinese Yuan",
    "CZK": "Czech Koruna",
    "DKK": "Danish Krone",
    "EUR": "Euro",
    "GBP": "British Pound",
    "HKD": "Hong Kong Dollar",
    "INR": "Indian Rupee",
    "JPY": "Japanese Yen",
    "MXN": "Mexican Peso",
    "NOK": "Norwegian Krone",
    "NZD": "New Zealand Dollar",
    "PLN": "Polish Zloty",
    "SEK": "Swedish Krona",
    "SGD": "Singapore Dollar",
    "UAH": "Ukrainian Hryvnia",
    "USD": "US Dollar",
    "ZAR": "South African Rand",
}


class CurrencyProvider:
    """Lists the currencies available for prices."""

    def __init__(self, currencies: dict[str, str] | None = None) -> None:
        self._currencies = dict(CURRENCIES if currencies is None else currencies)

    def list_currencies(self) -> dict[str, str]:
        """Get currency names by code, sorted by code."""
        return dict(sorted(self._currencies.items()))

    def has_currency(self, code: str) -> bool:
        return code in self._currencies
