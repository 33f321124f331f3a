#!/usr/bin/env python3
"""
Currency Metadata and Precision Utilities

Currency handling for the group ledger. Every currency has a fixed number of
fractional digits (its minor unit), and all rounding in the ledger happens at
that precision.

Amount Representations:
- Major units as Decimal: Decimal("12.34") USD, Decimal("1200") JPY
- Minor units as int: 1234 (USD cents), 1200 (JPY has no minor unit)
- Display strings: "$12.34", "¥1200"

Key Principles:
- Never use binary floating point for money
- Round half away from zero, at the currency's decimal digits
- Amounts in different currencies are never combined
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Union

AmountLike = Union[Decimal, int, str, float]


class UnknownCurrencyError(ValueError):
    """Raised when a currency code is not in the catalog"""

    pass


@dataclass(frozen=True)
class Currency:
    """ISO 4217 currency catalog entry."""

    code: str
    name: str
    symbol: str
    decimal_digits: int


_CURRENCY_TABLE: tuple[Currency, ...] = (
    Currency("AED", "United Arab Emirates Dirham", "د.إ", 2),
    Currency("AFN", "Afghan Afghani", "؋", 2),
    Currency("ALL", "Albanian Lek", "L", 2),
    Currency("AMD", "Armenian Dram", "֏", 2),
    Currency("ANG", "Netherlands Antillean Guilder", "ƒ", 2),
    Currency("AOA", "Angolan Kwanza", "Kz", 2),
    Currency("ARS", "Argentine Peso", "$", 2),
    Currency("AUD", "Australian Dollar", "$", 2),
    Currency("AWG", "Aruban Florin", "ƒ", 2),
    Currency("BAM", "Bosnia and Herzegovina Convertible Mark", "KM", 2),
    Currency("BBD", "Barbados Dollar", "$", 2),
    Currency("BDT", "Bangladeshi Taka", "৳", 2),
    Currency("BGN", "Bulgarian Lev", "лв", 2),
    Currency("BHD", "Bahraini Dinar", ".د.ب", 3),
    Currency("BIF", "Burundian Franc", "FBu", 0),
    Currency("BMD", "Bermudian Dollar", "$", 2),
    Currency("BND", "Brunei Dollar", "$", 2),
    Currency("BOB", "Bolivian Boliviano", "Bs.", 2),
    Currency("BRL", "Brazilian Real", "R$", 2),
    Currency("BSD", "Bahamian Dollar", "$", 2),
    Currency("BTN", "Bhutanese Ngultrum", "Nu.", 2),
    Currency("BWP", "Botswana Pula", "P", 2),
    Currency("BYN", "Belarusian Ruble", "Br", 2),
    Currency("BZD", "Belize Dollar", "BZ$", 2),
    Currency("CAD", "Canadian Dollar", "$", 2),
    Currency("CDF", "Congolese Franc", "FC", 2),
    Currency("CHF", "Swiss Franc", "CHF", 2),
    Currency("CLP", "Chilean Peso", "$", 0),
    Currency("CNY", "Chinese Yuan", "¥", 2),
    Currency("COP", "Colombian Peso", "$", 2),
    Currency("CRC", "Costa Rican Colón", "₡", 2),
    Currency("CUP", "Cuban Peso", "₱", 2),
    Currency("CVE", "Cape Verdean Escudo", "$", 2),
    Currency("CZK", "Czech Koruna", "Kč", 2),
    Currency("DJF", "Djiboutian Franc", "Fdj", 0),
    Currency("DKK", "Danish Krone", "kr", 2),
    Currency("DOP", "Dominican Peso", "RD$", 2),
    Currency("DZD", "Algerian Dinar", "د.ج", 2),
    Currency("EGP", "Egyptian Pound", "£", 2),
    Currency("ETB", "Ethiopian Birr", "Br", 2),
    Currency("EUR", "Euro", "€", 2),
    Currency("FJD", "Fiji Dollar", "FJ$", 2),
    Currency("GBP", "Pound Sterling", "£", 2),
    Currency("GEL", "Georgian Lari", "₾", 2),
    Currency("GHS", "Ghanaian Cedi", "GH₵", 2),
    Currency("GMD", "Gambian Dalasi", "D", 2),
    Currency("GNF", "Guinean Franc", "FG", 0),
    Currency("GTQ", "Guatemalan Quetzal", "Q", 2),
    Currency("GYD", "Guyanese Dollar", "$", 2),
    Currency("HKD", "Hong Kong Dollar", "HK$", 2),
    Currency("HNL", "Honduran Lempira", "L", 2),
    Currency("HTG", "Haitian Gourde", "G", 2),
    Currency("HUF", "Hungarian Forint", "Ft", 2),
    Currency("IDR", "Indonesian Rupiah", "Rp", 2),
    Currency("ILS", "Israeli New Shekel", "₪", 2),
    Currency("INR", "Indian Rupee", "₹", 2),
    Currency("IQD", "Iraqi Dinar", "د.ع", 3),
    Currency("IRR", "Iranian Rial", "﷼", 2),
    Currency("ISK", "Icelandic Króna", "kr", 0),
    Currency("JMD", "Jamaican Dollar", "J$", 2),
    Currency("JOD", "Jordanian Dinar", "JD", 3),
    Currency("JPY", "Japanese Yen", "¥", 0),
    Currency("KES", "Kenyan Shilling", "KSh", 2),
    Currency("KHR", "Cambodian Riel", "៛", 2),
    Currency("KMF", "Comoro Franc", "CF", 0),
    Currency("KRW", "South Korean Won", "₩", 0),
    Currency("KWD", "Kuwaiti Dinar", "KD", 3),
    Currency("KYD", "Cayman Islands Dollar", "$", 2),
    Currency("KZT", "Kazakhstani Tenge", "₸", 2),
    Currency("LAK", "Lao Kip", "₭", 2),
    Currency("LBP", "Lebanese Pound", "ل.ل.", 2),
    Currency("LKR", "Sri Lankan Rupee", "Rs", 2),
    Currency("LRD", "Liberian Dollar", "$", 2),
    Currency("LSL", "Lesotho Loti", "L", 2),
    Currency("LYD", "Libyan Dinar", "LD", 3),
    Currency("MAD", "Moroccan Dirham", "MAD", 2),
    Currency("MDL", "Moldovan Leu", "L", 2),
    Currency("MGA", "Malagasy Ariary", "Ar", 1),
    Currency("MKD", "Macedonian Denar", "ден", 2),
    Currency("MMK", "Myanma Kyat", "K", 2),
    Currency("MOP", "Macanese Pataca", "MOP$", 2),
    Currency("MRU", "Mauritanian Ouguiya", "UM", 1),
    Currency("MUR", "Mauritian Rupee", "₨", 2),
    Currency("MVR", "Maldivian Rufiyaa", "Rf", 2),
    Currency("MWK", "Malawian Kwacha", "MK", 2),
    Currency("MXN", "Mexican Peso", "$", 2),
    Currency("MYR", "Malaysian Ringgit", "RM", 2),
    Currency("MZN", "Mozambican Metical", "MT", 2),
    Currency("NAD", "Namibian Dollar", "$", 2),
    Currency("NGN", "Nigerian Naira", "₦", 2),
    Currency("NIO", "Nicaraguan Córdoba", "C$", 2),
    Currency("NOK", "Norwegian Krone", "kr", 2),
    Currency("NPR", "Nepalese Rupee", "₨", 2),
    Currency("NZD", "New Zealand Dollar", "$", 2),
    Currency("OMR", "Omani Rial", "﷼", 3),
    Currency("PAB", "Panamanian Balboa", "B/.", 2),
    Currency("PEN", "Peruvian Sol", "S/.", 2),
    Currency("PGK", "Papua New Guinean Kina", "K", 2),
    Currency("PHP", "Philippine Peso", "₱", 2),
    Currency("PKR", "Pakistani Rupee", "₨", 2),
    Currency("PLN", "Polish Złoty", "zł", 2),
    Currency("PYG", "Paraguayan Guarani", "₲", 0),
    Currency("QAR", "Qatari Riyal", "﷼", 2),
    Currency("RON", "Romanian Leu", "lei", 2),
    Currency("RSD", "Serbian Dinar", "дин.", 2),
    Currency("RUB", "Russian Ruble", "₽", 2),
    Currency("RWF", "Rwandan Franc", "R₣", 0),
    Currency("SAR", "Saudi Riyal", "﷼", 2),
    Currency("SBD", "Solomon Islands Dollar", "$", 2),
    Currency("SCR", "Seychellois Rupee", "₨", 2),
    Currency("SDG", "Sudanese Pound", "ج.س.", 2),
    Currency("SEK", "Swedish Krona", "kr", 2),
    Currency("SGD", "Singapore Dollar", "S$", 2),
    Currency("SHP", "Saint Helena Pound", "£", 2),
    Currency("SOS", "Somali Shilling", "S", 2),
    Currency("SRD", "Surinamese Dollar", "$", 2),
    Currency("STN", "São Tomé and Príncipe Dobra", "Db", 2),
    Currency("SZL", "Swazi Lilangeni", "L", 2),
    Currency("THB", "Thai Baht", "฿", 2),
    Currency("TJS", "Tajikistani Somoni", "SM", 2),
    Currency("TMT", "Turkmenistani Manat", "T", 2),
    Currency("TND", "Tunisian Dinar", "DT", 3),
    Currency("TOP", "Tongan Paʻanga", "T$", 2),
    Currency("TRY", "Turkish Lira", "₺", 2),
    Currency("TTD", "Trinidad and Tobago Dollar", "TT$", 2),
    Currency("TWD", "New Taiwan Dollar", "NT$", 2),
    Currency("TZS", "Tanzanian Shilling", "TSh", 2),
    Currency("UAH", "Ukrainian Hryvnia", "₴", 2),
    Currency("UGX", "Ugandan Shilling", "USh", 0),
    Currency("USD", "United States Dollar", "$", 2),
    Currency("UYU", "Uruguayan Peso", "$U", 2),
    Currency("UZS", "Uzbekistan Som", "лв", 2),
    Currency("VES", "Venezuelan Bolívar Soberano", "Bs.S", 2),
    Currency("VND", "Vietnamese Dong", "₫", 0),
    Currency("XCD", "East Caribbean Dollar", "$", 2),
    Currency("XOF", "CFA Franc BCEAO", "CFA", 0),
    Currency("XPF", "CFP Franc", "₣", 0),
    Currency("YER", "Yemeni Rial", "﷼", 2),
    Currency("ZAR", "South African Rand", "R", 2),
    Currency("ZMW", "Zambian Kwacha", "ZK", 2),
)

_CURRENCIES: dict[str, Currency] = {c.code: c for c in _CURRENCY_TABLE}


def normalize_currency_code(code: str) -> str:
    """Upper-case and strip a currency code."""
    return str(code).strip().upper()


def is_supported_currency(code: str) -> bool:
    """Check if a currency code is in the catalog."""
    return normalize_currency_code(code) in _CURRENCIES


def get_currency(code: str) -> Currency:
    """
    Look up a currency by ISO code.

    Args:
        code: 3-letter ISO 4217 code (case-insensitive)

    Returns:
        Currency catalog entry

    Raises:
        UnknownCurrencyError: If the code is not in the catalog
    """
    normalized = normalize_currency_code(code)
    try:
        return _CURRENCIES[normalized]
    except KeyError:
        raise UnknownCurrencyError(f"Unknown currency code: {code!r}") from None


def get_decimal_digits(code: str) -> int:
    """Get the number of fractional digits for a currency (0, 1, 2 or 3)."""
    return get_currency(code).decimal_digits


def list_currencies() -> list[Currency]:
    """All catalog entries sorted by code."""
    return sorted(_CURRENCIES.values(), key=lambda c: c.code)


def to_decimal(amount: AmountLike) -> Decimal:
    """
    Convert an amount to Decimal without binary floating-point artifacts.

    Floats go through their shortest repr, so 0.1 becomes Decimal("0.1").

    Args:
        amount: Decimal, int, numeric string or float

    Returns:
        Decimal amount

    Raises:
        ValueError: If the value is not a finite number
    """
    if isinstance(amount, Decimal):
        value = amount
    elif isinstance(amount, bool):
        raise ValueError(f"Not a monetary amount: {amount!r}")
    elif isinstance(amount, int):
        value = Decimal(amount)
    elif isinstance(amount, float):
        value = Decimal(repr(amount))
    else:
        try:
            value = Decimal(str(amount).replace(",", "").strip())
        except InvalidOperation:
            raise ValueError(f"Not a monetary amount: {amount!r}") from None

    if not value.is_finite():
        raise ValueError(f"Not a monetary amount: {amount!r}")
    return value


def minor_unit(code: str) -> Decimal:
    """
    Smallest representable amount for a currency.

    Example:
        minor_unit("USD") -> Decimal("0.01")
        minor_unit("JPY") -> Decimal("1")
    """
    return Decimal(1).scaleb(-get_decimal_digits(code))


def round_to_precision(amount: AmountLike, decimal_digits: int) -> Decimal:
    """
    Round half away from zero at the given number of fractional digits.

    Equivalent to round(amount * 10^d) / 10^d evaluated on scaled integers.

    Examples:
        round_to_precision("33.335", 2) -> Decimal("33.34")
        round_to_precision("-33.335", 2) -> Decimal("-33.34")
        round_to_precision("33.5", 0) -> Decimal("34")
    """
    exponent = Decimal(1).scaleb(-decimal_digits)
    return to_decimal(amount).quantize(exponent, rounding=ROUND_HALF_UP)


def round_to_currency(amount: AmountLike, code: str) -> Decimal:
    """Round an amount to a currency's precision."""
    return round_to_precision(amount, get_decimal_digits(code))


def amount_to_minor_units(amount: AmountLike, code: str) -> int:
    """
    Convert a major-unit amount to integer minor units, rounding to precision.

    Example:
        amount_to_minor_units("45.99", "USD") -> 4599
        amount_to_minor_units("1.2345", "BHD") -> 1235
    """
    digits = get_decimal_digits(code)
    return int(round_to_precision(amount, digits).scaleb(digits))


def minor_units_to_amount(units: int, code: str) -> Decimal:
    """
    Convert integer minor units to a major-unit Decimal at full precision.

    Example:
        minor_units_to_amount(4599, "USD") -> Decimal("45.99")
        minor_units_to_amount(34, "JPY") -> Decimal("34")
    """
    digits = get_decimal_digits(code)
    return round_to_precision(Decimal(int(units)).scaleb(-digits), digits)


def count_decimal_places(amount: AmountLike) -> int:
    """Number of fractional digits written in an amount ("12.50" -> 2, "12" -> 0)."""
    exponent = to_decimal(amount).as_tuple().exponent
    if not isinstance(exponent, int) or exponent >= 0:
        return 0
    return -exponent


def get_amount_precision_error(amount: AmountLike, code: str) -> str | None:
    """
    Check that an amount has no more fractional digits than its currency allows.

    Args:
        amount: Amount in major units
        code: Currency code

    Returns:
        Error message, or None if the amount is valid for the currency
    """
    currency = get_currency(code)
    decimals = count_decimal_places(amount)

    if decimals <= currency.decimal_digits:
        return None

    if currency.decimal_digits == 0:
        return (
            f"Amount must be a whole number for {currency.code} ({currency.name}). "
            f"Received {decimals} decimal place(s)."
        )
    return (
        f"Amount must have at most {currency.decimal_digits} decimal place(s) for "
        f"{currency.code} ({currency.name}). Received {decimals} decimal place(s)."
    )


def validate_amount_precision(amount: AmountLike, code: str) -> None:
    """
    Raise ValueError if an amount is more precise than its currency allows.

    Raises:
        ValueError: With the message from get_amount_precision_error
    """
    error = get_amount_precision_error(amount, code)
    if error:
        raise ValueError(error)


def format_amount(amount: AmountLike, code: str, with_code: bool = False) -> str:
    """
    Format an amount for display with the currency symbol.

    Args:
        amount: Amount in major units
        code: Currency code
        with_code: Append the ISO code (useful when symbols are ambiguous)

    Returns:
        Display string like "$12.34", "-$12.34" or "$12.34 USD"

    Example:
        format_amount("1234.5", "USD") -> "$1,234.50"
        format_amount(100, "JPY") -> "¥100"
    """
    currency = get_currency(code)
    value = round_to_precision(amount, currency.decimal_digits)
    sign = "-" if value < 0 else ""
    body = f"{currency.symbol}{abs(value):,.{currency.decimal_digits}f}"
    text = f"{sign}{body}"
    if with_code:
        return f"{text} {currency.code}"
    return text


def validate_sum_equals_total(
    amounts: list[Any], total: AmountLike, tolerance: AmountLike = 0
) -> bool:
    """
    Validate that amounts sum exactly to a total.

    Args:
        amounts: Amounts (any AmountLike)
        total: Expected total
        tolerance: Allowed absolute difference (default: 0 for exact match)

    Returns:
        True if the sum matches within tolerance
    """
    amount_sum = sum((to_decimal(a) for a in amounts), Decimal(0))
    return abs(amount_sum - to_decimal(total)) <= to_decimal(tolerance)


def allocate_remainder(amounts: list[Decimal], total: AmountLike) -> list[Decimal]:
    """
    Allocate the rounding remainder so amounts sum exactly to total.

    The last item absorbs the difference, which guarantees exact
    reconciliation regardless of rounding direction.

    Args:
        amounts: Amounts calculated before remainder allocation
        total: Target total

    Returns:
        New list with the remainder allocated to the last item
    """
    if not amounts:
        return amounts

    amounts_copy = list(amounts)
    current_sum = sum(amounts_copy[:-1], Decimal(0))
    amounts_copy[-1] = to_decimal(total) - current_sum
    return amounts_copy
