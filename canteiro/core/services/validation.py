"""
Validation and status engine.

Pure helpers shared by every record type: CNPJ check digits and mask,
Mercosul plate pattern, expiry alert classification and Brazilian
currency formatting. Every function is total and returns a value for
any input, including None and malformed strings.
"""

import re
from datetime import date, datetime
from itertools import cycle
from typing import Any

from canteiro.core.entities.alert import AlertSeverity, AlertStatus

WARNING_WINDOW_DAYS = 30

BR_STATES: tuple[str, ...] = (
    "AC", "AL", "AP", "AM", "BA", "CE", "DF", "ES", "GO",
    "MA", "MT", "MS", "MG", "PA", "PB", "PR", "PE", "PI",
    "RJ", "RN", "RS", "RO", "RR", "SC", "SP", "SE", "TO",
)

_NON_DIGIT = re.compile(r"[^0-9]")
_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")
_MERCOSUL_PLATE = re.compile(r"[A-Z]{3}[0-9][A-Z][0-9]{2}")

_NEUTRAL = AlertStatus(
    severity=AlertSeverity.NEUTRAL,
    label="N/A",
    color="text-muted-foreground",
    bg="bg-muted/10",
    border="border-muted",
)
_EXPIRED = AlertStatus(
    severity=AlertSeverity.EXPIRED,
    label="VENCIDO",
    color="text-red-700",
    bg="bg-red-50",
    border="border-red-200",
)
_WARNING = AlertStatus(
    severity=AlertSeverity.WARNING,
    label="ATENÇÃO",
    color="text-yellow-700",
    bg="bg-yellow-50",
    border="border-yellow-200",
)
_OK = AlertStatus(
    severity=AlertSeverity.OK,
    label="VÁLIDO",
    color="text-green-700",
    bg="bg-green-50",
    border="border-green-200",
)


def _only_digits(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    return _NON_DIGIT.sub("", value)


def _tax_id_check_digit(numbers: list[int]) -> int:
    # Weights run 2..9 from the rightmost digit, wrapping back to 2
    total = sum(n * w for n, w in zip(reversed(numbers), cycle(range(2, 10))))
    remainder = total % 11
    return 0 if remainder < 2 else 11 - remainder


def validate_tax_id(value: Any) -> bool:
    """
    Validate a CNPJ using its two modulo-11 check digits.

    Punctuation is ignored. Sequences of a single repeated digit are
    rejected even though they satisfy the checksum.
    """
    digits = _only_digits(value)
    if len(digits) != 14:
        return False
    if len(set(digits)) == 1:
        return False

    numbers = [int(c) for c in digits]
    for position in (12, 13):
        if _tax_id_check_digit(numbers[:position]) != numbers[position]:
            return False
    return True


def format_tax_id(value: Any) -> str:
    """
    Render digits as NN.NNN.NNN/NNNN-NN.

    Partial input is masked progressively and anything beyond 14 digits
    is dropped, so the function is idempotent.
    """
    digits = _only_digits(value)[:14]
    result = digits[:2]
    for separator, start, end in ((".", 2, 5), (".", 5, 8), ("/", 8, 12), ("-", 12, 14)):
        chunk = digits[start:end]
        if not chunk:
            break
        result += separator + chunk
    return result


def normalize_plate(value: Any) -> str:
    """Strip separators and upper-case a plate."""
    if not isinstance(value, str):
        return ""
    return _NON_ALNUM.sub("", value).upper()


def validate_vehicle_plate(value: Any) -> bool:
    """Check a plate against the Mercosul pattern LLLNLNN (case-insensitive)."""
    clean = normalize_plate(value)
    if len(clean) != 7:
        return False
    return _MERCOSUL_PLATE.fullmatch(clean) is not None


def is_valid_state(value: Any) -> bool:
    """Check a two-letter federative unit code."""
    return isinstance(value, str) and value.upper() in BR_STATES


def parse_date(value: Any) -> date | None:
    """Coerce a date, datetime or ISO string to a calendar day, or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return parse_date(datetime.fromisoformat(text))
        except ValueError:
            return None
    return None


def is_valid_date(value: Any) -> bool:
    return parse_date(value) is not None


def safe_format(value: Any, fmt: str = "%d/%m/%Y") -> str:
    """Format a date for display, or "N/A" when it cannot be read."""
    if isinstance(value, datetime):
        return value.strftime(fmt)
    parsed = parse_date(value)
    if parsed is None:
        return "N/A"
    return parsed.strftime(fmt)


def days_until(value: Any, today: date | None = None) -> int | None:
    """Whole calendar days from today to the given date (negative if past)."""
    target = parse_date(value)
    if target is None:
        return None
    return (target - (today or date.today())).days


def get_alert_status(value: Any, today: date | None = None) -> AlertStatus:
    """
    Classify an expiry date relative to today.

    Comparison is by calendar day, so the time of day never changes the
    result. Past dates are expired, today through WARNING_WINDOW_DAYS
    ahead (inclusive) is a warning, anything later is ok. Missing or
    unreadable dates are neutral.
    """
    diff = days_until(value, today)
    if diff is None:
        return _NEUTRAL
    if diff < 0:
        return _EXPIRED
    if diff <= WARNING_WINDOW_DAYS:
        return _WARNING
    return _OK


def _br_number(value: float, decimals: int) -> str:
    # 1,234.56 -> 1.234,56
    text = f"{value:,.{decimals}f}"
    return text.replace(",", "_").replace(".", ",").replace("_", ".")


def format_currency(value: Any) -> str:
    """Format an amount as Brazilian reais, e.g. R$ 1.234,56."""
    try:
        amount = float(value or 0)
    except (TypeError, ValueError):
        amount = 0.0
    sign = "-" if amount < 0 else ""
    return f"{sign}R$ {_br_number(abs(amount), 2)}"


def format_currency_compact(value: Any) -> str:
    """Short currency label for dashboards: R$ 1,5M / R$ 12,3K."""
    try:
        amount = float(value or 0)
    except (TypeError, ValueError):
        amount = 0.0
    if amount >= 1_000_000:
        return f"R$ {_br_number(amount / 1_000_000, 1)}M"
    if amount >= 1_000:
        return f"R$ {_br_number(amount / 1_000, 1)}K"
    return format_currency(amount)
