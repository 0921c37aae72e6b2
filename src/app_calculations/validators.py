"""
Validators and sanitizers for input at the system boundary.

Applied before persistence or calculation: serializers call them in
validate_<field>, models in clean(). Every function either returns the
normalized value or raises django.core.exceptions.ValidationError
with a Dutch message for the end user.

Principles:
- Deterministic: no I/O, no state
- Fail Fast: invalid input raises immediately
- Normalize once: callers store the returned value
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from django.core.exceptions import ValidationError

from core.utils.numbers import to_decimal

POSTCODE_RE = re.compile(r"^[1-9][0-9]{3}\s?[A-Za-z]{2}$")
TELEFOON_RE = re.compile(r"^(\+31|0)[1-9][0-9]{8}$")
EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
KVK_RE = re.compile(r"^[0-9]{8}$")
BTW_RE = re.compile(r"^NL[0-9]{9}B[0-9]{2}$")
IBAN_RE = re.compile(r"^NL[0-9]{2}[A-Z]{4}[0-9]{10}$")
HUISNUMMER_RE = re.compile(r"^[1-9][0-9]{0,4}[a-zA-Z]?$")


def sanitize_optional_string(value: Optional[str]) -> Optional[str]:
    """
    Converts an empty or whitespace-only optional string to None.

    Example:
        >>> sanitize_optional_string("   ")
        >>> sanitize_optional_string("  Tuin achter  ")
        'Tuin achter'
    """
    if value is None:
        return None
    stripped = str(value).strip()
    return stripped or None


def validate_positive(value: Any, field_name: str) -> Decimal:
    """
    Checks that a numeric value is greater than zero.

    Returns:
        The value as Decimal

    Raises:
        ValidationError: value is missing, not numeric or <= 0
    """
    number = _to_number(value, field_name)
    if number <= 0:
        raise ValidationError(
            f"{field_name} moet groter dan 0 zijn", code="not_positive"
        )
    return number


def validate_non_negative(value: Any, field_name: str) -> Decimal:
    """
    Checks that a numeric value is zero or greater.

    Returns:
        The value as Decimal

    Raises:
        ValidationError: value is missing, not numeric or < 0
    """
    number = _to_number(value, field_name)
    if number < 0:
        raise ValidationError(
            f"{field_name} mag niet negatief zijn", code="negative"
        )
    return number


def _to_number(value: Any, field_name: str) -> Decimal:
    try:
        number = to_decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationError(f"{field_name}: voer een getal in", code="invalid")
    if not number.is_finite():
        raise ValidationError(f"{field_name}: voer een getal in", code="invalid")
    return number


def normalize_postcode(value: str) -> str:
    """
    Validates a Dutch postcode and formats it as "1234 AB".

    Example:
        >>> normalize_postcode("1234ab")
        '1234 AB'

    Raises:
        ValidationError: "12AB" and other values that do not match the pattern
    """
    candidate = (value or "").strip()
    if not POSTCODE_RE.match(candidate):
        raise ValidationError(
            "Ongeldige postcode (formaat: 1234 AB)", code="invalid_postcode"
        )
    compact = candidate.replace(" ", "").upper()
    return f"{compact[:4]} {compact[4:]}"


def validate_postcode(value: str) -> None:
    normalize_postcode(value)


def normalize_telefoon(value: str) -> str:
    """Strips spaces and dashes, then validates a Dutch phone number."""
    candidate = re.sub(r"[\s\-]", "", value or "")
    if not TELEFOON_RE.match(candidate):
        raise ValidationError(
            "Ongeldig telefoonnummer (bijv. 0612345678 of +31612345678)",
            code="invalid_telefoon",
        )
    return candidate


def validate_telefoon(value: str) -> None:
    normalize_telefoon(value)


def validate_email(value: str) -> None:
    if not EMAIL_RE.match((value or "").strip()):
        raise ValidationError("Ongeldig e-mailadres", code="invalid_email")


def validate_kvk(value: str) -> None:
    if not KVK_RE.match((value or "").strip()):
        raise ValidationError(
            "Ongeldig KvK-nummer (8 cijfers)", code="invalid_kvk"
        )


def normalize_btw_nummer(value: str) -> str:
    candidate = re.sub(r"[\s.]", "", value or "").upper()
    if not BTW_RE.match(candidate):
        raise ValidationError(
            "Ongeldig btw-nummer (formaat: NL123456789B01)", code="invalid_btw"
        )
    return candidate


def validate_btw_nummer(value: str) -> None:
    normalize_btw_nummer(value)


def normalize_iban(value: str) -> str:
    """
    Removes spaces, uppercases and validates a Dutch IBAN.

    Example:
        >>> normalize_iban("nl91 abna 0417 1643 00")
        'NL91ABNA0417164300'
    """
    candidate = re.sub(r"\s", "", value or "").upper()
    if not IBAN_RE.match(candidate):
        raise ValidationError(
            "Ongeldig IBAN (formaat: NL00BANK0123456789)", code="invalid_iban"
        )
    return candidate


def validate_iban(value: str) -> None:
    normalize_iban(value)


def format_iban(value: str) -> str:
    """Formats an IBAN in groups of four: "NL91 ABNA 0417 1643 00"."""
    compact = normalize_iban(value)
    return " ".join(compact[i : i + 4] for i in range(0, len(compact), 4))


def validate_huisnummer(value: str) -> None:
    if not HUISNUMMER_RE.match((value or "").strip()):
        raise ValidationError(
            "Ongeldig huisnummer (bijv. 12 of 12a)", code="invalid_huisnummer"
        )
