from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError

from app_calculations.models import BedrijfsInstellingen
from app_calculations.validators import (
    format_iban,
    normalize_btw_nummer,
    normalize_iban,
    normalize_postcode,
    normalize_telefoon,
    sanitize_optional_string,
    validate_email,
    validate_huisnummer,
    validate_kvk,
    validate_non_negative,
    validate_positive,
    validate_postcode,
    validate_telefoon,
)


class TestPostcode:
    @pytest.mark.parametrize("value", ["1234ab", "1234 ab", " 1234AB "])
    def test_normalized(self, value):
        assert normalize_postcode(value) == "1234 AB"

    @pytest.mark.parametrize("value", ["12AB", "0123 AB", "1234 A", "", None])
    def test_rejected(self, value):
        with pytest.raises(ValidationError) as exc:
            normalize_postcode(value)
        assert exc.value.code == "invalid_postcode"

    def test_validate_only(self):
        assert validate_postcode("1234 AB") is None
        with pytest.raises(ValidationError):
            validate_postcode("1234")


class TestTelefoon:
    def test_strips_spaces_and_dashes(self):
        assert normalize_telefoon("06-1234 5678") == "0612345678"

    def test_international(self):
        assert normalize_telefoon("+31612345678") == "+31612345678"

    def test_rejected(self):
        with pytest.raises(ValidationError):
            normalize_telefoon("12345")
        with pytest.raises(ValidationError):
            validate_telefoon("06 123")


class TestCompanyNumbers:
    def test_iban(self):
        assert normalize_iban("nl91 abna 0417 1643 00") == "NL91ABNA0417164300"
        assert format_iban("NL91ABNA0417164300") == "NL91 ABNA 0417 1643 00"

    def test_btw(self):
        assert normalize_btw_nummer("nl123456789b01") == "NL123456789B01"
        with pytest.raises(ValidationError):
            normalize_btw_nummer("NL12345")

    def test_kvk(self):
        validate_kvk("12345678")
        with pytest.raises(ValidationError):
            validate_kvk("1234567")

    def test_email(self):
        validate_email("info@groen.nl")
        with pytest.raises(ValidationError):
            validate_email("info@groen")

    def test_huisnummer(self):
        validate_huisnummer("12a")
        with pytest.raises(ValidationError):
            validate_huisnummer("0")


class TestNumbers:
    def test_positive_returns_decimal(self):
        assert validate_positive("2,5", "Oppervlakte") == Decimal("2.5")

    def test_zero_is_not_positive(self):
        with pytest.raises(ValidationError) as exc:
            validate_positive(0, "Oppervlakte")
        assert exc.value.messages == ["Oppervlakte moet groter dan 0 zijn"]

    def test_not_a_number(self):
        with pytest.raises(ValidationError) as exc:
            validate_positive("veel", "Oppervlakte")
        assert exc.value.code == "invalid"

    def test_non_negative(self):
        assert validate_non_negative(0, "Uren") == Decimal("0")
        with pytest.raises(ValidationError):
            validate_non_negative(-1, "Uren")


def test_sanitize_optional_string():
    assert sanitize_optional_string("   ") is None
    assert sanitize_optional_string("  Tuin achter  ") == "Tuin achter"
    assert sanitize_optional_string(None) is None


class TestBedrijfsInstellingenClean:
    def test_normalizes_company_details(self):
        instellingen = BedrijfsInstellingen(
            naam="Groen BV",
            postcode="1234ab",
            telefoon="06 12345678",
            iban="nl91 abna 0417 1643 00",
            kvk="  ",
        )
        instellingen.clean()

        assert instellingen.postcode == "1234 AB"
        assert instellingen.telefoon == "0612345678"
        assert instellingen.iban == "NL91ABNA0417164300"
        assert instellingen.kvk is None

    def test_collects_errors_per_field(self):
        instellingen = BedrijfsInstellingen(
            naam="Groen BV", postcode="12AB", email="geen-mail", uurtarief=Decimal("-1")
        )
        with pytest.raises(ValidationError) as exc:
            instellingen.clean()

        assert set(exc.value.message_dict) == {"postcode", "email", "uurtarief"}
