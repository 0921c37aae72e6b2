from decimal import Decimal

import pytest

from app_calculations.models import CorrectieFactor, NormUur
from app_calculations.resolver import ReferenceData, ReferenceDataResolver


class TestReferenceData:
    def setup_method(self):
        self.data = ReferenceData.from_records(
            normuren=[("grondwerk", "Ontgraven standaard", "0.25")],
            overrides=[("bereikbaarheid", "beperkt", "1.1")],
            defaults=[
                ("bereikbaarheid", "beperkt", "1.2"),
                ("bereikbaarheid", "slecht", "1.5"),
            ],
        )

    def test_override_wins_over_default(self):
        assert self.data.get_correction_factor("bereikbaarheid", "beperkt") == Decimal("1.1")

    def test_default_without_override(self):
        assert self.data.get_correction_factor("bereikbaarheid", "slecht") == Decimal("1.5")

    def test_neutral_when_unknown(self):
        assert self.data.get_correction_factor("bereikbaarheid", "onbekend") == Decimal("1.0")
        assert self.data.get_correction_factor("snoei", None) == Decimal("1.0")

    def test_norm_uur(self):
        assert self.data.get_norm_uur("grondwerk", "Ontgraven standaard") == Decimal("0.25")

    def test_missing_norm_uur_is_zero(self):
        assert self.data.get_norm_uur("grondwerk", "Ontgraven zwaar") == Decimal("0")

    def test_snapshot_is_read_only(self):
        with pytest.raises(TypeError):
            self.data.normuren[("gras", "Gras zaaien")] = Decimal("1")


@pytest.mark.django_db
class TestReferenceDataResolver:
    @pytest.fixture(autouse=True)
    def reference(self, company, other_company):
        CorrectieFactor.objects.create(
            company=None, type="bereikbaarheid", waarde="beperkt", factor=Decimal("1.2")
        )
        CorrectieFactor.objects.create(
            company=company, type="bereikbaarheid", waarde="beperkt", factor=Decimal("1.35")
        )
        NormUur.objects.create(
            company=company,
            scope="bestrating",
            activiteit="Tegels leggen",
            normuur_per_eenheid=Decimal("0.35"),
            eenheid="m²",
        )
        self.resolver = ReferenceDataResolver()

    def test_company_override(self, company):
        factor = self.resolver.get_correction_factor(company, "bereikbaarheid", "beperkt")
        assert factor == Decimal("1.35")

    def test_other_company_gets_system_default(self, other_company):
        factor = self.resolver.get_correction_factor(other_company, "bereikbaarheid", "beperkt")
        assert factor == Decimal("1.2")

    def test_no_record_is_neutral(self, company):
        assert self.resolver.get_correction_factor(company, "snoei", "beide") == Decimal("1.0")

    def test_norm_uur_per_company(self, company, other_company):
        assert self.resolver.get_norm_uur(company, "bestrating", "Tegels leggen") == Decimal(
            "0.35"
        )
        assert self.resolver.get_norm_uur(
            other_company, "bestrating", "Tegels leggen"
        ) == Decimal("0")

    def test_load_matches_direct_lookups(self, company, other_company):
        snapshot = self.resolver.load(company)
        assert snapshot.get_correction_factor("bereikbaarheid", "beperkt") == Decimal("1.35")
        assert snapshot.get_norm_uur("bestrating", "Tegels leggen") == Decimal("0.35")

        other = self.resolver.load(other_company)
        assert other.get_correction_factor("bereikbaarheid", "beperkt") == Decimal("1.2")
        assert other.normuren == {}

    def test_load_without_company_has_defaults_only(self):
        snapshot = self.resolver.load(None)
        assert snapshot.get_correction_factor("bereikbaarheid", "beperkt") == Decimal("1.2")
        assert snapshot.normuren == {}
