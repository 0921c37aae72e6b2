from datetime import date
from decimal import Decimal
from io import StringIO

import pytest
from django.core.exceptions import ValidationError
from django.core.management import CommandError, call_command

from app_calculations.defaults import DEFAULT_CORRECTIEFACTOREN, DEFAULT_NORMUREN
from app_calculations.exceptions import (
    CorrectieFactorNotFoundError,
    DuplicateNormUurError,
    NormUurNotFoundError,
)
from app_calculations.models import BedrijfsInstellingen, CorrectieFactor, NormUur
from app_calculations.services import OfferteCalculationService, ReferenceDataService
from app_projects.exceptions import (
    InvalidProjectError,
    NacalculatieNotFoundError,
    VoorcalculatieNotFoundError,
)
from app_projects.models import Project, UrenRegistratie
from app_projects.services import NacalculatieService, VoorcalculatieService
from app_tenants.models import Tenant

pytestmark = pytest.mark.django_db

GRONDWERK_25 = {"grondwerk": {"oppervlakte": "25", "diepte": "standaard"}}


def calculate_grondwerk(company, **kwargs):
    return OfferteCalculationService().calculate(
        company=company,
        offerte_type="aanleg",
        scopes=["grondwerk"],
        scope_data=GRONDWERK_25,
        bereikbaarheid="beperkt",
        **kwargs,
    )


class TestOfferteCalculationService:
    def test_company_reference_data_and_default_settings(self, grondwerk_reference):
        result = calculate_grondwerk(grondwerk_reference)

        assert [r.totaal for r in result.regels] == [Decimal("675.00"), Decimal("93.75")]
        totals = result.totals
        assert totals.subtotaal == Decimal("768.75")
        assert totals.marge == Decimal("115.31")
        assert totals.totaal_ex_btw == Decimal("884.06")
        assert totals.btw == Decimal("185.65")
        assert totals.totaal_incl_btw == Decimal("1069.71")
        assert totals.totaal_uren == Decimal("15.00")

    def test_same_input_same_result(self, grondwerk_reference):
        assert (
            calculate_grondwerk(grondwerk_reference).to_dict()
            == calculate_grondwerk(grondwerk_reference).to_dict()
        )

    def test_company_settings(self, grondwerk_reference):
        BedrijfsInstellingen.objects.create(
            company=grondwerk_reference,
            naam="Groen BV",
            uurtarief=Decimal("50"),
            scope_marges={"grondwerk": 20},
        )
        result = calculate_grondwerk(grondwerk_reference)

        assert result.regels[0].totaal == Decimal("750.00")
        assert result.totals.marge == Decimal("168.75")

    def test_overhead_and_warranty(self, grondwerk_reference):
        result = calculate_grondwerk(
            grondwerk_reference,
            include_overhead=True,
            garantie_pakket={"naam": "Basis", "prijs": Decimal("150")},
        )

        assert [r.scope for r in result.regels][-2:] == ["algemeen", "garantie"]
        assert result.totals.totaal_uren == Decimal("15.00")
        assert result.totals.subtotaal == Decimal("1118.75")

    def test_other_company_does_not_see_norms(self, grondwerk_reference, other_company):
        result = calculate_grondwerk(other_company)
        assert result.regels[0].hoeveelheid == Decimal("0.00")

    def test_per_scope(self, grondwerk_reference):
        per_scope = calculate_grondwerk(grondwerk_reference).to_dict()["per_scope"]
        assert per_scope == [
            {
                "scope": "grondwerk",
                "label": "Grondwerk",
                "materiaal": "0",
                "arbeid": "675.00",
                "machine": "93.75",
                "uren": "15.00",
                "totaal": "768.75",
            }
        ]

    def test_totals_with_explicit_percentages(self, grondwerk_reference):
        regels = calculate_grondwerk(grondwerk_reference).regels
        totals = OfferteCalculationService().calculate_totals(
            grondwerk_reference, regels, marge_percentage=0, btw_percentage=9
        )

        assert totals.marge == Decimal("0.00")
        assert totals.btw == Decimal("69.19")


class TestReferenceDataService:
    def test_initialize_system_defaults_once(self):
        service = ReferenceDataService()

        assert service.initialize_system_defaults() == len(DEFAULT_CORRECTIEFACTOREN)
        assert service.initialize_system_defaults() == 0
        assert CorrectieFactor.objects.filter(company__isnull=True).count() == len(
            DEFAULT_CORRECTIEFACTOREN
        )

    def test_default_normuren_per_company(self, company, other_company):
        service = ReferenceDataService()

        assert service.create_default_normuren(company) == len(DEFAULT_NORMUREN)
        assert service.create_default_normuren(company) == 0
        assert NormUur.objects.filter(company=other_company).count() == 0

    def test_override_and_reset(self, company):
        service = ReferenceDataService()
        service.initialize_system_defaults()

        service.upsert_correctiefactor(company, "bereikbaarheid", "beperkt", "1.4")
        entry = next(
            e
            for e in service.get_correctiefactoren_by_type(company, "bereikbaarheid")
            if e.waarde == "beperkt"
        )
        assert entry.factor == Decimal("1.4")
        assert entry.systeem_factor == Decimal("1.2")
        assert entry.is_override is True

        service.upsert_correctiefactor(company, "bereikbaarheid", "beperkt", "1.3")
        assert CorrectieFactor.objects.filter(company=company).count() == 1

        assert service.reset_correctiefactor(company, "bereikbaarheid", "beperkt") is True
        entry = next(
            e
            for e in service.list_correctiefactoren(company, "bereikbaarheid")
            if e.waarde == "beperkt"
        )
        assert entry.factor == Decimal("1.2")
        assert entry.is_override is False

        with pytest.raises(CorrectieFactorNotFoundError):
            service.reset_correctiefactor_or_raise(company, "bereikbaarheid", "beperkt")

    def test_company_only_factor_is_listed(self, company):
        service = ReferenceDataService()
        service.upsert_correctiefactor(company, "hoogteverschil", "extreem", "1.8")

        (entry,) = service.list_correctiefactoren(company, "hoogteverschil")
        assert entry.systeem_factor is None
        assert entry.is_override is True

    @pytest.mark.parametrize(
        "factor_type, waarde, factor",
        [
            ("onbekend", "x", "1.0"),
            ("bereikbaarheid", "  ", "1.0"),
            ("bereikbaarheid", "beperkt", "0"),
        ],
    )
    def test_invalid_override(self, company, factor_type, waarde, factor):
        with pytest.raises(ValidationError):
            ReferenceDataService().upsert_correctiefactor(company, factor_type, waarde, factor)

    def test_normuur_crud(self, company, other_company):
        service = ReferenceDataService()
        normuur = service.create_normuur(company, "gras", "Gras zaaien", "0.05", "m²")

        with pytest.raises(DuplicateNormUurError):
            service.create_normuur(company, "gras", "Gras zaaien", "0.06", "m²")

        updated = service.update_normuur(company, normuur.pk, normuur_per_eenheid="0.07")
        assert updated.normuur_per_eenheid == Decimal("0.07")

        with pytest.raises(NormUurNotFoundError):
            service.update_normuur(other_company, normuur.pk, normuur_per_eenheid="0.1")

        service.delete_normuur(company, normuur.pk)
        assert list(service.list_normuren(company)) == []

        with pytest.raises(NormUurNotFoundError):
            service.delete_normuur(company, normuur.pk)

    def test_rename_onto_existing_activity(self, company):
        service = ReferenceDataService()
        service.create_normuur(company, "gras", "Gras zaaien", "0.05", "m²")
        other = service.create_normuur(company, "gras", "Graszoden leggen", "0.12", "m²")

        with pytest.raises(DuplicateNormUurError):
            service.update_normuur(company, other.pk, activiteit="Gras zaaien")

    def test_negative_normuur(self, company):
        with pytest.raises(ValidationError):
            ReferenceDataService().create_normuur(company, "gras", "Maaien", "-1", "m²")


class TestSeedCommand:
    def test_seeds_every_company_except_public(self, company, other_company):
        public = Tenant.objects.create(schema_name="public", name="Platform")
        out = StringIO()

        call_command("seed_calculation_defaults", stdout=out)

        assert NormUur.objects.filter(company=company).count() == len(DEFAULT_NORMUREN)
        assert NormUur.objects.filter(company=other_company).count() == len(DEFAULT_NORMUREN)
        assert NormUur.objects.filter(company=public).count() == 0
        assert "Seeding finished" in out.getvalue()

    def test_single_company(self, company, other_company):
        call_command("seed_calculation_defaults", company="groen_bv", stdout=StringIO())

        assert NormUur.objects.filter(company=company).exists()
        assert not NormUur.objects.filter(company=other_company).exists()

    def test_rerun_changes_nothing(self, company):
        call_command("seed_calculation_defaults", stdout=StringIO())
        NormUur.objects.filter(company=company, activiteit="Maaien").update(
            normuur_per_eenheid=Decimal("0.03")
        )

        call_command("seed_calculation_defaults", stdout=StringIO())

        assert NormUur.objects.get(company=company, activiteit="Maaien").normuur_per_eenheid == Decimal(
            "0.03"
        )

    def test_unknown_company(self):
        with pytest.raises(CommandError):
            call_command("seed_calculation_defaults", company="bestaat_niet", stdout=StringIO())


class TestOfferteService:
    def test_recalculate_stores_snapshot(self, offerte):
        offerte.refresh_from_db()

        assert offerte.regels[0]["id"] == "grondwerk-ontgraven-standaard"
        assert offerte.regels[0]["totaal"] == "675.00"
        assert offerte.totaal_uren == Decimal("15.00")
        assert offerte.totaal_incl_btw == Decimal("1069.71")


class TestVoorcalculatieService:
    def test_create_for_project(self, project):
        service = VoorcalculatieService()
        voorcalculatie = service.create_for_project(service.get_project(project.pk), 2)

        assert voorcalculatie.norm_uren_totaal == Decimal("15.00")
        assert voorcalculatie.geschatte_dagen == 2
        assert voorcalculatie.norm_uren_per_scope == {"grondwerk": "15.00"}

    def test_replaces_existing(self, project):
        service = VoorcalculatieService()
        service.create_for_project(project, 2)
        voorcalculatie = service.create_for_project(project, 3, Decimal("8"))

        assert voorcalculatie.geschatte_dagen == 1
        assert voorcalculatie.team_grootte == 3

    def test_project_without_offerte(self, db):
        project = Project.objects.create(naam="Zonder offerte")
        with pytest.raises(InvalidProjectError):
            VoorcalculatieService().create_for_project(project, 2)


class TestNacalculatieService:
    @pytest.fixture
    def uitgevoerd(self, project):
        VoorcalculatieService().create_for_project(project, 2)
        UrenRegistratie.objects.create(
            project=project, datum=date(2026, 5, 4), medewerker="Jan", uren=Decimal("8"), scope="grondwerk"
        )
        UrenRegistratie.objects.create(
            project=project, datum=date(2026, 5, 5), medewerker="Jan", uren=Decimal("9"), scope="grondwerk"
        )
        project.status = Project.Status.AFGEROND
        project.save()
        return project

    def test_requires_voorcalculatie(self, project):
        with pytest.raises(VoorcalculatieNotFoundError):
            NacalculatieService().compute(project)

    def test_compute_does_not_save(self, uitgevoerd):
        result = NacalculatieService().compute(uitgevoerd)

        assert result.werkelijke_uren == Decimal("17.00")
        assert result.afwijking_percentage == Decimal("13.3")
        assert result.status == "warning"
        assert result.geplande_machine_kosten == Decimal("93.75")
        assert not hasattr(Project.objects.get(pk=uitgevoerd.pk), "nacalculatie")

    def test_save_moves_project_to_nagecalculeerd(self, uitgevoerd):
        nacalculatie, result = NacalculatieService().save(uitgevoerd, conclusies="Grond was zwaarder")

        uitgevoerd.refresh_from_db()
        assert uitgevoerd.status == Project.Status.NAGECALCULEERD
        assert nacalculatie.afwijking_uren == Decimal("2.00")
        assert nacalculatie.afwijkingen_per_scope == {"grondwerk": "2.00"}
        assert nacalculatie.conclusies == "Grond was zwaarder"

    def test_save_keeps_status_of_running_project(self, project):
        VoorcalculatieService().create_for_project(project, 2)
        NacalculatieService().save(project)

        project.refresh_from_db()
        assert project.status == Project.Status.GEPLAND

    def test_add_conclusie(self, uitgevoerd):
        service = NacalculatieService()

        with pytest.raises(NacalculatieNotFoundError):
            service.add_conclusie(uitgevoerd, "Te vroeg")

        service.save(uitgevoerd)
        service.add_conclusie(uitgevoerd, "Eerste")
        nacalculatie = service.add_conclusie(uitgevoerd, "  Tweede  ")
        assert nacalculatie.conclusies == "Eerste\n\nTweede"

        with pytest.raises(ValidationError):
            service.add_conclusie(uitgevoerd, "   ")
