from decimal import Decimal

import pytest

from app_projects.nacalculatie import (
    calculate_nacalculatie,
    calculate_scope_afwijkingen,
    format_deviation,
    format_hours_as_days,
    generate_insights,
    get_deviation_status,
    get_scope_display_name,
)


def registratie(datum, uren, scope="", medewerker="Jan"):
    return {"datum": datum, "medewerker": medewerker, "uren": uren, "scope": scope}


@pytest.mark.parametrize(
    "percentage, expected",
    [
        (Decimal("0"), "good"),
        (Decimal("5"), "good"),
        (Decimal("-5"), "good"),
        (Decimal("5.1"), "warning"),
        (Decimal("15"), "warning"),
        (Decimal("-12.5"), "warning"),
        (Decimal("15.1"), "critical"),
        (Decimal("-40"), "critical"),
    ],
)
def test_deviation_status(percentage, expected):
    assert get_deviation_status(percentage) == expected


class TestScopeAfwijkingen:
    def test_union_of_planned_and_actual(self):
        afwijkingen = calculate_scope_afwijkingen({"A": 10, "B": 5}, {"B": 20, "C": 3})
        by_scope = {entry.scope: entry for entry in afwijkingen}

        assert by_scope["A"].afwijking_uren == Decimal("-10.00")
        assert by_scope["A"].afwijking_percentage == Decimal("-100.0")
        assert by_scope["B"].afwijking_uren == Decimal("15.00")
        assert by_scope["B"].afwijking_percentage == Decimal("300.0")
        assert by_scope["C"].afwijking_uren == Decimal("3.00")
        assert by_scope["C"].afwijking_percentage == Decimal("100.0")

    def test_sorted_by_absolute_percentage(self):
        afwijkingen = calculate_scope_afwijkingen({"A": 10, "B": 5}, {"B": 20, "C": 3})
        assert [entry.scope for entry in afwijkingen] == ["B", "A", "C"]

    def test_nothing_planned_nothing_done(self):
        entry = calculate_scope_afwijkingen({"A": 0}, {})[0]
        assert entry.afwijking_percentage == Decimal("0.0")
        assert entry.status == "good"


class TestCalculateNacalculatie:
    VOORCALCULATIE = {
        "norm_uren_totaal": Decimal("15"),
        "geschatte_dagen": 1,
        "norm_uren_per_scope": {"A": "10", "B": "5"},
    }

    def test_totals(self):
        result = calculate_nacalculatie(
            self.VOORCALCULATIE,
            [
                registratie("2026-05-01", Decimal("20"), "B"),
                registratie("2026-05-02", Decimal("3"), "C", medewerker="Piet"),
            ],
        )

        assert result.werkelijke_uren == Decimal("23")
        assert result.werkelijke_dagen == 2
        assert result.afwijking_uren == Decimal("8.00")
        assert result.afwijking_percentage == Decimal("53.3")
        assert result.afwijking_dagen == 1
        assert result.status == "critical"
        assert result.aantal_registraties == 2
        assert result.aantal_medewerkers == 2
        assert result.afwijkingen_per_scope_map == {
            "B": Decimal("15.00"),
            "A": Decimal("-10.00"),
            "C": Decimal("3.00"),
        }

    def test_insights_for_scope_deviations(self):
        result = calculate_nacalculatie(
            self.VOORCALCULATIE,
            [
                registratie("2026-05-01", Decimal("20"), "B"),
                registratie("2026-05-02", Decimal("3"), "C"),
            ],
        )

        assert [(i.type, i.title) for i in result.insights] == [
            ("critical", "Significante overschrijding"),
            ("critical", "Aandachtspunten per scope"),
            ("warning", "B: Onderschatting"),
            ("warning", "C: Onderschatting"),
            ("info", "A: Overschatting"),
        ]
        assert result.insights[2].scope == "B"
        assert result.insights[2].description == "20 uur nodig vs 5 uur gepland (+300%)"

    def test_planned_machine_costs_from_offerte_lines(self):
        result = calculate_nacalculatie(
            self.VOORCALCULATIE,
            [registratie("2026-05-01", Decimal("15"))],
            machine_gebruik=[{"kosten": Decimal("150")}],
            offerte_regels=[
                {"type": "machine", "totaal": "100.00"},
                {"type": "arbeid", "totaal": "675.00"},
            ],
        )

        assert result.geplande_machine_kosten == Decimal("100.00")
        assert result.afwijking_machine_kosten_percentage == Decimal("50.0")
        titles = [i.title for i in result.insights]
        assert titles[0] == "Uitstekende planning"
        assert "Hogere machinekosten" in titles

    def test_registrations_without_scope_count_in_total_only(self):
        result = calculate_nacalculatie(
            {"norm_uren_totaal": 10, "geschatte_dagen": 1, "norm_uren_per_scope": {}},
            [registratie("2026-05-01", Decimal("10"))],
        )

        assert result.werkelijke_uren == Decimal("10")
        assert result.werkelijke_uren_per_scope == {}
        assert result.afwijkingen_per_scope == []

    def test_without_planned_hours(self):
        result = calculate_nacalculatie(
            {"norm_uren_totaal": 0, "geschatte_dagen": 0}, [registratie("2026-05-01", 4)]
        )
        assert result.afwijking_percentage == Decimal("0.0")
        assert result.status == "good"

    def test_to_dict(self):
        result = calculate_nacalculatie(
            self.VOORCALCULATIE, [registratie("2026-05-01", Decimal("20"), "B")]
        )
        data = result.to_dict()

        assert data["afwijking_uren"] == "5.00"
        assert data["afwijkingen_per_scope"][0]["scope"] == "B"
        assert data["afwijkingen_per_scope"][0]["afwijking_percentage"] == "300.0"
        assert data["insights"][0]["type"] == "critical"


class TestInsights:
    def _insights(self, percentage="0", dagen=0, machine="0"):
        return generate_insights(
            afwijking_percentage=Decimal(percentage),
            afwijking_dagen=dagen,
            afwijking_machine_kosten_percentage=Decimal(machine),
            afwijkingen_per_scope=[],
        )

    def test_within_five_percent(self):
        insight = self._insights("-4.5")[0]
        assert insight.type == "success"
        assert insight.description == "De werkelijke uren wijken slechts 4.5% af van de planning."

    def test_warning_band_has_no_total_insight(self):
        assert self._insights("10") == []

    def test_under_budget(self):
        assert self._insights("-20")[0].title == "Onder budget"

    def test_days(self):
        assert self._insights(dagen=3)[-1].title == "Meer dagen nodig"
        assert self._insights(dagen=-3)[-1].title == "Sneller afgerond"
        assert len(self._insights(dagen=2)) == 1

    def test_lower_machine_costs(self):
        insight = self._insights(machine="-25")[-1]
        assert (insight.type, insight.title) == ("info", "Lagere machinekosten")


def test_format_hours_as_days():
    assert format_hours_as_days(Decimal("19.5")) == "2 dagen, 3.5 uur"
    assert format_hours_as_days(8) == "1 dag"
    assert format_hours_as_days(3) == "3 uur"


def test_format_deviation():
    assert format_deviation(Decimal("12.5")) == "+12.5%"
    assert format_deviation(Decimal("-3")) == "-3%"
    assert format_deviation(0) == "0%"


def test_scope_display_name():
    assert get_scope_display_name("water_elektra") == "Water/Elektra"
    assert get_scope_display_name("grondwerk") == "Grondwerk"
