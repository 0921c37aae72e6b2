from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError

from app_projects.voorcalculatie import (
    calculate_norm_uren,
    calculate_project_duration,
    calculate_project_duration_with_buffer,
)


def stored_regel(scope, regel_type, hoeveelheid, eenheid="uur", totaal="0.00"):
    return {
        "id": f"{scope}-{regel_type}-{hoeveelheid}",
        "scope": scope,
        "omschrijving": "regel",
        "eenheid": eenheid,
        "hoeveelheid": hoeveelheid,
        "prijs_per_eenheid": "45",
        "totaal": totaal,
        "type": regel_type,
        "marge_percentage": None,
    }


class TestNormUren:
    def test_only_hourly_labour_counts(self):
        result = calculate_norm_uren(
            [
                stored_regel("grondwerk", "arbeid", "15.00"),
                stored_regel("grondwerk", "machine", "1.25"),
                stored_regel("bestrating", "arbeid", "3.50"),
                stored_regel("bestrating", "arbeid", "1.25"),
                stored_regel("bestrating", "materiaal", "0.55", eenheid="m³"),
                stored_regel("algemeen", "arbeid", "1", eenheid="vast"),
            ]
        )

        assert result.norm_uren_per_scope == {
            "grondwerk": Decimal("15.00"),
            "bestrating": Decimal("4.75"),
        }
        assert result.norm_uren_totaal == Decimal("19.75")

    def test_no_lines(self):
        result = calculate_norm_uren([])
        assert result.norm_uren_per_scope == {}
        assert result.norm_uren_totaal == Decimal("0.00")


class TestDuration:
    @pytest.mark.parametrize(
        "uren, team, expected",
        [
            (Decimal("30"), 2, 3),
            (Decimal("28"), 2, 2),
            (Decimal("28.25"), 2, 3),
            (Decimal("15"), 3, 1),
            (Decimal("0"), 4, 0),
        ],
    )
    def test_rounds_up_to_whole_days(self, uren, team, expected):
        assert calculate_project_duration(uren, team).geschatte_dagen == expected

    def test_capacity(self):
        duration = calculate_project_duration(Decimal("40"), 4, Decimal("6.5"))
        assert duration.team_capaciteit_per_dag == Decimal("26.0")
        assert duration.geschatte_dagen == 2

    @pytest.mark.parametrize("team", [1, 5, "2"])
    def test_team_size(self, team):
        with pytest.raises(ValidationError) as exc:
            calculate_project_duration(Decimal("10"), team)
        assert exc.value.code == "invalid_team"

    def test_hours_per_day_must_be_positive(self):
        with pytest.raises(ValidationError):
            calculate_project_duration(Decimal("10"), 2, 0)

    def test_buffer(self):
        duration = calculate_project_duration_with_buffer(Decimal("30"), 2)
        assert duration.geschatte_dagen == 3
        assert duration.geschatte_dagen_met_buffer == 4

    def test_zero_buffer(self):
        duration = calculate_project_duration_with_buffer(Decimal("28"), 2, buffer_percentage=0)
        assert duration.geschatte_dagen_met_buffer == 2
