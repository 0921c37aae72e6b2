"""
Planned hours and duration of a project.

Pure functions: the input are offerte regels, the output plain values.
Persisting the result is done by VoorcalculatieService.
"""

from decimal import Decimal
from typing import Any, Dict, Iterable, NamedTuple

from django.core.exceptions import ValidationError

from app_calculations.calculators import OfferteRegel
from app_calculations.constants import RegelType
from app_calculations.validators import validate_non_negative, validate_positive
from core.utils.numbers import ZERO, ceil_int, round_decimal_value, to_decimal

TEAM_GROOTTES = (2, 3, 4)
DEFAULT_EFFECTIEVE_UREN_PER_DAG = Decimal("7")
DEFAULT_BUFFER_PERCENTAGE = Decimal("10")


class NormUrenResult(NamedTuple):
    norm_uren_per_scope: Dict[str, Decimal]
    norm_uren_totaal: Decimal


class ProjectDuration(NamedTuple):
    geschatte_dagen: int
    effectieve_uren_per_dag: Decimal
    team_grootte: int
    norm_uren_totaal: Decimal
    team_capaciteit_per_dag: Decimal


class ProjectDurationWithBuffer(NamedTuple):
    geschatte_dagen: int
    effectieve_uren_per_dag: Decimal
    team_grootte: int
    norm_uren_totaal: Decimal
    team_capaciteit_per_dag: Decimal
    geschatte_dagen_met_buffer: int


def _as_regel(regel: Any) -> OfferteRegel:
    if isinstance(regel, OfferteRegel):
        return regel
    return OfferteRegel.from_dict(regel)


def calculate_norm_uren(regels: Iterable[Any]) -> NormUrenResult:
    """
    Planned hours per scope from the labour lines of an offerte.

    Only arbeid lines priced per hour count; machine hours and fixed-price
    lines are not work of the team.

    Args:
        regels: OfferteRegel objects or their stored dict form

    Returns:
        NormUrenResult with per-scope hours rounded to 2 decimals

    Example:
        >>> calculate_norm_uren(offerte.regels).norm_uren_totaal
        Decimal('15.00')
    """
    per_scope: Dict[str, Decimal] = {}
    for regel in map(_as_regel, regels):
        if regel.type != RegelType.ARBEID or regel.eenheid != "uur":
            continue
        per_scope[regel.scope] = per_scope.get(regel.scope, ZERO) + regel.hoeveelheid

    per_scope = {scope: round_decimal_value(uren, 2) for scope, uren in per_scope.items()}
    totaal = round_decimal_value(sum(per_scope.values(), ZERO), 2)
    return NormUrenResult(norm_uren_per_scope=per_scope, norm_uren_totaal=totaal)


def validate_team_grootte(team_grootte: Any) -> int:
    if team_grootte not in TEAM_GROOTTES:
        raise ValidationError(
            f"Teamgrootte moet 2, 3 of 4 zijn, niet {team_grootte!r}",
            code="invalid_team",
        )
    return int(team_grootte)


def calculate_project_duration(
    norm_uren_totaal: Any,
    team_grootte: int,
    effectieve_uren_per_dag: Any = DEFAULT_EFFECTIEVE_UREN_PER_DAG,
) -> ProjectDuration:
    """
    Estimated working days for a team.

    geschatte_dagen = ceil(norm_uren_totaal / (team_grootte * uren_per_dag))

    Raises:
        ValidationError: team size not 2-4, hours per day <= 0 or negative hours

    Example:
        >>> calculate_project_duration(Decimal("30"), 2).geschatte_dagen
        3
    """
    team_grootte = validate_team_grootte(team_grootte)
    uren_per_dag = validate_positive(effectieve_uren_per_dag, "Effectieve uren per dag")
    totaal = validate_non_negative(norm_uren_totaal, "Normuren totaal")

    capaciteit = team_grootte * uren_per_dag
    return ProjectDuration(
        geschatte_dagen=ceil_int(totaal / capaciteit),
        effectieve_uren_per_dag=uren_per_dag,
        team_grootte=team_grootte,
        norm_uren_totaal=totaal,
        team_capaciteit_per_dag=capaciteit,
    )


def calculate_project_duration_with_buffer(
    norm_uren_totaal: Any,
    team_grootte: int,
    effectieve_uren_per_dag: Any = DEFAULT_EFFECTIEVE_UREN_PER_DAG,
    buffer_percentage: Any = DEFAULT_BUFFER_PERCENTAGE,
) -> ProjectDurationWithBuffer:
    """Duration plus a buffer for weather and the unforeseen, rounded up to whole days."""
    duration = calculate_project_duration(norm_uren_totaal, team_grootte, effectieve_uren_per_dag)
    buffer = validate_non_negative(buffer_percentage, "Buffer percentage")
    met_buffer = ceil_int(
        Decimal(duration.geschatte_dagen) * (1 + to_decimal(buffer) / Decimal("100"))
    )
    return ProjectDurationWithBuffer(*duration, geschatte_dagen_met_buffer=met_buffer)
