"""
Nacalculatie: planned hours (voorcalculatie) against actual hours.

Responsibility:
- Totals and deviations for hours, days and machine costs
- Deviation per scope over the union of planned and actual scopes
- Insights for the planner (typed messages in Dutch)

Principles:
- Read-only: nothing is saved here, see NacalculatieService.save
- Duck typing: inputs may be model instances, dicts or named tuples
- Decimal throughout; hours rounded to 2 decimals, percentages to 1
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Iterable, List, NamedTuple, Optional

from app_calculations.constants import RegelType
from core.utils.numbers import ZERO, format_compact, round_decimal_value, to_decimal

STATUS_GOOD = "good"
STATUS_WARNING = "warning"
STATUS_CRITICAL = "critical"

INSIGHT_SUCCESS = "success"
INSIGHT_INFO = "info"
INSIGHT_WARNING = "warning"
INSIGHT_CRITICAL = "critical"

# Absolute deviation in percent, upper bound inclusive
DEVIATION_THRESHOLDS = {
    STATUS_GOOD: Decimal("5"),
    STATUS_WARNING: Decimal("15"),
}
MACHINE_KOSTEN_THRESHOLD = Decimal("20")
DAGEN_THRESHOLD = 2
MAX_SCOPE_INSIGHTS = 2

HUNDRED = Decimal("100")


class ScopeAfwijking(NamedTuple):
    scope: str
    geplande_uren: Decimal
    werkelijke_uren: Decimal
    afwijking_uren: Decimal
    afwijking_percentage: Decimal
    status: str


class Insight(NamedTuple):
    type: str
    title: str
    description: str
    scope: Optional[str] = None


@dataclass(frozen=True)
class NacalculatieResult:
    geplande_uren: Decimal
    werkelijke_uren: Decimal
    geplande_dagen: int
    werkelijke_dagen: int
    geplande_machine_kosten: Decimal
    werkelijke_machine_kosten: Decimal

    afwijking_uren: Decimal
    afwijking_percentage: Decimal
    afwijking_dagen: int
    afwijking_machine_kosten: Decimal
    afwijking_machine_kosten_percentage: Decimal

    status: str

    afwijkingen_per_scope: List[ScopeAfwijking] = field(default_factory=list)
    werkelijke_uren_per_scope: Dict[str, Decimal] = field(default_factory=dict)
    afwijkingen_per_scope_map: Dict[str, Decimal] = field(default_factory=dict)

    insights: List[Insight] = field(default_factory=list)

    aantal_registraties: int = 0
    aantal_medewerkers: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready representation; Decimals become strings."""

        def convert(value):
            if isinstance(value, Decimal):
                return str(value)
            if isinstance(value, tuple) and hasattr(value, "_asdict"):
                return convert(value._asdict())
            if isinstance(value, dict):
                return {key: convert(item) for key, item in value.items()}
            if isinstance(value, list):
                return [convert(item) for item in value]
            return value

        return {name: convert(getattr(self, name)) for name in self.__dataclass_fields__}


def _get(obj: Any, name: str, default: Any = None) -> Any:
    if isinstance(obj, dict):
        return obj.get(name, default)
    return getattr(obj, name, default)


def _percentage(afwijking: Decimal, gepland: Decimal) -> Decimal:
    if gepland > 0:
        return round_decimal_value(afwijking / gepland * HUNDRED, 1)
    return Decimal("0.0")


def get_deviation_status(percentage: Any) -> str:
    """
    Example:
        >>> get_deviation_status(Decimal("-12.5"))
        'warning'
    """
    absolute = abs(to_decimal(percentage))
    if absolute <= DEVIATION_THRESHOLDS[STATUS_GOOD]:
        return STATUS_GOOD
    if absolute <= DEVIATION_THRESHOLDS[STATUS_WARNING]:
        return STATUS_WARNING
    return STATUS_CRITICAL


def calculate_scope_afwijkingen(
    gepland_per_scope: Dict[str, Any],
    werkelijk_per_scope: Dict[str, Any],
) -> List[ScopeAfwijking]:
    """
    Deviation per scope over the union of planned and actual scopes.

    A scope missing on one side counts as 0 there. A scope that was not
    planned but has hours deviates 100%.

    Returns:
        Entries sorted by absolute percentage, largest first
    """
    scopes = list(gepland_per_scope)
    scopes += [scope for scope in werkelijk_per_scope if scope not in gepland_per_scope]

    afwijkingen = []
    for scope in scopes:
        gepland = to_decimal(gepland_per_scope.get(scope), ZERO)
        werkelijk = to_decimal(werkelijk_per_scope.get(scope), ZERO)
        afwijking = werkelijk - gepland

        if gepland > 0:
            percentage = _percentage(afwijking, gepland)
        elif werkelijk > 0:
            percentage = Decimal("100.0")
        else:
            percentage = Decimal("0.0")

        afwijkingen.append(
            ScopeAfwijking(
                scope=scope,
                geplande_uren=gepland,
                werkelijke_uren=werkelijk,
                afwijking_uren=round_decimal_value(afwijking, 2),
                afwijking_percentage=percentage,
                status=get_deviation_status(percentage),
            )
        )

    afwijkingen.sort(key=lambda entry: abs(entry.afwijking_percentage), reverse=True)
    return afwijkingen


def calculate_nacalculatie(
    voorcalculatie: Any,
    uren: Iterable[Any],
    machine_gebruik: Iterable[Any] = (),
    offerte_regels: Optional[Iterable[Any]] = None,
) -> NacalculatieResult:
    """
    Compares the voorcalculatie of a project with the registered actuals.

    Args:
        voorcalculatie: norm_uren_totaal, geschatte_dagen, norm_uren_per_scope
        uren: registrations with datum, medewerker, uren and optional scope
        machine_gebruik: registrations with kosten
        offerte_regels: lines of the offerte; machine lines are the planned
            machine costs

    Returns:
        NacalculatieResult

    Example:
        >>> result = calculate_nacalculatie(
        ...     {"norm_uren_totaal": 15, "geschatte_dagen": 1,
        ...      "norm_uren_per_scope": {"A": 10, "B": 5}},
        ...     [{"datum": "2026-05-01", "medewerker": "Jan", "uren": 20, "scope": "B"},
        ...      {"datum": "2026-05-02", "medewerker": "Piet", "uren": 3, "scope": "C"}],
        ... )
        >>> result.afwijkingen_per_scope_map
        {'A': Decimal('-10.00'), 'B': Decimal('15.00'), 'C': Decimal('3.00')}
    """
    uren = list(uren)
    machine_gebruik = list(machine_gebruik)

    werkelijke_uren = sum((to_decimal(_get(r, "uren"), ZERO) for r in uren), ZERO)
    werkelijke_dagen = len({_get(r, "datum") for r in uren})
    aantal_medewerkers = len({_get(r, "medewerker") for r in uren})

    werkelijke_machine_kosten = sum(
        (to_decimal(_get(m, "kosten"), ZERO) for m in machine_gebruik), ZERO
    )
    geplande_machine_kosten = sum(
        (
            to_decimal(_get(r, "totaal"), ZERO)
            for r in (offerte_regels or ())
            if _get(r, "type") == RegelType.MACHINE
        ),
        ZERO,
    )

    werkelijke_uren_per_scope: Dict[str, Decimal] = {}
    for registratie in uren:
        scope = _get(registratie, "scope")
        if scope:
            werkelijke_uren_per_scope[scope] = werkelijke_uren_per_scope.get(
                scope, ZERO
            ) + to_decimal(_get(registratie, "uren"), ZERO)

    afwijkingen_per_scope = calculate_scope_afwijkingen(
        _get(voorcalculatie, "norm_uren_per_scope") or {},
        werkelijke_uren_per_scope,
    )

    geplande_uren = to_decimal(_get(voorcalculatie, "norm_uren_totaal"), ZERO)
    geplande_dagen = int(_get(voorcalculatie, "geschatte_dagen") or 0)

    afwijking_uren = werkelijke_uren - geplande_uren
    afwijking_percentage = _percentage(afwijking_uren, geplande_uren)
    afwijking_dagen = werkelijke_dagen - geplande_dagen
    afwijking_machine_kosten = werkelijke_machine_kosten - geplande_machine_kosten
    afwijking_machine_kosten_percentage = _percentage(
        afwijking_machine_kosten, geplande_machine_kosten
    )

    insights = generate_insights(
        afwijking_percentage=afwijking_percentage,
        afwijking_dagen=afwijking_dagen,
        afwijking_machine_kosten_percentage=afwijking_machine_kosten_percentage,
        afwijkingen_per_scope=afwijkingen_per_scope,
    )

    return NacalculatieResult(
        geplande_uren=geplande_uren,
        werkelijke_uren=werkelijke_uren,
        geplande_dagen=geplande_dagen,
        werkelijke_dagen=werkelijke_dagen,
        geplande_machine_kosten=geplande_machine_kosten,
        werkelijke_machine_kosten=werkelijke_machine_kosten,
        afwijking_uren=round_decimal_value(afwijking_uren, 2),
        afwijking_percentage=afwijking_percentage,
        afwijking_dagen=afwijking_dagen,
        afwijking_machine_kosten=round_decimal_value(afwijking_machine_kosten, 2),
        afwijking_machine_kosten_percentage=afwijking_machine_kosten_percentage,
        status=get_deviation_status(afwijking_percentage),
        afwijkingen_per_scope=afwijkingen_per_scope,
        werkelijke_uren_per_scope=werkelijke_uren_per_scope,
        afwijkingen_per_scope_map={
            entry.scope: entry.afwijking_uren for entry in afwijkingen_per_scope
        },
        insights=insights,
        aantal_registraties=len(uren),
        aantal_medewerkers=aantal_medewerkers,
    )


def generate_insights(
    afwijking_percentage: Decimal,
    afwijking_dagen: int,
    afwijking_machine_kosten_percentage: Decimal,
    afwijkingen_per_scope: List[ScopeAfwijking],
) -> List[Insight]:
    insights: List[Insight] = []
    warning_threshold = DEVIATION_THRESHOLDS[STATUS_WARNING]

    if abs(afwijking_percentage) <= DEVIATION_THRESHOLDS[STATUS_GOOD]:
        insights.append(
            Insight(
                INSIGHT_SUCCESS,
                "Uitstekende planning",
                f"De werkelijke uren wijken slechts {format_compact(abs(afwijking_percentage))}% "
                "af van de planning.",
            )
        )
    elif afwijking_percentage > warning_threshold:
        insights.append(
            Insight(
                INSIGHT_CRITICAL,
                "Significante overschrijding",
                f"Er is {format_compact(afwijking_percentage)}% meer tijd besteed dan gepland. "
                "Controleer de normuren voor betrokken scopes.",
            )
        )
    elif afwijking_percentage < -warning_threshold:
        insights.append(
            Insight(
                INSIGHT_WARNING,
                "Onder budget",
                f"Er is {format_compact(abs(afwijking_percentage))}% minder tijd besteed dan "
                "gepland. Controleer of alle werk correct is geregistreerd.",
            )
        )

    if abs(afwijking_machine_kosten_percentage) > MACHINE_KOSTEN_THRESHOLD:
        hoger = afwijking_machine_kosten_percentage > 0
        insights.append(
            Insight(
                INSIGHT_WARNING if hoger else INSIGHT_INFO,
                "Hogere machinekosten" if hoger else "Lagere machinekosten",
                f"De machinekosten wijken "
                f"{format_compact(abs(afwijking_machine_kosten_percentage))}% af van de planning.",
            )
        )

    if afwijking_dagen > DAGEN_THRESHOLD:
        insights.append(
            Insight(
                INSIGHT_WARNING,
                "Meer dagen nodig",
                f"Het project duurde {afwijking_dagen} dagen langer dan gepland.",
            )
        )
    elif afwijking_dagen < -DAGEN_THRESHOLD:
        insights.append(
            Insight(
                INSIGHT_SUCCESS,
                "Sneller afgerond",
                f"Het project is {abs(afwijking_dagen)} dagen eerder afgerond dan gepland.",
            )
        )

    kritiek = [entry for entry in afwijkingen_per_scope if entry.status == STATUS_CRITICAL]
    if kritiek:
        namen = ", ".join(get_scope_display_name(entry.scope) for entry in kritiek)
        insights.append(
            Insight(
                INSIGHT_CRITICAL,
                "Aandachtspunten per scope",
                f"De volgende scopes hebben significante afwijkingen: {namen}. "
                "Overweeg normuur aanpassingen.",
            )
        )

    onderschat = [e for e in afwijkingen_per_scope if e.afwijking_percentage > warning_threshold]
    for entry in onderschat[:MAX_SCOPE_INSIGHTS]:
        insights.append(
            Insight(
                INSIGHT_WARNING,
                f"{get_scope_display_name(entry.scope)}: Onderschatting",
                f"{format_compact(entry.werkelijke_uren)} uur nodig vs "
                f"{format_compact(entry.geplande_uren)} uur gepland "
                f"({format_deviation(entry.afwijking_percentage)})",
                entry.scope,
            )
        )

    overschat = [e for e in afwijkingen_per_scope if e.afwijking_percentage < -warning_threshold]
    for entry in overschat[:MAX_SCOPE_INSIGHTS]:
        insights.append(
            Insight(
                INSIGHT_INFO,
                f"{get_scope_display_name(entry.scope)}: Overschatting",
                f"{format_compact(entry.werkelijke_uren)} uur nodig vs "
                f"{format_compact(entry.geplande_uren)} uur gepland "
                f"({format_deviation(entry.afwijking_percentage)})",
                entry.scope,
            )
        )

    return insights


def format_hours_as_days(hours: Any, hours_per_day: Any = 8) -> str:
    """
    Example:
        >>> format_hours_as_days(Decimal("19.5"))
        '2 dagen, 3.5 uur'
    """
    hours = to_decimal(hours)
    per_dag = to_decimal(hours_per_day)
    dagen = int(hours // per_dag)
    rest = round_decimal_value(hours % per_dag, 1)

    if dagen == 0:
        return f"{format_compact(rest)} uur"

    label = "dag" if dagen == 1 else "dagen"
    if rest == 0:
        return f"{dagen} {label}"
    return f"{dagen} {label}, {format_compact(rest)} uur"


def format_deviation(percentage: Any) -> str:
    """
    Example:
        >>> format_deviation(Decimal("12.5"))
        '+12.5%'
    """
    percentage = to_decimal(percentage)
    sign = "+" if percentage > 0 else ""
    return f"{sign}{format_compact(percentage)}%"


def get_scope_display_name(scope: str) -> str:
    """'water_elektra' -> 'Water/Elektra'"""
    return "/".join(part[:1].upper() + part[1:] for part in scope.split("_"))
