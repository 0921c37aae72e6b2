"""
Building blocks shared by all scope calculators.

Responsibility:
- OfferteRegel: one priced line of an offerte
- CalculationContext: everything a calculator may read
- RegelBuilder: creates lines with the rounding rules applied

Principles:
- Immutability: lines and context are frozen
- Determinism: the same input gives byte-identical lines, ids included
- No ORM access: calculators read the ReferenceData snapshot only
"""

from dataclasses import asdict, dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional

from django.core.exceptions import ValidationError
from django.utils.text import slugify

from app_calculations.constants import (
    MACHINE_TARIEF,
    NEUTRAL_FACTOR,
    FactorType,
    RegelType,
)
from app_calculations.defaults import MATERIAAL_CATALOGUS, MateriaalPrijs
from app_calculations.exceptions import InvalidScopeDataError
from app_calculations.resolver import ReferenceData
from app_calculations.validators import validate_non_negative, validate_positive
from core.utils.numbers import (
    ZERO,
    round_decimal_value,
    round_money,
    round_to_quarter,
    to_decimal,
)


@dataclass(frozen=True)
class OfferteRegel:
    """One line item of an offerte."""

    id: str
    scope: str
    omschrijving: str
    eenheid: str
    hoeveelheid: Decimal
    prijs_per_eenheid: Decimal
    totaal: Decimal
    type: str
    marge_percentage: Optional[Decimal] = None

    def to_dict(self) -> Dict[str, Any]:
        """
        JSON-ready representation; Decimals become strings.

        Example:
            >>> regel.to_dict()["totaal"]
            '675.00'
        """
        data = asdict(self)
        for key, value in data.items():
            if isinstance(value, Decimal):
                data[key] = str(value)
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OfferteRegel":
        """Restores a line from to_dict() output or a stored JSON snapshot."""
        marge = data.get("marge_percentage")
        return cls(
            id=str(data["id"]),
            scope=str(data["scope"]),
            omschrijving=str(data["omschrijving"]),
            eenheid=str(data["eenheid"]),
            hoeveelheid=to_decimal(data["hoeveelheid"]),
            prijs_per_eenheid=to_decimal(data["prijs_per_eenheid"]),
            totaal=to_decimal(data["totaal"]),
            type=str(data["type"]),
            marge_percentage=None if marge is None else to_decimal(marge),
        )


@dataclass(frozen=True)
class CalculationContext:
    """
    Input shared by every scope of one calculation.

    Attributes:
        reference: norm-hours and correction factors of the company
        uurtarief: labour rate per hour
        bereikbaarheid: site access (goed | beperkt | slecht)
        achterstalligheid: maintenance backlog, None for new build
        materiaal_prijzen: material catalogue, overridable per calculation
    """

    reference: ReferenceData
    uurtarief: Decimal
    bereikbaarheid: str = "goed"
    achterstalligheid: Optional[str] = None
    materiaal_prijzen: Mapping[str, MateriaalPrijs] = field(
        default_factory=lambda: dict(MATERIAAL_CATALOGUS)
    )

    def norm(
        self, scope: str, activiteit: str, default: Optional[Decimal] = None
    ) -> Decimal:
        """Norm-hours per unit; `default` replaces a norm the company lacks."""
        if default is not None and (scope, activiteit) not in self.reference.normuren:
            return default
        return self.reference.get_norm_uur(scope, activiteit)

    def factor(self, factor_type: str, waarde: Optional[str]) -> Decimal:
        return self.reference.get_correction_factor(factor_type, waarde)

    @property
    def bereik_factor(self) -> Decimal:
        return self.factor(FactorType.BEREIKBAARHEID, self.bereikbaarheid)

    @property
    def achterstallig_factor(self) -> Decimal:
        if not self.achterstalligheid:
            return NEUTRAL_FACTOR
        return self.factor(FactorType.ACHTERSTALLIGHEID, self.achterstalligheid)

    def materiaal(self, key: str) -> MateriaalPrijs:
        return self.materiaal_prijzen[key]


class RegelBuilder:
    """
    Collects the lines of one scope.

    Line ids are "{scope}-{slug of omschrijving}"; a repeated slug gets
    a position suffix ("-2", "-3").

    Example:
        >>> builder = RegelBuilder("grondwerk", context)
        >>> builder.arbeid("Ontgraven (standaard)", Decimal("15"))
        >>> builder.build()[0].id
        'grondwerk-ontgraven-standaard'
    """

    def __init__(self, scope: str, context: Optional[CalculationContext]):
        self.scope = scope
        self.context = context
        self._regels: List[OfferteRegel] = []
        self._slugs: Dict[str, int] = {}

    def _next_id(self, omschrijving: str) -> str:
        slug = slugify(omschrijving) or "regel"
        count = self._slugs.get(slug, 0) + 1
        self._slugs[slug] = count
        suffix = f"-{count}" if count > 1 else ""
        return f"{self.scope}-{slug}{suffix}"

    def _add(
        self,
        omschrijving: str,
        eenheid: str,
        hoeveelheid: Decimal,
        prijs: Decimal,
        regel_type: str,
        marge_percentage: Optional[Decimal] = None,
    ) -> OfferteRegel:
        regel = OfferteRegel(
            id=self._next_id(omschrijving),
            scope=self.scope,
            omschrijving=omschrijving,
            eenheid=eenheid,
            hoeveelheid=hoeveelheid,
            prijs_per_eenheid=prijs,
            totaal=round_money(hoeveelheid * prijs),
            type=str(regel_type),
            marge_percentage=(
                None if marge_percentage is None else to_decimal(marge_percentage)
            ),
        )
        self._regels.append(regel)
        return regel

    def arbeid(
        self, omschrijving: str, uren: Decimal, marge_percentage: Optional[Decimal] = None
    ) -> OfferteRegel:
        """Labour line: hours rounded to a quarter, priced at the uurtarief."""
        return self._add(
            omschrijving,
            "uur",
            round_to_quarter(uren),
            to_decimal(self.context.uurtarief),
            RegelType.ARBEID,
            marge_percentage,
        )

    def machine(
        self, omschrijving: str, uren: Decimal, marge_percentage: Optional[Decimal] = None
    ) -> OfferteRegel:
        return self._add(
            omschrijving,
            "uur",
            round_to_quarter(uren),
            MACHINE_TARIEF,
            RegelType.MACHINE,
            marge_percentage,
        )

    def tarief(
        self,
        omschrijving: str,
        hoeveelheid: Decimal,
        eenheid: str,
        prijs: Decimal,
        regel_type: str = RegelType.ARBEID,
        marge_percentage: Optional[Decimal] = None,
    ) -> OfferteRegel:
        """
        Line at a fixed price per unit (equipment per day, inspection per
        tree). The quantity is taken as given.

        Example:
            >>> builder.tarief("Hoogwerker huur (2 dagen)", 2, "dag", 185, RegelType.MACHINE)
        """
        return self._add(
            omschrijving,
            eenheid,
            to_decimal(hoeveelheid),
            to_decimal(prijs),
            regel_type,
            marge_percentage,
        )

    def materiaal(
        self,
        omschrijving: str,
        hoeveelheid: Decimal,
        eenheid: str,
        prijs: Decimal,
        verliespercentage: Decimal = ZERO,
        marge_percentage: Optional[Decimal] = None,
    ) -> OfferteRegel:
        """
        Material line. The loss percentage is added to the quantity, the
        total is computed from the rounded quantity.
        """
        met_verlies = to_decimal(hoeveelheid) * (
            1 + to_decimal(verliespercentage) / Decimal("100")
        )
        return self._add(
            omschrijving,
            eenheid,
            round_decimal_value(met_verlies, 2),
            to_decimal(prijs),
            RegelType.MATERIAAL,
            marge_percentage,
        )

    def catalogus(self, key: str, hoeveelheid: Decimal) -> OfferteRegel:
        product = self.context.materiaal(key)
        return self.materiaal(
            product.omschrijving,
            hoeveelheid,
            product.eenheid,
            product.prijs,
            product.verliespercentage,
        )

    def build(self) -> List[OfferteRegel]:
        return list(self._regels)


def required_positive(data: Mapping[str, Any], key: str, scope: str) -> Decimal:
    """
    Reads a mandatory dimension from scope data.

    Raises:
        InvalidScopeDataError: missing, not numeric or <= 0
    """
    try:
        return validate_positive(data.get(key), key)
    except ValidationError as e:
        raise InvalidScopeDataError(scope, e.messages[0]) from e


def optional_non_negative(data: Mapping[str, Any], key: str, scope: str) -> Decimal:
    """Reads an optional quantity; missing or empty counts as 0."""
    value = data.get(key)
    if value in (None, ""):
        return ZERO
    try:
        return validate_non_negative(value, key)
    except ValidationError as e:
        raise InvalidScopeDataError(scope, e.messages[0]) from e


def choice(data: Mapping[str, Any], key: str, options, default: str, scope: str) -> str:
    """
    Reads an enumerated value; missing falls back to the default.

    Raises:
        InvalidScopeDataError: the value is not one of the options
    """
    value = data.get(key) or default
    if value not in options:
        raise InvalidScopeDataError(
            scope, f"{key} '{value}' is ongeldig, kies uit: {', '.join(options)}"
        )
    return value
