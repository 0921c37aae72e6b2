"""
Resolution of norm-hours and correction factors for a company.

Precedence for a correction factor:
1. the company override
2. the system default (company = NULL)
3. the neutral factor 1.0

A norm-hour exists per company only; a missing one resolves to 0.

ReferenceData is an immutable snapshot, the only thing calculators read.
ReferenceDataResolver builds that snapshot from the database and offers
the same lookups directly against the database.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple

from app_calculations.constants import NEUTRAL_FACTOR, NO_NORM_HOURS
from app_calculations.repositories import CorrectieFactorRepository, NormUurRepository
from core.utils.numbers import to_decimal

logger = logging.getLogger(__name__)

NormKey = Tuple[str, str]
FactorKey = Tuple[str, str]


def _freeze(mapping: dict) -> Mapping:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class ReferenceData:
    """
    Snapshot of the reference data of one company.

    Attributes:
        normuren: {(scope, activiteit): norm-hours per unit}
        overrides: {(type, waarde): factor} of the company
        defaults: {(type, waarde): factor} of the system

    Example:
        >>> data = ReferenceData.from_records(
        ...     normuren=[("grondwerk", "Ontgraven standaard", "0.25")],
        ...     defaults=[("bereikbaarheid", "beperkt", "1.2")],
        ... )
        >>> data.get_correction_factor("bereikbaarheid", "beperkt")
        Decimal('1.2')
        >>> data.get_correction_factor("bereikbaarheid", "onbekend")
        Decimal('1.0')
    """

    normuren: Mapping[NormKey, Decimal] = field(default_factory=lambda: _freeze({}))
    overrides: Mapping[FactorKey, Decimal] = field(default_factory=lambda: _freeze({}))
    defaults: Mapping[FactorKey, Decimal] = field(default_factory=lambda: _freeze({}))

    @classmethod
    def from_records(
        cls,
        normuren: Iterable[tuple] = (),
        overrides: Iterable[tuple] = (),
        defaults: Iterable[tuple] = (),
    ) -> "ReferenceData":
        """
        Builds a snapshot from (key, key, value) tuples.

        Args:
            normuren: (scope, activiteit, normuur_per_eenheid)
            overrides: (type, waarde, factor) of the company
            defaults: (type, waarde, factor) of the system
        """
        return cls(
            normuren=_freeze({(s, a): to_decimal(v) for s, a, v in normuren}),
            overrides=_freeze({(str(t), str(w)): to_decimal(f) for t, w, f in overrides}),
            defaults=_freeze({(str(t), str(w)): to_decimal(f) for t, w, f in defaults}),
        )

    def get_norm_uur(self, scope: str, activiteit: str) -> Decimal:
        value = self.normuren.get((scope, activiteit))
        if value is None:
            logger.debug("Geen normuur voor %s/%s, 0 gebruikt", scope, activiteit)
            return NO_NORM_HOURS
        return value

    def get_correction_factor(self, factor_type: str, waarde: Optional[str]) -> Decimal:
        if waarde is None:
            return NEUTRAL_FACTOR
        key = (str(factor_type), str(waarde))
        if key in self.overrides:
            return self.overrides[key]
        if key in self.defaults:
            return self.defaults[key]
        logger.debug("Geen correctiefactor voor %s/%s, 1.0 gebruikt", factor_type, waarde)
        return NEUTRAL_FACTOR


class ReferenceDataResolver:
    """
    Reads norm-hours and correction factors from the database.

    Dependency Injection: repositories can be passed in for tests.
    """

    def __init__(
        self,
        normuur_repo: NormUurRepository = None,
        factor_repo: CorrectieFactorRepository = None,
    ):
        self.normuur_repo = normuur_repo or NormUurRepository()
        self.factor_repo = factor_repo or CorrectieFactorRepository()

    def load(self, company) -> ReferenceData:
        """
        Loads the snapshot for a company: one query per table.

        Args:
            company: Tenant, or None for system defaults only
        """
        normuren = ()
        overrides = ()
        if company is not None:
            normuren = self.normuur_repo.for_company(company).values_list(
                "scope", "activiteit", "normuur_per_eenheid"
            )
            overrides = self.factor_repo.overrides_for(company).values_list(
                "type", "waarde", "factor"
            )
        defaults = self.factor_repo.system_defaults().values_list("type", "waarde", "factor")

        return ReferenceData.from_records(
            normuren=list(normuren),
            overrides=list(overrides),
            defaults=list(defaults),
        )

    def get_norm_uur(self, company, scope: str, activiteit: str) -> Decimal:
        normuur = self.normuur_repo.find(company, scope, activiteit)
        if normuur is None:
            logger.debug("Geen normuur voor %s/%s bij %s", scope, activiteit, company)
            return NO_NORM_HOURS
        return normuur.normuur_per_eenheid

    def get_correction_factor(self, company, factor_type: str, waarde: str) -> Decimal:
        if company is not None:
            override = self.factor_repo.get_override(company, factor_type, waarde)
            if override is not None:
                return override.factor

        default = self.factor_repo.get_system_default(factor_type, waarde)
        if default is not None:
            return default.factor

        logger.debug("Geen correctiefactor voor %s/%s, 1.0 gebruikt", factor_type, waarde)
        return NEUTRAL_FACTOR
