"""
Service layer for offerte calculation and reference data.

Responsibility:
- Assemble the calculation context of a company (reference data, settings)
- Run the scope calculators and the aggregator
- Maintain norm-hours and correction factor overrides

Principles:
- Single Responsibility: each service covers its own area
- Dependency Injection: repositories are passed through the constructor
- Pure core: calculators and aggregators never touch the database
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, NamedTuple, Optional

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from app_calculations.aggregators import OfferteTotals, ScopeAggregator, TotalsAggregator
from app_calculations.calculators import (
    CalculationContext,
    OfferteRegel,
    calculate_offerte_regels,
    garantie_pakket_regel,
    offerte_overhead_regel,
)
from app_calculations.constants import FactorType
from app_calculations.defaults import DEFAULT_CORRECTIEFACTOREN, DEFAULT_NORMUREN
from app_calculations.exceptions import (
    CorrectieFactorNotFoundError,
    DuplicateNormUurError,
)
from app_calculations.models import CorrectieFactor, NormUur
from app_calculations.repositories import (
    CorrectieFactorRepository,
    InstellingenRepository,
    NormUurRepository,
)
from app_calculations.resolver import ReferenceDataResolver
from app_calculations.validators import (
    sanitize_optional_string,
    validate_non_negative,
    validate_positive,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OfferteCalculation:
    """Result of a full offerte calculation."""

    regels: List[OfferteRegel]
    totals: OfferteTotals
    per_scope: List[Dict] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "regels": [regel.to_dict() for regel in self.regels],
            "totals": self.totals.to_dict(),
            "per_scope": [
                {key: str(value) if isinstance(value, Decimal) else value for key, value in entry.items()}
                for entry in self.per_scope
            ],
        }


class CorrectieFactorEntry(NamedTuple):
    """One line of the merged factor list of a company."""

    type: str
    waarde: str
    factor: Decimal
    systeem_factor: Optional[Decimal]
    is_override: bool


class OfferteCalculationService:
    """
    Facade for calculating an offerte.

    Loads the reference data snapshot and the company settings once,
    then runs everything else in memory.
    """

    def __init__(
        self,
        resolver: ReferenceDataResolver = None,
        instellingen_repo: InstellingenRepository = None,
    ):
        self.resolver = resolver or ReferenceDataResolver()
        self.instellingen_repo = instellingen_repo or InstellingenRepository()

    def build_context(
        self,
        company,
        bereikbaarheid: str = "goed",
        achterstalligheid: Optional[str] = None,
        materiaal_prijzen: Optional[Mapping] = None,
    ) -> CalculationContext:
        """
        Args:
            company: Tenant
            bereikbaarheid: site access
            achterstalligheid: maintenance backlog, None for new build
            materiaal_prijzen: replaces the default material catalogue

        Returns:
            CalculationContext for the calculators
        """
        instellingen = self.instellingen_repo.get_or_default(company)
        kwargs = {}
        if materiaal_prijzen is not None:
            kwargs["materiaal_prijzen"] = materiaal_prijzen

        return CalculationContext(
            reference=self.resolver.load(company),
            uurtarief=instellingen.uurtarief,
            bereikbaarheid=bereikbaarheid,
            achterstalligheid=achterstalligheid,
            **kwargs,
        )

    def calculate(
        self,
        company,
        offerte_type: str,
        scopes: Iterable[str],
        scope_data: Mapping[str, Mapping[str, Any]],
        bereikbaarheid: str = "goed",
        achterstalligheid: Optional[str] = None,
        include_overhead: bool = False,
        garantie_pakket: Optional[Mapping[str, Any]] = None,
    ) -> OfferteCalculation:
        """
        Calculates lines and totals of an offerte.

        Algorithm:
        1. Build the context (one query per reference table)
        2. Run the calculator of every selected scope
        3. Add the optional overhead and warranty lines
        4. Aggregate with the company margins and VAT

        Raises:
            UnknownScopeError: scope without calculator
            InvalidScopeDataError: scope data that cannot be calculated
        """
        context = self.build_context(company, bereikbaarheid, achterstalligheid)
        regels = calculate_offerte_regels(offerte_type, list(scopes), scope_data, context)

        if include_overhead:
            regels.append(offerte_overhead_regel())
        if garantie_pakket:
            regels.append(
                garantie_pakket_regel(garantie_pakket["naam"], garantie_pakket["prijs"])
            )

        totals = self.calculate_totals(company, regels)
        logger.info(
            "Offerte berekend voor %s: %s regels, totaal incl. btw %s",
            company,
            len(regels),
            totals.totaal_incl_btw,
        )
        return OfferteCalculation(
            regels=regels,
            totals=totals,
            per_scope=ScopeAggregator.aggregate_by_scope(regels),
        )

    def calculate_totals(
        self,
        company,
        regels: Iterable[OfferteRegel],
        marge_percentage: Any = None,
        btw_percentage: Any = None,
        scope_marges: Optional[Mapping[str, Any]] = None,
    ) -> OfferteTotals:
        """
        Aggregates lines; missing percentages come from the company settings.
        """
        instellingen = self.instellingen_repo.get_or_default(company)
        return TotalsAggregator.calculate(
            list(regels),
            standaard_marge_percentage=(
                instellingen.standaard_marge_percentage
                if marge_percentage is None
                else marge_percentage
            ),
            btw_percentage=(
                instellingen.btw_percentage if btw_percentage is None else btw_percentage
            ),
            scope_marges=(
                instellingen.scope_marges if scope_marges is None else scope_marges
            ),
        )


class ReferenceDataService:
    """
    Maintenance of norm-hours and correction factors.

    Company overrides sit next to the system defaults; deleting an
    override makes the default apply again.
    """

    def __init__(
        self,
        normuur_repo: NormUurRepository = None,
        factor_repo: CorrectieFactorRepository = None,
    ):
        self.normuur_repo = normuur_repo or NormUurRepository()
        self.factor_repo = factor_repo or CorrectieFactorRepository()

    # ---- Correctiefactoren ----

    def list_correctiefactoren(
        self, company, factor_type: Optional[str] = None
    ) -> List[CorrectieFactorEntry]:
        """
        Merged view: per system default the company value if it has one.

        Factors the company added without a system default are listed too.

        Returns:
            Entries sorted by type and waarde
        """
        defaults = {
            (f.type, f.waarde): f.factor
            for f in self.factor_repo.system_defaults(factor_type)
        }
        overrides = {
            (f.type, f.waarde): f.factor
            for f in self.factor_repo.overrides_for(company, factor_type)
        }

        entries = [
            CorrectieFactorEntry(
                type=key[0],
                waarde=key[1],
                factor=overrides.get(key, defaults.get(key)),
                systeem_factor=defaults.get(key),
                is_override=key in overrides,
            )
            for key in set(defaults) | set(overrides)
        ]
        return sorted(entries, key=lambda e: (e.type, e.waarde))

    def get_correctiefactoren_by_type(
        self, company, factor_type: str
    ) -> List[CorrectieFactorEntry]:
        return self.list_correctiefactoren(company, factor_type=factor_type)

    def upsert_correctiefactor(
        self, company, factor_type: str, waarde: str, factor: Any
    ) -> CorrectieFactor:
        """
        Creates or updates the override of a company.

        Raises:
            ValidationError: unknown type, empty waarde or factor <= 0
        """
        if factor_type not in FactorType.values:
            raise ValidationError(f"Onbekend factortype '{factor_type}'", code="invalid_type")
        waarde = sanitize_optional_string(waarde)
        if waarde is None:
            raise ValidationError("Waarde is verplicht", code="required")
        factor = validate_positive(factor, "Factor")

        record, _ = self.factor_repo.upsert_override(company, factor_type, waarde, factor)
        return record

    def reset_correctiefactor(self, company, factor_type: str, waarde: str) -> bool:
        """
        Deletes the override so the system default applies again.

        Returns:
            True if an override was deleted
        """
        deleted = self.factor_repo.delete_override(company, factor_type, waarde)
        if deleted:
            logger.info("Correctiefactor %s/%s van %s teruggezet", factor_type, waarde, company)
        return deleted

    def reset_correctiefactor_or_raise(self, company, factor_type: str, waarde: str) -> None:
        """
        Raises:
            CorrectieFactorNotFoundError: the company has no override
        """
        if not self.reset_correctiefactor(company, factor_type, waarde):
            raise CorrectieFactorNotFoundError(factor_type, waarde)

    def initialize_system_defaults(self) -> int:
        """Creates the missing system factors. Returns the number created."""
        created = self.factor_repo.ensure_system_defaults(DEFAULT_CORRECTIEFACTOREN)
        logger.info("Systeem-correctiefactoren: %s aangemaakt", created)
        return created

    # ---- Normuren ----

    def create_default_normuren(self, company) -> int:
        """
        Creates the default norm-hours the company does not have yet.

        Returns:
            Number of rows created
        """
        existing = self.normuur_repo.existing_keys(company)
        to_create = [
            NormUur(
                company=company,
                scope=default.scope,
                activiteit=default.activiteit,
                normuur_per_eenheid=default.normuur_per_eenheid,
                eenheid=default.eenheid,
            )
            for default in DEFAULT_NORMUREN
            if (default.scope, default.activiteit) not in existing
        ]
        if to_create:
            with transaction.atomic():
                self.normuur_repo.bulk_create(to_create)
        logger.info("Standaard normuren voor %s: %s aangemaakt", company, len(to_create))
        return len(to_create)

    def list_normuren(self, company, scope: Optional[str] = None):
        return self.normuur_repo.for_company(company, scope)

    def create_normuur(
        self,
        company,
        scope: str,
        activiteit: str,
        normuur_per_eenheid: Any,
        eenheid: str,
        omschrijving: str = "",
    ) -> NormUur:
        """
        Raises:
            DuplicateNormUurError: activiteit already exists in the scope
            ValidationError: negative norm-hour
        """
        normuur_per_eenheid = validate_non_negative(normuur_per_eenheid, "Normuur")
        if self.normuur_repo.find(company, scope, activiteit):
            raise DuplicateNormUurError(scope, activiteit)
        try:
            with transaction.atomic():
                return self.normuur_repo.create(
                    company=company,
                    scope=scope,
                    activiteit=activiteit,
                    normuur_per_eenheid=normuur_per_eenheid,
                    eenheid=eenheid,
                    omschrijving=omschrijving or "",
                )
        except IntegrityError as e:
            raise DuplicateNormUurError(scope, activiteit) from e

    def update_normuur(self, company, normuur_id: int, **fields) -> NormUur:
        """
        Updates the given fields of a norm-hour of the company.

        Raises:
            NormUurNotFoundError: no such norm-hour for the company
            DuplicateNormUurError: the new scope/activiteit already exists
        """
        normuur = self.normuur_repo.get_for_company_or_raise(company, normuur_id)

        if "normuur_per_eenheid" in fields:
            fields["normuur_per_eenheid"] = validate_non_negative(
                fields["normuur_per_eenheid"], "Normuur"
            )

        scope = fields.get("scope", normuur.scope)
        activiteit = fields.get("activiteit", normuur.activiteit)
        duplicate = self.normuur_repo.find(company, scope, activiteit)
        if duplicate is not None and duplicate.pk != normuur.pk:
            raise DuplicateNormUurError(scope, activiteit)

        for name, value in fields.items():
            setattr(normuur, name, value)
        normuur.save()
        return normuur

    def delete_normuur(self, company, normuur_id: int) -> None:
        """
        Raises:
            NormUurNotFoundError: no such norm-hour for the company
        """
        normuur = self.normuur_repo.get_for_company_or_raise(company, normuur_id)
        normuur.delete()
        logger.info("Normuur %s van %s verwijderd", normuur_id, company)
