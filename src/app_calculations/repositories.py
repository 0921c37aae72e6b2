"""
Repositories for calculation reference data.

Responsibility:
- Access to NormUur, CorrectieFactor and BedrijfsInstellingen
- One query per table when a company snapshot is loaded
- Atomic upserts of company overrides

Principles:
- Single Responsibility: data access only
- No business rules: precedence between override and default lives in the resolver
"""

import logging
from decimal import Decimal
from typing import Iterable, List, Optional

from django.db import transaction
from django.db.models import QuerySet

from app_calculations.exceptions import NormUurNotFoundError
from app_calculations.models import BedrijfsInstellingen, CorrectieFactor, NormUur
from core.base_repository import BaseRepository

logger = logging.getLogger(__name__)


class NormUurRepository(BaseRepository[NormUur]):
    model = NormUur

    def for_company(self, company, scope: Optional[str] = None) -> QuerySet[NormUur]:
        """
        Norm-hours of a company, optionally limited to one scope.

        Args:
            company: Tenant
            scope: scope key, e.g. "grondwerk"

        Returns:
            QuerySet ordered by scope and activiteit
        """
        filters = {"company": company}
        if scope:
            filters["scope"] = scope
        return self.get_queryset(filters=filters, order_by=["scope", "activiteit"])

    def get_for_company_or_raise(self, company, normuur_id: int) -> NormUur:
        """
        Raises:
            NormUurNotFoundError: no such record for this company
        """
        normuur = self.model.objects.filter(company=company, pk=normuur_id).first()
        if normuur is None:
            raise NormUurNotFoundError(normuur_id)
        return normuur

    def find(self, company, scope: str, activiteit: str) -> Optional[NormUur]:
        return self.model.objects.filter(
            company=company, scope=scope, activiteit=activiteit
        ).first()

    def existing_keys(self, company) -> set:
        """(scope, activiteit) pairs the company already has."""
        return set(
            self.model.objects.filter(company=company).values_list("scope", "activiteit")
        )


class CorrectieFactorRepository(BaseRepository[CorrectieFactor]):
    model = CorrectieFactor

    def system_defaults(self, factor_type: Optional[str] = None) -> QuerySet[CorrectieFactor]:
        filters = {"company__isnull": True}
        if factor_type:
            filters["type"] = factor_type
        return self.get_queryset(filters=filters, order_by=["type", "waarde"])

    def overrides_for(
        self, company, factor_type: Optional[str] = None
    ) -> QuerySet[CorrectieFactor]:
        filters = {"company": company}
        if factor_type:
            filters["type"] = factor_type
        return self.get_queryset(filters=filters, order_by=["type", "waarde"])

    def get_override(self, company, factor_type: str, waarde: str) -> Optional[CorrectieFactor]:
        return self.model.objects.filter(
            company=company, type=factor_type, waarde=waarde
        ).first()

    def get_system_default(self, factor_type: str, waarde: str) -> Optional[CorrectieFactor]:
        return self.model.objects.filter(
            company__isnull=True, type=factor_type, waarde=waarde
        ).first()

    def upsert_override(
        self, company, factor_type: str, waarde: str, factor: Decimal
    ) -> tuple[CorrectieFactor, bool]:
        """
        Creates or updates the override of a company.

        Returns:
            (record, created)
        """
        with transaction.atomic():
            record, created = self.model.objects.update_or_create(
                company=company,
                type=factor_type,
                waarde=waarde,
                defaults={"factor": factor},
            )
        logger.info(
            "Correctiefactor %s/%s voor %s %s: %s",
            factor_type,
            waarde,
            company,
            "aangemaakt" if created else "bijgewerkt",
            factor,
        )
        return record, created

    def delete_override(self, company, factor_type: str, waarde: str) -> bool:
        deleted, _ = self.model.objects.filter(
            company=company, type=factor_type, waarde=waarde
        ).delete()
        return deleted > 0

    def ensure_system_defaults(self, rows: Iterable[tuple]) -> int:
        """
        Creates the missing system defaults; existing rows are left untouched.

        Args:
            rows: (type, waarde, factor) tuples

        Returns:
            Number of rows created
        """
        existing = set(
            self.model.objects.filter(company__isnull=True).values_list("type", "waarde")
        )
        to_create: List[CorrectieFactor] = [
            self.model(company=None, type=factor_type, waarde=waarde, factor=factor)
            for factor_type, waarde, factor in rows
            if (factor_type, waarde) not in existing
        ]
        if to_create:
            with transaction.atomic():
                self.bulk_create(to_create)
        return len(to_create)


class InstellingenRepository(BaseRepository[BedrijfsInstellingen]):
    model = BedrijfsInstellingen

    def get_for_company(self, company) -> Optional[BedrijfsInstellingen]:
        return self.model.objects.filter(company=company).first()

    def get_or_default(self, company) -> BedrijfsInstellingen:
        """
        Settings of the company, or an unsaved instance with the model
        defaults when the company has not configured anything yet.
        """
        instellingen = self.get_for_company(company)
        if instellingen is None:
            logger.debug("Geen bedrijfsinstellingen voor %s, standaardwaarden gebruikt", company)
            instellingen = self.model(company=company, naam=getattr(company, "name", ""))
        return instellingen
