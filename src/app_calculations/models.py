"""
Reference data for the offerte calculation.

Purpose
-------
NormUur: hours of work per unit (m², m, m³, piece) for an activity
within a scope. Maintained per company by its administrators.

CorrectieFactor: a multiplier for one value of a circumstance
(bereikbaarheid "beperkt" = 1.2). A record without company is a system
default; a record with company overrides that default for the company.

BedrijfsInstellingen: labour rate, margins and VAT per company, plus the
company details printed on an offerte.
"""

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _

from app_calculations.constants import FactorType
from app_calculations.validators import (
    normalize_btw_nummer,
    normalize_iban,
    normalize_postcode,
    normalize_telefoon,
    sanitize_optional_string,
    validate_email,
    validate_kvk,
)


class NormUur(models.Model):
    company = models.ForeignKey(
        "app_tenants.Tenant",
        on_delete=models.CASCADE,
        related_name="normuren",
        verbose_name=_("Bedrijf"),
    )
    scope = models.CharField(
        max_length=50,
        db_index=True,
        verbose_name=_("Scope"),
        help_text=_("Bijvoorbeeld grondwerk, bestrating, heggen_onderhoud."),
    )
    activiteit = models.CharField(
        max_length=100,
        verbose_name=_("Activiteit"),
        help_text=_("Exacte naam waarop de calculatie zoekt, bijv. 'Ontgraven licht'."),
    )
    normuur_per_eenheid = models.DecimalField(
        max_digits=8,
        decimal_places=4,
        verbose_name=_("Normuur per eenheid"),
    )
    eenheid = models.CharField(max_length=20, verbose_name=_("Eenheid"))
    omschrijving = models.CharField(
        max_length=255, blank=True, default="", verbose_name=_("Omschrijving")
    )
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Normuur")
        verbose_name_plural = _("Normuren")
        ordering = ["scope", "activiteit", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["company", "scope", "activiteit"],
                name="uniq_normuur_company_scope_activiteit",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.scope}: {self.activiteit} ({self.normuur_per_eenheid})"

    def clean(self):
        super().clean()
        if self.normuur_per_eenheid is not None and self.normuur_per_eenheid < 0:
            raise ValidationError(
                {"normuur_per_eenheid": _("Normuur mag niet negatief zijn.")}
            )


class CorrectieFactor(models.Model):
    company = models.ForeignKey(
        "app_tenants.Tenant",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="correctiefactoren",
        verbose_name=_("Bedrijf"),
        help_text=_("Leeg laten voor een systeemstandaard."),
    )
    type = models.CharField(
        max_length=50,
        choices=FactorType.choices,
        db_index=True,
        verbose_name=_("Type"),
    )
    waarde = models.CharField(max_length=50, verbose_name=_("Waarde"))
    factor = models.DecimalField(
        max_digits=6,
        decimal_places=3,
        verbose_name=_("Factor"),
        help_text=_("Vermenigvuldiger; 1.0 is neutraal."),
    )
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Correctiefactor")
        verbose_name_plural = _("Correctiefactoren")
        ordering = ["type", "waarde", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["company", "type", "waarde"],
                name="uniq_correctiefactor_company_type_waarde",
            ),
            models.UniqueConstraint(
                fields=["type", "waarde"],
                condition=models.Q(company__isnull=True),
                name="uniq_correctiefactor_system_type_waarde",
            ),
        ]

    def __str__(self) -> str:
        owner = self.company or _("systeem")
        return f"{self.type}/{self.waarde} = {self.factor} ({owner})"

    @property
    def is_system_default(self) -> bool:
        return self.company_id is None

    def clean(self):
        super().clean()
        if self.factor is not None and self.factor <= 0:
            raise ValidationError(
                {"factor": _("Een correctiefactor moet groter dan 0 zijn.")}
            )


class BedrijfsInstellingen(models.Model):
    company = models.OneToOneField(
        "app_tenants.Tenant",
        on_delete=models.CASCADE,
        related_name="instellingen",
        verbose_name=_("Bedrijf"),
    )
    uurtarief = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        default=Decimal("45.00"),
        verbose_name=_("Uurtarief"),
    )
    standaard_marge_percentage = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal("15.00"),
        verbose_name=_("Standaard marge (%)"),
    )
    scope_marges = models.JSONField(
        default=dict,
        blank=True,
        verbose_name=_("Marge per scope (%)"),
        help_text=_('Bijvoorbeeld {"bestrating": 20}. Leeg = standaard marge.'),
    )
    btw_percentage = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal("21.00"),
        verbose_name=_("Btw (%)"),
    )

    # Bedrijfsgegevens
    naam = models.CharField(max_length=255, verbose_name=_("Bedrijfsnaam"))
    adres = models.CharField(max_length=255, blank=True, default="")
    postcode = models.CharField(max_length=7, blank=True, default="")
    plaats = models.CharField(max_length=100, blank=True, default="")
    kvk = models.CharField(max_length=8, null=True, blank=True, verbose_name=_("KvK"))
    btw_nummer = models.CharField(
        max_length=14, null=True, blank=True, verbose_name=_("Btw-nummer")
    )
    iban = models.CharField(max_length=18, null=True, blank=True, verbose_name=_("IBAN"))
    email = models.CharField(max_length=254, null=True, blank=True)
    telefoon = models.CharField(max_length=16, null=True, blank=True)

    class Meta:
        verbose_name = _("Bedrijfsinstellingen")
        verbose_name_plural = _("Bedrijfsinstellingen")

    def __str__(self) -> str:
        return self.naam

    def clean(self):
        """Validates and normalizes the company details before saving."""
        super().clean()

        errors: dict[str, list] = {}

        for field in ("kvk", "btw_nummer", "iban", "email", "telefoon"):
            setattr(self, field, sanitize_optional_string(getattr(self, field)))

        normalizers = {
            "postcode": normalize_postcode,
            "btw_nummer": normalize_btw_nummer,
            "iban": normalize_iban,
            "telefoon": normalize_telefoon,
        }
        for field, normalize in normalizers.items():
            value = getattr(self, field)
            if not value:
                continue
            try:
                setattr(self, field, normalize(value))
            except ValidationError as e:
                errors[field] = e.messages

        for field, validate in (("kvk", validate_kvk), ("email", validate_email)):
            value = getattr(self, field)
            if not value:
                continue
            try:
                validate(value)
            except ValidationError as e:
                errors[field] = e.messages

        for field in ("uurtarief", "standaard_marge_percentage", "btw_percentage"):
            value = getattr(self, field)
            if value is not None and value < 0:
                errors[field] = [_("Mag niet negatief zijn.")]

        if errors:
            raise ValidationError(errors)
