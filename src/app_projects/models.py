"""
Offertes, projects and their pre- and post-calculation.

Offerte is a snapshot: the calculated regels and totals are stored as
they were presented to the customer. Recalculating replaces both as a whole.

A Project follows an Offerte through execution. Its Voorcalculatie holds
the planned hours, UrenRegistratie and MachineGebruik the actuals, and
Nacalculatie the saved comparison of both.
"""

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _

from app_calculations.constants import Achterstalligheid, Bereikbaarheid, OfferteType
from app_calculations.validators import (
    normalize_postcode,
    normalize_telefoon,
    sanitize_optional_string,
    validate_email,
)


class Offerte(models.Model):
    offertenummer = models.CharField(
        max_length=30, unique=True, verbose_name=_("Offertenummer")
    )
    type = models.CharField(
        max_length=20, choices=OfferteType.choices, verbose_name=_("Type")
    )

    # Klant
    klant_naam = models.CharField(max_length=255, verbose_name=_("Klantnaam"))
    klant_adres = models.CharField(max_length=255, blank=True, default="")
    klant_postcode = models.CharField(max_length=7, blank=True, default="")
    klant_plaats = models.CharField(max_length=100, blank=True, default="")
    klant_email = models.CharField(max_length=254, null=True, blank=True)
    klant_telefoon = models.CharField(max_length=16, null=True, blank=True)

    # Algemene parameters
    bereikbaarheid = models.CharField(
        max_length=20,
        choices=Bereikbaarheid.choices,
        default=Bereikbaarheid.GOED,
        verbose_name=_("Bereikbaarheid"),
    )
    achterstalligheid = models.CharField(
        max_length=20,
        choices=Achterstalligheid.choices,
        null=True,
        blank=True,
        verbose_name=_("Achterstalligheid"),
    )

    scopes = models.JSONField(default=list, blank=True, verbose_name=_("Scopes"))
    scope_data = models.JSONField(default=dict, blank=True, verbose_name=_("Scopegegevens"))
    regels = models.JSONField(default=list, blank=True, verbose_name=_("Offerteregels"))

    # Totalen
    materiaalkosten = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0"))
    arbeidskosten = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0"))
    totaal_uren = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0"))
    subtotaal = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0"))
    marge = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0"))
    marge_percentage = models.DecimalField(
        max_digits=6, decimal_places=2, default=Decimal("0")
    )
    totaal_ex_btw = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0"))
    btw = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0"))
    totaal_incl_btw = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0"), verbose_name=_("Totaal incl. btw")
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Offerte")
        verbose_name_plural = _("Offertes")
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:
        return f"{self.offertenummer} {self.klant_naam}"

    def clean(self):
        super().clean()
        errors = {}

        self.klant_email = sanitize_optional_string(self.klant_email)
        self.klant_telefoon = sanitize_optional_string(self.klant_telefoon)

        if self.klant_postcode:
            try:
                self.klant_postcode = normalize_postcode(self.klant_postcode)
            except ValidationError as e:
                errors["klant_postcode"] = e.messages
        if self.klant_telefoon:
            try:
                self.klant_telefoon = normalize_telefoon(self.klant_telefoon)
            except ValidationError as e:
                errors["klant_telefoon"] = e.messages
        if self.klant_email:
            try:
                validate_email(self.klant_email)
            except ValidationError as e:
                errors["klant_email"] = e.messages

        if errors:
            raise ValidationError(errors)


class Project(models.Model):
    class Status(models.TextChoices):
        GEPLAND = "gepland", _("Gepland")
        IN_UITVOERING = "in_uitvoering", _("In uitvoering")
        AFGEROND = "afgerond", _("Afgerond")
        NAGECALCULEERD = "nagecalculeerd", _("Nagecalculeerd")

    naam = models.CharField(max_length=255, verbose_name=_("Naam"))
    offerte = models.ForeignKey(
        Offerte,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="projecten",
        verbose_name=_("Offerte"),
    )
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.GEPLAND,
        db_index=True,
        verbose_name=_("Status"),
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Project")
        verbose_name_plural = _("Projecten")
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:
        return self.naam


class Voorcalculatie(models.Model):
    class TeamGrootte(models.IntegerChoices):
        TWEE = 2, _("2 personen")
        DRIE = 3, _("3 personen")
        VIER = 4, _("4 personen")

    project = models.OneToOneField(
        Project,
        on_delete=models.CASCADE,
        related_name="voorcalculatie",
        verbose_name=_("Project"),
    )
    team_grootte = models.PositiveSmallIntegerField(
        choices=TeamGrootte.choices,
        default=TeamGrootte.TWEE,
        verbose_name=_("Teamgrootte"),
    )
    effectieve_uren_per_dag = models.DecimalField(
        max_digits=4,
        decimal_places=2,
        default=Decimal("7"),
        verbose_name=_("Effectieve uren per dag"),
    )
    norm_uren_totaal = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0"), verbose_name=_("Normuren totaal")
    )
    geschatte_dagen = models.PositiveIntegerField(default=0, verbose_name=_("Geschatte dagen"))
    norm_uren_per_scope = models.JSONField(
        default=dict, blank=True, verbose_name=_("Normuren per scope")
    )
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Voorcalculatie")
        verbose_name_plural = _("Voorcalculaties")

    def __str__(self) -> str:
        return f"{self.project}: {self.norm_uren_totaal} uur"

    def clean(self):
        super().clean()
        if self.effectieve_uren_per_dag is not None and self.effectieve_uren_per_dag <= 0:
            raise ValidationError(
                {"effectieve_uren_per_dag": _("Effectieve uren per dag moet groter dan 0 zijn.")}
            )


class UrenRegistratie(models.Model):
    project = models.ForeignKey(
        Project,
        on_delete=models.CASCADE,
        related_name="uren_registraties",
        verbose_name=_("Project"),
    )
    datum = models.DateField(verbose_name=_("Datum"))
    medewerker = models.CharField(max_length=255, verbose_name=_("Medewerker"))
    uren = models.DecimalField(max_digits=5, decimal_places=2, verbose_name=_("Uren"))
    scope = models.CharField(max_length=50, blank=True, default="", verbose_name=_("Scope"))
    notities = models.TextField(blank=True, default="", verbose_name=_("Notities"))

    class Meta:
        verbose_name = _("Urenregistratie")
        verbose_name_plural = _("Urenregistraties")
        ordering = ["datum", "id"]

    def __str__(self) -> str:
        return f"{self.datum} {self.medewerker}: {self.uren}"

    def clean(self):
        super().clean()
        if self.uren is not None and self.uren <= 0:
            raise ValidationError({"uren": _("Uren moeten groter dan 0 zijn.")})


class MachineGebruik(models.Model):
    project = models.ForeignKey(
        Project,
        on_delete=models.CASCADE,
        related_name="machine_gebruik",
        verbose_name=_("Project"),
    )
    datum = models.DateField(verbose_name=_("Datum"))
    machine = models.CharField(max_length=255, verbose_name=_("Machine"))
    uren = models.DecimalField(max_digits=5, decimal_places=2, verbose_name=_("Uren"))
    kosten = models.DecimalField(max_digits=10, decimal_places=2, verbose_name=_("Kosten"))

    class Meta:
        verbose_name = _("Machinegebruik")
        verbose_name_plural = _("Machinegebruik")
        ordering = ["datum", "id"]

    def __str__(self) -> str:
        return f"{self.datum} {self.machine}: {self.uren} uur"

    def clean(self):
        super().clean()
        errors = {}
        if self.uren is not None and self.uren < 0:
            errors["uren"] = [_("Uren mogen niet negatief zijn.")]
        if self.kosten is not None and self.kosten < 0:
            errors["kosten"] = [_("Kosten mogen niet negatief zijn.")]
        if errors:
            raise ValidationError(errors)


class Nacalculatie(models.Model):
    project = models.OneToOneField(
        Project,
        on_delete=models.CASCADE,
        related_name="nacalculatie",
        verbose_name=_("Project"),
    )
    werkelijke_uren = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0"), verbose_name=_("Werkelijke uren")
    )
    werkelijke_dagen = models.PositiveIntegerField(default=0, verbose_name=_("Werkelijke dagen"))
    werkelijke_machine_kosten = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0"), verbose_name=_("Machinekosten")
    )
    afwijking_uren = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0"), verbose_name=_("Afwijking uren")
    )
    afwijking_percentage = models.DecimalField(
        max_digits=7, decimal_places=1, default=Decimal("0"), verbose_name=_("Afwijking (%)")
    )
    afwijkingen_per_scope = models.JSONField(
        default=dict, blank=True, verbose_name=_("Afwijking per scope")
    )
    conclusies = models.TextField(blank=True, default="", verbose_name=_("Conclusies"))
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Nacalculatie")
        verbose_name_plural = _("Nacalculaties")

    def __str__(self) -> str:
        return f"{self.project}: {self.afwijking_percentage}%"
