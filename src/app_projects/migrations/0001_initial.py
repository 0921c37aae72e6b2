from decimal import Decimal

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Offerte",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                (
                    "offertenummer",
                    models.CharField(max_length=30, unique=True, verbose_name="Offertenummer"),
                ),
                (
                    "type",
                    models.CharField(
                        choices=[("aanleg", "Aanleg"), ("onderhoud", "Onderhoud")],
                        max_length=20,
                        verbose_name="Type",
                    ),
                ),
                ("klant_naam", models.CharField(max_length=255, verbose_name="Klantnaam")),
                ("klant_adres", models.CharField(blank=True, default="", max_length=255)),
                ("klant_postcode", models.CharField(blank=True, default="", max_length=7)),
                ("klant_plaats", models.CharField(blank=True, default="", max_length=100)),
                ("klant_email", models.CharField(blank=True, max_length=254, null=True)),
                ("klant_telefoon", models.CharField(blank=True, max_length=16, null=True)),
                (
                    "bereikbaarheid",
                    models.CharField(
                        choices=[("goed", "Goed"), ("beperkt", "Beperkt"), ("slecht", "Slecht")],
                        default="goed",
                        max_length=20,
                        verbose_name="Bereikbaarheid",
                    ),
                ),
                (
                    "achterstalligheid",
                    models.CharField(
                        blank=True,
                        choices=[("laag", "Laag"), ("gemiddeld", "Gemiddeld"), ("hoog", "Hoog")],
                        max_length=20,
                        null=True,
                        verbose_name="Achterstalligheid",
                    ),
                ),
                ("scopes", models.JSONField(blank=True, default=list, verbose_name="Scopes")),
                (
                    "scope_data",
                    models.JSONField(blank=True, default=dict, verbose_name="Scopegegevens"),
                ),
                (
                    "regels",
                    models.JSONField(blank=True, default=list, verbose_name="Offerteregels"),
                ),
                (
                    "materiaalkosten",
                    models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=14),
                ),
                (
                    "arbeidskosten",
                    models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=14),
                ),
                (
                    "totaal_uren",
                    models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=10),
                ),
                (
                    "subtotaal",
                    models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=14),
                ),
                (
                    "marge",
                    models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=14),
                ),
                (
                    "marge_percentage",
                    models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=6),
                ),
                (
                    "totaal_ex_btw",
                    models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=14),
                ),
                (
                    "btw",
                    models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=14),
                ),
                (
                    "totaal_incl_btw",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0"),
                        max_digits=14,
                        verbose_name="Totaal incl. btw",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Offerte",
                "verbose_name_plural": "Offertes",
                "ordering": ["-created_at", "-id"],
            },
        ),
        migrations.CreateModel(
            name="Project",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("naam", models.CharField(max_length=255, verbose_name="Naam")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("gepland", "Gepland"),
                            ("in_uitvoering", "In uitvoering"),
                            ("afgerond", "Afgerond"),
                            ("nagecalculeerd", "Nagecalculeerd"),
                        ],
                        db_index=True,
                        default="gepland",
                        max_length=20,
                        verbose_name="Status",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "offerte",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="projecten",
                        to="app_projects.offerte",
                        verbose_name="Offerte",
                    ),
                ),
            ],
            options={
                "verbose_name": "Project",
                "verbose_name_plural": "Projecten",
                "ordering": ["-created_at", "-id"],
            },
        ),
        migrations.CreateModel(
            name="Voorcalculatie",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                (
                    "team_grootte",
                    models.PositiveSmallIntegerField(
                        choices=[(2, "2 personen"), (3, "3 personen"), (4, "4 personen")],
                        default=2,
                        verbose_name="Teamgrootte",
                    ),
                ),
                (
                    "effectieve_uren_per_dag",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("7"),
                        max_digits=4,
                        verbose_name="Effectieve uren per dag",
                    ),
                ),
                (
                    "norm_uren_totaal",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0"),
                        max_digits=10,
                        verbose_name="Normuren totaal",
                    ),
                ),
                (
                    "geschatte_dagen",
                    models.PositiveIntegerField(default=0, verbose_name="Geschatte dagen"),
                ),
                (
                    "norm_uren_per_scope",
                    models.JSONField(blank=True, default=dict, verbose_name="Normuren per scope"),
                ),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "project",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="voorcalculatie",
                        to="app_projects.project",
                        verbose_name="Project",
                    ),
                ),
            ],
            options={
                "verbose_name": "Voorcalculatie",
                "verbose_name_plural": "Voorcalculaties",
            },
        ),
        migrations.CreateModel(
            name="UrenRegistratie",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("datum", models.DateField(verbose_name="Datum")),
                ("medewerker", models.CharField(max_length=255, verbose_name="Medewerker")),
                ("uren", models.DecimalField(decimal_places=2, max_digits=5, verbose_name="Uren")),
                (
                    "scope",
                    models.CharField(blank=True, default="", max_length=50, verbose_name="Scope"),
                ),
                ("notities", models.TextField(blank=True, default="", verbose_name="Notities")),
                (
                    "project",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="uren_registraties",
                        to="app_projects.project",
                        verbose_name="Project",
                    ),
                ),
            ],
            options={
                "verbose_name": "Urenregistratie",
                "verbose_name_plural": "Urenregistraties",
                "ordering": ["datum", "id"],
            },
        ),
        migrations.CreateModel(
            name="MachineGebruik",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("datum", models.DateField(verbose_name="Datum")),
                ("machine", models.CharField(max_length=255, verbose_name="Machine")),
                ("uren", models.DecimalField(decimal_places=2, max_digits=5, verbose_name="Uren")),
                (
                    "kosten",
                    models.DecimalField(decimal_places=2, max_digits=10, verbose_name="Kosten"),
                ),
                (
                    "project",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="machine_gebruik",
                        to="app_projects.project",
                        verbose_name="Project",
                    ),
                ),
            ],
            options={
                "verbose_name": "Machinegebruik",
                "verbose_name_plural": "Machinegebruik",
                "ordering": ["datum", "id"],
            },
        ),
        migrations.CreateModel(
            name="Nacalculatie",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                (
                    "werkelijke_uren",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0"),
                        max_digits=10,
                        verbose_name="Werkelijke uren",
                    ),
                ),
                (
                    "werkelijke_dagen",
                    models.PositiveIntegerField(default=0, verbose_name="Werkelijke dagen"),
                ),
                (
                    "werkelijke_machine_kosten",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0"),
                        max_digits=12,
                        verbose_name="Machinekosten",
                    ),
                ),
                (
                    "afwijking_uren",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0"),
                        max_digits=10,
                        verbose_name="Afwijking uren",
                    ),
                ),
                (
                    "afwijking_percentage",
                    models.DecimalField(
                        decimal_places=1,
                        default=Decimal("0"),
                        max_digits=7,
                        verbose_name="Afwijking (%)",
                    ),
                ),
                (
                    "afwijkingen_per_scope",
                    models.JSONField(blank=True, default=dict, verbose_name="Afwijking per scope"),
                ),
                ("conclusies", models.TextField(blank=True, default="", verbose_name="Conclusies")),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "project",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="nacalculatie",
                        to="app_projects.project",
                        verbose_name="Project",
                    ),
                ),
            ],
            options={
                "verbose_name": "Nacalculatie",
                "verbose_name_plural": "Nacalculaties",
            },
        ),
    ]
