from decimal import Decimal

import django.db.models.deletion
from django.db import migrations, models

FACTOR_TYPE_CHOICES = [
    ("bereikbaarheid", "Bereikbaarheid"),
    ("complexiteit", "Complexiteit"),
    ("intensiteit", "Intensiteit"),
    ("snijwerk", "Snijwerk"),
    ("achterstalligheid", "Achterstalligheid"),
    ("hoogteverschil", "Hoogteverschil"),
    ("diepte", "Diepte"),
    ("hoogte", "Hoogte"),
    ("bodem", "Bodem"),
    ("snoei", "Snoei"),
]


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("app_tenants", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="NormUur",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "scope",
                    models.CharField(
                        db_index=True,
                        help_text="Bijvoorbeeld grondwerk, bestrating, heggen_onderhoud.",
                        max_length=50,
                        verbose_name="Scope",
                    ),
                ),
                (
                    "activiteit",
                    models.CharField(
                        help_text="Exacte naam waarop de calculatie zoekt, bijv. 'Ontgraven licht'.",
                        max_length=100,
                        verbose_name="Activiteit",
                    ),
                ),
                (
                    "normuur_per_eenheid",
                    models.DecimalField(
                        decimal_places=4, max_digits=8, verbose_name="Normuur per eenheid"
                    ),
                ),
                ("eenheid", models.CharField(max_length=20, verbose_name="Eenheid")),
                (
                    "omschrijving",
                    models.CharField(
                        blank=True, default="", max_length=255, verbose_name="Omschrijving"
                    ),
                ),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "company",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="normuren",
                        to="app_tenants.tenant",
                        verbose_name="Bedrijf",
                    ),
                ),
            ],
            options={
                "verbose_name": "Normuur",
                "verbose_name_plural": "Normuren",
                "ordering": ["scope", "activiteit", "id"],
            },
        ),
        migrations.CreateModel(
            name="CorrectieFactor",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "type",
                    models.CharField(
                        choices=FACTOR_TYPE_CHOICES,
                        db_index=True,
                        max_length=50,
                        verbose_name="Type",
                    ),
                ),
                ("waarde", models.CharField(max_length=50, verbose_name="Waarde")),
                (
                    "factor",
                    models.DecimalField(
                        decimal_places=3,
                        help_text="Vermenigvuldiger; 1.0 is neutraal.",
                        max_digits=6,
                        verbose_name="Factor",
                    ),
                ),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "company",
                    models.ForeignKey(
                        blank=True,
                        help_text="Leeg laten voor een systeemstandaard.",
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="correctiefactoren",
                        to="app_tenants.tenant",
                        verbose_name="Bedrijf",
                    ),
                ),
            ],
            options={
                "verbose_name": "Correctiefactor",
                "verbose_name_plural": "Correctiefactoren",
                "ordering": ["type", "waarde", "id"],
            },
        ),
        migrations.CreateModel(
            name="BedrijfsInstellingen",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "uurtarief",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("45.00"),
                        max_digits=8,
                        verbose_name="Uurtarief",
                    ),
                ),
                (
                    "standaard_marge_percentage",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("15.00"),
                        max_digits=5,
                        verbose_name="Standaard marge (%)",
                    ),
                ),
                (
                    "scope_marges",
                    models.JSONField(
                        blank=True,
                        default=dict,
                        help_text='Bijvoorbeeld {"bestrating": 20}. Leeg = standaard marge.',
                        verbose_name="Marge per scope (%)",
                    ),
                ),
                (
                    "btw_percentage",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("21.00"),
                        max_digits=5,
                        verbose_name="Btw (%)",
                    ),
                ),
                ("naam", models.CharField(max_length=255, verbose_name="Bedrijfsnaam")),
                ("adres", models.CharField(blank=True, default="", max_length=255)),
                ("postcode", models.CharField(blank=True, default="", max_length=7)),
                ("plaats", models.CharField(blank=True, default="", max_length=100)),
                (
                    "kvk",
                    models.CharField(blank=True, max_length=8, null=True, verbose_name="KvK"),
                ),
                (
                    "btw_nummer",
                    models.CharField(
                        blank=True, max_length=14, null=True, verbose_name="Btw-nummer"
                    ),
                ),
                (
                    "iban",
                    models.CharField(blank=True, max_length=18, null=True, verbose_name="IBAN"),
                ),
                ("email", models.CharField(blank=True, max_length=254, null=True)),
                ("telefoon", models.CharField(blank=True, max_length=16, null=True)),
                (
                    "company",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="instellingen",
                        to="app_tenants.tenant",
                        verbose_name="Bedrijf",
                    ),
                ),
            ],
            options={
                "verbose_name": "Bedrijfsinstellingen",
                "verbose_name_plural": "Bedrijfsinstellingen",
            },
        ),
        migrations.AddConstraint(
            model_name="normuur",
            constraint=models.UniqueConstraint(
                fields=("company", "scope", "activiteit"),
                name="uniq_normuur_company_scope_activiteit",
            ),
        ),
        migrations.AddConstraint(
            model_name="correctiefactor",
            constraint=models.UniqueConstraint(
                fields=("company", "type", "waarde"),
                name="uniq_correctiefactor_company_type_waarde",
            ),
        ),
        migrations.AddConstraint(
            model_name="correctiefactor",
            constraint=models.UniqueConstraint(
                condition=models.Q(("company__isnull", True)),
                fields=("type", "waarde"),
                name="uniq_correctiefactor_system_type_waarde",
            ),
        ),
    ]
