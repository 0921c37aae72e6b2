"""Admin for offertes, projects and their voor- and nacalculatie."""

from datetime import datetime
from io import BytesIO

import nested_admin
from django.contrib import admin, messages
from django.http import HttpResponse
from django.utils.html import format_html
from django.utils.translation import gettext_lazy as _
from openpyxl import Workbook

from app_calculations.exceptions import CalculationError
from app_projects.models import (
    MachineGebruik,
    Nacalculatie,
    Offerte,
    Project,
    UrenRegistratie,
    Voorcalculatie,
)
from app_projects.nacalculatie import get_deviation_status
from app_projects.services import OfferteService

STATUS_COLORS = {
    "good": "#28a745",
    "warning": "#ffc107",
    "critical": "#dc3545",
}


@admin.register(Offerte)
class OfferteAdmin(admin.ModelAdmin):
    list_display = (
        "offertenummer",
        "klant_naam",
        "type",
        "totaal_ex_btw",
        "totaal_incl_btw",
        "updated_at",
    )
    list_filter = ("type", "bereikbaarheid")
    search_fields = ("offertenummer", "klant_naam", "klant_plaats")
    readonly_fields = (
        "regels",
        "materiaalkosten",
        "arbeidskosten",
        "totaal_uren",
        "subtotaal",
        "marge",
        "marge_percentage",
        "totaal_ex_btw",
        "btw",
        "totaal_incl_btw",
        "created_at",
        "updated_at",
    )
    actions = ("recalculate_offertes",)

    fieldsets = (
        (None, {"fields": ("offertenummer", "type")}),
        (
            _("Klant"),
            {
                "fields": (
                    "klant_naam",
                    "klant_adres",
                    ("klant_postcode", "klant_plaats"),
                    ("klant_email", "klant_telefoon"),
                )
            },
        ),
        (
            _("Calculatie"),
            {"fields": ("bereikbaarheid", "achterstalligheid", "scopes", "scope_data")},
        ),
        (
            _("Resultaat"),
            {
                "fields": (
                    "regels",
                    ("materiaalkosten", "arbeidskosten", "totaal_uren"),
                    ("subtotaal", "marge", "marge_percentage"),
                    ("totaal_ex_btw", "btw", "totaal_incl_btw"),
                ),
                "classes": ("collapse",),
            },
        ),
        (
            _("Servicegegevens"),
            {"fields": ("created_at", "updated_at"), "classes": ("collapse",)},
        ),
    )

    @admin.action(description=_("Herberekenen met huidige normuren"))
    def recalculate_offertes(self, request, queryset):
        service = OfferteService()
        company = getattr(request, "tenant", None)
        done = 0
        for offerte in queryset:
            try:
                service.recalculate(offerte, company)
                done += 1
            except CalculationError as e:
                self.message_user(
                    request, f"{offerte.offertenummer}: {e.message}", level=messages.ERROR
                )
        if done:
            self.message_user(request, _("%(count)d offerte(s) herberekend.") % {"count": done})


class UrenRegistratieInline(nested_admin.NestedTabularInline):
    model = UrenRegistratie
    extra = 0
    fields = ("datum", "medewerker", "uren", "scope", "notities")
    ordering = ("datum", "id")


class MachineGebruikInline(nested_admin.NestedTabularInline):
    model = MachineGebruik
    extra = 0
    fields = ("datum", "machine", "uren", "kosten")
    ordering = ("datum", "id")


class VoorcalculatieInline(nested_admin.NestedStackedInline):
    model = Voorcalculatie
    extra = 0
    max_num = 1
    fields = (
        ("team_grootte", "effectieve_uren_per_dag"),
        ("norm_uren_totaal", "geschatte_dagen"),
        "norm_uren_per_scope",
    )
    readonly_fields = ("norm_uren_totaal", "geschatte_dagen", "norm_uren_per_scope")


@admin.register(Project)
class ProjectAdmin(nested_admin.NestedModelAdmin):
    list_display = ("naam", "offerte", "status", "updated_at")
    list_filter = ("status",)
    search_fields = ("naam", "offerte__offertenummer", "offerte__klant_naam")
    list_select_related = ("offerte",)
    autocomplete_fields = ("offerte",)
    inlines = [VoorcalculatieInline, UrenRegistratieInline, MachineGebruikInline]


@admin.register(Nacalculatie)
class NacalculatieAdmin(admin.ModelAdmin):
    list_display = (
        "project",
        "werkelijke_uren",
        "afwijking_uren",
        "afwijking_percentage_display",
        "updated_at",
    )
    search_fields = ("project__naam",)
    list_select_related = ("project",)
    readonly_fields = (
        "werkelijke_uren",
        "werkelijke_dagen",
        "werkelijke_machine_kosten",
        "afwijking_uren",
        "afwijking_percentage",
        "afwijkingen_per_scope",
        "updated_at",
    )
    actions = ("export_nacalculaties_to_excel",)

    @admin.display(description=_("Afwijking (%)"), ordering="afwijking_percentage")
    def afwijking_percentage_display(self, obj: Nacalculatie):
        color = STATUS_COLORS[get_deviation_status(obj.afwijking_percentage)]
        return format_html('<span style="color: {};">{}%</span>', color, obj.afwijking_percentage)

    @admin.action(description=_("Exporteren naar Excel"))
    def export_nacalculaties_to_excel(self, request, queryset):
        workbook = Workbook()
        worksheet = workbook.active
        worksheet.title = str(_("Nacalculaties"))

        headers = (
            _("Project"),
            _("Geplande uren"),
            _("Werkelijke uren"),
            _("Afwijking uren"),
            _("Afwijking (%)"),
            _("Werkelijke dagen"),
            _("Machinekosten"),
            _("Conclusies"),
        )
        worksheet.append([str(header) for header in headers])

        scope_sheet = workbook.create_sheet(str(_("Per scope")))
        scope_sheet.append([str(_("Project")), str(_("Scope")), str(_("Afwijking uren"))])

        queryset = queryset.select_related("project", "project__voorcalculatie")

        for nacalculatie in queryset:
            voorcalculatie = getattr(nacalculatie.project, "voorcalculatie", None)
            worksheet.append(
                (
                    nacalculatie.project.naam,
                    voorcalculatie.norm_uren_totaal if voorcalculatie else "",
                    nacalculatie.werkelijke_uren,
                    nacalculatie.afwijking_uren,
                    nacalculatie.afwijking_percentage,
                    nacalculatie.werkelijke_dagen,
                    nacalculatie.werkelijke_machine_kosten,
                    nacalculatie.conclusies,
                )
            )
            for scope, afwijking in (nacalculatie.afwijkingen_per_scope or {}).items():
                scope_sheet.append((nacalculatie.project.naam, scope, afwijking))

        output = BytesIO()
        workbook.save(output)
        output.seek(0)

        timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        filename = f"nacalculaties_{timestamp}.xlsx"

        response = HttpResponse(
            output.getvalue(),
            content_type=(
                "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
            ),
        )
        response["Content-Disposition"] = f'attachment; filename="{filename}"'
        return response
