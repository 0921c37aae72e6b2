from datetime import datetime
from io import BytesIO

from django.contrib import admin
from django.http import HttpResponse
from django.utils.translation import gettext_lazy as _
from openpyxl import Workbook

from app_calculations.models import BedrijfsInstellingen, CorrectieFactor, NormUur


@admin.register(NormUur)
class NormUurAdmin(admin.ModelAdmin):
    list_display = (
        "activiteit",
        "scope",
        "normuur_per_eenheid",
        "eenheid",
        "company",
        "updated_at",
    )
    list_filter = ("scope", "company")
    search_fields = ("activiteit", "omschrijving")
    list_select_related = ("company",)
    save_on_top = True
    actions = ("export_normuren_to_excel",)

    @admin.action(description=_("Exporteren naar Excel"))
    def export_normuren_to_excel(self, request, queryset):
        workbook = Workbook()
        worksheet = workbook.active
        worksheet.title = str(_("Normuren"))

        headers = (
            _("Bedrijf"),
            _("Scope"),
            _("Activiteit"),
            _("Normuur per eenheid"),
            _("Eenheid"),
            _("Omschrijving"),
        )
        worksheet.append([str(header) for header in headers])

        for normuur in queryset.select_related("company").order_by("company", "scope", "activiteit"):
            worksheet.append(
                (
                    str(normuur.company),
                    normuur.scope,
                    normuur.activiteit,
                    normuur.normuur_per_eenheid,
                    normuur.eenheid,
                    normuur.omschrijving,
                )
            )

        output = BytesIO()
        workbook.save(output)
        output.seek(0)

        timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        filename = f"normuren_{timestamp}.xlsx"

        response = HttpResponse(
            output.getvalue(),
            content_type=(
                "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
            ),
        )
        response["Content-Disposition"] = f'attachment; filename="{filename}"'
        return response


class SystemDefaultFilter(admin.SimpleListFilter):
    title = _("Herkomst")
    parameter_name = "herkomst"

    def lookups(self, request, model_admin):
        return (
            ("systeem", _("Systeemstandaard")),
            ("bedrijf", _("Eigen waarde bedrijf")),
        )

    def queryset(self, request, queryset):
        if self.value() == "systeem":
            return queryset.filter(company__isnull=True)
        if self.value() == "bedrijf":
            return queryset.filter(company__isnull=False)
        return queryset


@admin.register(CorrectieFactor)
class CorrectieFactorAdmin(admin.ModelAdmin):
    list_display = ("type", "waarde", "factor", "company", "is_system_default_display")
    list_filter = ("type", SystemDefaultFilter)
    search_fields = ("waarde",)
    list_select_related = ("company",)

    @admin.display(description=_("Systeem"), boolean=True)
    def is_system_default_display(self, obj: CorrectieFactor) -> bool:
        return obj.is_system_default


@admin.register(BedrijfsInstellingen)
class BedrijfsInstellingenAdmin(admin.ModelAdmin):
    list_display = ("naam", "company", "uurtarief", "standaard_marge_percentage", "btw_percentage")
    search_fields = ("naam", "kvk")
    fieldsets = (
        (None, {"fields": ("company",)}),
        (
            _("Tarieven"),
            {
                "fields": (
                    "uurtarief",
                    "standaard_marge_percentage",
                    "scope_marges",
                    "btw_percentage",
                )
            },
        ),
        (
            _("Bedrijfsgegevens"),
            {
                "fields": (
                    "naam",
                    "adres",
                    ("postcode", "plaats"),
                    ("kvk", "btw_nummer"),
                    "iban",
                    ("email", "telefoon"),
                )
            },
        ),
    )
