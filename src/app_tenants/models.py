from django.db import models
from django.utils.translation import gettext_lazy as _
from django_tenants.models import DomainMixin, TenantMixin


class Tenant(TenantMixin):
    """A landscaping company (hoveniersbedrijf) with its own schema."""

    name = models.CharField(max_length=100, verbose_name=_("Bedrijfsnaam"))
    created_at = models.DateTimeField(auto_now_add=True)

    auto_create_schema = True

    class Meta:
        verbose_name = _("Hoveniersbedrijf")
        verbose_name_plural = _("Hoveniersbedrijven")
        ordering = ["name", "id"]

    def __str__(self) -> str:
        return self.name


class Domain(DomainMixin):
    class Meta:
        verbose_name = _("Domein")
        verbose_name_plural = _("Domeinen")
