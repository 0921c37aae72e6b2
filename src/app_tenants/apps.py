from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class AppTenantsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "app_tenants"
    verbose_name = _("Hoveniersbedrijven")
