from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class AppCalculationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "app_calculations"
    verbose_name = _("Calculatie: normuren en correctiefactoren")
