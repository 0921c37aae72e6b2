from django.contrib.auth.models import AbstractUser
from django.db import models
from django.utils.translation import gettext_lazy as _


class User(AbstractUser):
    class Rol(models.TextChoices):
        ADMIN = "admin", _("Beheerder")
        MEDEWERKER = "medewerker", _("Medewerker")
        VIEWER = "viewer", _("Alleen lezen")

    rol = models.CharField(
        max_length=20,
        choices=Rol.choices,
        default=Rol.MEDEWERKER,
        verbose_name=_("Rol"),
        help_text=_("Beheerders mogen normuren en correctiefactoren aanpassen."),
    )

    class Meta:
        verbose_name = _("Gebruiker")
        verbose_name_plural = _("Gebruikers")

    @property
    def is_beheerder(self) -> bool:
        return self.is_superuser or self.rol == self.Rol.ADMIN

    @property
    def is_viewer(self) -> bool:
        return not self.is_superuser and self.rol == self.Rol.VIEWER
