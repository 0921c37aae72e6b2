"""
Repositories for offertes and projects.

Responsibility:
- Access to the project models of the current tenant schema
- Upserts of the one-to-one Voorcalculatie and Nacalculatie rows
"""

import logging
from typing import Any, Dict, Optional

from django.db import transaction
from django.db.models import QuerySet

from app_projects.exceptions import NacalculatieNotFoundError, ProjectNotFoundError
from app_projects.models import (
    MachineGebruik,
    Nacalculatie,
    Offerte,
    Project,
    UrenRegistratie,
    Voorcalculatie,
)
from core.base_repository import BaseRepository

logger = logging.getLogger(__name__)


class OfferteRepository(BaseRepository[Offerte]):
    model = Offerte


class ProjectRepository(BaseRepository[Project]):
    model = Project

    def get_or_raise(self, project_id: int) -> Project:
        """
        Raises:
            ProjectNotFoundError: no project with this id
        """
        project = self.get_by_id(project_id, select_related=["offerte"])
        if project is None:
            raise ProjectNotFoundError(project_id)
        return project

    def set_status(self, project: Project, status: str) -> None:
        project.status = status
        project.save(update_fields=["status", "updated_at"])


class VoorcalculatieRepository(BaseRepository[Voorcalculatie]):
    model = Voorcalculatie

    def get_for_project(self, project: Project) -> Optional[Voorcalculatie]:
        return self.model.objects.filter(project=project).first()

    def upsert(self, project: Project, values: Dict[str, Any]) -> Voorcalculatie:
        with transaction.atomic():
            voorcalculatie, created = self.model.objects.update_or_create(
                project=project, defaults=values
            )
        logger.info(
            "Voorcalculatie project %s %s: %s uur, %s dagen",
            project.pk,
            "aangemaakt" if created else "bijgewerkt",
            voorcalculatie.norm_uren_totaal,
            voorcalculatie.geschatte_dagen,
        )
        return voorcalculatie


class UrenRegistratieRepository(BaseRepository[UrenRegistratie]):
    model = UrenRegistratie

    def for_project(self, project: Project) -> QuerySet[UrenRegistratie]:
        return self.get_queryset(filters={"project": project}, order_by=["datum", "id"])


class MachineGebruikRepository(BaseRepository[MachineGebruik]):
    model = MachineGebruik

    def for_project(self, project: Project) -> QuerySet[MachineGebruik]:
        return self.get_queryset(filters={"project": project}, order_by=["datum", "id"])


class NacalculatieRepository(BaseRepository[Nacalculatie]):
    model = Nacalculatie

    def get_for_project(self, project: Project) -> Optional[Nacalculatie]:
        return self.model.objects.filter(project=project).first()

    def get_for_project_or_raise(self, project: Project) -> Nacalculatie:
        """
        Raises:
            NacalculatieNotFoundError: nothing saved for this project yet
        """
        nacalculatie = self.get_for_project(project)
        if nacalculatie is None:
            raise NacalculatieNotFoundError(project.pk)
        return nacalculatie

    def upsert(self, project: Project, values: Dict[str, Any]) -> Nacalculatie:
        nacalculatie, _ = self.model.objects.update_or_create(project=project, defaults=values)
        return nacalculatie
