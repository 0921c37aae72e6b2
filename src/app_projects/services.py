"""
Service layer for offertes, voorcalculatie and nacalculatie.

Responsibility:
- Store calculation results on an Offerte snapshot
- Derive and store the voorcalculatie of a project
- Run the nacalculatie comparator and save its result

Principles:
- Dependency Injection: repositories and services through the constructor
- The comparator is read-only; saving is an explicit step
"""

import logging
from typing import Any, Optional, Tuple

from django.core.exceptions import ValidationError
from django.db import transaction

from app_calculations.services import OfferteCalculation, OfferteCalculationService
from app_calculations.validators import sanitize_optional_string
from app_projects.exceptions import InvalidProjectError, VoorcalculatieNotFoundError
from app_projects.models import Nacalculatie, Offerte, Project, Voorcalculatie
from app_projects.nacalculatie import NacalculatieResult, calculate_nacalculatie
from app_projects.repositories import (
    MachineGebruikRepository,
    NacalculatieRepository,
    OfferteRepository,
    ProjectRepository,
    UrenRegistratieRepository,
    VoorcalculatieRepository,
)
from app_projects.voorcalculatie import (
    DEFAULT_EFFECTIEVE_UREN_PER_DAG,
    calculate_norm_uren,
    calculate_project_duration,
)

logger = logging.getLogger(__name__)

TOTAL_FIELDS = (
    "materiaalkosten",
    "arbeidskosten",
    "totaal_uren",
    "subtotaal",
    "marge",
    "marge_percentage",
    "totaal_ex_btw",
    "btw",
    "totaal_incl_btw",
)


class OfferteService:
    """
    Keeps the regels and totals of an Offerte in line with its scope data.

    A recalculation replaces the stored regels and totals as a whole.
    """

    def __init__(
        self,
        offerte_repo: OfferteRepository = None,
        calc_service: OfferteCalculationService = None,
    ):
        self.offerte_repo = offerte_repo or OfferteRepository()
        self.calc_service = calc_service or OfferteCalculationService()

    def apply_calculation(self, offerte: Offerte, calculation: OfferteCalculation) -> Offerte:
        offerte.regels = [regel.to_dict() for regel in calculation.regels]
        for name in TOTAL_FIELDS:
            setattr(offerte, name, getattr(calculation.totals, name))
        offerte.save(update_fields=["regels", *TOTAL_FIELDS, "updated_at"])
        return offerte

    def recalculate(self, offerte: Offerte, company) -> Offerte:
        """
        Recalculates an offerte from its stored scopes and scope data.

        Raises:
            UnknownScopeError: a stored scope has no calculator
            InvalidScopeDataError: stored scope data cannot be calculated
        """
        calculation = self.calc_service.calculate(
            company=company,
            offerte_type=offerte.type,
            scopes=offerte.scopes,
            scope_data=offerte.scope_data,
            bereikbaarheid=offerte.bereikbaarheid,
            achterstalligheid=offerte.achterstalligheid,
        )
        self.apply_calculation(offerte, calculation)
        logger.info(
            "Offerte %s herberekend: totaal incl. btw %s",
            offerte.offertenummer,
            offerte.totaal_incl_btw,
        )
        return offerte


class VoorcalculatieService:
    def __init__(
        self,
        project_repo: ProjectRepository = None,
        voorcalculatie_repo: VoorcalculatieRepository = None,
    ):
        self.project_repo = project_repo or ProjectRepository()
        self.voorcalculatie_repo = voorcalculatie_repo or VoorcalculatieRepository()

    def get_project(self, project_id: int) -> Project:
        return self.project_repo.get_or_raise(project_id)

    def create_for_project(
        self,
        project: Project,
        team_grootte: int,
        effectieve_uren_per_dag: Any = DEFAULT_EFFECTIEVE_UREN_PER_DAG,
    ) -> Voorcalculatie:
        """
        Creates or replaces the voorcalculatie from the offerte regels.

        Args:
            project: Project with an offerte
            team_grootte: 2, 3 or 4
            effectieve_uren_per_dag: productive hours per person per day

        Returns:
            Voorcalculatie

        Raises:
            InvalidProjectError: the project has no offerte
            ValidationError: invalid team size or hours per day
        """
        if project.offerte is None:
            raise InvalidProjectError(project.pk, "geen offerte gekoppeld")

        norm_uren = calculate_norm_uren(project.offerte.regels)
        duration = calculate_project_duration(
            norm_uren.norm_uren_totaal, team_grootte, effectieve_uren_per_dag
        )

        return self.voorcalculatie_repo.upsert(
            project,
            {
                "team_grootte": duration.team_grootte,
                "effectieve_uren_per_dag": duration.effectieve_uren_per_dag,
                "norm_uren_totaal": norm_uren.norm_uren_totaal,
                "geschatte_dagen": duration.geschatte_dagen,
                "norm_uren_per_scope": {
                    scope: str(uren) for scope, uren in norm_uren.norm_uren_per_scope.items()
                },
            },
        )


class NacalculatieService:
    """
    Facade for the nacalculatie of a project.

    compute() only reads; save() stores the result and moves a finished
    project (afgerond) on to nagecalculeerd.
    """

    def __init__(
        self,
        project_repo: ProjectRepository = None,
        voorcalculatie_repo: VoorcalculatieRepository = None,
        uren_repo: UrenRegistratieRepository = None,
        machine_repo: MachineGebruikRepository = None,
        nacalculatie_repo: NacalculatieRepository = None,
    ):
        self.project_repo = project_repo or ProjectRepository()
        self.voorcalculatie_repo = voorcalculatie_repo or VoorcalculatieRepository()
        self.uren_repo = uren_repo or UrenRegistratieRepository()
        self.machine_repo = machine_repo or MachineGebruikRepository()
        self.nacalculatie_repo = nacalculatie_repo or NacalculatieRepository()

    def get_project(self, project_id: int) -> Project:
        return self.project_repo.get_or_raise(project_id)

    def compute(self, project: Project) -> NacalculatieResult:
        """
        Raises:
            VoorcalculatieNotFoundError: nothing to compare against
        """
        voorcalculatie = self.voorcalculatie_repo.get_for_project(project)
        if voorcalculatie is None:
            raise VoorcalculatieNotFoundError(project.pk)

        return calculate_nacalculatie(
            voorcalculatie,
            self.uren_repo.for_project(project),
            self.machine_repo.for_project(project),
            project.offerte.regels if project.offerte else None,
        )

    def save(
        self, project: Project, conclusies: Optional[str] = None
    ) -> Tuple[Nacalculatie, NacalculatieResult]:
        """
        Computes and stores the nacalculatie of a project.

        Args:
            project: Project
            conclusies: replaces the stored conclusions when given

        Returns:
            (Nacalculatie, NacalculatieResult)
        """
        result = self.compute(project)
        values = {
            "werkelijke_uren": result.werkelijke_uren,
            "werkelijke_dagen": result.werkelijke_dagen,
            "werkelijke_machine_kosten": result.werkelijke_machine_kosten,
            "afwijking_uren": result.afwijking_uren,
            "afwijking_percentage": result.afwijking_percentage,
            "afwijkingen_per_scope": {
                scope: str(afwijking)
                for scope, afwijking in result.afwijkingen_per_scope_map.items()
            },
        }
        conclusies = sanitize_optional_string(conclusies)
        if conclusies is not None:
            values["conclusies"] = conclusies

        with transaction.atomic():
            nacalculatie = self.nacalculatie_repo.upsert(project, values)
            if project.status == Project.Status.AFGEROND:
                self.project_repo.set_status(project, Project.Status.NAGECALCULEERD)

        logger.info(
            "Nacalculatie project %s opgeslagen: afwijking %s%% (%s)",
            project.pk,
            result.afwijking_percentage,
            result.status,
        )
        return nacalculatie, result

    def add_conclusie(self, project: Project, text: str) -> Nacalculatie:
        """
        Appends a conclusion to the saved nacalculatie.

        Raises:
            NacalculatieNotFoundError: the nacalculatie was never saved
            ValidationError: empty text
        """
        nacalculatie = self.nacalculatie_repo.get_for_project_or_raise(project)
        text = sanitize_optional_string(text)
        if text is None:
            raise ValidationError("Conclusie mag niet leeg zijn", code="required")

        nacalculatie.conclusies = (
            f"{nacalculatie.conclusies}\n\n{text}" if nacalculatie.conclusies else text
        )
        nacalculatie.save(update_fields=["conclusies", "updated_at"])
        return nacalculatie
