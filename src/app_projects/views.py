"""
Controllers for voorcalculatie and nacalculatie of projects.

Responsibility:
- Handle HTTP requests
- Delegate to VoorcalculatieService and NacalculatieService
- Build HTTP responses in the {"ok": ...} envelope
"""

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from app_calculations.serializers import ErrorResponseSerializer
from app_projects.exceptions import (
    InvalidProjectError,
    NacalculatieNotFoundError,
    ProjectError,
    ProjectNotFoundError,
    VoorcalculatieNotFoundError,
)
from app_projects.serializers import (
    ConclusieSerializer,
    NacalculatieConclusieResponseSerializer,
    NacalculatieReportResponseSerializer,
    NacalculatieSaveResponseSerializer,
    NacalculatieSaveSerializer,
    NacalculatieSerializer,
    VoorcalculatieRequestSerializer,
    VoorcalculatieResponseSerializer,
    VoorcalculatieSerializer,
)
from app_projects.services import NacalculatieService, VoorcalculatieService
from app_users.permissions import IsNotViewer
from core.api import format_validation_error

logger = logging.getLogger(__name__)


class BaseProjectAPIView(APIView):
    permission_classes = [IsAuthenticated]

    @staticmethod
    def _error_response(message: str, status_code: int) -> Response:
        return Response({"ok": False, "error": message}, status=status_code)

    def _handle_exception(self, exc: Exception) -> Response:
        if isinstance(exc, (ValidationError, DjangoValidationError)):
            detail = exc.detail if isinstance(exc, ValidationError) else exc
            return self._error_response(
                format_validation_error(detail), status.HTTP_400_BAD_REQUEST
            )
        if isinstance(
            exc,
            (ProjectNotFoundError, VoorcalculatieNotFoundError, NacalculatieNotFoundError),
        ):
            return self._error_response(exc.message, status.HTTP_404_NOT_FOUND)
        if isinstance(exc, InvalidProjectError):
            return self._error_response(exc.message, status.HTTP_400_BAD_REQUEST)
        if isinstance(exc, ProjectError):
            return self._error_response(exc.message, status.HTTP_500_INTERNAL_SERVER_ERROR)

        logger.exception("Onverwachte fout in %s", self.__class__.__name__)
        return self._error_response(
            "Interne serverfout", status.HTTP_500_INTERNAL_SERVER_ERROR
        )


class VoorcalculatieAPIView(BaseProjectAPIView):
    """
    Creates or replaces the voorcalculatie of a project.

    **Endpoint:** POST /api/v1/projects/{project_id}/voorcalculatie/

    **Request Format:**
```json
    {"team_grootte": 2, "effectieve_uren_per_dag": 7}
```
    """

    permission_classes = [IsAuthenticated, IsNotViewer]

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.voorcalculatie_service = VoorcalculatieService()

    @extend_schema(
        summary="Voorcalculatie maken",
        description=(
            "Berekent normuren per scope uit de offerteregels en de geschatte "
            "doorlooptijd voor het gekozen team."
        ),
        request=VoorcalculatieRequestSerializer,
        responses={
            200: VoorcalculatieResponseSerializer,
            400: ErrorResponseSerializer,
            404: ErrorResponseSerializer,
        },
        tags=["Projects"],
    )
    def post(self, request, project_id: int):
        try:
            serializer = VoorcalculatieRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data

            project = self.voorcalculatie_service.get_project(project_id)
            voorcalculatie = self.voorcalculatie_service.create_for_project(
                project,
                team_grootte=data["team_grootte"],
                effectieve_uren_per_dag=data["effectieve_uren_per_dag"],
            )
            return Response(
                {"ok": True, "voorcalculatie": VoorcalculatieSerializer(voorcalculatie).data},
                status=status.HTTP_200_OK,
            )

        except Exception as e:
            return self._handle_exception(e)


class NacalculatieAPIView(BaseProjectAPIView):
    """
    **Endpoints:**
    - GET  /api/v1/projects/{project_id}/nacalculatie/ - report, nothing is saved
    - POST /api/v1/projects/{project_id}/nacalculatie/ - compute and save
    """

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.nacalculatie_service = NacalculatieService()

    def get_permissions(self):
        if self.request.method == "POST":
            return [IsAuthenticated(), IsNotViewer()]
        return super().get_permissions()

    @extend_schema(
        summary="Nacalculatie bekijken",
        description="Vergelijkt geplande met geregistreerde uren zonder iets op te slaan.",
        responses={200: NacalculatieReportResponseSerializer, 404: ErrorResponseSerializer},
        tags=["Projects"],
    )
    def get(self, request, project_id: int):
        try:
            project = self.nacalculatie_service.get_project(project_id)
            result = self.nacalculatie_service.compute(project)
            return Response(
                {"ok": True, "nacalculatie": result.to_dict()}, status=status.HTTP_200_OK
            )

        except Exception as e:
            return self._handle_exception(e)

    @extend_schema(
        summary="Nacalculatie opslaan",
        description="Een afgerond project krijgt daarna de status nagecalculeerd.",
        request=NacalculatieSaveSerializer,
        responses={200: NacalculatieSaveResponseSerializer, 404: ErrorResponseSerializer},
        tags=["Projects"],
    )
    def post(self, request, project_id: int):
        try:
            serializer = NacalculatieSaveSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            project = self.nacalculatie_service.get_project(project_id)
            nacalculatie, result = self.nacalculatie_service.save(
                project, conclusies=serializer.validated_data.get("conclusies")
            )
            return Response(
                {
                    "ok": True,
                    "nacalculatie": result.to_dict(),
                    "opgeslagen": NacalculatieSerializer(nacalculatie).data,
                    "project_status": project.status,
                },
                status=status.HTTP_200_OK,
            )

        except Exception as e:
            return self._handle_exception(e)


class NacalculatieConclusieAPIView(BaseProjectAPIView):
    """
    **Endpoint:** POST /api/v1/projects/{project_id}/nacalculatie/conclusie/
    """

    permission_classes = [IsAuthenticated, IsNotViewer]

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.nacalculatie_service = NacalculatieService()

    @extend_schema(
        summary="Conclusie toevoegen",
        request=ConclusieSerializer,
        responses={
            200: NacalculatieConclusieResponseSerializer,
            400: ErrorResponseSerializer,
            404: ErrorResponseSerializer,
        },
        tags=["Projects"],
    )
    def post(self, request, project_id: int):
        try:
            serializer = ConclusieSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            project = self.nacalculatie_service.get_project(project_id)
            nacalculatie = self.nacalculatie_service.add_conclusie(
                project, serializer.validated_data["conclusie"]
            )
            return Response(
                {"ok": True, "opgeslagen": NacalculatieSerializer(nacalculatie).data},
                status=status.HTTP_200_OK,
            )

        except Exception as e:
            return self._handle_exception(e)
