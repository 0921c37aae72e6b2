"""
Controllers for the calculation API.

Responsibility:
- Handle HTTP requests
- Validate input with the serializers
- Delegate to the service layer
- Build HTTP responses in the {"ok": ...} envelope

Principles:
- Thin Controller: minimal logic, maximal delegation
- Error Handling: domain exceptions mapped to status codes in one place per view
"""

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from app_calculations.calculators import OfferteRegel
from app_calculations.exceptions import (
    CalculationError,
    CorrectieFactorNotFoundError,
    DuplicateNormUurError,
    InvalidScopeDataError,
    NormUurNotFoundError,
    UnknownScopeError,
)
from app_calculations.serializers import (
    CorrectieFactorEntrySerializer,
    CorrectieFactorListResponseSerializer,
    CorrectieFactorQuerySerializer,
    CorrectieFactorResetSerializer,
    CorrectieFactorResponseSerializer,
    CorrectieFactorUpsertSerializer,
    ErrorResponseSerializer,
    NormUurListResponseSerializer,
    NormUurResponseSerializer,
    NormUurSerializer,
    OfferteCalculationRequestSerializer,
    OfferteCalculationResponseSerializer,
    TotalsRequestSerializer,
    TotalsResponseSerializer,
)
from app_calculations.services import (
    CorrectieFactorEntry,
    OfferteCalculationService,
    ReferenceDataService,
)
from app_users.permissions import IsBeheerder, IsBeheerderOrReadOnly, IsNotViewer
from core.api import format_validation_error, get_request_company

logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "Interne serverfout"


class BaseCalculationAPIView(APIView):
    permission_classes = [IsAuthenticated]

    @staticmethod
    def _error_response(message: str, status_code: int) -> Response:
        """
        Error response in the shared format.

        Args:
            message: error message
            status_code: HTTP status code
        """
        return Response({"ok": False, "error": message}, status=status_code)

    def _handle_exception(self, exc: Exception) -> Response:
        """Maps validation and domain errors to status codes."""
        if isinstance(exc, (ValidationError, DjangoValidationError)):
            detail = exc.detail if isinstance(exc, ValidationError) else exc
            return self._error_response(
                format_validation_error(detail), status.HTTP_400_BAD_REQUEST
            )
        if isinstance(exc, (NormUurNotFoundError, CorrectieFactorNotFoundError)):
            return self._error_response(exc.message, status.HTTP_404_NOT_FOUND)
        if isinstance(exc, (InvalidScopeDataError, UnknownScopeError, DuplicateNormUurError)):
            return self._error_response(exc.message, status.HTTP_400_BAD_REQUEST)
        if isinstance(exc, CalculationError):
            return self._error_response(exc.message, status.HTTP_500_INTERNAL_SERVER_ERROR)

        logger.exception("Onverwachte fout in %s", self.__class__.__name__)
        return self._error_response(SERVER_ERROR_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR)


def _entry_to_dict(entry: CorrectieFactorEntry) -> dict:
    return CorrectieFactorEntrySerializer(entry._asdict()).data


class OfferteCalculateAPIView(BaseCalculationAPIView):
    """
    Calculates the lines and totals of an offerte.

    **Endpoint:** POST /api/v1/calculations/offerte/

    **Request Format:**
```json
    {
        "type": "aanleg",
        "scopes": ["grondwerk"],
        "scope_data": {"grondwerk": {"oppervlakte": 25, "diepte": "standaard"}},
        "bereikbaarheid": "beperkt"
    }
```

    **Response Format:**
```json
    {
        "ok": true,
        "regels": [{"id": "grondwerk-ontgraven-standaard", "totaal": "675.00", ...}],
        "totals": {"subtotaal": "768.75", "totaal_incl_btw": "...", ...},
        "per_scope": [...]
    }
```

    The calculation does not store anything; recalculating the same
    input returns identical lines.
    """

    permission_classes = [IsAuthenticated, IsNotViewer]

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.calc_service = OfferteCalculationService()

    @extend_schema(
        summary="Offerte berekenen",
        description=(
            "Berekent offerteregels per scope met normuren en correctiefactoren "
            "van het bedrijf, en de totalen met marge en btw."
        ),
        request=OfferteCalculationRequestSerializer,
        responses={
            200: OfferteCalculationResponseSerializer,
            400: ErrorResponseSerializer,
            500: ErrorResponseSerializer,
        },
        tags=["Calculations"],
    )
    def post(self, request):
        try:
            serializer = OfferteCalculationRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data

            result = self.calc_service.calculate(
                company=get_request_company(request),
                offerte_type=data["type"],
                scopes=data["scopes"],
                scope_data=data["scope_data"],
                bereikbaarheid=data["bereikbaarheid"],
                achterstalligheid=data.get("achterstalligheid"),
                include_overhead=data["include_overhead"],
                garantie_pakket=data.get("garantie_pakket"),
            )
            return Response({"ok": True, **result.to_dict()}, status=status.HTTP_200_OK)

        except Exception as e:
            return self._handle_exception(e)


class OfferteTotalsAPIView(BaseCalculationAPIView):
    """
    Aggregates a supplied list of lines.

    **Endpoint:** POST /api/v1/calculations/totals/

    Missing percentages are taken from the company settings.
    """

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.calc_service = OfferteCalculationService()

    @extend_schema(
        summary="Totalen berekenen",
        request=TotalsRequestSerializer,
        responses={
            200: TotalsResponseSerializer,
            400: ErrorResponseSerializer,
            500: ErrorResponseSerializer,
        },
        tags=["Calculations"],
    )
    def post(self, request):
        try:
            serializer = TotalsRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data

            regels = [OfferteRegel.from_dict(regel) for regel in data["regels"]]
            totals = self.calc_service.calculate_totals(
                company=get_request_company(request),
                regels=regels,
                marge_percentage=data.get("marge_percentage"),
                btw_percentage=data.get("btw_percentage"),
                scope_marges=data.get("scope_marges"),
            )
            return Response({"ok": True, "totals": totals.to_dict()}, status=status.HTTP_200_OK)

        except Exception as e:
            return self._handle_exception(e)


class CorrectieFactorListAPIView(BaseCalculationAPIView):
    """
    Correction factors of the company.

    **Endpoints:**
    - GET  /api/v1/calculations/correctiefactoren/?type=bereikbaarheid
    - POST /api/v1/calculations/correctiefactoren/ (beheerder)
    """

    permission_classes = [IsBeheerderOrReadOnly]

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.reference_service = ReferenceDataService()

    @extend_schema(
        summary="Correctiefactoren (samengevoegd)",
        description="Systeemstandaarden met de eigen waarden van het bedrijf eroverheen.",
        parameters=[
            OpenApiParameter(
                name="type",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Filter op factortype",
            ),
        ],
        responses={200: CorrectieFactorListResponseSerializer, 400: ErrorResponseSerializer},
        tags=["Reference data"],
    )
    def get(self, request):
        try:
            query = CorrectieFactorQuerySerializer(data=request.query_params)
            query.is_valid(raise_exception=True)

            entries = self.reference_service.list_correctiefactoren(
                get_request_company(request),
                factor_type=query.validated_data.get("type"),
            )
            return Response(
                {"ok": True, "correctiefactoren": [_entry_to_dict(e) for e in entries]},
                status=status.HTTP_200_OK,
            )

        except Exception as e:
            return self._handle_exception(e)

    @extend_schema(
        summary="Eigen correctiefactor opslaan",
        request=CorrectieFactorUpsertSerializer,
        responses={200: CorrectieFactorResponseSerializer, 400: ErrorResponseSerializer},
        tags=["Reference data"],
    )
    def post(self, request):
        try:
            serializer = CorrectieFactorUpsertSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data
            company = get_request_company(request)

            self.reference_service.upsert_correctiefactor(
                company, data["type"], data["waarde"], data["factor"]
            )
            entry = next(
                e
                for e in self.reference_service.get_correctiefactoren_by_type(company, data["type"])
                if e.waarde == data["waarde"]
            )
            return Response(
                {"ok": True, "correctiefactor": _entry_to_dict(entry)},
                status=status.HTTP_200_OK,
            )

        except Exception as e:
            return self._handle_exception(e)


class CorrectieFactorResetAPIView(BaseCalculationAPIView):
    """
    Removes the company value so the system default applies again.

    **Endpoint:** POST /api/v1/calculations/correctiefactoren/reset/
    """

    permission_classes = [IsBeheerder]

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.reference_service = ReferenceDataService()

    @extend_schema(
        summary="Correctiefactor terugzetten naar standaard",
        request=CorrectieFactorResetSerializer,
        responses={
            200: CorrectieFactorListResponseSerializer,
            404: ErrorResponseSerializer,
        },
        tags=["Reference data"],
    )
    def post(self, request):
        try:
            serializer = CorrectieFactorResetSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data
            company = get_request_company(request)

            self.reference_service.reset_correctiefactor_or_raise(
                company, data["type"], data["waarde"]
            )
            entries = self.reference_service.get_correctiefactoren_by_type(company, data["type"])
            return Response(
                {"ok": True, "correctiefactoren": [_entry_to_dict(e) for e in entries]},
                status=status.HTTP_200_OK,
            )

        except Exception as e:
            return self._handle_exception(e)


class NormUurListAPIView(BaseCalculationAPIView):
    """
    Norm-hours of the company.

    **Endpoints:**
    - GET  /api/v1/calculations/normuren/?scope=grondwerk
    - POST /api/v1/calculations/normuren/ (beheerder)
    """

    permission_classes = [IsBeheerderOrReadOnly]

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.reference_service = ReferenceDataService()

    @extend_schema(
        summary="Normuren",
        parameters=[
            OpenApiParameter(
                name="scope",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Filter op scope",
            ),
        ],
        responses={200: NormUurListResponseSerializer},
        tags=["Reference data"],
    )
    def get(self, request):
        try:
            normuren = self.reference_service.list_normuren(
                get_request_company(request),
                scope=request.query_params.get("scope") or None,
            )
            return Response(
                {"ok": True, "normuren": NormUurSerializer(normuren, many=True).data},
                status=status.HTTP_200_OK,
            )

        except Exception as e:
            return self._handle_exception(e)

    @extend_schema(
        summary="Normuur toevoegen",
        request=NormUurSerializer,
        responses={201: NormUurResponseSerializer, 400: ErrorResponseSerializer},
        tags=["Reference data"],
    )
    def post(self, request):
        try:
            serializer = NormUurSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            normuur = self.reference_service.create_normuur(
                get_request_company(request), **serializer.validated_data
            )
            return Response(
                {"ok": True, "normuur": NormUurSerializer(normuur).data},
                status=status.HTTP_201_CREATED,
            )

        except Exception as e:
            return self._handle_exception(e)


class NormUurDetailAPIView(BaseCalculationAPIView):
    """
    **Endpoints:**
    - PATCH  /api/v1/calculations/normuren/{id}/
    - DELETE /api/v1/calculations/normuren/{id}/
    """

    permission_classes = [IsBeheerder]

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.reference_service = ReferenceDataService()

    @extend_schema(
        summary="Normuur wijzigen",
        request=NormUurSerializer,
        responses={
            200: NormUurResponseSerializer,
            400: ErrorResponseSerializer,
            404: ErrorResponseSerializer,
        },
        tags=["Reference data"],
    )
    def patch(self, request, normuur_id: int):
        try:
            serializer = NormUurSerializer(data=request.data, partial=True)
            serializer.is_valid(raise_exception=True)

            normuur = self.reference_service.update_normuur(
                get_request_company(request), normuur_id, **serializer.validated_data
            )
            return Response(
                {"ok": True, "normuur": NormUurSerializer(normuur).data},
                status=status.HTTP_200_OK,
            )

        except Exception as e:
            return self._handle_exception(e)

    @extend_schema(
        summary="Normuur verwijderen",
        responses={200: ErrorResponseSerializer, 404: ErrorResponseSerializer},
        tags=["Reference data"],
    )
    def delete(self, request, normuur_id: int):
        try:
            self.reference_service.delete_normuur(get_request_company(request), normuur_id)
            return Response({"ok": True}, status=status.HTTP_200_OK)

        except Exception as e:
            return self._handle_exception(e)
