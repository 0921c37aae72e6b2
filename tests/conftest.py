from decimal import Decimal

import pytest
from rest_framework.test import APIRequestFactory, force_authenticate

from app_calculations.calculators import CalculationContext
from app_calculations.models import CorrectieFactor, NormUur
from app_calculations.resolver import ReferenceData
from app_projects.models import Offerte, Project
from app_projects.services import OfferteService
from app_tenants.models import Tenant
from app_users.models import User


def make_context(normuren=(), factors=(), overrides=(), uurtarief="45", **kwargs):
    """Calculation context without database access."""
    return CalculationContext(
        reference=ReferenceData.from_records(
            normuren=normuren, overrides=overrides, defaults=factors
        ),
        uurtarief=Decimal(uurtarief),
        **kwargs,
    )


@pytest.fixture
def company(db):
    return Tenant.objects.create(schema_name="groen_bv", name="Groen BV")


@pytest.fixture
def other_company(db):
    return Tenant.objects.create(schema_name="tuin_en_co", name="Tuin & Co")


@pytest.fixture
def grondwerk_reference(company):
    """Norm 0.5 for standard excavation, beperkt 1.2, company diepte override 1.0."""
    NormUur.objects.create(
        company=company,
        scope="grondwerk",
        activiteit="Ontgraven standaard",
        normuur_per_eenheid=Decimal("0.5"),
        eenheid="m²",
    )
    CorrectieFactor.objects.create(
        company=None, type="bereikbaarheid", waarde="beperkt", factor=Decimal("1.2")
    )
    CorrectieFactor.objects.create(
        company=None, type="diepte", waarde="standaard", factor=Decimal("1.5")
    )
    CorrectieFactor.objects.create(
        company=company, type="diepte", waarde="standaard", factor=Decimal("1.0")
    )
    return company


@pytest.fixture
def beheerder(db):
    return User.objects.create_user(username="beheerder", password="test", rol=User.Rol.ADMIN)


@pytest.fixture
def medewerker(db):
    return User.objects.create_user(
        username="medewerker", password="test", rol=User.Rol.MEDEWERKER
    )


@pytest.fixture
def viewer(db):
    return User.objects.create_user(username="viewer", password="test", rol=User.Rol.VIEWER)


@pytest.fixture
def call_api(company):
    """
    Calls an APIView directly, with the company set the way
    TenantMainMiddleware sets it.
    """
    factory = APIRequestFactory()

    def _call(view_class, method, user=None, data=None, tenant=company, **kwargs):
        if method == "get":
            request = factory.get("/", data or {})
        else:
            request = getattr(factory, method)("/", data or {}, format="json")
        request.tenant = tenant
        if user is not None:
            force_authenticate(request, user=user)
        return view_class.as_view()(request, **kwargs)

    return _call


@pytest.fixture
def offerte(grondwerk_reference):
    """Calculated offerte: 25 m² standard excavation, limited access."""
    offerte = Offerte.objects.create(
        offertenummer="OFF-2026-001",
        type="aanleg",
        klant_naam="Fam. de Vries",
        bereikbaarheid="beperkt",
        scopes=["grondwerk"],
        scope_data={"grondwerk": {"oppervlakte": "25", "diepte": "standaard"}},
    )
    return OfferteService().recalculate(offerte, grondwerk_reference)


@pytest.fixture
def project(offerte):
    return Project.objects.create(naam="Tuin de Vries", offerte=offerte)
