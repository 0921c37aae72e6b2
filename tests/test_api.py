import pytest
from rest_framework import status

from app_calculations.views import (
    CorrectieFactorListAPIView,
    CorrectieFactorResetAPIView,
    NormUurDetailAPIView,
    NormUurListAPIView,
    OfferteCalculateAPIView,
    OfferteTotalsAPIView,
)
from app_projects.views import (
    NacalculatieAPIView,
    NacalculatieConclusieAPIView,
    VoorcalculatieAPIView,
)

pytestmark = pytest.mark.django_db

GRONDWERK_REQUEST = {
    "type": "aanleg",
    "scopes": ["grondwerk"],
    "scope_data": {"grondwerk": {"oppervlakte": 25, "diepte": "standaard"}},
    "bereikbaarheid": "beperkt",
}


class TestOfferteCalculateAPI:
    def test_calculate(self, call_api, medewerker, grondwerk_reference):
        response = call_api(OfferteCalculateAPIView, "post", medewerker, GRONDWERK_REQUEST)

        assert response.status_code == status.HTTP_200_OK
        assert response.data["ok"] is True
        assert response.data["regels"][0]["id"] == "grondwerk-ontgraven-standaard"
        assert response.data["regels"][0]["totaal"] == "675.00"
        assert response.data["totals"]["subtotaal"] == "768.75"
        assert response.data["totals"]["totaal_incl_btw"] == "1069.71"
        assert response.data["per_scope"][0]["label"] == "Grondwerk"

    def test_viewer_is_refused(self, call_api, viewer, grondwerk_reference):
        response = call_api(OfferteCalculateAPIView, "post", viewer, GRONDWERK_REQUEST)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data == {"ok": False, "error": "Dit account heeft alleen leesrechten."}

    def test_requires_login(self, call_api):
        response = call_api(OfferteCalculateAPIView, "post", None, GRONDWERK_REQUEST)

        assert response.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)
        assert response.data["ok"] is False

    def test_zero_area(self, call_api, medewerker):
        payload = {
            **GRONDWERK_REQUEST,
            "scope_data": {"grondwerk": {"oppervlakte": 0}},
        }
        response = call_api(OfferteCalculateAPIView, "post", medewerker, payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "Oppervlakte moet groter dan 0 zijn" in response.data["error"]

    def test_scope_of_other_offerte_type(self, call_api, medewerker):
        payload = {**GRONDWERK_REQUEST, "scopes": ["heggen"]}
        response = call_api(OfferteCalculateAPIView, "post", medewerker, payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "heggen" in response.data["error"]

    def test_no_scopes(self, call_api, medewerker):
        payload = {**GRONDWERK_REQUEST, "scopes": []}
        response = call_api(OfferteCalculateAPIView, "post", medewerker, payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "Selecteer minimaal één scope" in response.data["error"]

    def test_duplicate_scope(self, call_api, medewerker, grondwerk_reference):
        payload = {**GRONDWERK_REQUEST, "scopes": ["grondwerk", "grondwerk"]}
        response = call_api(OfferteCalculateAPIView, "post", medewerker, payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "meer dan één keer geselecteerd: grondwerk" in response.data["error"]

    def test_fertilising_lines_carry_their_own_margin(self, call_api, medewerker):
        payload = {
            "type": "onderhoud",
            "scopes": ["bemesting"],
            "scope_data": {"bemesting": {"oppervlakte": 100}},
        }
        response = call_api(OfferteCalculateAPIView, "post", medewerker, payload)

        assert response.status_code == status.HTTP_200_OK
        assert [regel["marge_percentage"] for regel in response.data["regels"]] == ["70", "70"]
        assert response.data["totals"]["subtotaal"] == "102.50"
        assert response.data["totals"]["marge"] == "71.75"
        assert response.data["totals"]["marge_percentage"] == "70.00"

    def test_mole_control_requires_package(self, call_api, medewerker):
        payload = {
            "type": "onderhoud",
            "scopes": ["mollenbestrijding"],
            "scope_data": {"mollenbestrijding": {"aanvullend": {"terugkeer_check": True}}},
        }
        response = call_api(OfferteCalculateAPIView, "post", medewerker, payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "Kies een pakket" in response.data["error"]


class TestOfferteTotalsAPI:
    REGEL = {
        "id": "grondwerk-ontgraven-standaard",
        "scope": "grondwerk",
        "omschrijving": "Ontgraven (standaard)",
        "eenheid": "uur",
        "hoeveelheid": "10",
        "prijs_per_eenheid": "45",
        "totaal": "450",
        "type": "arbeid",
    }

    def test_explicit_percentages(self, call_api, medewerker):
        response = call_api(
            OfferteTotalsAPIView,
            "post",
            medewerker,
            {"regels": [self.REGEL], "marge_percentage": 10, "btw_percentage": 21},
        )

        assert response.status_code == status.HTTP_200_OK
        totals = response.data["totals"]
        assert totals["marge"] == "45.00"
        assert totals["totaal_ex_btw"] == "495.00"
        assert totals["btw"] == "103.95"
        assert totals["totaal_incl_btw"] == "598.95"

    def test_company_defaults(self, call_api, medewerker):
        response = call_api(OfferteTotalsAPIView, "post", medewerker, {"regels": [self.REGEL]})

        assert response.data["totals"]["marge"] == "67.50"
        assert response.data["totals"]["btw"] == "108.68"

    def test_negative_margin(self, call_api, medewerker):
        response = call_api(
            OfferteTotalsAPIView,
            "post",
            medewerker,
            {"regels": [self.REGEL], "marge_percentage": -5},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["ok"] is False


class TestCorrectieFactorAPI:
    def test_list_merged(self, call_api, viewer, grondwerk_reference):
        response = call_api(CorrectieFactorListAPIView, "get", viewer, {"type": "diepte"})

        assert response.status_code == status.HTTP_200_OK
        assert response.data["correctiefactoren"] == [
            {
                "type": "diepte",
                "waarde": "standaard",
                "factor": "1.000",
                "systeem_factor": "1.500",
                "is_override": True,
            }
        ]

    def test_list_unknown_type(self, call_api, viewer):
        response = call_api(CorrectieFactorListAPIView, "get", viewer, {"type": "onbekend"})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_medewerker_cannot_override(self, call_api, medewerker, grondwerk_reference):
        response = call_api(
            CorrectieFactorListAPIView,
            "post",
            medewerker,
            {"type": "bereikbaarheid", "waarde": "beperkt", "factor": "1.4"},
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data["error"] == "Alleen beheerders mogen deze gegevens wijzigen."

    def test_beheerder_overrides(self, call_api, beheerder, grondwerk_reference):
        response = call_api(
            CorrectieFactorListAPIView,
            "post",
            beheerder,
            {"type": "bereikbaarheid", "waarde": "beperkt", "factor": "1.4"},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["correctiefactor"]["factor"] == "1.400"
        assert response.data["correctiefactor"]["systeem_factor"] == "1.200"
        assert response.data["correctiefactor"]["is_override"] is True

    def test_zero_factor(self, call_api, beheerder):
        response = call_api(
            CorrectieFactorListAPIView,
            "post",
            beheerder,
            {"type": "bereikbaarheid", "waarde": "beperkt", "factor": "0"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "Factor moet groter dan 0 zijn" in response.data["error"]

    def test_reset(self, call_api, beheerder, grondwerk_reference):
        payload = {"type": "diepte", "waarde": "standaard"}

        response = call_api(CorrectieFactorResetAPIView, "post", beheerder, payload)
        assert response.status_code == status.HTTP_200_OK
        assert response.data["correctiefactoren"][0]["factor"] == "1.500"
        assert response.data["correctiefactoren"][0]["is_override"] is False

        response = call_api(CorrectieFactorResetAPIView, "post", beheerder, payload)
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["ok"] is False


class TestNormUurAPI:
    NORMUUR = {
        "scope": "gras",
        "activiteit": "Gras zaaien",
        "normuur_per_eenheid": "0.05",
        "eenheid": "m²",
    }

    def test_list_per_company(self, call_api, medewerker, grondwerk_reference, other_company):
        response = call_api(NormUurListAPIView, "get", medewerker, {"scope": "grondwerk"})
        assert [n["activiteit"] for n in response.data["normuren"]] == ["Ontgraven standaard"]

        response = call_api(NormUurListAPIView, "get", medewerker, tenant=other_company)
        assert response.data["normuren"] == []

    def test_create_and_duplicate(self, call_api, beheerder):
        response = call_api(NormUurListAPIView, "post", beheerder, self.NORMUUR)
        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["normuur"]["activiteit"] == "Gras zaaien"

        response = call_api(NormUurListAPIView, "post", beheerder, self.NORMUUR)
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["ok"] is False

    def test_medewerker_cannot_create(self, call_api, medewerker):
        response = call_api(NormUurListAPIView, "post", medewerker, self.NORMUUR)
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_update_and_delete(self, call_api, beheerder):
        normuur_id = call_api(NormUurListAPIView, "post", beheerder, self.NORMUUR).data["normuur"]["id"]

        response = call_api(
            NormUurDetailAPIView,
            "patch",
            beheerder,
            {"normuur_per_eenheid": "0.08"},
            normuur_id=normuur_id,
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.data["normuur"]["normuur_per_eenheid"] == "0.0800"

        response = call_api(NormUurDetailAPIView, "delete", beheerder, normuur_id=normuur_id)
        assert response.status_code == status.HTTP_200_OK

        response = call_api(NormUurDetailAPIView, "delete", beheerder, normuur_id=normuur_id)
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_update_missing(self, call_api, beheerder):
        response = call_api(
            NormUurDetailAPIView,
            "patch",
            beheerder,
            {"normuur_per_eenheid": "0.08"},
            normuur_id=999,
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestVoorcalculatieAPI:
    def test_create(self, call_api, medewerker, project):
        response = call_api(
            VoorcalculatieAPIView, "post", medewerker, {"team_grootte": 2}, project_id=project.pk
        )

        assert response.status_code == status.HTTP_200_OK
        voorcalculatie = response.data["voorcalculatie"]
        assert voorcalculatie["norm_uren_totaal"] == "15.00"
        assert voorcalculatie["geschatte_dagen"] == 2
        assert voorcalculatie["norm_uren_per_scope"] == {"grondwerk": "15.00"}

    def test_invalid_team(self, call_api, medewerker, project):
        response = call_api(
            VoorcalculatieAPIView, "post", medewerker, {"team_grootte": 5}, project_id=project.pk
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "Teamgrootte moet 2, 3 of 4 zijn" in response.data["error"]

    def test_unknown_project(self, call_api, medewerker):
        response = call_api(
            VoorcalculatieAPIView, "post", medewerker, {"team_grootte": 2}, project_id=999
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestNacalculatieAPI:
    def test_report_without_voorcalculatie(self, call_api, viewer, project):
        response = call_api(NacalculatieAPIView, "get", viewer, project_id=project.pk)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["ok"] is False

    def test_report_and_save(self, call_api, medewerker, viewer, project):
        call_api(VoorcalculatieAPIView, "post", medewerker, {"team_grootte": 2}, project_id=project.pk)

        response = call_api(NacalculatieAPIView, "get", viewer, project_id=project.pk)
        assert response.status_code == status.HTTP_200_OK
        assert response.data["nacalculatie"]["geplande_uren"] == "15.00"

        response = call_api(NacalculatieAPIView, "post", viewer, project_id=project.pk)
        assert response.status_code == status.HTTP_403_FORBIDDEN

        response = call_api(
            NacalculatieAPIView,
            "post",
            medewerker,
            {"conclusies": "Nog geen uren geschreven"},
            project_id=project.pk,
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.data["opgeslagen"]["conclusies"] == "Nog geen uren geschreven"
        assert response.data["project_status"] == "gepland"

    def test_conclusie(self, call_api, medewerker, project):
        call_api(VoorcalculatieAPIView, "post", medewerker, {"team_grootte": 2}, project_id=project.pk)

        response = call_api(
            NacalculatieConclusieAPIView,
            "post",
            medewerker,
            {"conclusie": "Planning klopte"},
            project_id=project.pk,
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND

        call_api(NacalculatieAPIView, "post", medewerker, project_id=project.pk)

        response = call_api(
            NacalculatieConclusieAPIView, "post", medewerker, {"conclusie": "  "}, project_id=project.pk
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "Conclusie mag niet leeg zijn" in response.data["error"]

        response = call_api(
            NacalculatieConclusieAPIView,
            "post",
            medewerker,
            {"conclusie": "Planning klopte"},
            project_id=project.pk,
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.data["opgeslagen"]["conclusies"] == "Planning klopte"
