from decimal import Decimal

import pytest
from conftest import make_context

from app_calculations.calculators import calculate_offerte_regels
from app_calculations.calculators.registry import CALCULATORS
from app_calculations.defaults import DEFAULT_CORRECTIEFACTOREN, DEFAULT_NORMUREN
from core.utils.numbers import round_money

SCOPE_DATA = {
    "aanleg": {
        "grondwerk": {"oppervlakte": "27.3", "diepte": "zwaar", "afvoer_grond": True},
        "bestrating": {
            "oppervlakte": "33.7",
            "type_bestrating": "klinker",
            "snijwerk": "gemiddeld",
            "onderbouw": {
                "type": "zand_fundering",
                "dikte_onderlaag": 7,
                "opsluitbanden": True,
            },
        },
        "borders": {
            "oppervlakte": "12.4",
            "beplantingsintensiteit": "veel",
            "afwerking": "schors",
            "bodemverbetering": True,
        },
        "gras": {
            "oppervlakte": "61.3",
            "type": "graszoden",
            "drainage": True,
            "drainage_meters": "17.5",
            "opsluitbanden": True,
            "opsluitbanden_meters": 22,
        },
        "houtwerk": {"type_houtwerk": "vlonder", "afmeting": "14.3", "fundering": "zwaar"},
        "water_elektra": {"verlichting": "uitgebreid", "aantal_punten": 5, "sleuven_nodig": True},
        "specials": {"items": [{"type": "sauna"}, {"type": "other", "omschrijving": "Vijver"}]},
    },
    "onderhoud": {
        "gras": {
            "gras_aanwezig": True,
            "gras_oppervlakte": "143.5",
            "maaien": True,
            "kanten_steken": True,
            "verticuteren": True,
        },
        "borders": {
            "border_oppervlakte": "37.2",
            "onderhoudsintensiteit": "veel",
            "onkruid_verwijderen": True,
            "snoei_in_borders": "zwaar",
            "afvoer_groenafval": True,
        },
        "heggen": {
            "lengte": "13.5",
            "hoogte": "2.7",
            "breedte": "0.9",
            "snoei": "zijkanten",
            "afvoer_snoeisel": True,
        },
        "heggen_extended": {
            "lengte": "23.5",
            "hoogte": "4.3",
            "breedte": "1.1",
            "haagsoort": "conifeer",
            "ondergrond": "bestrating",
            "snoeifrequentie": 2,
            "afvoer_snoeisel": True,
        },
        "bomen": {"aantal_bomen": 3, "snoei": "zwaar", "hoogteklasse": "hoog"},
        "bomen_extended": {
            "aantal_bomen": 3,
            "snoei": "zwaar",
            "hoogte_meter": "7.5",
            "inspectie": "gecertificeerd",
            "afvoer": True,
            "kroondiameter": "4.5",
            "nabij_straat": True,
            "nabij_kabels": True,
        },
        "reiniging": {
            "terras_reinigen": True,
            "terras_oppervlakte": "42.5",
            "terras_type": "natuursteen",
            "bladruimen": True,
            "bladruimen_oppervlakte": 130,
            "bladruimen_type": "seizoen",
            "onkruid_bestrating": True,
            "onkruid_oppervlakte": "27.3",
            "onkruid_methode": "chemisch",
            "algereiniging": True,
            "alge_oppervlakte": "18.7",
        },
        "bemesting": {
            "oppervlakte": "233.3",
            "bemestingstype": "bio",
            "frequentie": 3,
            "kalkbehandeling": True,
            "grondanalyse": True,
        },
        "gazonanalyse": {
            "oppervlakte": "613.3",
            "herstelacties": {
                "verticuteren": True,
                "doorzaaien": True,
                "nieuwe_grasmat": True,
                "plaggen": True,
                "bijzaaien_kale_plekken": True,
            },
            "bekalken": True,
            "drainage": True,
        },
        "mollenbestrijding": {
            "pakket": "premium_plus",
            "aanvullend": {
                "gazonherstel": True,
                "geschatte_m2": "17.3",
                "preventief_gaas": True,
                "gaas_oppervlakte": "11.5",
                "terugkeer_check": True,
            },
        },
        "overig": {
            "bladruimen": True,
            "terras_reinigen": True,
            "terras_oppervlakte": "31.3",
            "onkruid_bestrating": True,
            "bestrating_oppervlakte": "22.7",
            "afwatering_controleren": True,
            "aantal_afwateringspunten": 3,
            "overig_uren": "1.3",
        },
    },
}

SCOPES = [
    (offerte_type, scope)
    for offerte_type, calculators in CALCULATORS.items()
    for scope in calculators
]


@pytest.fixture
def context():
    return make_context(
        normuren=[(n.scope, n.activiteit, n.normuur_per_eenheid) for n in DEFAULT_NORMUREN],
        factors=DEFAULT_CORRECTIEFACTOREN,
        bereikbaarheid="beperkt",
        achterstalligheid="hoog",
        uurtarief="47.50",
    )


def test_every_calculator_has_sample_data():
    assert set(SCOPES) == {
        (offerte_type, scope) for offerte_type, data in SCOPE_DATA.items() for scope in data
    }


@pytest.mark.parametrize("offerte_type,scope", SCOPES)
def test_line_invariants(context, offerte_type, scope):
    regels = calculate_offerte_regels(
        offerte_type, [scope], {scope: SCOPE_DATA[offerte_type][scope]}, context
    )

    assert regels
    assert len({r.id for r in regels}) == len(regels)
    for regel in regels:
        assert regel.totaal == round_money(regel.hoeveelheid * regel.prijs_per_eenheid)
        assert regel.hoeveelheid >= 0
        assert regel.totaal >= 0
        if regel.eenheid == "uur":
            assert (regel.hoeveelheid * 4) % 1 == 0
        if regel.type == "machine" and regel.eenheid == "dag":
            assert regel.hoeveelheid == regel.hoeveelheid.to_integral_value()


@pytest.mark.parametrize("offerte_type,scope", SCOPES)
def test_same_input_same_lines(context, offerte_type, scope):
    data = {scope: SCOPE_DATA[offerte_type][scope]}

    first = calculate_offerte_regels(offerte_type, [scope], data, context)
    second = calculate_offerte_regels(offerte_type, [scope], data, context)

    assert first == second
    assert [r.to_dict() for r in first] == [r.to_dict() for r in second]


def test_all_maintenance_scopes_together_have_unique_ids(context):
    scopes = list(CALCULATORS["onderhoud"])
    regels = calculate_offerte_regels("onderhoud", scopes, SCOPE_DATA["onderhoud"], context)

    assert len({r.id for r in regels}) == len(regels)
    assert {r.scope for r in regels} == set(scopes)
    assert sum((r.totaal for r in regels), Decimal("0")) > 0
