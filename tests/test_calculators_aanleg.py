from decimal import Decimal

import pytest
from conftest import make_context

from app_calculations.calculators import (
    RegelBuilder,
    calculate_offerte_regels,
    garantie_pakket_regel,
    get_calculator,
    offerte_overhead_regel,
)
from app_calculations.calculators.aanleg import (
    calculate_bestrating,
    calculate_borders,
    calculate_gras,
    calculate_grondwerk,
    calculate_houtwerk,
    calculate_specials,
    calculate_water_elektra,
)
from app_calculations.defaults import MateriaalPrijs
from app_calculations.exceptions import InvalidScopeDataError, UnknownScopeError


@pytest.fixture
def grondwerk_context():
    return make_context(
        normuren=[
            ("grondwerk", "Ontgraven standaard", "0.5"),
            ("grondwerk", "Grond afvoeren", "0.1"),
        ],
        factors=[
            ("bereikbaarheid", "beperkt", "1.2"),
            ("diepte", "standaard", "1.0"),
        ],
        bereikbaarheid="beperkt",
    )


class TestGrondwerk:
    def test_excavation_with_minigraver(self, grondwerk_context):
        regels = calculate_grondwerk(
            {"oppervlakte": Decimal("25"), "diepte": "standaard"}, grondwerk_context
        )

        assert len(regels) == 2
        ontgraven, machine = regels

        assert ontgraven.id == "grondwerk-ontgraven-standaard"
        assert ontgraven.type == "arbeid"
        assert ontgraven.eenheid == "uur"
        assert ontgraven.hoeveelheid == Decimal("15.00")
        assert ontgraven.prijs_per_eenheid == Decimal("45")
        assert ontgraven.totaal == Decimal("675.00")

        assert machine.omschrijving == "Machine-uren minigraver"
        assert machine.type == "machine"
        assert machine.hoeveelheid == Decimal("1.25")
        assert machine.totaal == Decimal("93.75")

    def test_no_minigraver_up_to_threshold(self, grondwerk_context):
        regels = calculate_grondwerk({"oppervlakte": 20}, grondwerk_context)
        assert [r.type for r in regels] == ["arbeid"]

    def test_soil_disposal(self, grondwerk_context):
        regels = calculate_grondwerk(
            {"oppervlakte": 25, "diepte": "standaard", "afvoer_grond": True},
            grondwerk_context,
        )

        afvoer = regels[-1]
        assert afvoer.omschrijving == "Afvoerkosten grond"
        assert afvoer.hoeveelheid == Decimal("8.75")
        assert afvoer.totaal == Decimal("306.25")

    def test_missing_norm_gives_zero_hours(self):
        regels = calculate_grondwerk({"oppervlakte": 10, "diepte": "zwaar"}, make_context())

        assert regels[0].hoeveelheid == Decimal("0.00")
        assert regels[0].totaal == Decimal("0.00")

    @pytest.mark.parametrize(
        "data",
        [{}, {"oppervlakte": 0}, {"oppervlakte": -5}, {"oppervlakte": 10, "diepte": "diep"}],
    )
    def test_invalid_input(self, data, grondwerk_context):
        with pytest.raises(InvalidScopeDataError):
            calculate_grondwerk(data, grondwerk_context)

    def test_same_input_gives_identical_lines(self, grondwerk_context):
        data = {"oppervlakte": "25", "diepte": "standaard", "afvoer_grond": True}
        assert calculate_grondwerk(data, grondwerk_context) == calculate_grondwerk(
            data, grondwerk_context
        )


class TestBestrating:
    NORMUREN = [
        ("bestrating", "Zandbed aanbrengen", "0.1"),
        ("bestrating", "Tegels leggen", "0.35"),
        ("bestrating", "Opsluitbanden plaatsen", "0.25"),
    ]

    def test_zandbed_and_laying(self):
        regels = calculate_bestrating(
            {
                "oppervlakte": 10,
                "type_bestrating": "tegel",
                "snijwerk": "laag",
                "onderbouw": {"type": "zandbed", "dikte_onderlaag": 5},
            },
            make_context(normuren=self.NORMUREN),
        )

        assert [r.omschrijving for r in regels] == [
            "Zandbed 5cm",
            "Aanbrengen onderbouw",
            "Leggen tegel (snijwerk: laag)",
        ]
        zandbed, onderbouw, leggen = regels
        assert zandbed.hoeveelheid == Decimal("0.55")
        assert zandbed.totaal == Decimal("13.75")
        assert onderbouw.hoeveelheid == Decimal("1.00")
        assert leggen.hoeveelheid == Decimal("3.50")

    def test_foundation_and_edging(self):
        regels = calculate_bestrating(
            {
                "oppervlakte": 16,
                "type_bestrating": "tegel",
                "onderbouw": {
                    "type": "zand_fundering",
                    "dikte_onderlaag": 5,
                    "opsluitbanden": True,
                },
            },
            make_context(normuren=self.NORMUREN),
        )
        by_omschrijving = {r.omschrijving: r for r in regels}

        fundering = by_omschrijving["Funderingsmateriaal (zand fundering)"]
        assert fundering.hoeveelheid == Decimal("2.64")
        assert fundering.totaal == Decimal("92.40")

        banden = by_omschrijving["Opsluitbanden"]
        assert banden.hoeveelheid == Decimal("16.00")
        assert banden.totaal == Decimal("128.00")
        assert by_omschrijving["Plaatsen opsluitbanden"].hoeveelheid == Decimal("4.00")

    def test_snijwerk_factor_on_laying_only(self):
        context = make_context(
            normuren=self.NORMUREN, factors=[("snijwerk", "hoog", "1.4")]
        )
        regels = calculate_bestrating(
            {
                "oppervlakte": 10,
                "type_bestrating": "tegel",
                "snijwerk": "hoog",
                "onderbouw": {"dikte_onderlaag": 5},
            },
            context,
        )

        assert regels[1].hoeveelheid == Decimal("1.00")
        assert regels[2].hoeveelheid == Decimal("5.00")

    def test_dikte_required(self):
        with pytest.raises(InvalidScopeDataError):
            calculate_bestrating(
                {"oppervlakte": 10, "type_bestrating": "tegel", "onderbouw": {}},
                make_context(),
            )


class TestBorders:
    def test_planting_and_schors(self):
        context = make_context(
            normuren=[
                ("borders", "Grondbewerking border", "0.2"),
                ("borders", "Planten gemiddeld", "0.25"),
                ("borders", "Schors aanbrengen", "0.08"),
            ]
        )
        regels = calculate_borders(
            {"oppervlakte": 20, "beplantingsintensiteit": "gemiddeld", "afwerking": "schors"},
            context,
        )
        by_omschrijving = {r.omschrijving: r for r in regels}

        assert by_omschrijving["Grondbewerking border"].hoeveelheid == Decimal("4.00")
        assert by_omschrijving["Beplanten (gemiddeld intensiteit)"].hoeveelheid == Decimal("5.00")

        planten = by_omschrijving["Bodembedekker (pot 9cm)"]
        assert planten.hoeveelheid == Decimal("126.00")
        assert planten.totaal == Decimal("567.00")

        schors = by_omschrijving["Boomschors 10-40mm"]
        assert schors.hoeveelheid == Decimal("1.05")
        assert schors.totaal == Decimal("78.75")


class TestGras:
    def test_zaaien(self):
        regels = calculate_gras({"oppervlakte": 100, "type": "zaaien"}, make_context())
        zaad = regels[-1]

        assert zaad.omschrijving == "Graszaad"
        assert zaad.hoeveelheid == Decimal("3.85")
        assert zaad.totaal == Decimal("231.00")

    def test_drainage_needs_meters(self):
        regels = calculate_gras(
            {"oppervlakte": 50, "drainage": True, "drainage_meters": 0}, make_context()
        )
        assert "PVC drainagebuis" not in [r.omschrijving for r in regels]

    def test_material_catalogue_can_be_replaced(self):
        context = make_context(
            materiaal_prijzen={
                "graszoden": MateriaalPrijs("Graszoden premium", Decimal("9.00"), "m²"),
            }
        )
        regels = calculate_gras({"oppervlakte": 10, "type": "graszoden"}, context)

        zoden = regels[-1]
        assert zoden.omschrijving == "Graszoden premium"
        assert zoden.totaal == Decimal("90.00")


class TestHoutwerk:
    def test_schutting(self):
        context = make_context(
            normuren=[
                ("houtwerk", "Schutting plaatsen", "0.8"),
                ("houtwerk", "Fundering standaard", "0.5"),
            ]
        )
        regels = calculate_houtwerk({"type_houtwerk": "schutting", "afmeting": 10}, context)
        by_omschrijving = {r.omschrijving: r for r in regels}

        assert by_omschrijving["Schutting plaatsen"].hoeveelheid == Decimal("8.00")
        assert by_omschrijving["Schuttingplank 180x15cm"].hoeveelheid == Decimal("63.00")
        assert by_omschrijving["Schuttingpaal 7x7x270cm"].hoeveelheid == Decimal("6.18")
        assert by_omschrijving["Fundering plaatsen (standaard)"].hoeveelheid == Decimal("3.00")
        assert by_omschrijving["Betonpoer 30x30x30cm"].totaal == Decimal("98.88")

    def test_pergola_has_four_foundation_points(self):
        context = make_context(normuren=[("houtwerk", "Fundering zwaar", "0.8")])
        regels = calculate_houtwerk(
            {"type_houtwerk": "pergola", "afmeting": 1, "fundering": "zwaar"}, context
        )

        fundering = next(r for r in regels if r.omschrijving.startswith("Fundering"))
        assert fundering.hoeveelheid == Decimal("3.25")


class TestWaterElektraEnSpecials:
    def test_no_lighting_no_lines(self):
        assert calculate_water_elektra({"verlichting": "geen", "aantal_punten": 4}, make_context()) == []

    def test_trenches_per_light_point(self):
        context = make_context(normuren=[("water_elektra", "Sleuf graven", "0.3")])
        regels = calculate_water_elektra(
            {"verlichting": "basis", "aantal_punten": 4, "sleuven_nodig": True}, context
        )
        by_omschrijving = {r.omschrijving: r for r in regels}

        assert by_omschrijving["Sleuf graven"].hoeveelheid == Decimal("6.00")
        assert by_omschrijving["Kabel 3x1,5 grond"].hoeveelheid == Decimal("21.00")
        assert by_omschrijving["Grondspot LED"].hoeveelheid == Decimal("4.08")

    def test_specials(self):
        regels = calculate_specials(
            {"items": [{"type": "jacuzzi"}, {"type": "other", "omschrijving": "Buitenkeuken"}]},
            make_context(),
        )

        assert [(r.omschrijving, r.hoeveelheid) for r in regels] == [
            ("Jacuzzi plaatsen", Decimal("8.00")),
            ("Buitenkeuken", Decimal("4.00")),
        ]


class TestRegistry:
    def test_unknown_scope_for_type(self):
        with pytest.raises(UnknownScopeError):
            get_calculator("onderhoud", "grondwerk")

    def test_scope_without_data_is_skipped(self, grondwerk_context):
        regels = calculate_offerte_regels(
            "aanleg",
            ["grondwerk", "bestrating"],
            {"grondwerk": {"oppervlakte": 25}},
            grondwerk_context,
        )
        assert {r.scope for r in regels} == {"grondwerk"}

    def test_unknown_scope_raises_even_without_data(self, grondwerk_context):
        with pytest.raises(UnknownScopeError):
            calculate_offerte_regels("aanleg", ["vijver"], {}, grondwerk_context)

    def test_repeated_scope_is_calculated_once(self, grondwerk_context):
        data = {"grondwerk": {"oppervlakte": 25}}
        once = calculate_offerte_regels("aanleg", ["grondwerk"], data, grondwerk_context)
        twice = calculate_offerte_regels(
            "aanleg", ["grondwerk", "grondwerk"], data, grondwerk_context
        )

        assert twice == once
        assert len({r.id for r in twice}) == len(twice)

    def test_overhead_line(self):
        regel = offerte_overhead_regel()
        assert regel.scope == "algemeen"
        assert regel.eenheid == "vast"
        assert regel.totaal == Decimal("200.00")

    def test_garantie_pakket(self):
        regel = garantie_pakket_regel("Premium", "350")
        assert regel.id == "garantie-garantiepakket-premium"
        assert regel.omschrijving == "Garantiepakket: Premium"
        assert regel.totaal == Decimal("350.00")


def test_repeated_description_gets_position_suffix():
    builder = RegelBuilder("overig", make_context())
    builder.arbeid("Bladruimen", Decimal("1"))
    builder.arbeid("Bladruimen", Decimal("1"))

    assert [r.id for r in builder.build()] == ["overig-bladruimen", "overig-bladruimen-2"]


def test_regel_dict_round_trip(grondwerk_context):
    regel = calculate_grondwerk({"oppervlakte": 25}, grondwerk_context)[0]
    data = regel.to_dict()

    assert data["totaal"] == "675.00"
    assert type(regel).from_dict(data) == regel
