"""
Default reference data.

DEFAULT_NORMUREN is created per company on demand,
DEFAULT_CORRECTIEFACTOREN once as system defaults (company = NULL).
MATERIAAL_CATALOGUS holds the sale prices of the materials
the calculators price without a norm-hour.
"""

from decimal import Decimal
from typing import NamedTuple


class NormUurDefault(NamedTuple):
    scope: str
    activiteit: str
    normuur_per_eenheid: Decimal
    eenheid: str


class MateriaalPrijs(NamedTuple):
    omschrijving: str
    prijs: Decimal
    eenheid: str
    verliespercentage: Decimal = Decimal("0")


def _n(scope: str, activiteit: str, waarde: str, eenheid: str) -> NormUurDefault:
    return NormUurDefault(scope, activiteit, Decimal(waarde), eenheid)


DEFAULT_NORMUREN = (
    # Grondwerk
    _n("grondwerk", "Ontgraven licht", "0.15", "m²"),
    _n("grondwerk", "Ontgraven standaard", "0.25", "m²"),
    _n("grondwerk", "Ontgraven zwaar", "0.4", "m²"),
    _n("grondwerk", "Grond afvoeren", "0.1", "m³"),
    # Bestrating
    _n("bestrating", "Tegels leggen", "0.35", "m²"),
    _n("bestrating", "Klinkers leggen", "0.45", "m²"),
    _n("bestrating", "Natuursteen leggen", "0.55", "m²"),
    _n("bestrating", "Zandbed aanbrengen", "0.1", "m²"),
    _n("bestrating", "Opsluitbanden plaatsen", "0.25", "m"),
    # Borders
    _n("borders", "Grondbewerking border", "0.2", "m²"),
    _n("borders", "Planten laag", "0.15", "m²"),
    _n("borders", "Planten gemiddeld", "0.25", "m²"),
    _n("borders", "Planten hoog", "0.4", "m²"),
    _n("borders", "Schors aanbrengen", "0.08", "m²"),
    # Gras
    _n("gras", "Graszoden leggen", "0.12", "m²"),
    _n("gras", "Gras zaaien", "0.05", "m²"),
    _n("gras", "Ondergrond bewerken", "0.15", "m²"),
    _n("gras", "Kunstgras leggen", "0.25", "m²"),
    # Houtwerk
    _n("houtwerk", "Schutting plaatsen", "0.8", "m"),
    _n("houtwerk", "Vlonder leggen", "0.6", "m²"),
    _n("houtwerk", "Pergola bouwen", "4.0", "stuk"),
    _n("houtwerk", "Fundering standaard", "0.5", "stuk"),
    _n("houtwerk", "Fundering zwaar", "0.8", "stuk"),
    # Water & elektra
    _n("water_elektra", "Sleuf graven", "0.3", "m"),
    _n("water_elektra", "Kabel leggen", "0.1", "m"),
    _n("water_elektra", "Armatuur plaatsen", "0.5", "stuk"),
    _n("water_elektra", "Sleuf herstellen", "0.2", "m"),
    # Onderhoud
    _n("gras_onderhoud", "Maaien", "0.02", "m²"),
    _n("gras_onderhoud", "Kanten steken", "0.05", "m"),
    _n("gras_onderhoud", "Verticuteren", "0.03", "m²"),
    _n("borders_onderhoud", "Wieden weinig", "0.08", "m²"),
    _n("borders_onderhoud", "Wieden gemiddeld", "0.15", "m²"),
    _n("borders_onderhoud", "Wieden veel", "0.25", "m²"),
    _n("borders_onderhoud", "Snoei licht", "0.1", "m²"),
    _n("borders_onderhoud", "Snoei zwaar", "0.2", "m²"),
    _n("heggen_onderhoud", "Heg snoeien", "0.15", "m³"),
    _n("heggen_onderhoud", "Snoeisel afvoeren", "0.1", "m³"),
    _n("bomen_onderhoud", "Boom snoeien licht", "0.5", "stuk"),
    _n("bomen_onderhoud", "Boom snoeien zwaar", "1.5", "stuk"),
    _n("bomen_onderhoud", "Snoeihout afvoeren", "1.0", "m³"),
    _n("overig_onderhoud", "Terras reinigen", "0.05", "m²"),
)

# (type, waarde, factor)
DEFAULT_CORRECTIEFACTOREN = (
    ("bereikbaarheid", "goed", Decimal("1.0")),
    ("bereikbaarheid", "beperkt", Decimal("1.2")),
    ("bereikbaarheid", "slecht", Decimal("1.5")),
    ("complexiteit", "laag", Decimal("1.0")),
    ("complexiteit", "gemiddeld", Decimal("1.15")),
    ("complexiteit", "hoog", Decimal("1.3")),
    ("intensiteit", "weinig", Decimal("0.8")),
    ("intensiteit", "gemiddeld", Decimal("1.0")),
    ("intensiteit", "veel", Decimal("1.3")),
    ("snijwerk", "laag", Decimal("1.0")),
    ("snijwerk", "gemiddeld", Decimal("1.2")),
    ("snijwerk", "hoog", Decimal("1.4")),
    ("achterstalligheid", "laag", Decimal("1.0")),
    ("achterstalligheid", "gemiddeld", Decimal("1.3")),
    ("achterstalligheid", "hoog", Decimal("1.6")),
    ("hoogteverschil", "geen", Decimal("1.0")),
    ("hoogteverschil", "licht", Decimal("1.1")),
    ("hoogteverschil", "matig", Decimal("1.25")),
    ("hoogteverschil", "sterk", Decimal("1.5")),
    ("diepte", "licht", Decimal("1.0")),
    ("diepte", "standaard", Decimal("1.5")),
    ("diepte", "zwaar", Decimal("2.0")),
    ("hoogte", "laag", Decimal("1.0")),
    ("hoogte", "middel", Decimal("1.3")),
    ("hoogte", "hoog", Decimal("1.6")),
    ("bodem", "open", Decimal("1.2")),
    ("bodem", "bedekt", Decimal("0.8")),
    ("snoei", "zijkanten", Decimal("0.6")),
    ("snoei", "bovenkant", Decimal("0.5")),
    ("snoei", "beide", Decimal("1.0")),
)

MATERIAAL_CATALOGUS = {
    "bodembedekker": MateriaalPrijs(
        "Bodembedekker (pot 9cm)", Decimal("4.50"), "stuk", Decimal("5")
    ),
    "boomschors": MateriaalPrijs(
        "Boomschors 10-40mm", Decimal("75.00"), "m³", Decimal("5")
    ),
    "graszoden": MateriaalPrijs("Graszoden", Decimal("7.50"), "m²", Decimal("5")),
    "graszaad": MateriaalPrijs("Graszaad", Decimal("60.00"), "kg", Decimal("10")),
    "schuttingplank": MateriaalPrijs(
        "Schuttingplank 180x15cm", Decimal("7.50"), "stuk", Decimal("5")
    ),
    "schuttingpaal": MateriaalPrijs(
        "Schuttingpaal 7x7x270cm", Decimal("25.00"), "stuk", Decimal("3")
    ),
    "vlonderdeel": MateriaalPrijs(
        "Vlonderdeel hardhout 21x145mm", Decimal("16.00"), "m", Decimal("8")
    ),
    "betonpoer": MateriaalPrijs(
        "Betonpoer 30x30x30cm", Decimal("16.00"), "stuk", Decimal("3")
    ),
    "kabel": MateriaalPrijs("Kabel 3x1,5 grond", Decimal("3.50"), "m", Decimal("5")),
    "grondspot": MateriaalPrijs("Grondspot LED", Decimal("75.00"), "stuk", Decimal("2")),
    "lasdoos": MateriaalPrijs(
        "Lasdoos waterdicht", Decimal("12.00"), "stuk", Decimal("5")
    ),
}
