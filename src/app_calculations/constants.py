"""
Domain constants for the offerte calculation.

Scope keys, enumerated input values and the fixed rates the
calculators use where no norm-hour applies.
"""

from decimal import Decimal

from django.db import models
from django.utils.translation import gettext_lazy as _


class OfferteType(models.TextChoices):
    AANLEG = "aanleg", _("Aanleg")
    ONDERHOUD = "onderhoud", _("Onderhoud")


class RegelType(models.TextChoices):
    MATERIAAL = "materiaal", _("Materiaal")
    ARBEID = "arbeid", _("Arbeid")
    MACHINE = "machine", _("Machine")


class Bereikbaarheid(models.TextChoices):
    GOED = "goed", _("Goed")
    BEPERKT = "beperkt", _("Beperkt")
    SLECHT = "slecht", _("Slecht")


class Achterstalligheid(models.TextChoices):
    LAAG = "laag", _("Laag")
    GEMIDDELD = "gemiddeld", _("Gemiddeld")
    HOOG = "hoog", _("Hoog")


class FactorType(models.TextChoices):
    BEREIKBAARHEID = "bereikbaarheid", _("Bereikbaarheid")
    COMPLEXITEIT = "complexiteit", _("Complexiteit")
    INTENSITEIT = "intensiteit", _("Intensiteit")
    SNIJWERK = "snijwerk", _("Snijwerk")
    ACHTERSTALLIGHEID = "achterstalligheid", _("Achterstalligheid")
    HOOGTEVERSCHIL = "hoogteverschil", _("Hoogteverschil")
    DIEPTE = "diepte", _("Diepte")
    HOOGTE = "hoogte", _("Hoogte")
    BODEM = "bodem", _("Bodem")
    SNOEI = "snoei", _("Snoei")


# Scope keys per offerte type
AANLEG_SCOPES = (
    "grondwerk",
    "bestrating",
    "borders",
    "gras",
    "houtwerk",
    "water_elektra",
    "specials",
)
ONDERHOUD_SCOPES = (
    "gras",
    "borders",
    "heggen",
    "heggen_extended",
    "bomen",
    "bomen_extended",
    "reiniging",
    "bemesting",
    "gazonanalyse",
    "mollenbestrijding",
    "overig",
)

# Scope keys of norm-hours for maintenance work
NORMUUR_SCOPE_GRAS_ONDERHOUD = "gras_onderhoud"
NORMUUR_SCOPE_BORDERS_ONDERHOUD = "borders_onderhoud"
NORMUUR_SCOPE_HEGGEN_ONDERHOUD = "heggen_onderhoud"
NORMUUR_SCOPE_BOMEN_ONDERHOUD = "bomen_onderhoud"
NORMUUR_SCOPE_OVERIG_ONDERHOUD = "overig_onderhoud"

SCOPE_LABELS = {
    "grondwerk": "Grondwerk",
    "bestrating": "Bestrating",
    "borders": "Borders",
    "gras": "Gras",
    "houtwerk": "Houtwerk",
    "water_elektra": "Water & Elektra",
    "specials": "Specials",
    "gras_onderhoud": "Gras Onderhoud",
    "borders_onderhoud": "Borders Onderhoud",
    "heggen": "Heggen",
    "heggen_extended": "Heggen (uitgebreid)",
    "bomen": "Bomen",
    "bomen_extended": "Bomen (uitgebreid)",
    "reiniging": "Reiniging",
    "bemesting": "Bemesting",
    "gazonanalyse": "Gazonanalyse",
    "mollenbestrijding": "Mollenbestrijding",
    "overig": "Overig",
    "algemeen": "Algemeen",
    "garantie": "Garantie",
}

# Neutral values
NEUTRAL_FACTOR = Decimal("1.0")
NO_NORM_HOURS = Decimal("0")

# Machines
MACHINE_TARIEF = Decimal("75")
MINIGRAVER_DREMPEL_M2 = Decimal("20")
MINIGRAVER_UREN_PER_M2 = Decimal("0.05")

# Grondwerk: excavation depth in metres per depth tier
DIEPTE_METERS = {
    "licht": Decimal("0.2"),
    "standaard": Decimal("0.35"),
    "zwaar": Decimal("0.5"),
}
AFVOER_GROND_TARIEF = Decimal("35")

# Bestrating
ZAND_PRIJS_M3 = Decimal("25")
ZAND_VERLIES_FACTOR = Decimal("1.1")
FUNDERING_DIKTE_M = Decimal("0.15")
FUNDERING_PRIJS_M3 = {
    "zand_fundering": Decimal("35"),
    "zware_fundering": Decimal("45"),
}
OPSLUITBAND_BESTRATING_PRIJS_M = Decimal("8")
BESTRATING_LEGGEN_ACTIVITEIT = {
    "tegel": "Tegels leggen",
    "klinker": "Klinkers leggen",
    "natuursteen": "Natuursteen leggen",
}

# Borders
PLANTEN_PER_M2 = {
    "weinig": Decimal("3"),
    "gemiddeld": Decimal("6"),
    "veel": Decimal("10"),
}
PLANTEN_NIVEAU = {"weinig": "laag", "gemiddeld": "gemiddeld", "veel": "hoog"}
SCHORS_M3_PER_M2 = Decimal("0.05")
BODEMVERBETERING_DIEPTE_M = Decimal("0.3")
BODEMVERBETERING_PRIJS_M3 = Decimal("35")

# Gras
GRASZAAD_KG_PER_M2 = Decimal("0.035")
KUNSTGRAS_PRIJS_M2 = Decimal("45")
DRAINAGE_PVC_PRIJS_M = Decimal("12")
DRAINAGE_KOKOS_PRIJS_M = Decimal("8")
OPSLUITBAND_GRAS_PRIJS_M = Decimal("15")
GRAS_EXTRA_VERLIES_PERCENTAGE = Decimal("5")

# Houtwerk
SCHUTTINGPLANKEN_PER_METER = Decimal("6")
PAAL_AFSTAND_METERS = Decimal("2")
VLONDERPLANKEN_PER_M2 = Decimal("7")
VLONDER_EXTRA_FUNDERING_PUNTEN = 4
PERGOLA_FUNDERING_PUNTEN = 4

# Water & elektra
SLEUF_LENGTE_PER_LICHTPUNT = Decimal("5")

# Specials: installation hours per item type
INSTALLATIE_UREN = {
    "jacuzzi": Decimal("8"),
    "sauna": Decimal("6"),
    "prefab": Decimal("4"),
}
INSTALLATIE_UREN_DEFAULT = Decimal("4")

# Onderhoud
SNOEISEL_VOLUME_FACTOR = Decimal("0.3")
AFVOER_GROENAFVAL_TARIEF = Decimal("25")
GROENAFVAL_M3_PER_M2 = Decimal("0.05")
HOOGTE_DREMPEL_METERS = Decimal("2")
HOOGTE_HOOG_METERS = Decimal("3")
HOOGTE_TOESLAG_FACTOR = Decimal("1.3")
BLADRUIMEN_UREN = Decimal("2")
TERRAS_REINIGEN_UREN_PER_M2 = Decimal("0.05")
ONKRUID_BESTRATING_UREN_PER_M2 = Decimal("0.03")
AFWATERING_UREN_PER_PUNT = Decimal("0.25")

# Fixed offerte lines
OFFERTE_OVERHEAD = Decimal("200")

# Onderhoud, extended hedge and tree work
HAAGSOORT_FACTOR = {
    "liguster": Decimal("1.0"),
    "beuk": Decimal("1.0"),
    "taxus": Decimal("1.3"),
    "conifeer": Decimal("1.4"),
    "buxus": Decimal("0.8"),
}
ONDERGROND_FACTOR = {
    "bestrating": Decimal("1.15"),
    "gras": Decimal("1.0"),
    "grind": Decimal("1.0"),
    "border": Decimal("1.05"),
}
HOOGWERKER_PRIJS_PER_DAG = Decimal("185")
HOOGWERKER_DREMPEL_HOOGTE = Decimal("4")
HOOGWERKER_METERS_PER_DAG = Decimal("10")
BOOM_HOOGTE_FACTOR = {
    "laag": Decimal("1.0"),
    "middel": Decimal("1.0"),
    "hoog": Decimal("1.5"),
    "zeer_hoog": Decimal("2.5"),
}
BOOM_HOOG_METERS = Decimal("4")
BOOM_ZEER_HOOG_METERS = Decimal("10")
VEILIGHEID_TOESLAG = {
    "nabij_straat": Decimal("0.20"),
    "nabij_gebouw": Decimal("0.10"),
    "nabij_kabels": Decimal("0.15"),
}
INSPECTIE_VISUEEL_UREN_PER_BOOM = Decimal("0.5")
INSPECTIE_GECERTIFICEERD_PRIJS = Decimal("200")
KROONDIAMETER_DEFAULT = Decimal("3")
SNOEIHOUT_UREN_FACTOR = Decimal("0.1")

# Onderhoud, cleaning
TERRAS_TYPE_FACTOR = {
    "keramisch": Decimal("1.2"),
    "beton": Decimal("1.0"),
    "klinkers": Decimal("1.1"),
    "natuursteen": Decimal("1.5"),
    "hout": Decimal("1.3"),
}
REINIGINGSMIDDEL_PRIJS_PER_M2 = Decimal("2.0")
ANTI_ALG_PRIJS_PER_M2 = Decimal("1.5")
ALGE_UREN_PER_M2 = Decimal("0.03")
BLAD_UREN_PER_M2 = Decimal("0.02")
BLAD_AFVOER_UREN_PER_M2 = Decimal("0.005")
BLADRUIMEN_SEIZOEN_BEURTEN = 4
# methode: (uren per m², machine omschrijving, machine dagprijs, middel per m²)
ONKRUID_METHODEN = {
    "handmatig": (Decimal("0.04"), None, None, None),
    "branden": (Decimal("0.02"), "Onkruidbrander huur", Decimal("45"), None),
    "heet_water": (Decimal("0.015"), "Heetwater-apparaat huur", Decimal("65"), None),
    "chemisch": (Decimal("0.01"), None, None, Decimal("3.0")),
}

# Onderhoud, fertilising
BEMESTING_PRODUCT_PRIJS = {
    "basis": Decimal("0.80"),
    "premium": Decimal("1.50"),
    "bio": Decimal("2.00"),
}
BEMESTING_NORMUUR_PER_M2 = Decimal("0.005")
BEMESTING_FREQUENTIE_KORTING = Decimal("0.90")
KALK_PRIJS_PER_M2 = Decimal("0.50")
KALK_NORMUUR_PER_M2 = Decimal("0.003")
GRONDANALYSE_PRIJS = Decimal("49")
BEMESTING_MARGE_PERCENTAGE = Decimal("70")

# Onderhoud, lawn assessment and repair
GAZONBEOORDELING_UREN = Decimal("0.5")
MACHINE_VERTICUTEREN_PER_DAG = Decimal("80")
VERTICUTEREN_M2_PER_DAG = Decimal("500")
VERTICUTEREN_UREN_PER_M2 = Decimal("0.01")
DOORZAAIEN_UREN_PER_M2 = Decimal("0.005")
ZAAD_DOORZAAIEN_PRIJS_PER_M2 = Decimal("3.0")
GRASMAT_UREN_PER_M2 = Decimal("0.02")
GRASZODEN_NIEUW_PRIJS_PER_M2 = Decimal("12.0")
GRASZODEN_VERLIES_PERCENTAGE = Decimal("5")
PLAGGEN_UREN_PER_M2 = Decimal("0.025")
PLAGSEL_AFVOER_UREN_PER_M2 = Decimal("0.005")
KALE_PLEKKEN_AANDEEL = Decimal("0.1")
BIJZAAIEN_UREN_PER_M2 = Decimal("0.01")
ZAAD_BIJZAAIEN_PRIJS_PER_M2 = Decimal("5.0")

# Onderhoud, mole control: pakket -> (plaatsen omschrijving, uren, klemmen omschrijving,
# klemmen prijs, controle omschrijving, uren)
MOLLEN_PAKKETTEN = {
    "basis": (
        "Klemmen plaatsen & ophalen (1 bezoek)",
        Decimal("2"),
        "Mollenval klemmen (basis)",
        Decimal("35"),
        "Tussentijdse controle (1x)",
        Decimal("0.5"),
    ),
    "premium": (
        "Klemmen plaatsen & verplaatsen (3 bezoeken)",
        Decimal("4.5"),
        "Mollenval klemmen + preventie (premium)",
        Decimal("75"),
        "Tussentijdse controles (3x)",
        Decimal("1.5"),
    ),
    "premium_plus": (
        "Klemmen plaatsen & beheer (6 bezoeken)",
        Decimal("6"),
        "Mollenval klemmen + preventie + monitoring (premium plus)",
        Decimal("120"),
        "Controles (6x, onbeperkt pakket)",
        Decimal("3"),
    ),
}
MOLHERSTEL_UREN_PER_M2 = Decimal("0.02")
MOLHERSTEL_ZAAD_PRIJS_PER_M2 = Decimal("5.0")
MOLLEN_GAAS_UREN_PER_M2 = Decimal("0.05")
MOLLEN_GAAS_PRIJS_PER_M2 = Decimal("4.0")
TERUGKEER_CHECK_UREN = Decimal("1")
