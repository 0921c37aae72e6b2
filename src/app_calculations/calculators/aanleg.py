"""
Calculators for new-build (aanleg) scopes.

Each calculator turns the validated data of one scope into offerte regels.
Labour hours are norm-hour × quantity × the correction factors that apply;
materials without a norm-hour are priced from fixed rates or the catalogue.
"""

from decimal import Decimal
from typing import Any, List, Mapping

from app_calculations.calculators.base import (
    CalculationContext,
    OfferteRegel,
    RegelBuilder,
    choice,
    optional_non_negative,
    required_positive,
)
from app_calculations.constants import (
    AFVOER_GROND_TARIEF,
    BESTRATING_LEGGEN_ACTIVITEIT,
    BODEMVERBETERING_DIEPTE_M,
    BODEMVERBETERING_PRIJS_M3,
    DIEPTE_METERS,
    DRAINAGE_KOKOS_PRIJS_M,
    DRAINAGE_PVC_PRIJS_M,
    FUNDERING_DIKTE_M,
    FUNDERING_PRIJS_M3,
    GRAS_EXTRA_VERLIES_PERCENTAGE,
    GRASZAAD_KG_PER_M2,
    INSTALLATIE_UREN,
    INSTALLATIE_UREN_DEFAULT,
    KUNSTGRAS_PRIJS_M2,
    MINIGRAVER_DREMPEL_M2,
    MINIGRAVER_UREN_PER_M2,
    OPSLUITBAND_BESTRATING_PRIJS_M,
    OPSLUITBAND_GRAS_PRIJS_M,
    PAAL_AFSTAND_METERS,
    PERGOLA_FUNDERING_PUNTEN,
    PLANTEN_NIVEAU,
    PLANTEN_PER_M2,
    SCHORS_M3_PER_M2,
    SCHUTTINGPLANKEN_PER_METER,
    SLEUF_LENGTE_PER_LICHTPUNT,
    VLONDER_EXTRA_FUNDERING_PUNTEN,
    VLONDERPLANKEN_PER_M2,
    ZAND_PRIJS_M3,
    ZAND_VERLIES_FACTOR,
    FactorType,
)
from core.utils.numbers import ceil_int, format_compact

ScopeData = Mapping[str, Any]


def _omtrek(oppervlakte: Decimal) -> Decimal:
    """Perimeter estimate of a square area: 4·√opp."""
    return oppervlakte.sqrt() * 4


def calculate_grondwerk(data: ScopeData, context: CalculationContext) -> List[OfferteRegel]:
    """
    Excavation, minigraver hours above 20 m² and optional soil disposal.

    Example (normuur 0.5, bereikbaarheid beperkt 1.2, diepte standaard 1.0):
        25 m² -> "Ontgraven (standaard)" 15.00 uur,
                 "Machine-uren minigraver" 1.25 uur à €75
    """
    scope = "grondwerk"
    regels = RegelBuilder(scope, context)

    oppervlakte = required_positive(data, "oppervlakte", scope)
    diepte = choice(data, "diepte", DIEPTE_METERS, "standaard", scope)
    bereik = context.bereik_factor
    diepte_factor = context.factor(FactorType.DIEPTE, diepte)

    uren = oppervlakte * context.norm(scope, f"Ontgraven {diepte}") * bereik * diepte_factor
    regels.arbeid(f"Ontgraven ({diepte})", uren)

    if oppervlakte > MINIGRAVER_DREMPEL_M2:
        regels.machine(
            "Machine-uren minigraver",
            oppervlakte * MINIGRAVER_UREN_PER_M2 * diepte_factor,
        )

    if data.get("afvoer_grond"):
        volume = oppervlakte * DIEPTE_METERS[diepte]
        regels.arbeid(
            "Grond laden voor afvoer",
            volume * context.norm(scope, "Grond afvoeren") * bereik,
        )
        regels.materiaal("Afvoerkosten grond", volume, "m³", AFVOER_GROND_TARIEF)

    return regels.build()


def calculate_bestrating(data: ScopeData, context: CalculationContext) -> List[OfferteRegel]:
    """
    Paving: sand bed, optional foundation, edging and laying.

    Laying hours carry the snijwerk factor on top of bereikbaarheid.
    """
    scope = "bestrating"
    regels = RegelBuilder(scope, context)

    oppervlakte = required_positive(data, "oppervlakte", scope)
    type_bestrating = choice(
        data, "type_bestrating", BESTRATING_LEGGEN_ACTIVITEIT, "tegel", scope
    )
    snijwerk = choice(data, "snijwerk", ("laag", "gemiddeld", "hoog"), "laag", scope)
    onderbouw = data.get("onderbouw") or {}
    onderbouw_type = choice(
        onderbouw,
        "type",
        ("zandbed",) + tuple(FUNDERING_PRIJS_M3),
        "zandbed",
        scope,
    )
    dikte_cm = required_positive(onderbouw, "dikte_onderlaag", scope)

    bereik = context.bereik_factor
    snijwerk_factor = context.factor(FactorType.SNIJWERK, snijwerk)

    zand_m3 = oppervlakte * dikte_cm / Decimal("100") * ZAND_VERLIES_FACTOR
    regels.materiaal(f"Zandbed {format_compact(dikte_cm)}cm", zand_m3, "m³", ZAND_PRIJS_M3)

    if onderbouw_type != "zandbed":
        fundering_m3 = oppervlakte * FUNDERING_DIKTE_M * ZAND_VERLIES_FACTOR
        regels.materiaal(
            f"Funderingsmateriaal ({onderbouw_type.replace('_', ' ')})",
            fundering_m3,
            "m³",
            FUNDERING_PRIJS_M3[onderbouw_type],
        )

    regels.arbeid(
        "Aanbrengen onderbouw",
        oppervlakte * context.norm(scope, "Zandbed aanbrengen") * bereik,
    )

    if onderbouw.get("opsluitbanden"):
        omtrek = _omtrek(oppervlakte)
        regels.materiaal("Opsluitbanden", omtrek, "m", OPSLUITBAND_BESTRATING_PRIJS_M)
        regels.arbeid(
            "Plaatsen opsluitbanden",
            omtrek * context.norm(scope, "Opsluitbanden plaatsen") * bereik,
        )

    activiteit = BESTRATING_LEGGEN_ACTIVITEIT[type_bestrating]
    regels.arbeid(
        f"Leggen {type_bestrating} (snijwerk: {snijwerk})",
        oppervlakte * context.norm(scope, activiteit) * bereik * snijwerk_factor,
    )

    return regels.build()


def calculate_borders(data: ScopeData, context: CalculationContext) -> List[OfferteRegel]:
    scope = "borders"
    regels = RegelBuilder(scope, context)

    oppervlakte = required_positive(data, "oppervlakte", scope)
    intensiteit = choice(
        data, "beplantingsintensiteit", PLANTEN_PER_M2, "gemiddeld", scope
    )
    afwerking = choice(data, "afwerking", ("geen", "schors", "grind"), "geen", scope)
    bereik = context.bereik_factor

    regels.arbeid(
        "Grondbewerking border",
        oppervlakte * context.norm(scope, "Grondbewerking border") * bereik,
    )
    niveau = PLANTEN_NIVEAU[intensiteit]
    regels.arbeid(
        f"Beplanten ({intensiteit} intensiteit)",
        oppervlakte * context.norm(scope, f"Planten {niveau}") * bereik,
    )
    regels.catalogus("bodembedekker", oppervlakte * PLANTEN_PER_M2[intensiteit])

    if afwerking in ("schors", "grind"):
        regels.arbeid(
            "Schors aanbrengen",
            oppervlakte * context.norm(scope, "Schors aanbrengen") * bereik,
        )
        regels.catalogus("boomschors", oppervlakte * SCHORS_M3_PER_M2)

    if data.get("bodemverbetering"):
        regels.materiaal(
            "Bodemverbetering (nieuwe grondmix)",
            oppervlakte * BODEMVERBETERING_DIEPTE_M,
            "m³",
            BODEMVERBETERING_PRIJS_M3,
        )

    return regels.build()


def calculate_gras(data: ScopeData, context: CalculationContext) -> List[OfferteRegel]:
    scope = "gras"
    regels = RegelBuilder(scope, context)

    oppervlakte = required_positive(data, "oppervlakte", scope)
    gras_type = choice(data, "type", ("zaaien", "graszoden"), "zaaien", scope)
    bereik = context.bereik_factor

    regels.arbeid(
        "Ondergrond bewerken",
        oppervlakte * context.norm(scope, "Ondergrond bewerken") * bereik,
    )

    if gras_type == "graszoden":
        regels.arbeid(
            "Graszoden leggen",
            oppervlakte * context.norm(scope, "Graszoden leggen") * bereik,
        )
        regels.catalogus("graszoden", oppervlakte)
    else:
        regels.arbeid(
            "Gras zaaien",
            oppervlakte * context.norm(scope, "Gras zaaien") * bereik,
        )
        regels.catalogus("graszaad", oppervlakte * GRASZAAD_KG_PER_M2)

    if data.get("kunstgras"):
        regels.materiaal(
            "Kunstgras",
            oppervlakte,
            "m²",
            KUNSTGRAS_PRIJS_M2,
            GRAS_EXTRA_VERLIES_PERCENTAGE,
        )
        regels.arbeid(
            "Kunstgras leggen",
            oppervlakte * context.norm(scope, "Kunstgras leggen") * bereik,
        )

    drainage_meters = optional_non_negative(data, "drainage_meters", scope)
    if data.get("drainage") and drainage_meters > 0:
        regels.materiaal(
            "PVC drainagebuis",
            drainage_meters,
            "m",
            DRAINAGE_PVC_PRIJS_M,
            GRAS_EXTRA_VERLIES_PERCENTAGE,
        )
        regels.materiaal(
            "Kokos omhulsel",
            drainage_meters,
            "m",
            DRAINAGE_KOKOS_PRIJS_M,
            GRAS_EXTRA_VERLIES_PERCENTAGE,
        )

    opsluitbanden_meters = optional_non_negative(data, "opsluitbanden_meters", scope)
    if data.get("opsluitbanden") and opsluitbanden_meters > 0:
        regels.materiaal(
            "Opsluitbanden",
            opsluitbanden_meters,
            "m",
            OPSLUITBAND_GRAS_PRIJS_M,
            GRAS_EXTRA_VERLIES_PERCENTAGE,
        )

    return regels.build()


def calculate_houtwerk(data: ScopeData, context: CalculationContext) -> List[OfferteRegel]:
    """
    Fence, deck or pergola with its foundation points.

    afmeting is the length in metres for a schutting, the area in m²
    for a vlonder and the number of pergolas otherwise.
    """
    scope = "houtwerk"
    regels = RegelBuilder(scope, context)

    type_houtwerk = choice(
        data, "type_houtwerk", ("schutting", "vlonder", "pergola"), "schutting", scope
    )
    afmeting = required_positive(data, "afmeting", scope)
    fundering = choice(data, "fundering", ("standaard", "zwaar"), "standaard", scope)
    bereik = context.bereik_factor

    if type_houtwerk == "schutting":
        regels.arbeid(
            "Schutting plaatsen",
            afmeting * context.norm(scope, "Schutting plaatsen") * bereik,
        )
        regels.catalogus("schuttingplank", afmeting * SCHUTTINGPLANKEN_PER_METER)
        palen = ceil_int(afmeting / PAAL_AFSTAND_METERS) + 1
        regels.catalogus("schuttingpaal", Decimal(palen))
        fundering_punten = palen
    elif type_houtwerk == "vlonder":
        regels.arbeid(
            "Vlonder leggen",
            afmeting * context.norm(scope, "Vlonder leggen") * bereik,
        )
        regels.catalogus("vlonderdeel", afmeting * VLONDERPLANKEN_PER_M2)
        fundering_punten = (
            ceil_int(afmeting / PAAL_AFSTAND_METERS) + VLONDER_EXTRA_FUNDERING_PUNTEN
        )
    else:
        regels.arbeid(
            "Pergola bouwen",
            afmeting * context.norm(scope, "Pergola bouwen") * bereik,
        )
        fundering_punten = PERGOLA_FUNDERING_PUNTEN

    punten = Decimal(fundering_punten)
    regels.arbeid(
        f"Fundering plaatsen ({fundering})",
        punten * context.norm(scope, f"Fundering {fundering}") * bereik,
    )
    regels.catalogus("betonpoer", punten)

    return regels.build()


def calculate_water_elektra(
    data: ScopeData, context: CalculationContext
) -> List[OfferteRegel]:
    """Garden lighting: trenches per light point, cable, fixtures."""
    scope = "water_elektra"
    regels = RegelBuilder(scope, context)

    verlichting = choice(
        data, "verlichting", ("geen", "basis", "uitgebreid"), "geen", scope
    )
    aantal_punten = optional_non_negative(data, "aantal_punten", scope)
    if verlichting == "geen" or aantal_punten <= 0:
        return regels.build()

    bereik = context.bereik_factor

    if data.get("sleuven_nodig"):
        sleuf_lengte = aantal_punten * SLEUF_LENGTE_PER_LICHTPUNT
        for activiteit in ("Sleuf graven", "Kabel leggen", "Sleuf herstellen"):
            regels.arbeid(
                activiteit,
                sleuf_lengte * context.norm(scope, activiteit) * bereik,
            )
        regels.catalogus("kabel", sleuf_lengte)

    regels.arbeid(
        "Armaturen plaatsen",
        aantal_punten * context.norm(scope, "Armatuur plaatsen") * bereik,
    )
    regels.catalogus("grondspot", aantal_punten)
    regels.catalogus("lasdoos", aantal_punten)

    return regels.build()


def calculate_specials(data: ScopeData, context: CalculationContext) -> List[OfferteRegel]:
    """One labour line per special item (jacuzzi, sauna, prefab, other)."""
    scope = "specials"
    regels = RegelBuilder(scope, context)
    bereik = context.bereik_factor

    for item in data.get("items") or []:
        item_type = item.get("type") or "other"
        uren = INSTALLATIE_UREN.get(item_type, INSTALLATIE_UREN_DEFAULT)
        omschrijving = (item.get("omschrijving") or "").strip() or (
            f"{item_type.capitalize()} plaatsen"
        )
        regels.arbeid(omschrijving, uren * bereik)

    return regels.build()
