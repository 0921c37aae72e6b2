"""
Calculators for maintenance (onderhoud) scopes.

Norm-hours for maintenance live under their own scope keys
(gras_onderhoud, borders_onderhoud, ...); the lines keep the scope key
of the offerte (gras, borders, ...). The achterstalligheid factor is
neutral when the offerte has no backlog level.

The extended hedge and tree scopes (heggen_extended, bomen_extended)
write lines under their own scope key, so they can be selected next to
heggen and bomen without clashing line ids.
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
    AFVOER_GROENAFVAL_TARIEF,
    AFWATERING_UREN_PER_PUNT,
    ALGE_UREN_PER_M2,
    ANTI_ALG_PRIJS_PER_M2,
    BEMESTING_FREQUENTIE_KORTING,
    BEMESTING_MARGE_PERCENTAGE,
    BEMESTING_NORMUUR_PER_M2,
    BEMESTING_PRODUCT_PRIJS,
    BIJZAAIEN_UREN_PER_M2,
    BLAD_AFVOER_UREN_PER_M2,
    BLAD_UREN_PER_M2,
    BLADRUIMEN_SEIZOEN_BEURTEN,
    BLADRUIMEN_UREN,
    BOOM_HOOG_METERS,
    BOOM_HOOGTE_FACTOR,
    BOOM_ZEER_HOOG_METERS,
    DOORZAAIEN_UREN_PER_M2,
    GAZONBEOORDELING_UREN,
    GRASMAT_UREN_PER_M2,
    GRASZODEN_NIEUW_PRIJS_PER_M2,
    GRASZODEN_VERLIES_PERCENTAGE,
    GROENAFVAL_M3_PER_M2,
    GRONDANALYSE_PRIJS,
    HAAGSOORT_FACTOR,
    HOOGTE_DREMPEL_METERS,
    HOOGTE_HOOG_METERS,
    HOOGTE_TOESLAG_FACTOR,
    HOOGWERKER_DREMPEL_HOOGTE,
    HOOGWERKER_METERS_PER_DAG,
    HOOGWERKER_PRIJS_PER_DAG,
    INSPECTIE_GECERTIFICEERD_PRIJS,
    INSPECTIE_VISUEEL_UREN_PER_BOOM,
    KALE_PLEKKEN_AANDEEL,
    KALK_NORMUUR_PER_M2,
    KALK_PRIJS_PER_M2,
    KROONDIAMETER_DEFAULT,
    MACHINE_VERTICUTEREN_PER_DAG,
    MOLHERSTEL_UREN_PER_M2,
    MOLHERSTEL_ZAAD_PRIJS_PER_M2,
    MOLLEN_GAAS_PRIJS_PER_M2,
    MOLLEN_GAAS_UREN_PER_M2,
    MOLLEN_PAKKETTEN,
    NEUTRAL_FACTOR,
    NORMUUR_SCOPE_BOMEN_ONDERHOUD,
    NORMUUR_SCOPE_BORDERS_ONDERHOUD,
    NORMUUR_SCOPE_GRAS_ONDERHOUD,
    NORMUUR_SCOPE_HEGGEN_ONDERHOUD,
    NORMUUR_SCOPE_OVERIG_ONDERHOUD,
    ONDERGROND_FACTOR,
    ONKRUID_BESTRATING_UREN_PER_M2,
    ONKRUID_METHODEN,
    PLAGGEN_UREN_PER_M2,
    PLAGSEL_AFVOER_UREN_PER_M2,
    REINIGINGSMIDDEL_PRIJS_PER_M2,
    SNOEIHOUT_UREN_FACTOR,
    SNOEISEL_VOLUME_FACTOR,
    TERRAS_REINIGEN_UREN_PER_M2,
    TERRAS_TYPE_FACTOR,
    TERUGKEER_CHECK_UREN,
    VEILIGHEID_TOESLAG,
    VERTICUTEREN_M2_PER_DAG,
    VERTICUTEREN_UREN_PER_M2,
    ZAAD_BIJZAAIEN_PRIJS_PER_M2,
    ZAAD_DOORZAAIEN_PRIJS_PER_M2,
    FactorType,
    RegelType,
)
from app_calculations.exceptions import InvalidScopeDataError
from core.utils.numbers import ceil_int, format_compact

ScopeData = Mapping[str, Any]

INTENSITEITEN = ("weinig", "gemiddeld", "veel")
FREQUENTIES = (1, 2, 3)


def _frequentie(data: ScopeData, key: str, scope: str) -> int:
    """Times per year; missing means once."""
    value = data.get(key) or 1
    if value not in FREQUENTIES:
        raise InvalidScopeDataError(scope, f"{key} '{value}' is ongeldig, kies uit: 1, 2, 3")
    return int(value)


def _optional_choice(data: ScopeData, key: str, options, scope: str):
    if not data.get(key):
        return None
    return choice(data, key, options, None, scope)


def _dagen_label(dagen: int) -> str:
    return f"{dagen} dag" if dagen == 1 else f"{dagen} dagen"


def calculate_gras_onderhoud(
    data: ScopeData, context: CalculationContext
) -> List[OfferteRegel]:
    """
    Mowing, edging and scarifying.

    Scarifying is done once per season, so the backlog factor does not
    apply to it.
    """
    regels = RegelBuilder("gras", context)
    if not data.get("gras_aanwezig"):
        return regels.build()

    oppervlakte = optional_non_negative(data, "gras_oppervlakte", "gras")
    if oppervlakte <= 0:
        return regels.build()

    norm_scope = NORMUUR_SCOPE_GRAS_ONDERHOUD
    bereik = context.bereik_factor
    achterstallig = context.achterstallig_factor

    if data.get("maaien"):
        regels.arbeid(
            "Gras maaien",
            oppervlakte * context.norm(norm_scope, "Maaien") * bereik * achterstallig,
        )

    if data.get("kanten_steken"):
        kanten_lengte = oppervlakte.sqrt() * 4
        regels.arbeid(
            "Kanten steken",
            kanten_lengte * context.norm(norm_scope, "Kanten steken") * bereik * achterstallig,
        )

    if data.get("verticuteren"):
        regels.arbeid(
            "Verticuteren",
            oppervlakte * context.norm(norm_scope, "Verticuteren") * bereik,
        )

    return regels.build()


def calculate_borders_onderhoud(
    data: ScopeData, context: CalculationContext
) -> List[OfferteRegel]:
    """
    Weeding, pruning in borders and green waste disposal.

    Weeding carries the bodem factor (open soil takes longer),
    pruning and waste volume carry the intensiteit factor.
    """
    scope = "borders"
    regels = RegelBuilder(scope, context)

    oppervlakte = required_positive(data, "border_oppervlakte", scope)
    intensiteit = choice(data, "onderhoudsintensiteit", INTENSITEITEN, "gemiddeld", scope)
    snoei = choice(data, "snoei_in_borders", ("geen", "licht", "zwaar"), "geen", scope)
    bodem = choice(data, "bodem", ("open", "bedekt"), "open", scope)

    norm_scope = NORMUUR_SCOPE_BORDERS_ONDERHOUD
    bereik = context.bereik_factor
    achterstallig = context.achterstallig_factor
    intensiteit_factor = context.factor(FactorType.INTENSITEIT, intensiteit)
    bodem_factor = context.factor(FactorType.BODEM, bodem)

    if data.get("onkruid_verwijderen"):
        regels.arbeid(
            f"Onkruid verwijderen (intensiteit: {intensiteit})",
            oppervlakte
            * context.norm(norm_scope, f"Wieden {intensiteit}")
            * bereik
            * achterstallig
            * bodem_factor,
        )

    if snoei != "geen":
        regels.arbeid(
            f"Snoeiwerk in borders ({snoei})",
            oppervlakte * context.norm(norm_scope, f"Snoei {snoei}") * bereik * intensiteit_factor,
        )

    if data.get("afvoer_groenafval"):
        regels.materiaal(
            "Afvoerkosten groenafval",
            oppervlakte * GROENAFVAL_M3_PER_M2 * intensiteit_factor,
            "m³",
            AFVOER_GROENAFVAL_TARIEF,
        )

    return regels.build()


def _hoogte_factor(hoogte: Decimal, context: CalculationContext) -> Decimal:
    if hoogte <= HOOGTE_DREMPEL_METERS:
        return NEUTRAL_FACTOR
    klasse = "hoog" if hoogte > HOOGTE_HOOG_METERS else "middel"
    return context.factor(FactorType.HOOGTE, klasse)


def calculate_heggen_onderhoud(
    data: ScopeData, context: CalculationContext
) -> List[OfferteRegel]:
    """
    Hedge trimming by volume (L × H × B).

    Example:
        10 m × 2 m × 1 m, snoei "beide" -> volume 20 m³ × normuur "Heg snoeien"
    """
    scope = "heggen"
    regels = RegelBuilder(scope, context)

    lengte = required_positive(data, "lengte", scope)
    hoogte = required_positive(data, "hoogte", scope)
    breedte = required_positive(data, "breedte", scope)
    snoei = choice(data, "snoei", ("zijkanten", "bovenkant", "beide"), "beide", scope)

    norm_scope = NORMUUR_SCOPE_HEGGEN_ONDERHOUD
    volume = lengte * hoogte * breedte
    bereik = context.bereik_factor

    uren = (
        volume
        * context.norm(norm_scope, "Heg snoeien")
        * bereik
        * context.achterstallig_factor
        * context.factor(FactorType.SNOEI, snoei)
        * _hoogte_factor(hoogte, context)
    )
    afmetingen = " × ".join(f"{format_compact(v)}m" for v in (lengte, hoogte, breedte))
    regels.arbeid(f"Heg snoeien {afmetingen} ({snoei})", uren)

    if data.get("afvoer_snoeisel"):
        snoeisel = volume * SNOEISEL_VOLUME_FACTOR
        regels.arbeid(
            "Snoeisel verzamelen en laden",
            snoeisel * context.norm(norm_scope, "Snoeisel afvoeren") * bereik,
        )
        regels.materiaal("Afvoerkosten snoeisel", snoeisel, "m³", AFVOER_GROENAFVAL_TARIEF)

    return regels.build()


def calculate_bomen_onderhoud(
    data: ScopeData, context: CalculationContext
) -> List[OfferteRegel]:
    scope = "bomen"
    regels = RegelBuilder(scope, context)

    aantal = required_positive(data, "aantal_bomen", scope)
    snoei = choice(data, "snoei", ("licht", "zwaar"), "licht", scope)
    hoogteklasse = choice(data, "hoogteklasse", ("laag", "middel", "hoog"), "laag", scope)
    hoogte_factor = HOOGTE_TOESLAG_FACTOR if hoogteklasse == "hoog" else NEUTRAL_FACTOR

    regels.arbeid(
        f"Bomen snoeien ({snoei})",
        aantal
        * context.norm(NORMUUR_SCOPE_BOMEN_ONDERHOUD, f"Boom snoeien {snoei}")
        * context.bereik_factor
        * context.achterstallig_factor
        * hoogte_factor,
    )
    return regels.build()


def calculate_overig_onderhoud(
    data: ScopeData, context: CalculationContext
) -> List[OfferteRegel]:
    """Fixed-rate odd jobs; every line is multiplied by bereikbaarheid only."""
    scope = "overig"
    regels = RegelBuilder(scope, context)
    bereik = context.bereik_factor

    if data.get("bladruimen"):
        regels.arbeid("Bladruimen", BLADRUIMEN_UREN * bereik)

    terras = optional_non_negative(data, "terras_oppervlakte", scope)
    if data.get("terras_reinigen") and terras > 0:
        regels.arbeid("Terras reinigen", terras * TERRAS_REINIGEN_UREN_PER_M2 * bereik)

    bestrating = optional_non_negative(data, "bestrating_oppervlakte", scope)
    if data.get("onkruid_bestrating") and bestrating > 0:
        regels.arbeid(
            "Onkruid bestrating verwijderen",
            bestrating * ONKRUID_BESTRATING_UREN_PER_M2 * bereik,
        )

    punten = optional_non_negative(data, "aantal_afwateringspunten", scope)
    if data.get("afwatering_controleren") and punten > 0:
        regels.arbeid("Afwatering controleren", punten * AFWATERING_UREN_PER_PUNT * bereik)

    overig_uren = optional_non_negative(data, "overig_uren", scope)
    if overig_uren > 0:
        omschrijving = (data.get("overig_notities") or "").strip() or "Overige werkzaamheden"
        regels.arbeid(omschrijving, overig_uren * bereik)

    return regels.build()


def calculate_heggen_extended(
    data: ScopeData, context: CalculationContext
) -> List[OfferteRegel]:
    """
    Hedge trimming with hedge species, ground surface and frequency.

    Hours per trim are volume × normuur × bereikbaarheid × achterstalligheid
    × hoogte × haagsoort × ondergrond, times the trims per year. An aerial
    platform is hired per started 10 m of hedge per trim when the hedge
    is over 4 m or when it is requested.
    """
    scope = "heggen_extended"
    regels = RegelBuilder(scope, context)

    lengte = required_positive(data, "lengte", scope)
    hoogte = required_positive(data, "hoogte", scope)
    breedte = required_positive(data, "breedte", scope)
    snoei = choice(data, "snoei", ("zijkanten", "bovenkant", "beide"), "beide", scope)
    haagsoort = choice(data, "haagsoort", tuple(HAAGSOORT_FACTOR), "liguster", scope)
    ondergrond = choice(data, "ondergrond", tuple(ONDERGROND_FACTOR), "gras", scope)
    frequentie = _frequentie(data, "snoeifrequentie", scope)

    norm_scope = NORMUUR_SCOPE_HEGGEN_ONDERHOUD
    volume = lengte * hoogte * breedte
    bereik = context.bereik_factor
    hoogte_factor = HOOGTE_TOESLAG_FACTOR if hoogte > HOOGTE_DREMPEL_METERS else NEUTRAL_FACTOR
    frequentie_label = f" ({frequentie}x per jaar)" if frequentie > 1 else ""

    per_beurt = (
        volume
        * context.norm(norm_scope, "Heg snoeien")
        * bereik
        * context.achterstallig_factor
        * hoogte_factor
        * HAAGSOORT_FACTOR[haagsoort]
        * ONDERGROND_FACTOR[ondergrond]
    )
    regels.arbeid(f"Heg snoeien ({snoei}){frequentie_label}", per_beurt * frequentie)

    if data.get("afvoer_snoeisel"):
        snoeisel = volume * SNOEISEL_VOLUME_FACTOR
        regels.arbeid(
            "Snoeisel afvoeren",
            snoeisel * context.norm(norm_scope, "Snoeisel afvoeren") * bereik * frequentie,
        )

    if data.get("hoogwerker_nodig") or hoogte > HOOGWERKER_DREMPEL_HOOGTE:
        dagen = ceil_int(lengte / HOOGWERKER_METERS_PER_DAG) * frequentie
        regels.tarief(
            f"Hoogwerker huur ({_dagen_label(dagen)})",
            dagen,
            "dag",
            HOOGWERKER_PRIJS_PER_DAG,
            RegelType.MACHINE,
        )

    return regels.build()


def _boom_hoogte_factor(hoogteklasse: str, hoogte_meter: Decimal) -> Decimal:
    klasse = hoogteklasse
    if hoogte_meter > BOOM_ZEER_HOOG_METERS:
        klasse = "zeer_hoog"
    elif hoogte_meter > BOOM_HOOG_METERS and klasse in ("laag", "middel"):
        klasse = "hoog"
    return BOOM_HOOGTE_FACTOR[klasse]


def calculate_bomen_extended(
    data: ScopeData, context: CalculationContext
) -> List[OfferteRegel]:
    """
    Tree pruning with height in metres, safety surcharges, inspection
    and disposal sized by crown diameter.

    A measured height raises the hoogteklasse, never lowers it. The
    safety surcharges add up: +20% near a street, +10% near a building,
    +15% near cables.
    """
    scope = "bomen_extended"
    regels = RegelBuilder(scope, context)

    aantal = required_positive(data, "aantal_bomen", scope)
    snoei = choice(data, "snoei", ("licht", "zwaar"), "licht", scope)
    hoogteklasse = choice(data, "hoogteklasse", tuple(BOOM_HOOGTE_FACTOR), "laag", scope)
    hoogte_meter = optional_non_negative(data, "hoogte_meter", scope)
    inspectie = choice(data, "inspectie", ("geen", "visueel", "gecertificeerd"), "geen", scope)

    bereik = context.bereik_factor
    veiligheid = NEUTRAL_FACTOR
    for key, toeslag in VEILIGHEID_TOESLAG.items():
        if data.get(key):
            veiligheid += toeslag

    regels.arbeid(
        f"Bomen snoeien ({snoei})",
        aantal
        * context.norm(NORMUUR_SCOPE_BOMEN_ONDERHOUD, f"Boom snoeien {snoei}")
        * bereik
        * context.achterstallig_factor
        * _boom_hoogte_factor(hoogteklasse, hoogte_meter)
        * veiligheid,
    )

    if inspectie == "visueel":
        regels.arbeid(
            "Boominspectie (visueel)", aantal * INSPECTIE_VISUEEL_UREN_PER_BOOM * bereik
        )
    elif inspectie == "gecertificeerd":
        regels.tarief(
            "Boominspectie (gecertificeerd)", aantal, "boom", INSPECTIE_GECERTIFICEERD_PRIJS
        )

    if data.get("afvoer"):
        kroondiameter = (
            optional_non_negative(data, "kroondiameter", scope) or KROONDIAMETER_DEFAULT
        )
        volume = kroondiameter * kroondiameter * SNOEIHOUT_UREN_FACTOR * aantal
        norm = context.norm(
            NORMUUR_SCOPE_BOMEN_ONDERHOUD, "Snoeihout afvoeren", default=NEUTRAL_FACTOR
        )
        regels.arbeid("Snoeihout afvoeren", volume * norm * bereik)

    return regels.build()


def calculate_reiniging_onderhoud(
    data: ScopeData, context: CalculationContext
) -> List[OfferteRegel]:
    """
    Terrace cleaning, leaf clearing, weeds in paving and algae removal.

    Every part is switched on by its own flag and needs a surface above 0.
    Only bereikbaarheid applies.
    """
    scope = "reiniging"
    regels = RegelBuilder(scope, context)
    bereik = context.bereik_factor

    terras = optional_non_negative(data, "terras_oppervlakte", scope)
    if data.get("terras_reinigen") and terras > 0:
        terras_type = _optional_choice(data, "terras_type", tuple(TERRAS_TYPE_FACTOR), scope)
        type_factor = TERRAS_TYPE_FACTOR[terras_type] if terras_type else NEUTRAL_FACTOR
        norm = context.norm(
            NORMUUR_SCOPE_OVERIG_ONDERHOUD,
            "Terras reinigen",
            default=TERRAS_REINIGEN_UREN_PER_M2,
        )
        label = f" ({terras_type})" if terras_type else ""
        regels.arbeid(f"Terras reinigen{label}", terras * norm * type_factor * bereik)
        regels.materiaal("Reinigingsmiddel", terras, "m²", REINIGINGSMIDDEL_PRIJS_PER_M2)

    blad = optional_non_negative(data, "bladruimen_oppervlakte", scope)
    if data.get("bladruimen") and blad > 0:
        seizoen = choice(data, "bladruimen_type", ("eenmalig", "seizoen"), "eenmalig", scope)
        beurten = BLADRUIMEN_SEIZOEN_BEURTEN if seizoen == "seizoen" else 1
        label = f"{beurten} beurten" if seizoen == "seizoen" else "eenmalig"
        regels.arbeid(f"Bladruimen ({label})", blad * BLAD_UREN_PER_M2 * beurten * bereik)
        regels.arbeid("Blad afvoeren", blad * BLAD_AFVOER_UREN_PER_M2 * beurten * bereik)

    onkruid = optional_non_negative(data, "onkruid_oppervlakte", scope)
    if data.get("onkruid_bestrating") and onkruid > 0:
        methode = choice(data, "onkruid_methode", tuple(ONKRUID_METHODEN), "handmatig", scope)
        uren_per_m2, machine, dagprijs, middel_prijs = ONKRUID_METHODEN[methode]
        regels.arbeid(
            f"Onkruid bestrating ({methode.replace('_', ' ')})", onkruid * uren_per_m2 * bereik
        )
        if machine:
            regels.tarief(machine, 1, "dag", dagprijs, RegelType.MACHINE)
        if middel_prijs:
            regels.materiaal("Onkruidbestrijdingsmiddel", onkruid, "m²", middel_prijs)

    alge = optional_non_negative(data, "alge_oppervlakte", scope)
    if data.get("algereiniging") and alge > 0:
        regels.arbeid("Algereiniging", alge * ALGE_UREN_PER_M2 * bereik)
        regels.materiaal("Anti-alg middel", alge, "m²", ANTI_ALG_PRIJS_PER_M2)

    return regels.build()


def calculate_bemesting_onderhoud(
    data: ScopeData, context: CalculationContext
) -> List[OfferteRegel]:
    """
    Fertilising, liming and soil analysis.

    Every line carries its own margin of BEMESTING_MARGE_PERCENTAGE, which
    takes precedence over scope and standard margins in the totals.
    Two or more rounds a year get 10% off the labour.
    """
    scope = "bemesting"
    regels = RegelBuilder(scope, context)
    marge = BEMESTING_MARGE_PERCENTAGE

    oppervlakte = required_positive(data, "oppervlakte", scope)
    bemestingstype = choice(
        data, "bemestingstype", tuple(BEMESTING_PRODUCT_PRIJS), "basis", scope
    )
    frequentie = _frequentie(data, "frequentie", scope)
    korting = BEMESTING_FREQUENTIE_KORTING if frequentie >= 2 else NEUTRAL_FACTOR
    bereik = context.bereik_factor
    frequentie_label = f" ({frequentie}x per jaar)" if frequentie > 1 else ""

    regels.arbeid(
        f"Bemesting aanbrengen ({bemestingstype}){frequentie_label}",
        oppervlakte * BEMESTING_NORMUUR_PER_M2 * frequentie * korting * bereik,
        marge_percentage=marge,
    )
    regels.materiaal(
        f"Bemestingsproduct ({bemestingstype})",
        oppervlakte * frequentie,
        "m²",
        BEMESTING_PRODUCT_PRIJS[bemestingstype],
        marge_percentage=marge,
    )

    if data.get("kalkbehandeling"):
        regels.arbeid(
            "Kalkbehandeling",
            oppervlakte * KALK_NORMUUR_PER_M2 * bereik,
            marge_percentage=marge,
        )
        regels.materiaal("Kalk", oppervlakte, "m²", KALK_PRIJS_PER_M2, marge_percentage=marge)

    if data.get("grondanalyse"):
        regels.tarief(
            "Grondanalyse",
            1,
            "analyse",
            GRONDANALYSE_PRIJS,
            RegelType.MATERIAAL,
            marge_percentage=marge,
        )

    return regels.build()


def calculate_gazonanalyse_onderhoud(
    data: ScopeData, context: CalculationContext
) -> List[OfferteRegel]:
    """
    Lawn assessment on site plus the repairs chosen in herstelacties.

    Drainage is priced in the aanleg calculation; here it is a p.m. line
    at 0.
    """
    scope = "gazonanalyse"
    regels = RegelBuilder(scope, context)

    oppervlakte = required_positive(data, "oppervlakte", scope)
    acties = data.get("herstelacties") or {}
    bereik = context.bereik_factor

    regels.arbeid("Gazonbeoordeling ter plaatse", GAZONBEOORDELING_UREN)

    if acties.get("verticuteren"):
        regels.arbeid("Verticuteren", oppervlakte * VERTICUTEREN_UREN_PER_M2 * bereik)
        dagen = max(1, ceil_int(oppervlakte / VERTICUTEREN_M2_PER_DAG))
        regels.tarief(
            f"Verticuteer-machine huur ({_dagen_label(dagen)})",
            dagen,
            "dag",
            MACHINE_VERTICUTEREN_PER_DAG,
            RegelType.MACHINE,
        )

    if acties.get("doorzaaien"):
        regels.arbeid("Doorzaaien", oppervlakte * DOORZAAIEN_UREN_PER_M2 * bereik)
        regels.materiaal(
            "Graszaad (doorzaaien)", oppervlakte, "m²", ZAAD_DOORZAAIEN_PRIJS_PER_M2
        )

    if acties.get("nieuwe_grasmat"):
        regels.arbeid("Nieuwe grasmat leggen", oppervlakte * GRASMAT_UREN_PER_M2 * bereik)
        regels.materiaal(
            "Graszoden",
            oppervlakte,
            "m²",
            GRASZODEN_NIEUW_PRIJS_PER_M2,
            GRASZODEN_VERLIES_PERCENTAGE,
        )

    if acties.get("plaggen"):
        regels.arbeid("Plaggen (zode verwijderen)", oppervlakte * PLAGGEN_UREN_PER_M2 * bereik)
        regels.arbeid("Plagsel afvoeren", oppervlakte * PLAGSEL_AFVOER_UREN_PER_M2 * bereik)

    if acties.get("bijzaaien_kale_plekken"):
        kale_plekken = optional_non_negative(acties, "kale_plekken_oppervlakte", scope)
        if kale_plekken <= 0:
            kale_plekken = Decimal(ceil_int(oppervlakte * KALE_PLEKKEN_AANDEEL))
        regels.arbeid("Bijzaaien kale plekken", kale_plekken * BIJZAAIEN_UREN_PER_M2 * bereik)
        regels.materiaal(
            "Graszaad (kale plekken)", kale_plekken, "m²", ZAAD_BIJZAAIEN_PRIJS_PER_M2
        )

    if data.get("bekalken"):
        regels.arbeid("Bekalken gazon", oppervlakte * KALK_NORMUUR_PER_M2 * bereik)
        regels.materiaal("Kalk (gazon)", oppervlakte, "m²", KALK_PRIJS_PER_M2)

    if data.get("drainage"):
        regels.tarief("Drainage (p.m., berekening via aanleg)", 1, "p.m.", Decimal("0"))

    return regels.build()


def calculate_mollenbestrijding_onderhoud(
    data: ScopeData, context: CalculationContext
) -> List[OfferteRegel]:
    """
    Mole control package (basis, premium, premium_plus) with optional
    lawn repair, preventive mesh and a return visit.

    Example:
        pakket "premium" -> 4.5 h placing traps, €75 traps, 1.5 h checks
    """
    scope = "mollenbestrijding"
    regels = RegelBuilder(scope, context)
    bereik = context.bereik_factor

    pakket = choice(data, "pakket", tuple(MOLLEN_PAKKETTEN), "basis", scope)
    plaatsen, plaats_uren, klemmen, klemmen_prijs, controle, controle_uren = (
        MOLLEN_PAKKETTEN[pakket]
    )
    regels.arbeid(plaatsen, plaats_uren * bereik)
    regels.materiaal(klemmen, Decimal("1"), "set", klemmen_prijs)
    regels.arbeid(controle, controle_uren * bereik)

    aanvullend = data.get("aanvullend") or {}

    herstel = optional_non_negative(aanvullend, "geschatte_m2", scope)
    if aanvullend.get("gazonherstel") and herstel > 0:
        regels.arbeid("Gazonherstel na mollenschade", herstel * MOLHERSTEL_UREN_PER_M2 * bereik)
        regels.materiaal(
            "Graszaad (mollenherstel)", herstel, "m²", MOLHERSTEL_ZAAD_PRIJS_PER_M2
        )

    gaas = optional_non_negative(aanvullend, "gaas_oppervlakte", scope)
    if aanvullend.get("preventief_gaas") and gaas > 0:
        regels.arbeid("Preventiefgaas aanbrengen", gaas * MOLLEN_GAAS_UREN_PER_M2 * bereik)
        regels.materiaal("Mollenwerend gaas", gaas, "m²", MOLLEN_GAAS_PRIJS_PER_M2)

    if aanvullend.get("terugkeer_check"):
        regels.arbeid("Terugkeer-check (1 bezoek)", TERUGKEER_CHECK_UREN * bereik)

    return regels.build()
