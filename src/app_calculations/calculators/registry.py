"""
Dispatch of scope data to the calculator of each scope.

The registry is keyed by offerte type, then scope key. Scopes selected
without data are skipped; a scope key without calculator is a
programming error and raises UnknownScopeError.
"""

import logging
from decimal import Decimal
from typing import Any, Callable, Dict, Iterable, List, Mapping

from app_calculations.calculators import aanleg, onderhoud
from app_calculations.calculators.base import (
    CalculationContext,
    OfferteRegel,
    RegelBuilder,
)
from app_calculations.constants import OFFERTE_OVERHEAD, OfferteType
from app_calculations.exceptions import UnknownScopeError
from core.utils.numbers import to_decimal

logger = logging.getLogger(__name__)

Calculator = Callable[[Mapping[str, Any], CalculationContext], List[OfferteRegel]]

CALCULATORS: Dict[str, Dict[str, Calculator]] = {
    OfferteType.AANLEG.value: {
        "grondwerk": aanleg.calculate_grondwerk,
        "bestrating": aanleg.calculate_bestrating,
        "borders": aanleg.calculate_borders,
        "gras": aanleg.calculate_gras,
        "houtwerk": aanleg.calculate_houtwerk,
        "water_elektra": aanleg.calculate_water_elektra,
        "specials": aanleg.calculate_specials,
    },
    OfferteType.ONDERHOUD.value: {
        "gras": onderhoud.calculate_gras_onderhoud,
        "borders": onderhoud.calculate_borders_onderhoud,
        "heggen": onderhoud.calculate_heggen_onderhoud,
        "heggen_extended": onderhoud.calculate_heggen_extended,
        "bomen": onderhoud.calculate_bomen_onderhoud,
        "bomen_extended": onderhoud.calculate_bomen_extended,
        "reiniging": onderhoud.calculate_reiniging_onderhoud,
        "bemesting": onderhoud.calculate_bemesting_onderhoud,
        "gazonanalyse": onderhoud.calculate_gazonanalyse_onderhoud,
        "mollenbestrijding": onderhoud.calculate_mollenbestrijding_onderhoud,
        "overig": onderhoud.calculate_overig_onderhoud,
    },
}


def get_calculator(offerte_type: str, scope: str) -> Calculator:
    """
    Raises:
        UnknownScopeError: no calculator for this type and scope
    """
    try:
        return CALCULATORS[str(offerte_type)][scope]
    except KeyError:
        raise UnknownScopeError(scope, str(offerte_type)) from None


def calculate_offerte_regels(
    offerte_type: str,
    scopes: Iterable[str],
    scope_data: Mapping[str, Mapping[str, Any]],
    context: CalculationContext,
) -> List[OfferteRegel]:
    """
    Calculates the lines of all selected scopes, in the order given.
    A scope selected more than once is calculated once.

    Args:
        offerte_type: "aanleg" or "onderhoud"
        scopes: selected scope keys
        scope_data: {scope: data}; scopes without data are skipped
        context: reference data, uurtarief and site conditions

    Returns:
        All lines, scope by scope

    Raises:
        UnknownScopeError: a scope without calculator for the type
        InvalidScopeDataError: scope data that cannot be calculated
    """
    regels: List[OfferteRegel] = []
    seen = set()
    for scope in scopes:
        calculator = get_calculator(offerte_type, scope)
        if scope in seen:
            logger.debug("Scope %s meer dan eens geselecteerd, overgeslagen", scope)
            continue
        seen.add(scope)
        data = scope_data.get(scope)
        if not data:
            logger.debug("Scope %s geselecteerd zonder gegevens, overgeslagen", scope)
            continue
        regels.extend(calculator(data, context))
    return regels


def offerte_overhead_regel() -> OfferteRegel:
    """Fixed line for preparing the offerte and its administration."""
    return OfferteRegel(
        id="algemeen-offerte-voorbereiding",
        scope="algemeen",
        omschrijving="Offerte voorbereiding & administratie",
        eenheid="vast",
        hoeveelheid=Decimal("1"),
        prijs_per_eenheid=OFFERTE_OVERHEAD,
        totaal=OFFERTE_OVERHEAD.quantize(Decimal("0.01")),
        type="arbeid",
    )


def garantie_pakket_regel(pakket_naam: str, prijs) -> OfferteRegel:
    """
    Line for a warranty package sold with the offerte.

    Example:
        >>> garantie_pakket_regel("Premium", "350").omschrijving
        'Garantiepakket: Premium'
    """
    prijs = to_decimal(prijs)
    builder = RegelBuilder("garantie", context=None)
    return builder.materiaal(f"Garantiepakket: {pakket_naam}", Decimal("1"), "pakket", prijs)
