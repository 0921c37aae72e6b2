from app_calculations.calculators.base import (
    CalculationContext,
    OfferteRegel,
    RegelBuilder,
)
from app_calculations.calculators.registry import (
    calculate_offerte_regels,
    garantie_pakket_regel,
    get_calculator,
    offerte_overhead_regel,
)

__all__ = [
    "CalculationContext",
    "OfferteRegel",
    "RegelBuilder",
    "calculate_offerte_regels",
    "garantie_pakket_regel",
    "get_calculator",
    "offerte_overhead_regel",
]
