"""
Aggregation of offerte regels into totals.

Follows the principles:
- Single Responsibility: each aggregator one kind of grouping
- Immutability: input lines are never modified
- Decimal throughout, amounts rounded to 2 decimals ROUND_HALF_UP

Identities that always hold:
    subtotaal       = materiaalkosten + arbeidskosten
    totaal_ex_btw   = subtotaal + marge
    totaal_incl_btw = totaal_ex_btw + btw
"""

from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, NamedTuple, Optional

from app_calculations.calculators.base import OfferteRegel
from app_calculations.constants import SCOPE_LABELS, RegelType
from app_calculations.validators import validate_non_negative
from core.utils.numbers import (
    ZERO,
    percentage_of,
    round_decimal_value,
    round_money,
    round_to_quarter,
    to_decimal,
)


class OfferteTotals(NamedTuple):
    """Totals of an offerte."""

    materiaalkosten: Decimal
    arbeidskosten: Decimal
    machinekosten: Decimal
    totaal_uren: Decimal
    subtotaal: Decimal
    marge: Decimal
    marge_percentage: Decimal
    totaal_ex_btw: Decimal
    btw: Decimal
    totaal_incl_btw: Decimal

    def to_dict(self) -> Dict[str, str]:
        return {key: str(value) for key, value in self._asdict().items()}


class TotalsAggregator:
    """
    Sums the lines of an offerte and applies margin and VAT.

    Machine lines count as arbeidskosten; machinekosten reports the same
    amount separately. The margin percentage of a line is, in order:
    the line's own marge_percentage, the scope margin, the standard margin.
    """

    @staticmethod
    def effective_marge_percentage(
        regel: OfferteRegel,
        standaard_marge_percentage: Decimal,
        scope_marges: Optional[Mapping[str, Any]] = None,
    ) -> Decimal:
        """
        Example:
            >>> TotalsAggregator.effective_marge_percentage(
            ...     regel_bestrating, Decimal("15"), {"bestrating": 20}
            ... )
            Decimal('20')
        """
        if regel.marge_percentage is not None:
            return to_decimal(regel.marge_percentage)
        if scope_marges and scope_marges.get(regel.scope) is not None:
            return to_decimal(scope_marges[regel.scope])
        return to_decimal(standaard_marge_percentage)

    @classmethod
    def calculate(
        cls,
        regels: Iterable[OfferteRegel],
        standaard_marge_percentage: Any,
        btw_percentage: Any,
        scope_marges: Optional[Mapping[str, Any]] = None,
    ) -> OfferteTotals:
        """
        Calculates the totals of a list of lines.

        Args:
            regels: offerte lines
            standaard_marge_percentage: margin as a whole number (15 = 15%)
            btw_percentage: VAT as a whole number (21 = 21%)
            scope_marges: {scope: margin percentage}

        Returns:
            OfferteTotals

        Raises:
            ValidationError: a negative percentage

        Example:
            >>> totals = TotalsAggregator.calculate(regels, 15, 21)
            >>> totals.totaal_incl_btw == totals.totaal_ex_btw + totals.btw
            True
        """
        standaard = validate_non_negative(standaard_marge_percentage, "Marge percentage")
        btw_pct = validate_non_negative(btw_percentage, "Btw percentage")
        for scope, pct in (scope_marges or {}).items():
            if pct is not None:
                validate_non_negative(pct, f"Marge {scope}")

        materiaal = ZERO
        arbeid = ZERO
        machine = ZERO
        uren = ZERO
        marge = ZERO

        for regel in regels:
            if regel.type == RegelType.MATERIAAL:
                materiaal += regel.totaal
            elif regel.type == RegelType.MACHINE:
                machine += regel.totaal
            else:
                arbeid += regel.totaal
                uren += regel.hoeveelheid if regel.eenheid == "uur" else ZERO

            pct = cls.effective_marge_percentage(regel, standaard, scope_marges)
            marge += percentage_of(regel.totaal, pct)

        arbeidskosten = round_money(arbeid + machine)
        materiaalkosten = round_money(materiaal)
        subtotaal = materiaalkosten + arbeidskosten
        marge = round_money(marge)

        if subtotaal > 0:
            marge_percentage = round_decimal_value(marge / subtotaal * 100, 2)
        else:
            marge_percentage = round_decimal_value(standaard, 2)

        totaal_ex_btw = subtotaal + marge
        btw = round_money(percentage_of(totaal_ex_btw, btw_pct))

        return OfferteTotals(
            materiaalkosten=materiaalkosten,
            arbeidskosten=arbeidskosten,
            machinekosten=round_money(machine),
            totaal_uren=round_to_quarter(uren),
            subtotaal=subtotaal,
            marge=marge,
            marge_percentage=marge_percentage,
            totaal_ex_btw=totaal_ex_btw,
            btw=btw,
            totaal_incl_btw=totaal_ex_btw + btw,
        )


class ScopeAggregator:
    """Breakdown of lines per scope, in order of first appearance."""

    @staticmethod
    def aggregate_by_scope(regels: Iterable[OfferteRegel]) -> List[Dict]:
        """
        Returns:
            List[Dict]: per scope the material, labour and machine amounts,
                the labour hours and the total

        Example:
            >>> ScopeAggregator.aggregate_by_scope(regels)[0]
            {'scope': 'grondwerk', 'label': 'Grondwerk', 'materiaal': Decimal('0'),
             'arbeid': Decimal('675.00'), 'machine': Decimal('93.75'),
             'uren': Decimal('15.00'), 'totaal': Decimal('768.75')}
        """
        scopes: Dict[str, Dict] = {}

        for regel in regels:
            if regel.scope not in scopes:
                scopes[regel.scope] = {
                    "scope": regel.scope,
                    "label": SCOPE_LABELS.get(regel.scope, regel.scope),
                    "materiaal": ZERO,
                    "arbeid": ZERO,
                    "machine": ZERO,
                    "uren": ZERO,
                    "totaal": ZERO,
                }
            entry = scopes[regel.scope]
            entry[regel.type] += regel.totaal
            entry["totaal"] += regel.totaal
            if regel.type == RegelType.ARBEID and regel.eenheid == "uur":
                entry["uren"] += regel.hoeveelheid

        return list(scopes.values())
