from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError

from app_calculations.aggregators import ScopeAggregator, TotalsAggregator
from app_calculations.calculators import OfferteRegel


def regel(scope, regel_type, totaal, hoeveelheid="1", eenheid="uur", marge=None, id_=None):
    return OfferteRegel(
        id=id_ or f"{scope}-{regel_type}-{totaal}",
        scope=scope,
        omschrijving=f"{regel_type} {scope}",
        eenheid=eenheid,
        hoeveelheid=Decimal(hoeveelheid),
        prijs_per_eenheid=Decimal(totaal),
        totaal=Decimal(totaal),
        type=regel_type,
        marge_percentage=None if marge is None else Decimal(marge),
    )


@pytest.fixture
def regels():
    return [
        regel("grondwerk", "arbeid", "450.00", hoeveelheid="10"),
        regel("grondwerk", "machine", "93.75", hoeveelheid="1.25"),
        regel("bestrating", "materiaal", "100.00", eenheid="m³"),
    ]


class TestTotals:
    def test_totals(self, regels):
        totals = TotalsAggregator.calculate(regels, 15, 21)

        assert totals.materiaalkosten == Decimal("100.00")
        assert totals.arbeidskosten == Decimal("543.75")
        assert totals.machinekosten == Decimal("93.75")
        assert totals.totaal_uren == Decimal("10.00")
        assert totals.subtotaal == Decimal("643.75")
        assert totals.marge == Decimal("96.56")
        assert totals.totaal_ex_btw == Decimal("740.31")
        assert totals.btw == Decimal("155.47")
        assert totals.totaal_incl_btw == Decimal("895.78")

    def test_identities(self, regels):
        totals = TotalsAggregator.calculate(regels, Decimal("17.5"), Decimal("9"))

        assert totals.subtotaal == totals.materiaalkosten + totals.arbeidskosten
        assert totals.totaal_ex_btw == totals.subtotaal + totals.marge
        assert totals.totaal_incl_btw == totals.totaal_ex_btw + totals.btw

    def test_fixed_price_lines_do_not_count_as_hours(self, regels):
        regels.append(regel("algemeen", "arbeid", "200.00", eenheid="vast"))
        totals = TotalsAggregator.calculate(regels, 15, 21)

        assert totals.totaal_uren == Decimal("10.00")
        assert totals.arbeidskosten == Decimal("743.75")

    def test_margin_precedence(self):
        lines = [
            regel("bestrating", "materiaal", "100.00", marge="30", id_="a"),
            regel("bestrating", "materiaal", "100.00", id_="b"),
            regel("grondwerk", "materiaal", "100.00", id_="c"),
        ]
        totals = TotalsAggregator.calculate(lines, 15, 21, scope_marges={"bestrating": 20})

        assert totals.marge == Decimal("65.00")
        assert totals.marge_percentage == Decimal("21.67")

    def test_effective_marge_percentage(self):
        line = regel("bestrating", "arbeid", "10.00")
        assert TotalsAggregator.effective_marge_percentage(
            line, Decimal("15"), {"bestrating": 20}
        ) == Decimal("20")
        assert TotalsAggregator.effective_marge_percentage(line, Decimal("15")) == Decimal("15")

    def test_empty_offerte(self):
        totals = TotalsAggregator.calculate([], 15, 21)

        assert totals.subtotaal == Decimal("0")
        assert totals.marge_percentage == Decimal("15.00")
        assert totals.totaal_incl_btw == Decimal("0")

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"standaard_marge_percentage": -1, "btw_percentage": 21},
            {"standaard_marge_percentage": 15, "btw_percentage": -21},
            {"standaard_marge_percentage": 15, "btw_percentage": 21, "scope_marges": {"gras": -5}},
        ],
    )
    def test_negative_percentages_rejected(self, regels, kwargs):
        with pytest.raises(ValidationError):
            TotalsAggregator.calculate(regels, **kwargs)

    def test_to_dict_uses_strings(self, regels):
        data = TotalsAggregator.calculate(regels, 15, 21).to_dict()
        assert data["totaal_incl_btw"] == "895.78"


def test_per_scope_breakdown(regels):
    per_scope = ScopeAggregator.aggregate_by_scope(regels)

    assert [entry["scope"] for entry in per_scope] == ["grondwerk", "bestrating"]
    grondwerk = per_scope[0]
    assert grondwerk["label"] == "Grondwerk"
    assert grondwerk["arbeid"] == Decimal("450.00")
    assert grondwerk["machine"] == Decimal("93.75")
    assert grondwerk["uren"] == Decimal("10")
    assert grondwerk["totaal"] == Decimal("543.75")
    assert per_scope[1]["materiaal"] == Decimal("100.00")
