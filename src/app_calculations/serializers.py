"""
Serializers for the calculation API.

Responsibility:
- Validation of scope data per offerte type and scope
- Normalization of numbers (Decimal) before the calculators see them
- Documentation of the API schema

Principles:
- Fail Fast: validation errors are raised before any calculation
- Clear Messages: Dutch messages per field
"""

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from app_calculations.constants import (
    AANLEG_SCOPES,
    ONDERHOUD_SCOPES,
    Achterstalligheid,
    Bereikbaarheid,
    FactorType,
    OfferteType,
    RegelType,
)
from app_calculations.models import NormUur
from app_calculations.validators import validate_non_negative, validate_positive

DECIMAL_ERRORS = {
    "invalid": "Voer een geldig getal in",
    "max_digits": "Het getal is te groot",
    "max_decimal_places": "Te veel decimalen",
}


def _positive(label: str):
    def validator(value):
        validate_positive(value, label)

    return validator


def _non_negative(label: str):
    def validator(value):
        validate_non_negative(value, label)

    return validator


def positive_decimal(label: str, **kwargs) -> serializers.DecimalField:
    return serializers.DecimalField(
        max_digits=12,
        decimal_places=4,
        validators=[_positive(label)],
        error_messages={**DECIMAL_ERRORS, "required": f"{label} is verplicht"},
        **kwargs,
    )


def non_negative_decimal(label: str, **kwargs) -> serializers.DecimalField:
    kwargs.setdefault("required", False)
    kwargs.setdefault("default", 0)
    return serializers.DecimalField(
        max_digits=12,
        decimal_places=4,
        validators=[_non_negative(label)],
        error_messages=DECIMAL_ERRORS,
        **kwargs,
    )


# ---- Aanleg ----


class GrondwerkSerializer(serializers.Serializer):
    oppervlakte = positive_decimal("Oppervlakte")
    diepte = serializers.ChoiceField(choices=("licht", "standaard", "zwaar"), default="standaard")
    afvoer_grond = serializers.BooleanField(default=False)


class OnderbouwSerializer(serializers.Serializer):
    type = serializers.ChoiceField(
        choices=("zandbed", "zand_fundering", "zware_fundering"), default="zandbed"
    )
    dikte_onderlaag = positive_decimal("Dikte onderlaag", help_text="In centimeters")
    opsluitbanden = serializers.BooleanField(default=False)


class BestratingSerializer(serializers.Serializer):
    oppervlakte = positive_decimal("Oppervlakte")
    type_bestrating = serializers.ChoiceField(choices=("tegel", "klinker", "natuursteen"))
    snijwerk = serializers.ChoiceField(choices=("laag", "gemiddeld", "hoog"), default="laag")
    onderbouw = OnderbouwSerializer()


class BordersSerializer(serializers.Serializer):
    oppervlakte = positive_decimal("Oppervlakte")
    beplantingsintensiteit = serializers.ChoiceField(
        choices=("weinig", "gemiddeld", "veel"), default="gemiddeld"
    )
    afwerking = serializers.ChoiceField(choices=("geen", "schors", "grind"), default="geen")
    bodemverbetering = serializers.BooleanField(default=False)


class GrasSerializer(serializers.Serializer):
    oppervlakte = positive_decimal("Oppervlakte")
    type = serializers.ChoiceField(choices=("zaaien", "graszoden"), default="zaaien")
    kunstgras = serializers.BooleanField(default=False)
    drainage = serializers.BooleanField(default=False)
    drainage_meters = non_negative_decimal("Drainage meters")
    opsluitbanden = serializers.BooleanField(default=False)
    opsluitbanden_meters = non_negative_decimal("Opsluitbanden meters")

    def validate(self, attrs):
        if attrs.get("drainage") and not attrs.get("drainage_meters"):
            raise serializers.ValidationError(
                {"drainage_meters": "Geef het aantal meters drainage op"}
            )
        if attrs.get("opsluitbanden") and not attrs.get("opsluitbanden_meters"):
            raise serializers.ValidationError(
                {"opsluitbanden_meters": "Geef het aantal meters opsluitbanden op"}
            )
        return attrs


class HoutwerkSerializer(serializers.Serializer):
    type_houtwerk = serializers.ChoiceField(choices=("schutting", "vlonder", "pergola"))
    afmeting = positive_decimal(
        "Afmeting", help_text="Lengte (m) voor schutting, oppervlakte (m²) voor vlonder"
    )
    fundering = serializers.ChoiceField(choices=("standaard", "zwaar"), default="standaard")


class WaterElektraSerializer(serializers.Serializer):
    verlichting = serializers.ChoiceField(choices=("geen", "basis", "uitgebreid"), default="geen")
    aantal_punten = serializers.IntegerField(
        min_value=0,
        default=0,
        error_messages={"min_value": "Aantal punten mag niet negatief zijn"},
    )
    sleuven_nodig = serializers.BooleanField(default=False)


class SpecialItemSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=("jacuzzi", "sauna", "prefab", "other"))
    omschrijving = serializers.CharField(required=False, allow_blank=True, default="")


class SpecialsSerializer(serializers.Serializer):
    items = SpecialItemSerializer(many=True)


# ---- Onderhoud ----


class GrasOnderhoudSerializer(serializers.Serializer):
    gras_aanwezig = serializers.BooleanField(default=True)
    gras_oppervlakte = non_negative_decimal("Grasoppervlakte")
    maaien = serializers.BooleanField(default=False)
    kanten_steken = serializers.BooleanField(default=False)
    verticuteren = serializers.BooleanField(default=False)


class BordersOnderhoudSerializer(serializers.Serializer):
    border_oppervlakte = positive_decimal("Borderoppervlakte")
    onderhoudsintensiteit = serializers.ChoiceField(
        choices=("weinig", "gemiddeld", "veel"), default="gemiddeld"
    )
    onkruid_verwijderen = serializers.BooleanField(default=True)
    snoei_in_borders = serializers.ChoiceField(choices=("geen", "licht", "zwaar"), default="geen")
    bodem = serializers.ChoiceField(choices=("open", "bedekt"), default="open")
    afvoer_groenafval = serializers.BooleanField(default=False)


class HeggenOnderhoudSerializer(serializers.Serializer):
    lengte = positive_decimal("Lengte")
    hoogte = positive_decimal("Hoogte")
    breedte = positive_decimal("Breedte")
    snoei = serializers.ChoiceField(choices=("zijkanten", "bovenkant", "beide"), default="beide")
    afvoer_snoeisel = serializers.BooleanField(default=False)


class BomenOnderhoudSerializer(serializers.Serializer):
    aantal_bomen = serializers.IntegerField(
        min_value=1,
        error_messages={
            "required": "Aantal bomen is verplicht",
            "min_value": "Aantal bomen moet groter dan 0 zijn",
        },
    )
    snoei = serializers.ChoiceField(choices=("licht", "zwaar"), default="licht")
    hoogteklasse = serializers.ChoiceField(choices=("laag", "middel", "hoog"), default="laag")


class HeggenExtendedSerializer(HeggenOnderhoudSerializer):
    haagsoort = serializers.ChoiceField(
        choices=("liguster", "beuk", "taxus", "conifeer", "buxus"), default="liguster"
    )
    hoogwerker_nodig = serializers.BooleanField(default=False)
    snoeifrequentie = serializers.ChoiceField(choices=(1, 2, 3), default=1)
    ondergrond = serializers.ChoiceField(
        choices=("bestrating", "gras", "grind", "border"), default="gras"
    )


class BomenExtendedSerializer(BomenOnderhoudSerializer):
    hoogteklasse = serializers.ChoiceField(
        choices=("laag", "middel", "hoog", "zeer_hoog"), default="laag"
    )
    hoogte_meter = non_negative_decimal("Hoogte in meters")
    afvoer = serializers.BooleanField(default=False)
    kroondiameter = non_negative_decimal("Kroondiameter")
    inspectie = serializers.ChoiceField(
        choices=("geen", "visueel", "gecertificeerd"), default="geen"
    )
    nabij_straat = serializers.BooleanField(default=False)
    nabij_gebouw = serializers.BooleanField(default=False)
    nabij_kabels = serializers.BooleanField(default=False)


class ReinigingOnderhoudSerializer(serializers.Serializer):
    terras_reinigen = serializers.BooleanField(default=False)
    terras_oppervlakte = non_negative_decimal("Terrasoppervlakte")
    terras_type = serializers.ChoiceField(
        choices=("keramisch", "beton", "klinkers", "natuursteen", "hout"),
        required=False,
        allow_null=True,
    )
    bladruimen = serializers.BooleanField(default=False)
    bladruimen_oppervlakte = non_negative_decimal("Bladruimen oppervlakte")
    bladruimen_type = serializers.ChoiceField(choices=("eenmalig", "seizoen"), default="eenmalig")
    onkruid_bestrating = serializers.BooleanField(default=False)
    onkruid_oppervlakte = non_negative_decimal("Onkruid oppervlakte")
    onkruid_methode = serializers.ChoiceField(
        choices=("handmatig", "branden", "heet_water", "chemisch"), default="handmatig"
    )
    algereiniging = serializers.BooleanField(default=False)
    alge_oppervlakte = non_negative_decimal("Alge oppervlakte")


class BemestingOnderhoudSerializer(serializers.Serializer):
    oppervlakte = positive_decimal("Oppervlakte")
    bemestingstype = serializers.ChoiceField(choices=("basis", "premium", "bio"), default="basis")
    frequentie = serializers.ChoiceField(choices=(1, 2, 3), default=1)
    kalkbehandeling = serializers.BooleanField(default=False)
    grondanalyse = serializers.BooleanField(default=False)


class HerstelactiesSerializer(serializers.Serializer):
    verticuteren = serializers.BooleanField(default=False)
    doorzaaien = serializers.BooleanField(default=False)
    nieuwe_grasmat = serializers.BooleanField(default=False)
    plaggen = serializers.BooleanField(default=False)
    bijzaaien_kale_plekken = serializers.BooleanField(default=False)
    kale_plekken_oppervlakte = non_negative_decimal(
        "Oppervlakte kale plekken", help_text="Leeg: 10% van de oppervlakte"
    )


class GazonanalyseOnderhoudSerializer(serializers.Serializer):
    oppervlakte = positive_decimal("Oppervlakte")
    herstelacties = HerstelactiesSerializer(required=False, default=dict)
    bekalken = serializers.BooleanField(default=False)
    drainage = serializers.BooleanField(default=False)


class MollenAanvullendSerializer(serializers.Serializer):
    gazonherstel = serializers.BooleanField(default=False)
    geschatte_m2 = non_negative_decimal("Geschatte m²")
    preventief_gaas = serializers.BooleanField(default=False)
    gaas_oppervlakte = non_negative_decimal("Gaasoppervlakte")
    terugkeer_check = serializers.BooleanField(default=False)


class MollenbestrijdingOnderhoudSerializer(serializers.Serializer):
    pakket = serializers.ChoiceField(
        choices=("basis", "premium", "premium_plus"),
        error_messages={"required": "Kies een pakket"},
    )
    aanvullend = MollenAanvullendSerializer(required=False, default=dict)


class OverigOnderhoudSerializer(serializers.Serializer):
    bladruimen = serializers.BooleanField(default=False)
    terras_reinigen = serializers.BooleanField(default=False)
    terras_oppervlakte = non_negative_decimal("Terrasoppervlakte")
    onkruid_bestrating = serializers.BooleanField(default=False)
    bestrating_oppervlakte = non_negative_decimal("Bestratingoppervlakte")
    afwatering_controleren = serializers.BooleanField(default=False)
    aantal_afwateringspunten = serializers.IntegerField(min_value=0, default=0)
    overig_uren = non_negative_decimal("Overige uren")
    overig_notities = serializers.CharField(required=False, allow_blank=True, allow_null=True)


SCOPE_SERIALIZERS = {
    OfferteType.AANLEG.value: {
        "grondwerk": GrondwerkSerializer,
        "bestrating": BestratingSerializer,
        "borders": BordersSerializer,
        "gras": GrasSerializer,
        "houtwerk": HoutwerkSerializer,
        "water_elektra": WaterElektraSerializer,
        "specials": SpecialsSerializer,
    },
    OfferteType.ONDERHOUD.value: {
        "gras": GrasOnderhoudSerializer,
        "borders": BordersOnderhoudSerializer,
        "heggen": HeggenOnderhoudSerializer,
        "heggen_extended": HeggenExtendedSerializer,
        "bomen": BomenOnderhoudSerializer,
        "bomen_extended": BomenExtendedSerializer,
        "reiniging": ReinigingOnderhoudSerializer,
        "bemesting": BemestingOnderhoudSerializer,
        "gazonanalyse": GazonanalyseOnderhoudSerializer,
        "mollenbestrijding": MollenbestrijdingOnderhoudSerializer,
        "overig": OverigOnderhoudSerializer,
    },
}


class GarantiePakketSerializer(serializers.Serializer):
    naam = serializers.CharField(max_length=100)
    prijs = non_negative_decimal("Prijs", required=True, default=serializers.empty)


class OfferteCalculationRequestSerializer(serializers.Serializer):
    """
    POST /api/v1/calculations/offerte/

    scope_data is validated per selected scope with the serializer of
    that scope; the validated values replace the raw input.
    """

    type = serializers.ChoiceField(
        choices=OfferteType.choices,
        error_messages={"invalid_choice": "Onbekend offertetype '{input}'"},
    )
    scopes = serializers.ListField(
        child=serializers.CharField(),
        allow_empty=False,
        error_messages={"empty": "Selecteer minimaal één scope"},
    )
    scope_data = serializers.DictField(child=serializers.DictField(), default=dict)
    bereikbaarheid = serializers.ChoiceField(
        choices=Bereikbaarheid.choices, default=Bereikbaarheid.GOED
    )
    achterstalligheid = serializers.ChoiceField(
        choices=Achterstalligheid.choices, required=False, allow_null=True, default=None
    )
    include_overhead = serializers.BooleanField(default=False)
    garantie_pakket = GarantiePakketSerializer(required=False, allow_null=True)

    def validate(self, attrs):
        offerte_type = attrs["type"]
        allowed = AANLEG_SCOPES if offerte_type == OfferteType.AANLEG else ONDERHOUD_SCOPES

        unknown = [scope for scope in attrs["scopes"] if scope not in allowed]
        if unknown:
            raise serializers.ValidationError(
                {"scopes": f"Onbekende scope(s) voor {offerte_type}: {', '.join(unknown)}"}
            )

        dubbel = sorted({scope for scope in attrs["scopes"] if attrs["scopes"].count(scope) > 1})
        if dubbel:
            raise serializers.ValidationError(
                {"scopes": f"Scope(s) meer dan één keer geselecteerd: {', '.join(dubbel)}"}
            )

        validated = {}
        errors = {}
        for scope in attrs["scopes"]:
            raw = attrs["scope_data"].get(scope)
            if not raw:
                continue
            serializer = SCOPE_SERIALIZERS[offerte_type][scope](data=raw)
            if serializer.is_valid():
                validated[scope] = serializer.validated_data
            else:
                errors[scope] = serializer.errors

        if errors:
            raise serializers.ValidationError({"scope_data": errors})

        attrs["scope_data"] = validated
        return attrs


class OfferteRegelSerializer(serializers.Serializer):
    id = serializers.CharField()
    scope = serializers.CharField()
    omschrijving = serializers.CharField()
    eenheid = serializers.CharField()
    hoeveelheid = serializers.DecimalField(max_digits=14, decimal_places=2)
    prijs_per_eenheid = serializers.DecimalField(max_digits=12, decimal_places=2)
    totaal = serializers.DecimalField(max_digits=14, decimal_places=2)
    type = serializers.ChoiceField(choices=RegelType.choices)
    marge_percentage = serializers.DecimalField(
        max_digits=5,
        decimal_places=2,
        required=False,
        allow_null=True,
        validators=[_non_negative("Marge percentage")],
    )


class TotalsRequestSerializer(serializers.Serializer):
    """POST /api/v1/calculations/totals/"""

    regels = OfferteRegelSerializer(many=True)
    marge_percentage = non_negative_decimal("Marge percentage", allow_null=True, default=None)
    btw_percentage = non_negative_decimal("Btw percentage", allow_null=True, default=None)
    scope_marges = serializers.DictField(
        child=serializers.DecimalField(max_digits=5, decimal_places=2),
        required=False,
        allow_null=True,
        default=None,
    )

    def validate_scope_marges(self, value):
        if not value:
            return value
        for scope, pct in value.items():
            try:
                validate_non_negative(pct, f"Marge {scope}")
            except DjangoValidationError as e:
                raise serializers.ValidationError(e.messages)
        return value


class OfferteTotalsSerializer(serializers.Serializer):
    materiaalkosten = serializers.DecimalField(max_digits=14, decimal_places=2)
    arbeidskosten = serializers.DecimalField(max_digits=14, decimal_places=2)
    machinekosten = serializers.DecimalField(max_digits=14, decimal_places=2)
    totaal_uren = serializers.DecimalField(max_digits=10, decimal_places=2)
    subtotaal = serializers.DecimalField(max_digits=14, decimal_places=2)
    marge = serializers.DecimalField(max_digits=14, decimal_places=2)
    marge_percentage = serializers.DecimalField(max_digits=6, decimal_places=2)
    totaal_ex_btw = serializers.DecimalField(max_digits=14, decimal_places=2)
    btw = serializers.DecimalField(max_digits=14, decimal_places=2)
    totaal_incl_btw = serializers.DecimalField(max_digits=14, decimal_places=2)


class ScopeTotalsSerializer(serializers.Serializer):
    scope = serializers.CharField()
    label = serializers.CharField()
    materiaal = serializers.DecimalField(max_digits=14, decimal_places=2)
    arbeid = serializers.DecimalField(max_digits=14, decimal_places=2)
    machine = serializers.DecimalField(max_digits=14, decimal_places=2)
    uren = serializers.DecimalField(max_digits=10, decimal_places=2)
    totaal = serializers.DecimalField(max_digits=14, decimal_places=2)


class OfferteCalculationResponseSerializer(serializers.Serializer):
    ok = serializers.BooleanField()
    regels = OfferteRegelSerializer(many=True)
    totals = OfferteTotalsSerializer()
    per_scope = ScopeTotalsSerializer(many=True)


class TotalsResponseSerializer(serializers.Serializer):
    ok = serializers.BooleanField()
    totals = OfferteTotalsSerializer()


class CorrectieFactorEntrySerializer(serializers.Serializer):
    type = serializers.CharField()
    waarde = serializers.CharField()
    factor = serializers.DecimalField(max_digits=6, decimal_places=3)
    systeem_factor = serializers.DecimalField(max_digits=6, decimal_places=3, allow_null=True)
    is_override = serializers.BooleanField()


class CorrectieFactorListResponseSerializer(serializers.Serializer):
    ok = serializers.BooleanField()
    correctiefactoren = CorrectieFactorEntrySerializer(many=True)


class CorrectieFactorQuerySerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=FactorType.choices, required=False)


class CorrectieFactorUpsertSerializer(serializers.Serializer):
    type = serializers.ChoiceField(
        choices=FactorType.choices,
        error_messages={"invalid_choice": "Onbekend factortype '{input}'"},
    )
    waarde = serializers.CharField(max_length=50, trim_whitespace=True)
    factor = serializers.DecimalField(
        max_digits=6, decimal_places=3, error_messages=DECIMAL_ERRORS
    )

    def validate_factor(self, value):
        try:
            return validate_positive(value, "Factor")
        except DjangoValidationError as e:
            raise serializers.ValidationError(e.messages)


class CorrectieFactorResetSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=FactorType.choices)
    waarde = serializers.CharField(max_length=50)


class CorrectieFactorResponseSerializer(serializers.Serializer):
    ok = serializers.BooleanField()
    correctiefactor = CorrectieFactorEntrySerializer()


class NormUurSerializer(serializers.ModelSerializer):
    class Meta:
        model = NormUur
        fields = ("id", "scope", "activiteit", "normuur_per_eenheid", "eenheid", "omschrijving")
        read_only_fields = ("id",)

    def validate_normuur_per_eenheid(self, value):
        try:
            return validate_non_negative(value, "Normuur")
        except DjangoValidationError as e:
            raise serializers.ValidationError(e.messages)


class NormUurListResponseSerializer(serializers.Serializer):
    ok = serializers.BooleanField()
    normuren = NormUurSerializer(many=True)


class NormUurResponseSerializer(serializers.Serializer):
    ok = serializers.BooleanField()
    normuur = NormUurSerializer()


class ErrorResponseSerializer(serializers.Serializer):
    """Error response."""

    ok = serializers.BooleanField(default=False)
    error = serializers.CharField()
