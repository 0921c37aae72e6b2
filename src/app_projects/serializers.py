from decimal import Decimal

from rest_framework import serializers

from app_calculations.serializers import DECIMAL_ERRORS
from app_projects.models import Nacalculatie, Voorcalculatie
from app_projects.voorcalculatie import DEFAULT_EFFECTIEVE_UREN_PER_DAG, TEAM_GROOTTES


class VoorcalculatieRequestSerializer(serializers.Serializer):
    team_grootte = serializers.ChoiceField(
        choices=TEAM_GROOTTES,
        error_messages={"invalid_choice": "Teamgrootte moet 2, 3 of 4 zijn"},
    )
    effectieve_uren_per_dag = serializers.DecimalField(
        max_digits=4,
        decimal_places=2,
        min_value=Decimal("0.25"),
        default=DEFAULT_EFFECTIEVE_UREN_PER_DAG,
        error_messages={
            **DECIMAL_ERRORS,
            "min_value": "Effectieve uren per dag moet groter dan 0 zijn",
        },
    )


class VoorcalculatieSerializer(serializers.ModelSerializer):
    class Meta:
        model = Voorcalculatie
        fields = (
            "project",
            "team_grootte",
            "effectieve_uren_per_dag",
            "norm_uren_totaal",
            "geschatte_dagen",
            "norm_uren_per_scope",
            "updated_at",
        )
        read_only_fields = fields


class VoorcalculatieResponseSerializer(serializers.Serializer):
    ok = serializers.BooleanField()
    voorcalculatie = VoorcalculatieSerializer()


class NacalculatieSaveSerializer(serializers.Serializer):
    conclusies = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class ConclusieSerializer(serializers.Serializer):
    conclusie = serializers.CharField(
        trim_whitespace=True,
        error_messages={
            "required": "Conclusie is verplicht",
            "blank": "Conclusie mag niet leeg zijn",
        },
    )


class ScopeAfwijkingSerializer(serializers.Serializer):
    scope = serializers.CharField()
    geplande_uren = serializers.DecimalField(max_digits=10, decimal_places=2)
    werkelijke_uren = serializers.DecimalField(max_digits=10, decimal_places=2)
    afwijking_uren = serializers.DecimalField(max_digits=10, decimal_places=2)
    afwijking_percentage = serializers.DecimalField(max_digits=7, decimal_places=1)
    status = serializers.ChoiceField(choices=("good", "warning", "critical"))


class InsightSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=("success", "info", "warning", "critical"))
    title = serializers.CharField()
    description = serializers.CharField()
    scope = serializers.CharField(allow_null=True)


class NacalculatieResultSerializer(serializers.Serializer):
    """Schema of NacalculatieResult.to_dict()."""

    geplande_uren = serializers.DecimalField(max_digits=10, decimal_places=2)
    werkelijke_uren = serializers.DecimalField(max_digits=10, decimal_places=2)
    geplande_dagen = serializers.IntegerField()
    werkelijke_dagen = serializers.IntegerField()
    geplande_machine_kosten = serializers.DecimalField(max_digits=12, decimal_places=2)
    werkelijke_machine_kosten = serializers.DecimalField(max_digits=12, decimal_places=2)
    afwijking_uren = serializers.DecimalField(max_digits=10, decimal_places=2)
    afwijking_percentage = serializers.DecimalField(max_digits=7, decimal_places=1)
    afwijking_dagen = serializers.IntegerField()
    afwijking_machine_kosten = serializers.DecimalField(max_digits=12, decimal_places=2)
    afwijking_machine_kosten_percentage = serializers.DecimalField(
        max_digits=7, decimal_places=1
    )
    status = serializers.ChoiceField(choices=("good", "warning", "critical"))
    afwijkingen_per_scope = ScopeAfwijkingSerializer(many=True)
    werkelijke_uren_per_scope = serializers.DictField(child=serializers.CharField())
    afwijkingen_per_scope_map = serializers.DictField(child=serializers.CharField())
    insights = InsightSerializer(many=True)
    aantal_registraties = serializers.IntegerField()
    aantal_medewerkers = serializers.IntegerField()


class NacalculatieSerializer(serializers.ModelSerializer):
    class Meta:
        model = Nacalculatie
        fields = (
            "project",
            "werkelijke_uren",
            "werkelijke_dagen",
            "werkelijke_machine_kosten",
            "afwijking_uren",
            "afwijking_percentage",
            "afwijkingen_per_scope",
            "conclusies",
            "updated_at",
        )
        read_only_fields = fields


class NacalculatieReportResponseSerializer(serializers.Serializer):
    ok = serializers.BooleanField()
    nacalculatie = NacalculatieResultSerializer()


class NacalculatieSaveResponseSerializer(serializers.Serializer):
    ok = serializers.BooleanField()
    nacalculatie = NacalculatieResultSerializer()
    opgeslagen = NacalculatieSerializer()
    project_status = serializers.CharField()


class NacalculatieConclusieResponseSerializer(serializers.Serializer):
    ok = serializers.BooleanField()
    opgeslagen = NacalculatieSerializer()
