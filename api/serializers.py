from rest_framework import serializers

from api.utils.tax_engine import TaxRegime


REGIME_CHOICES = [regime.value for regime in TaxRegime]


class TaxCalculationRequestSerializer(serializers.Serializer):
    gross_income = serializers.FloatField(min_value=0)
    total_deductions = serializers.FloatField(min_value=0, required=False, default=0)
    regime = serializers.ChoiceField(choices=REGIME_CHOICES)

    def to_internal_value(self, data):
        if isinstance(data, dict) and isinstance(data.get('regime'), str):
            data = {**data, 'regime': data['regime'].strip().lower()}
        return super().to_internal_value(data)


class RegimeComparisonRequestSerializer(serializers.Serializer):
    gross_income = serializers.FloatField(min_value=0)
    old_regime_deductions = serializers.FloatField(min_value=0, required=False, default=0)


class SurchargeRateQuerySerializer(serializers.Serializer):
    income = serializers.FloatField(min_value=0)
    regime = serializers.ChoiceField(choices=REGIME_CHOICES, required=False, default=TaxRegime.OLD.value)
