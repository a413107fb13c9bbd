from rest_framework import serializers

from scoring_app.choices import AccumulationMethod, Cycle, Frequency, MetricType, QUARTERS
from scoring_app.conf import scoring_setting
from scoring_app.records import Measurable, Measurement
from scoring_app.utils import FiniteNumberField, LabelChoiceField


class MeasurementSerializer(serializers.Serializer):
    month = serializers.IntegerField(min_value=1, max_value=12)
    year  = serializers.IntegerField(min_value=1900, max_value=9999)
    value = FiniteNumberField(missing_value=0.0, required=False)


class MeasurableSerializer(serializers.Serializer):
    """
    Validates a raw indicator / key result payload and builds the records the
    scoring services take.

        serializer = MeasurableSerializer(data=payload)
        serializer.is_valid(raise_exception=True)
        measurable, check_ins = serializer.save()
    """

    name           = serializers.CharField(required=False, allow_blank=True, default="")
    target         = FiniteNumberField(missing_value=0.0, required=False, default=0.0)
    threshold_min  = FiniteNumberField(missing_value=None, required=False, default=None)
    threshold_max  = FiniteNumberField(missing_value=None, required=False, default=None)
    is_inverse     = serializers.BooleanField(required=False, default=False)
    weight         = FiniteNumberField(missing_value=0.0, required=False, default=1.0)
    current_value  = FiniteNumberField(missing_value=None, required=False, default=None)
    start_month    = serializers.IntegerField(min_value=1, max_value=12, required=False, default=1)

    accumulation_method = LabelChoiceField(
        choices=AccumulationMethod.choices, required=False,
        fallback=lambda: scoring_setting("DEFAULT_ACCUMULATION_METHOD"),
    )
    frequency = LabelChoiceField(
        choices=Frequency.choices, required=False,
        fallback=lambda: scoring_setting("DEFAULT_FREQUENCY"),
    )
    cycle = LabelChoiceField(
        choices=Cycle.choices, required=False,
        fallback=lambda: scoring_setting("DEFAULT_CYCLE"),
    )
    metric_type = LabelChoiceField(choices=MetricType.choices, required=False, fallback=MetricType.NUMBER.value)

    monthly_targets = serializers.DictField(
        child=FiniteNumberField(missing_value=None), required=False, default=dict,
    )
    active_quarters = serializers.DictField(
        child=serializers.BooleanField(), required=False, default=dict,
    )
    check_ins = MeasurementSerializer(many=True, required=False, default=list)

    def validate_monthly_targets(self, value):
        cleaned = {}
        for month, target in value.items():
            try:
                month_number = int(month)
            except (TypeError, ValueError):
                raise serializers.ValidationError(f"Invalid month key: {month!r}")
            if not 1 <= month_number <= 12:
                raise serializers.ValidationError(f"Month must be between 1 and 12 (got {month_number})")
            if target is not None:
                cleaned[month_number] = target
        return cleaned

    def validate_active_quarters(self, value):
        unknown = set(value) - {q.value for q in QUARTERS}
        if unknown:
            raise serializers.ValidationError(f"Unknown quarters: {', '.join(sorted(unknown))}")
        return value

    def validate_check_ins(self, value):
        # one check-in per (month, year); the engine would otherwise keep the last one
        seen = set()
        for item in value:
            key = (item["month"], item["year"])
            if key in seen:
                raise serializers.ValidationError(
                    f"Duplicate check-in for {item['month']:02d}/{item['year']}"
                )
            seen.add(key)
        return value

    def create(self, validated_data):
        check_ins = [Measurement(**item) for item in validated_data.pop("check_ins", [])]
        measurable = Measurable(**validated_data)
        return measurable, check_ins
