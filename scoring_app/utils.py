from rest_framework import serializers

from scoring_app.services.numeric import to_finite_number


class LabelChoiceField(serializers.ChoiceField):
    """
    Accepts either the stored code ("trimestral") or its label ("Trimestral"),
    case-insensitively. With ``fallback`` set (a value or a callable returning
    one), unknown values resolve to it instead of failing validation.
    """

    def __init__(self, *args, fallback=None, **kwargs):
        self.fallback = fallback
        super().__init__(*args, **kwargs)

    def to_internal_value(self, data):
        data_str = str(data).strip()
        if data_str in self.choices:
            return data_str
        for key, label in self.choices.items():
            if label == data:
                return key

        for key, label in self.choices.items():
            if str(key).lower() == data_str.lower() or str(label).lower() == data_str.lower():
                return key
        if self.fallback is not None:
            return self.fallback() if callable(self.fallback) else self.fallback
        self.fail('invalid_choice', input=data)

    def to_representation(self, value):
        return self.choices.get(value, super().to_representation(value))


class FiniteNumberField(serializers.Field):
    """
    Lenient numeric field: blanks, text and NaN become ``missing_value``
    instead of a validation error ("no measurement entered").
    """

    def __init__(self, *, missing_value=0.0, **kwargs):
        self.missing_value = missing_value
        if missing_value is None:
            kwargs.setdefault("allow_null", True)
        super().__init__(**kwargs)

    def validate_empty_values(self, data):
        if data is None and self.missing_value is not None:
            return (True, self.missing_value)
        return super().validate_empty_values(data)

    def to_internal_value(self, data):
        return to_finite_number(data, self.missing_value)

    def to_representation(self, value):
        return value
