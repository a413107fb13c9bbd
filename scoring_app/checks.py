from django.conf import settings
from django.core.checks import Error, Tags, register

from scoring_app.choices import AccumulationMethod, Cycle, Frequency
from scoring_app.conf import DEFAULTS


@register(Tags.compatibility)
def check_scoring_settings(app_configs=None, **kwargs):
    """Validate ``settings.SCORING`` at startup instead of at scoring time."""
    errors = []
    overrides = getattr(settings, "SCORING", None) or {}
    if not isinstance(overrides, dict):
        return [Error("SCORING must be a dict.", id="scoring.E001")]

    unknown = sorted(set(overrides) - set(DEFAULTS))
    if unknown:
        errors.append(Error(
            f"Unknown SCORING keys: {', '.join(unknown)}",
            hint=f"Valid keys are {', '.join(sorted(DEFAULTS))}.",
            id="scoring.E002",
        ))

    conf = {**DEFAULTS, **overrides}
    try:
        low = float(conf["THRESHOLD_MIN_RATIO"])
        high = float(conf["THRESHOLD_MAX_RATIO"])
    except (TypeError, ValueError):
        errors.append(Error("Threshold ratios must be numbers.", id="scoring.E003"))
    else:
        if not 0 < low <= 1 <= high:
            errors.append(Error(
                "Threshold ratios must satisfy 0 < THRESHOLD_MIN_RATIO <= 1 <= THRESHOLD_MAX_RATIO.",
                id="scoring.E004",
            ))

    for key, choices in (
        ("DEFAULT_CYCLE", Cycle),
        ("DEFAULT_FREQUENCY", Frequency),
        ("DEFAULT_ACCUMULATION_METHOD", AccumulationMethod),
    ):
        if conf[key] not in choices.values:
            errors.append(Error(
                f"{key}={conf[key]!r} is not one of {', '.join(choices.values)}.",
                id="scoring.E005",
            ))
    return errors
