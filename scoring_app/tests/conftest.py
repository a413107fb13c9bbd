import pytest
from scoring_app.choices import AccumulationMethod, Cycle, Frequency
from scoring_app.records import Measurable, Measurement


@pytest.fixture
def all_quarters():
    return {"q1": True, "q2": True, "q3": True, "q4": True}


@pytest.fixture
def create_measurable():
    def _create_measurable(**kw):
        defaults = dict(
            name="Receita",
            target=100,
            weight=1,
            accumulation_method=AccumulationMethod.LAST_VALUE,
            frequency=Frequency.MENSAL,
            cycle=Cycle.ANUAL,
        )
        defaults.update(kw)
        return Measurable(**defaults)
    return _create_measurable


@pytest.fixture
def create_check_ins():
    def _create_check_ins(values, year=2025, start=1):
        """``values`` is either a {month: value} dict or a list starting at ``start``."""
        if isinstance(values, dict):
            items = values.items()
        else:
            items = enumerate(values, start=start)
        return [Measurement(month=month, year=year, value=value) for month, value in items]
    return _create_check_ins
