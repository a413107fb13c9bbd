import pytest
from scoring_app.records import Measurement
from scoring_app.services.consolidation_math import (
    accumulate, accumulate_planned, accumulated_progress, pace_progress, target_progress,
)

FULL_YEAR = range(1, 13)


class TestAccumulate:
    def test_sum(self, create_check_ins):
        result = accumulate(create_check_ins([10, 20, 30]), "sum", FULL_YEAR)
        assert result.value == 60
        assert result.has_data is True

    def test_average(self, create_check_ins):
        result = accumulate(create_check_ins([10, 20, 30]), "average", FULL_YEAR)
        assert result.value == pytest.approx(20)

    def test_last_value_uses_latest_month_not_list_order(self, create_check_ins):
        check_ins = create_check_ins({3: 30, 1: 10, 2: 20})
        assert accumulate(check_ins, "last_value", FULL_YEAR).value == 30

    def test_manual_behaves_like_last_value(self, create_check_ins):
        assert accumulate(create_check_ins([5, 7]), "manual", FULL_YEAR).value == 7

    def test_unknown_method_falls_back_to_last_value(self, create_check_ins):
        assert accumulate(create_check_ins([5, 7]), "median", FULL_YEAR).value == 7

    def test_window_filters_months(self, create_check_ins):
        check_ins = create_check_ins([1, 2, 3, 4, 5, 6])
        result = accumulate(check_ins, "sum", range(4, 6))
        assert result.value == 9

    def test_year_filter(self, create_check_ins):
        check_ins = create_check_ins([10], year=2024) + create_check_ins([20], year=2025)
        assert accumulate(check_ins, "sum", FULL_YEAR, year=2025).value == 20

    def test_no_data_is_not_a_zero(self):
        result = accumulate([], "sum", FULL_YEAR)
        assert result.value == 0
        assert result.has_data is False

    def test_real_zero_counts_as_data(self, create_check_ins):
        result = accumulate(create_check_ins([0]), "average", FULL_YEAR)
        assert result.value == 0
        assert result.has_data is True

    def test_duplicate_month_is_last_wins(self):
        check_ins = [
            Measurement(month=2, year=2025, value=1),
            Measurement(month=2, year=2025, value=9),
        ]
        assert accumulate(check_ins, "last_value", FULL_YEAR).value == 9

    def test_non_numeric_values_count_as_zero(self):
        check_ins = [Measurement(month=1, year=2025, value="x"), Measurement(month=2, year=2025, value="4")]
        assert accumulate(check_ins, "sum", FULL_YEAR).value == 4


class TestAccumulatePlanned:
    def test_sum_uses_monthly_overrides_and_default(self):
        planned = accumulate_planned({2: 50}, 10, "sum", [1, 2, 3])
        assert planned == 70

    def test_average_takes_latest_month_target(self):
        # planned tracks the current expectation, it is not a blend
        planned = accumulate_planned({1: 10, 2: 20, 3: 60}, 0, "average", [1, 2, 3])
        assert planned == 60

    def test_last_value_takes_latest_month_target(self):
        assert accumulate_planned({}, 15, "last_value", [1, 2]) == 15

    def test_explicit_zero_target_is_kept(self):
        assert accumulate_planned({3: 0}, 15, "last_value", [1, 2, 3]) == 0

    def test_no_months_plans_nothing(self):
        assert accumulate_planned({1: 10}, 10, "sum", []) == 0

    def test_missing_default_target(self):
        assert accumulate_planned({}, None, "sum", [1, 2]) == 0


class TestPaceAndTargetProgress:
    def test_pace_is_capped_at_100(self):
        assert pace_progress(150, 100) == 100
        assert pace_progress(50, 100) == 50

    def test_pace_inverse(self):
        assert pace_progress(8, 10, is_inverse=True) == 100
        assert pace_progress(20, 10, is_inverse=True) == 50

    def test_target_progress_shows_overshoot(self):
        assert target_progress(150, 100) == 150

    def test_target_progress_inverse(self):
        assert target_progress(5, 10, is_inverse=True) == 100
        assert target_progress(40, 10, is_inverse=True) == 25

    def test_rounds_to_whole_percent(self):
        assert pace_progress(2, 3) == 67
        assert pace_progress(1, 8) == 13
        assert target_progress(1, 3) == 33
        assert target_progress(3, 2, is_inverse=True) == 67

    def test_not_measured(self):
        assert pace_progress(0, 100, has_data=False) is None
        assert target_progress(0, 100, has_data=False) is None

    def test_zero_reference(self):
        assert pace_progress(0, 0) is None
        assert pace_progress(5, 0) == 0
        assert target_progress(0, 0) is None


class TestAccumulatedProgress:
    def test_sum_indicator_on_pace(self, create_measurable, create_check_ins):
        m = create_measurable(target=10, accumulation_method="sum")
        result = accumulated_progress(m, create_check_ins([10, 10, 10]), current_month=3, year=2025)
        assert result.planned == 30
        assert result.realized == 30
        assert result.score == 100

    def test_score_uses_thresholds_scaled_to_planned(self, create_measurable, create_check_ins):
        m = create_measurable(target=10, accumulation_method="sum")
        # planned 30 -> thresholds 24 / 30 / 36
        result = accumulated_progress(m, create_check_ins([9, 9, 9]), current_month=3)
        assert result.score == pytest.approx(80 + (27 - 24) / (30 - 24) * 20)

    def test_no_check_ins_is_not_measured(self, create_measurable):
        m = create_measurable(target=10, accumulation_method="sum")
        result = accumulated_progress(m, [], current_month=6)
        assert result.has_data is False
        assert result.score is None
        assert result.planned == 60

    def test_zero_check_in_scores_zero(self, create_measurable, create_check_ins):
        m = create_measurable(target=10, accumulation_method="last_value")
        result = accumulated_progress(m, create_check_ins([0]), current_month=1)
        assert result.has_data is True
        assert result.score == 0

    def test_nothing_planned_is_not_scored(self, create_measurable, create_check_ins):
        m = create_measurable(target=0, accumulation_method="sum")
        result = accumulated_progress(m, create_check_ins([5]), current_month=1)
        assert result.score is None

    def test_future_check_ins_are_ignored(self, create_measurable, create_check_ins):
        m = create_measurable(target=10, accumulation_method="sum")
        result = accumulated_progress(m, create_check_ins([10, 10, 10, 10]), current_month=2)
        assert result.realized == 20

    def test_quarter_cycle_window(self, create_measurable, create_check_ins):
        m = create_measurable(target=10, accumulation_method="sum", cycle="q2")
        check_ins = create_check_ins([99, 99, 99, 10, 10, 10])
        result = accumulated_progress(m, check_ins, current_month=12)
        assert result.planned == 30
        assert result.realized == 30

    def test_manual_uses_current_value_without_check_ins(self, create_measurable):
        m = create_measurable(target=100, accumulation_method="manual", current_value=90)
        result = accumulated_progress(m, [], current_month=5)
        assert result.has_data is True
        assert result.realized == 90
        assert result.score == pytest.approx(90)

    def test_inverse_indicator(self, create_measurable, create_check_ins):
        m = create_measurable(target=10, is_inverse=True, accumulation_method="average")
        result = accumulated_progress(m, create_check_ins([9, 11]), current_month=2)
        assert result.realized == 10
        assert result.score == 100
