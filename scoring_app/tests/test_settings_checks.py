from scoring_app.checks import check_scoring_settings
from scoring_app.conf import DEFAULTS, scoring_setting


class TestScoringSettings:
    def test_project_settings_pass(self):
        assert check_scoring_settings() == []

    def test_missing_keys_use_defaults(self, settings):
        settings.SCORING = {}
        assert scoring_setting("THRESHOLD_MAX_RATIO") == DEFAULTS["THRESHOLD_MAX_RATIO"]

    def test_unknown_key(self, settings):
        settings.SCORING = {"THRESHOLD_MIDDLE": 1}
        assert [e.id for e in check_scoring_settings()] == ["scoring.E002"]

    def test_inverted_ratios(self, settings):
        settings.SCORING = {"THRESHOLD_MIN_RATIO": 1.2, "THRESHOLD_MAX_RATIO": 0.8}
        assert [e.id for e in check_scoring_settings()] == ["scoring.E004"]

    def test_bad_default_choice(self, settings):
        settings.SCORING = {"DEFAULT_FREQUENCY": "weekly"}
        assert [e.id for e in check_scoring_settings()] == ["scoring.E005"]

    def test_not_a_dict(self, settings):
        settings.SCORING = [("THRESHOLD_MIN_RATIO", 0.8)]
        assert [e.id for e in check_scoring_settings()] == ["scoring.E001"]
