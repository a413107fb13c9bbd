from django.apps import AppConfig


class ScoringAppConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'scoring_app'

    def ready(self):
        import scoring_app.checks
