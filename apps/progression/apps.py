from django.apps import AppConfig


class ProgressionConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.progression'
    verbose_name = 'Progression'

    def ready(self):
        import apps.progression.signals
