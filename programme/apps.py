from django.apps import AppConfig


class ProgrammeConfig(AppConfig):
    name = 'programme'
    default_auto_field = 'django.db.models.AutoField'

    def ready(self):
        import programme.listeners  # noqa
