# apps/hierarchy/apps.py

from django.apps import AppConfig


class HierarchyConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.hierarchy'
    verbose_name = 'Panchayath Hierarchy'

    def ready(self):
        import apps.hierarchy.signals  # noqa: F401
