"""
Django app configuration for toolkit.
"""

from django.apps import AppConfig


class ToolkitConfig(AppConfig):
    """Configuration for the toolkit application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "toolkit"
    verbose_name = "Toolkit"

    def ready(self):
        """
        Drop any adapter set resolved before settings were final.

        Settings overrides in tests call get_adapters.cache_clear() themselves.
        """
        from toolkit.adapters import get_adapters

        get_adapters.cache_clear()
