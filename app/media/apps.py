"""Django app configuration for media app."""

from django.apps import AppConfig


class MediaConfig(AppConfig):
    """Configuration for the media app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "media"
    verbose_name = "Media"

    def ready(self) -> None:
        """Fail fast on malformed MEDIA_LIMITS instead of at first upload."""
        from media.limits import get_limits

        get_limits()
