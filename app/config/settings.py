"""
Django settings for the media pipeline.

This is the single settings file for all environments. Configuration is driven
by environment variables using django-environ, following the 12-factor app
methodology.

Environment files:
    - .env.development: Development settings (DEBUG=True, self-hosted mode)
    - .env.production: Production settings (DEBUG=False, hosted mode)

For more information on this file, see:
https://docs.djangoproject.com/en/5.2/topics/settings/
"""

import os
from pathlib import Path

import environ

# =============================================================================
# Path Configuration
# =============================================================================
BASE_DIR = Path(__file__).resolve().parent.parent

# =============================================================================
# Environment Configuration
# =============================================================================
env = environ.Env(
    DEBUG=(bool, False),  # Default to False for safety
    ALLOWED_HOSTS=(list, []),
    LOG_LEVEL=(str, "INFO"),
    HOSTED_MODE=(bool, False),
    MEDIA_SILENT_VARIANT_FALLBACK=(bool, True),
    MEDIA_INLINE_DIAGNOSTICS=(bool, True),
)

# Note: In containers, env vars are passed directly; .env files are for local dev
env_file = os.environ.get("ENV_FILE", BASE_DIR.parent / ".env.development")
if Path(env_file).exists():
    environ.Env.read_env(env_file)

# =============================================================================
# Core Settings
# =============================================================================
# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = env("SECRET_KEY", default="django-insecure-local-development-key")

DEBUG = env("DEBUG")

ALLOWED_HOSTS = env("ALLOWED_HOSTS")

# =============================================================================
# Application Definition
# =============================================================================
INSTALLED_APPS = [
    "django.contrib.contenttypes",
    # Local apps
    "core",
    "toolkit",
    "media",
]

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
            ],
        },
    },
]

# No models are persisted; an in-memory database is enough.
DATABASES = {
    "default": env.db("DATABASE_URL", default="sqlite://:memory:"),
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# =============================================================================
# Media Pipeline Configuration
# =============================================================================
# Hosted mode turns the MEDIA_LIMITS ceilings into server-enforced caps on
# user settings. Always-enforced safety caps apply in both modes.
HOSTED_MODE = env("HOSTED_MODE")

# Overrides for media.limits.DEFAULT_MEDIA_LIMITS (unknown keys are rejected)
MEDIA_LIMITS = {
    "max_image_mb_ceiling": env.int("MEDIA_MAX_IMAGE_MB_CEILING", default=50),
    "max_video_mb_ceiling": env.int("MEDIA_MAX_VIDEO_MB_CEILING", default=200),
    "max_audio_mb_ceiling": env.int("MEDIA_MAX_AUDIO_MB_CEILING", default=100),
}

# URL prefix per media category used when building rendered URLs
MEDIA_BASE_PATHS = {
    "image": env("MEDIA_IMAGE_PATH", default="/uploads/images"),
    "video": env("MEDIA_VIDEO_PATH", default="/uploads/videos"),
    "audio": env("MEDIA_AUDIO_PATH", default="/uploads/audios"),
}

# When True, a missing size variant silently renders the original asset.
# When False, it renders a variant-not-found diagnostic instead.
MEDIA_SILENT_VARIANT_FALLBACK = env("MEDIA_SILENT_VARIANT_FALLBACK")

# When False, template tags log unresolved references and render nothing
MEDIA_INLINE_DIAGNOSTICS = env("MEDIA_INLINE_DIAGNOSTICS")

# Capability overrides, e.g. {"email": {"send": "platform.email.send"}}
MEDIA_ADAPTERS = {}

# =============================================================================
# Logging Configuration
# =============================================================================
LOG_LEVEL = env("LOG_LEVEL")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{levelname} {asctime} {module} {process:d} {thread:d} {message}",
            "style": "{",
        },
        "simple": {
            "format": "{levelname} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": LOG_LEVEL,
    },
    "loggers": {
        "django": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
        "media": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
        "toolkit": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
    },
}
