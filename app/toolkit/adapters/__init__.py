"""
Pluggable adapters for hosted/self-hosted behavior.

A deployment can replace any operation of any named capability (publish,
limits, auth, email) while keeping the built-in default for everything it
does not override. Capabilities resolve independently: overriding one never
changes another.

Configuration:
    settings.MEDIA_ADAPTERS = {
        "email": {"send": "platform.email.send_via_provider"},
        "limits": {"get_effective_limits": "platform.tiers.effective_limits"},
    }

Usage:
    from toolkit.adapters import get_adapters, resolve_adapters

    adapters = get_adapters()
    adapters.email.send("verify_email", {"to": "user@example.com"})

    # Explicit overrides, e.g. in tests
    adapters = resolve_adapters({"auth": {"is_hosted": lambda: True}})
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import TYPE_CHECKING

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from toolkit.adapters.auth import AuthAdapter
from toolkit.adapters.base import Capability
from toolkit.adapters.email import EmailAdapter
from toolkit.adapters.limits import LimitsAdapter
from toolkit.adapters.publish import PublishAdapter

if TYPE_CHECKING:
    from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdapterSet:
    """The resolved capability set."""

    publish: PublishAdapter
    limits: LimitsAdapter
    auth: AuthAdapter
    email: EmailAdapter

    @classmethod
    def capability_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))


DEFAULT_ADAPTERS = AdapterSet(
    publish=PublishAdapter(),
    limits=LimitsAdapter(),
    auth=AuthAdapter(),
    email=EmailAdapter(),
)


def resolve_adapters(overrides: Mapping[str, Any] | None = None) -> AdapterSet:
    """
    Merge overrides with the default adapters.

    Args:
        overrides: capability name -> partial override (mapping of
            operation name to callable or dotted path, or an object
            exposing operations as attributes)

    Returns:
        AdapterSet with every capability fully populated

    Raises:
        ImproperlyConfigured: On unknown capability or operation names
    """
    overrides = dict(overrides or {})
    known = AdapterSet.capability_names()
    unknown = set(overrides) - set(known)
    if unknown:
        raise ImproperlyConfigured(
            f"Unknown adapter capabilities: {', '.join(sorted(unknown))}"
        )

    resolved: dict[str, Capability] = {}
    for name in known:
        default: Capability = getattr(DEFAULT_ADAPTERS, name)
        resolved[name] = default.merge(overrides.get(name))

    if overrides:
        logger.info(
            "Resolved adapter overrides",
            extra={"capabilities": sorted(overrides)},
        )
    return AdapterSet(**resolved)


@functools.lru_cache(maxsize=1)
def get_adapters() -> AdapterSet:
    """Resolve adapters from settings.MEDIA_ADAPTERS. Cached; call cache_clear() to reset."""
    return resolve_adapters(getattr(settings, "MEDIA_ADAPTERS", None))


__all__ = [
    "DEFAULT_ADAPTERS",
    "AdapterSet",
    "AuthAdapter",
    "Capability",
    "EmailAdapter",
    "LimitsAdapter",
    "PublishAdapter",
    "get_adapters",
    "resolve_adapters",
]
