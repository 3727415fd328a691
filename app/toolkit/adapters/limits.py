"""
Limits adapter.

Self-hosted: returns None, meaning no hosted limits; only the always-enforced
safety caps from media.limits apply.
Hosted: returns tier-aware limits from the control plane, e.g.
{"maxFileSizeMB": 20, "maxVideoSizeMB": 100, "maxAudioSizeMB": 50}.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, ClassVar

from toolkit.adapters.base import Capability


def get_effective_limits(user_id: str) -> dict[str, Any] | None:
    return None


def get_user_tier(user_id: str) -> str | None:
    return None


@dataclass(frozen=True)
class LimitsAdapter(Capability):
    name: ClassVar[str] = "limits"

    get_effective_limits: Callable[[str], dict[str, Any] | None] = get_effective_limits
    get_user_tier: Callable[[str], str | None] = get_user_tier
