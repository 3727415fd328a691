"""
Authentication adapter.

Self-hosted: every request belongs to the single "local" user.
Hosted: platform-provided token verification.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, ClassVar

from toolkit.adapters.base import Capability

LOCAL_USER_ID = "local"


def verify_request(request: Any) -> dict[str, Any]:
    return {"user_id": LOCAL_USER_ID, "authenticated": True}


def is_hosted() -> bool:
    return False


@dataclass(frozen=True)
class AuthAdapter(Capability):
    name: ClassVar[str] = "auth"

    verify_request: Callable[[Any], dict[str, Any]] = verify_request
    is_hosted: Callable[[], bool] = is_hosted
