"""
Email adapter.

Self-hosted: logs the message instead of sending it.
Hosted: sends through the platform's transactional email provider.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, ClassVar

from toolkit.adapters.base import Capability

logger = logging.getLogger(__name__)


def send(template: str, params: dict[str, Any]) -> dict[str, Any]:
    """
    Log the email that would be sent.

    Args:
        template: Template identifier, e.g. "verify_email"
        params: Template parameters (recipient, links, ...)

    Returns:
        Result dict with success flag and provider name
    """
    logger.info(
        f'Would send "{template}" email',
        extra={"template": template, "params": params},
    )
    return {"success": True, "provider": "console"}


@dataclass(frozen=True)
class EmailAdapter(Capability):
    name: ClassVar[str] = "email"

    send: Callable[[str, dict[str, Any]], dict[str, Any]] = send
