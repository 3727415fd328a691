"""
Publish adapter.

Self-hosted: publishing is not available; deploy raises and the other
operations report an unpublished site.
Hosted: implemented by the platform's control plane.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, ClassVar

from core.exceptions import PublishNotAvailableError
from toolkit.adapters.base import Capability


def deploy(export_dir: str, metadata: dict[str, Any], user_id: str) -> dict[str, Any]:
    raise PublishNotAvailableError(
        "Publishing is not available in self-hosted mode. Use Export instead."
    )


def get_status(project_id: str, user_id: str) -> dict[str, Any]:
    return {"published": False, "site_id": None, "url": None, "published_at": None}


def sync_url(site_id: str, url: str, user_id: str) -> None:
    return None


def delete_site(site_id: str, user_id: str) -> None:
    return None


def create_draft(project_name: str, source: str, user_id: str) -> dict[str, Any] | None:
    return None


@dataclass(frozen=True)
class PublishAdapter(Capability):
    name: ClassVar[str] = "publish"

    deploy: Callable[..., dict[str, Any]] = deploy
    get_status: Callable[..., dict[str, Any]] = get_status
    sync_url: Callable[..., None] = sync_url
    delete_site: Callable[..., None] = delete_site
    create_draft: Callable[..., dict[str, Any] | None] = create_draft
