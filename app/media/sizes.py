"""
Size variant resolution.

Given a media entry and a requested variant name, pick the concrete path
and dimensions to render. Variants are optional enrichments produced by
the image processors, so a missing variant degrades to the original asset
instead of failing the page.

Resolution order:
    1. Vector entries (SVG) always use the original path, no dimensions.
    2. The requested variant, when the entry has it.
    3. The original asset (path, width, height) as the fallback variant.
    4. VariantNotFoundError when not even the original has a path.

Configuration:
    settings.MEDIA_SILENT_VARIANT_FALLBACK (default True): when False,
    step 3 is skipped and a missing variant raises VariantNotFoundError.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from django.conf import settings

from core.exceptions import VariantNotFoundError

if TYPE_CHECKING:
    from media.types import MediaEntry

logger = logging.getLogger(__name__)

DEFAULT_VARIANT = "medium"


@dataclass(frozen=True)
class ResolvedSize:
    """Concrete rendition chosen for a render."""

    path: str
    width: int | None
    height: int | None
    is_fallback: bool = False


def silent_fallback_enabled() -> bool:
    return bool(getattr(settings, "MEDIA_SILENT_VARIANT_FALLBACK", True))


def resolve_size(
    entry: MediaEntry,
    variant: str = DEFAULT_VARIANT,
    *,
    allow_fallback: bool | None = None,
) -> ResolvedSize:
    """
    Resolve the rendition to use for an entry.

    Args:
        entry: Media entry to resolve
        variant: Requested size variant name (e.g., "small", "large")
        allow_fallback: Override for settings.MEDIA_SILENT_VARIANT_FALLBACK

    Returns:
        ResolvedSize with path and dimensions

    Raises:
        VariantNotFoundError: If no usable path exists
    """
    if entry.is_vector:
        if not entry.path:
            raise VariantNotFoundError(variant, entry.filename)
        return ResolvedSize(path=entry.path, width=None, height=None)

    size = entry.sizes.get(variant)
    if size is not None and size.path:
        return ResolvedSize(path=size.path, width=size.width, height=size.height)

    if allow_fallback is None:
        allow_fallback = silent_fallback_enabled()

    if not allow_fallback or not entry.path:
        raise VariantNotFoundError(variant, entry.filename)

    logger.debug(
        "Size variant missing, using original",
        extra={"media_filename": entry.filename, "variant": variant},
    )
    return ResolvedSize(
        path=entry.path,
        width=entry.width,
        height=entry.height,
        is_fallback=True,
    )
