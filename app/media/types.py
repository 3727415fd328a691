"""
Data types for media entries and their derived size variants.

These are read-only views over the media catalog owned by the surrounding
application. The pipeline never creates or mutates entries; it only reads
them while validating uploads and rendering pages.

Types:
    SizeVariant: A derived rendition of an image at a named size tier
    MediaMetadata: Alt text, title and other descriptive fields
    MediaEntry: One uploaded asset plus its size variants

Usage:
    from media.types import MediaEntry

    entry = MediaEntry.from_dict(
        "photo.jpg",
        {
            "type": "image/jpeg",
            "path": "/uploads/images/photo.jpg",
            "width": 4000,
            "height": 3000,
            "sizes": {
                "medium": {
                    "path": "/uploads/images/photo-medium.jpg",
                    "width": 1024,
                    "height": 768,
                },
            },
            "metadata": {"alt": "Harbour at dusk"},
        },
    )
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from media.mime import get_media_category, is_vector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SizeVariant:
    """
    A derived rendition of an image.

    Attributes:
        path: Stored path of the rendition
        width: Width in pixels
        height: Height in pixels
    """

    path: str
    width: int
    height: int

    @classmethod
    def from_dict(cls, data: Any) -> SizeVariant | None:
        """
        Build a variant from a catalog mapping.

        Returns None unless path, width and height are all present, so a
        partially written variant is treated as absent.
        """
        if not isinstance(data, dict):
            return None
        path = data.get("path")
        width = data.get("width")
        height = data.get("height")
        if not path or width is None or height is None:
            return None
        return cls(path=path, width=width, height=height)


@dataclass(frozen=True)
class MediaMetadata:
    """Descriptive metadata attached to a media entry."""

    alt: str = ""
    title: str = ""
    description: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> MediaMetadata:
        if not isinstance(data, dict):
            return cls()
        known = {"alt", "title", "description"}
        return cls(
            alt=data.get("alt") or "",
            title=data.get("title") or "",
            description=data.get("description") or "",
            extra={k: v for k, v in data.items() if k not in known},
        )

    def get(self, prop: str, default: Any = "") -> Any:
        if prop in ("alt", "title", "description"):
            return getattr(self, prop) or default
        return self.extra.get(prop) or default

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = dict(self.extra)
        result.update(alt=self.alt, title=self.title, description=self.description)
        return result


@dataclass(frozen=True)
class MediaEntry:
    """
    Registry record describing one uploaded asset.

    Attributes:
        filename: Identity of the entry, unique within a registry
        mime_type: MIME type string (e.g., 'image/jpeg')
        path: Stored path of the original asset
        width: Original width in pixels (None for vector formats)
        height: Original height in pixels (None for vector formats)
        sizes: Variant name -> SizeVariant (empty for vector formats)
        metadata: Alt text, title and description
        thumbnail: Poster/thumbnail path for video entries
    """

    filename: str
    mime_type: str | None
    path: str | None
    width: int | None = None
    height: int | None = None
    sizes: dict[str, SizeVariant] = field(default_factory=dict)
    metadata: MediaMetadata = field(default_factory=MediaMetadata)
    thumbnail: str | None = None

    @property
    def is_vector(self) -> bool:
        return is_vector(self.mime_type, self.filename)

    @property
    def category(self) -> str:
        return get_media_category(self.mime_type)

    def has_mime_prefix(self, prefix: str) -> bool:
        return bool(self.mime_type) and self.mime_type.startswith(prefix)

    @classmethod
    def from_dict(cls, filename: str, data: dict[str, Any]) -> MediaEntry:
        """
        Build an entry from the catalog mapping shape.

        Variants missing any of path/width/height are dropped. Vector
        entries never carry variants or dimensions.

        Args:
            filename: Registry key of the entry
            data: Mapping with type, path, width, height, sizes, metadata

        Returns:
            MediaEntry instance
        """
        mime_type = data.get("type") or data.get("mime_type")
        vector = is_vector(mime_type, filename)

        sizes: dict[str, SizeVariant] = {}
        if not vector:
            for name, raw in (data.get("sizes") or {}).items():
                variant = SizeVariant.from_dict(raw)
                if variant is None:
                    logger.debug(
                        "Dropping incomplete size variant",
                        extra={"media_filename": filename, "variant": name},
                    )
                    continue
                sizes[name] = variant

        return cls(
            filename=filename,
            mime_type=mime_type,
            path=data.get("path"),
            width=None if vector else data.get("width"),
            height=None if vector else data.get("height"),
            sizes=sizes,
            metadata=MediaMetadata.from_dict(data.get("metadata")),
            thumbnail=data.get("thumbnail"),
        )
