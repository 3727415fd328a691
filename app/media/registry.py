"""
Media registry lookup.

The registry is owned by the surrounding application (the persisted media
catalog). This module defines the lookup contract and a read-only,
in-memory implementation built from the catalog's JSON shape, which is
what page rendering receives.

Usage:
    from media.registry import InMemoryMediaRegistry

    registry = InMemoryMediaRegistry.from_json_file("media.json")
    entry = registry.lookup("photo.jpg")  # MediaEntry or None
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from media.mime import basename
from media.types import MediaEntry

if TYPE_CHECKING:
    from typing import Any

logger = logging.getLogger(__name__)


@runtime_checkable
class MediaRegistry(Protocol):
    """
    Protocol for media catalog lookups.

    Example:
        class DatabaseRegistry:
            def lookup(self, filename: str) -> MediaEntry | None:
                row = MediaRow.objects.filter(filename=filename).first()
                return row.to_entry() if row else None
    """

    def lookup(self, filename: str) -> MediaEntry | None:
        """
        Look up an entry by filename.

        Args:
            filename: Bare filename (no directory component)

        Returns:
            MediaEntry, or None when the filename is unknown
        """
        ...


class InMemoryMediaRegistry:
    """
    Read-only registry over a filename -> MediaEntry mapping.

    Safe to share between concurrent renders; nothing mutates it after
    construction.
    """

    def __init__(self, entries: Mapping[str, MediaEntry] | None = None) -> None:
        self._entries = MappingProxyType(dict(entries or {}))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> InMemoryMediaRegistry:
        """
        Build a registry from the catalog mapping shape.

        Accepts either {filename: entry_dict} or a catalog document with a
        "files" list whose items carry a "filename" key.
        """
        if "files" in data and isinstance(data["files"], list):
            items = {
                item["filename"]: item
                for item in data["files"]
                if isinstance(item, dict) and item.get("filename")
            }
        else:
            items = {k: v for k, v in data.items() if isinstance(v, dict)}

        entries = {
            name: MediaEntry.from_dict(name, raw) for name, raw in items.items()
        }
        logger.debug("Loaded media registry", extra={"entry_count": len(entries)})
        return cls(entries)

    @classmethod
    def from_json_file(cls, path: str | Path) -> InMemoryMediaRegistry:
        """Load a registry from a media.json catalog file."""
        with open(path, encoding="utf-8") as f:
            return cls.from_mapping(json.load(f))

    def lookup(self, filename: str) -> MediaEntry | None:
        if not filename:
            return None
        return self._entries.get(basename(filename))

    def __contains__(self, filename: object) -> bool:
        return isinstance(filename, str) and self.lookup(filename) is not None

    def __len__(self) -> int:
        return len(self._entries)
