"""
MIME classification helpers.

Category selection, vector detection and filename sanitizing live here so
the validators, the size resolver and the renderers classify media the
same way.
"""

from __future__ import annotations

import ntpath

# =============================================================================
# Configuration
# =============================================================================

SVG_MIME_TYPE = "image/svg+xml"


# =============================================================================
# Helpers
# =============================================================================


def get_media_category(mime_type: str | None) -> str:
    """
    Classify a MIME type into a media category.

    Anything that is not video/* or audio/* is treated as an image, matching
    how upload ceilings are chosen. A bare category name ("video", "audio")
    is accepted as well.

    Args:
        mime_type: MIME type string (e.g., 'audio/mpeg') or category name.

    Returns:
        "video", "audio" or "image".
    """
    if mime_type:
        lowered = mime_type.lower()
        if lowered == "video" or lowered.startswith("video/"):
            return "video"
        if lowered == "audio" or lowered.startswith("audio/"):
            return "audio"
    return "image"


def is_vector(mime_type: str | None, filename: str | None) -> bool:
    """Return True for SVG entries, detected by MIME type or extension."""
    if mime_type == SVG_MIME_TYPE:
        return True
    return bool(filename) and filename.lower().endswith(".svg")


def basename(value: str) -> str:
    """
    Strip any directory component from an untrusted path or filename.

    Handles both POSIX and Windows separators so "..\\x.jpg" and
    "uploads/images/x.jpg" both reduce to "x.jpg".
    """
    return ntpath.basename(value)
