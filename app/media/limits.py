"""
Platform limits for media handling.

When HOSTED_MODE is on, the ceilings here are server-enforced and clamp
user-configurable app settings (a user can set maxFileSizeMB to 80, but
the server caps it at max_image_mb_ceiling).

In self-hosted mode most limits are advisory: the user controls their own
instance. Limits marked "always enforced" apply regardless of mode because
they guard resource exhaustion (image decompression bombs, ZIP bombs,
oversized request bodies). Their checks raise LimitExceededError and must
never be turned into a soft failure.

Configuration:
    settings.HOSTED_MODE: bool
    settings.MEDIA_LIMITS: dict overriding DEFAULT_MEDIA_LIMITS keys

Usage:
    from media.limits import get_limits, enforce_image_dimensions

    limits = get_limits()
    enforce_image_dimensions(width, height, limits=limits)
"""

from __future__ import annotations

import logging
import posixpath
import zipfile
from dataclasses import dataclass, fields
from typing import IO, TYPE_CHECKING

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from PIL import Image

from core.exceptions import LimitExceededError

if TYPE_CHECKING:
    from typing import Any

logger = logging.getLogger(__name__)

MB = 1024 * 1024

DEFAULT_MEDIA_LIMITS: dict[str, Any] = {
    # Server caps on user-configurable upload sizes (MB)
    "max_image_mb_ceiling": 50,
    "max_video_mb_ceiling": 200,
    "max_audio_mb_ceiling": 100,
    # Hosted-mode quotas
    "max_files_per_project": 1000,
    "max_total_storage_per_user_mb": 5000,
    # Always enforced
    "max_image_dimension": 10_000,
    "max_image_pixels": 100_000_000,
    "max_zip_entries": 10_000,
    "json_body_limit": 2 * MB,
    "editor_json_body_limit": 10 * MB,
}

# Keys that apply regardless of HOSTED_MODE
ALWAYS_ENFORCED = frozenset(
    {
        "max_image_dimension",
        "max_image_pixels",
        "max_zip_entries",
        "json_body_limit",
        "editor_json_body_limit",
    }
)


@dataclass(frozen=True)
class MediaLimits:
    """Resolved platform limits. Read-only after initialization."""

    max_image_mb_ceiling: int
    max_video_mb_ceiling: int
    max_audio_mb_ceiling: int
    max_files_per_project: int
    max_total_storage_per_user_mb: int
    max_image_dimension: int
    max_image_pixels: int
    max_zip_entries: int
    json_body_limit: int
    editor_json_body_limit: int

    @classmethod
    def from_mapping(cls, overrides: dict[str, Any] | None = None) -> MediaLimits:
        """
        Merge overrides over the defaults.

        Raises:
            ImproperlyConfigured: If an override names an unknown limit
        """
        overrides = dict(overrides or {})
        known = {f.name for f in fields(cls)}
        unknown = set(overrides) - known
        if unknown:
            raise ImproperlyConfigured(
                f"Unknown MEDIA_LIMITS keys: {', '.join(sorted(unknown))}"
            )
        return cls(**{**DEFAULT_MEDIA_LIMITS, **overrides})

    def ceiling_for(self, category: str) -> int:
        return {
            "video": self.max_video_mb_ceiling,
            "audio": self.max_audio_mb_ceiling,
        }.get(category, self.max_image_mb_ceiling)


def get_limits() -> MediaLimits:
    """Build the limits from settings.MEDIA_LIMITS."""
    return MediaLimits.from_mapping(getattr(settings, "MEDIA_LIMITS", None))


def is_hosted_mode() -> bool:
    return bool(getattr(settings, "HOSTED_MODE", False))


# =============================================================================
# Generic checks
# =============================================================================


def clamp_to_ceiling(value: Any, ceiling: Any) -> Any:
    """
    Clamp a numeric value to a ceiling.

    Non-numeric input is returned unchanged; validation of the value's
    type belongs to the caller.
    """
    numeric = (int, float)
    if (
        not isinstance(value, numeric)
        or isinstance(value, bool)
        or not isinstance(ceiling, numeric)
        or isinstance(ceiling, bool)
    ):
        return value
    return min(value, ceiling)


def check_limit(
    current_value: int,
    max_value: int | None,
    label: str,
    *,
    always_enforce: bool = False,
    exclusive: bool = True,
    hosted_mode: bool | None = None,
) -> None:
    """
    Check whether a value exceeds a platform limit.

    In self-hosted mode the check is skipped unless always_enforce is set.

    exclusive=True fails when current_value >= max_value ("I have N items,
    can I add one more?"). exclusive=False fails only when
    current_value > max_value ("is this value within bounds?").

    Args:
        current_value: Current count / size to check
        max_value: The limit (None disables the check)
        label: Human-readable label, e.g. "media files per project"
        always_enforce: Enforce even in self-hosted mode
        exclusive: Pre-create semantics when True, bounds check when False
        hosted_mode: Override for settings.HOSTED_MODE

    Raises:
        LimitExceededError: If the limit is reached
    """
    if hosted_mode is None:
        hosted_mode = is_hosted_mode()
    if not hosted_mode and not always_enforce:
        return
    if max_value is None:
        return

    exceeded = current_value >= max_value if exclusive else current_value > max_value
    if exceeded:
        logger.warning(
            "Platform limit reached",
            extra={"label": label, "current": current_value, "max": max_value},
        )
        raise LimitExceededError(
            f"Limit reached: maximum {max_value} {label} allowed",
            details={"current": current_value, "max": max_value, "label": label},
        )


def check_string_length(
    value: Any,
    max_length: int | None,
    field_name: str,
    *,
    always_enforce: bool = False,
    hosted_mode: bool | None = None,
) -> None:
    """
    Check a string field against a max length.

    Raises:
        LimitExceededError: If the string is longer than max_length
    """
    if hosted_mode is None:
        hosted_mode = is_hosted_mode()
    if not hosted_mode and not always_enforce:
        return
    if max_length is None or not isinstance(value, str):
        return

    if len(value) > max_length:
        raise LimitExceededError(
            f"{field_name} is too long ({len(value)} characters, maximum {max_length})",
            error_code="FIELD_TOO_LONG",
            details={"field": field_name, "length": len(value), "max": max_length},
        )


# =============================================================================
# Always-enforced safety caps
# =============================================================================


def enforce_image_dimensions(
    width: int,
    height: int,
    *,
    limits: MediaLimits | None = None,
) -> None:
    """
    Reject images that could be decompression bombs.

    Always enforced, regardless of HOSTED_MODE.

    Raises:
        LimitExceededError: If either side or the pixel count is too large
    """
    limits = limits or get_limits()
    details = {
        "width": width,
        "height": height,
        "max_dimension": limits.max_image_dimension,
        "max_pixels": limits.max_image_pixels,
    }

    if width > limits.max_image_dimension or height > limits.max_image_dimension:
        raise LimitExceededError(
            f"Image dimensions {width}x{height} exceed the maximum of "
            f"{limits.max_image_dimension}px",
            error_code="IMAGE_DIMENSION_EXCEEDED",
            details=details,
        )
    if width * height > limits.max_image_pixels:
        raise LimitExceededError(
            f"Image has {width * height} pixels, maximum is {limits.max_image_pixels}",
            error_code="IMAGE_PIXELS_EXCEEDED",
            details=details,
        )


def enforce_image_file(file: IO[bytes], *, limits: MediaLimits | None = None) -> tuple[int, int]:
    """
    Read an image header with Pillow and apply the dimension caps.

    Image.open only parses the header, so the check runs before any pixel
    data is decoded. SVG and other formats Pillow cannot identify are
    returned as (0, 0) and not checked.

    Args:
        file: Binary file-like object positioned anywhere

    Returns:
        (width, height) of the image

    Raises:
        LimitExceededError: If the image exceeds a safety cap
    """
    file.seek(0)
    try:
        with Image.open(file) as img:
            width, height = img.size
    except Image.DecompressionBombError as e:
        raise LimitExceededError(
            "Image exceeds the decompression safety limit",
            error_code="IMAGE_PIXELS_EXCEEDED",
            details={"original_error": str(e)},
        ) from e
    except OSError:
        logger.debug("Skipping dimension check for unidentified image")
        return (0, 0)
    finally:
        file.seek(0)

    enforce_image_dimensions(width, height, limits=limits)
    return (width, height)


def validate_zip_entries(
    archive: zipfile.ZipFile,
    max_entries: int | None = None,
) -> None:
    """
    Validate ZIP entries before extraction.

    Checks entry count and path traversal attempts. Always enforced.

    Raises:
        LimitExceededError: On too many entries or an unsafe path
    """
    if max_entries is None:
        max_entries = get_limits().max_zip_entries

    entries = archive.infolist()
    if len(entries) > max_entries:
        raise LimitExceededError(
            f"ZIP contains too many entries ({len(entries)}, maximum {max_entries})",
            error_code="ZIP_TOO_MANY_ENTRIES",
            details={"entries": len(entries), "max": max_entries},
        )

    for entry in entries:
        name = entry.filename.replace("\\", "/")
        normalized = posixpath.normpath(name)
        if normalized.startswith("..") or posixpath.isabs(normalized) or ":" in normalized.split("/")[0]:
            raise LimitExceededError(
                f"ZIP contains unsafe path: {entry.filename}",
                error_code="ZIP_UNSAFE_PATH",
                details={"entry": entry.filename},
            )


def enforce_body_size(
    size_bytes: int,
    *,
    editor: bool = False,
    limits: MediaLimits | None = None,
) -> None:
    """
    Reject oversized request bodies. Always enforced.

    Args:
        size_bytes: Body length in bytes
        editor: Use the larger limit for page content saves

    Raises:
        LimitExceededError: If the body is larger than allowed
    """
    limits = limits or get_limits()
    max_bytes = limits.editor_json_body_limit if editor else limits.json_body_limit
    if size_bytes > max_bytes:
        raise LimitExceededError(
            f"Request body too large ({size_bytes} bytes, maximum {max_bytes})",
            error_code="BODY_TOO_LARGE",
            details={"size": size_bytes, "max": max_bytes},
        )
