"""
Upload size validators.

Partitions a batch of candidate uploads into accepted files and rejected
files with a human-readable reason, using per-category size ceilings.

The validator is advisory in self-hosted deployments and mandatory in hosted
ones; which one applies is decided by the caller via UploadLimits.from_settings.
Size rejections are data, never exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from media.limits import MediaLimits, clamp_to_ceiling, get_limits, is_hosted_mode
from media.mime import get_media_category
from toolkit.adapters import get_adapters

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from typing import Any

MB = 1024 * 1024

# App-setting keys accepted for each category (camelCase from the editor UI)
USER_SETTING_KEYS: dict[str, tuple[str, ...]] = {
    "image": ("maxFileSizeMB", "max_file_size_mb", "max_image_mb"),
    "video": ("maxVideoSizeMB", "max_video_size_mb", "max_video_mb"),
    "audio": ("maxAudioSizeMB", "max_audio_size_mb", "max_audio_mb"),
}


# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True)
class UploadCandidate:
    """A file offered for upload.

    Attributes:
        name: Original filename.
        mime_type: MIME type string (e.g., 'video/mp4') or bare category.
        size_bytes: File size in bytes.
    """

    name: str
    mime_type: str
    size_bytes: int


@dataclass(frozen=True)
class RejectedUpload:
    """A file refused by the validator, with the reason shown to the user."""

    name: str
    reason: str


@dataclass
class ValidationOutcome:
    """Result of a batch validation.

    Every input appears in exactly one list, in input order.
    """

    valid: list[Any] = field(default_factory=list)
    rejected: list[RejectedUpload] = field(default_factory=list)


@dataclass(frozen=True)
class UploadLimits:
    """Effective per-category upload ceilings in MB. None means unlimited."""

    max_image_mb: float | None = None
    max_video_mb: float | None = None
    max_audio_mb: float | None = None

    def for_category(self, category: str) -> float | None:
        if category == "video":
            return self.max_video_mb
        if category == "audio":
            return self.max_audio_mb
        return self.max_image_mb

    @classmethod
    def from_settings(
        cls,
        user_settings: Mapping[str, Any] | None = None,
        *,
        hosted_mode: bool | None = None,
        limits: MediaLimits | None = None,
    ) -> UploadLimits:
        """
        Build effective limits from a user's app settings.

        In hosted mode each value is clamped to its platform ceiling, and a
        missing value falls back to the ceiling. In self-hosted mode the
        user's values are used as given and a missing value means no limit.

        Args:
            user_settings: App settings, e.g. {"maxFileSizeMB": 80}
            hosted_mode: Override for settings.HOSTED_MODE
            limits: Platform limits (defaults to get_limits())

        Returns:
            UploadLimits instance
        """
        user_settings = user_settings or {}
        if hosted_mode is None:
            hosted_mode = is_hosted_mode()
        limits = limits or get_limits()

        values: dict[str, float | None] = {}
        for category, keys in USER_SETTING_KEYS.items():
            value = next(
                (user_settings[k] for k in keys if user_settings.get(k) is not None),
                None,
            )
            if hosted_mode:
                ceiling = limits.ceiling_for(category)
                value = ceiling if value is None else clamp_to_ceiling(value, ceiling)
            values[f"max_{category}_mb"] = value
        return cls(**values)

    @classmethod
    def for_user(
        cls,
        user_id: str,
        user_settings: Mapping[str, Any] | None = None,
        *,
        hosted_mode: bool | None = None,
    ) -> UploadLimits:
        """
        Effective limits for a user, tightened by the limits adapter.

        The adapter's tier limits (same keys as app settings) can only
        lower a value; the default adapter returns None and changes nothing.
        """
        limits = cls.from_settings(user_settings, hosted_mode=hosted_mode)
        tier_limits = get_adapters().limits.get_effective_limits(user_id)
        if not tier_limits:
            return limits

        tier = cls.from_settings(tier_limits, hosted_mode=False)
        values = {}
        for category in USER_SETTING_KEYS:
            current = limits.for_category(category)
            cap = tier.for_category(category)
            if cap is not None:
                current = cap if current is None else clamp_to_ceiling(current, cap)
            values[f"max_{category}_mb"] = current
        return cls(**values)


# =============================================================================
# Validator Class
# =============================================================================


def _file_attr(file: Any, *names: str) -> Any:
    """Read the first present attribute or mapping key from a file record."""
    for name in names:
        if isinstance(file, dict):
            if name in file:
                return file[name]
        elif hasattr(file, name):
            return getattr(file, name)
    return None


def _format_mb(value: float) -> str:
    return f"{value:.15g}"


class UploadSizeValidator:
    """Validates candidate uploads against per-category size ceilings.

    Files may be UploadCandidate instances, Django UploadedFile objects
    (name, content_type, size) or plain mappings.

    Example:
        validator = UploadSizeValidator(UploadLimits(max_image_mb=10))
        outcome = validator.validate(files)
        for rejected in outcome.rejected:
            print(f"{rejected.name}: {rejected.reason}")
    """

    def __init__(self, limits: UploadLimits) -> None:
        self._limits = limits

    def validate(self, files: Iterable[Any]) -> ValidationOutcome:
        """Partition files into valid and rejected, preserving input order."""
        outcome = ValidationOutcome()
        for file in files:
            reason = self.check(file)
            if reason is None:
                outcome.valid.append(file)
            else:
                name = _file_attr(file, "name", "original_name", "filename") or ""
                outcome.rejected.append(RejectedUpload(name=name, reason=reason))
        return outcome

    def check(self, file: Any) -> str | None:
        """Return the rejection reason for a single file, or None if it fits."""
        mime_type = _file_attr(file, "mime_type", "content_type", "type", "mime_category")
        size_bytes = _file_attr(file, "size_bytes", "size") or 0

        limit_mb = self._limits.for_category(get_media_category(mime_type))
        if limit_mb is None:
            return None

        if size_bytes > limit_mb * MB:
            size_mb = size_bytes / MB
            return (
                f"File is too large ({size_mb:.1f}MB). "
                f"Maximum allowed size is {_format_mb(limit_mb)}MB."
            )
        return None


# =============================================================================
# Convenience Function
# =============================================================================


def validate_file_sizes(files: Iterable[Any], limits: UploadLimits) -> ValidationOutcome:
    """Validate a batch of uploads against the given limits.

    Args:
        files: Candidate files (UploadCandidate, UploadedFile or mapping).
        limits: Effective per-category ceilings.

    Returns:
        ValidationOutcome with valid and rejected lists.
    """
    return UploadSizeValidator(limits).validate(files)
