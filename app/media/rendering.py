"""
Media reference rendering for generated pages.

Turns a stored media reference (a filename, possibly with a directory
component) into either a bare URL or an <img> element, using the media
registry and the size resolver.

Rendering is total: a broken reference never raises. Not-found, category
mismatch and missing-variant failures come back as a failed ServiceResult
whose error is an HTML comment, which the caller may inline or log and
suppress. Safety-cap violations (LimitExceededError) are not caught here.

Arguments follow the filter convention used by page templates:
    args[0]  "path"/"url" for a bare URL, otherwise a size variant name
    args[1]  CSS class
    args[2]  "false" disables loading="lazy"
    args[3]  alt text (falls back to the entry's metadata)
    args[4]  title (falls back to the entry's metadata)

Usage:
    from media.rendering import RenderContext, render

    context = RenderContext.from_registry(registry)
    render("image", "uploads/photo.jpg", ["large", "hero"], context)
    # '<img src="/uploads/images/photo-large.jpg" alt="..." class="hero" ...>'
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.utils.html import escape

from core.exceptions import (
    MediaCategoryMismatchError,
    MediaNotFoundError,
    ValidationError,
    VariantNotFoundError,
)
from core.services import BaseService, ServiceResult
from media.mime import basename
from media.sizes import DEFAULT_VARIANT, resolve_size

if TYPE_CHECKING:
    from typing import Any

    from media.registry import MediaRegistry
    from media.types import MediaEntry

URL_MODES = frozenset({"path", "url"})

DEFAULT_BASE_PATHS = {
    "image": "/uploads/images",
    "video": "/uploads/videos",
    "audio": "/uploads/audios",
}

RECOVERABLE_ERRORS = (MediaNotFoundError, MediaCategoryMismatchError, VariantNotFoundError)


# =============================================================================
# Context
# =============================================================================


@dataclass(frozen=True)
class RenderContext:
    """
    What a render needs from the surrounding application.

    Attributes:
        lookup: filename -> MediaEntry or None
        base_path: media category -> URL prefix (no trailing slash)
    """

    lookup: Callable[[str], MediaEntry | None]
    base_path: Callable[[str], str]

    @classmethod
    def from_registry(
        cls,
        registry: MediaRegistry,
        base_paths: Mapping[str, str] | None = None,
    ) -> RenderContext:
        """
        Build a context from a registry and a category -> prefix mapping.

        base_paths defaults to settings.MEDIA_BASE_PATHS.
        """
        paths = dict(
            base_paths
            if base_paths is not None
            else getattr(settings, "MEDIA_BASE_PATHS", DEFAULT_BASE_PATHS)
        )

        def base_path(category: str) -> str:
            try:
                return paths[category]
            except KeyError:
                raise ImproperlyConfigured(
                    f"No media base path configured for category '{category}'"
                ) from None

        return cls(lookup=registry.lookup, base_path=base_path)


def diagnostic_comment(label: str, message: str) -> str:
    """
    Wrap a diagnostic in an HTML comment that cannot break surrounding markup.

    "--" is not allowed inside a comment, so any run of dashes coming from
    an untrusted filename is broken up.
    """
    text = f"{label} filter error: {message}"
    while "--" in text:
        text = text.replace("--", "- -")
    return f"<!-- {text} -->"


def _arg(args: Sequence[Any], index: int) -> Any:
    if index < len(args):
        value = args[index]
        if value is not None and value != "":
            return value
    return None


def _is_literal_false(value: Any) -> bool:
    return value is False or value == "false"


def _attributes(pairs: Sequence[tuple[str, Any]]) -> str:
    return " ".join(f'{name}="{escape(str(value))}"' for name, value in pairs if value)


# =============================================================================
# Renderers
# =============================================================================


class MediaRenderer(BaseService):
    """
    Shared render flow for one media category.

    Subclasses set category and label and implement build().
    """

    category: ClassVar[str] = ""
    label: ClassVar[str] = ""

    @classmethod
    def render(
        cls,
        raw_input: Any,
        args: Sequence[Any] = (),
        context: RenderContext | None = None,
    ) -> ServiceResult[str]:
        """
        Render a media reference.

        Args:
            raw_input: Stored reference, e.g. "uploads/images/photo.jpg"
            args: Positional filter arguments
            context: Registry lookup and base-path provider

        Returns:
            ServiceResult whose data is the URL/markup, or whose error is
            an inline diagnostic comment
        """
        if not isinstance(raw_input, str) or not raw_input.strip():
            return ServiceResult.success("")

        filename = basename(raw_input.strip())
        if not filename:
            return ServiceResult.success("")

        if context is None:
            raise ImproperlyConfigured("A RenderContext is required to render media")

        try:
            entry = context.lookup(filename)
            if entry is None:
                raise MediaNotFoundError(filename)
            if entry.category != cls.category:
                raise MediaCategoryMismatchError(filename, cls.category, entry.mime_type)
            return ServiceResult.success(cls.build(entry, filename, list(args), context))
        except RECOVERABLE_ERRORS as e:
            cls.get_logger().info(
                "Unresolved media reference",
                extra={"media_filename": filename, "error_code": e.error_code},
            )
            return ServiceResult.failure(
                diagnostic_comment(cls.label, e.message),
                error_code=e.error_code,
            )

    @classmethod
    def build(
        cls,
        entry: MediaEntry,
        filename: str,
        args: list[Any],
        context: RenderContext,
    ) -> str:
        raise NotImplementedError

    @classmethod
    def url(cls, context: RenderContext, filename: str) -> str:
        return f"{context.base_path(cls.category)}/{filename}"


class ImageRenderer(MediaRenderer):
    """Renders images as a bare URL or a full <img> element."""

    category = "image"
    label = "Image"

    @classmethod
    def build(cls, entry, filename, args, context):
        first = _arg(args, 0)
        if first in URL_MODES:
            return cls.url(context, filename)

        variant = str(first) if first is not None else DEFAULT_VARIANT
        size = resolve_size(entry, variant)

        alt = _arg(args, 3) or entry.metadata.alt
        title = _arg(args, 4) or entry.metadata.title
        lazy = not _is_literal_false(_arg(args, 2))
        dimensions = not entry.is_vector

        attrs = _attributes(
            [
                ("src", cls.url(context, basename(size.path))),
                ("alt", alt),
                ("title", title),
                ("class", _arg(args, 1)),
                ("width", size.width if dimensions else None),
                ("height", size.height if dimensions else None),
                ("loading", "lazy" if lazy else None),
            ]
        )
        return f"<img {attrs}>"


class AudioRenderer(MediaRenderer):
    """Audio has no size variants; every mode returns the bare URL."""

    category = "audio"
    label = "Audio"

    @classmethod
    def build(cls, entry, filename, args, context):
        return cls.url(context, filename)


class VideoRenderer(MediaRenderer):
    """Video has no size variants; every mode returns the bare URL."""

    category = "video"
    label = "Video"

    @classmethod
    def build(cls, entry, filename, args, context):
        return cls.url(context, filename)


RENDERERS: dict[str, type[MediaRenderer]] = {
    "image": ImageRenderer,
    "audio": AudioRenderer,
    "video": VideoRenderer,
}


# =============================================================================
# Dispatch
# =============================================================================


def get_renderer(category: str) -> type[MediaRenderer]:
    try:
        return RENDERERS[category]
    except KeyError:
        raise ValidationError(
            f"Unknown media category '{category}'",
            error_code="UNKNOWN_MEDIA_CATEGORY",
            details={"category": category, "known": sorted(RENDERERS)},
        ) from None


def render_result(
    category: str,
    raw_input: Any,
    args: Sequence[Any] = (),
    context: RenderContext | None = None,
) -> ServiceResult[str]:
    """Render and return the discriminated result."""
    return get_renderer(category).render(raw_input, args, context)


def render(
    category: str,
    raw_input: Any,
    args: Sequence[Any] = (),
    context: RenderContext | None = None,
) -> str:
    """Render and return the output string, inlining any diagnostic."""
    result = render_result(category, raw_input, args, context)
    return result.data if result.success else result.error


def media_meta(
    raw_input: Any,
    prop: str | None = None,
    context: RenderContext | None = None,
) -> dict[str, Any] | str:
    """
    Read an entry's metadata.

    Returns the whole metadata mapping, a single property when prop is
    given, or "" when the reference is blank or unknown.
    """
    if not isinstance(raw_input, str) or not raw_input.strip() or context is None:
        return ""

    entry = context.lookup(basename(raw_input.strip()))
    if entry is None:
        return ""
    if prop:
        return entry.metadata.get(prop, "")
    return entry.metadata.to_dict()


def returns_markup(category: str, args: Sequence[Any] = ()) -> bool:
    """True when a successful render of these arguments is an HTML element."""
    return category == "image" and _arg(args, 0) not in URL_MODES
