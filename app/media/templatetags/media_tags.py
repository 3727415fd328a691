"""
Template tags for rendering media references in Django templates.

Usage:
    {% load media_tags %}

    {% image page.hero_image "large" "hero" %}
    <audio src="{% audio track.file "url" %}" controls></audio>
    {% media_meta track.file "title" as track_title %}

Template context:
    media_registry: a MediaRegistry, or
    media_files: the catalog mapping (filename -> entry dict)
    image_path / audio_path / video_path: optional URL prefixes overriding
        settings.MEDIA_BASE_PATHS

When settings.MEDIA_INLINE_DIAGNOSTICS is False, unresolved references
are logged and render as an empty string instead of an HTML comment.
"""

from __future__ import annotations

import logging

from django import template
from django.conf import settings
from django.utils.safestring import mark_safe

from media.registry import InMemoryMediaRegistry
from media.rendering import (
    DEFAULT_BASE_PATHS,
    RenderContext,
    media_meta as read_media_meta,
    render_result,
    returns_markup,
)

logger = logging.getLogger(__name__)

register = template.Library()

_EMPTY_REGISTRY = InMemoryMediaRegistry()
_REGISTRY_CACHE_KEY = "media_tags.registry"


def _registry(context: template.Context):
    registry = context.get("media_registry")
    if registry is not None:
        return registry

    media_files = context.get("media_files")
    if not media_files:
        return _EMPTY_REGISTRY

    # Built once per template render, keyed on the catalog object
    cache_key = (_REGISTRY_CACHE_KEY, id(media_files))
    registry = context.render_context.get(cache_key)
    if registry is None:
        registry = InMemoryMediaRegistry.from_mapping(media_files)
        context.render_context[cache_key] = registry
    return registry


def _render_context(context: template.Context) -> RenderContext:
    registry = _registry(context)

    base_paths = dict(getattr(settings, "MEDIA_BASE_PATHS", DEFAULT_BASE_PATHS))
    for category in ("image", "audio", "video"):
        override = context.get(f"{category}_path")
        if override:
            base_paths[category] = override
    return RenderContext.from_registry(registry, base_paths)


def _render_tag(context: template.Context, category: str, src, args) -> str:
    result = render_result(category, src, args, _render_context(context))
    if result.success:
        if returns_markup(category, args):
            return mark_safe(result.data)
        return result.data

    if not getattr(settings, "MEDIA_INLINE_DIAGNOSTICS", True):
        logger.warning(
            "Suppressed media diagnostic",
            extra={"category": category, "error_code": result.error_code},
        )
        return ""
    return mark_safe(result.error)


@register.simple_tag(takes_context=True)
def image(context, src, *args):
    return _render_tag(context, "image", src, args)


@register.simple_tag(takes_context=True)
def audio(context, src, *args):
    return _render_tag(context, "audio", src, args)


@register.simple_tag(takes_context=True)
def video(context, src, *args):
    return _render_tag(context, "video", src, args)


@register.simple_tag(takes_context=True)
def media_meta(context, src, prop=None):
    return read_media_meta(src, prop, _render_context(context))
