"""
Tests for the media template tags.

These tests verify:
- Tags read the catalog from the template context
- Markup is rendered unescaped while bare URLs are autoescaped
- Path overrides from the context
- Diagnostic suppression via MEDIA_INLINE_DIAGNOSTICS
"""

from __future__ import annotations

import logging

from django.template import Context, Template

from media.registry import InMemoryMediaRegistry
from media.tests.conftest import BASE_PATHS


def render_template(source: str, **context) -> str:
    return Template("{% load media_tags %}" + source).render(Context(context))


class TestMediaTags:
    """Tests for image, audio, video and media_meta tags."""

    def test_image_tag_renders_markup(self, settings, media_files):
        settings.MEDIA_BASE_PATHS = BASE_PATHS

        output = render_template(
            '{% image src "large" "hero" %}', src="photo.jpg", media_files=media_files
        )

        assert output == (
            '<img src="/uploads/images/photo-large.jpg" alt="Harbour at dusk" '
            'title="Evening harbour" class="hero" width="1920" height="1440" loading="lazy">'
        )

    def test_audio_tag_in_attribute(self, settings, media_files):
        settings.MEDIA_BASE_PATHS = BASE_PATHS

        output = render_template(
            '<audio src="{% audio "uploads/clip.mp3" "url" %}"></audio>',
            media_files=media_files,
        )

        assert output == '<audio src="/uploads/audios/clip.mp3"></audio>'

    def test_registry_in_context(self, settings, registry: InMemoryMediaRegistry):
        settings.MEDIA_BASE_PATHS = BASE_PATHS

        output = render_template('{% video "trailer.mp4" %}', media_registry=registry)

        assert output == "/uploads/videos/trailer.mp4"

    def test_context_path_override(self, settings, media_files):
        settings.MEDIA_BASE_PATHS = BASE_PATHS

        output = render_template(
            '{% audio "clip.mp3" %}',
            media_files=media_files,
            audio_path="https://cdn.example.com/audio",
        )

        assert output == "https://cdn.example.com/audio/clip.mp3"

    def test_media_meta_tag(self, media_files):
        output = render_template(
            '{% media_meta "clip.mp3" "title" as t %}[{{ t }}]', media_files=media_files
        )

        assert output == "[Morning song]"

    def test_catalog_registry_built_once_per_render(self, settings, media_files, monkeypatch):
        """
        Several tags on one page share a single registry built from media_files.

        Why it matters: Rebuilding the catalog per tag is quadratic in page size.
        """
        settings.MEDIA_BASE_PATHS = BASE_PATHS
        build = InMemoryMediaRegistry.from_mapping
        calls = []

        def counting_from_mapping(cls, data):
            calls.append(data)
            return build(data)

        monkeypatch.setattr(
            InMemoryMediaRegistry, "from_mapping", classmethod(counting_from_mapping)
        )

        output = render_template(
            '{% image "photo.jpg" "url" %}|{% audio "clip.mp3" %}|'
            '{% video "trailer.mp4" %}|{% media_meta "clip.mp3" "title" %}',
            media_files=media_files,
        )

        assert output == (
            "/uploads/images/photo.jpg|/uploads/audios/clip.mp3|"
            "/uploads/videos/trailer.mp4|Morning song"
        )
        assert len(calls) == 1

    def test_separate_renders_do_not_share_registry(self, media_files, monkeypatch):
        build = InMemoryMediaRegistry.from_mapping
        calls = []

        def counting_from_mapping(cls, data):
            calls.append(data)
            return build(data)

        monkeypatch.setattr(
            InMemoryMediaRegistry, "from_mapping", classmethod(counting_from_mapping)
        )

        render_template('{% media_meta "clip.mp3" "title" %}', media_files=media_files)
        render_template('{% media_meta "clip.mp3" "title" %}', media_files=media_files)

        assert len(calls) == 2

    def test_url_output_is_autoescaped(self, settings):
        settings.MEDIA_BASE_PATHS = {**BASE_PATHS, "audio": "/a?x=1&y=2"}
        media_files = {"clip.mp3": {"type": "audio/mpeg", "path": "/clip.mp3"}}

        output = render_template('{% audio "clip.mp3" %}', media_files=media_files)

        assert output == "/a?x=1&amp;y=2/clip.mp3"


class TestDiagnostics:
    """Tests for unresolved references in templates."""

    def test_missing_file_renders_comment(self, settings):
        settings.MEDIA_INLINE_DIAGNOSTICS = True

        output = render_template('{% image "missing.jpg" %}')

        assert output == '<!-- Image filter error: Media file "missing.jpg" not found -->'

    def test_diagnostics_can_be_suppressed(self, settings, media_files, caplog, monkeypatch):
        """
        With inline diagnostics off, the tag renders nothing and logs instead.

        Why it matters: Production pages should not leak catalog details.
        """
        settings.MEDIA_INLINE_DIAGNOSTICS = False
        # The "media" logger does not propagate to the root handler caplog uses
        monkeypatch.setattr(logging.getLogger("media"), "propagate", True)

        with caplog.at_level(logging.WARNING, logger="media.templatetags.media_tags"):
            output = render_template('{% audio "photo.jpg" %}', media_files=media_files)

        assert output == ""
        assert any(
            getattr(r, "error_code", None) == "MEDIA_CATEGORY_MISMATCH" for r in caplog.records
        )

    def test_blank_reference_renders_nothing(self):
        assert render_template("{% image src %}", src="") == ""
