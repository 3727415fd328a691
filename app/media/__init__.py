"""
Media app for upload validation and media reference rendering.

This app provides:
- Per-category upload size validation with hosted-mode ceilings
- Always-enforced safety caps (decompression bombs, ZIP bombs, body size)
- Size variant resolution with graceful fallback to the original asset
- Rendering of media references into URLs and <img> markup
- Template tags wrapping the renderers
"""
