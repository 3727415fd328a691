"""
Toolkit - Pluggable platform capabilities.

This app provides the adapter layer that lets a deployment swap self-hosted
defaults for platform-provided behavior:
- publish: deploy/status/draft operations (unavailable when self-hosted)
- limits: tier-aware upload limits (none when self-hosted)
- auth: request verification (single local user when self-hosted)
- email: transactional email (logged when self-hosted)

Key components:
    - adapters/base.py: Capability base class and per-operation merge
    - adapters/__init__.py: AdapterSet, resolve_adapters, get_adapters

Usage:
    from toolkit.adapters import get_adapters

    get_adapters().email.send("verify_email", {"to": "user@example.com"})

Note:
    - This app has no models.
    - For error types and result wrappers, see core/
"""
