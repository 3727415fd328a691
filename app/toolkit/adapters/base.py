"""
Base class for pluggable capabilities.

A capability is a frozen dataclass whose fields are its operations. A
deployment overrides any subset of those operations; everything it does
not override keeps the built-in default.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import TYPE_CHECKING, ClassVar

from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

if TYPE_CHECKING:
    from typing import Any


@dataclass(frozen=True)
class Capability:
    """
    A named set of operations with a fixed contract.

    Subclasses declare one callable field per operation and set name.

    Example:
        @dataclass(frozen=True)
        class EmailAdapter(Capability):
            name: ClassVar[str] = "email"
            send: Callable[[str, dict], dict] = console_send
    """

    name: ClassVar[str] = ""

    @classmethod
    def operation_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def merge(self, override: Any) -> Capability:
        """
        Return a copy with the override's operations replacing ours.

        Args:
            override: None, a mapping of operation name to callable (or
                dotted import path), an instance of this capability, or any
                object exposing some of the operations as attributes

        Returns:
            A new capability instance

        Raises:
            ImproperlyConfigured: On unknown operation names or
                non-callable operations
        """
        if override is None:
            return self
        if isinstance(override, type(self)):
            return override

        known = self.operation_names()
        if isinstance(override, Mapping):
            unknown = set(override) - set(known)
            if unknown:
                raise ImproperlyConfigured(
                    f"Unknown operations for the '{self.name}' adapter: "
                    f"{', '.join(sorted(unknown))}"
                )
            supplied = dict(override)
        else:
            supplied = {
                op: getattr(override, op) for op in known if hasattr(override, op)
            }

        changes = {op: self._load(op, value) for op, value in supplied.items()}
        return replace(self, **changes)

    def _load(self, operation: str, value: Any) -> Any:
        if isinstance(value, str):
            try:
                value = import_string(value)
            except ImportError as e:
                raise ImproperlyConfigured(
                    f"Cannot import '{value}' for {self.name}.{operation}"
                ) from e
        if not callable(value):
            raise ImproperlyConfigured(
                f"{self.name}.{operation} must be callable, got {type(value).__name__}"
            )
        return value
