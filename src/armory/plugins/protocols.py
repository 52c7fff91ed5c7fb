"""Capability protocols the invoker relies on.

The base classes in armory.plugins.base satisfy these; the invoker only
needs the methods named here, selected by plugin kind.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Buildable(Protocol):
    """Payloads and exploits: validate, then build an artifact."""

    def validate(self) -> None: ...

    def build(self) -> str: ...


@runtime_checkable
class Encodable(Protocol):
    """Encoders: validate, then transform bytes."""

    def validate(self) -> None: ...

    def encode(self, data: bytes) -> bytes: ...
