from __future__ import annotations

from typing import Protocol, TypeVar

T = TypeVar("T")


class JsonCodec(Protocol[T]):
    """
    Minimal serialization interface: one value of T <-> one JSON document.

    Both directions raise SerializationError on failure.
    """

    def encode(self, value: T, *, pretty: bool, indent: int) -> bytes:
        """Return the full JSON document for `value` (no trailing newline)."""
        ...

    def decode(self, raw: bytes) -> T:
        """Parse and validate a full JSON document into a value of T."""
        ...
