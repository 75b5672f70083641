from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import PydanticUserError, TypeAdapter, ValidationError

from .errors import SerializationError

T = TypeVar("T")


class TypeAdapterCodec(Generic[T]):
    """
    JSON codec for any type pydantic can validate: BaseModel subclasses,
    dataclasses, TypedDicts, builtins and their generic aliases.

    - Compact output has no inserted whitespace: {"count":0}
    - Pretty output is indented by `indent` spaces.
    - Decoding validates against the schema, so a well-formed document of
      the wrong shape is rejected the same way as malformed JSON.
    """

    def __init__(self, schema: Any):
        self._schema = schema
        try:
            self._adapter: TypeAdapter[T] = TypeAdapter(schema)
        except PydanticUserError as e:
            raise SerializationError(f"Cannot build a JSON schema for {_schema_name(schema)}: {e}", e) from e

    @property
    def schema(self) -> Any:
        return self._schema

    def encode(self, value: T, *, pretty: bool, indent: int = 2) -> bytes:
        try:
            # values that do not match the schema would not decode back
            return self._adapter.dump_json(value, indent=indent if pretty else None, warnings="error")
        except ValueError as e:
            # PydanticSerializationError, circular references
            raise SerializationError(f"Failed to encode {type(value).__name__} as JSON: {e}", e) from e

    def decode(self, raw: bytes) -> T:
        try:
            return self._adapter.validate_json(raw)
        except ValidationError as e:
            raise SerializationError(f"Failed to decode JSON as {_schema_name(self._schema)}: {e}", e) from e

    def __repr__(self) -> str:
        return f"TypeAdapterCodec({_schema_name(self._schema)})"


def _schema_name(schema: Any) -> str:
    return getattr(schema, "__name__", None) or repr(schema)
