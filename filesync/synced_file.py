from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import IO, Any, Callable, Generic, TypeVar

from .errors import FileAlreadyExistsError, FileSyncIOError, SeekError, SetLenError
from .interfaces import JsonCodec
from .json_codec import TypeAdapterCodec
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SyncedFile(Generic[T]):
    """
    Keeps one value and one JSON file in sync.

    The file is opened once and kept open until `close()`. Every mutation
    truncates it and writes the full document again, so after any call that
    returns normally the file contains exactly the encoding of `get()`.

    Note: `set` / `modify` that raise might leave the in-memory data and the
    file out of sync (e.g. the file was already truncated when encoding
    failed). Nothing tries to repair that; `load` the path again if you need
    a known-good state.

    Usage:

        with SyncedFile.load_or_new("state.json", Counter(count=0)) as state:
            state.modify(bump)
    """

    def __init__(
        self,
        data: T,
        file: IO[bytes],
        path: Path,
        pretty: bool,
        codec: JsonCodec[T],
        settings: Settings,
    ):
        self._data = data
        self._file = file
        self._path = path
        self._codec = codec
        self._settings = settings
        # Only affects future writes; changing it does not rewrite the file.
        self.pretty = pretty

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def new(
        cls,
        path: str | os.PathLike[str],
        data: T,
        pretty: bool = False,
        *,
        schema: Any = None,
        codec: JsonCodec[T] | None = None,
        settings: Settings | None = None,
    ) -> SyncedFile[T]:
        """
        Create a new file at `path` holding `data`.

        Raises FileAlreadyExistsError if anything already exists at `path`;
        the existing file is left untouched. If encoding fails the freshly
        created (empty) file stays on disk.
        """
        fp = Path(path)
        if fp.exists():
            logger.debug("new: %s already exists", fp)
            raise FileAlreadyExistsError(fp)

        resolved = _resolve_codec(codec, type(data) if schema is None else schema)
        try:
            file = fp.open("x+b")
        except FileExistsError as e:
            raise FileAlreadyExistsError(fp) from e
        except OSError as e:
            raise FileSyncIOError(f"Failed to create {fp}", e) from e

        synced = cls(data, file, fp, pretty, resolved, settings or get_settings())
        try:
            synced._write(data)
        except BaseException:
            synced.close()
            raise
        logger.debug("new: created %s (pretty=%s)", fp, pretty)
        return synced

    @classmethod
    def load(
        cls,
        path: str | os.PathLike[str],
        schema: Any = None,
        pretty: bool = False,
        *,
        codec: JsonCodec[T] | None = None,
        settings: Settings | None = None,
    ) -> SyncedFile[T]:
        """
        Open an existing file and decode it as `schema`.

        `pretty` only applies to later writes; the file is read as-is.
        """
        fp = Path(path)
        resolved = _resolve_codec(codec, schema)
        try:
            file = fp.open("r+b")
        except OSError as e:
            raise FileSyncIOError(f"Failed to open {fp}", e) from e

        try:
            try:
                raw = file.read()
            except OSError as e:
                raise FileSyncIOError(f"Failed to read {fp}", e) from e
            data = resolved.decode(raw)
        except BaseException:
            file.close()
            raise
        logger.debug("load: read %d bytes from %s", len(raw), fp)
        return cls(data, file, fp, pretty, resolved, settings or get_settings())

    @classmethod
    def load_or_new(
        cls,
        path: str | os.PathLike[str],
        data: T,
        pretty: bool = False,
        *,
        schema: Any = None,
        codec: JsonCodec[T] | None = None,
        settings: Settings | None = None,
    ) -> SyncedFile[T]:
        """
        `load` if `path` exists, otherwise `new` with `data`.

        The existence check and the open are not atomic.
        """
        fp = Path(path)
        if schema is None:
            schema = type(data)
        if fp.exists():
            return cls.load(fp, schema, pretty, codec=codec, settings=settings)
        return cls.new(fp, data, pretty, schema=schema, codec=codec, settings=settings)

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def get(self) -> T:
        return self._data

    @property
    def data(self) -> T:
        return self._data

    @property
    def path(self) -> Path:
        return self._path

    @property
    def codec(self) -> JsonCodec[T]:
        return self._codec

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def closed(self) -> bool:
        return self._file.closed

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def set(self, data: T) -> None:
        """
        Replace the stored value and rewrite the file.

        The in-memory value is only replaced once the write succeeded; if
        encoding fails the file has already been cleared.
        """
        self._handle()
        self._clear_file()
        self._write(data)
        self._data = data

    def modify(self, mutator: Callable[[T], object]) -> None:
        """
        Apply `mutator` to the stored value in place, then rewrite the file.

        `mutator` is called exactly once and its return value is ignored, so
        immutable values (int, str, tuples, frozen models) must be replaced
        with `set` instead. If the write fails the in-memory value keeps the
        mutation.
        """
        self._handle()
        mutator(self._data)
        self._clear_file()
        self._write(self._data)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        if not self._file.closed:
            self._file.close()
            logger.debug("close: %s", self._path)

    def __enter__(self) -> SyncedFile[T]:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"SyncedFile(path={str(self._path)!r}, pretty={self.pretty}, data={self._data!r})"

    # ------------------------------------------------------------------
    # File primitives
    # ------------------------------------------------------------------

    def _handle(self) -> IO[bytes]:
        if self._file.closed:
            raise FileSyncIOError(f"{self._path} is closed")
        return self._file

    def _clear_file(self) -> None:
        file = self._handle()
        try:
            file.truncate(0)
        except OSError as e:
            logger.debug("clear: truncate failed for %s: %r", self._path, e)
            raise SetLenError(e) from e
        try:
            file.seek(0)
        except OSError as e:
            logger.debug("clear: seek failed for %s: %r", self._path, e)
            raise SeekError(e) from e

    def _write(self, value: T) -> None:
        raw = self._codec.encode(value, pretty=self.pretty, indent=self._settings.pretty_indent)
        file = self._handle()
        try:
            file.write(raw)
            file.flush()
            if self._settings.fsync_writes:
                os.fsync(file.fileno())
        except OSError as e:
            logger.debug("write: failed for %s: %r", self._path, e)
            raise FileSyncIOError(f"Failed to write {self._path}", e) from e
        logger.debug("write: %d bytes to %s", len(raw), self._path)


def _resolve_codec(codec: JsonCodec[T] | None, schema: Any) -> JsonCodec[T]:
    if codec is not None:
        return codec
    if schema is None:
        raise TypeError("a schema type or a codec is required")
    return TypeAdapterCodec(schema)
