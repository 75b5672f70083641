from __future__ import annotations

from pathlib import Path


class FileSyncError(Exception):
    """
    Base class for every error raised by a SyncedFile.

    After an error from `set` / `modify` the in-memory value and the file
    contents may disagree.
    """


class FileAlreadyExistsError(FileSyncError):
    def __init__(self, path: Path):
        super().__init__(f'File "{path}" already exists')
        self.path = path


class FileSyncIOError(FileSyncError):
    """Wraps the OSError raised by open / write / flush / fsync."""

    def __init__(self, message: str, error: OSError | None = None):
        super().__init__(message if error is None else f"{message}: {error}")
        self.error = error


class SerializationError(FileSyncError):
    """Encoding `data` to JSON or decoding/validating the file contents failed."""

    def __init__(self, message: str, error: Exception | None = None):
        super().__init__(message)
        self.error = error


class ClearFileError(FileSyncError):
    def __init__(self, message: str, error: OSError):
        super().__init__(f"{message}. Extra info: {error}")
        self.error = error


class SetLenError(ClearFileError):
    def __init__(self, error: OSError):
        super().__init__("Failed to set len of file to 0", error)


class SeekError(ClearFileError):
    def __init__(self, error: OSError):
        super().__init__("Failed to seek to beginning of file", error)
