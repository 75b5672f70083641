from __future__ import annotations

from .errors import (
    ClearFileError,
    FileAlreadyExistsError,
    FileSyncError,
    FileSyncIOError,
    SeekError,
    SerializationError,
    SetLenError,
)
from .interfaces import JsonCodec
from .json_codec import TypeAdapterCodec
from .settings import Settings, get_settings
from .synced_file import SyncedFile

__all__ = [
    "SyncedFile",
    "JsonCodec",
    "TypeAdapterCodec",
    "Settings",
    "get_settings",
    "FileSyncError",
    "FileAlreadyExistsError",
    "FileSyncIOError",
    "SerializationError",
    "ClearFileError",
    "SetLenError",
    "SeekError",
]
