from __future__ import annotations

from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
# This avoids ModuleNotFoundError for `import filesync` when the package is not installed.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Drop FILESYNC_* variables so settings always start from their defaults.
    """
    monkeypatch.delenv("FILESYNC_PRETTY_INDENT", raising=False)
    monkeypatch.delenv("FILESYNC_FSYNC", raising=False)


@pytest.fixture
def state_path(tmp_path: Path) -> Path:
    """A path inside a temp directory that does not exist yet."""
    return tmp_path / "state.json"


class FailingHandle:
    """
    Wraps an open file and raises OSError from one chosen method.
    """

    def __init__(self, inner, fail_on: str):
        self._inner = inner
        self._fail_on = fail_on

    def __getattr__(self, name: str):
        return getattr(self._inner, name)

    def _maybe_fail(self, name: str) -> None:
        if name == self._fail_on:
            raise OSError(5, f"simulated {name} failure")

    def truncate(self, size=None):
        self._maybe_fail("truncate")
        return self._inner.truncate(size)

    def seek(self, offset, whence=0):
        self._maybe_fail("seek")
        return self._inner.seek(offset, whence)

    def write(self, data):
        self._maybe_fail("write")
        return self._inner.write(data)


@pytest.fixture
def failing_handle():
    """
    Factory: failing_handle(synced, "truncate") swaps the SyncedFile's handle for one that fails.
    """

    def _install(synced, fail_on: str) -> FailingHandle:
        handle = FailingHandle(synced._file, fail_on)
        synced._file = handle
        return handle

    return _install
