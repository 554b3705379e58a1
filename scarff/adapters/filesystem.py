"""Filesystem port and its two backends.

``LocalFilesystem`` writes to disk; ``MemoryFilesystem`` keeps everything in
dictionaries so scaffolding can be exercised without touching the disk.
Both raise ``FilesystemError`` on failure.
"""

from __future__ import annotations

import shutil
import stat
import threading
from pathlib import Path, PurePath
from typing import Protocol

from ..domain.errors import FilesystemError


class Filesystem(Protocol):
    """Operations the scaffold service needs to materialise a project."""

    def create_dir_all(self, path: Path) -> None: ...

    def write_file(self, path: Path, content: str) -> None: ...

    def set_executable(self, path: Path) -> None: ...

    def exists(self, path: Path) -> bool: ...

    def remove_dir_all(self, path: Path) -> None: ...


# ---------------------------------------------------------------------------
# Real disk
# ---------------------------------------------------------------------------


class LocalFilesystem:
    """Filesystem backed by ``pathlib`` and ``shutil``."""

    def create_dir_all(self, path: Path) -> None:
        try:
            Path(path).mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FilesystemError(str(path), str(exc)) from exc

    def write_file(self, path: Path, content: str) -> None:
        try:
            Path(path).write_text(content, encoding="utf-8")
        except (OSError, UnicodeError) as exc:
            raise FilesystemError(str(path), str(exc)) from exc

    def set_executable(self, path: Path) -> None:
        target = Path(path)
        try:
            mode = target.stat().st_mode
            target.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        except OSError as exc:
            raise FilesystemError(str(path), str(exc)) from exc

    def exists(self, path: Path) -> bool:
        return Path(path).exists()

    def remove_dir_all(self, path: Path) -> None:
        try:
            shutil.rmtree(path)
        except OSError as exc:
            raise FilesystemError(str(path), str(exc)) from exc


# ---------------------------------------------------------------------------
# In-memory test double
# ---------------------------------------------------------------------------


class MemoryFilesystem:
    """Dictionary-backed filesystem.

    ``write_file`` fails when the parent directory was never created, the same
    way the real disk would.  ``fail_on`` makes writes to specific paths raise,
    which lets tests exercise the rollback path.
    """

    def __init__(self, fail_on: set[str] | None = None) -> None:
        self._lock = threading.Lock()
        self._files: dict[PurePath, str] = {}
        self._directories: set[PurePath] = set()
        self._executables: set[PurePath] = set()
        self.fail_on = {PurePath(p) for p in (fail_on or set())}

    def create_dir_all(self, path: Path) -> None:
        with self._lock:
            current = PurePath(path)
            self._directories.add(current)
            self._directories.update(current.parents)

    def write_file(self, path: Path, content: str) -> None:
        key = PurePath(path)
        with self._lock:
            if key in self.fail_on:
                raise FilesystemError(str(path), "simulated write failure")
            parent = key.parent
            if str(parent) not in ("", ".") and parent not in self._directories:
                raise FilesystemError(str(path), "Parent directory does not exist")
            self._files[key] = content

    def set_executable(self, path: Path) -> None:
        key = PurePath(path)
        with self._lock:
            if key not in self._files:
                raise FilesystemError(str(path), "File does not exist")
            self._executables.add(key)

    def exists(self, path: Path) -> bool:
        key = PurePath(path)
        with self._lock:
            return key in self._files or key in self._directories

    def remove_dir_all(self, path: Path) -> None:
        root = PurePath(path)
        with self._lock:
            if root not in self._directories:
                raise FilesystemError(str(path), "Directory does not exist")

            def _inside(p: PurePath) -> bool:
                return p == root or root in p.parents

            self._files = {p: c for p, c in self._files.items() if not _inside(p)}
            self._directories = {p for p in self._directories if not _inside(p)}
            self._executables = {p for p in self._executables if not _inside(p)}

    # -- Inspection helpers (tests) ----------------------------------------

    def read_file(self, path: Path) -> str | None:
        with self._lock:
            return self._files.get(PurePath(path))

    def is_executable(self, path: Path) -> bool:
        with self._lock:
            return PurePath(path) in self._executables

    def is_dir(self, path: Path) -> bool:
        with self._lock:
            return PurePath(path) in self._directories

    def list_files(self) -> list[PurePath]:
        with self._lock:
            return sorted(self._files)

    def clear(self) -> None:
        with self._lock:
            self._files.clear()
            self._directories.clear()
            self._executables.clear()
