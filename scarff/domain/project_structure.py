"""Rendered output: the concrete files and directories to materialise."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath, PureWindowsPath

from .errors import (
    AbsolutePathNotAllowedError,
    DuplicatePathError,
    InvalidTemplateError,
    PathTraversalError,
)


@dataclass(frozen=True)
class FileToWrite:
    path: str
    content: str
    executable: bool = False

    @property
    def size(self) -> int:
        return len(self.content.encode("utf-8"))


@dataclass(frozen=True)
class DirectoryToCreate:
    path: str


FsEntry = FileToWrite | DirectoryToCreate


@dataclass
class ProjectStructure:
    """Entries relative to ``root``, in creation order."""

    root: Path
    entries: list[FsEntry] = field(default_factory=list)

    def add_file(self, path: str, content: str, executable: bool = False) -> None:
        self.entries.append(FileToWrite(path, content, executable))

    def add_directory(self, path: str) -> None:
        self.entries.append(DirectoryToCreate(path))

    def files(self) -> list[FileToWrite]:
        return [e for e in self.entries if isinstance(e, FileToWrite)]

    def directories(self) -> list[DirectoryToCreate]:
        return [e for e in self.entries if isinstance(e, DirectoryToCreate)]

    def __len__(self) -> int:
        return len(self.entries)

    def validate(self) -> None:
        if not self.entries:
            raise InvalidTemplateError("Project structure is empty")
        seen: set[str] = set()
        for entry in self.entries:
            if entry.path in seen:
                raise DuplicatePathError(entry.path)
            seen.add(entry.path)
            if PurePosixPath(entry.path).is_absolute() or PureWindowsPath(entry.path).is_absolute():
                raise AbsolutePathNotAllowedError(entry.path)
            if ".." in PureWindowsPath(entry.path).parts:
                raise PathTraversalError(entry.path)
