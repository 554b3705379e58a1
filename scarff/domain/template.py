"""Template aggregate, its matcher, and the render context.

A ``Template`` owns an id, a ``TargetMatcher`` deciding which targets it
applies to, display metadata and a flat list of file/directory nodes.  It is
read-only once loaded; rendering produces a separate ``ProjectStructure``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import PurePosixPath, PureWindowsPath

from .errors import (
    AbsolutePathNotAllowedError,
    DuplicatePathError,
    EmptyTemplateError,
    InvalidTemplateError,
    PathTraversalError,
)
from .target import Target
from .value_objects import Architecture, Framework, Language, ProjectKind

DEFAULT_YEAR = "2026"


# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TemplateId:
    """``name@version`` identifier of a template."""

    name: str
    version: str

    def __post_init__(self) -> None:
        if "@" in self.name:
            raise InvalidTemplateError(f"template name cannot contain '@': {self.name}")

    @classmethod
    def parse(cls, text: str) -> "TemplateId":
        parts = text.split("@")
        if len(parts) != 2:
            raise InvalidTemplateError(
                f"Invalid template ID format: {text}. Expected 'name@version'"
            )
        return cls(parts[0], parts[1])

    def __str__(self) -> str:
        return f"{self.name}@{self.version}"


# ---------------------------------------------------------------------------
# Matcher
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TargetMatcher:
    """Declarative applicability rule; ``None`` in a field matches anything."""

    language: Language | None = None
    kind: ProjectKind | None = None
    framework: Framework | None = None
    architecture: Architecture | None = None

    def matches(self, target: Target) -> bool:
        return (
            (self.language is None or self.language == target.language)
            and (self.kind is None or self.kind == target.kind)
            and (self.framework is None or self.framework == target.framework)
            and (self.architecture is None or self.architecture == target.architecture)
        )

    def specificity(self) -> int:
        """Number of non-wildcard fields (0-4)."""
        return sum(
            value is not None
            for value in (self.language, self.kind, self.framework, self.architecture)
        )


# ---------------------------------------------------------------------------
# Metadata and content tree
# ---------------------------------------------------------------------------


@dataclass
class TemplateMetadata:
    name: str
    description: str = ""
    version: str = "0.1.0"
    author: str = "Scarff"
    tags: list[str] = field(default_factory=list)


class ContentKind(str, Enum):
    """How a file's content is produced at render time."""
    LITERAL = "literal"
    PARAMETERIZED = "parameterized"
    EXTERNAL = "external"


@dataclass(frozen=True)
class TemplateContent:
    """File body.  For ``EXTERNAL`` content, ``source`` is an opaque content id."""

    kind: ContentKind
    source: str

    @classmethod
    def literal(cls, source: str) -> "TemplateContent":
        return cls(ContentKind.LITERAL, source)

    @classmethod
    def parameterized(cls, source: str) -> "TemplateContent":
        return cls(ContentKind.PARAMETERIZED, source)

    @classmethod
    def external(cls, content_id: str) -> "TemplateContent":
        return cls(ContentKind.EXTERNAL, content_id)


def _relative(path: str) -> str:
    if PurePosixPath(path).is_absolute() or PureWindowsPath(path).is_absolute():
        raise AbsolutePathNotAllowedError(path)
    if ".." in PureWindowsPath(path).parts:
        raise PathTraversalError(path)
    return PurePosixPath(path).as_posix()


@dataclass(frozen=True)
class FileSpec:
    path: str
    content: TemplateContent
    executable: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", _relative(self.path))


@dataclass(frozen=True)
class DirectorySpec:
    path: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", _relative(self.path))


TemplateNode = FileSpec | DirectorySpec


# ---------------------------------------------------------------------------
# Template
# ---------------------------------------------------------------------------


@dataclass
class Template:
    id: TemplateId
    matcher: TargetMatcher
    metadata: TemplateMetadata
    nodes: list[TemplateNode] = field(default_factory=list)

    def validate(self) -> None:
        if not self.id.name:
            raise InvalidTemplateError("Template name cannot be empty")
        if not self.metadata.name:
            raise InvalidTemplateError("Metadata name cannot be empty")
        if not self.nodes:
            raise EmptyTemplateError(str(self.id))
        seen: set[str] = set()
        for node in self.nodes:
            if node.path in seen:
                raise DuplicatePathError(node.path)
            seen.add(node.path)

    def matches(self, target: Target) -> bool:
        return self.matcher.matches(target)

    def specificity(self) -> int:
        return self.matcher.specificity()

    def files(self) -> list[FileSpec]:
        return [n for n in self.nodes if isinstance(n, FileSpec)]

    def directories(self) -> list[DirectorySpec]:
        return [n for n in self.nodes if isinstance(n, DirectorySpec)]


# ---------------------------------------------------------------------------
# Render context
# ---------------------------------------------------------------------------

_PLACEHOLDER_RE = re.compile(r"\{\{([A-Za-z0-9_]+)\}\}")
_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z0-9]+|[A-Z0-9]+")


def split_words(value: str) -> list[str]:
    """Split an identifier into lowercase words.

    Separators are ``-``, ``_`` and whitespace, plus camel-case boundaries;
    an acronym run keeps its last capital for the next word
    (``myHTTPServer`` -> ``my``, ``http``, ``server``).
    """
    words: list[str] = []
    for chunk in re.split(r"[-_\s]+", value.strip()):
        words.extend(w.lower() for w in _WORD_RE.findall(chunk))
    return words


def to_snake_case(value: str) -> str:
    return "_".join(split_words(value))


def to_kebab_case(value: str) -> str:
    return "-".join(split_words(value))


def to_pascal_case(value: str) -> str:
    return "".join(w[:1].upper() + w[1:] for w in split_words(value))


@dataclass(frozen=True)
class RenderContext:
    """Variables available to ``{{NAME}}`` placeholders."""

    project_name: str
    variables: dict[str, str] = field(default_factory=dict)

    @classmethod
    def for_project(cls, project_name: str, year: str = DEFAULT_YEAR) -> "RenderContext":
        return cls(
            project_name=project_name,
            variables={
                "PROJECT_NAME": project_name,
                "PROJECT_NAME_SNAKE": to_snake_case(project_name),
                "PROJECT_NAME_KEBAB": to_kebab_case(project_name),
                "PROJECT_NAME_PASCAL": to_pascal_case(project_name),
                "YEAR": year,
            },
        )

    def with_variable(self, key: str, value: str) -> "RenderContext":
        return replace(self, variables={**self.variables, key: value})

    def get(self, key: str) -> str | None:
        return self.variables.get(key)

    def render(self, text: str) -> str:
        """Substitute known placeholders; unknown ones stay as written."""

        def _sub(match: re.Match[str]) -> str:
            return self.variables.get(match.group(1), match.group(0))

        return _PLACEHOLDER_RE.sub(_sub, text)
