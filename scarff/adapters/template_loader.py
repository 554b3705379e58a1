"""Load templates from ``template.toml`` manifests on disk.

Expected layout::

    templates/
    ├── rust-cli-layered/
    │   ├── template.toml
    │   ├── Cargo.toml
    │   └── src/main.rs
    └── python-backend/
        ├── template.toml
        └── src/main.py

Manifest format::

    [template]
    id = "rust-cli-layered"
    version = "1.0.0"

    [matcher]                    # every field optional; omitted = any
    language = "rust"
    kind = "cli"
    architecture = "layered"
    framework = "rust:axum"      # or just "axum"

    [metadata]
    name = "Rust CLI (Layered)"
    description = "..."
    author = "Scarff"
    tags = ["rust", "cli"]

    [[files]]                    # optional per-file overrides
    path = "LICENSE"
    type = "external"            # literal | parameterized | external
    external_id = "builtin:mit"

    [[directories]]              # directories to create even when empty
    path = "src/generated"

Files without a ``[[files]]`` entry are parameterized when they contain
``{{`` and literal otherwise.
"""

from __future__ import annotations

import tomllib
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from ..domain.errors import DomainError, InvalidTemplateError
from ..domain.template import (
    DirectorySpec,
    FileSpec,
    TargetMatcher,
    Template,
    TemplateContent,
    TemplateId,
    TemplateMetadata,
    TemplateNode,
)
from ..domain.value_objects import Architecture, Framework, Language, ProjectKind
from ..utils import print_status, print_warning

MANIFEST_NAME = "template.toml"


# ---------------------------------------------------------------------------
# Manifest models
# ---------------------------------------------------------------------------


class FileType(str, Enum):
    """How a manifest ``[[files]]`` entry is treated."""
    LITERAL = "literal"
    PARAMETERIZED = "parameterized"
    EXTERNAL = "external"


class TemplateSection(BaseModel):
    id: str = Field(..., description="Unique slug, e.g. 'rust-cli-layered'")
    version: str = Field(..., description="Version string, e.g. '1.0.0'")


class MatcherSection(BaseModel):
    language: Optional[str] = None
    framework: Optional[str] = Field(
        default=None, description="'language:name' or a bare framework name"
    )
    kind: Optional[str] = None
    architecture: Optional[str] = None


class MetadataSection(BaseModel):
    name: str = Field(..., description="Display name shown by 'scarff list'")
    description: str = ""
    author: str = "Scarff"
    tags: list[str] = Field(default_factory=list)


class FileEntry(BaseModel):
    path: str
    type: FileType
    external_id: Optional[str] = None


class DirectoryEntry(BaseModel):
    path: str


class TemplateManifest(BaseModel):
    """Parsed ``template.toml``."""
    template: TemplateSection
    matcher: MatcherSection = Field(default_factory=MatcherSection)
    metadata: MetadataSection
    files: list[FileEntry] = Field(default_factory=list)
    directories: list[DirectoryEntry] = Field(default_factory=list)

    def to_matcher(self) -> TargetMatcher:
        m = self.matcher
        return TargetMatcher(
            language=Language.parse(m.language) if m.language else None,
            kind=ProjectKind.parse(m.kind) if m.kind else None,
            framework=Framework.parse(m.framework) if m.framework else None,
            architecture=Architecture.parse(m.architecture) if m.architecture else None,
        )


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------


class FilesystemTemplateLoader:
    """Turns each subdirectory of ``templates_dir`` holding a manifest into a Template.

    A subdirectory whose manifest is missing or invalid is skipped with a
    warning so one broken template never hides the others.
    """

    def __init__(self, templates_dir: str | Path) -> None:
        self.templates_dir = Path(templates_dir)

    def load_all(self) -> list[Template]:
        if not self.templates_dir.is_dir():
            raise InvalidTemplateError(
                f"templates directory not found: {self.templates_dir}"
            )
        try:
            children = sorted(p for p in self.templates_dir.iterdir() if p.is_dir())
        except OSError as exc:
            raise InvalidTemplateError(
                f"failed to read templates directory '{self.templates_dir}': {exc}"
            ) from exc

        templates: list[Template] = []
        for child in children:
            try:
                templates.append(self.load_template(child))
            except DomainError as exc:
                print_warning(f"Skipping template directory {child}: {exc}")

        print_status(f"Loaded {len(templates)} template(s) from {self.templates_dir}")
        return templates

    def load_template(self, directory: Path) -> Template:
        """Load a single template directory."""
        manifest = self.read_manifest(directory / MANIFEST_NAME)

        template = Template(
            id=TemplateId(manifest.template.id, manifest.template.version),
            matcher=manifest.to_matcher(),
            metadata=TemplateMetadata(
                name=manifest.metadata.name,
                description=manifest.metadata.description,
                version=manifest.template.version,
                author=manifest.metadata.author,
                tags=list(manifest.metadata.tags),
            ),
            nodes=self._build_nodes(directory, manifest),
        )
        template.validate()
        return template

    @staticmethod
    def read_manifest(path: Path) -> TemplateManifest:
        if not path.is_file():
            raise InvalidTemplateError(f"missing {MANIFEST_NAME} in '{path.parent}'")
        try:
            raw = tomllib.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as exc:
            raise InvalidTemplateError(f"failed to read '{path}': {exc}") from exc
        except tomllib.TOMLDecodeError as exc:
            raise InvalidTemplateError(f"failed to parse '{path}': {exc}") from exc

        try:
            return TemplateManifest.model_validate(raw)
        except ValidationError as exc:
            raise InvalidTemplateError(f"invalid manifest '{path}': {exc}") from exc

    def _build_nodes(self, directory: Path, manifest: TemplateManifest) -> list[TemplateNode]:
        nodes: list[TemplateNode] = []
        seen: set[str] = set()
        overrides = {_normalize(entry.path): entry for entry in manifest.files}

        for entry in manifest.directories:
            path = _normalize(entry.path)
            if path not in seen:
                seen.add(path)
                nodes.append(DirectorySpec(path))

        for item in sorted(directory.rglob("*")):
            if item.name == MANIFEST_NAME:
                continue
            rel = item.relative_to(directory).as_posix()
            if rel in seen:
                continue
            if item.is_dir():
                seen.add(rel)
                nodes.append(DirectorySpec(rel))
            elif item.is_file():
                try:
                    text = item.read_text(encoding="utf-8")
                except (OSError, UnicodeDecodeError) as exc:
                    raise InvalidTemplateError(f"failed to read file '{rel}': {exc}") from exc
                seen.add(rel)
                nodes.append(FileSpec(rel, _content_for(rel, text, overrides.get(rel))))

        # External entries have no file on disk.
        for path, entry in overrides.items():
            if entry.type == FileType.EXTERNAL and path not in seen:
                seen.add(path)
                nodes.append(FileSpec(path, _external(path, entry)))

        return nodes


def _normalize(path: str) -> str:
    return path.replace("\\", "/").rstrip("/")


def _external(path: str, entry: FileEntry) -> TemplateContent:
    if not entry.external_id:
        raise InvalidTemplateError(
            f"external file '{path}' is missing required external_id"
        )
    return TemplateContent.external(entry.external_id)


def _content_for(path: str, text: str, entry: FileEntry | None) -> TemplateContent:
    if entry is None:
        if "{{" in text:
            return TemplateContent.parameterized(text)
        return TemplateContent.literal(text)
    if entry.type == FileType.LITERAL:
        return TemplateContent.literal(text)
    if entry.type == FileType.PARAMETERIZED:
        return TemplateContent.parameterized(text)
    return _external(path, entry)
