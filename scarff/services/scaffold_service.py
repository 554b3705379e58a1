"""Scaffolding orchestrator.

Resolves a ``Target`` to the single most specific template, renders it with
a ``RenderContext`` built from the project name, and writes the result
through a ``Filesystem``.  A failed write removes the partially created
project root before the original error is re-raised.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Iterable, Optional, Protocol

from pydantic import BaseModel, Field

from ..adapters.filesystem import Filesystem
from ..adapters.template_store import InMemoryStore
from ..domain.errors import (
    AmbiguousTemplateError,
    NoMatchingTemplateError,
    ProjectExistsError,
    ScarffError,
)
from ..domain.project_structure import DirectoryToCreate, ProjectStructure
from ..domain.target import Target
from ..domain.template import RenderContext, Template
from ..utils import print_status, print_warning


class Renderer(Protocol):
    def render(
        self, template: Template, context: RenderContext, output_root: str | Path
    ) -> ProjectStructure: ...


class TemplateInfo(BaseModel):
    """Display summary of a template; wildcard matcher fields read ``any``."""

    id: str = Field(..., description="Template id as 'name@version'")
    name: str
    description: str = ""
    language: str = "any"
    kind: str = "any"
    architecture: str = "any"
    framework: str = "any"

    @classmethod
    def from_template(cls, template: Template) -> "TemplateInfo":
        m = template.matcher

        def _show(value: object) -> str:
            return "any" if value is None else str(value)

        return cls(
            id=str(template.id),
            name=template.metadata.name,
            description=template.metadata.description,
            language=_show(m.language),
            kind=_show(m.kind),
            architecture=_show(m.architecture),
            framework=_show(m.framework),
        )


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


def resolve_template(target: Target, templates: Iterable[Template]) -> Template:
    """Pick the single most specific template accepting *target*.

    Raises:
        NoMatchingTemplateError: No template matches.
        AmbiguousTemplateError: Several templates tie at the highest specificity.
    """
    matches = [t for t in templates if t.matches(target)]
    if not matches:
        raise NoMatchingTemplateError(str(target))
    if len(matches) == 1:
        return matches[0]

    best = max(t.specificity() for t in matches)
    winners = [t for t in matches if t.specificity() == best]
    if len(winners) > 1:
        raise AmbiguousTemplateError(len(winners), [str(t.id) for t in winners])
    return winners[0]


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class ScaffoldService:
    def __init__(
        self,
        store: InMemoryStore,
        renderer: Renderer,
        filesystem: Filesystem,
    ) -> None:
        self.store = store
        self.renderer = renderer
        self.filesystem = filesystem

    # -- Public API --------------------------------------------------------

    def plan(
        self,
        target: Target,
        project_name: str,
        output_dir: str | Path,
    ) -> ProjectStructure:
        """Resolve and render without touching the filesystem."""
        target.validate()
        template = resolve_template(target, self.store.find(target))
        context = RenderContext.for_project(project_name)
        return self.renderer.render(template, context, Path(output_dir) / project_name)

    async def scaffold(
        self,
        target: Target,
        project_name: str,
        output_dir: str | Path,
        force: bool = False,
    ) -> Path:
        """Generate the project for *target* under ``output_dir / project_name``.

        Args:
            target: Validated scaffolding intent.
            project_name: Directory name and source of the ``PROJECT_NAME*``
                variables.
            output_dir: Parent directory of the project root.
            force: Remove an existing project root instead of failing.

        Returns:
            Path to the generated project root.
        """
        structure = self.plan(target, project_name, output_dir)
        print_status(f"Scaffolding {target} into {structure.root}")
        await self._write_structure(structure, force)
        return structure.root

    def list_templates(self) -> list[TemplateInfo]:
        return [TemplateInfo.from_template(t) for t in self.store.list()]

    def find_templates(self, target: Target) -> list[TemplateInfo]:
        return [TemplateInfo.from_template(t) for t in self.store.find(target)]

    def filter_templates(
        self,
        language: Optional[str] = None,
        kind: Optional[str] = None,
    ) -> list[TemplateInfo]:
        """Templates whose matcher is compatible with the given field values.

        A wildcard matcher field is compatible with any requested value.
        """
        return [
            info
            for info in self.list_templates()
            if (language is None or info.language in ("any", language))
            and (kind is None or info.kind in ("any", kind))
        ]

    # -- Writing -----------------------------------------------------------

    async def _write_structure(self, structure: ProjectStructure, force: bool) -> None:
        root = structure.root
        if await asyncio.to_thread(self.filesystem.exists, root):
            if not force:
                raise ProjectExistsError(str(root))
            print_warning(f"Removing existing {root}")
            await asyncio.to_thread(self.filesystem.remove_dir_all, root)

        try:
            await asyncio.to_thread(self._write_all, structure)
        except Exception:
            await self._rollback(root)
            raise

    def _write_all(self, structure: ProjectStructure) -> None:
        fs = self.filesystem
        root = structure.root
        fs.create_dir_all(root)
        for entry in structure.entries:
            path = root / entry.path
            if isinstance(entry, DirectoryToCreate):
                fs.create_dir_all(path)
                continue
            fs.create_dir_all(path.parent)
            fs.write_file(path, entry.content)
            if entry.executable:
                fs.set_executable(path)

    async def _rollback(self, root: Path) -> None:
        try:
            await asyncio.to_thread(self.filesystem.remove_dir_all, root)
        except ScarffError as exc:
            print_warning(f"Rollback failed for {root}: {exc}")
        else:
            print_status(f"Rolled back {root}")
