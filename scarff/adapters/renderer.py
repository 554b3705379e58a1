"""Naive ``{{NAME}}`` placeholder renderer.

Turns a ``Template`` plus a ``RenderContext`` into a ``ProjectStructure``.
There are no conditionals or loops: parameterized files get placeholder
substitution, literal files are copied verbatim.
"""

from __future__ import annotations

from pathlib import Path

from ..domain.errors import RenderingError
from ..domain.project_structure import ProjectStructure
from ..domain.template import (
    ContentKind,
    DirectorySpec,
    RenderContext,
    Template,
    TemplateContent,
)


class SimpleRenderer:
    """Renders templates whose content is fully contained in the template."""

    def render(
        self,
        template: Template,
        context: RenderContext,
        output_root: str | Path,
    ) -> ProjectStructure:
        template.validate()

        structure = ProjectStructure(root=Path(output_root))
        for node in template.nodes:
            if isinstance(node, DirectorySpec):
                structure.add_directory(node.path)
            else:
                structure.add_file(
                    node.path,
                    _render_content(node.content, context, node.path),
                    executable=node.executable,
                )

        structure.validate()
        return structure


def _render_content(content: TemplateContent, context: RenderContext, path: str) -> str:
    if content.kind == ContentKind.PARAMETERIZED:
        return context.render(content.source)
    if content.kind == ContentKind.LITERAL:
        return content.source
    raise RenderingError(
        f"external content '{content.source}' for '{path}' "
        "is not supported by SimpleRenderer"
    )
