"""In-memory template collection shared by the services.

Reads and writes are serialised through a single re-entrant lock; templates
are treated as read-only once inserted.
"""

from __future__ import annotations

import threading

from ..domain.errors import InvalidTemplateError, TemplateNotFoundError
from ..domain.target import Target
from ..domain.template import Template, TemplateId


class InMemoryStore:
    """Templates keyed by ``TemplateId``."""

    def __init__(self, templates: list[Template] | None = None) -> None:
        self._lock = threading.RLock()
        self._templates: dict[TemplateId, Template] = {}
        for template in templates or []:
            self.insert(template)

    @classmethod
    def with_builtin(cls, templates_dir: str | None = None) -> "InMemoryStore":
        """Create a store pre-loaded with the discovered templates."""
        from .builtin_templates import all_templates

        return cls(all_templates(templates_dir))

    def find(self, target: Target) -> list[Template]:
        with self._lock:
            return [t for t in self._sorted() if t.matches(target)]

    def get(self, template_id: TemplateId) -> Template:
        with self._lock:
            try:
                return self._templates[template_id]
            except KeyError:
                raise TemplateNotFoundError(str(template_id)) from None

    def list(self) -> list[Template]:
        with self._lock:
            return self._sorted()

    def insert(self, template: Template) -> None:
        template.validate()
        with self._lock:
            if template.id in self._templates:
                raise InvalidTemplateError(f"duplicate template id: {template.id}")
            self._templates[template.id] = template

    def remove(self, template_id: TemplateId) -> Template:
        with self._lock:
            try:
                return self._templates.pop(template_id)
            except KeyError:
                raise TemplateNotFoundError(str(template_id)) from None

    def clear(self) -> None:
        with self._lock:
            self._templates.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._templates)

    def _sorted(self) -> list[Template]:
        return sorted(self._templates.values(), key=lambda t: str(t.id))
