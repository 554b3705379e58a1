"""Read-only queries over the template store."""

from __future__ import annotations

from ..adapters.template_store import InMemoryStore
from ..domain.target import Target
from ..domain.template import Template, TemplateId


class TemplateService:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    def list(self) -> list[Template]:
        return self.store.list()

    def find(self, target: Target) -> list[Template]:
        return self.store.find(target)

    def get(self, template_id: TemplateId | str) -> Template:
        if isinstance(template_id, str):
            template_id = TemplateId.parse(template_id)
        return self.store.get(template_id)
