"""Infrastructure adapters: filesystem backends, renderer, template storage."""

from .builtin_templates import all_templates, bundled_templates
from .filesystem import Filesystem, LocalFilesystem, MemoryFilesystem
from .renderer import SimpleRenderer
from .template_loader import FilesystemTemplateLoader
from .template_store import InMemoryStore

__all__ = [
    "Filesystem",
    "FilesystemTemplateLoader",
    "InMemoryStore",
    "LocalFilesystem",
    "MemoryFilesystem",
    "SimpleRenderer",
    "all_templates",
    "bundled_templates",
]
