"""Application services orchestrating the domain and the adapters."""

from .scaffold_service import ScaffoldService, TemplateInfo, resolve_template
from .template_service import TemplateService

__all__ = ["ScaffoldService", "TemplateInfo", "TemplateService", "resolve_template"]
