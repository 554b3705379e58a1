"""Error taxonomy for Scarff.

Every failure raised by the domain and application layers derives from
``ScarffError`` so the CLI can render any of them uniformly.  Each error knows
its display ``category`` and can offer actionable ``suggestions()``.
"""

from __future__ import annotations

from enum import Enum


class ErrorCategory(str, Enum):
    """Coarse error classification used for CLI styling."""
    VALIDATION = "validation"
    COMPATIBILITY = "compatibility"
    NOT_FOUND = "not-found"
    CONFIGURATION = "configuration"
    INTERNAL = "internal"


class ScarffError(Exception):
    """Base class for every error raised by Scarff."""

    category: ErrorCategory = ErrorCategory.INTERNAL

    def suggestions(self) -> list[str]:
        return ["See documentation for more details"]


# ---------------------------------------------------------------------------
# Domain errors
# ---------------------------------------------------------------------------


class DomainError(ScarffError):
    """Raised when a domain invariant is violated."""


class ParseError(DomainError):
    """An unrecognised string was given for an enumeration."""

    category = ErrorCategory.VALIDATION

    def __init__(self, what: str, value: str, expected: list[str]) -> None:
        self.what = what
        self.value = value
        self.expected = list(expected)
        super().__init__(
            f"unknown {what}: '{value}' (expected one of: {', '.join(self.expected)})"
        )

    def suggestions(self) -> list[str]:
        return [f"Valid {self.what} values: {', '.join(self.expected)}"]


class InvalidTemplateError(DomainError):
    """A template definition or manifest is malformed."""

    category = ErrorCategory.VALIDATION

    def __init__(self, message: str) -> None:
        super().__init__(f"Invalid template: {message}")


class EmptyTemplateError(DomainError):
    category = ErrorCategory.VALIDATION

    def __init__(self, template_id: str) -> None:
        self.template_id = template_id
        super().__init__(f"Template '{template_id}' has no content")

    def suggestions(self) -> list[str]:
        return [
            f"Template '{self.template_id}' is corrupted",
            "Please report this issue or use a different template",
        ]


class DuplicatePathError(DomainError):
    category = ErrorCategory.VALIDATION

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Duplicate path in template: {path}")


class AbsolutePathNotAllowedError(DomainError):
    category = ErrorCategory.VALIDATION

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Absolute paths not allowed: {path}")


class PathTraversalError(DomainError):
    category = ErrorCategory.VALIDATION

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Path escapes the project root: {path}")


class IncompatibleLanguageKindError(DomainError):
    """The language cannot produce the requested project kind."""

    category = ErrorCategory.COMPATIBILITY

    def __init__(self, language: str, kind: str, reason: str) -> None:
        self.language = language
        self.kind = kind
        self.reason = reason
        super().__init__(
            f"language '{language}' does not support kind '{kind}': {reason}"
        )

    def suggestions(self) -> list[str]:
        hints = {
            "cli": "  - Rust, Python, Go",
            "web-backend": "  - Rust (axum/actix), Python (fastapi/django), "
            "TypeScript (express/nestjs), Go (gin/echo)",
            "web-frontend": "  - TypeScript (react/vue/svelte)",
            "fullstack": "  - Python (django), TypeScript (nextjs)",
        }
        return [
            f"{self.kind} projects typically use:",
            hints.get(self.kind, "  - Check documentation for supported combinations"),
        ]


class IncompatibleFrameworkError(DomainError):
    """The framework does not fit the requested language or kind."""

    category = ErrorCategory.COMPATIBILITY

    def __init__(self, framework: str, context: str, reason: str) -> None:
        self.framework = framework
        self.context = context
        self.reason = reason
        super().__init__(
            f"framework '{framework}' incompatible with '{context}': {reason}"
        )

    def suggestions(self) -> list[str]:
        return [
            "Omit --framework to let Scarff pick the default for your language and kind",
            "Run `scarff list` to see which combinations have templates",
        ]


class InvalidArchitectureError(DomainError):
    category = ErrorCategory.COMPATIBILITY

    def __init__(self, architecture: str, reason: str) -> None:
        self.architecture = architecture
        self.reason = reason
        super().__init__(f"architecture '{architecture}' invalid: {reason}")

    def suggestions(self) -> list[str]:
        return [
            "mvc is only available for the combinations that default to it "
            "(django fullstack)",
            "Try layered, clean or feature-modular instead",
        ]


class MissingRequiredFieldError(DomainError):
    category = ErrorCategory.VALIDATION

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Required field missing: {field}")

    def suggestions(self) -> list[str]:
        return [f"Pass --{self.field} explicitly; no default is registered"]


# ---------------------------------------------------------------------------
# Application errors
# ---------------------------------------------------------------------------


class ApplicationError(ScarffError):
    """Raised by the orchestration layer (resolution, rendering, I/O)."""


class TemplateResolutionError(ApplicationError):
    category = ErrorCategory.NOT_FOUND

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Template resolution failed: {reason}")

    def suggestions(self) -> list[str]:
        return [
            f"Resolution failed: {self.reason}",
            "Try: scarff list to see available templates",
        ]


class NoMatchingTemplateError(TemplateResolutionError):
    def __init__(self, target: str) -> None:
        self.target = target
        super().__init__(f"No template matches target: {target}")


class AmbiguousTemplateError(TemplateResolutionError):
    def __init__(self, count: int, template_ids: list[str] | None = None) -> None:
        self.count = count
        self.template_ids = list(template_ids or [])
        super().__init__(
            f"Ambiguous: {count} templates match with equal specificity"
        )


class TemplateNotFoundError(ApplicationError):
    category = ErrorCategory.NOT_FOUND

    def __init__(self, template_id: str) -> None:
        self.template_id = template_id
        super().__init__(f"Template not found: {template_id}")


class RenderingError(ApplicationError):
    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Template rendering failed: {reason}")


class FilesystemError(ApplicationError):
    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Filesystem error at {path}: {reason}")

    def suggestions(self) -> list[str]:
        return [
            f"Failed to access: {self.path}",
            "Check that you have write permissions",
            "Ensure the parent directory exists",
        ]


class ProjectExistsError(ApplicationError):
    category = ErrorCategory.VALIDATION

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Project already exists at {path}")

    def suggestions(self) -> list[str]:
        return [
            f"Directory already exists: {self.path}",
            "Use --force to overwrite (destructive)",
            "Choose a different project name",
        ]


class ConfigError(ApplicationError):
    category = ErrorCategory.CONFIGURATION
