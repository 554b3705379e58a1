"""Scarff domain layer: value types, capability registry, targets, templates.

Everything here is synchronous, side-effect free and safe to share between
threads.  Nothing in this package performs I/O or prints.
"""

from scarff.domain.capabilities import (
    FRAMEWORK_REGISTRY,
    LANGUAGE_REGISTRY,
    FrameworkCapability,
    LanguageCapability,
    assert_registry_integrity,
    framework_supports_kind,
    infer_architecture,
    infer_framework,
    infer_kind,
    language_supports_kind,
    validate_framework_compatibility,
    validate_language_kind,
)
from scarff.domain.errors import (
    AbsolutePathNotAllowedError,
    AmbiguousTemplateError,
    ApplicationError,
    ConfigError,
    DomainError,
    DuplicatePathError,
    EmptyTemplateError,
    ErrorCategory,
    FilesystemError,
    IncompatibleFrameworkError,
    IncompatibleLanguageKindError,
    InvalidArchitectureError,
    InvalidTemplateError,
    MissingRequiredFieldError,
    NoMatchingTemplateError,
    ParseError,
    PathTraversalError,
    ProjectExistsError,
    RenderingError,
    ScarffError,
    TemplateNotFoundError,
    TemplateResolutionError,
)
from scarff.domain.project_structure import DirectoryToCreate, FileToWrite, ProjectStructure
from scarff.domain.target import LanguageSelectedBuilder, Target, TargetBuilder
from scarff.domain.template import (
    ContentKind,
    DirectorySpec,
    FileSpec,
    RenderContext,
    TargetMatcher,
    Template,
    TemplateContent,
    TemplateId,
    TemplateMetadata,
)
from scarff.domain.value_objects import Architecture, Framework, Language, ProjectKind

__all__ = [
    "FRAMEWORK_REGISTRY",
    "LANGUAGE_REGISTRY",
    "AbsolutePathNotAllowedError",
    "AmbiguousTemplateError",
    "ApplicationError",
    "Architecture",
    "ConfigError",
    "ContentKind",
    "DirectorySpec",
    "DirectoryToCreate",
    "DomainError",
    "DuplicatePathError",
    "EmptyTemplateError",
    "ErrorCategory",
    "FileSpec",
    "FileToWrite",
    "FilesystemError",
    "Framework",
    "FrameworkCapability",
    "IncompatibleFrameworkError",
    "IncompatibleLanguageKindError",
    "InvalidArchitectureError",
    "InvalidTemplateError",
    "Language",
    "LanguageCapability",
    "LanguageSelectedBuilder",
    "MissingRequiredFieldError",
    "NoMatchingTemplateError",
    "ParseError",
    "PathTraversalError",
    "ProjectExistsError",
    "ProjectKind",
    "ProjectStructure",
    "RenderContext",
    "RenderingError",
    "ScarffError",
    "Target",
    "TargetBuilder",
    "TargetMatcher",
    "Template",
    "TemplateContent",
    "TemplateId",
    "TemplateMetadata",
    "TemplateNotFoundError",
    "TemplateResolutionError",
    "assert_registry_integrity",
    "framework_supports_kind",
    "infer_architecture",
    "infer_framework",
    "infer_kind",
    "language_supports_kind",
    "validate_framework_compatibility",
    "validate_language_kind",
]
