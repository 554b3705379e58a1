"""The ``Target`` aggregate and its two-stage builder.

A ``Target`` is the fully resolved, validated description of the project to
scaffold.  It can only be obtained from ``Target.builder()``::

    target = (
        Target.builder()
        .language(Language.PYTHON)
        .framework(Framework.DJANGO)
        .build()
    )

``Target.builder()`` returns a ``TargetBuilder`` whose only method is
``language()``.  That call returns a ``LanguageSelectedBuilder``, the only
stage that can set the remaining fields or ``build()``.  Setting a kind or a
framework before the language therefore fails at the call site, and static
type checkers flag it.

The domain layer never prints; reporting belongs to the CLI.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from . import capabilities
from .errors import (
    IncompatibleFrameworkError,
    IncompatibleLanguageKindError,
    InvalidArchitectureError,
    MissingRequiredFieldError,
)
from .value_objects import Architecture, Framework, Language, ProjectKind


@dataclass(frozen=True)
class Target:
    """A validated scaffolding target.

    Invariants hold for every instance produced by the builder: the language
    supports the kind, the framework (if any) belongs to the language and
    supports the kind, and the architecture fits the resolved triple.
    """

    language: Language
    kind: ProjectKind
    framework: Framework | None
    architecture: Architecture

    @staticmethod
    def builder() -> "TargetBuilder":
        return TargetBuilder()

    def validate(self) -> None:
        """Re-check every cross-field invariant; raise the first violation."""
        reason = capabilities.validate_language_kind(self.language, self.kind)
        if reason is not None:
            raise IncompatibleLanguageKindError(str(self.language), str(self.kind), reason)

        if self.framework is not None:
            reason = capabilities.validate_framework_compatibility(
                self.framework, self.language, self.kind
            )
            if reason is not None:
                raise IncompatibleFrameworkError(
                    str(self.framework), f"{self.language} + {self.kind}", reason
                )
        elif self.kind.requires_framework:
            raise MissingRequiredFieldError("framework")

        if not capabilities.architecture_is_compatible(
            self.architecture, self.language, self.kind, self.framework
        ):
            raise InvalidArchitectureError(
                str(self.architecture),
                f"incompatible with {self.language} + {self.kind}",
            )

    # -- Serialisation -------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {
            "language": str(self.language),
            "kind": str(self.kind),
            "framework": str(self.framework) if self.framework else None,
            "architecture": str(self.architecture),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Target":
        """Reconstruct a target from ``to_dict`` output and re-validate it."""
        framework = data.get("framework")
        target = cls(
            language=Language.parse(data["language"]),
            kind=ProjectKind.parse(data["kind"]),
            framework=Framework.parse(framework) if framework else None,
            architecture=Architecture.parse(data["architecture"]),
        )
        target.validate()
        return target

    def __str__(self) -> str:
        text = f"{self.language} {self.kind} ({self.architecture})"
        if self.framework is not None:
            text += f" + {self.framework}"
        return text


# ---------------------------------------------------------------------------
# Builder stages
# ---------------------------------------------------------------------------


class TargetBuilder:
    """First stage: nothing set yet.  Only ``language()`` is available."""

    def language(self, language: Language) -> "LanguageSelectedBuilder":
        return LanguageSelectedBuilder(language=language)


@dataclass(frozen=True)
class LanguageSelectedBuilder:
    """Second stage: the language is known, everything else may be set.

    Each setter returns a new builder.  ``kind()`` and ``framework()`` reject
    bad input immediately; ``architecture()`` is only checked by ``build()``.
    """

    language: Language
    kind_: ProjectKind | None = None
    framework_: Framework | None = None
    architecture_: Architecture | None = None

    def kind(self, kind: ProjectKind) -> "LanguageSelectedBuilder":
        reason = capabilities.validate_language_kind(self.language, kind)
        if reason is not None:
            raise IncompatibleLanguageKindError(str(self.language), str(kind), reason)
        return replace(self, kind_=kind)

    def framework(self, framework: Framework) -> "LanguageSelectedBuilder":
        # Only the intrinsic language is checked here; kind support waits for build().
        if framework.language != self.language:
            raise IncompatibleFrameworkError(
                str(framework),
                f"language {self.language}",
                f"framework '{framework}' belongs to {framework.language} "
                f"not {self.language}",
            )
        return replace(self, framework_=framework)

    def architecture(self, architecture: Architecture) -> "LanguageSelectedBuilder":
        return replace(self, architecture_=architecture)

    def build(self) -> Target:
        """Infer unset fields, then validate the assembled target.

        Inference order: kind (framework default, else language default),
        framework (only when the kind requires one), architecture (from the
        resolved triple).  Explicit values are never replaced.
        """
        kind = self.kind_
        if kind is None:
            kind = capabilities.infer_kind(self.language, self.framework_)

        framework = self.framework_
        if framework is None and kind.requires_framework:
            framework = capabilities.infer_framework(self.language, kind)

        architecture = self.architecture_
        if architecture is None:
            architecture = capabilities.infer_architecture(self.language, kind, framework)

        target = Target(
            language=self.language,
            kind=kind,
            framework=framework,
            architecture=architecture,
        )
        target.validate()
        return target
