"""Capability registry: which combinations are legal, and what the defaults are.

Each language and each framework is described exactly once, as a row in
``LANGUAGE_REGISTRY`` or ``FRAMEWORK_REGISTRY``.  Every inference and
compatibility question is answered by scanning these two tables; do not add
per-framework branching anywhere else.

Adding a framework means adding its enum member in ``value_objects`` and one
``FrameworkCapability`` row here.  Adding a language means adding its enum
member, one ``LanguageCapability`` row and the rows for its frameworks.
"""

from __future__ import annotations

from dataclasses import dataclass

from .value_objects import Architecture, Framework, Language, ProjectKind


# ---------------------------------------------------------------------------
# Registry rows
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LanguageCapability:
    """What a language can produce and the kind inferred when none is given."""

    language: Language
    supported_kinds: tuple[ProjectKind, ...]
    default_kind: ProjectKind


@dataclass(frozen=True)
class FrameworkCapability:
    """Everything the resolver needs to know about one framework.

    ``default_for`` lists the kinds for which this framework is picked
    automatically when the user names none.  At most one row per
    ``(language, kind)`` pair may claim a kind; ``assert_registry_integrity``
    enforces that.
    """

    framework: Framework
    supported_kinds: tuple[ProjectKind, ...]
    default_kind: ProjectKind
    default_architecture: Architecture
    default_for: tuple[ProjectKind, ...] = ()

    def is_default_for(self, kind: ProjectKind) -> bool:
        return kind in self.default_for


LANGUAGE_REGISTRY: tuple[LanguageCapability, ...] = (
    LanguageCapability(
        language=Language.RUST,
        supported_kinds=(
            ProjectKind.CLI,
            ProjectKind.WEB_BACKEND,
            ProjectKind.LIBRARY,
            ProjectKind.WORKER,
        ),
        default_kind=ProjectKind.CLI,
    ),
    LanguageCapability(
        language=Language.PYTHON,
        supported_kinds=(
            ProjectKind.CLI,
            ProjectKind.WEB_BACKEND,
            ProjectKind.FULLSTACK,
            ProjectKind.WORKER,
        ),
        default_kind=ProjectKind.WEB_BACKEND,
    ),
    LanguageCapability(
        language=Language.TYPESCRIPT,
        supported_kinds=(
            ProjectKind.WEB_FRONTEND,
            ProjectKind.WEB_BACKEND,
            ProjectKind.FULLSTACK,
            ProjectKind.WORKER,
        ),
        default_kind=ProjectKind.WEB_FRONTEND,
    ),
    LanguageCapability(
        language=Language.GO,
        supported_kinds=(
            ProjectKind.CLI,
            ProjectKind.WEB_BACKEND,
            ProjectKind.WORKER,
        ),
        default_kind=ProjectKind.CLI,
    ),
)

FRAMEWORK_REGISTRY: tuple[FrameworkCapability, ...] = (
    # -- Rust ---------------------------------------------------------------
    FrameworkCapability(
        framework=Framework.AXUM,
        supported_kinds=(ProjectKind.WEB_BACKEND,),
        default_kind=ProjectKind.WEB_BACKEND,
        default_architecture=Architecture.LAYERED,
        default_for=(ProjectKind.WEB_BACKEND,),
    ),
    FrameworkCapability(
        framework=Framework.ACTIX,
        supported_kinds=(ProjectKind.WEB_BACKEND,),
        default_kind=ProjectKind.WEB_BACKEND,
        default_architecture=Architecture.LAYERED,
    ),
    FrameworkCapability(
        framework=Framework.ROCKET,
        supported_kinds=(ProjectKind.WEB_BACKEND, ProjectKind.FULLSTACK),
        default_kind=ProjectKind.WEB_BACKEND,
        default_architecture=Architecture.LAYERED,
    ),
    # -- Python -------------------------------------------------------------
    FrameworkCapability(
        framework=Framework.FASTAPI,
        supported_kinds=(ProjectKind.WEB_BACKEND, ProjectKind.WORKER),
        default_kind=ProjectKind.WEB_BACKEND,
        default_architecture=Architecture.LAYERED,
        default_for=(ProjectKind.WEB_BACKEND, ProjectKind.WORKER),
    ),
    FrameworkCapability(
        framework=Framework.DJANGO,
        supported_kinds=(ProjectKind.WEB_BACKEND, ProjectKind.FULLSTACK),
        default_kind=ProjectKind.FULLSTACK,
        # Django's MVT maps onto MVC.
        default_architecture=Architecture.MVC,
        default_for=(ProjectKind.FULLSTACK,),
    ),
    FrameworkCapability(
        framework=Framework.FLASK,
        supported_kinds=(ProjectKind.WEB_BACKEND, ProjectKind.WORKER),
        default_kind=ProjectKind.WEB_BACKEND,
        default_architecture=Architecture.LAYERED,
    ),
    # -- TypeScript ---------------------------------------------------------
    FrameworkCapability(
        framework=Framework.EXPRESS,
        supported_kinds=(ProjectKind.WEB_BACKEND, ProjectKind.WORKER),
        default_kind=ProjectKind.WEB_BACKEND,
        default_architecture=Architecture.LAYERED,
        default_for=(ProjectKind.WEB_BACKEND, ProjectKind.WORKER),
    ),
    FrameworkCapability(
        framework=Framework.NESTJS,
        supported_kinds=(ProjectKind.WEB_BACKEND, ProjectKind.WORKER),
        default_kind=ProjectKind.WEB_BACKEND,
        default_architecture=Architecture.FEATURE_MODULAR,
    ),
    FrameworkCapability(
        framework=Framework.REACT,
        supported_kinds=(ProjectKind.WEB_FRONTEND,),
        default_kind=ProjectKind.WEB_FRONTEND,
        default_architecture=Architecture.FEATURE_MODULAR,
        default_for=(ProjectKind.WEB_FRONTEND,),
    ),
    FrameworkCapability(
        framework=Framework.VUE,
        supported_kinds=(ProjectKind.WEB_FRONTEND,),
        default_kind=ProjectKind.WEB_FRONTEND,
        default_architecture=Architecture.FEATURE_MODULAR,
    ),
    FrameworkCapability(
        framework=Framework.NEXTJS,
        supported_kinds=(ProjectKind.FULLSTACK, ProjectKind.WEB_FRONTEND),
        default_kind=ProjectKind.FULLSTACK,
        default_architecture=Architecture.FEATURE_MODULAR,
        default_for=(ProjectKind.FULLSTACK,),
    ),
    FrameworkCapability(
        framework=Framework.SVELTE,
        # SvelteKit covers the fullstack case.
        supported_kinds=(ProjectKind.WEB_FRONTEND, ProjectKind.FULLSTACK),
        default_kind=ProjectKind.WEB_FRONTEND,
        default_architecture=Architecture.FEATURE_MODULAR,
    ),
    # -- Go -----------------------------------------------------------------
    FrameworkCapability(
        framework=Framework.GIN,
        supported_kinds=(ProjectKind.WEB_BACKEND, ProjectKind.WORKER),
        default_kind=ProjectKind.WEB_BACKEND,
        default_architecture=Architecture.LAYERED,
        default_for=(ProjectKind.WEB_BACKEND, ProjectKind.WORKER),
    ),
    FrameworkCapability(
        framework=Framework.ECHO,
        supported_kinds=(ProjectKind.WEB_BACKEND, ProjectKind.WORKER),
        default_kind=ProjectKind.WEB_BACKEND,
        default_architecture=Architecture.LAYERED,
    ),
    FrameworkCapability(
        framework=Framework.STDLIB,
        supported_kinds=(ProjectKind.CLI, ProjectKind.WEB_BACKEND, ProjectKind.WORKER),
        default_kind=ProjectKind.CLI,
        default_architecture=Architecture.LAYERED,
    ),
)


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


def find_language(language: Language) -> LanguageCapability | None:
    for row in LANGUAGE_REGISTRY:
        if row.language == language:
            return row
    return None


def find_framework(framework: Framework) -> FrameworkCapability | None:
    for row in FRAMEWORK_REGISTRY:
        if row.framework == framework:
            return row
    return None


def language_supports_kind(language: Language, kind: ProjectKind) -> bool:
    row = find_language(language)
    return row is not None and kind in row.supported_kinds


def framework_supports_kind(framework: Framework, kind: ProjectKind) -> bool:
    row = find_framework(framework)
    return row is not None and kind in row.supported_kinds


def supported_kinds(language: Language) -> tuple[ProjectKind, ...]:
    row = find_language(language)
    return row.supported_kinds if row else ()


def _format_kinds(kinds: tuple[ProjectKind, ...]) -> str:
    return ", ".join(str(k) for k in kinds) if kinds else "unknown"


# ---------------------------------------------------------------------------
# Inference
# ---------------------------------------------------------------------------


def infer_kind(language: Language, framework: Framework | None = None) -> ProjectKind:
    """Infer the project kind when the user gave none.

    A framework's own default wins when it belongs to *language*.  A framework
    from another language is a caller error; it is ignored here so the
    validation step that follows reports the mismatch precisely.
    """
    if framework is not None:
        row = find_framework(framework)
        if row is not None and framework.language == language:
            return row.default_kind
    lang_row = find_language(language)
    return lang_row.default_kind if lang_row else ProjectKind.CLI


def infer_framework(language: Language, kind: ProjectKind) -> Framework | None:
    """Return the registered default framework for ``(language, kind)``, if any."""
    for row in FRAMEWORK_REGISTRY:
        if (
            row.framework.language == language
            and row.is_default_for(kind)
            and kind in row.supported_kinds
        ):
            return row.framework
    return None


def infer_architecture(
    language: Language,
    kind: ProjectKind,
    framework: Framework | None = None,
) -> Architecture:
    """Infer an architecture for the resolved triple.

    Priority: the framework's registered default (when it supports *kind*),
    then the language/kind heuristic, then ``LAYERED``.
    """
    if framework is not None:
        row = find_framework(framework)
        if row is not None and kind in row.supported_kinds:
            return row.default_architecture

    if language == Language.TYPESCRIPT and kind in (
        ProjectKind.WEB_BACKEND,
        ProjectKind.FULLSTACK,
    ):
        return Architecture.FEATURE_MODULAR
    return Architecture.LAYERED


def architecture_is_compatible(
    architecture: Architecture,
    language: Language,
    kind: ProjectKind,
    framework: Framework | None = None,
) -> bool:
    """MVC is only valid where inference itself yields MVC; the rest always are."""
    if architecture == Architecture.MVC:
        return infer_architecture(language, kind, framework) == Architecture.MVC
    return True


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def validate_framework_compatibility(
    framework: Framework,
    language: Language,
    kind: ProjectKind,
) -> str | None:
    """Return ``None`` when the triple is consistent, else a reason string."""
    if framework.language != language:
        return (
            f"framework '{framework}' is a {framework.language} framework "
            f"and cannot be used with {language}"
        )
    if not framework_supports_kind(framework, kind):
        row = find_framework(framework)
        supported = _format_kinds(row.supported_kinds if row else ())
        return (
            f"framework '{framework}' supports [{supported}] "
            f"but kind '{kind}' was requested"
        )
    return None


def validate_language_kind(language: Language, kind: ProjectKind) -> str | None:
    """Return ``None`` when *language* can produce *kind*, else a reason string."""
    if not language_supports_kind(language, kind):
        return (
            f"{language} supports [{_format_kinds(supported_kinds(language))}] "
            f"but kind '{kind}' was requested"
        )
    return None


# ---------------------------------------------------------------------------
# Integrity check (run from the test suite)
# ---------------------------------------------------------------------------


def assert_registry_integrity() -> None:
    """Raise ``AssertionError`` if the registries contradict themselves."""
    for lang_row in LANGUAGE_REGISTRY:
        assert lang_row.default_kind in lang_row.supported_kinds, (
            f"{lang_row.language}: default_kind {lang_row.default_kind} "
            f"is not in supported_kinds {lang_row.supported_kinds}"
        )

    for row in FRAMEWORK_REGISTRY:
        assert find_language(row.framework.language) is not None, (
            f"framework {row.framework} references unregistered language "
            f"{row.framework.language}"
        )
        assert row.default_kind in row.supported_kinds, (
            f"framework {row.framework}: default_kind {row.default_kind} "
            f"is not in supported_kinds {row.supported_kinds}"
        )
        assert set(row.default_for) <= set(row.supported_kinds), (
            f"framework {row.framework}: default_for {row.default_for} "
            f"claims kinds it does not support"
        )

    for lang_row in LANGUAGE_REGISTRY:
        for kind in ProjectKind:
            defaults = [
                row.framework
                for row in FRAMEWORK_REGISTRY
                if row.framework.language == lang_row.language
                and row.is_default_for(kind)
            ]
            assert len(defaults) <= 1, (
                f"multiple default frameworks for ({lang_row.language}, {kind}): "
                f"{[str(fw) for fw in defaults]}"
            )
