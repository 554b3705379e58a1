"""Scaffolding value objects: Language, ProjectKind, Framework, Architecture.

These are pure values.  They know their canonical wire string, the aliases
accepted when parsing CLI flags or manifest fields, and the few properties that
are intrinsic to the value itself (a framework's owning language, whether a
project kind needs a framework).  Everything capability-related lives in
``scarff.domain.capabilities``.
"""

from __future__ import annotations

from enum import Enum

from .errors import ParseError


def _lookup(what: str, aliases: dict[str, Enum], value: str) -> Enum:
    key = value.strip().lower()
    try:
        return aliases[key]
    except KeyError:
        raise ParseError(what, value, sorted(aliases)) from None


# ---------------------------------------------------------------------------
# Language
# ---------------------------------------------------------------------------


class Language(str, Enum):
    """A supported programming language."""
    RUST = "rust"
    PYTHON = "python"
    TYPESCRIPT = "typescript"
    GO = "go"

    def __str__(self) -> str:
        return self.value

    @property
    def file_extension(self) -> str:
        return _LANGUAGE_EXTENSIONS[self]

    @classmethod
    def parse(cls, value: str) -> "Language":
        return _lookup("language", _LANGUAGE_ALIASES, value)


_LANGUAGE_EXTENSIONS: dict[Language, str] = {
    Language.RUST: "rs",
    Language.PYTHON: "py",
    Language.TYPESCRIPT: "ts",
    Language.GO: "go",
}

_LANGUAGE_ALIASES: dict[str, Language] = {
    "rust": Language.RUST,
    "rs": Language.RUST,
    "python": Language.PYTHON,
    "py": Language.PYTHON,
    "typescript": Language.TYPESCRIPT,
    "ts": Language.TYPESCRIPT,
    "go": Language.GO,
    "golang": Language.GO,
}


# ---------------------------------------------------------------------------
# ProjectKind
# ---------------------------------------------------------------------------


class ProjectKind(str, Enum):
    """The type of project to scaffold."""
    CLI = "cli"
    WEB_BACKEND = "web-backend"
    WEB_FRONTEND = "web-frontend"
    FULLSTACK = "fullstack"
    WORKER = "worker"
    LIBRARY = "library"

    def __str__(self) -> str:
        return self.value

    @property
    def requires_framework(self) -> bool:
        """Web-oriented kinds cannot be scaffolded without a framework."""
        return self in (
            ProjectKind.WEB_BACKEND,
            ProjectKind.WEB_FRONTEND,
            ProjectKind.FULLSTACK,
        )

    @classmethod
    def parse(cls, value: str) -> "ProjectKind":
        return _lookup("project kind", _KIND_ALIASES, value)


_KIND_ALIASES: dict[str, ProjectKind] = {
    "cli": ProjectKind.CLI,
    "web-backend": ProjectKind.WEB_BACKEND,
    "backend": ProjectKind.WEB_BACKEND,
    "api": ProjectKind.WEB_BACKEND,
    "webbackend": ProjectKind.WEB_BACKEND,
    "web-frontend": ProjectKind.WEB_FRONTEND,
    "frontend": ProjectKind.WEB_FRONTEND,
    "webfrontend": ProjectKind.WEB_FRONTEND,
    "fullstack": ProjectKind.FULLSTACK,
    "worker": ProjectKind.WORKER,
    "library": ProjectKind.LIBRARY,
    "lib": ProjectKind.LIBRARY,
}


# ---------------------------------------------------------------------------
# Framework
# ---------------------------------------------------------------------------


class Framework(str, Enum):
    """A framework, namespaced by the language it belongs to.

    The owning language is fixed per member and available as ``.language``;
    it is never inferred or configured.
    """

    def __new__(cls, value: str, language: Language) -> "Framework":
        obj = str.__new__(cls, value)
        obj._value_ = value
        obj.language = language
        return obj

    # Rust
    AXUM = ("axum", Language.RUST)
    ACTIX = ("actix", Language.RUST)
    ROCKET = ("rocket", Language.RUST)
    # Python
    FASTAPI = ("fastapi", Language.PYTHON)
    DJANGO = ("django", Language.PYTHON)
    FLASK = ("flask", Language.PYTHON)
    # TypeScript
    EXPRESS = ("express", Language.TYPESCRIPT)
    NESTJS = ("nestjs", Language.TYPESCRIPT)
    REACT = ("react", Language.TYPESCRIPT)
    VUE = ("vue", Language.TYPESCRIPT)
    NEXTJS = ("nextjs", Language.TYPESCRIPT)
    SVELTE = ("svelte", Language.TYPESCRIPT)
    # Go
    GIN = ("gin", Language.GO)
    ECHO = ("echo", Language.GO)
    STDLIB = ("stdlib", Language.GO)

    def __str__(self) -> str:
        return self.value

    @property
    def qualified_name(self) -> str:
        """Manifest form, e.g. ``python:fastapi``."""
        return f"{self.language}:{self.value}"

    @classmethod
    def for_language(cls, language: Language) -> list["Framework"]:
        return [fw for fw in cls if fw.language == language]

    @classmethod
    def parse(cls, value: str) -> "Framework":
        """Parse ``fastapi`` or the qualified ``python:fastapi`` form.

        A language prefix that disagrees with the framework's own language is
        rejected rather than ignored.
        """
        text = value.strip()
        if ":" in text:
            lang_part, _, name_part = text.partition(":")
            language = Language.parse(lang_part)
            framework = _lookup("framework", _FRAMEWORK_ALIASES, name_part)
            if framework.language != language:
                raise ParseError(
                    "framework",
                    value,
                    [fw.qualified_name for fw in cls.for_language(language)],
                )
            return framework
        return _lookup("framework", _FRAMEWORK_ALIASES, text)


_FRAMEWORK_ALIASES: dict[str, Framework] = {fw.value: fw for fw in Framework}
_FRAMEWORK_ALIASES.update(
    {
        "actix-web": Framework.ACTIX,
        "nest": Framework.NESTJS,
        "next": Framework.NEXTJS,
        "next.js": Framework.NEXTJS,
    }
)


# ---------------------------------------------------------------------------
# Architecture
# ---------------------------------------------------------------------------


class Architecture(str, Enum):
    """Architectural pattern for the generated project layout."""
    LAYERED = "layered"
    MVC = "mvc"
    CLEAN = "clean"
    FEATURE_MODULAR = "feature-modular"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str) -> "Architecture":
        return _lookup("architecture", _ARCHITECTURE_ALIASES, value)


_ARCHITECTURE_ALIASES: dict[str, Architecture] = {
    "layered": Architecture.LAYERED,
    "mvc": Architecture.MVC,
    "clean": Architecture.CLEAN,
    "hexagonal": Architecture.CLEAN,
    "onion": Architecture.CLEAN,
    "feature-modular": Architecture.FEATURE_MODULAR,
    "modular": Architecture.FEATURE_MODULAR,
    "featuremodular": Architecture.FEATURE_MODULAR,
}
