"""Tests for the closed enumerations (scarff.domain.value_objects).

Covers:
- Canonical display forms
- Alias parsing, case-insensitivity and rejection
- Framework language ownership and the qualified 'lang:name' form
- parse(str(x)) == x for every member
"""

from __future__ import annotations

import pytest

from scarff.domain import Architecture, Framework, Language, ParseError, ProjectKind


pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Language
# ---------------------------------------------------------------------------


class TestLanguage:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("rust", Language.RUST),
            ("rs", Language.RUST),
            ("Python", Language.PYTHON),
            ("py", Language.PYTHON),
            ("TS", Language.TYPESCRIPT),
            ("typescript", Language.TYPESCRIPT),
            ("golang", Language.GO),
            ("  go ", Language.GO),
        ],
    )
    def test_parse_aliases(self, text, expected):
        assert Language.parse(text) == expected

    def test_display_is_lowercase(self):
        assert str(Language.TYPESCRIPT) == "typescript"
        assert f"{Language.GO}" == "go"

    def test_unknown_names_offending_input(self):
        with pytest.raises(ParseError) as exc_info:
            Language.parse("cobol")
        assert "cobol" in str(exc_info.value)
        assert "rust" in exc_info.value.expected

    def test_file_extension(self):
        assert Language.RUST.file_extension == "rs"
        assert Language.PYTHON.file_extension == "py"


# ---------------------------------------------------------------------------
# ProjectKind
# ---------------------------------------------------------------------------


class TestProjectKind:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("cli", ProjectKind.CLI),
            ("backend", ProjectKind.WEB_BACKEND),
            ("api", ProjectKind.WEB_BACKEND),
            ("WebBackend", ProjectKind.WEB_BACKEND),
            ("frontend", ProjectKind.WEB_FRONTEND),
            ("web-frontend", ProjectKind.WEB_FRONTEND),
            ("fullstack", ProjectKind.FULLSTACK),
            ("lib", ProjectKind.LIBRARY),
        ],
    )
    def test_parse_aliases(self, text, expected):
        assert ProjectKind.parse(text) == expected

    def test_multi_word_kinds_display_kebab_case(self):
        assert str(ProjectKind.WEB_BACKEND) == "web-backend"
        assert str(ProjectKind.WEB_FRONTEND) == "web-frontend"

    def test_requires_framework(self):
        assert ProjectKind.WEB_BACKEND.requires_framework
        assert ProjectKind.WEB_FRONTEND.requires_framework
        assert ProjectKind.FULLSTACK.requires_framework
        assert not ProjectKind.CLI.requires_framework
        assert not ProjectKind.WORKER.requires_framework
        assert not ProjectKind.LIBRARY.requires_framework

    def test_unknown(self):
        with pytest.raises(ParseError, match="desktop"):
            ProjectKind.parse("desktop")


# ---------------------------------------------------------------------------
# Framework
# ---------------------------------------------------------------------------


class TestFramework:
    def test_language_is_intrinsic(self):
        assert Framework.AXUM.language == Language.RUST
        assert Framework.DJANGO.language == Language.PYTHON
        assert Framework.NEXTJS.language == Language.TYPESCRIPT
        assert Framework.STDLIB.language == Language.GO

    def test_for_language(self):
        assert Framework.for_language(Language.GO) == [
            Framework.GIN,
            Framework.ECHO,
            Framework.STDLIB,
        ]

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("fastapi", Framework.FASTAPI),
            ("Next.js", Framework.NEXTJS),
            ("next", Framework.NEXTJS),
            ("nest", Framework.NESTJS),
            ("actix-web", Framework.ACTIX),
        ],
    )
    def test_parse_aliases(self, text, expected):
        assert Framework.parse(text) == expected

    def test_parse_qualified_form(self):
        assert Framework.parse("python:fastapi") == Framework.FASTAPI
        assert Framework.parse("Rust:Axum") == Framework.AXUM

    def test_qualified_prefix_must_agree(self):
        with pytest.raises(ParseError):
            Framework.parse("rust:django")

    def test_qualified_name(self):
        assert Framework.FASTAPI.qualified_name == "python:fastapi"

    def test_unknown(self):
        with pytest.raises(ParseError, match="rails"):
            Framework.parse("rails")


# ---------------------------------------------------------------------------
# Architecture
# ---------------------------------------------------------------------------


class TestArchitecture:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("layered", Architecture.LAYERED),
            ("MVC", Architecture.MVC),
            ("hexagonal", Architecture.CLEAN),
            ("onion", Architecture.CLEAN),
            ("modular", Architecture.FEATURE_MODULAR),
        ],
    )
    def test_parse_aliases(self, text, expected):
        assert Architecture.parse(text) == expected

    def test_display(self):
        assert str(Architecture.FEATURE_MODULAR) == "feature-modular"


# ---------------------------------------------------------------------------
# Display round trip
# ---------------------------------------------------------------------------


class TestRoundTrip:
    @pytest.mark.parametrize("enum_cls", [Language, ProjectKind, Framework, Architecture])
    def test_parse_of_display_is_identity(self, enum_cls):
        for member in enum_cls:
            assert enum_cls.parse(str(member)) is member
