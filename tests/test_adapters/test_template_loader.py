"""Tests for manifest loading and template discovery.

Covers:
- FilesystemTemplateLoader: manifest parsing, auto-detected content kinds,
  [[files]] overrides, [[directories]], skipping broken template dirs
- all_templates(): probing order and the bundled fallback
"""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from scarff.adapters import FilesystemTemplateLoader, all_templates, bundled_templates
from scarff.adapters.builtin_templates import candidate_paths
from scarff.domain import (
    ContentKind,
    Framework,
    InvalidTemplateError,
    Language,
    ProjectKind,
    Target,
)
from scarff.services import resolve_template


pytestmark = pytest.mark.unit


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(text), encoding="utf-8")


# ---------------------------------------------------------------------------
# FilesystemTemplateLoader
# ---------------------------------------------------------------------------


class TestFilesystemTemplateLoader:
    def test_loads_manifest_and_files(self, templates_dir):
        templates = FilesystemTemplateLoader(templates_dir).load_all()
        assert len(templates) == 1
        template = templates[0]

        assert str(template.id) == "rust-basic@1.0.0"
        assert template.matcher.language == Language.RUST
        assert template.matcher.kind == ProjectKind.CLI
        assert template.matcher.framework is None
        assert template.metadata.name == "Rust Basic"
        assert template.metadata.author == "Scarff"
        assert template.metadata.tags == ["rust", "cli"]

        files = {f.path: f for f in template.files()}
        assert "template.toml" not in files
        assert files["src/main.rs"].content.kind == ContentKind.PARAMETERIZED
        assert files[".gitignore"].content.kind == ContentKind.LITERAL
        assert [d.path for d in template.directories()] == ["src"]

    def test_framework_and_overrides(self, tmp_path):
        root = tmp_path / "pack"
        _write(
            root / "axum" / "template.toml",
            """
            [template]
            id = "rust-axum"
            version = "2.0.0"

            [matcher]
            language = "rust"
            framework = "Rust:Axum"
            kind = "webbackend"
            architecture = "layered"

            [metadata]
            name = "Axum"

            [[files]]
            path = "NOTES.md"
            type = "literal"

            [[files]]
            path = "LICENSE"
            type = "external"
            external_id = "builtin:mit"

            [[directories]]
            path = "migrations"
            """,
        )
        _write(root / "axum" / "NOTES.md", "keep {{THIS}} verbatim\n")

        template = FilesystemTemplateLoader(root).load_all()[0]

        assert template.matcher.framework == Framework.AXUM
        assert template.matcher.kind == ProjectKind.WEB_BACKEND
        assert template.specificity() == 4
        files = {f.path: f for f in template.files()}
        assert files["NOTES.md"].content.kind == ContentKind.LITERAL
        assert files["LICENSE"].content.kind == ContentKind.EXTERNAL
        assert files["LICENSE"].content.source == "builtin:mit"
        assert "migrations" in [d.path for d in template.directories()]

    def test_broken_directories_are_skipped(self, templates_dir, capsys):
        _write(templates_dir / "no-manifest" / "README.md", "hi\n")
        _write(templates_dir / "bad-toml" / "template.toml", "[template\n")
        _write(
            templates_dir / "bad-language" / "template.toml",
            """
            [template]
            id = "x"
            version = "1"
            [matcher]
            language = "cobol"
            [metadata]
            name = "X"
            """,
        )
        _write(
            templates_dir / "external-without-id" / "template.toml",
            """
            [template]
            id = "y"
            version = "1"
            [metadata]
            name = "Y"
            [[files]]
            path = "LICENSE"
            type = "external"
            """,
        )

        templates = FilesystemTemplateLoader(templates_dir).load_all()

        assert [t.id.name for t in templates] == ["rust-basic"]
        assert "Skipping template directory" in capsys.readouterr().err

    def test_missing_metadata_name_is_invalid(self, tmp_path):
        _write(
            tmp_path / "pack" / "t" / "template.toml",
            """
            [template]
            id = "t"
            version = "1"
            [metadata]
            description = "no name"
            """,
        )
        with pytest.raises(InvalidTemplateError):
            FilesystemTemplateLoader(tmp_path / "pack").load_template(tmp_path / "pack" / "t")

    def test_parent_directory_entries_are_skipped(self, templates_dir, capsys):
        _write(
            templates_dir / "escaping" / "template.toml",
            """
            [template]
            id = "escaping"
            version = "1"
            [metadata]
            name = "Escaping"
            [[directories]]
            path = "../escape"
            """,
        )

        templates = FilesystemTemplateLoader(templates_dir).load_all()

        assert [t.id.name for t in templates] == ["rust-basic"]
        err = " ".join(capsys.readouterr().err.split())
        assert "escapes the project root: ../escape" in err

    def test_missing_root_raises(self, tmp_path):
        with pytest.raises(InvalidTemplateError, match="not found"):
            FilesystemTemplateLoader(tmp_path / "nowhere").load_all()


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


class TestDiscovery:
    def test_env_var_directory_wins(self, templates_dir, monkeypatch):
        monkeypatch.setenv("SCARFF_TEMPLATES_DIR", str(templates_dir))
        assert candidate_paths()[0] == templates_dir
        assert [t.id.name for t in all_templates()] == ["rust-basic"]

    def test_explicit_directory_comes_first(self, templates_dir, monkeypatch):
        monkeypatch.setenv("SCARFF_TEMPLATES_DIR", "/elsewhere")
        paths = candidate_paths(templates_dir)
        assert paths[0] == templates_dir
        assert paths[1] == Path("/elsewhere")
        assert Path("templates") in paths

    def test_cwd_templates_directory(self, templates_dir, monkeypatch):
        monkeypatch.chdir(templates_dir.parent)
        templates_dir.rename(templates_dir.parent / "templates")
        assert [t.id.name for t in all_templates()] == ["rust-basic"]

    def test_parent_directories_are_never_searched(self, templates_dir, monkeypatch):
        templates_dir.rename(templates_dir.parent / "templates")
        work = templates_dir.parent / "work"
        work.mkdir(exist_ok=True)
        monkeypatch.chdir(work)

        assert all(".." not in p.parts for p in candidate_paths())
        names = {t.id.name for t in all_templates()}
        assert names == {t.id.name for t in bundled_templates()}

    def test_falls_back_to_bundled(self):
        names = {t.id.name for t in all_templates()}
        assert names == {t.id.name for t in bundled_templates()}

    def test_empty_directory_is_skipped(self, tmp_path, monkeypatch):
        empty = tmp_path / "empty"
        empty.mkdir()
        monkeypatch.setenv("SCARFF_TEMPLATES_DIR", str(empty))
        assert len(all_templates()) == len(bundled_templates())


class TestBundledTemplates:
    def test_all_valid_and_unique(self):
        templates = bundled_templates()
        for template in templates:
            template.validate()
        assert len({t.id for t in templates}) == len(templates)

    @pytest.mark.parametrize(
        "language,kind,expected",
        [
            (Language.RUST, ProjectKind.CLI, "rust-cli-default"),
            (Language.RUST, ProjectKind.WEB_BACKEND, "rust-axum-backend"),
            (Language.PYTHON, ProjectKind.WEB_BACKEND, "python-fastapi-backend"),
            (Language.PYTHON, ProjectKind.CLI, "python-cli"),
            (Language.PYTHON, ProjectKind.FULLSTACK, "python-django-fullstack"),
            (Language.TYPESCRIPT, ProjectKind.WEB_FRONTEND, "typescript-react-frontend"),
            (Language.TYPESCRIPT, ProjectKind.FULLSTACK, "typescript-nextjs-fullstack"),
            (Language.GO, ProjectKind.CLI, "go-cli"),
            (Language.GO, ProjectKind.WEB_BACKEND, "go-gin-backend"),
        ],
    )
    def test_default_targets_resolve_uniquely(self, language, kind, expected):
        target = Target.builder().language(language).kind(kind).build()
        assert resolve_template(target, bundled_templates()).id.name == expected
