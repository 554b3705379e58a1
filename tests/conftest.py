"""Shared pytest fixtures for the Scarff test suite.

Provides reusable fixtures for:
- Isolated configuration and working directory
- In-memory filesystem and template store
- Small hand-built templates and resolved targets
"""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Callable, Optional

import pytest

from scarff.adapters import InMemoryStore, MemoryFilesystem, SimpleRenderer
from scarff.domain import (
    DirectorySpec,
    FileSpec,
    Framework,
    Language,
    ProjectKind,
    Target,
    TargetMatcher,
    Template,
    TemplateContent,
    TemplateId,
    TemplateMetadata,
)
from scarff.services import ScaffoldService
from scarff.utils import configure_console


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep every test away from the user's config file and ./templates."""
    for var in (
        "SCARFF_DEFAULT_LANGUAGE",
        "SCARFF_DEFAULT_KIND",
        "SCARFF_DEFAULT_FRAMEWORK",
        "SCARFF_DEFAULT_ARCHITECTURE",
        "SCARFF_TEMPLATES_DIR",
        "SCARFF_NO_COLOR",
    ):
        monkeypatch.delenv(var, raising=False)
    config_path = tmp_path / "home" / "config.json"
    monkeypatch.setenv("SCARFF_CONFIG", str(config_path))
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    yield config_path
    configure_console(quiet=False, no_color=False)


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

TemplateFactory = Callable[..., Template]


@pytest.fixture
def make_template() -> TemplateFactory:
    """Factory for small valid templates keyed by name and matcher."""

    def _make(
        name: str,
        matcher: Optional[TargetMatcher] = None,
        nodes: Optional[list] = None,
        version: str = "1.0.0",
    ) -> Template:
        return Template(
            id=TemplateId(name, version),
            matcher=matcher or TargetMatcher(),
            metadata=TemplateMetadata(name=name.replace("-", " ").title(), description=f"{name} template"),
            nodes=nodes
            or [
                DirectorySpec("src"),
                FileSpec("README.md", TemplateContent.parameterized("# {{PROJECT_NAME}}\n")),
            ],
        )

    return _make


@pytest.fixture
def rust_cli_template(make_template) -> Template:
    return make_template(
        "rust-cli",
        TargetMatcher(language=Language.RUST, kind=ProjectKind.CLI),
        [
            DirectorySpec("src"),
            FileSpec(
                "src/main.rs",
                TemplateContent.parameterized(
                    'fn main() {\n    println!("Hello, {{PROJECT_NAME}}!");\n}\n'
                ),
            ),
            FileSpec(
                "Cargo.toml",
                TemplateContent.parameterized('[package]\nname = "{{PROJECT_NAME_KEBAB}}"\n'),
            ),
            FileSpec("scripts/run.sh", TemplateContent.literal("#!/bin/sh\ncargo run\n"), executable=True),
        ],
    )


@pytest.fixture
def python_backend_template(make_template) -> Template:
    return make_template(
        "python-fastapi",
        TargetMatcher(
            language=Language.PYTHON,
            kind=ProjectKind.WEB_BACKEND,
            framework=Framework.FASTAPI,
        ),
    )


@pytest.fixture
def store(rust_cli_template, python_backend_template) -> InMemoryStore:
    return InMemoryStore([rust_cli_template, python_backend_template])


@pytest.fixture
def memory_fs() -> MemoryFilesystem:
    return MemoryFilesystem()


@pytest.fixture
def scaffold_service(store, memory_fs) -> ScaffoldService:
    return ScaffoldService(store, SimpleRenderer(), memory_fs)


# ---------------------------------------------------------------------------
# Targets
# ---------------------------------------------------------------------------

@pytest.fixture
def rust_cli_target() -> Target:
    return Target.builder().language(Language.RUST).build()


@pytest.fixture
def python_backend_target() -> Target:
    return Target.builder().language(Language.PYTHON).build()


# ---------------------------------------------------------------------------
# On-disk template directories
# ---------------------------------------------------------------------------

MINIMAL_MANIFEST = textwrap.dedent(
    """\
    [template]
    id = "rust-basic"
    version = "1.0.0"

    [matcher]
    language = "rust"
    kind = "cli"

    [metadata]
    name = "Rust Basic"
    description = "Minimal Rust CLI"
    tags = ["rust", "cli"]
    """
)


@pytest.fixture
def templates_dir(tmp_path: Path) -> Path:
    """A templates directory holding one valid manifest-based template."""
    root = tmp_path / "template-pack"
    slot = root / "rust-basic"
    (slot / "src").mkdir(parents=True)
    (slot / "template.toml").write_text(MINIMAL_MANIFEST, encoding="utf-8")
    (slot / "src" / "main.rs").write_text(
        'fn main() { println!("{{PROJECT_NAME}}"); }\n', encoding="utf-8"
    )
    (slot / ".gitignore").write_text("/target\n", encoding="utf-8")
    return root
