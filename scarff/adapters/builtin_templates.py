"""Template discovery and the templates bundled with Scarff.

``all_templates`` searches, in order:

1. an explicit directory (``templates.local_path`` from the config),
2. ``$SCARFF_TEMPLATES_DIR``,
3. ``./templates``,
4. ``<package dir>/templates``,

and returns the templates from the first directory holding at least one
valid template.  Parent directories of the working directory are never
searched, so an unrelated enclosing project cannot supply templates.  When
nothing is found on disk, the code-defined templates below are used so a
fresh install can scaffold straight away.
"""

from __future__ import annotations

import os
import textwrap
from pathlib import Path
from typing import Callable, Optional

from ..domain.template import (
    DirectorySpec,
    FileSpec,
    TargetMatcher,
    Template,
    TemplateContent,
    TemplateId,
    TemplateMetadata,
    TemplateNode,
)
from ..domain.value_objects import Architecture, Framework, Language, ProjectKind
from ..utils import print_status
from .template_loader import FilesystemTemplateLoader

TEMPLATES_ENV_VAR = "SCARFF_TEMPLATES_DIR"


def candidate_paths(explicit: Optional[str | Path] = None) -> list[Path]:
    """Directories to search for templates, highest priority first."""
    paths: list[Path] = []
    if explicit:
        paths.append(Path(explicit))
    env_dir = os.environ.get(TEMPLATES_ENV_VAR)
    if env_dir:
        paths.append(Path(env_dir))
    paths.append(Path("templates"))
    paths.append(Path(__file__).resolve().parent.parent / "templates")
    return paths


def discover_templates(explicit: Optional[str | Path] = None) -> list[Template]:
    """Templates from the first candidate directory that yields any; else ``[]``."""
    for candidate in candidate_paths(explicit):
        if not candidate.is_dir():
            continue
        templates = FilesystemTemplateLoader(candidate).load_all()
        if templates:
            return templates
    return []


def all_templates(explicit: Optional[str | Path] = None) -> list[Template]:
    templates = discover_templates(explicit)
    if templates:
        return templates
    print_status("No templates directory found, using bundled templates")
    return bundled_templates()


def bundled_templates() -> list[Template]:
    return [factory() for factory in BUNDLED_FACTORIES]


# ---------------------------------------------------------------------------
# Bundled templates
# ---------------------------------------------------------------------------


def _param(path: str, body: str, executable: bool = False) -> FileSpec:
    return FileSpec(path, TemplateContent.parameterized(textwrap.dedent(body).lstrip("\n")), executable)


def _literal(path: str, body: str) -> FileSpec:
    return FileSpec(path, TemplateContent.literal(textwrap.dedent(body).lstrip("\n")))


def _template(
    name: str,
    display: str,
    description: str,
    tags: list[str],
    matcher: TargetMatcher,
    nodes: list[TemplateNode],
) -> Template:
    return Template(
        id=TemplateId(name, "1.0.0"),
        matcher=matcher,
        metadata=TemplateMetadata(
            name=display,
            description=description,
            version="1.0.0",
            tags=tags,
        ),
        nodes=nodes,
    )


_GITIGNORE_PYTHON = """
    __pycache__/
    *.pyc
    .venv/
    dist/
    """

_GITIGNORE_NODE = """
    node_modules/
    dist/
    .next/
    """


def rust_cli_default() -> Template:
    return _template(
        "rust-cli-default",
        "Rust CLI (Default)",
        "A simple Rust command-line application.",
        ["rust", "cli", "simple"],
        TargetMatcher(language=Language.RUST, kind=ProjectKind.CLI),
        [
            DirectorySpec("src"),
            _param(
                "src/main.rs",
                """
                fn main() {
                    println!("Hello, {{PROJECT_NAME}}!");
                }
                """,
            ),
            _param(
                "Cargo.toml",
                """
                [package]
                name = "{{PROJECT_NAME_KEBAB}}"
                version = "0.1.0"
                edition = "2024"

                [dependencies]
                """,
            ),
            _literal(".gitignore", "/target\n"),
        ],
    )


def rust_axum_backend() -> Template:
    return _template(
        "rust-axum-backend",
        "Rust Axum Backend (Layered)",
        "Axum web backend with layered architecture.",
        ["rust", "axum", "backend", "layered"],
        TargetMatcher(
            language=Language.RUST,
            kind=ProjectKind.WEB_BACKEND,
            framework=Framework.AXUM,
            architecture=Architecture.LAYERED,
        ),
        [
            DirectorySpec("src"),
            _param(
                "Cargo.toml",
                """
                [package]
                name = "{{PROJECT_NAME_KEBAB}}"
                version = "0.1.0"
                edition = "2024"

                [dependencies]
                axum = "0.7"
                tokio = { version = "1", features = ["full"] }
                """,
            ),
            _param(
                "src/main.rs",
                """
                #[tokio::main]
                async fn main() {
                    println!("{{PROJECT_NAME}} starting");
                }
                """,
            ),
        ],
    )


def python_fastapi_backend() -> Template:
    return _template(
        "python-fastapi-backend",
        "Python FastAPI Backend",
        "FastAPI web backend with layered architecture.",
        ["python", "fastapi", "backend"],
        TargetMatcher(
            language=Language.PYTHON,
            kind=ProjectKind.WEB_BACKEND,
            framework=Framework.FASTAPI,
            architecture=Architecture.LAYERED,
        ),
        [
            DirectorySpec("src"),
            _param(
                "pyproject.toml",
                """
                [project]
                name = "{{PROJECT_NAME_KEBAB}}"
                version = "0.1.0"
                dependencies = ["fastapi>=0.100", "uvicorn[standard]"]
                """,
            ),
            _param(
                "src/main.py",
                """
                from fastapi import FastAPI

                app = FastAPI(title="{{PROJECT_NAME}}")


                @app.get("/")
                def root():
                    return {"app": "{{PROJECT_NAME}}"}
                """,
            ),
            _literal(".gitignore", _GITIGNORE_PYTHON),
        ],
    )


def python_cli() -> Template:
    return _template(
        "python-cli",
        "Python CLI",
        "Command-line application with an argparse entry point.",
        ["python", "cli"],
        TargetMatcher(language=Language.PYTHON, kind=ProjectKind.CLI),
        [
            DirectorySpec("app"),
            _param(
                "pyproject.toml",
                """
                [project]
                name = "{{PROJECT_NAME_KEBAB}}"
                version = "0.1.0"

                [project.scripts]
                {{PROJECT_NAME_KEBAB}} = "app.__main__:main"
                """,
            ),
            _param(
                "app/__main__.py",
                """
                import argparse


                def main() -> None:
                    parser = argparse.ArgumentParser(prog="{{PROJECT_NAME_KEBAB}}")
                    parser.parse_args()
                    print("Hello from {{PROJECT_NAME}}!")


                if __name__ == "__main__":
                    main()
                """,
            ),
        ],
    )


def python_django_fullstack() -> Template:
    return _template(
        "python-django-fullstack",
        "Python Django Fullstack (MVC)",
        "Django project with server-rendered templates.",
        ["python", "django", "fullstack", "mvc"],
        TargetMatcher(
            language=Language.PYTHON,
            kind=ProjectKind.FULLSTACK,
            framework=Framework.DJANGO,
        ),
        [
            DirectorySpec("templates"),
            _param(
                "pyproject.toml",
                """
                [project]
                name = "{{PROJECT_NAME_KEBAB}}"
                version = "0.1.0"
                dependencies = ["django>=5.0"]
                """,
            ),
            _param(
                "manage.py",
                """
                #!/usr/bin/env python
                import os
                import sys

                if __name__ == "__main__":
                    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "{{PROJECT_NAME_SNAKE}}.settings")
                    from django.core.management import execute_from_command_line

                    execute_from_command_line(sys.argv)
                """,
                executable=True,
            ),
            _param(
                "templates/index.html",
                """
                <!doctype html>
                <title>{{PROJECT_NAME}}</title>
                <h1>{{PROJECT_NAME}}</h1>
                """,
            ),
        ],
    )


def typescript_react_frontend() -> Template:
    return _template(
        "typescript-react-frontend",
        "TypeScript React Frontend",
        "React frontend bootstrapped with Vite and TypeScript.",
        ["typescript", "react", "frontend"],
        TargetMatcher(
            language=Language.TYPESCRIPT,
            kind=ProjectKind.WEB_FRONTEND,
            framework=Framework.REACT,
        ),
        [
            DirectorySpec("src"),
            _param(
                "package.json",
                """
                {
                  "name": "{{PROJECT_NAME_KEBAB}}",
                  "version": "0.1.0",
                  "scripts": { "dev": "vite", "build": "tsc && vite build" },
                  "dependencies": { "react": "^18", "react-dom": "^18" },
                  "devDependencies": { "typescript": "^5", "vite": "^5" }
                }
                """,
            ),
            _param(
                "src/App.tsx",
                """
                export default function App() {
                  return <h1>{{PROJECT_NAME}}</h1>;
                }
                """,
            ),
            _literal(".gitignore", _GITIGNORE_NODE),
        ],
    )


def typescript_nextjs_fullstack() -> Template:
    return _template(
        "typescript-nextjs-fullstack",
        "TypeScript Next.js Fullstack",
        "Next.js app router project.",
        ["typescript", "nextjs", "fullstack"],
        TargetMatcher(
            language=Language.TYPESCRIPT,
            kind=ProjectKind.FULLSTACK,
            framework=Framework.NEXTJS,
        ),
        [
            DirectorySpec("app"),
            _param(
                "package.json",
                """
                {
                  "name": "{{PROJECT_NAME_KEBAB}}",
                  "version": "0.1.0",
                  "scripts": { "dev": "next dev", "build": "next build" },
                  "dependencies": { "next": "^14", "react": "^18", "react-dom": "^18" }
                }
                """,
            ),
            _param(
                "app/page.tsx",
                """
                export default function Home() {
                  return <main>{{PROJECT_NAME}}</main>;
                }
                """,
            ),
            _literal(".gitignore", _GITIGNORE_NODE),
        ],
    )


def go_cli() -> Template:
    return _template(
        "go-cli",
        "Go CLI",
        "Go command-line application using only the standard library.",
        ["go", "cli"],
        TargetMatcher(language=Language.GO, kind=ProjectKind.CLI),
        [
            _param(
                "go.mod",
                """
                module {{PROJECT_NAME_KEBAB}}

                go 1.22
                """,
            ),
            _param(
                "main.go",
                """
                package main

                import "fmt"

                func main() {
                	fmt.Println("Hello, {{PROJECT_NAME}}!")
                }
                """,
            ),
        ],
    )


def go_gin_backend() -> Template:
    return _template(
        "go-gin-backend",
        "Go Gin Backend",
        "Gin HTTP service with layered architecture.",
        ["go", "gin", "backend"],
        TargetMatcher(
            language=Language.GO,
            kind=ProjectKind.WEB_BACKEND,
            framework=Framework.GIN,
        ),
        [
            DirectorySpec("internal"),
            _param(
                "go.mod",
                """
                module {{PROJECT_NAME_KEBAB}}

                go 1.22

                require github.com/gin-gonic/gin v1.10.0
                """,
            ),
            _param(
                "main.go",
                """
                package main

                import "github.com/gin-gonic/gin"

                func main() {
                	r := gin.Default()
                	r.GET("/", func(c *gin.Context) {
                		c.JSON(200, gin.H{"app": "{{PROJECT_NAME}}"})
                	})
                	r.Run()
                }
                """,
            ),
        ],
    )


BUNDLED_FACTORIES: tuple[Callable[[], Template], ...] = (
    rust_cli_default,
    rust_axum_backend,
    python_fastapi_backend,
    python_cli,
    python_django_fullstack,
    typescript_react_frontend,
    typescript_nextjs_fullstack,
    go_cli,
    go_gin_backend,
)
