"""Scarff command-line interface.

Usage::

    scarff new my-app -l python
    scarff new api -l rust -t web-backend -f axum --dry-run
    scarff list --language go --format json
    scarff init
    scarff config set defaults.language python
"""

from __future__ import annotations

import argparse
import asyncio
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from rich.table import Table

from . import __version__
from .adapters import InMemoryStore, LocalFilesystem, SimpleRenderer
from .config import Config, default_config_path
from .domain import capabilities
from .domain.errors import ErrorCategory, MissingRequiredFieldError, ScarffError
from .domain.project_structure import FileToWrite, ProjectStructure
from .domain.target import Target
from .domain.value_objects import Architecture, Framework, Language, ProjectKind
from .services import ScaffoldService, TemplateInfo
from .utils import (
    configure_console,
    console,
    print_error,
    print_panel,
    print_success,
    print_summary_table,
    print_warning,
    validate_project_name,
)


class InvalidProjectNameError(ScarffError):
    category = ErrorCategory.VALIDATION

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid project name '{name}': {reason}")

    def suggestions(self) -> list[str]:
        return ["Use a plain directory name such as 'my-app'; pass -o to choose the parent"]


# ---------------------------------------------------------------------------
# Target assembly
# ---------------------------------------------------------------------------


@dataclass
class UserChoices:
    """Which target fields came from the user (flag or config) rather than inference."""

    language: bool = False
    kind: bool = False
    framework: bool = False
    architecture: bool = False


def build_target(
    language: Optional[str],
    kind: Optional[str] = None,
    framework: Optional[str] = None,
    architecture: Optional[str] = None,
    config: Optional[Config] = None,
) -> tuple[Target, UserChoices]:
    """Build a ``Target`` from raw flag strings, falling back to config defaults.

    Explicit flags always win.  A config default only fills a field the user
    left unset, and only when it is compatible with what the flags already
    fix: a stored kind is ignored once ``--framework`` names the stack, a
    stored framework must belong to the language and support the kind, and a
    stored architecture must fit the resolved target.  Defaults written for
    another language are ignored altogether.  Anything still unset is
    inferred by the builder.
    """
    defaults = config.defaults if config else None
    if not language and defaults is not None:
        language = defaults.language
    if not language:
        raise MissingRequiredFieldError("language")

    lang = Language.parse(language)
    kind_value = ProjectKind.parse(kind) if kind else None
    framework_value = Framework.parse(framework) if framework else None
    architecture_value = Architecture.parse(architecture) if architecture else None
    choices = UserChoices(
        language=True,
        kind=kind_value is not None,
        framework=framework_value is not None,
        architecture=architecture_value is not None,
    )

    if defaults is not None and (
        defaults.language is None or Language.parse(defaults.language) == lang
    ):
        if kind_value is None and framework_value is None and defaults.kind:
            stored_kind = ProjectKind.parse(defaults.kind)
            if capabilities.language_supports_kind(lang, stored_kind):
                kind_value = stored_kind
                choices.kind = True
        if framework_value is None and defaults.framework:
            stored_framework = Framework.parse(defaults.framework)
            if stored_framework.language == lang and (
                kind_value is None
                or capabilities.framework_supports_kind(stored_framework, kind_value)
            ):
                framework_value = stored_framework
                choices.framework = True

    builder = Target.builder().language(lang)
    if kind_value is not None:
        builder = builder.kind(kind_value)
    if framework_value is not None:
        builder = builder.framework(framework_value)
    if architecture_value is not None:
        return builder.architecture(architecture_value).build(), choices

    target = builder.build()
    if defaults is not None and defaults.architecture and (
        defaults.language is None or Language.parse(defaults.language) == lang
    ):
        stored_architecture = Architecture.parse(defaults.architecture)
        if capabilities.architecture_is_compatible(
            stored_architecture, target.language, target.kind, target.framework
        ):
            choices.architecture = True
            return builder.architecture(stored_architecture).build(), choices
    return target, choices


def _build_service(config: Config) -> ScaffoldService:
    store = InMemoryStore.with_builtin(config.templates.local_path)
    return ScaffoldService(store, SimpleRenderer(), LocalFilesystem())


# ---------------------------------------------------------------------------
# Presentation
# ---------------------------------------------------------------------------


def _source(explicit: bool) -> str:
    return "[green]explicit[/green]" if explicit else "[dim]inferred[/dim]"


def show_configuration(target: Target, choices: UserChoices, project_root: Path) -> None:
    table = Table(title="Project Configuration", show_header=True, header_style="bold cyan")
    table.add_column("Field", style="dim", no_wrap=True)
    table.add_column("Value")
    table.add_column("Source")

    table.add_row("Language", str(target.language), _source(choices.language))
    table.add_row("Kind", str(target.kind), _source(choices.kind))
    table.add_row(
        "Framework",
        str(target.framework) if target.framework else "none",
        _source(choices.framework),
    )
    table.add_row("Architecture", str(target.architecture), _source(choices.architecture))
    table.add_row("Location", str(project_root), "")
    console.print(table)


def show_plan(structure: ProjectStructure) -> None:
    table = Table(title=f"Dry run: {structure.root}", show_header=True, header_style="bold cyan")
    table.add_column("Path")
    table.add_column("Type", style="dim")
    table.add_column("Size", justify="right")
    for entry in structure.entries:
        if isinstance(entry, FileToWrite):
            kind = "file (executable)" if entry.executable else "file"
            table.add_row(entry.path, kind, f"{entry.size} B")
        else:
            table.add_row(entry.path + "/", "directory", "")
    console.print(table)


def show_templates(templates: list[TemplateInfo], fmt: str) -> None:
    if fmt == "json":
        console.print_json(json.dumps([t.model_dump() for t in templates]))
        return
    if fmt == "plain":
        for t in templates:
            console.print(t.id, markup=False, highlight=False, soft_wrap=True)
        return

    table = Table(title="Available Templates", show_header=True, header_style="bold cyan")
    for column in ("ID", "Name", "Language", "Kind", "Framework", "Architecture"):
        table.add_column(column)
    for t in templates:
        table.add_row(t.id, t.name, t.language, t.kind, t.framework, t.architecture)
    console.print(table)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def cmd_new(args: argparse.Namespace, config: Config) -> int:
    reason = validate_project_name(args.name)
    if reason:
        raise InvalidProjectNameError(args.name, reason)

    target, choices = build_target(
        args.language, args.kind, args.framework, args.architecture, config
    )
    output_dir = Path(args.output)
    project_root = output_dir / args.name
    show_configuration(target, choices, project_root)

    service = _build_service(config)
    if args.dry_run:
        show_plan(service.plan(target, args.name, output_dir))
        console.print("[dim]Dry run: no files were written.[/dim]")
        return 0

    root = asyncio.run(service.scaffold(target, args.name, output_dir, force=args.force))
    print_success(f"Project '{args.name}' created at {root}")
    print_panel(f"cd {root}", title="Next steps", style="green")
    return 0


def cmd_list(args: argparse.Namespace, config: Config) -> int:
    language = str(Language.parse(args.language)) if args.language else None
    kind = str(ProjectKind.parse(args.kind)) if args.kind else None
    fmt = args.format or ("json" if config.output.format == "json" else "table")

    service = _build_service(config)
    templates = service.filter_templates(language=language, kind=kind)
    if not templates:
        print_warning("No templates match the given filters")
        return 0
    show_templates(templates, fmt)
    return 0


def cmd_init(args: argparse.Namespace, config: Config) -> int:
    path = Path(args.path) if args.path else (Path(args.config) if args.config else default_config_path())
    if path.exists() and not args.force:
        print_warning(f"Config already exists at {path} (use --force to overwrite)")
        return 0
    Config().save(path)
    print_success(f"Configuration created at {path}")
    return 0


def cmd_config(args: argparse.Namespace, config: Config) -> int:
    path = Path(args.config) if args.config else default_config_path()
    action = args.config_command

    if action == "path":
        console.print(str(path), markup=False, highlight=False, soft_wrap=True)
    elif action == "get":
        value = config.get_value(args.key)
        console.print(f"{args.key} = {'' if value is None else value}", markup=False, soft_wrap=True)
    elif action == "set":
        updated = config.set_value(args.key, args.value)
        updated.save(path)
        print_success(f"Set {args.key} = {updated.get_value(args.key)}")
    else:
        rows = {key: config.get_value(key) for key in Config.keys()}
        print_summary_table({k: "" if v is None else v for k, v in rows.items()}, title="Configuration")
    return 0


COMMANDS = {
    "new": cmd_new,
    "list": cmd_list,
    "init": cmd_init,
    "config": cmd_config,
}


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scarff",
        description="Scarff -- scaffold new projects from templates",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  scarff new my-cli -l rust\n"
            "  scarff new my-api -l python -t web-backend --dry-run\n"
            "  scarff list -l typescript\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"scarff {__version__}")
    parser.add_argument("--config", default=None, help="Path to the config file")
    parser.add_argument("--quiet", "-q", action="store_true", help="Only print errors")
    parser.add_argument("--no-color", action="store_true", help="Disable coloured output")

    sub = parser.add_subparsers(dest="command", required=True)

    new = sub.add_parser("new", help="Create a new project")
    new.add_argument("name", help="Project name (directory created under --output)")
    new.add_argument("--language", "--lang", "-l", default=None, help="rust, python, typescript, go")
    new.add_argument("--kind", "--type", "-t", default=None, help="cli, web-backend, web-frontend, ...")
    new.add_argument("--framework", "-f", default=None, help="e.g. axum, fastapi, react")
    new.add_argument("--architecture", "--arch", "-a", default=None, help="layered, mvc, clean, feature-modular")
    new.add_argument("--output", "-o", default=".", help="Parent directory (default: .)")
    new.add_argument("--dry-run", action="store_true", help="Show what would be created")
    new.add_argument("--force", action="store_true", help="Overwrite an existing project directory")

    lst = sub.add_parser("list", help="List available templates")
    lst.add_argument("--language", "--lang", "-l", default=None)
    lst.add_argument("--kind", "--type", "-t", default=None)
    lst.add_argument("--format", choices=["table", "json", "plain"], default=None)

    init = sub.add_parser("init", help="Write a default config file")
    init.add_argument("--path", default=None, help="Where to write the config file")
    init.add_argument("--force", action="store_true", help="Overwrite an existing file")

    cfg = sub.add_parser("config", help="Inspect or change configuration")
    cfg_sub = cfg.add_subparsers(dest="config_command", required=True)
    get = cfg_sub.add_parser("get", help="Print one value")
    get.add_argument("key")
    set_ = cfg_sub.add_parser("set", help="Change one value")
    set_.add_argument("key")
    set_.add_argument("value")
    cfg_sub.add_parser("list", help="Print every value")
    cfg_sub.add_parser("path", help="Print the config file path")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point for ``scarff`` and ``python -m scarff``."""
    args = build_parser().parse_args(argv)

    try:
        config = Config.resolve(Path(args.config) if args.config else None)
        configure_console(
            quiet=args.quiet or config.output.quiet,
            no_color=args.no_color or config.output.no_color,
        )
        return COMMANDS[args.command](args, config)
    except ScarffError as exc:
        print_error(f"Error: {exc}")
        for hint in exc.suggestions():
            print_warning(hint)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
