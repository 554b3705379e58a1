"""Scarff configuration.

User preferences are typed Pydantic v2 models persisted as JSON.  Values in
``defaults`` only fill CLI flags the user did not pass; inference on the
``Target`` builder still runs for anything left unset afterwards.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from .domain.errors import ConfigError, ParseError
from .domain.value_objects import Architecture, Framework, Language, ProjectKind

CONFIG_ENV_VAR = "SCARFF_CONFIG"
_TRUTHY = {"1", "true", "yes", "on"}


def default_config_path() -> Path:
    """``$SCARFF_CONFIG`` when set, else ``~/.config/scarff/config.json``."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return Path.home() / ".config" / "scarff" / "config.json"


def _canonical(parser: Any, value: Optional[str]) -> Optional[str]:
    if value is None or value == "":
        return None
    try:
        return str(parser(value))
    except ParseError as exc:
        raise ValueError(str(exc)) from exc


class DefaultsConfig(BaseModel):
    """Fallback values for ``scarff new`` flags; stored in canonical form."""

    language: Optional[str] = Field(default=None, description="e.g. 'rust', 'python'")
    kind: Optional[str] = Field(default=None, description="e.g. 'cli', 'web-backend'")
    framework: Optional[str] = Field(default=None, description="e.g. 'fastapi'")
    architecture: Optional[str] = Field(default=None, description="e.g. 'layered'")

    @field_validator("language")
    @classmethod
    def _language(cls, v: Optional[str]) -> Optional[str]:
        return _canonical(Language.parse, v)

    @field_validator("kind")
    @classmethod
    def _kind(cls, v: Optional[str]) -> Optional[str]:
        return _canonical(ProjectKind.parse, v)

    @field_validator("framework")
    @classmethod
    def _framework(cls, v: Optional[str]) -> Optional[str]:
        return _canonical(Framework.parse, v)

    @field_validator("architecture")
    @classmethod
    def _architecture(cls, v: Optional[str]) -> Optional[str]:
        return _canonical(Architecture.parse, v)


class OutputConfig(BaseModel):
    no_color: bool = Field(default=False)
    quiet: bool = Field(default=False)
    format: Literal["human", "json"] = Field(default="human")


class TemplatesConfig(BaseModel):
    local_path: Optional[Path] = Field(
        default=None, description="Directory of template.toml templates searched first"
    )


class Config(BaseModel):
    """Global Scarff configuration."""

    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    templates: TemplatesConfig = Field(default_factory=TemplatesConfig)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path | None = None) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file. Defaults to ``default_config_path()``.

        Returns:
            The resolved path where the file was written.
        """
        target = Path(path) if path else default_config_path()
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"cannot write config file {target}: {exc}") from exc
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        try:
            raw = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"cannot read config file {path}: {exc}") from exc
        try:
            return cls.model_validate_json(raw)
        except ValidationError as exc:
            raise ConfigError(f"invalid config file {path}: {exc}") from exc

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            SCARFF_DEFAULT_LANGUAGE, SCARFF_DEFAULT_KIND,
            SCARFF_DEFAULT_FRAMEWORK, SCARFF_DEFAULT_ARCHITECTURE,
            SCARFF_TEMPLATES_DIR, SCARFF_NO_COLOR.
        """
        defaults_kwargs: dict[str, Any] = {}
        for name in ("language", "kind", "framework", "architecture"):
            value = os.environ.get(f"SCARFF_DEFAULT_{name.upper()}")
            if value:
                defaults_kwargs[name] = value

        templates_kwargs: dict[str, Any] = {}
        if os.environ.get("SCARFF_TEMPLATES_DIR"):
            templates_kwargs["local_path"] = Path(os.environ["SCARFF_TEMPLATES_DIR"])

        no_color = os.environ.get("SCARFF_NO_COLOR", "").strip().lower() in _TRUTHY

        try:
            return cls(
                defaults=DefaultsConfig(**defaults_kwargs),
                output=OutputConfig(no_color=no_color),
                templates=TemplatesConfig(**templates_kwargs),
            )
        except ValidationError as exc:
            raise ConfigError(f"invalid SCARFF_* environment variable: {exc}") from exc

    @classmethod
    def resolve(cls, path: Path | None = None) -> "Config":
        """Load *path* (or the default path) when it exists, else use the environment."""
        target = Path(path) if path else default_config_path()
        if target.is_file():
            return cls.load(target)
        return cls.from_env()

    # ------------------------------------------------------------------
    # Dotted-key access (``scarff config get/set``)
    # ------------------------------------------------------------------

    @classmethod
    def keys(cls) -> list[str]:
        return [
            f"{section}.{name}"
            for section, info in cls.model_fields.items()
            for name in info.annotation.model_fields
        ]

    def get_value(self, key: str) -> Any:
        section, name = self._split_key(key)
        return getattr(getattr(self, section), name)

    def set_value(self, key: str, value: str) -> "Config":
        """Return a copy with *key* set; the value is validated like a loaded file."""
        section, name = self._split_key(key)
        data = self.model_dump(mode="json")
        data[section][name] = None if value == "" else value
        try:
            return type(self).model_validate(data)
        except ValidationError as exc:
            raise ConfigError(f"invalid value for '{key}': {value!r}") from exc

    def to_json(self) -> str:
        return json.dumps(self.model_dump(mode="json"), indent=2)

    def _split_key(self, key: str) -> tuple[str, str]:
        if key not in self.keys():
            raise ConfigError(
                f"Unknown config key: '{key}' (expected one of: {', '.join(self.keys())})"
            )
        section, _, name = key.partition(".")
        return section, name
