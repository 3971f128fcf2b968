"""
config.py

Responsibility: Load and validate the action configuration file into a typed,
immutable model, and complete it with values derived from the git repository.

The document is YAML (a superset of JSON). Validation is strict about shape and
types, but forward-compatible: unknown keys are ignored at every level.

The renderer and CLI should treat the assembled result as the single source of truth.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from actiongen.git_client import GitClient

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    pass


class ConfigReadError(ConfigError):
    pass


class ConfigParseError(ConfigError):
    pass


@dataclass(frozen=True)
class Parameter:
    """An action input."""

    name: str
    description: str
    required: bool
    default: str | None = None


@dataclass(frozen=True)
class OutputParameter:
    """An action output; `value` is an expression consumed by the templates."""

    name: str
    description: str
    value: str


@dataclass(frozen=True)
class RustMetadata:
    name: str
    edition: str
    version: str


@dataclass(frozen=True)
class Configuration:
    """Everything the templates can see."""

    action_name: str
    description: str
    author: str
    inputs: tuple[Parameter, ...]
    outputs: tuple[OutputParameter, ...]
    rust: RustMetadata
    repository_name: str | None = None
    repository_owner: str | None = None

    @property
    def is_assembled(self) -> bool:
        return self.repository_name is not None and self.repository_owner is not None

    def to_context(self) -> dict[str, Any]:
        # Sequences stay tuples so templates cannot grow or reorder them.
        return dataclasses.asdict(self)


def _require(data: dict[str, Any], key: str, where: str) -> Any:
    if key not in data:
        raise ConfigParseError(f"Missing required field `{where}{key}`.")
    return data[key]


def _require_str(data: dict[str, Any], key: str, where: str = "") -> str:
    value = _require(data, key, where)
    if not isinstance(value, str):
        raise ConfigParseError(
            f"`{where}{key}` must be a string, got {type(value).__name__} (quote it in YAML)."
        )
    return value


def _require_mapping(value: Any, where: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ConfigParseError(f"`{where}` must be an object/mapping, got {type(value).__name__}.")
    return value


def _require_list(data: dict[str, Any], key: str) -> list[Any]:
    value = _require(data, key, "")
    if not isinstance(value, list):
        raise ConfigParseError(f"`{key}` must be a list, got {type(value).__name__}.")
    return value


def _parse_input(raw: Any, where: str) -> Parameter:
    data = _require_mapping(raw, where)
    prefix = f"{where}."

    required = _require(data, "required", prefix)
    if not isinstance(required, bool):
        raise ConfigParseError(f"`{prefix}required` must be a boolean, got {type(required).__name__}.")

    default = data.get("default")
    if default is not None and not isinstance(default, str):
        raise ConfigParseError(
            f"`{prefix}default` must be a string when provided, got {type(default).__name__} (quote it in YAML)."
        )

    return Parameter(
        name=_require_str(data, "name", prefix),
        description=_require_str(data, "description", prefix),
        required=required,
        default=default,
    )


def _parse_output(raw: Any, where: str) -> OutputParameter:
    data = _require_mapping(raw, where)
    prefix = f"{where}."
    return OutputParameter(
        name=_require_str(data, "name", prefix),
        description=_require_str(data, "description", prefix),
        value=_require_str(data, "value", prefix),
    )


def _parse_rust(raw: Any) -> RustMetadata:
    data = _require_mapping(raw, "rust")
    return RustMetadata(
        name=_require_str(data, "name", "rust."),
        edition=_require_str(data, "edition", "rust."),
        version=_require_str(data, "version", "rust."),
    )


def parse_config(data: Any) -> Configuration:
    """
    Validate an already-decoded document and build a `Configuration`.

    Required keys:
    - action_name, description, author: str
    - inputs: list of {name, description, required: bool, default?: str}
    - outputs: list of {name, description, value}
    - rust: {name, edition, version}
    """
    if not isinstance(data, dict):
        raise ConfigParseError("Configuration must be an object/mapping at the top level.")

    action_name = _require_str(data, "action_name")
    description = _require_str(data, "description")
    author = _require_str(data, "author")

    inputs = tuple(_parse_input(item, f"inputs[{i}]") for i, item in enumerate(_require_list(data, "inputs")))
    outputs = tuple(_parse_output(item, f"outputs[{i}]") for i, item in enumerate(_require_list(data, "outputs")))
    rust = _parse_rust(_require(data, "rust", ""))

    return Configuration(
        action_name=action_name,
        description=description,
        author=author,
        inputs=inputs,
        outputs=outputs,
        rust=rust,
    )


def load_config(config_path: str | Path) -> Configuration:
    """
    Read and validate the configuration file at `config_path`.

    The repository fields are left unset; see `assemble_config`.
    """
    path = Path(config_path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigReadError(f"Failed to read config file: {path} ({e})") from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigParseError(f"Failed to parse config file: {path}\n\n{e}") from e

    try:
        config = parse_config(data)
    except ConfigParseError as e:
        raise ConfigParseError(f"Invalid config file {path}: {e}") from e

    logger.debug("Loaded config %s: %d input(s), %d output(s)", path, len(config.inputs), len(config.outputs))
    return config


def assemble_config(config_path: str | Path, git: GitClient | None = None) -> Configuration:
    """
    Load the configuration and fill in `repository_name` / `repository_owner`
    from the `origin` remote. Errors from either step propagate unchanged.
    """
    config = load_config(config_path)
    origin = (git or GitClient()).resolve_origin()
    return dataclasses.replace(config, repository_name=origin.name, repository_owner=origin.owner)
