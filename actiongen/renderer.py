"""
renderer.py

Responsibility: Register named templates and deterministically render them to their
destinations.

Rules:
- Templates are registered and rendered in the order they are given.
- Every template is compiled at registration time, so syntax errors surface before
  anything is written.
- Undefined variables are errors (StrictUndefined); templates run in an immutable
  sandbox and cannot modify the configuration.
- Block tags trim their trailing newline (trim_blocks).
- Destinations are overwritten unconditionally; parent directories are created.

This module intentionally does NOT know about git, config files, or CLI parsing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from jinja2 import DictLoader, StrictUndefined, Template, TemplateNotFound, TemplateSyntaxError
from jinja2.sandbox import ImmutableSandboxedEnvironment

from actiongen.config import Configuration

logger = logging.getLogger(__name__)


class RenderError(RuntimeError):
    pass


class TemplateSourceReadError(RenderError):
    pass


class TemplateRegistrationError(RenderError):
    pass


class TemplateEvaluationError(RenderError):
    pass


class OutputDirectoryError(RenderError):
    pass


class OutputWriteError(RenderError):
    pass


@dataclass(frozen=True)
class TemplateDescriptor:
    name: str
    content: str
    destination: Path

    @classmethod
    def from_file(cls, name: str, source: str | Path, destination: str | Path) -> TemplateDescriptor:
        """
        Read the template source now; a descriptor never exists without its content.
        """
        src = Path(source)
        try:
            content = src.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise TemplateSourceReadError(f"Failed to read template file for '{name}': {src} ({e})") from e
        return cls(name=name, content=content, destination=Path(destination))


class RenderEnvironment:
    """Compiled templates keyed by logical name."""

    def __init__(self) -> None:
        self._sources: dict[str, str] = {}
        self._env = ImmutableSandboxedEnvironment(
            loader=DictLoader(self._sources),
            undefined=StrictUndefined,
            autoescape=False,
            trim_blocks=True,
            keep_trailing_newline=True,
        )

    def __contains__(self, name: object) -> bool:
        return name in self._sources

    def __len__(self) -> int:
        return len(self._sources)

    def register(self, name: str, text: str) -> None:
        if name in self._sources:
            raise TemplateRegistrationError(f"Template '{name}' is already registered.")

        self._sources[name] = text
        try:
            self._env.get_template(name)
        except TemplateSyntaxError as e:
            del self._sources[name]
            raise TemplateRegistrationError(
                f"Failed to add template '{name}' to environment: {e.message} (line {e.lineno})"
            ) from e

    def lookup(self, name: str) -> Template:
        try:
            return self._env.get_template(name)
        except TemplateNotFound as e:
            raise RenderError(f"Template '{name}' was not registered before rendering.") from e


def register_all(descriptors: list[TemplateDescriptor]) -> RenderEnvironment:
    env = RenderEnvironment()
    for d in descriptors:
        logger.debug("Registering template: %s", d.name)
        env.register(d.name, d.content)
    return env


def _write_output(path: Path, text: str) -> None:
    parent = path.parent
    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputDirectoryError(f"Failed to create directories for path: {parent} ({e})") from e

    try:
        # Normalize newlines for stable cross-platform output.
        path.write_text(text, encoding="utf-8", newline="\n")
    except OSError as e:
        raise OutputWriteError(f"Failed to write rendered template to file: {path} ({e})") from e


def render_all(
    descriptors: list[TemplateDescriptor],
    environment: RenderEnvironment,
    configuration: Configuration,
) -> list[Path]:
    """
    Render every descriptor against `configuration` and write it to its destination.

    Returns the written paths, in order. Files written before a failure are left in place.
    """
    if not configuration.is_assembled:
        raise RenderError("Configuration is missing repository_name/repository_owner; assemble it before rendering.")

    context = configuration.to_context()
    written: list[Path] = []

    for d in descriptors:
        template = environment.lookup(d.name)

        logger.info("Rendering template: %s", d.name)
        try:
            rendered = template.render(context)
        except Exception as e:  # noqa: BLE001 - surface as TemplateEvaluationError
            raise TemplateEvaluationError(f"Failed to render template '{d.name}': {e}") from e

        logger.info("Writing rendered template to: %s", d.destination)
        _write_output(d.destination, rendered)
        written.append(d.destination)

    return written
