"""
template_set.py

Responsibility: The fixed set of templates this tool renders, and where each one goes.

The list is static on purpose; nothing is discovered from the templates directory.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from actiongen.renderer import TemplateDescriptor

logger = logging.getLogger(__name__)

# The Rust crate lives in its own subdirectory of the action project.
DEFAULT_CRATE_DIR = "rust-action"


@dataclass(frozen=True)
class TemplateSpec:
    name: str
    source: str
    destination: str
    # Which directory `destination` is relative to.
    anchor: Literal["project", "crate", "repository"] = "project"


DEFAULT_TEMPLATES: tuple[TemplateSpec, ...] = (
    TemplateSpec("action", "action.yml.j2", "action.yml"),
    TemplateSpec("readme", "README.md.j2", "README.md"),
    TemplateSpec("cargo", "cargo.toml.j2", "Cargo.toml", anchor="crate"),
    TemplateSpec("test-action", "test-action.yml.j2", ".github/workflows/test_action.yml", anchor="repository"),
)


def build_template_set(
    *,
    templates_dir: str | Path,
    project_dir: str | Path,
    repository_root: str | Path,
    crate_dir: str | Path | None = None,
    specs: tuple[TemplateSpec, ...] = DEFAULT_TEMPLATES,
) -> list[TemplateDescriptor]:
    """
    Read every template source and pair it with its resolved destination.
    """
    tpl_dir = Path(templates_dir)
    project = Path(project_dir)
    bases = {
        "project": project,
        "crate": Path(crate_dir) if crate_dir is not None else project / DEFAULT_CRATE_DIR,
        "repository": Path(repository_root),
    }

    descriptors: list[TemplateDescriptor] = []
    for spec in specs:
        logger.info("Reading template: %s", spec.name)
        descriptors.append(
            TemplateDescriptor.from_file(
                spec.name,
                tpl_dir / spec.source,
                bases[spec.anchor] / spec.destination,
            )
        )
    return descriptors
