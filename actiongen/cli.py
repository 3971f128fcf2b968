"""
cli.py

Responsibility: CLI entrypoint for actiongen.

High-level flow (single run, no subcommands):
1) Resolve the git repository root (one output lives outside the project dir)
2) Read the fixed template set
3) Load config + derive repository name/owner from `origin`
4) Register all templates
5) Render and write all templates

This module should orchestrate behavior but keep concerns isolated:
- Config: `config.py`
- git: `git_client.py`
- Templates: `template_set.py`, `renderer.py`
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from actiongen.config import ConfigError, assemble_config
from actiongen.git_client import GitClient, GitError
from actiongen.renderer import RenderError, register_all, render_all
from actiongen.template_set import DEFAULT_CRATE_DIR, build_template_set

logger = logging.getLogger(__name__)


def generate_cmd(args: argparse.Namespace) -> int:
    project_dir = Path(args.project_dir)
    git = GitClient(cwd=project_dir)

    repository_root = git.resolve_root()
    logger.debug("Repository root: %s", repository_root)

    descriptors = build_template_set(
        templates_dir=project_dir / args.templates_dir,
        project_dir=project_dir,
        repository_root=repository_root,
        crate_dir=project_dir / args.crate_dir,
    )
    config = assemble_config(project_dir / args.config, git=git)

    env = register_all(descriptors)
    written = render_all(descriptors, env, config)

    logger.debug("Completed: %d file(s) written", len(written))
    return 0


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="actiongen",
        description="Render the GitHub Action scaffolding (action.yml, README, Cargo.toml, test workflow) from config.yaml",
    )
    p.add_argument(
        "--project-dir",
        default=".",
        help="Action project directory; outputs are written here and git runs here (default: .)",
    )
    p.add_argument("--config", default="config.yaml", help="Config file, relative to the project dir (default: config.yaml)")
    p.add_argument(
        "--templates-dir",
        default="templates",
        help="Templates directory, relative to the project dir (default: templates)",
    )
    p.add_argument(
        "--crate-dir",
        default=DEFAULT_CRATE_DIR,
        help=f"Rust crate directory for Cargo.toml, relative to the project dir (default: {DEFAULT_CRATE_DIR})",
    )
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.set_defaults(func=generate_cmd)
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    try:
        return int(args.func(args))
    except (ConfigError, GitError, RenderError) as e:
        sys.stderr.write(f"{parser.prog}: error: {e}\n")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
