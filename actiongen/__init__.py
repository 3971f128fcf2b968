"""
actiongen package

Renders the scaffolding of a Rust-backed GitHub Action from a single config file.

Key responsibilities are split across modules:
- `config.py`: load/validate config.yaml into an immutable `Configuration`, then add repository fields
- `git_client.py`: isolated `git` subprocess calls (repository root, origin remote)
- `template_set.py`: the fixed list of templates and their destinations
- `renderer.py`: register templates and render them deterministically to disk
- `cli.py`: CLI entrypoint and orchestration (root -> templates -> config -> register -> render)
"""

from __future__ import annotations

import logging

__all__ = ["__version__"]

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
