"""
git_client.py

Responsibility: Isolate all direct interaction with the `git` executable.

This module must be the only place that:
- Spawns `git` subprocesses
- Interprets their exit status / stdout
- Derives the repository name and owner from the `origin` remote URL

Everything else (config assembly, rendering, CLI behavior) should use this client.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)


class GitError(RuntimeError):
    pass


class RepositoryNotFoundError(GitError):
    pass


class NoOriginRemoteError(GitError):
    pass


class GitCommandError(GitError):
    pass


class UrlParseError(GitError):
    pass


@dataclass(frozen=True)
class CommandResult:
    returncode: int
    stdout: str
    stderr: str = ""


@dataclass(frozen=True)
class OriginInfo:
    name: str
    owner: str


def _repo_name_from_url(url: str) -> str:
    name = url.rsplit("/", 1)[-1]
    if name.endswith(".git"):
        name = name[: -len(".git")]
    return name


def _owner_from_url(url: str) -> str:
    if "://" in url:
        parts = urlsplit(url)
        segments = [s for s in parts.path.split("/") if s]
        if len(segments) < 2:
            return ""
        if parts.scheme == "file":
            # file:///srv/owner/name.git: the host carries no owner, the parent directory does.
            return segments[-2]
        # https://host/owner/name.git, ssh://git@host/owner/name.git
        return segments[0]
    # git@host:owner/name.git; `git@host:name.git` has no owner.
    if "/" not in url:
        return ""
    return url.split("/", 1)[0].rsplit(":", 1)[-1]


def parse_origin_url(url: str) -> OriginInfo:
    """
    Derive the repository name and owner from a remote URL.

    Both scp-like (`git@github.com:owner/name.git`) and scheme URLs
    (`https://github.com/owner/name.git`) are accepted. An empty name or owner
    is an error; no placeholder is ever substituted.
    """
    url = url.strip()
    if not url:
        raise UrlParseError("Remote URL is empty.")

    name = _repo_name_from_url(url)
    if not name:
        raise UrlParseError(f"Failed to extract repository name from URL: {url}")

    owner = _owner_from_url(url)
    if not owner:
        raise UrlParseError(f"Failed to extract repository owner from URL: {url}")

    return OriginInfo(name=name, owner=owner)


class GitClient:
    def __init__(self, executable: str = "git", cwd: str | Path | None = None) -> None:
        self._executable = executable
        self._cwd = str(cwd) if cwd is not None else None

    def _invoke(self, *args: str) -> CommandResult:
        cmd = [self._executable, *args]
        logger.debug("Running: %s", " ".join(cmd))
        try:
            proc = subprocess.run(
                cmd,
                cwd=self._cwd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                errors="replace",
            )
        except OSError as e:
            raise GitCommandError(f"Failed to run {' '.join(cmd)}: {e}") from e
        return CommandResult(returncode=proc.returncode, stdout=proc.stdout.strip(), stderr=proc.stderr.strip())

    def _check(self, result: CommandResult, *args: str) -> str:
        if result.returncode != 0:
            detail = f": {result.stderr}" if result.stderr else ""
            raise GitCommandError(
                f"Command failed: {self._executable} {' '.join(args)} (exit status {result.returncode}){detail}"
            )
        return result.stdout

    def resolve_root(self) -> Path:
        """
        Return the top-level directory of the enclosing repository.
        """
        args = ("rev-parse", "--show-toplevel")
        try:
            result = self._invoke(*args)
        except GitCommandError as e:
            raise RepositoryNotFoundError(f"{e}. Please ensure git is installed.") from e
        if result.returncode != 0:
            detail = f": {result.stderr}" if result.stderr else ""
            raise RepositoryNotFoundError(
                f"Failed to get git repository root path (exit status {result.returncode}){detail}. "
                "Please ensure the current directory is inside a git repository."
            )
        return Path(result.stdout)

    def resolve_origin(self) -> OriginInfo:
        """
        Return the repository name and owner encoded in the `origin` remote URL.

        `git remote get-url origin` only runs once `origin` is confirmed to exist.
        """
        remotes = self._check(self._invoke("remote"), "remote")
        if "origin" not in remotes:
            raise NoOriginRemoteError(
                "No 'origin' remote found. Please ensure the current directory is a git "
                "repository with an 'origin' remote set up."
            )

        args = ("remote", "get-url", "origin")
        url = self._check(self._invoke(*args), *args)
        origin = parse_origin_url(url)
        logger.debug("Resolved origin %s -> owner=%s name=%s", url, origin.owner, origin.name)
        return origin
