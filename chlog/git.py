"""Thin wrappers around the git command line."""

from __future__ import annotations

import logging
import subprocess

from .changelog.scaffold import CommitRecord

logger = logging.getLogger(__name__)

GIT_TIMEOUT = 10


def _git(*args: str) -> str | None:
    """Run git and return stripped stdout, or None if it failed."""
    try:
        result = subprocess.run(
            ["git", *args],
            capture_output=True,
            text=True,
            timeout=GIT_TIMEOUT,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug("git %s failed: %s", " ".join(args), exc)
        return None
    if result.returncode != 0:
        logger.debug("git %s exited %d: %s", " ".join(args), result.returncode, result.stderr.strip())
        return None
    return result.stdout.strip()


def git_log(since_tag: str | None = None) -> list[CommitRecord]:
    """Commits since ``since_tag`` (or all commits), newest first.

    An empty repository or a bad range yields no commits rather than an error.
    """
    args = ["log", "--format=%H %s"]
    if since_tag:
        args.append(f"{since_tag}..HEAD")
    output = _git(*args)
    if output is None:
        return []
    return parse_git_log(output)


def latest_tag() -> str | None:
    """Most recent tag reachable from HEAD."""
    return _git("describe", "--tags", "--abbrev=0") or None


def detect_repo_url() -> str | None:
    """Remote origin URL normalized to https without a .git suffix."""
    url = _git("remote", "get-url", "origin")
    if not url:
        return None
    return normalize_git_url(url)


def parse_git_log(output: str) -> list[CommitRecord]:
    """Parse ``<hash> <subject>`` lines."""
    commits = []
    for line in output.splitlines():
        commit_hash, sep, subject = line.partition(" ")
        if sep:
            commits.append(CommitRecord(hash=commit_hash, subject=subject))
    return commits


def normalize_git_url(url: str) -> str:
    # git@host:org/repo.git -> https://host/org/repo
    if url.startswith("git@"):
        url = "https://" + url[len("git@"):].replace(":", "/", 1)
    return url.removesuffix(".git")
