"""Session sources backed by external tools (zoxide, git)."""

from __future__ import annotations

import logging
import subprocess

from mingle.models import Session, SessionSource

logger = logging.getLogger("mingle.sources")

WORKTREE_PREFIX = "worktree "


def run_lines(cmd: list[str], description: str) -> list[str] | None:
    """
    Run a listing command and return its output lines.

    Returns:
        Output lines, or None if the command is missing or exits non-zero.
        Failures are logged as warnings.
    """
    logger.debug(f"Running {' '.join(cmd)}")
    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except OSError as e:
        logger.warning(f"Cannot list {description}: {e}")
        return None

    if result.returncode != 0:
        logger.warning(f"Cannot list {description}: {result.stderr.strip() or f'exit code {result.returncode}'}")
        return None

    return result.stdout.split("\n")


def list_zoxide_sessions() -> list[Session]:
    """List directories from the zoxide index, one session per directory."""
    lines = run_lines(["zoxide", "query", "-l"], "zoxide directories")
    if lines is None:
        return []
    return [
        Session(name=line.strip(), path=line.strip(), source=SessionSource.ZOXIDE)
        for line in lines
        if line.strip()
    ]


def list_git_worktrees(worktree_root: str) -> list[str]:
    """
    List worktree paths (main tree included) of the repository at worktree_root.

    Parses `git worktree list --porcelain`, keeping only the "worktree <path>"
    lines. Returns an empty list if git fails.
    """
    lines = run_lines(
        ["git", "-C", worktree_root, "worktree", "list", "--porcelain"],
        f"git worktrees of {worktree_root}",
    )
    if lines is None:
        return []
    return [
        line[len(WORKTREE_PREFIX):].strip()
        for line in lines
        if line.startswith(WORKTREE_PREFIX) and line[len(WORKTREE_PREFIX):].strip()
    ]
