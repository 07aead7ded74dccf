"""Tmux session management for mingle."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from typing import Any

import libtmux
from libtmux.exc import LibTmuxException

from mingle.exceptions import SessionCreationError, TmuxError
from mingle.models import Session, SessionSource

logger = logging.getLogger("mingle.tmux")

# Set by tmux for every process running inside a client
TMUX_ENV_VAR = "TMUX"

# Answers piped into tmuxinator so it never waits on a prompt
TMUXINATOR_AUTO_CONFIRM = "y\n" * 64


def _stderr_text(result: Any) -> str:
    return "\n".join(result.stderr or []).strip()


class TmuxManager:
    """Runs the tmux (and tmuxinator) commands mingle needs."""

    def __init__(self, server: libtmux.Server | None = None):
        self.server = server if server is not None else libtmux.Server()

    def is_inside_tmux(self) -> bool:
        """Check if we're running inside a tmux client."""
        return bool(os.environ.get(TMUX_ENV_VAR))

    def list_session_names(self) -> list[str]:
        """
        List the names of running tmux sessions.

        Returns an empty list when no server is running or tmux is not
        installed, so other sources can still be listed.
        """
        try:
            result = self.server.cmd("list-sessions", "-F", "#{session_name}")
        except LibTmuxException as e:
            logger.warning(f"Cannot list tmux sessions: {str(e) or type(e).__name__}")
            return []

        if result.returncode != 0:
            # tmux exits non-zero when no server is running
            logger.debug(f"tmux list-sessions failed: {_stderr_text(result)}")
            return []

        return [line.strip() for line in result.stdout if line.strip()]

    def list_sessions(self) -> list[Session]:
        """List running tmux sessions as path-less sessions."""
        return [Session(name=name, source=SessionSource.TMUX) for name in self.list_session_names()]

    def session_exists(self, name: str) -> bool:
        """Check for a running session with exactly this name (fresh query)."""
        return name in self.list_session_names()

    def create_session(self, session: Session) -> None:
        """
        Create a detached session, via tmuxinator when a profile is set.

        Raises:
            SessionCreationError: If the session has no path or the command fails.
        """
        if not session.path:
            raise SessionCreationError("session path is missing, cannot create session")

        if session.tmuxinator:
            self._start_tmuxinator(session)
            return

        logger.info(f"Creating tmux session {session.name} in {session.path}")
        try:
            result = self.server.cmd("new-session", "-s", session.name, "-d", "-c", session.path)
        except LibTmuxException as e:
            raise SessionCreationError(f"error creating new tmux session: {e}") from e
        if result.returncode != 0:
            raise SessionCreationError(f"error creating new tmux session: {_stderr_text(result)}")

    def _start_tmuxinator(self, session: Session) -> None:
        """Start a tmuxinator profile detached and wait for it to finish."""
        cmd = [
            "tmuxinator", "start",
            "-n", session.name,
            "-p", session.tmuxinator,
            "--no-attach",
        ]
        logger.info(f"Starting tmuxinator profile {session.tmuxinator} as {session.name}")
        try:
            result = subprocess.run(
                cmd,
                cwd=session.path,
                input=TMUXINATOR_AUTO_CONFIRM,
                capture_output=True,
                text=True,
            )
        except OSError as e:
            raise SessionCreationError(f"error starting tmuxinator session: {e}") from e
        if result.returncode != 0:
            raise SessionCreationError(f"error starting tmuxinator session: {result.stderr.strip()}")

    def switch_client(self, name: str) -> None:
        """Point the current tmux client at another session."""
        try:
            result = self.server.cmd("switch-client", "-t", name)
        except LibTmuxException as e:
            raise TmuxError(f"error switching to tmux session: {e}") from e
        if result.returncode != 0:
            raise TmuxError(f"error switching to tmux session: {_stderr_text(result)}")

    def attach_args(self, name: str) -> list[str]:
        """Argument vector for attaching to a session (used with exec)."""
        return ["tmux", "attach-session", "-t", name]


def find_tmux_binary() -> str:
    """
    Locate the tmux executable.

    Raises:
        TmuxError: If tmux is not on PATH.
    """
    path = shutil.which("tmux")
    if path is None:
        raise TmuxError("error finding tmux: not installed or not in PATH")
    return path
