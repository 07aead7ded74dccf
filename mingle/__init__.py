"""Mingle - tmux session management across tmux, config, git worktrees and zoxide."""

__version__ = "0.1.0"
__all__ = ["ConfigSession", "Session", "SessionCatalog"]

from mingle.models import ConfigSession, Session, SessionCatalog
