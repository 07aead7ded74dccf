"""Merges every session source into a single catalog."""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from mingle.models import ConfigSession, Session, SessionCatalog
from mingle.sources import list_git_worktrees, list_zoxide_sessions
from mingle.tmux_manager import TmuxManager

logger = logging.getLogger("mingle.aggregator")

ConfigLoaderFn = Callable[[], list[ConfigSession]]
SessionLister = Callable[[], list[Session]]
WorktreeLister = Callable[[str], list[str]]


def merge_sessions(*groups: Iterable[Session]) -> SessionCatalog:
    """
    Merge session groups in precedence order.

    Names are normalized after merging, and the first session with a given
    normalized name wins. Later duplicates are dropped.
    """
    catalog = SessionCatalog()
    seen: set[str] = set()
    for group in groups:
        for session in group:
            normalized = session.normalized()
            if normalized.name in seen:
                logger.debug(f"Dropping duplicate session {normalized.name} from {session.source.value}")
                continue
            seen.add(normalized.name)
            catalog.sessions.append(normalized)
    return catalog


class SessionAggregator:
    """
    Builds the session catalog from tmux, the config file, git worktrees
    and zoxide.

    Every source is queried on each call; nothing is cached.
    """

    def __init__(
        self,
        config_loader: ConfigLoaderFn,
        tmux: TmuxManager | None = None,
        zoxide_lister: SessionLister = list_zoxide_sessions,
        worktree_lister: WorktreeLister = list_git_worktrees,
    ):
        self.config_loader = config_loader
        self.tmux = tmux if tmux is not None else TmuxManager()
        self.zoxide_lister = zoxide_lister
        self.worktree_lister = worktree_lister

    def expand_worktree_root(self, entry: ConfigSession) -> list[Session]:
        """One session per worktree found under a worktree-root entry."""
        return [entry.worktree_session(path) for path in self.worktree_lister(entry.path)]

    def get_sessions(self) -> SessionCatalog:
        """
        Build the catalog.

        Precedence: running tmux sessions, flat config entries, worktree
        entries, zoxide directories.

        Raises:
            ConfigError: If the config file exists but cannot be parsed.
        """
        config = self.config_loader()

        config_sessions: list[Session] = []
        worktree_sessions: list[Session] = []
        for entry in config:
            if entry.is_worktree_root:
                worktree_sessions.extend(self.expand_worktree_root(entry))
            else:
                config_sessions.append(entry.to_session())

        tmux_sessions = self.tmux.list_sessions()
        zoxide_sessions = self.zoxide_lister()

        catalog = merge_sessions(tmux_sessions, config_sessions, worktree_sessions, zoxide_sessions)
        logger.debug(
            f"Catalog has {len(catalog)} sessions "
            f"(tmux={len(tmux_sessions)}, config={len(config_sessions)}, "
            f"worktree={len(worktree_sessions)}, zoxide={len(zoxide_sessions)})"
        )
        return catalog
