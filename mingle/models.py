"""Pydantic models for mingle."""

from __future__ import annotations

from enum import Enum
from typing import Iterator

from pydantic import BaseModel, ConfigDict, Field

WORKTREE_ROOT_TYPE = "worktreeroot"


class SessionKind(str, Enum):
    """Session kind enumeration."""

    WORKTREE_ROOT = WORKTREE_ROOT_TYPE


class SessionSource(str, Enum):
    """Where a session entry was discovered."""

    TMUX = "tmux"
    CONFIG = "config"
    WORKTREE = "worktree"
    ZOXIDE = "zoxide"


def normalize_session_name(name: str) -> str:
    """Rewrite a name into one tmux accepts (dots are not allowed)."""
    return name.replace(".", "_")


class Session(BaseModel):
    """A session that can be listed or connected to."""

    name: str
    path: str | None = Field(default=None, description="Working directory used when creating the session")
    kind: SessionKind | None = None
    tmuxinator: str | None = Field(default=None, description="Tmuxinator profile to start instead of a bare session")
    source: SessionSource = SessionSource.TMUX

    def normalized(self) -> Session:
        """Return a copy with a tmux-safe name."""
        return self.model_copy(update={"name": normalize_session_name(self.name)})


class ConfigSession(BaseModel):
    """One entry of the mingle.yaml config file."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    path: str
    type: str | None = None
    tmuxinator: str | None = None

    @property
    def is_worktree_root(self) -> bool:
        return self.type == WORKTREE_ROOT_TYPE

    def to_session(self) -> Session:
        """Convert a flat entry into a session named after its path."""
        return Session(
            name=self.path,
            path=self.path,
            tmuxinator=self.tmuxinator,
            source=SessionSource.CONFIG,
        )

    def worktree_session(self, worktree_path: str) -> Session:
        """Build the session for one worktree discovered under this root."""
        return Session(
            name=worktree_path,
            path=worktree_path,
            kind=SessionKind.WORKTREE_ROOT,
            tmuxinator=self.tmuxinator,
            source=SessionSource.WORKTREE,
        )


class SessionCatalog(BaseModel):
    """Ordered, deduplicated sessions for a single invocation."""

    sessions: list[Session] = Field(default_factory=list)

    def __iter__(self) -> Iterator[Session]:  # type: ignore[override]
        return iter(self.sessions)

    def __len__(self) -> int:
        return len(self.sessions)

    def names(self) -> list[str]:
        return [s.name for s in self.sessions]

    def get(self, name: str) -> Session | None:
        """Find a session by its exact (normalized) name."""
        for session in self.sessions:
            if session.name == name:
                return session
        return None
