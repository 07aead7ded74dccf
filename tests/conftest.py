"""Shared fixtures: a fake libtmux server and an aggregator wired to fakes."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from mingle.aggregator import SessionAggregator
from mingle.models import ConfigSession, Session, SessionSource
from mingle.tmux_manager import TmuxManager


class FakeServer:
    """Stands in for libtmux.Server, recording every tmux command."""

    def __init__(self, sessions: list[str] | None = None, running: bool = True):
        self.sessions = list(sessions or [])
        self.running = running
        self.calls: list[tuple[str, ...]] = []
        self.fail_commands: set[str] = set()

    def cmd(self, cmd: str, *args: str):
        self.calls.append((cmd, *args))
        if cmd in self.fail_commands:
            return SimpleNamespace(stdout=[], stderr=[f"{cmd} failed"], returncode=1)
        if cmd == "list-sessions":
            if not self.running:
                return SimpleNamespace(stdout=[], stderr=["no server running on /tmp/tmux-1000/default"], returncode=1)
            return SimpleNamespace(stdout=list(self.sessions), stderr=[], returncode=0)
        if cmd == "new-session":
            self.sessions.append(args[args.index("-s") + 1])
            self.running = True
        return SimpleNamespace(stdout=[], stderr=[], returncode=0)

    def commands(self) -> list[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def server() -> FakeServer:
    return FakeServer()


@pytest.fixture
def tmux(server: FakeServer) -> TmuxManager:
    return TmuxManager(server=server)


@pytest.fixture
def config_entries() -> list[ConfigSession]:
    return []


@pytest.fixture
def zoxide_dirs() -> list[str]:
    return []


@pytest.fixture
def worktrees() -> dict[str, list[str]]:
    return {}


@pytest.fixture
def aggregator(tmux, config_entries, zoxide_dirs, worktrees) -> SessionAggregator:
    """Aggregator whose sources are the (mutable) fixture lists above."""
    return SessionAggregator(
        config_loader=lambda: list(config_entries),
        tmux=tmux,
        zoxide_lister=lambda: [Session(name=d, path=d, source=SessionSource.ZOXIDE) for d in zoxide_dirs],
        worktree_lister=lambda root: list(worktrees.get(root, [])),
    )
