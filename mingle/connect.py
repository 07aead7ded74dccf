"""Create-or-attach logic for connecting to a session."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import NoReturn, Union

from mingle.aggregator import SessionAggregator
from mingle.exceptions import SessionNotFoundError, TmuxError
from mingle.models import Session
from mingle.tmux_manager import TmuxManager, find_tmux_binary

logger = logging.getLogger("mingle.connect")


class ConnectState(str, Enum):
    """Connect state enumeration."""

    RESOLVED = "resolved"
    EXISTENCE_CHECKED = "existence_checked"
    ENSURED = "ensured"
    ATTACHED = "attached"


@dataclass
class SwitchClient:
    """The current tmux client was switched to the session."""

    session_name: str


@dataclass
class ExecReplace:
    """The process should be replaced by `command` (see exec_replace)."""

    command: str
    args: list[str]
    env: dict[str, str] = field(default_factory=dict)


ConnectOutcome = Union[SwitchClient, ExecReplace]


class SessionConnector:
    """
    Connects to a catalog session, creating it first when needed.

    Steps: resolve the name in the catalog, check whether tmux already runs
    it, create it if not, then switch the current client (inside tmux) or
    hand back an ExecReplace for `tmux attach-session`.
    """

    def __init__(self, aggregator: SessionAggregator, tmux: TmuxManager | None = None):
        self.aggregator = aggregator
        self.tmux = tmux if tmux is not None else aggregator.tmux
        self.state: ConnectState | None = None

    def resolve(self, name: str) -> Session:
        """Find the session in a freshly built catalog."""
        session = self.aggregator.get_sessions().get(name)
        if session is None:
            raise SessionNotFoundError(name)
        self.state = ConnectState.RESOLVED
        return session

    def ensure(self, session: Session) -> bool:
        """
        Make sure tmux runs the session.

        Returns:
            True if the session had to be created.
        """
        # Query tmux again; the catalog may already be stale
        exists = self.tmux.session_exists(session.name)
        self.state = ConnectState.EXISTENCE_CHECKED
        if not exists:
            self.tmux.create_session(session)
        self.state = ConnectState.ENSURED
        return not exists

    def attach(self, session: Session) -> ConnectOutcome:
        if self.tmux.is_inside_tmux():
            self.tmux.switch_client(session.name)
            outcome: ConnectOutcome = SwitchClient(session_name=session.name)
        else:
            outcome = ExecReplace(
                command=find_tmux_binary(),
                args=self.tmux.attach_args(session.name),
                env=dict(os.environ),
            )
        self.state = ConnectState.ATTACHED
        return outcome

    def connect(self, name: str) -> ConnectOutcome:
        """
        Connect to the named session.

        Raises:
            SessionNotFoundError: If no source provides the name.
            TmuxError: If creating, switching or locating tmux fails.
        """
        session = self.resolve(name)
        created = self.ensure(session)
        if created:
            logger.info(f"Created session {session.name}")
        return self.attach(session)


def exec_replace(outcome: ExecReplace) -> NoReturn:
    """Replace the current process with the attach command. Never returns."""
    logger.debug(f"Exec {outcome.command} {' '.join(outcome.args[1:])}")
    try:
        os.execve(outcome.command, outcome.args, outcome.env)
    except OSError as e:
        raise TmuxError(f"error executing tmux: {e}") from e
