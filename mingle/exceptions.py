"""Exceptions raised by mingle."""


class MingleError(Exception):
    """Base exception for mingle errors."""

    pass


class ConfigError(MingleError):
    """Config file is malformed or its paths cannot be expanded."""

    pass


class SessionNotFoundError(MingleError):
    """Requested session is not in the catalog."""

    def __init__(self, name: str):
        super().__init__(f"session {name} not found")
        self.name = name


class TmuxError(MingleError):
    """A mutating tmux command failed or tmux is missing."""

    pass


class SessionCreationError(TmuxError):
    """Session could not be created."""

    pass
