"""Exception types raised by gitstu.

The CLI catches ``GitstuError`` and turns it into a message on stderr and a
non-zero exit code; anything else is a bug.
"""

from pathlib import Path


class GitstuError(RuntimeError):
    """Base class for all gitstu specific errors."""


class NoGitRoot(GitstuError):
    """Raised when the working directory is not inside a git repository."""

    def __init__(self, detail: str = '') -> None:
        msg = 'Unable to locate git root! Ensure you are within a git repository and try again'
        if detail:
            msg = f'{msg} ({detail})'
        super().__init__(msg)


class ConfigNotFound(GitstuError):
    """Raised when the registry file does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f'registry file not found: {path} (run `gitstu init` first)')


class ConfigAlreadyExists(GitstuError):
    """Raised by ``init`` when a registry file is already present."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f'registry file already exists: {path}')


class ConfigMalformed(GitstuError):
    """Raised when the registry file cannot be parsed against the schema."""


class ConfigWriteError(GitstuError):
    """Raised when the registry file cannot be written."""


class SubtreeNotRegistered(GitstuError):
    """Raised when a named subtree is missing and the command cannot create it."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f'Subtree {name!r} not found in .gitstu\nTo define a new subtree: gitstu add {name}',
        )


class ExternalToolUnavailable(GitstuError):
    """Raised when the external command cannot be started at all."""


class ExternalToolFailed(GitstuError):
    """Raised when the external command exits with a non-zero status."""

    def __init__(self, command: str, exit_code: int) -> None:
        self.command = command
        self.exit_code = exit_code
        super().__init__(f'command failed with exit code {exit_code}: {command}')


class PromptFailed(GitstuError):
    """Raised when interactive input cannot be read."""


class InvalidInvocation(GitstuError):
    """Raised when command line arguments conflict or are missing."""
