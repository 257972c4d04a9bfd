"""Process boundary: everything that actually runs git."""

import subprocess
from collections.abc import Callable
from pathlib import Path

from gitstu.commands import format_command
from gitstu.errors import ExternalToolFailed, ExternalToolUnavailable, NoGitRoot
from gitstu.logging import get_logger

logger = get_logger(__name__)

# Called as runner(command, cwd=...) and returns the exit code
CommandRunner = Callable[..., int]


def repository_root(cwd: Path | None = None) -> Path:
    """Return the top level directory of the git repository containing ``cwd``."""
    cmd = ['git', 'rev-parse', '--show-toplevel']
    logger.debug('locating_git_root', _debug_command=format_command(cmd))
    try:
        result = subprocess.run(  # noqa: S603 - executing git
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        raise NoGitRoot(str(exc)) from exc

    if result.returncode != 0:
        raise NoGitRoot(result.stderr.strip())
    return Path(result.stdout.strip())


def run_external(command: list[str], *, cwd: Path | None = None) -> int:
    """Run ``command`` to completion with inherited stdio and return its exit code.

    No timeout is applied; git's own behaviour governs how long this blocks.
    """
    logger.debug('running_command', _debug_command=format_command(command), _verbose_cwd=str(cwd))
    try:
        completed = subprocess.run(  # noqa: S603 - command lines are built by gitstu.commands
            command,
            cwd=cwd,
            check=False,
        )
    except OSError as exc:
        msg = f'unable to run {command[0]}: {exc}'
        raise ExternalToolUnavailable(msg) from exc
    return completed.returncode


def execute(command: list[str], *, cwd: Path | None = None, runner: CommandRunner = run_external) -> None:
    """Run ``command`` through ``runner`` and raise if it exits non-zero."""
    exit_code = runner(command, cwd=cwd)
    if exit_code != 0:
        logger.error('command_exited_non_zero', command=format_command(command), exit_code=exit_code)
        raise ExternalToolFailed(format_command(command), exit_code)
