"""Command runners behind the gitstu CLI.

Each runner locates the repository, loads the registry, does its work and
turns any ``GitstuError`` into a message and an exit code.
"""

import sys
from pathlib import Path

from gitstu.errors import GitstuError
from gitstu.git import CommandRunner, repository_root, run_external
from gitstu.logging import configure_logging, get_logger
from gitstu.models import Invocation, SubtreeMode, TargetSpec
from gitstu.persistence import CONFIRM_GATES_WRITE
from gitstu.prompts import Prompter, RichPrompter
from gitstu.registry import init_registry, load_registry, registry_path, render_registry, save_registry
from gitstu.workflow import refresh_remotes, run_sync

logger = get_logger(__name__)


def handle_cli_exception(exc: GitstuError) -> None:
    """Report a gitstu failure to the user."""
    logger.error('command_failed', error=str(exc), _verbose_error_type=type(exc).__name__)
    sys.stderr.write(f'Error: {exc}\n')


def run_sync_command(
    invocation: Invocation,
    *,
    prompter: Prompter | None = None,
    runner: CommandRunner | None = None,
    cwd: Path | None = None,
    confirm_gates_write: bool = CONFIRM_GATES_WRITE,
) -> int:
    """Run add, pull or push and save the registry once at the end."""
    configure_logging(verbose=invocation.verbose > 0)
    logger.debug('starting_gitstu', _verbose_invocation=invocation.model_dump(exclude_none=True))

    try:
        root = repository_root(cwd)
        path = registry_path(root)
        registry = load_registry(path)
        loaded = render_registry(registry)

        reconciled = run_sync(
            registry,
            invocation,
            prompter or RichPrompter(),
            cwd=root,
            runner=runner or run_external,
            confirm_gates_write=confirm_gates_write,
        )

        if invocation.dry_run:
            logger.info('dry_run_registry_not_saved', path=str(path))
        elif render_registry(reconciled) == loaded:
            logger.debug('registry_unchanged', path=str(path))
        else:
            save_registry(path, reconciled)
            logger.info('registry_updated', path=str(path))
    except GitstuError as exc:
        handle_cli_exception(exc)
        return 1
    return 0


def run_init_command(
    *,
    mode: SubtreeMode | None = None,
    squash: bool = False,
    verbose: int = 0,
    cwd: Path | None = None,
) -> int:
    """Create an empty ``.gitstu`` at the repository root."""
    configure_logging(verbose=verbose > 0)
    try:
        root = repository_root(cwd)
        init_registry(registry_path(root), mode=mode, squash=squash)
    except GitstuError as exc:
        handle_cli_exception(exc)
        return 1
    return 0


def run_refresh_command(
    target: TargetSpec,
    *,
    prompter: Prompter | None = None,
    runner: CommandRunner | None = None,
    verbose: int = 0,
    cwd: Path | None = None,
) -> int:
    """Fetch the remotes of the selected subtrees."""
    configure_logging(verbose=verbose > 0)
    try:
        root = repository_root(cwd)
        registry = load_registry(registry_path(root))
        fetched = refresh_remotes(
            registry,
            target,
            prompter or RichPrompter(),
            cwd=root,
            runner=runner or run_external,
        )
        logger.info('refresh_complete', remotes=fetched)
    except GitstuError as exc:
        handle_cli_exception(exc)
        return 1
    return 0
