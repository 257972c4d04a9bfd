"""The add/pull/push pipeline: select, resolve, dispatch, persist, reconcile.

The registry is threaded through explicitly and only mutated in memory;
loading and saving it is the caller's job (see ``gitstu.main``).
"""

from pathlib import Path

from gitstu.commands import build_command, fetch_command, format_command
from gitstu.git import CommandRunner, execute, run_external
from gitstu.logging import get_logger
from gitstu.models import Invocation, Registry, SubtreeEntry, TargetSpec, describe_remote, remote_name
from gitstu.persistence import CONFIRM_GATES_WRITE, maybe_persist
from gitstu.prompts import Prompter
from gitstu.registry import merge_entries
from gitstu.resolver import resolve
from gitstu.selection import select_entries

logger = get_logger(__name__)

_ACTIONS = {
    'add': 'adding_subtree',
    'pull': 'pulling_subtree',
    'push': 'pushing_subtree',
}


def sync_entry(
    entry: SubtreeEntry,
    invocation: Invocation,
    registry: Registry,
    prompter: Prompter,
    *,
    cwd: Path | None = None,
    runner: CommandRunner = run_external,
    confirm_gates_write: bool = CONFIRM_GATES_WRITE,
) -> list[str]:
    """Resolve, run and persist a single entry. Returns the command line used."""
    target = resolve(
        entry,
        prompter,
        branch_override=invocation.branch_override,
        remote_override=invocation.remote,
    )
    squash = invocation.squash or registry.default_squash
    command = build_command(
        registry.effective_mode,
        invocation.command,
        entry,
        target,
        squash=squash,
    )

    logger.info(
        _ACTIONS[invocation.command],
        name=entry.name,
        prefix=entry.prefix,
        branch=target.branch,
        remote=describe_remote(target.remote),
        _verbose_command=format_command(command),
        _verbose_mode=registry.effective_mode,
    )

    if invocation.dry_run:
        logger.info('dry_run_command', command=format_command(command))
        return command

    execute(command, cwd=cwd, runner=runner)

    if invocation.persists_results:
        maybe_persist(entry, target, prompter, confirm_gates_write=confirm_gates_write)
    else:
        logger.debug('persistence_skipped', name=entry.name)
    return command


def run_sync(
    registry: Registry,
    invocation: Invocation,
    prompter: Prompter,
    *,
    cwd: Path | None = None,
    runner: CommandRunner = run_external,
    confirm_gates_write: bool = CONFIRM_GATES_WRITE,
) -> Registry:
    """Run ``invocation`` against ``registry`` and return the reconciled registry.

    Entries are processed one at a time. The first failing entry aborts the
    batch by propagating its error; nothing is reconciled in that case.
    """
    entries = select_entries(
        registry,
        invocation.target,
        invocation.command,
        prompter,
        prefix=invocation.prefix,
        branch=invocation.branch_override,
        remote=invocation.remote,
    )
    if not entries:
        logger.warning('no_subtrees_selected', command=invocation.command)

    for entry in entries:
        sync_entry(
            entry,
            invocation,
            registry,
            prompter,
            cwd=cwd,
            runner=runner,
            confirm_gates_write=confirm_gates_write,
        )

    subtrees = merge_entries(registry.subtrees, entries)
    return registry.model_copy(update={'subtrees': subtrees})


def refresh_remotes(
    registry: Registry,
    target: TargetSpec,
    prompter: Prompter,
    *,
    cwd: Path | None = None,
    runner: CommandRunner = run_external,
) -> list[str]:
    """Fetch each distinct remote used by the selected entries once.

    Entries without a remote are skipped. Returns the fetched remote names.
    """
    entries = select_entries(registry, target, 'pull', prompter)
    fetched: list[str] = []
    for entry in entries:
        if entry.remote is None:
            logger.warning('subtree_has_no_remote', name=entry.name)
            continue
        name = remote_name(entry.remote)
        if name in fetched:
            continue
        logger.info('fetching_remote', remote=name, name=entry.name)
        execute(fetch_command(name), cwd=cwd, runner=runner)
        fetched.append(name)
    return fetched
