"""Choose the registry entries an invocation operates on."""

from pydantic import ValidationError

from gitstu.errors import InvalidInvocation, SubtreeNotRegistered
from gitstu.logging import get_logger
from gitstu.models import (
    DEFAULT_BRANCH,
    AllTargets,
    BranchFilteredTargets,
    NamedTarget,
    Registry,
    SubtreeEntry,
    SyncCommand,
    TargetSpec,
)
from gitstu.prompts import Prompter
from gitstu.resolver import prompt_for_remote

logger = get_logger(__name__)


def define_entry(
    name: str,
    prompter: Prompter,
    *,
    prefix: str | None = None,
    branch: str | None = None,
    remote: str | None = None,
) -> SubtreeEntry:
    """Build a new entry for ``name``, prompting for anything not overridden."""
    if not name.strip():
        msg = 'a subtree name cannot be blank'
        raise InvalidInvocation(msg)
    try:
        return SubtreeEntry(
            name=name,
            prefix=prefix or prompter.prompt('prefix', default=name),
            branch=branch or prompter.prompt('branch', default=DEFAULT_BRANCH),
            remote=remote or prompt_for_remote(prompter, name),
        )
    except ValidationError as exc:
        msg = f'invalid subtree {name!r}: {exc}'
        raise InvalidInvocation(msg) from exc


def select_entries(
    registry: Registry,
    target: TargetSpec,
    command: SyncCommand,
    prompter: Prompter,
    *,
    prefix: str | None = None,
    branch: str | None = None,
    remote: str | None = None,
) -> list[SubtreeEntry]:
    """Return copies of the entries selected by ``target``.

    An unknown name under ``add`` defines a new entry which is appended to
    ``registry.subtrees`` straight away; under any other command it raises
    ``SubtreeNotRegistered``.
    """
    if isinstance(target, AllTargets):
        return [entry.model_copy() for entry in registry.subtrees]

    if isinstance(target, BranchFilteredTargets):
        selected = [entry.model_copy() for entry in registry.subtrees if entry.branch == target.branch]
        logger.debug('filtered_by_branch', branch=target.branch, matched=[entry.name for entry in selected])
        return selected

    if not isinstance(target, NamedTarget):
        msg = f'unsupported target specifier: {target!r}'
        raise TypeError(msg)

    existing = registry.find(target.name)
    if existing is not None:
        return [existing.model_copy()]

    if command != 'add':
        raise SubtreeNotRegistered(target.name)

    logger.info('defining_new_subtree', name=target.name)
    entry = define_entry(target.name, prompter, prefix=prefix, branch=branch, remote=remote)
    registry.subtrees.append(entry)
    return [entry.model_copy()]
