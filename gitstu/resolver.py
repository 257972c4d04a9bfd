"""Resolve the effective branch and remote for a subtree entry."""

from gitstu.logging import get_logger
from gitstu.models import DEFAULT_BRANCH, GitRemote, RemoteRef, ResolvedTarget, SubtreeEntry
from gitstu.prompts import Prompter

logger = get_logger(__name__)


def prompt_for_remote(prompter: Prompter, name: str) -> GitRemote:
    """Ask for a remote url and an alias that defaults to the subtree name."""
    url = prompter.prompt('Git remote url')
    alias = prompter.prompt('Git remote alias', default=name)
    return GitRemote(url=url, alias=alias)


def resolve_branch(
    entry: SubtreeEntry,
    prompter: Prompter,
    branch_override: str | None = None,
) -> str:
    """Pick the branch: override, then the persisted branch, then a prompt."""
    if branch_override:
        return branch_override
    if entry.branch:
        return entry.branch
    return prompter.prompt('Branch name', default=DEFAULT_BRANCH)


def resolve_remote(
    entry: SubtreeEntry,
    prompter: Prompter,
    remote_override: str | None = None,
) -> RemoteRef:
    """Pick the remote: override, then the persisted remote, then prompts."""
    if remote_override:
        return remote_override
    if entry.remote is not None:
        return entry.remote
    return prompt_for_remote(prompter, entry.name)


def resolve(
    entry: SubtreeEntry,
    prompter: Prompter,
    *,
    branch_override: str | None = None,
    remote_override: str | None = None,
) -> ResolvedTarget:
    """Compute the (branch, remote) pair to sync ``entry`` with.

    May block on ``prompter``; a ``PromptFailed`` here is fatal since no
    target can be determined without an answer.
    """
    target = ResolvedTarget(
        branch=resolve_branch(entry, prompter, branch_override),
        remote=resolve_remote(entry, prompter, remote_override),
    )
    logger.debug(
        'resolved_target',
        name=entry.name,
        branch=target.branch,
        remote=target.remote_name,
        _verbose_entry=entry.model_dump(exclude_none=True),
    )
    return target
