"""Fold resolved branch and remote values back into a subtree entry."""

from gitstu.errors import PromptFailed
from gitstu.logging import get_logger
from gitstu.models import ResolvedTarget, SubtreeEntry, describe_remote
from gitstu.prompts import Prompter

logger = get_logger(__name__)

# When False the confirmation is informational: a detected change is written
# even if the user declines or the prompt fails. Set True to let the answer
# gate the write.
CONFIRM_GATES_WRITE = False


def _ask(prompter: Prompter, label: str) -> bool | None:
    try:
        return prompter.confirm(label)
    except PromptFailed as exc:
        logger.warning('confirmation_unavailable', question=label, error=str(exc))
        return None


def _should_write(answer: bool | None, *, confirm_gates_write: bool) -> bool:
    if not confirm_gates_write:
        return True
    return answer is True


def maybe_persist(
    entry: SubtreeEntry,
    resolved: ResolvedTarget,
    prompter: Prompter,
    *,
    confirm_gates_write: bool = CONFIRM_GATES_WRITE,
) -> bool:
    """Offer to store ``resolved`` on ``entry`` when it differs from what is stored.

    Branch and remote are checked independently. Returns True when ``entry``
    was modified.
    """
    changed = False

    if entry.branch is None or entry.branch != resolved.branch:
        answer = _ask(prompter, f'Do you want to save branch {resolved.branch!r} to .gitstu?')
        if _should_write(answer, confirm_gates_write=confirm_gates_write):
            logger.debug('persisting_branch', name=entry.name, branch=resolved.branch, confirmed=answer)
            entry.branch = resolved.branch
            changed = True
        else:
            logger.info('branch_not_persisted', name=entry.name, branch=resolved.branch)

    if entry.remote is None or entry.remote != resolved.remote:
        remote_label = describe_remote(resolved.remote)
        answer = _ask(prompter, f'Do you want to save remote {remote_label} to .gitstu?')
        if _should_write(answer, confirm_gates_write=confirm_gates_write):
            logger.debug('persisting_remote', name=entry.name, remote=remote_label, confirmed=answer)
            entry.remote = resolved.remote
            changed = True
        else:
            logger.info('remote_not_persisted', name=entry.name, remote=remote_label)

    return changed
