"""Construct the git command lines for each integration mode.

Nothing here executes anything; see ``gitstu.git`` for that.
"""

import shlex

from gitstu.models import ResolvedTarget, SubtreeEntry, SubtreeMode, SyncCommand


def _tree_prefix(prefix: str) -> str:
    # read-tree and the subtree merge option want a directory-style prefix
    return prefix.rstrip('/') + '/'


def format_command(command: list[str]) -> str:
    """Render ``command`` as a copy-pasteable shell line."""
    return shlex.join(command)


class SubtreeStrategy:
    """Standard mode: ``git subtree``, keeping upstream history."""

    mode: SubtreeMode = 'subtree'

    def add(self, entry: SubtreeEntry, target: ResolvedTarget, *, squash: bool = False) -> list[str]:
        command = ['git', 'subtree', 'add', f'--prefix={entry.prefix}', target.remote_name, target.branch]
        if squash:
            command.append('--squash')
        return command

    def pull(self, entry: SubtreeEntry, target: ResolvedTarget, *, squash: bool = False) -> list[str]:
        command = ['git', 'subtree', 'pull', f'--prefix={entry.prefix}', target.remote_name, target.branch]
        if squash:
            command.append('--squash')
        return command

    def push(self, entry: SubtreeEntry, target: ResolvedTarget) -> list[str]:
        return ['git', 'subtree', 'push', f'--prefix={entry.prefix}', target.remote_name, target.branch]

    def build(
        self,
        command: SyncCommand,
        entry: SubtreeEntry,
        target: ResolvedTarget,
        *,
        squash: bool = False,
    ) -> list[str]:
        """Dispatch ``command`` to the matching builder."""
        if command == 'add':
            return self.add(entry, target, squash=squash)
        if command == 'pull':
            return self.pull(entry, target, squash=squash)
        if command == 'push':
            return self.push(entry, target)
        msg = f'unsupported command: {command}'
        raise ValueError(msg)


class CustomMergeStrategy(SubtreeStrategy):
    """Custom mode: graft trees without importing upstream history.

    ``add`` reads the remote branch's current tree into the prefix, ``pull``
    merges scoped to the prefix preferring the incoming side. Both refer to
    ``<remote>/<branch>``, so the remote has to be fetched first (``refresh``).
    """

    mode: SubtreeMode = 'custom'

    def add(self, entry: SubtreeEntry, target: ResolvedTarget, *, squash: bool = False) -> list[str]:  # noqa: ARG002
        # No squash flag: a grafted tree has no history to squash.
        return ['git', 'read-tree', f'--prefix={_tree_prefix(entry.prefix)}', f'{target.remote_name}/{target.branch}']

    def pull(self, entry: SubtreeEntry, target: ResolvedTarget, *, squash: bool = False) -> list[str]:
        command = [
            'git',
            'merge',
            '-X',
            f'subtree={_tree_prefix(entry.prefix)}',
            '-X',
            'theirs',
            f'{target.remote_name}/{target.branch}',
        ]
        if squash:
            command.append('--squash')
        return command


STRATEGIES: dict[SubtreeMode, SubtreeStrategy] = {
    'subtree': SubtreeStrategy(),
    'custom': CustomMergeStrategy(),
}


def strategy_for(mode: SubtreeMode) -> SubtreeStrategy:
    """Return the command builder for ``mode``."""
    return STRATEGIES[mode]


def build_command(
    mode: SubtreeMode,
    command: SyncCommand,
    entry: SubtreeEntry,
    target: ResolvedTarget,
    *,
    squash: bool = False,
) -> list[str]:
    """Build the git command line for one entry under ``mode``."""
    return strategy_for(mode).build(command, entry, target, squash=squash)


def fetch_command(remote: str) -> list[str]:
    return ['git', 'fetch', remote]
