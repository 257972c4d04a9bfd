"""Arguments and helpers shared by the gitstu subcommands."""

import argparse

from gitstu.errors import InvalidInvocation
from gitstu.models import Invocation, SyncCommand


def build_common_parent() -> argparse.ArgumentParser:
    """Options accepted by every subcommand that works on subtrees."""
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        '-r',
        '--remote',
        help='Sets the remote to use',
    )
    parent.add_argument(
        '-p',
        '--prefix',
        help='Sets the prefix to use',
    )
    parent.add_argument(
        '-b',
        '--branch',
        help='Sets the branch to use',
    )
    parent.add_argument(
        '-s',
        '--squash',
        action='store_true',
        help='Squashes commits',
    )
    apply_selection_arguments(parent)
    add_verbosity_argument(parent)
    return parent


def add_verbosity_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '-v',
        '--verbose',
        action='count',
        default=0,
        help='Increase output verbosity',
    )


def apply_selection_arguments(parser: argparse.ArgumentParser) -> None:
    """Add --all and --with-branch."""
    parser.add_argument(
        '-a',
        '--all',
        dest='all_subtrees',
        action='store_true',
        help='Runs command against all subtrees',
    )
    parser.add_argument(
        '-w',
        '--with-branch',
        help='Only run against subtrees currently on this branch (requires --all)',
    )


def apply_subtree_arguments(
    parser: argparse.ArgumentParser,
    *,
    include_to_branch: bool,
) -> None:
    """Add the SUBTREE and BRANCH positionals plus sync-only options."""
    parser.add_argument(
        'subtree',
        nargs='?',
        metavar='SUBTREE',
        help='Sets the subtree to use',
    )
    parser.add_argument(
        'positional_branch',
        nargs='?',
        metavar='BRANCH',
        help='Sets which branch to use',
    )
    if include_to_branch:
        parser.add_argument(
            '-t',
            '--to-branch',
            help='Sets the branch to push to',
        )
    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Show the git commands without running them',
    )


def resolve_verbose(namespace: argparse.Namespace) -> int:
    return getattr(namespace, 'verbose', 0) or 0


def validate_selection(namespace: argparse.Namespace) -> None:
    """Reject conflicting or missing target arguments."""
    subtree = getattr(namespace, 'subtree', None)
    all_subtrees = getattr(namespace, 'all_subtrees', False)
    if subtree is not None and not subtree.strip():
        msg = 'argument SUBTREE: cannot be blank'
        raise InvalidInvocation(msg)
    if subtree and all_subtrees:
        msg = 'argument --all: not allowed with a SUBTREE name'
        raise InvalidInvocation(msg)
    if namespace.with_branch and not all_subtrees:
        msg = 'argument --with-branch: requires --all'
        raise InvalidInvocation(msg)


def validate_sync_arguments(namespace: argparse.Namespace) -> None:
    """Validate add/pull/push arguments before anything touches the registry."""
    validate_selection(namespace)
    if not namespace.subtree and not namespace.all_subtrees:
        msg = 'a SUBTREE name is required unless --all is given'
        raise InvalidInvocation(msg)
    if namespace.positional_branch and (namespace.branch or getattr(namespace, 'to_branch', None)):
        msg = 'argument BRANCH: not allowed with --branch or --to-branch'
        raise InvalidInvocation(msg)


def build_invocation(namespace: argparse.Namespace, command: SyncCommand) -> Invocation:
    validate_sync_arguments(namespace)
    return Invocation(
        command=command,
        subtree=namespace.subtree,
        all_subtrees=namespace.all_subtrees,
        with_branch=namespace.with_branch,
        positional_branch=namespace.positional_branch,
        to_branch=getattr(namespace, 'to_branch', None),
        branch=namespace.branch,
        remote=namespace.remote,
        prefix=namespace.prefix,
        squash=namespace.squash,
        dry_run=namespace.dry_run,
        verbose=resolve_verbose(namespace),
    )
