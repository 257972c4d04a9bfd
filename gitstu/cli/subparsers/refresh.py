"""gitstu refresh subcommand."""

import argparse

from gitstu.main import run_refresh_command
from gitstu.models import AllTargets, BranchFilteredTargets, NamedTarget, TargetSpec

from . import _shared


def _build_target(namespace: argparse.Namespace) -> TargetSpec:
    _shared.validate_selection(namespace)
    if namespace.with_branch:
        return BranchFilteredTargets(branch=namespace.with_branch)
    if namespace.subtree:
        return NamedTarget(name=namespace.subtree)
    return AllTargets()


def _handle(namespace: argparse.Namespace) -> int:
    return run_refresh_command(
        _build_target(namespace),
        verbose=_shared.resolve_verbose(namespace),
    )


def register(subparsers: argparse._SubParsersAction) -> None:
    """Register the refresh subcommand."""
    parser = subparsers.add_parser(
        'refresh',
        help='Retrieves remote branch information',
    )
    parser.add_argument(
        'subtree',
        nargs='?',
        metavar='SUBTREE',
        help='Only fetch the remote of this subtree (default: all)',
    )
    _shared.apply_selection_arguments(parser)
    _shared.add_verbosity_argument(parser)
    parser.set_defaults(handler=_handle, command_parser=parser)
