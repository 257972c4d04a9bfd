"""gitstu push subcommand."""

import argparse

from gitstu.main import run_sync_command

from . import _shared


def _handle(namespace: argparse.Namespace) -> int:
    invocation = _shared.build_invocation(namespace, 'push')
    return run_sync_command(invocation)


def register(subparsers: argparse._SubParsersAction) -> None:
    """Register the push subcommand."""
    parent = _shared.build_common_parent()
    parser = subparsers.add_parser(
        'push',
        parents=[parent],
        help='Pushes a subtree to a remote',
    )
    _shared.apply_subtree_arguments(parser, include_to_branch=True)
    parser.set_defaults(handler=_handle, command_parser=parser)
