"""gitstu add subcommand."""

import argparse

from gitstu.main import run_sync_command

from . import _shared


def _handle(namespace: argparse.Namespace) -> int:
    invocation = _shared.build_invocation(namespace, 'add')
    return run_sync_command(invocation)


def register(subparsers: argparse._SubParsersAction) -> None:
    """Register the add subcommand."""
    parent = _shared.build_common_parent()
    parser = subparsers.add_parser(
        'add',
        parents=[parent],
        help='Define a new subtree configuration and add it to the repository',
    )
    _shared.apply_subtree_arguments(parser, include_to_branch=False)
    parser.set_defaults(handler=_handle, command_parser=parser)
