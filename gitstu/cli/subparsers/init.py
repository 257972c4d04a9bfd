"""gitstu init subcommand."""

import argparse

from gitstu.main import run_init_command

from . import _shared


def _handle(namespace: argparse.Namespace) -> int:
    return run_init_command(
        mode=namespace.mode,
        squash=namespace.squash,
        verbose=_shared.resolve_verbose(namespace),
    )


def register(subparsers: argparse._SubParsersAction) -> None:
    """Register the init subcommand."""
    parser = subparsers.add_parser(
        'init',
        help='Creates a .gitstu for this repository',
    )
    parser.add_argument(
        '--mode',
        choices=['subtree', 'custom'],
        help='Integration mode for every subtree (default: subtree)',
    )
    parser.add_argument(
        '-s',
        '--squash',
        action='store_true',
        help='Squash commits by default',
    )
    _shared.add_verbosity_argument(parser)
    parser.set_defaults(handler=_handle, command_parser=parser)
