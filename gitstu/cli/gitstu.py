"""gitstu CLI: add, pull and push git subtrees by name."""

import argparse
import sys

from gitstu import __version__
from gitstu.cli.subparsers import register_all
from gitstu.errors import InvalidInvocation


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level argument parser."""
    parser = argparse.ArgumentParser(
        prog='gitstu',
        description='Helper utility for working with git subtrees',
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    subparsers = parser.add_subparsers(dest='command', required=True)
    register_all(subparsers)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the gitstu CLI."""
    parser = build_parser()
    namespace = parser.parse_args(argv)

    handler = getattr(namespace, 'handler', None)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(namespace)
    except InvalidInvocation as exc:
        command_parser = getattr(namespace, 'command_parser', parser)
        command_parser.error(str(exc))
    return 2


if __name__ == '__main__':
    sys.exit(main())
