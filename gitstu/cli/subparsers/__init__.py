"""Subparser registrations for the gitstu CLI."""

import argparse

from . import add, init, pull, push, refresh


def register_all(subparsers: argparse._SubParsersAction) -> None:
    """Register all gitstu subcommands."""
    init.register(subparsers)
    add.register(subparsers)
    pull.register(subparsers)
    push.register(subparsers)
    refresh.register(subparsers)
