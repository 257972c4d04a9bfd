"""Interactive input used while resolving and persisting subtree settings."""

from typing import Protocol

from rich.console import Console
from rich.prompt import Confirm, Prompt

from gitstu.errors import PromptFailed


class Prompter(Protocol):
    """Blocking line and yes/no input.

    Both methods raise ``PromptFailed`` when no answer can be read.
    """

    def prompt(self, label: str, default: str | None = None) -> str: ...

    def confirm(self, label: str) -> bool: ...


class RichPrompter:
    """Prompter backed by ``rich.prompt``."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(stderr=True)

    def prompt(self, label: str, default: str | None = None) -> str:
        while True:
            try:
                if default is None:
                    answer = Prompt.ask(label, console=self.console)
                else:
                    answer = Prompt.ask(label, default=default, console=self.console)
            except (EOFError, KeyboardInterrupt) as exc:
                msg = f'unable to read {label!r} from input'
                raise PromptFailed(msg) from exc
            if answer and answer.strip():
                return answer.strip()

    def confirm(self, label: str) -> bool:
        try:
            return Confirm.ask(label, default=True, console=self.console)
        except (EOFError, KeyboardInterrupt) as exc:
            msg = f'unable to read confirmation for {label!r}'
            raise PromptFailed(msg) from exc
