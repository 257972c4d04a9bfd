from dataclasses import dataclass, field
from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from gitstu.errors import PromptFailed
from gitstu.registry import DEFAULT_REGISTRY_FILENAME


@dataclass
class ScriptedPrompter:
    """Prompter that replays canned answers and records every question."""

    answers: list[str] = field(default_factory=list)
    confirmations: list[bool | None] = field(default_factory=list)
    prompts: list[tuple[str, str | None]] = field(default_factory=list)
    confirms: list[str] = field(default_factory=list)

    def prompt(self, label: str, default: str | None = None) -> str:
        self.prompts.append((label, default))
        if not self.answers:
            msg = f'no scripted answer for {label!r}'
            raise PromptFailed(msg)
        answer = self.answers.pop(0)
        # An empty scripted answer accepts the default
        return answer or (default or '')

    def confirm(self, label: str) -> bool:
        self.confirms.append(label)
        if not self.confirmations:
            return True
        answer = self.confirmations.pop(0)
        if answer is None:
            msg = f'no input for {label!r}'
            raise PromptFailed(msg)
        return answer


@dataclass
class RecordingRunner:
    """Command runner that records command lines instead of spawning git."""

    exit_codes: dict[int, int] = field(default_factory=dict)
    commands: list[list[str]] = field(default_factory=list)
    cwds: list[Path | None] = field(default_factory=list)

    def __call__(self, command: list[str], *, cwd: Path | None = None) -> int:
        self.commands.append(command)
        self.cwds.append(cwd)
        return self.exit_codes.get(len(self.commands) - 1, 0)

    @property
    def lines(self) -> list[str]:
        return [' '.join(command) for command in self.commands]


@pytest.fixture
def prompter() -> ScriptedPrompter:
    return ScriptedPrompter()


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def repo_root(tmp_path: Path, mocker: MockerFixture) -> Path:
    """A fake repository root; ``git rev-parse`` is patched to return it."""
    root = tmp_path / 'repo'
    root.mkdir()
    mocker.patch('gitstu.main.repository_root', return_value=root)
    return root


@pytest.fixture
def registry_file(repo_root: Path) -> Path:
    return repo_root / DEFAULT_REGISTRY_FILENAME
