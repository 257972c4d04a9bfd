import pytest
from pytest_mock import MockerFixture

from gitstu.errors import PromptFailed
from gitstu.prompts import RichPrompter


def test_prompt_passes_default(mocker: MockerFixture) -> None:
    ask = mocker.patch('gitstu.prompts.Prompt.ask', return_value=' main ')

    assert RichPrompter().prompt('Branch name', default='master') == 'main'
    assert ask.call_args.kwargs['default'] == 'master'


def test_prompt_repeats_until_answer(mocker: MockerFixture) -> None:
    ask = mocker.patch('gitstu.prompts.Prompt.ask', side_effect=['', '   ', 'https://example.com/lib.git'])

    assert RichPrompter().prompt('Git remote url') == 'https://example.com/lib.git'
    assert ask.call_count == 3


@pytest.mark.parametrize('error', [EOFError, KeyboardInterrupt])
def test_prompt_without_input(mocker: MockerFixture, error: type[BaseException]) -> None:
    mocker.patch('gitstu.prompts.Prompt.ask', side_effect=error)

    with pytest.raises(PromptFailed, match='Git remote url'):
        RichPrompter().prompt('Git remote url')


def test_confirm(mocker: MockerFixture) -> None:
    mocker.patch('gitstu.prompts.Confirm.ask', return_value=False)

    assert RichPrompter().confirm('Save?') is False


def test_confirm_without_input(mocker: MockerFixture) -> None:
    mocker.patch('gitstu.prompts.Confirm.ask', side_effect=EOFError)

    with pytest.raises(PromptFailed):
        RichPrompter().confirm('Save?')
