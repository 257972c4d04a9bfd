"""Tests for the add/pull/push pipeline with scripted input and no real git."""

import pytest

from gitstu.errors import ExternalToolFailed, SubtreeNotRegistered
from gitstu.models import AllTargets, Invocation, NamedTarget, Registry, SubtreeEntry
from gitstu.workflow import refresh_remotes, run_sync


@pytest.fixture
def registry() -> Registry:
    return Registry(
        subtrees=[
            SubtreeEntry(name='lib', prefix='vendor/lib', branch='main', remote='origin-lib'),
            SubtreeEntry(name='ui', prefix='vendor/ui', branch='release', remote='origin-ui'),
            SubtreeEntry(name='api', prefix='vendor/api', branch='release', remote='origin-api'),
        ],
    )


def test_pull_named_entry_without_changes(registry: Registry, prompter, runner) -> None:
    reconciled = run_sync(registry, Invocation(command='pull', subtree='lib'), prompter, runner=runner)

    assert runner.lines == ['git subtree pull --prefix=vendor/lib origin-lib main']
    assert prompter.confirms == []
    assert prompter.prompts == []
    assert sorted(reconciled.subtrees, key=lambda e: e.name) == sorted(registry.subtrees, key=lambda e: e.name)


def test_pull_with_branch_override_persists_new_branch(registry: Registry, prompter, runner) -> None:
    invocation = Invocation(command='pull', subtree='lib', positional_branch='develop')

    reconciled = run_sync(registry, invocation, prompter, runner=runner)

    assert runner.lines == ['git subtree pull --prefix=vendor/lib origin-lib develop']
    assert len(prompter.confirms) == 1
    assert reconciled.find('lib').branch == 'develop'
    assert registry.find('lib').branch == 'main'


def test_squash_from_registry_default(registry: Registry, prompter, runner) -> None:
    registry.squash = True

    run_sync(registry, Invocation(command='pull', subtree='lib'), prompter, runner=runner)

    assert runner.commands[0][-1] == '--squash'


def test_squash_from_command_line(registry: Registry, prompter, runner) -> None:
    run_sync(registry, Invocation(command='add', subtree='lib', squash=True), prompter, runner=runner)

    assert runner.lines == ['git subtree add --prefix=vendor/lib origin-lib main --squash']


def test_custom_mode_add_never_squashes(registry: Registry, prompter, runner) -> None:
    registry.mode = 'custom'
    registry.squash = True

    run_sync(registry, Invocation(command='add', subtree='lib'), prompter, runner=runner)

    assert runner.lines == ['git read-tree --prefix=vendor/lib/ origin-lib/main']


def test_all_filtered_by_branch(registry: Registry, prompter, runner) -> None:
    invocation = Invocation(command='pull', all_subtrees=True, with_branch='release')

    run_sync(registry, invocation, prompter, runner=runner)

    assert runner.lines == [
        'git subtree pull --prefix=vendor/ui origin-ui release',
        'git subtree pull --prefix=vendor/api origin-api release',
    ]


def test_unknown_name_under_pull_runs_nothing(registry: Registry, prompter, runner) -> None:
    with pytest.raises(SubtreeNotRegistered):
        run_sync(registry, Invocation(command='pull', subtree='nope'), prompter, runner=runner)

    assert runner.commands == []


def test_add_unknown_name_creates_exactly_one_entry(registry: Registry, prompter, runner) -> None:
    invocation = Invocation(command='add', subtree='docs', prefix='vendor/docs', remote='origin-docs')
    prompter.answers = ['']

    reconciled = run_sync(registry, invocation, prompter, runner=runner)

    assert runner.lines == ['git subtree add --prefix=vendor/docs origin-docs master']
    docs = [entry for entry in reconciled.subtrees if entry.name == 'docs']
    assert docs == [SubtreeEntry(name='docs', prefix='vendor/docs', branch='master', remote='origin-docs')]
    assert len(reconciled.subtrees) == 4
    # values were defined during selection, so nothing new to confirm
    assert prompter.confirms == []


def test_push_to_alternate_branch_skips_persistence(registry: Registry, prompter, runner) -> None:
    invocation = Invocation(command='push', subtree='lib', to_branch='feature-x')

    reconciled = run_sync(registry, invocation, prompter, runner=runner)

    assert runner.lines == ['git subtree push --prefix=vendor/lib origin-lib feature-x']
    assert prompter.confirms == []
    assert reconciled.find('lib').branch == 'main'


def test_push_all_skips_persistence(registry: Registry, prompter, runner) -> None:
    invocation = Invocation(command='push', all_subtrees=True, branch='staging')

    reconciled = run_sync(registry, invocation, prompter, runner=runner)

    assert len(runner.commands) == 3
    assert prompter.confirms == []
    assert {entry.branch for entry in reconciled.subtrees} == {'main', 'release'}


def test_push_named_persists(registry: Registry, prompter, runner) -> None:
    invocation = Invocation(command='push', subtree='lib', branch='staging')

    reconciled = run_sync(registry, invocation, prompter, runner=runner)

    assert reconciled.find('lib').branch == 'staging'


def test_batch_aborts_on_first_failure(registry: Registry, prompter, runner) -> None:
    runner.exit_codes = {0: 1}

    with pytest.raises(ExternalToolFailed) as excinfo:
        run_sync(registry, Invocation(command='pull', all_subtrees=True), prompter, runner=runner)

    assert len(runner.commands) == 1
    assert excinfo.value.exit_code == 1
    assert excinfo.value.command == 'git subtree pull --prefix=vendor/lib origin-lib main'


def test_failed_entry_is_not_persisted(registry: Registry, prompter, runner) -> None:
    runner.exit_codes = {0: 128}
    invocation = Invocation(command='pull', subtree='lib', positional_branch='develop')

    with pytest.raises(ExternalToolFailed):
        run_sync(registry, invocation, prompter, runner=runner)

    assert prompter.confirms == []
    assert registry.find('lib').branch == 'main'


def test_dry_run_runs_and_persists_nothing(registry: Registry, prompter, runner) -> None:
    invocation = Invocation(command='pull', subtree='lib', positional_branch='develop', dry_run=True)

    reconciled = run_sync(registry, invocation, prompter, runner=runner)

    assert runner.commands == []
    assert prompter.confirms == []
    assert reconciled.find('lib').branch == 'main'


def test_refresh_fetches_each_remote_once(prompter, runner) -> None:
    registry = Registry(
        subtrees=[
            SubtreeEntry(name='a', prefix='a', remote='shared'),
            SubtreeEntry(name='b', prefix='b', remote='shared'),
            SubtreeEntry(name='c', prefix='c'),
            SubtreeEntry(name='d', prefix='d', remote='other'),
        ],
    )

    fetched = refresh_remotes(registry, AllTargets(), prompter, runner=runner)

    assert fetched == ['shared', 'other']
    assert runner.lines == ['git fetch shared', 'git fetch other']


def test_refresh_named_unknown_subtree(registry: Registry, prompter, runner) -> None:
    with pytest.raises(SubtreeNotRegistered):
        refresh_remotes(registry, NamedTarget(name='nope'), prompter, runner=runner)

    assert runner.commands == []
