"""Pydantic models for gitstu."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from gitstu.errors import InvalidInvocation

SubtreeMode = Literal['subtree', 'custom']
SyncCommand = Literal['add', 'pull', 'push']

DEFAULT_MODE: SubtreeMode = 'subtree'
DEFAULT_BRANCH = 'master'


def _require_text(value: str, field: str) -> str:
    if not value.strip():
        msg = f'{field} cannot be empty'
        raise ValueError(msg)
    return value.strip()


class GitRemote(BaseModel):
    """A remote declared with both its url and the local alias git knows it by."""

    model_config = ConfigDict(extra='ignore')

    url: str
    alias: str

    @field_validator('url', 'alias')
    @classmethod
    def validate_not_empty(cls, v: str, info: ValidationInfo) -> str:
        """Validate that url and alias are not empty."""
        return _require_text(v, f'remote {info.field_name}')


# Either an opaque remote name/url or a {url, alias} pair.
RemoteRef = str | GitRemote


def remote_name(remote: RemoteRef) -> str:
    """Return the value git expects on the command line for ``remote``."""
    if isinstance(remote, GitRemote):
        return remote.alias
    return remote


def describe_remote(remote: RemoteRef) -> str:
    """Return a human readable form of ``remote``."""
    if isinstance(remote, GitRemote):
        return f'{remote.alias} ({remote.url})'
    return remote


class SubtreeEntry(BaseModel):
    """One declared subtree integration."""

    model_config = ConfigDict(extra='ignore')

    name: str
    prefix: str
    branch: str | None = None
    remote: RemoteRef | None = None

    @field_validator('name', 'prefix')
    @classmethod
    def validate_not_empty(cls, v: str, info: ValidationInfo) -> str:
        """Validate that name and prefix are not empty."""
        return _require_text(v, info.field_name)


class Registry(BaseModel):
    """Contents of the ``.gitstu`` file."""

    model_config = ConfigDict(extra='ignore')

    mode: SubtreeMode | None = None
    squash: bool | None = None
    subtrees: list[SubtreeEntry] = Field(default_factory=list)

    @property
    def effective_mode(self) -> SubtreeMode:
        """Mode applied to every entry, defaulting to standard subtree mode."""
        return self.mode or DEFAULT_MODE

    @property
    def default_squash(self) -> bool:
        """Squash default used when the command line does not ask for it."""
        return bool(self.squash)

    def find(self, name: str) -> SubtreeEntry | None:
        """Return the entry registered under ``name``, if any."""
        for entry in self.subtrees:
            if entry.name == name:
                return entry
        return None


class ResolvedTarget(BaseModel):
    """Effective branch and remote for one entry during one invocation."""

    branch: str
    remote: RemoteRef

    @property
    def remote_name(self) -> str:
        return remote_name(self.remote)


class NamedTarget(BaseModel):
    """Select a single subtree by name."""

    name: str

    @field_validator('name')
    @classmethod
    def normalize_name(cls, v: str) -> str:
        """Match the stripping applied to ``SubtreeEntry.name``."""
        return v.strip()


class AllTargets(BaseModel):
    """Select every registered subtree."""


class BranchFilteredTargets(BaseModel):
    """Select every registered subtree whose branch matches exactly."""

    branch: str


TargetSpec = NamedTarget | AllTargets | BranchFilteredTargets


class Invocation(BaseModel):
    """Typed arguments for an add, pull or push run."""

    command: SyncCommand
    subtree: str | None = None
    all_subtrees: bool = False
    with_branch: str | None = None
    positional_branch: str | None = None
    to_branch: str | None = None
    branch: str | None = None
    remote: str | None = None
    prefix: str | None = None
    squash: bool = False
    dry_run: bool = False
    verbose: int = 0

    @property
    def target(self) -> TargetSpec:
        """Target specifier derived from the subtree name and ``--all`` flags."""
        if self.all_subtrees:
            if self.with_branch:
                return BranchFilteredTargets(branch=self.with_branch)
            return AllTargets()
        if self.subtree:
            return NamedTarget(name=self.subtree)
        msg = 'a subtree name is required unless --all is given'
        raise InvalidInvocation(msg)

    @property
    def branch_override(self) -> str | None:
        """Branch to use for this run: positional, then --to-branch, then --branch."""
        return self.positional_branch or self.to_branch or self.branch

    @property
    def persists_results(self) -> bool:
        """Whether resolved values may be folded back into the registry.

        A push to all subtrees or to an alternate branch must never overwrite
        the declared home branch or remote.
        """
        if self.dry_run:
            return False
        if self.command == 'push':
            return not (self.all_subtrees or self.to_branch)
        return True
