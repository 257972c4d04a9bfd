"""Loading, saving and reconciling the ``.gitstu`` subtree registry."""

from collections.abc import Iterable
from pathlib import Path

from pydantic import ValidationError

from gitstu.errors import ConfigAlreadyExists, ConfigMalformed, ConfigNotFound, ConfigWriteError
from gitstu.logging import get_logger
from gitstu.models import Registry, SubtreeEntry, SubtreeMode

logger = get_logger(__name__)

DEFAULT_REGISTRY_FILENAME = '.gitstu'


def registry_path(root: Path) -> Path:
    """Location of the registry file for the repository rooted at ``root``."""
    return root / DEFAULT_REGISTRY_FILENAME


def load_registry(path: Path) -> Registry:
    """Load the registry from ``path``.

    A missing file is an error; run ``init`` to create one.
    """
    if not path.exists():
        raise ConfigNotFound(path)

    logger.debug('loading_registry', path=str(path))
    try:
        raw = path.read_text(encoding='utf-8')
    except OSError as exc:
        msg = f'unable to read {path}: {exc}'
        raise ConfigMalformed(msg) from exc

    try:
        registry = Registry.model_validate_json(raw)
    except ValidationError as exc:
        logger.debug('registry_validation_failed', _verbose_errors=exc.errors(include_url=False))
        msg = f'unable to parse {path}: {exc.error_count()} error(s)\n{exc}'
        raise ConfigMalformed(msg) from exc

    logger.debug(
        'registry_loaded',
        subtrees=len(registry.subtrees),
        mode=registry.effective_mode,
    )
    return registry


def merge_entries(
    existing: Iterable[SubtreeEntry],
    updated: Iterable[SubtreeEntry],
) -> list[SubtreeEntry]:
    """Combine entries, keeping the first occurrence of every name.

    ``updated`` goes ahead of ``existing`` so a copy resolved during this run
    wins over the stale copy carried from the load.
    """
    merged: list[SubtreeEntry] = []
    seen: set[str] = set()
    for entry in [*updated, *existing]:
        if entry.name in seen:
            continue
        seen.add(entry.name)
        merged.append(entry)
    return merged


def canonicalize(registry: Registry) -> Registry:
    """Return a copy of ``registry`` with subtrees de-duplicated and sorted by name."""
    subtrees = sorted(merge_entries(registry.subtrees, []), key=lambda entry: entry.name)
    return registry.model_copy(update={'subtrees': subtrees})


def render_registry(registry: Registry) -> str:
    """Serialize ``registry`` the way it is written to disk."""
    canonical = canonicalize(registry)
    return canonical.model_dump_json(indent=2, exclude_none=True) + '\n'


def save_registry(path: Path, registry: Registry) -> None:
    """Write ``registry`` to ``path`` in canonical form.

    Unset ``branch``/``remote``/``mode``/``squash`` are omitted rather than
    written as null.
    """
    content = render_registry(registry)
    try:
        path.write_text(content, encoding='utf-8')
    except OSError as exc:
        msg = f'unable to write {path}: {exc}'
        raise ConfigWriteError(msg) from exc
    logger.debug('registry_saved', path=str(path), subtrees=len(registry.subtrees))


def init_registry(
    path: Path,
    *,
    mode: SubtreeMode | None = None,
    squash: bool = False,
) -> Registry:
    """Create a new, empty registry at ``path``. Never overwrites an existing file."""
    if path.exists():
        raise ConfigAlreadyExists(path)

    registry = Registry(mode=mode, squash=True if squash else None)
    save_registry(path, registry)
    logger.info('registry_initialized', path=str(path))
    return registry


__all__ = [
    'DEFAULT_REGISTRY_FILENAME',
    'canonicalize',
    'init_registry',
    'load_registry',
    'merge_entries',
    'registry_path',
    'render_registry',
    'save_registry',
]
