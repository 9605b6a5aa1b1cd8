"""Glob-based filename selection."""

from collections.abc import Iterable, Sequence
from fnmatch import fnmatchcase


def normalize_globs(globs: str | Iterable[str] | None) -> list[str]:
    """Accept a single pattern, a sequence of patterns or None."""
    if globs is None:
        return []
    if isinstance(globs, str):
        return [globs]
    return list(globs)


def matching(filenames: Iterable[str], glob: str) -> list[str]:
    """Filenames matching one shell-style pattern.

    Matching is case-sensitive and ``*`` also matches ``/``.
    """
    return [name for name in filenames if fnmatchcase(name, glob)]


def select_filenames(filenames: Sequence[str], globs: str | Iterable[str] | None = None) -> list[str]:
    """Select filenames matching any of ``globs``.

    Without globs the listing is returned as is. Otherwise the union of the
    matches is returned sorted, without duplicates.
    """
    patterns = normalize_globs(globs)
    if not patterns:
        return list(filenames)

    selected: set[str] = set()
    for glob in patterns:
        selected.update(matching(filenames, glob))
    return sorted(selected)
