"""Ordered-fallback helpers shared by config and field resolution."""

from collections.abc import Iterable, Sequence
from typing import TypeVar

T = TypeVar("T")


def is_present(value: object) -> bool:
    """Return True unless the value is None or an empty string/collection."""
    if value is None:
        return False
    if isinstance(value, str | list | tuple | set | frozenset | dict):
        return len(value) > 0
    return True


def first_present(*candidates: T | None) -> T | None:
    """
    Return the first candidate that is present, highest priority first.

    A present candidate fully shadows everything after it; values are never
    merged.

    Args:
        *candidates: Values ordered from highest to lowest priority

    Returns:
        The winning value, or None if no candidate is present
    """
    for candidate in candidates:
        if is_present(candidate):
            return candidate
    return None


def split_list(value: str | Sequence[str] | None) -> list[str] | None:
    """
    Normalize a comma-separated string or a sequence into a list of names.

    Entries are trimmed and empties dropped. ``None`` stays ``None`` so that
    callers can tell "not set" from "set to nothing".
    """
    if value is None:
        return None
    parts: Iterable[str] = value.split(",") if isinstance(value, str) else value
    return [str(part).strip() for part in parts if str(part).strip()]


def unique(values: Iterable[T]) -> list[T]:
    """Deduplicate while keeping first-seen order."""
    seen: set[T] = set()
    result: list[T] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result
