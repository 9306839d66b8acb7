"""Request field selection and response pruning."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from .config import ResolvedConfig
from .constants import (
    DEFAULT_SEARCH_FIELDS,
    ESSENTIAL_FIELDS,
    MARKDOWN_SEARCH_FIELDS,
)
from .utils.precedence import first_present, unique

logger = logging.getLogger("atlassian-cli.filtering")


class FieldSpec(tuple):
    """An ordered sequence of field names; the first occurrence of a name wins."""

    def __new__(cls, names: Iterable[str] = ()) -> "FieldSpec":
        return super().__new__(cls, unique(names))

    @classmethod
    def verbatim(cls, names: Iterable[str]) -> "FieldSpec":
        """Build a FieldSpec that keeps the names exactly as given, duplicates included."""
        return tuple.__new__(cls, names)

    def joined(self) -> str:
        return ",".join(self)


def resolve_fields(
    explicit: Iterable[str] | None,
    env_override: Iterable[str] | None,
    defaults: Iterable[str],
    extension: Iterable[str] = (),
) -> FieldSpec:
    """
    Decide which fields to request.

    Args:
        explicit: Fields named by the caller; wins verbatim when non-empty
        env_override: Fields from configuration; replaces the defaults verbatim
        defaults: Built-in default fields
        extension: Extra fields appended to the defaults

    Returns:
        The resolved FieldSpec
    """
    chosen = first_present(
        list(explicit) if explicit is not None else None,
        list(env_override) if env_override is not None else None,
    )
    if chosen is not None:
        return FieldSpec.verbatim(chosen)
    return FieldSpec([*defaults, *extension])


def resolve_search_fields(
    explicit: Iterable[str] | None,
    config: ResolvedConfig,
    as_markdown: bool = False,
) -> FieldSpec:
    """Resolve the ``fields`` sent with a Jira search."""
    extension = list(config.search_custom_fields)
    if as_markdown:
        extension.extend(MARKDOWN_SEARCH_FIELDS)
    fields = resolve_fields(
        explicit, config.search_default_fields, DEFAULT_SEARCH_FIELDS, extension
    )
    logger.debug(f"Resolved {len(fields)} fields for Jira search")
    return fields


def apply_field_filtering_to_params(params: Mapping[str, Any] | None = None) -> dict:
    """Add the essential field list to the params of a single-issue request."""
    filtered = dict(params or {})
    filtered["fields"] = ",".join(ESSENTIAL_FIELDS)
    filtered["expand"] = "-renderedFields"
    return filtered


def prune(value: Any, exclusion_set: Iterable[str]) -> Any:
    """
    Remove excluded keys from every object in a JSON-like value tree.

    Arrays keep their length and scalars pass through. The input is not
    modified; a new tree is returned.

    Args:
        value: Any JSON-like value
        exclusion_set: Key names to drop at any depth

    Returns:
        The pruned copy
    """
    excluded = (
        exclusion_set
        if isinstance(exclusion_set, set | frozenset)
        else frozenset(exclusion_set)
    )
    return _prune(value, excluded)


def _prune(value: Any, excluded: set[str] | frozenset[str]) -> Any:
    if isinstance(value, dict):
        return {k: _prune(v, excluded) for k, v in value.items() if k not in excluded}
    if isinstance(value, list):
        return [_prune(item, excluded) for item in value]
    return value


def apply_response_filter(data: Any, config: ResolvedConfig) -> Any:
    """Prune the configured ``response_exclude_fields`` from a response."""
    if not config.response_exclude_fields:
        return data
    return prune(data, config.response_exclude_fields)
