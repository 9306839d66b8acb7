"""Field selection for Confluence requests.

The v2 page endpoints take ``body-format`` and ``include-*`` flags, while the
v1 search endpoint takes an ``expand`` list.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from ..utils.precedence import unique
from .constants import ALL_FIELDS_SEARCH_EXPAND, DEFAULT_SEARCH_EXPAND


@dataclass(frozen=True)
class FieldConfiguration:
    """Which optional parts of a page the v2 API should include."""

    body_format: str | None = "storage"
    include_version: bool = True
    include_labels: bool = False
    include_properties: bool = False
    include_operations: bool = False
    custom_includes: tuple[str, ...] = field(default_factory=tuple)
    include_all: bool = False

    @classmethod
    def all_fields(cls) -> "FieldConfiguration":
        return cls(
            include_labels=True,
            include_properties=True,
            include_operations=True,
            include_all=True,
        )

    def with_additional_includes(self, additional: Iterable[str]) -> "FieldConfiguration":
        return replace(
            self, custom_includes=tuple(unique([*self.custom_includes, *additional]))
        )

    def to_query_params(self) -> dict[str, str]:
        """Render the configuration as v2 query parameters."""
        params: dict[str, str] = {}
        if self.body_format:
            params["body-format"] = self.body_format
        if self.include_version:
            params["include-version"] = "true"
        if self.include_labels or self.include_all:
            params["include-labels"] = "true"
        if self.include_properties or self.include_all:
            params["include-properties"] = "true"
        if self.include_operations or self.include_all:
            params["include-operations"] = "true"
        for name in self.custom_includes:
            params[f"include-{name}"] = "true"
        return params


def v2_params(
    custom_includes: Iterable[str] = (),
    include_all_fields: bool = False,
    additional_includes: Iterable[str] | None = None,
) -> dict[str, str]:
    """
    Build the query parameters for a v2 page request.

    Args:
        custom_includes: Includes configured via CONFLUENCE_CUSTOM_INCLUDES
        include_all_fields: Request every optional part of the page
        additional_includes: Per-call includes added to the configured ones

    Returns:
        The query parameters
    """
    config = (
        FieldConfiguration.all_fields()
        if include_all_fields
        else FieldConfiguration()
    ).with_additional_includes([*custom_includes, *(additional_includes or [])])
    return config.to_query_params()


def expand_param(
    include_all_fields: bool = False, additional_expand: Iterable[str] | None = None
) -> str:
    """Build the ``expand`` value for a v1 search request."""
    base = ALL_FIELDS_SEARCH_EXPAND if include_all_fields else DEFAULT_SEARCH_EXPAND
    return ",".join(unique([*base, *(additional_expand or [])]))
