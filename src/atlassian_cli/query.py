"""Access-scoping rewrites for JQL and CQL queries."""

import logging
import re
from collections.abc import Sequence

from .config import ResolvedConfig
from .constants import RESERVED_QUERY_WORDS

logger = logging.getLogger("atlassian-cli.query")

_ORDER_BY_RE = re.compile(r"\border\s+by\b", re.IGNORECASE)


def quote_identifier_if_needed(identifier: str) -> str:
    """
    Quotes an identifier for safe use in CQL/JQL literals if required.

    Handles:
    - Personal space keys starting with '~'.
    - Identifiers matching reserved words (case-insensitive).
    - Identifiers starting with a number.
    - Internal quotes ('"') and backslashes ('\\'), escaped before quoting.

    Args:
        identifier: The identifier string (e.g., space or project key).

    Returns:
        The identifier, quoted and escaped if necessary, otherwise unchanged.
    """
    needs_quoting = (
        identifier.startswith("~")
        or identifier.lower() in RESERVED_QUERY_WORDS
        or identifier[:1].isdigit()
        or '"' in identifier
        or "\\" in identifier
    )
    if not needs_quoting:
        return identifier

    escaped = identifier.replace("\\", "\\\\").replace('"', '\\"')
    logger.debug(f"Quoted identifier '{identifier}' as \"{escaped}\"")
    return f'"{escaped}"'


def split_order_by(query: str) -> tuple[str, str]:
    """Split a query into its filter body and its ``ORDER BY`` suffix."""
    match = _ORDER_BY_RE.search(query)
    if match is None:
        return query.strip(), ""
    return query[: match.start()].strip(), query[match.start() :].strip()


def mentions_keyword(body: str, keyword: str) -> bool:
    """
    Check whether a query body already filters on ``keyword``.

    This is a plain substring check, so a field such as ``subproject = X``
    also counts as a mention.
    """
    lowered = body.lower()
    kw = keyword.lower()
    return f"{kw} " in lowered or f"{kw}=" in lowered or f"{kw} in" in lowered


def augment(raw_query: str, filter_values: Sequence[str], filter_keyword: str) -> str:
    """
    Scope a query to the given values of ``filter_keyword``.

    Args:
        raw_query: The user query (JQL or CQL)
        filter_values: Allowed values, e.g. project or space keys
        filter_keyword: The field that names the scope ("project" or "space")

    Returns:
        ``<kw> IN (<values>) AND (<body>) <order by>``, or the query unchanged
        when there is nothing to add or the query is already scoped
    """
    if not filter_values:
        return raw_query

    body, suffix = split_order_by(raw_query)
    if mentions_keyword(body, filter_keyword):
        return raw_query

    values = ",".join(quote_identifier_if_needed(v) for v in filter_values)
    clause = f"{filter_keyword} IN ({values})"
    if body:
        clause = f"{clause} AND ({body})"
    augmented = f"{clause} {suffix}" if suffix else clause
    logger.debug(f"Applied {filter_keyword} filter to query: {augmented}")
    return augmented


def apply_projects_filter(jql: str, config: ResolvedConfig) -> str:
    return augment(jql, config.projects_filter, "project")


def apply_spaces_filter(cql: str, config: ResolvedConfig) -> str:
    return augment(cql, config.spaces_filter, "space")
