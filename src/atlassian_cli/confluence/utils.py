"""Utility functions specific to Confluence operations."""


def build_next_url(links: dict | None) -> str | None:
    """
    Build the absolute URL of the next search page from a ``_links`` object.

    Confluence returns ``next`` as a path relative to ``base``; an absolute
    ``next`` is used as-is.

    Returns:
        The next page URL, or None when there are no more pages
    """
    if not links:
        return None
    next_link = links.get("next")
    if not next_link:
        return None
    if next_link.startswith(("http://", "https://")):
        return next_link
    base = links.get("base", "")
    return f"{base}{next_link}"
