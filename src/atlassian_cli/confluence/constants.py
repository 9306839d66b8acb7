"""Constants specific to Confluence operations."""

DEFAULT_SEARCH_EXPAND = ("body.storage", "version")
ALL_FIELDS_SEARCH_EXPAND = ("body.storage", "version", "space", "history", "metadata")

# The search endpoint rejects anything above this.
MAX_SEARCH_LIMIT = 250

SEARCH_PATH = "rest/api/search"
PAGES_PATH = "api/v2/pages"
SPACES_PATH = "api/v2/spaces"
