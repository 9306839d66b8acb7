"""Constants specific to Jira operations."""

# The enhanced search endpoint caps pages at this size.
MAX_RESULTS_PER_PAGE = 100

SEARCH_PATH = "rest/api/3/search/jql"
MYSELF_PATH = "rest/api/3/myself"
