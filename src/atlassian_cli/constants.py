"""Constants shared by the query and field-selection layers."""

# Fields requested by issue search when neither the caller nor the
# configuration names any. Description is left out to keep results small.
DEFAULT_SEARCH_FIELDS: tuple[str, ...] = (
    "key",
    "summary",
    "status",
    "priority",
    "issuetype",
    "assignee",
    "reporter",
    "creator",
    "created",
    "updated",
    "duedate",
    "resolutiondate",
    "project",
    "labels",
    "components",
    "parent",
    "subtasks",
)

# Fields requested by single-issue endpoints.
ESSENTIAL_FIELDS: tuple[str, ...] = (
    "key",
    "summary",
    "description",
    "issuetype",
    "status",
    "priority",
    "assignee",
    "reporter",
    "created",
    "updated",
    "project",
)

# Extra fields requested by search when results are rendered as markdown.
MARKDOWN_SEARCH_FIELDS: tuple[str, ...] = ("description",)

# Reserved JQL/CQL words that must be quoted when used as identifiers.
# https://developer.atlassian.com/cloud/confluence/cql-functions/
RESERVED_QUERY_WORDS = {
    "after",
    "and",
    "as",
    "avg",
    "before",
    "begin",
    "by",
    "commit",
    "contains",
    "count",
    "distinct",
    "else",
    "empty",
    "end",
    "explain",
    "from",
    "having",
    "if",
    "in",
    "inner",
    "insert",
    "into",
    "is",
    "isnull",
    "left",
    "like",
    "limit",
    "max",
    "min",
    "not",
    "null",
    "or",
    "order",
    "outer",
    "right",
    "select",
    "sum",
    "then",
    "was",
    "where",
    "update",
}
