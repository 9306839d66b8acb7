"""Preprocessing modules for converting documents between formats."""

from .adf import (
    empty_doc,
    parse_input_argument,
    process_input,
    text_to_adf,
    validate_adf,
)
from .confluence import storage_to_markdown
from .markdown import (
    AdfMarkdownConverter,
    adf_to_markdown,
    inject_attachment_ids,
    normalize_whitespace,
)

__all__ = [
    "AdfMarkdownConverter",
    "adf_to_markdown",
    "empty_doc",
    "inject_attachment_ids",
    "normalize_whitespace",
    "parse_input_argument",
    "process_input",
    "storage_to_markdown",
    "text_to_adf",
    "validate_adf",
]
