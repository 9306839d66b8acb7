"""Outbound document handling: text and ADF input for Jira fields."""

import json
import logging
from typing import Any

from ..exceptions import InvalidDocumentShapeError, UnsupportedInputShapeError

logger = logging.getLogger("atlassian-cli.preprocessing")

ADF_VERSION = 1


def empty_doc() -> dict[str, Any]:
    return {"type": "doc", "version": ADF_VERSION, "content": []}


def text_to_adf(text: str) -> dict[str, Any]:
    """
    Wrap plain text into a single-paragraph ADF document.

    The text is kept verbatim; no markup is interpreted.
    """
    paragraph: dict[str, Any] = {"type": "paragraph", "content": []}
    if text:
        # ADF rejects empty text nodes
        paragraph["content"].append({"type": "text", "text": text})
    return {"type": "doc", "version": ADF_VERSION, "content": [paragraph]}


def validate_adf(value: dict[str, Any]) -> None:
    """
    Check the top level of an ADF document.

    Only ``type``, ``version`` and the presence of a ``content`` list are
    checked; nested nodes are passed through as-is.

    Raises:
        InvalidDocumentShapeError: If the top level is not a version 1 doc
    """
    doc_type = value.get("type")
    if doc_type is None:
        raise InvalidDocumentShapeError("Invalid ADF: missing required field 'type'")
    if doc_type != "doc":
        raise InvalidDocumentShapeError(
            f"Invalid ADF: type must be 'doc', got {doc_type!r}"
        )

    version = value.get("version")
    if version is None:
        raise InvalidDocumentShapeError(
            "Invalid ADF: missing required field 'version'"
        )
    if isinstance(version, bool) or version != ADF_VERSION:
        raise InvalidDocumentShapeError(
            f"Invalid ADF: version must be {ADF_VERSION}, got {version!r}"
        )

    if "content" not in value:
        raise InvalidDocumentShapeError(
            "Invalid ADF: missing required field 'content'"
        )
    if not isinstance(value["content"], list):
        raise InvalidDocumentShapeError("Invalid ADF: content must be an array")


def process_input(value: Any, field_name: str = "description") -> dict[str, Any]:
    """
    Turn user input into an ADF document for a rich-text field.

    Args:
        value: A string, an ADF document dict, or None
        field_name: Name of the field, used in error messages

    Returns:
        The ADF document. A valid input document is returned unchanged.

    Raises:
        InvalidDocumentShapeError: If a dict input is not a valid ADF root
        UnsupportedInputShapeError: If the input is of any other type
    """
    if isinstance(value, str):
        return text_to_adf(value)
    if value is None:
        return empty_doc()
    if isinstance(value, dict):
        validate_adf(value)
        return value
    raise UnsupportedInputShapeError(
        f"{field_name} must be a string or an ADF object, got {type(value).__name__}"
    )


def parse_input_argument(raw: str | None, field_name: str = "description") -> dict[str, Any]:
    """
    Process a command-line argument that may hold text or ADF JSON.

    Arguments that parse as a JSON object are treated as ADF; anything else
    is plain text.
    """
    if raw is None:
        return process_input(None, field_name)
    stripped = raw.strip()
    if stripped.startswith("{"):
        try:
            parsed = json.loads(stripped)
        except json.JSONDecodeError:
            logger.debug(f"{field_name} is not valid JSON, treating it as text")
        else:
            return process_input(parsed, field_name)
    return process_input(raw, field_name)
