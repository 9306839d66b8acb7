"""Conversion of ADF documents to Markdown."""

import logging
import re
from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from typing import Any

logger = logging.getLogger("atlassian-cli.preprocessing")

MAX_DEPTH = 50
MAX_COLSPAN = 64
TRUNCATION_NOTE = "[Content truncated: max depth exceeded]"
UNSAFE_LINK_SCHEMES = ("javascript:", "vbscript:", "data:")

_MEDIA_PLACEHOLDER_RE = re.compile(r"\[Media: ([^\]]+)\]")
_ATTACHMENT_ID_RE = re.compile(r" \(id:[^)]*\)$")

STATUS_INDICATORS = {
    "green": "[OK]",
    "yellow": "[WARN]",
    "red": "[ERR]",
    "blue": "[INFO]",
    "purple": "[NOTE]",
}


def normalize_whitespace(text: str) -> str:
    """Collapse runs of blank lines into one and trim blank edges."""
    lines: list[str] = []
    previous_blank = True
    for line in text.splitlines():
        blank = not line.strip()
        if blank and previous_blank:
            continue
        lines.append("" if blank else line.rstrip())
        previous_blank = blank
    while lines and not lines[-1]:
        lines.pop()
    return "\n".join(lines)


def is_safe_link(href: Any) -> bool:
    if not isinstance(href, str):
        return False
    return not href.strip().lower().startswith(UNSAFE_LINK_SCHEMES)


def wrap_inline(text: str, marker: str, closing: str | None = None) -> str:
    """Wrap text in an inline marker, keeping edge whitespace outside it."""
    stripped = text.strip()
    if not stripped:
        return text
    leading = text[: len(text) - len(text.lstrip())]
    trailing = text[len(text.rstrip()) :]
    return f"{leading}{marker}{stripped}{closing or marker}{trailing}"


def inject_attachment_ids(text: str, attachments: Sequence[dict[str, Any]]) -> str:
    """
    Add attachment ids to ``[Media: <filename>]`` placeholders.

    ``[Media: image.png]`` becomes ``[Media: image.png (id:10001)]`` when an
    attachment with that filename exists. Unmatched placeholders are left
    alone.
    """
    if not attachments:
        return text

    ids_by_name: dict[str, str] = {}
    for attachment in attachments:
        if not isinstance(attachment, dict):
            continue
        filename = attachment.get("filename")
        if not isinstance(filename, str) or attachment.get("id") is None:
            continue
        if filename and filename not in ids_by_name:
            ids_by_name[filename] = str(attachment["id"])

    def replace(match: re.Match) -> str:
        name = match.group(1)
        if _ATTACHMENT_ID_RE.search(name) or name not in ids_by_name:
            return match.group(0)
        return f"[Media: {name} (id:{ids_by_name[name]})]"

    return _MEDIA_PLACEHOLDER_RE.sub(replace, text)


def _attrs(node: dict[str, Any]) -> dict[str, Any]:
    attrs = node.get("attrs")
    return attrs if isinstance(attrs, dict) else {}


def _children(node: dict[str, Any]) -> list[Any]:
    content = node.get("content")
    return content if isinstance(content, list) else []


def _kind(node: dict[str, Any]) -> str | None:
    kind = node.get("type")
    return kind if isinstance(kind, str) else None


class AdfMarkdownConverter:
    """
    Renders an ADF document tree as Markdown.

    Every node kind maps to one handler. Kinds without a handler render as
    an empty string, so documents using newer node kinds still convert.
    """

    def __init__(self, max_depth: int = MAX_DEPTH) -> None:
        self.max_depth = max_depth
        self.block_handlers: dict[str, Callable[[dict, int], str]] = {
            "paragraph": self.convert_paragraph,
            "heading": self.convert_heading,
            "bulletList": self.convert_bullet_list,
            "orderedList": self.convert_ordered_list,
            "listItem": self.convert_list_item,
            "codeBlock": self.convert_code_block,
            "blockquote": self.convert_blockquote,
            "rule": lambda node, depth: "---",
            "panel": self.convert_panel,
            "table": self.convert_table,
            "mediaSingle": self.convert_media_group,
            "mediaGroup": self.convert_media_group,
            "media": lambda node, depth: self.convert_media(node),
            "expand": self.convert_expand,
            "nestedExpand": self.convert_expand,
            "taskList": self.convert_task_list,
            "taskItem": self.convert_task_item,
            "decisionList": self.convert_task_list,
            "decisionItem": self.convert_task_item,
            "layoutSection": self.convert_layout_section,
            "layoutColumn": self.convert_children,
            "bodiedExtension": self.convert_extension,
            "extensionFrame": self.convert_children,
            "embedCard": lambda node, depth: self.convert_inline_card(node),
        }
        self.inline_handlers: dict[str, Callable[[dict], str]] = {
            "text": self.convert_text,
            "hardBreak": lambda node: "\n",
            "mention": self.convert_mention,
            "emoji": self.convert_emoji,
            "inlineCard": self.convert_inline_card,
            "date": self.convert_date,
            "status": self.convert_status,
            "mediaInline": self.convert_media,
            "placeholder": self.convert_placeholder,
        }

    def convert(self, doc: Any) -> str:
        """Convert a whole document. Anything that is not a dict yields ''."""
        if not isinstance(doc, dict):
            return ""
        if _kind(doc) != "doc":
            return normalize_whitespace(self.convert_block(doc, 0))
        return normalize_whitespace(self.convert_children(doc, 0))

    # Block nodes

    def convert_block(self, node: Any, depth: int) -> str:
        if depth > self.max_depth:
            return TRUNCATION_NOTE
        if not isinstance(node, dict):
            return ""
        kind = _kind(node)
        handler = self.block_handlers.get(kind) if kind else None
        if handler is not None:
            return handler(node, depth)
        inline = self.inline_handlers.get(kind) if kind else None
        if inline is not None:
            return inline(node)
        logger.debug(f"Skipping unsupported node type: {kind}")
        return ""

    def convert_children(self, node: dict[str, Any], depth: int, sep: str = "\n\n") -> str:
        blocks = (self.convert_block(child, depth + 1) for child in _children(node))
        return sep.join(block for block in blocks if block)

    def convert_paragraph(self, node: dict[str, Any], depth: int) -> str:
        text = self.convert_inline_nodes(_children(node))
        return text if text.strip() else ""

    def convert_heading(self, node: dict[str, Any], depth: int) -> str:
        level = _attrs(node).get("level", 1)
        if not isinstance(level, int) or isinstance(level, bool):
            level = 1
        text = self.convert_inline_nodes(_children(node))
        if not text.strip():
            return ""
        return f"{'#' * max(1, min(level, 6))} {text}"

    def convert_bullet_list(self, node: dict[str, Any], depth: int, indent: int = 0) -> str:
        return self._render_list(node, depth, indent, lambda i: "-")

    def convert_ordered_list(self, node: dict[str, Any], depth: int, indent: int = 0) -> str:
        start = _attrs(node).get("order", 1)
        if not isinstance(start, int) or isinstance(start, bool):
            start = 1
        return self._render_list(node, depth, indent, lambda i: f"{start + i}.")

    def _render_list(
        self,
        node: dict[str, Any],
        depth: int,
        indent: int,
        marker: Callable[[int], str],
    ) -> str:
        if depth > self.max_depth:
            return TRUNCATION_NOTE
        lines = []
        for i, item in enumerate(_children(node)):
            text = self.convert_list_item(item, depth + 1, indent)
            if text:
                lines.append(f"{'  ' * indent}{marker(i)} {text}")
        return "\n".join(lines)

    def convert_list_item(self, node: Any, depth: int, indent: int = 0) -> str:
        if depth > self.max_depth:
            return TRUNCATION_NOTE
        if not isinstance(node, dict):
            return ""
        parts: list[str] = []
        nested: list[str] = []
        for child in _children(node):
            kind = _kind(child) if isinstance(child, dict) else None
            if kind == "bulletList":
                nested.append(self.convert_bullet_list(child, depth + 1, indent + 1))
            elif kind == "orderedList":
                nested.append(self.convert_ordered_list(child, depth + 1, indent + 1))
            else:
                text = self.convert_block(child, depth + 1)
                if text:
                    parts.append(text)
        text = " ".join(parts)
        nested = [block for block in nested if block]
        if nested:
            text = "\n".join([text, *nested]) if text else "\n".join(nested)
        return text

    def convert_code_block(self, node: dict[str, Any], depth: int) -> str:
        language = _attrs(node).get("language") or ""
        code = "".join(
            child["text"]
            for child in _children(node)
            if isinstance(child, dict) and isinstance(child.get("text"), str)
        )
        return f"```{language}\n{code}\n```"

    def convert_blockquote(self, node: dict[str, Any], depth: int) -> str:
        text = self.convert_children(node, depth)
        if not text:
            return ""
        return "\n".join(f"> {line}" if line else ">" for line in text.splitlines())

    def convert_panel(self, node: dict[str, Any], depth: int) -> str:
        panel_type = str(_attrs(node).get("panelType") or "info").upper()
        text = self.convert_children(node, depth, sep=" ")
        if not text:
            return ""
        lines = f"**{panel_type}**: {text}".splitlines()
        return "\n".join(f"> {line}" if line else ">" for line in lines)

    def convert_table(self, node: dict[str, Any], depth: int) -> str:
        rows: list[str] = []
        for row in _children(node):
            if not isinstance(row, dict):
                continue
            cells: list[str] = []
            for cell in _children(row):
                if not isinstance(cell, dict):
                    continue
                colspan = _attrs(cell).get("colspan", 1)
                if not isinstance(colspan, int) or colspan < 1:
                    colspan = 1
                colspan = min(colspan, MAX_COLSPAN)
                text = self.convert_children(cell, depth + 1, sep=" ")
                text = " ".join(text.splitlines()).replace("|", "\\|")
                cells.append(text)
                cells.extend([""] * (colspan - 1))
            rows.append(f"| {' | '.join(cells)} |")
            if len(rows) == 1:
                rows.append(f"| {' | '.join(['---'] * len(cells))} |")
        return "\n".join(rows)

    def convert_media_group(self, node: dict[str, Any], depth: int) -> str:
        placeholders = [
            self.convert_media(child)
            for child in _children(node)
            if isinstance(child, dict) and _kind(child) == "media"
        ]
        return "\n".join(placeholders) if placeholders else "[Media]"

    def convert_media(self, node: dict[str, Any]) -> str:
        attrs = _attrs(node)
        name = attrs.get("alt") or attrs.get("filename") or attrs.get("id") or "media"
        return f"[Media: {name}]"

    def convert_expand(self, node: dict[str, Any], depth: int) -> str:
        title = _attrs(node).get("title") or "Details"
        text = self.convert_children(node, depth)
        if not text:
            return ""
        return f"**{title}**\n\n{text}"

    def convert_task_list(self, node: dict[str, Any], depth: int) -> str:
        items = (self.convert_block(child, depth + 1) for child in _children(node))
        return "\n".join(item for item in items if item)

    def convert_task_item(self, node: dict[str, Any], depth: int) -> str:
        state = _attrs(node).get("state")
        checkbox = "[x]" if state in ("DONE", "DECIDED") else "[ ]"
        text = self.convert_inline_nodes(_children(node))
        if not text.strip():
            text = self.convert_children(node, depth, sep=" ")
        return f"- {checkbox} {text}".rstrip()

    def convert_layout_section(self, node: dict[str, Any], depth: int) -> str:
        return self.convert_children(node, depth, sep="\n\n---\n\n")

    def convert_extension(self, node: dict[str, Any], depth: int) -> str:
        text = self.convert_children(node, depth)
        if text:
            return text
        return f"[Extension: {_attrs(node).get('extensionKey') or 'extension'}]"

    # Inline nodes

    def convert_inline_nodes(self, nodes: Sequence[Any]) -> str:
        parts = []
        for node in nodes:
            if not isinstance(node, dict):
                continue
            kind = _kind(node)
            handler = self.inline_handlers.get(kind) if kind else None
            if handler is not None:
                parts.append(handler(node))
        return "".join(parts)

    def convert_text(self, node: dict[str, Any]) -> str:
        text = node.get("text")
        if not isinstance(text, str):
            return ""
        marks = node.get("marks")
        return self.apply_marks(text, marks if isinstance(marks, list) else [])

    def convert_mention(self, node: dict[str, Any]) -> str:
        attrs = _attrs(node)
        name = attrs.get("text") or attrs.get("id") or "user"
        return f"@{str(name).lstrip('@')}"

    def convert_emoji(self, node: dict[str, Any]) -> str:
        attrs = _attrs(node)
        return str(attrs.get("text") or attrs.get("shortName") or "")

    def convert_inline_card(self, node: dict[str, Any]) -> str:
        url = _attrs(node).get("url")
        if not url or not isinstance(url, str):
            return ""
        if not is_safe_link(url):
            return url
        return f"[{url}]({url})"

    def convert_date(self, node: dict[str, Any]) -> str:
        timestamp = str(_attrs(node).get("timestamp") or "")
        if not timestamp:
            return ""
        try:
            moment = datetime.fromtimestamp(int(timestamp) / 1000, tz=timezone.utc)
        except (ValueError, OverflowError, OSError):
            return timestamp
        return moment.strftime("%Y-%m-%d")

    def convert_status(self, node: dict[str, Any]) -> str:
        attrs = _attrs(node)
        indicator = STATUS_INDICATORS.get(str(attrs.get("color")), "[STATUS]")
        return f"{indicator} {str(attrs.get('text') or 'status').upper()}"

    def convert_placeholder(self, node: dict[str, Any]) -> str:
        return f"{{{_attrs(node).get('text') or 'placeholder'}}}"

    # Marks

    def apply_marks(self, text: str, marks: list[Any]) -> str:
        for mark in marks:
            if not isinstance(mark, dict):
                continue
            kind = _kind(mark)
            attrs = _attrs(mark)
            if kind == "strong":
                text = wrap_inline(text, "**")
            elif kind == "em":
                text = wrap_inline(text, "_")
            elif kind == "code":
                text = f"`{text}`"
            elif kind == "strike":
                text = wrap_inline(text, "~~")
            elif kind == "underline":
                text = wrap_inline(text, "<u>", "</u>")
            elif kind == "link":
                text = self._format_link(text, attrs)
            elif kind == "subsup":
                tag = "sup" if attrs.get("type") == "sup" else "sub"
                text = f"<{tag}>{text}</{tag}>"
        return text

    @staticmethod
    def _format_link(text: str, attrs: dict[str, Any]) -> str:
        href = attrs.get("href")
        if not href or not is_safe_link(href):
            return text
        title = attrs.get("title")
        if title:
            return f'[{text}]({href} "{title}")'
        return f"[{text}]({href})"


def adf_to_markdown(
    doc: Any, attachments: Sequence[dict[str, Any]] | None = None
) -> str:
    """
    Render an ADF document as Markdown.

    Args:
        doc: The ADF document
        attachments: Issue attachments used to add ids to media placeholders

    Returns:
        The Markdown text; never raises on malformed nodes
    """
    text = AdfMarkdownConverter().convert(doc)
    if attachments:
        text = inject_attachment_ids(text, attachments)
    return text
