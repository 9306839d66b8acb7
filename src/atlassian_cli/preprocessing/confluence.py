"""Conversion of Confluence storage format (XHTML) to Markdown."""

import html
import logging
import re

from bs4 import BeautifulSoup, Tag
from markdownify import ATX, MarkdownConverter

from .markdown import is_safe_link, normalize_whitespace, wrap_inline

logger = logging.getLogger("atlassian-cli.preprocessing")

_METADATA_PATTERNS = (
    re.compile(r'\s*ac:macro-id="[^"]*"'),
    re.compile(r'\s*ac:schema-version="[^"]*"'),
    re.compile(r'\s*data-layout="[^"]*"'),
    re.compile(r'<ac:parameter ac:name=""\s*/>'),
    re.compile(r'<ac:parameter ac:name="">[^<]*</ac:parameter>'),
    re.compile(r"<ac:adf-attribute[^>]*>.*?</ac:adf-attribute>", re.DOTALL),
)
_CDATA_RE = re.compile(r"<!\[CDATA\[([\s\S]*?)\]\]>")
_BINARY_PATTERNS = (
    re.compile(r"<mxGraphModel[\s\S]*?</mxGraphModel>"),
    re.compile(r"<mxfile[\s\S]*?</mxfile>"),
    re.compile(r"[A-Za-z0-9+/=]{500,}"),
)
_LONG_SPACE_RE = re.compile(r"[^\S\n]{10,}")

PANEL_MACROS = {"info", "note", "warning", "tip", "panel"}


def clean_metadata(content: str) -> str:
    """Drop editor-only attributes and unwrap CDATA sections."""
    for pattern in _METADATA_PATTERNS:
        content = pattern.sub("", content)
    # Escaped so that code bodies survive HTML parsing as text
    return _CDATA_RE.sub(lambda m: html.escape(m.group(1), quote=False), content)


def clean_binary_data(content: str) -> str:
    """Drop draw.io diagrams, long base64 runs and runs of spaces."""
    for pattern in _BINARY_PATTERNS:
        content = pattern.sub("", content)
    return _LONG_SPACE_RE.sub(" ", content).strip()


def _code_language(el: Tag) -> str | None:
    return el.get("data-language") or None


class StorageMarkdownConverter(MarkdownConverter):
    """markdownify converter using the same mark rules as ADF conversion."""

    def __init__(self, **options):
        options.setdefault("heading_style", ATX)
        options.setdefault("bullets", "-")
        options.setdefault("escape_asterisks", False)
        options.setdefault("escape_underscores", False)
        options.setdefault("table_infer_header", True)
        options.setdefault("code_language_callback", _code_language)
        super().__init__(**options)

    def convert_em(self, el, text, parent_tags):
        if "_noformat" in parent_tags:
            return text
        return wrap_inline(text, "_")

    convert_i = convert_em

    def convert_a(self, el, text, parent_tags):
        href = el.get("href")
        if href and not is_safe_link(href):
            return text
        return super().convert_a(el, text, parent_tags)


def _param(macro: Tag, name: str) -> str:
    for param in macro.find_all("ac:parameter", recursive=False):
        if param.get("ac:name") == name:
            return param.get_text(strip=True)
    return ""


def _paragraph(soup: BeautifulSoup, text: str) -> Tag:
    p = soup.new_tag("p")
    p.string = text
    return p


def _render_macro(soup: BeautifulSoup, macro: Tag) -> None:
    name = macro.get("ac:name") or "macro"
    plain_body = macro.find("ac:plain-text-body", recursive=False)
    rich_body = macro.find("ac:rich-text-body", recursive=False)

    if plain_body is not None:
        pre = soup.new_tag("pre")
        language = _param(macro, "language")
        if language:
            pre["data-language"] = language
        pre.string = plain_body.get_text()
        macro.replace_with(pre)
        return

    if rich_body is None:
        macro.replace_with(_paragraph(soup, f"[Macro: {name}]"))
        return

    if name in PANEL_MACROS:
        container = soup.new_tag("blockquote")
        label = soup.new_tag("strong")
        label.string = (_param(macro, "title") or name).upper()
        first = rich_body.find(True, recursive=False)
        if first is not None and first.name == "p":
            first.insert(0, label)
            label.insert_after(": ")
        else:
            container.append(label)
    elif name in ("expand", "details"):
        container = soup.new_tag("div")
        title = soup.new_tag("strong")
        title.string = _param(macro, "title") or "Details"
        wrapper = soup.new_tag("p")
        wrapper.append(title)
        container.append(wrapper)
    else:
        container = soup.new_tag("div")
        container.append(_paragraph(soup, f"[Macro: {name}]"))

    for child in list(rich_body.contents):
        container.append(child.extract())
    macro.replace_with(container)


def _render_link(link: Tag) -> str:
    body = link.find(["ac:link-body", "ac:plain-text-link-body"])
    body_text = body.get_text(strip=True) if body is not None else ""

    user = link.find("ri:user")
    if user is not None:
        account = user.get("ri:account-id") or user.get("ri:userkey", "")
        name = body_text or f"user_{account}"
        return f"@{name.lstrip('@')}"

    page = link.find("ri:page")
    if page is not None:
        return body_text or page.get("ri:content-title", "")

    attachment = link.find("ri:attachment")
    if attachment is not None:
        return body_text or attachment.get("ri:filename", "")

    space = link.find("ri:space")
    if space is not None:
        return body_text or space.get("ri:space-key", "")

    return body_text


def _render_image(image: Tag) -> str:
    attachment = image.find("ri:attachment")
    if attachment is not None:
        return f"[Image: {attachment.get('ri:filename', '')}]"
    url = image.find("ri:url")
    if url is not None:
        return f"[Image: {url.get('ri:value', '')}]"
    return "[Image]"


def _render_confluence_elements(soup: BeautifulSoup) -> None:
    """Replace ac:/ri: elements with plain HTML or literal notes."""
    for tag in soup.find_all(["script", "style", "ac:placeholder"]):
        tag.decompose()

    # Innermost first, so nested macros are rendered before their parents move
    for macro in reversed(soup.find_all("ac:structured-macro")):
        _render_macro(soup, macro)

    for link in soup.find_all("ac:link"):
        link.replace_with(_render_link(link))

    for image in soup.find_all("ac:image"):
        image.replace_with(_render_image(image))

    for emoticon in soup.find_all("ac:emoticon"):
        fallback = emoticon.get("ac:emoji-fallback")
        emoticon.replace_with(fallback or f":{emoticon.get('ac:name', '')}:")

    for task_list in soup.find_all("ac:task-list"):
        task_list.name = "ul"
    for task in soup.find_all("ac:task"):
        status = task.find("ac:task-status")
        body = task.find("ac:task-body")
        done = status is not None and status.get_text(strip=True) == "complete"
        checkbox = "[x]" if done else "[ ]"
        text = body.get_text(" ", strip=True) if body is not None else ""
        item = soup.new_tag("li")
        item.string = f"{checkbox} {text}".rstrip()
        task.replace_with(item)

    for time in soup.find_all("time"):
        time.replace_with(time.get("datetime") or time.get_text())

    for tag in soup.find_all(lambda t: ":" in t.name):
        tag.unwrap()


def storage_to_markdown(content: str) -> str:
    """
    Convert Confluence storage format to Markdown.

    Never raises; when conversion fails the plain text of the page is
    returned instead.

    Args:
        content: The page body in storage format

    Returns:
        The Markdown text
    """
    if not content:
        return ""

    cleaned = clean_binary_data(clean_metadata(content))
    try:
        soup = BeautifulSoup(cleaned, "html.parser")
        _render_confluence_elements(soup)
        markdown = StorageMarkdownConverter().convert_soup(soup)
    except Exception as e:  # noqa: BLE001 - Intentional fallback with logging
        logger.warning(f"Error converting storage format to markdown: {e}")
        logger.debug("Full exception details for storage conversion:", exc_info=True)
        soup = BeautifulSoup(cleaned, "html.parser")
        for tag in soup.find_all(["script", "style"]):
            tag.decompose()
        markdown = soup.get_text("\n")
    return normalize_whitespace(markdown)
