"""Tests for ADF to Markdown conversion."""

import pytest

from atlassian_cli.preprocessing import adf_to_markdown, inject_attachment_ids
from atlassian_cli.preprocessing.markdown import MAX_COLSPAN, TRUNCATION_NOTE


def doc(*content):
    return {"type": "doc", "version": 1, "content": list(content)}


def text(value, *marks):
    node = {"type": "text", "text": value}
    if marks:
        node["marks"] = list(marks)
    return node


def paragraph(*content):
    return {"type": "paragraph", "content": list(content)}


def list_item(*content):
    return {"type": "listItem", "content": list(content)}


class TestBlocks:
    def test_paragraphs(self):
        result = adf_to_markdown(doc(paragraph(text("a")), paragraph(text("b"))))
        assert result == "a\n\nb"

    @pytest.mark.parametrize(("level", "prefix"), [(1, "#"), (3, "###"), (9, "######")])
    def test_heading(self, level, prefix):
        heading = {"type": "heading", "attrs": {"level": level}, "content": [text("T")]}
        assert adf_to_markdown(doc(heading)) == f"{prefix} T"

    def test_nested_bullet_list(self):
        nested = {"type": "bulletList", "content": [list_item(paragraph(text("b")))]}
        bullets = {
            "type": "bulletList",
            "content": [
                list_item(paragraph(text("a")), nested),
                list_item(paragraph(text("c"))),
            ],
        }
        assert adf_to_markdown(doc(bullets)) == "- a\n  - b\n- c"

    def test_ordered_list(self):
        ordered = {
            "type": "orderedList",
            "content": [
                list_item(paragraph(text("one"))),
                list_item(paragraph(text("two"))),
            ],
        }
        assert adf_to_markdown(doc(ordered)) == "1. one\n2. two"

    def test_ordered_list_start(self):
        ordered = {
            "type": "orderedList",
            "attrs": {"order": 3},
            "content": [list_item(paragraph(text("three")))],
        }
        assert adf_to_markdown(doc(ordered)) == "3. three"

    def test_code_block(self):
        code = {
            "type": "codeBlock",
            "attrs": {"language": "python"},
            "content": [text("print(1)")],
        }
        assert adf_to_markdown(doc(code)) == "```python\nprint(1)\n```"

    def test_code_block_without_language(self):
        code = {"type": "codeBlock", "content": [text("x = 1")]}
        assert adf_to_markdown(doc(code)) == "```\nx = 1\n```"

    def test_table(self):
        def cell(kind, value):
            return {"type": kind, "content": [paragraph(text(value))]}

        table = {
            "type": "table",
            "content": [
                {
                    "type": "tableRow",
                    "content": [cell("tableHeader", "H1"), cell("tableHeader", "H2")],
                },
                {
                    "type": "tableRow",
                    "content": [cell("tableCell", "a|b"), cell("tableCell", "c")],
                },
            ],
        }
        assert adf_to_markdown(doc(table)) == (
            "| H1 | H2 |\n| --- | --- |\n| a\\|b | c |"
        )

    def test_panel(self):
        panel = {
            "type": "panel",
            "attrs": {"panelType": "warning"},
            "content": [paragraph(text("careful"))],
        }
        assert adf_to_markdown(doc(panel)) == "> **WARNING**: careful"

    def test_blockquote(self):
        quote = {"type": "blockquote", "content": [paragraph(text("quoted"))]}
        assert adf_to_markdown(doc(quote)) == "> quoted"

    def test_rule(self):
        assert adf_to_markdown(doc({"type": "rule"})) == "---"

    def test_task_list(self):
        tasks = {
            "type": "taskList",
            "content": [
                {"type": "taskItem", "attrs": {"state": "DONE"}, "content": [text("done")]},
                {"type": "taskItem", "attrs": {"state": "TODO"}, "content": [text("todo")]},
            ],
        }
        assert adf_to_markdown(doc(tasks)) == "- [x] done\n- [ ] todo"

    def test_expand(self):
        expand = {
            "type": "expand",
            "attrs": {"title": "More"},
            "content": [paragraph(text("hidden"))],
        }
        assert adf_to_markdown(doc(expand)) == "**More**\n\nhidden"


class TestInline:
    @pytest.mark.parametrize(
        ("mark", "expected"),
        [
            ({"type": "strong"}, "**x**"),
            ({"type": "em"}, "_x_"),
            ({"type": "code"}, "`x`"),
            ({"type": "strike"}, "~~x~~"),
            ({"type": "underline"}, "<u>x</u>"),
            ({"type": "link", "attrs": {"href": "https://example.com"}}, "[x](https://example.com)"),
            ({"type": "subsup", "attrs": {"type": "sup"}}, "<sup>x</sup>"),
        ],
    )
    def test_marks(self, mark, expected):
        assert adf_to_markdown(doc(paragraph(text("x", mark)))) == expected

    def test_combined_marks(self):
        node = text("x", {"type": "strong"}, {"type": "em"})
        assert adf_to_markdown(doc(paragraph(node))) == "_**x**_"

    def test_marks_keep_edge_whitespace_outside(self):
        node = text(" x ", {"type": "strong"})
        result = adf_to_markdown(doc(paragraph(text("a"), node, text("b"))))
        assert result == "a **x** b"

    @pytest.mark.parametrize("href", ["javascript:alert(1)", " JavaScript:x", "data:text/html,x"])
    def test_unsafe_links_dropped(self, href):
        node = text("click", {"type": "link", "attrs": {"href": href}})
        assert adf_to_markdown(doc(paragraph(node))) == "click"

    def test_mention(self):
        mention = {"type": "mention", "attrs": {"id": "abc", "text": "@Alice"}}
        assert adf_to_markdown(doc(paragraph(text("hi "), mention))) == "hi @Alice"

    def test_hard_break(self):
        para = paragraph(text("a"), {"type": "hardBreak"}, text("b"))
        assert adf_to_markdown(doc(para)) == "a\nb"

    def test_status(self):
        status = {"type": "status", "attrs": {"text": "done", "color": "green"}}
        assert adf_to_markdown(doc(paragraph(status))) == "[OK] DONE"

    def test_date(self):
        date = {"type": "date", "attrs": {"timestamp": "1700000000000"}}
        assert adf_to_markdown(doc(paragraph(date))) == "2023-11-14"

    def test_emoji(self):
        emoji = {"type": "emoji", "attrs": {"shortName": ":smile:", "text": "😄"}}
        assert adf_to_markdown(doc(paragraph(emoji))) == "😄"

    def test_inline_card(self):
        card = {"type": "inlineCard", "attrs": {"url": "https://example.com/x"}}
        assert adf_to_markdown(doc(paragraph(card))) == (
            "[https://example.com/x](https://example.com/x)"
        )


class TestMedia:
    @pytest.fixture
    def media_doc(self):
        return doc(
            {
                "type": "mediaSingle",
                "content": [
                    {"type": "media", "attrs": {"id": "uuid-1", "alt": "image.png"}}
                ],
            }
        )

    def test_placeholder(self, media_doc):
        assert adf_to_markdown(media_doc) == "[Media: image.png]"

    def test_attachment_id_injected(self, media_doc):
        attachments = [{"filename": "image.png", "id": "10001"}]
        assert adf_to_markdown(media_doc, attachments) == "[Media: image.png (id:10001)]"

    def test_inject_leaves_unmatched(self):
        text_value = "[Media: a.png] and [Media: b.png]"
        result = inject_attachment_ids(text_value, [{"filename": "a.png", "id": 1}])
        assert result == "[Media: a.png (id:1)] and [Media: b.png]"

    def test_inject_is_idempotent(self):
        once = inject_attachment_ids("[Media: a.png]", [{"filename": "a.png", "id": "1"}])
        twice = inject_attachment_ids(once, [{"filename": "a.png", "id": "1"}])
        assert twice == once


class TestRobustness:
    def test_unknown_node_is_skipped(self):
        result = adf_to_markdown(doc({"type": "futureNode"}, paragraph(text("kept"))))
        assert result == "kept"

    def test_unknown_root_kind(self):
        assert adf_to_markdown({"type": "futureNode", "content": []}) == ""

    @pytest.mark.parametrize("value", [None, "text", 3, []])
    def test_non_document(self, value):
        assert adf_to_markdown(value) == ""

    def test_malformed_children_are_ignored(self):
        malformed = doc("stray", None, {"type": "paragraph", "content": "bad"})
        assert adf_to_markdown(malformed) == ""

    def test_deep_nesting_is_truncated(self):
        node = paragraph(text("bottom"))
        for _ in range(60):
            node = {"type": "blockquote", "content": [node]}
        result = adf_to_markdown(doc(node))
        assert TRUNCATION_NOTE in result
        assert "bottom" not in result

    @pytest.mark.parametrize(
        "node",
        [
            {"type": ["paragraph"], "content": [text("x")]},
            paragraph({"type": {"kind": "text"}, "text": "x"}),
            paragraph({"type": "status", "attrs": {"color": ["green"], "text": "done"}}),
            paragraph(text("x", {"type": "link", "attrs": {"href": 42}})),
            paragraph(text("x", {"type": ["strong"]})),
            paragraph({"type": "inlineCard", "attrs": {"url": 42}}),
            {"type": "codeBlock", "content": [{"type": "text", "text": None}]},
        ],
    )
    def test_malformed_attrs_never_raise(self, node):
        assert isinstance(adf_to_markdown(doc(node)), str)

    def test_non_string_link_renders_text(self):
        node = paragraph(text("x", {"type": "link", "attrs": {"href": 42}}))
        assert adf_to_markdown(doc(node)) == "x"

    def test_status_with_list_color_uses_fallback(self):
        node = paragraph({"type": "status", "attrs": {"color": ["green"], "text": "done"}})
        assert adf_to_markdown(doc(node)) == "[STATUS] DONE"

    def test_code_block_skips_null_text(self):
        node = {
            "type": "codeBlock",
            "content": [{"type": "text", "text": None}, {"type": "text", "text": "ok"}],
        }
        assert adf_to_markdown(doc(node)) == "```\nok\n```"

    def test_malformed_attachments_are_ignored(self):
        attachments = [None, {"filename": ["a.png"], "id": "1"}, {"filename": "a.png", "id": "2"}]
        result = adf_to_markdown(
            doc({"type": "mediaSingle", "content": [{"type": "media", "attrs": {"alt": "a.png"}}]}),
            attachments,
        )
        assert result == "[Media: a.png (id:2)]"

    def test_huge_colspan_is_clamped(self):
        cell = {"type": "tableCell", "attrs": {"colspan": 10**9}, "content": [paragraph(text("a"))]}
        table = {"type": "table", "content": [{"type": "tableRow", "content": [cell]}]}
        header = adf_to_markdown(doc(table)).splitlines()[0]
        assert header.count("|") == MAX_COLSPAN + 1
