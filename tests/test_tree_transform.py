"""
Tree transform tests

Interactive tags inside text leaves are split into
text / interaction / text, for dict trees and for markdown-it-py tokens.
"""

from flowtype.lib.transform import DictTree, MarkdownItTree, tree_transform
from flowtype.lib.markdown import markdown_parse, html_render
from flowtype.models import ParsedInteraction


def paragraph(*children):
    return {"type": "root", "children": [{"type": "paragraph", "children": list(children)}]}


def text(value):
    return {"type": "text", "value": value}


class TestDictTree:
    """mdast-style dictionaries"""

    def test_single_tag_split_in_three(self):
        root = paragraph(text("Pick ?[%{{ color }} Red | Blue] please"))

        converted = tree_transform(root, DictTree())

        children = root["children"][0]["children"]
        assert converted == 1
        assert children[0] == text("Pick ")
        assert children[1] == {
            "type": "element",
            "data": {
                "hName": "custom-variable",
                "hProperties": {"variableName": "color", "buttonTexts": ["Red", "Blue"]},
            },
        }
        assert children[2] == text(" please")

    def test_several_tags_in_one_leaf(self):
        """The trailing literal is revisited until no tag remains"""
        root = paragraph(text("A ?[%{{x}} y] B ?[%{{z}} ...w] C"))

        converted = tree_transform(root, DictTree())

        children = root["children"][0]["children"]
        assert converted == 2
        assert [child["type"] for child in children] == [
            "text", "element", "text", "element", "text",
        ]
        assert children[0]["value"] == "A "
        assert children[2]["value"] == " B "
        assert children[4]["value"] == " C"
        assert children[3]["data"]["hProperties"] == {
            "variableName": "z",
            "buttonTexts": [],
            "placeholder": "w",
        }

    def test_tag_filling_whole_leaf(self):
        """Literals around the node may be empty"""
        root = paragraph(text("?[%{{x}} y]"))

        tree_transform(root, DictTree())

        children = root["children"][0]["children"]
        assert children[0] == text("")
        assert children[1]["type"] == "element"
        assert children[2] == text("")

    def test_non_text_nodes_untouched(self):
        code = {"type": "inlineCode", "value": "?[%{{x}} y]"}
        root = paragraph(code, text(" tail"))

        converted = tree_transform(root, DictTree())

        assert converted == 0
        assert root["children"][0]["children"] == [code, text(" tail")]

    def test_nested_parents_walked(self):
        strong = {"type": "strong", "children": [text("?[%{{x}} y]")]}
        root = paragraph(text("before "), strong)

        assert tree_transform(root, DictTree()) == 1
        assert strong["children"][1]["type"] == "element"

    def test_bare_button(self):
        root = paragraph(text("?[Continue]"))

        tree_transform(root, DictTree())

        assert root["children"][0]["children"][1]["data"]["hProperties"] == {
            "variableName": "",
            "buttonTexts": ["Continue"],
        }

    def test_bare_button_excluded(self):
        root = paragraph(text("?[Continue]"))

        assert tree_transform(root, DictTree(), include_bare=False) == 0

    def test_malformed_left_as_text(self):
        root = paragraph(text("?[%{{ }} a]"))

        assert tree_transform(root, DictTree()) == 0
        assert root["children"][0]["children"] == [text("?[%{{ }} a]")]


class TestMarkdownItTree:
    """markdown-it-py tokens"""

    def test_inline_children_split(self):
        tokens = markdown_parse("Choose ?[%{{ color }} Red | Blue] now")

        inline = tokens[1]
        assert inline.type == "inline"
        assert [child.type for child in inline.children] == ["text", "interaction", "text"]

        node = inline.children[1]
        assert node.tag == "custom-variable"
        assert node.content == "?[%{{ color }} Red | Blue]"
        assert isinstance(node.meta["interaction"], ParsedInteraction)
        assert node.meta["interaction"].button_texts == ["Red", "Blue"]

    def test_inline_code_not_converted(self):
        tokens = markdown_parse("See `?[%{{x}} y]` for syntax")

        types = [child.type for child in tokens[1].children]
        assert "interaction" not in types
        assert "code_inline" in types

    def test_direct_tree_use(self):
        from markdown_it import MarkdownIt

        tokens = MarkdownIt("commonmark").parse("?[%{{a}} b] and ?[%{{c}} d]")

        assert tree_transform(tokens, MarkdownItTree()) == 2


class TestHtmlRender:
    """HTML output for interaction tokens"""

    def test_buttons_and_input(self):
        html = html_render("Go ?[%{{ next }} Yes//y | No | ...why]")

        assert html.startswith("<p>Go <custom-variable")
        assert '<button type="button" value="y">Yes</button>' in html
        assert '<button type="button" value="No">No</button>' in html
        assert '<input type="text" placeholder="why">' in html
        assert "</custom-variable></p>" in html

    def test_properties_attribute_escaped(self):
        html = html_render("?[%{{ q }} A]")

        assert 'data-properties="{&quot;variableName&quot;: &quot;q&quot;' in html

    def test_code_block_untouched(self):
        html = html_render("```\n?[%{{x}} y]\n```")

        assert "custom-variable" not in html
        assert "?[%{{x}} y]" in html
