"""
Pygments lexer tests
"""

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.token import Comment, Generic, Keyword, Name, Punctuation, String

from flowtype.lib.lexer import FlowLexer, get_lexer


def lex(text):
    return list(get_lexer().get_tokens(text))


class TestInteractiveTag:
    """Parts of a ?[...] tag"""

    def test_tag_parts(self):
        tokens = lex("?[%{{ c }} Red//r | Blue | ...other]\n")

        assert tokens[0] == (Keyword, "?[")
        assert tokens[1] == (Name.Variable, "%{{ c }}")
        assert (Name.Attribute, "//r ") in tokens
        assert (Punctuation, "|") in tokens
        assert (Comment, "...other") in tokens
        assert (Keyword, "]") in tokens

    def test_fullwidth_separator(self):
        tokens = lex("?[%{{ c }} 是｜否]\n")

        assert (Punctuation, "｜") in tokens

    def test_bare_button(self):
        tokens = lex("?[Continue]\n")

        assert tokens[:3] == [(Keyword, "?["), (String, "Continue"), (Keyword, "]")]


class TestMarkdown:
    """Constructs the typewriter reveals whole"""

    def test_inline_code(self):
        assert (String.Backtick, "`x`") in lex("run `x` now\n")

    def test_code_block_hides_tag(self):
        tokens = lex("```\n?[%{{ c }} A]\n```\n")

        assert tokens[0] == (String.Backtick, "```\n?[%{{ c }} A]\n```")

    def test_bold_and_italic(self):
        tokens = lex("**b** *i*\n")

        assert (Generic.Strong, "**b**") in tokens
        assert (Generic.Emph, "*i*") in tokens

    def test_link(self):
        assert (Name.Tag, "docs") in lex("[docs](http://x)\n")


class TestLexer:

    def test_lossless(self):
        text = "Hi **there**? Pick ?[%{{ c }} A//a | ...b] or `code`.\n"

        assert "".join(value for _, value in lex(text)) == text

    def test_registered_names(self):
        assert "markdownflow" in FlowLexer.aliases

    def test_terminal_highlight(self):
        output = highlight("?[%{{ c }} A]\n", get_lexer(), TerminalFormatter())

        assert "c }}" in output
