"""
Source normalization tests
"""

from flowtype.lib.preprocess import escapes_decode, markdown_normalize


class TestEscapesDecode:
    """Backslash escapes left over from JSON transport"""

    def test_newline_and_tab(self):
        assert escapes_decode(r"a\nb\tc") == "a\nb\tc"

    def test_quotes(self):
        assert escapes_decode(r"say \"hi\" and \'bye\'") == "say \"hi\" and 'bye'"

    def test_unicode(self):
        assert escapes_decode(r"caf\u00e9") == "café"

    def test_escaped_backslash(self):
        """\\\\ decodes to one backslash and does not start a new escape"""
        assert escapes_decode(r"C:\\new") == "C:\\new"

    def test_unknown_escape_kept(self):
        assert escapes_decode(r"\q") == r"\q"


class TestMarkdownNormalize:

    def test_empty(self):
        assert markdown_normalize("") == ""
        assert markdown_normalize(None) == ""

    def test_crlf(self):
        assert markdown_normalize("a\r\nb") == "a\nb"

    def test_blank_lines_collapsed(self):
        assert markdown_normalize("a\n\n\n\nb") == "a\n\nb"

    def test_nbsp(self):
        assert markdown_normalize("a&nbsp;b\u00a0c") == "a b c"

    def test_double_escaped_newline(self):
        assert markdown_normalize(r"one\\\\ntwo") == "one\ntwo"

    def test_interactive_tag_untouched(self):
        text = "Pick ?[%{{ c }} A | B | ...other]"

        assert markdown_normalize(text) == text
