"""
Custom Pygments lexer for Markdown with ?[...] interactive tags

Used by the CLI's --highlight option to show where controls, variables and
the constructs the typewriter treats as atomic sit in a source.

Token types:
- Keyword: '?[' and ']' around an interactive tag
- Name.Variable: %{{ variable }} bindings
- String: Button labels
- Name.Attribute: //value suffixes of labels
- Punctuation: Label separators (| and ｜)
- Comment: '...' placeholder marker and placeholder text
- String.Backtick: Inline code and fenced code blocks
- Generic.Strong / Generic.Emph: Bold and italic spans
- Name.Tag: Links
"""

from pygments.lexer import RegexLexer, bygroups
from pygments.token import (
    Text,
    Punctuation,
    Name,
    String,
    Keyword,
    Comment,
    Generic,
)


class FlowLexer(RegexLexer):
    """
    Lexer for conversational Markdown with interactive controls

    Example:
        Pick one: ?[%{{ color }} Red//r | Blue | ...other]

    Tokens:
        ?[ → Keyword
        %{{ color }} → Name.Variable
        Red → String
        //r → Name.Attribute
        | → Punctuation
        ...other → Comment
        ] → Keyword
    """

    name = 'MarkdownFlow'
    aliases = ['markdownflow', 'flow']
    filenames = ['*.flow.md']

    tokens = {
        'root': [
            # Fenced code blocks
            (r'```[\s\S]*?```', String.Backtick),

            # Inline code
            (r'`[^`\n]*`', String.Backtick),

            # Interactive tag opener
            (r'\?\[', Keyword, 'tag'),

            # Bold, then italic
            (r'\*\*[^*\n]+\*\*', Generic.Strong),
            (r'\*[^*\n]+\*', Generic.Emph),

            # Links
            (r'(\[)([^\]\n]*)(\]\()([^)\n]*)(\))',
             bygroups(Punctuation, Name.Tag, Punctuation, Name.Attribute, Punctuation)),

            # Everything else is text
            (r'[^`?*\[]+', Text),
            (r'.', Text),
        ],

        'tag': [
            # Closing bracket pops back to prose
            (r'\]', Keyword, '#pop'),

            # Variable binding
            (r'%\{\{\s*\w*\s*\}\}', Name.Variable),

            # Placeholder marker and text run to the closing bracket
            (r'\.\.\.[^\]]*', Comment),

            # Label separators
            (r'[|｜]', Punctuation),

            # Explicit button value
            (r'//[^\]|｜]*', Name.Attribute),

            # Button labels
            (r'[^\]|｜/.]+', String),
            (r'.', String),
        ],
    }


def get_lexer() -> FlowLexer:
    """
    Get the FlowLexer instance

    Returns:
        FlowLexer instance ready for use with Pygments
    """
    return FlowLexer()
