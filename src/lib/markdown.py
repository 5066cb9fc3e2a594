"""
Markdown engine adapter using markdown-it-py

Parses display text into markdown-it tokens, runs the interactive-tag tree
transform over them and renders HTML in which every interaction token
becomes a <custom-variable> element that a front end can hydrate.

Configured like a chat renderer: CommonMark plus tables and strikethrough,
with single newlines kept as line breaks.
"""

import json
from typing import Any, List, Optional

from markdown_it import MarkdownIt
from markdown_it.common.utils import escapeHtml
from markdown_it.token import Token

from ..models.interaction import ParsedInteraction
from .transform import INTERACTION_TAG, INTERACTION_TYPE, MarkdownItTree, tree_transform


def render_interaction(self: Any, tokens: List[Token], idx: int, options: Any, env: Any) -> str:
    """Render rule for interaction tokens"""
    interaction: ParsedInteraction = tokens[idx].meta["interaction"]
    properties = escapeHtml(json.dumps(interaction.properties_get(), ensure_ascii=False))
    parts = [f'<{INTERACTION_TAG} data-properties="{properties}">']
    for index, text in enumerate(interaction.button_texts):
        value = escapeHtml(interaction.buttonValue_get(index))
        parts.append(f'<button type="button" value="{value}">{escapeHtml(text)}</button>')
    if interaction.placeholder is not None:
        parts.append(f'<input type="text" placeholder="{escapeHtml(interaction.placeholder)}">')
    parts.append(f"</{INTERACTION_TAG}>")
    return "".join(parts)


def parser_create() -> MarkdownIt:
    """Create a configured markdown-it parser"""
    md = MarkdownIt("commonmark", {"breaks": True})
    md.enable("table")
    md.enable("strikethrough")
    md.add_render_rule(INTERACTION_TYPE, render_interaction)
    return md


_parser: Optional[MarkdownIt] = None


def parser_get() -> MarkdownIt:
    """Get or create the shared parser instance"""
    global _parser
    if _parser is None:
        _parser = parser_create()
    return _parser


def markdown_parse(text: str, include_bare: bool = True) -> List[Token]:
    """
    Parse Markdown and convert its interactive tags

    Args:
        text: Markdown source (typically the current display text)
        include_bare: Also convert bare ?[label] buttons

    Returns:
        markdown-it block token list with interaction tokens spliced into
        the children of inline tokens
    """
    tokens = parser_get().parse(text)
    tree_transform(tokens, MarkdownItTree(), include_bare=include_bare)
    return tokens


def html_render(text: str, include_bare: bool = True) -> str:
    """
    Render Markdown with interactive controls to HTML

    Example:
        >>> html_render("Go ?[%{{ next }} Yes | No]")
        '<p>Go <custom-variable data-properties="...">...</custom-variable></p>\\n'
    """
    md = parser_get()
    tokens = markdown_parse(text, include_bare=include_bare)
    return md.renderer.render(tokens, md.options, {})
