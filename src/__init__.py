"""
flowtype - Streaming typewriter reveal for conversational Markdown

Parses the ?[...] interactive-control syntax embedded in chat Markdown and
reveals streaming text token by token without ever exposing a half-written
Markdown construct.
"""

__version__ = "1.0.0"

from .lib import (
    Typewriter,
    StreamTokenizer,
    RevealScheduler,
    MarkdownFlow,
    interaction_parse,
    button_parse,
    tree_transform,
    LOG,
    state_connectToLogger,
)

__all__ = [
    "Typewriter",
    "StreamTokenizer",
    "RevealScheduler",
    "MarkdownFlow",
    "interaction_parse",
    "button_parse",
    "tree_transform",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
