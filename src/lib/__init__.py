"""
flowtype - Streaming typewriter reveal for conversational Markdown

Interactive-control syntax parsing, tree transform, streaming tokenizer
and reveal scheduling.
"""

__version__ = "1.0.0"

from .syntax import (
    InteractionParser,
    interaction_parse,
    button_parse,
    interaction_find,
    interactions_findAll,
    variables_list,
)
from .transform import TextTree, MarkdownItTree, DictTree, tree_transform
from .tokenizer import StreamTokenizer, UpdateResult, tokens_make
from .scheduler import RevealScheduler, SchedulerState, ScheduleError
from .typewriter import Typewriter
from .flow import MarkdownFlow, FlowBlock, interaction_send
from .preprocess import markdown_normalize
from .markdown import markdown_parse, html_render
from .log import LOG, state_connectToLogger

__all__ = [
    "InteractionParser",
    "interaction_parse",
    "button_parse",
    "interaction_find",
    "interactions_findAll",
    "variables_list",
    "TextTree",
    "MarkdownItTree",
    "DictTree",
    "tree_transform",
    "StreamTokenizer",
    "UpdateResult",
    "tokens_make",
    "RevealScheduler",
    "SchedulerState",
    "ScheduleError",
    "Typewriter",
    "MarkdownFlow",
    "FlowBlock",
    "interaction_send",
    "markdown_normalize",
    "markdown_parse",
    "html_render",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
