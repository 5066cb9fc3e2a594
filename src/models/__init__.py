"""
Models package for flowtype

Data structures shared by the parser, tokenizer, scheduler and CLI pipeline.
"""

from .state import ProgramState, pipeline
from .interaction import SyntaxVariant, ParsedInteraction, InteractionMatch, SendContent
from .tokens import (
    TokenKind,
    TokenSubtype,
    TokenizerMode,
    RevealToken,
    TokenizerState,
)
from .session import StreamSession

__all__ = [
    "ProgramState",
    "pipeline",
    "SyntaxVariant",
    "ParsedInteraction",
    "InteractionMatch",
    "SendContent",
    "TokenKind",
    "TokenSubtype",
    "TokenizerMode",
    "RevealToken",
    "TokenizerState",
    "StreamSession",
]
