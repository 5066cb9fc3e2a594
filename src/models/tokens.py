"""
Reveal token and tokenizer state models

Types shared by the streaming tokenizer and the reveal scheduler.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Optional


class TokenKind(Enum):
    """Whether a token is a whole construct or a single plain character"""
    ATOMIC = "atomic"
    CHAR = "char"


class TokenSubtype(Enum):
    """Markdown construct carried by an atomic token"""
    CODE_BLOCK = "code-block"
    INLINE_CODE = "inline-code"
    BOLD = "bold"
    ITALIC = "italic"
    LINK = "link"
    INTERACTIVE_TAG = "interactive-tag"


class TokenizerMode(Enum):
    """States of the streaming tokenizer"""
    NORMAL = "normal"
    CODE_BLOCK_FENCE = "code_block"
    INLINE_CODE = "inline_code"
    BOLD = "bold"
    ITALIC = "italic"
    LINK_TEXT = "link_text"
    LINK_URL = "link_url"
    INTERACTIVE_TAG = "interactive_tag"


# Subtype an unterminated construct is flushed with
MODE_SUBTYPES = {
    TokenizerMode.CODE_BLOCK_FENCE: TokenSubtype.CODE_BLOCK,
    TokenizerMode.INLINE_CODE: TokenSubtype.INLINE_CODE,
    TokenizerMode.BOLD: TokenSubtype.BOLD,
    TokenizerMode.ITALIC: TokenSubtype.ITALIC,
    TokenizerMode.LINK_TEXT: TokenSubtype.LINK,
    TokenizerMode.LINK_URL: TokenSubtype.LINK,
    TokenizerMode.INTERACTIVE_TAG: TokenSubtype.INTERACTIVE_TAG,
}


@dataclass
class RevealToken:
    """
    Smallest unit the reveal scheduler shows at once

    Attributes:
        content: Raw source text of the unit (never empty)
        kind: ATOMIC for a whole construct, CHAR for one plain character
        subtype: Construct label for ATOMIC tokens, None for CHAR tokens
    """
    content: str
    kind: TokenKind
    subtype: Optional[TokenSubtype] = None

    @classmethod
    def char_make(cls, char: str) -> "RevealToken":
        return cls(content=char, kind=TokenKind.CHAR)

    @classmethod
    def atomic_make(cls, content: str, subtype: TokenSubtype) -> "RevealToken":
        return cls(content=content, kind=TokenKind.ATOMIC, subtype=subtype)


@dataclass
class TokenizerState:
    """
    Persisted state of the tokenizer between two text updates

    Attributes:
        mode: Current state machine mode
        pending_buffer: Raw characters of the construct being read,
                        delimiters included
        plain_buffer: Plain characters not yet emitted as CHAR tokens
        lookahead: Arrived characters whose classification depends on
                   characters that have not arrived yet
    """
    mode: TokenizerMode = TokenizerMode.NORMAL
    pending_buffer: str = ""
    plain_buffer: str = ""
    lookahead: str = ""

    def is_clean(self) -> bool:
        """True when nothing is buffered"""
        return (
            self.mode is TokenizerMode.NORMAL
            and not self.pending_buffer
            and not self.plain_buffer
            and not self.lookahead
        )
