"""
Stream session model

A StreamSession is the single owned value that the tokenizer and the reveal
scheduler both mutate. Nothing about a stream lives anywhere else.
"""

from dataclasses import dataclass, field
from typing import List

from .tokens import RevealToken, TokenizerState


@dataclass
class StreamSession:
    """
    State of one streamed document

    Attributes:
        last_seen_text: Full text of the most recent content update
        tokenizer_state: Tokenizer mode and buffers carried across updates
        tokens: Append-only list of reveal tokens produced so far
        reveal_cursor: Number of tokens already shown
        display_text: Concatenated content of the shown tokens
        finalized: Producer signalled that no more input will arrive
        completed: Every token is shown and the session is finalized

    Invariants:
        0 <= reveal_cursor <= len(tokens)
        completed implies reveal_cursor == len(tokens) and finalized
    """
    last_seen_text: str = ""
    tokenizer_state: TokenizerState = field(default_factory=TokenizerState)
    tokens: List[RevealToken] = field(default_factory=list)
    reveal_cursor: int = 0
    display_text: str = ""
    finalized: bool = False
    completed: bool = False

    def tokens_pending(self) -> int:
        """Number of tokens produced but not yet revealed"""
        return len(self.tokens) - self.reveal_cursor

    def clear(self) -> None:
        """Return to the freshly created state"""
        self.last_seen_text = ""
        self.tokenizer_state = TokenizerState()
        self.tokens = []
        self.reveal_cursor = 0
        self.display_text = ""
        self.finalized = False
        self.completed = False
