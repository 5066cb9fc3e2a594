"""
Streaming tokenizer for the typewriter reveal

Segments growing Markdown into reveal tokens: plain prose becomes one token
per character, while code fences, inline code, bold, italic, links and
?[...] interactive tags become a single atomic token each. A construct is
held back until its closing delimiter arrives, so a reveal never shows half
a '**' or an unclosed fence.

State machine (from NORMAL, by lookahead):

    ?[      -> INTERACTIVE_TAG   closes on ]
    ```     -> CODE_BLOCK_FENCE  closes on ```
    `       -> INLINE_CODE       closes on `
    **      -> BOLD              closes on **
    *       -> ITALIC            closes on * not followed by *
    [       -> LINK_TEXT         moves to LINK_URL on ](, closes on )

The tokenizer is driven with the full current text on every update. When
the new text extends the previous one only the new suffix is fed through
the machine; anything else resets the session and retokenizes.

Characters whose meaning depends on input that has not arrived yet (a
trailing '*' that may become '**', a '?' that may start '?[') wait in the
state's lookahead, so the token list never depends on how the text was
chunked.

Example:
    >>> session = StreamSession()
    >>> tokenizer = StreamTokenizer()
    >>> result = tokenizer.text_update(session, "Hello **wo")
    >>> [t.content for t in session.tokens]
    ['H', 'e', 'l', 'l', 'o', ' ']
    >>> result = tokenizer.text_update(session, "Hello **world** there")
    >>> session.tokens[6].content
    '**world**'
"""

from dataclasses import dataclass, field
from typing import List, Optional

from ..models.session import StreamSession
from ..models.tokens import (
    MODE_SUBTYPES,
    RevealToken,
    TokenizerMode,
    TokenizerState,
    TokenSubtype,
)
from .log import LOG


FENCE = "```"


@dataclass
class UpdateResult:
    """
    Outcome of one content update

    Attributes:
        reset: The text did not extend the previous one; the session was
               cleared and retokenized
        appended: Tokens added to the session by this update
    """
    reset: bool = False
    appended: List[RevealToken] = field(default_factory=list)


class StreamTokenizer:
    """
    Incremental state machine over a StreamSession

    The tokenizer itself is stateless; everything it carries between calls
    lives in session.tokenizer_state.
    """

    def text_update(self, session: StreamSession, text: str) -> UpdateResult:
        """
        Bring the session's tokens up to date with text

        Args:
            session: Session to update in place
            text: Full current text

        Returns:
            UpdateResult telling whether a reset happened and which tokens
            were appended
        """
        previous = session.last_seen_text
        if text == previous:
            return UpdateResult()

        if text.startswith(previous):
            appended = self.chars_feed(session, text[len(previous):])
            session.last_seen_text = text
            session.finalized = False
            session.completed = False
            return UpdateResult(reset=False, appended=appended)

        LOG(
            f"Content is not an extension ({len(previous)} -> {len(text)} chars), retokenizing",
            level=2,
        )
        self.session_reset(session)
        appended = self.chars_feed(session, text)
        session.last_seen_text = text
        return UpdateResult(reset=True, appended=appended)

    def session_reset(self, session: StreamSession) -> None:
        """Discard tokens, tokenizer state and reveal progress together"""
        session.clear()

    def chars_feed(self, session: StreamSession, chars: str) -> List[RevealToken]:
        """
        Run new characters through the state machine

        Args:
            session: Session whose tokenizer state is continued
            chars: Characters that arrived since the previous call

        Returns:
            Tokens emitted by this call, already appended to session.tokens
        """
        emitted = self.machine_run(session.tokenizer_state, chars, final=False)
        session.tokens.extend(emitted)
        return emitted

    def session_flush(self, session: StreamSession) -> List[RevealToken]:
        """
        Finalize the session: no more input will arrive

        Held lookahead is resolved as if the text ended there, buffered
        plain characters flush as CHAR tokens and an unterminated construct
        flushes as one token tagged with the subtype it was being read as.

        Returns:
            Tokens emitted by the flush, already appended to session.tokens
        """
        state = session.tokenizer_state
        emitted = self.machine_run(state, "", final=True)

        if state.pending_buffer:
            subtype = MODE_SUBTYPES[state.mode]
            LOG(f"Flushing unterminated {subtype.value} construct", level=2)
            emitted.append(RevealToken.atomic_make(state.pending_buffer, subtype))
            state.pending_buffer = ""
        state.mode = TokenizerMode.NORMAL

        session.tokens.extend(emitted)
        session.finalized = True
        return emitted

    def machine_run(self, state: TokenizerState, chars: str, final: bool) -> List[RevealToken]:
        """
        Advance the state machine over held lookahead plus chars

        Args:
            state: Tokenizer state, mutated in place
            chars: Newly arrived characters
            final: True when no character will follow chars

        Returns:
            Tokens emitted
        """
        source = state.lookahead + chars
        state.lookahead = ""
        emitted: List[RevealToken] = []
        pos = 0

        while pos < len(source):
            step = self.step_take(state, source, pos, final, emitted)
            if step is None:
                # undecidable until more input arrives
                state.lookahead = source[pos:]
                break
            pos += step

        self.plain_flush(state, emitted)
        return emitted

    def step_take(
        self,
        state: TokenizerState,
        source: str,
        pos: int,
        final: bool,
        emitted: List[RevealToken],
    ) -> Optional[int]:
        """
        Consume the next unit of source at pos

        Returns:
            Number of characters consumed, or None when the decision needs
            characters beyond the end of source
        """
        char = source[pos]
        mode = state.mode

        if mode is TokenizerMode.NORMAL:
            return self.normal_step(state, source, pos, final, emitted)

        if mode is TokenizerMode.CODE_BLOCK_FENCE:
            if char == "`":
                run = self.lookahead_match(source, pos, FENCE, final)
                if run is None:
                    return None
                if run:
                    state.pending_buffer += FENCE
                    self.construct_close(state, TokenSubtype.CODE_BLOCK, emitted)
                    return len(FENCE)
            state.pending_buffer += char
            return 1

        if mode is TokenizerMode.INLINE_CODE:
            state.pending_buffer += char
            if char == "`":
                self.construct_close(state, TokenSubtype.INLINE_CODE, emitted)
            return 1

        if mode is TokenizerMode.BOLD:
            if char == "*":
                run = self.lookahead_match(source, pos, "**", final)
                if run is None:
                    return None
                if run:
                    state.pending_buffer += "**"
                    self.construct_close(state, TokenSubtype.BOLD, emitted)
                    return 2
            state.pending_buffer += char
            return 1

        if mode is TokenizerMode.ITALIC:
            if char == "*":
                run = self.lookahead_match(source, pos, "**", final)
                if run is None:
                    return None
                state.pending_buffer += char
                if not run:
                    self.construct_close(state, TokenSubtype.ITALIC, emitted)
                return 1
            state.pending_buffer += char
            return 1

        if mode is TokenizerMode.LINK_TEXT:
            if char == "]":
                run = self.lookahead_match(source, pos, "](", final)
                if run is None:
                    return None
                if run:
                    state.pending_buffer += "]("
                    state.mode = TokenizerMode.LINK_URL
                    return 2
            state.pending_buffer += char
            return 1

        if mode is TokenizerMode.LINK_URL:
            state.pending_buffer += char
            if char == ")":
                self.construct_close(state, TokenSubtype.LINK, emitted)
            return 1

        # INTERACTIVE_TAG
        state.pending_buffer += char
        if char == "]":
            self.construct_close(state, TokenSubtype.INTERACTIVE_TAG, emitted)
        return 1

    def normal_step(
        self,
        state: TokenizerState,
        source: str,
        pos: int,
        final: bool,
        emitted: List[RevealToken],
    ) -> Optional[int]:
        """Transition table out of NORMAL"""
        char = source[pos]

        if char == "?":
            run = self.lookahead_match(source, pos, "?[", final)
            if run is None:
                return None
            if run:
                return self.construct_open(state, TokenizerMode.INTERACTIVE_TAG, "?[", emitted)

        elif char == "`":
            run = self.lookahead_match(source, pos, FENCE, final)
            if run is None:
                return None
            if run:
                return self.construct_open(state, TokenizerMode.CODE_BLOCK_FENCE, FENCE, emitted)
            return self.construct_open(state, TokenizerMode.INLINE_CODE, "`", emitted)

        elif char == "*":
            run = self.lookahead_match(source, pos, "**", final)
            if run is None:
                return None
            if run:
                return self.construct_open(state, TokenizerMode.BOLD, "**", emitted)
            return self.construct_open(state, TokenizerMode.ITALIC, "*", emitted)

        elif char == "[":
            return self.construct_open(state, TokenizerMode.LINK_TEXT, "[", emitted)

        state.plain_buffer += char
        return 1

    def lookahead_match(self, source: str, pos: int, trigger: str, final: bool) -> Optional[bool]:
        """
        Decide whether trigger starts at pos

        Returns:
            True or False once decidable; None when source ends inside a
            prefix of trigger and more input may still arrive
        """
        window = source[pos:pos + len(trigger)]
        if window == trigger:
            return True
        if len(window) < len(trigger) and trigger.startswith(window) and not final:
            return None
        return False

    def construct_open(
        self,
        state: TokenizerState,
        mode: TokenizerMode,
        opener: str,
        emitted: List[RevealToken],
    ) -> int:
        self.plain_flush(state, emitted)
        state.mode = mode
        state.pending_buffer = opener
        return len(opener)

    def construct_close(
        self, state: TokenizerState, subtype: TokenSubtype, emitted: List[RevealToken]
    ) -> None:
        emitted.append(RevealToken.atomic_make(state.pending_buffer, subtype))
        LOG(f"Emitted {subtype.value} token {state.pending_buffer!r}", level=3)
        state.pending_buffer = ""
        state.mode = TokenizerMode.NORMAL

    def plain_flush(self, state: TokenizerState, emitted: List[RevealToken]) -> None:
        """Emit buffered plain characters as one CHAR token each"""
        emitted.extend(RevealToken.char_make(char) for char in state.plain_buffer)
        state.plain_buffer = ""


def tokens_make(text: str, final: bool = True) -> List[RevealToken]:
    """
    Tokenize a complete text in one call

    Args:
        text: Text to tokenize
        final: Flush held lookahead and unterminated constructs

    Returns:
        Reveal tokens for text
    """
    session = StreamSession()
    tokenizer = StreamTokenizer()
    tokenizer.text_update(session, text)
    if final:
        tokenizer.session_flush(session)
    return session.tokens
