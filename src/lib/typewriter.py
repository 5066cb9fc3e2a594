"""
Typewriter: one streamed document, tokenized and revealed over time

Ties a StreamSession to the streaming tokenizer and the reveal scheduler.
Content updates run synchronously (tokenize, then wake the scheduler);
timer ticks reveal one token each.

Usage:
    typewriter = Typewriter(typing_speed=0.03, on_update=print)
    typewriter.content_update("Hello **wo")
    typewriter.content_update("Hello **world**")
    typewriter.finish()
    await typewriter.wait_complete()
"""

from typing import Any, List, Optional

from ..config import appsettings
from ..models.session import StreamSession
from ..models.tokens import RevealToken
from .log import LOG
from .scheduler import CompleteCallback, RevealScheduler, UpdateCallback
from .tokenizer import StreamTokenizer, UpdateResult


class Typewriter:
    """
    Reveal controller for a single content stream

    Attributes:
        session: The owned StreamSession
        tokenizer: Streaming tokenizer
        scheduler: Reveal scheduler bound to session
    """

    def __init__(
        self,
        typing_speed: Optional[float] = None,
        disabled: Optional[bool] = None,
        on_update: Optional[UpdateCallback] = None,
        on_complete: Optional[CompleteCallback] = None,
        loop: Optional[Any] = None,
    ) -> None:
        """
        Args:
            typing_speed: Seconds per reveal tick (default: settings)
            disabled: Show content at once (default: settings)
            on_update: Called with (display_text, is_complete)
            on_complete: Called once per session when the reveal completes
            loop: Timer source for the scheduler (default: running loop)
        """
        speed = appsettings.typing_speed if typing_speed is None else typing_speed
        self._disabled = appsettings.disable_typing if disabled is None else disabled
        self.session = StreamSession()
        self.tokenizer = StreamTokenizer()
        self.scheduler = RevealScheduler(
            self.session, speed, on_update=on_update, on_complete=on_complete, loop=loop
        )

    @property
    def display_text(self) -> str:
        return self.session.display_text

    @property
    def is_complete(self) -> bool:
        return self.session.completed

    @property
    def is_typing(self) -> bool:
        return self.scheduler.is_running

    @property
    def disabled(self) -> bool:
        return self._disabled

    @disabled.setter
    def disabled(self, value: bool) -> None:
        """Disabling cancels the reveal and shows everything received"""
        self._disabled = value
        if value:
            self.tokenizer.session_flush(self.session)
            self.scheduler.display_set(self.session.last_seen_text)

    def content_update(self, text: str, streaming: bool = True) -> UpdateResult:
        """
        Deliver the full current text

        Args:
            text: Full text so far; normally an extension of the previous one
            streaming: False when text is complete and nothing will follow

        Returns:
            UpdateResult from the tokenizer
        """
        result = self.tokenizer.text_update(self.session, text)
        if result.reset:
            self.scheduler.reset()

        if self._disabled:
            self.tokenizer.session_flush(self.session)
            self.scheduler.display_set(text)
            return result

        if not streaming:
            self.tokenizer.session_flush(self.session)
        self.scheduler.tokens_arrived()
        return result

    def finish(self) -> None:
        """Producer signals that no more input will arrive"""
        self.tokenizer.session_flush(self.session)
        LOG(f"Stream finished with {len(self.session.tokens)} tokens", level=2)
        if self._disabled:
            self.scheduler.display_set(self.session.last_seen_text)
        else:
            self.scheduler.tokens_arrived()

    def reset(self) -> None:
        """Drop everything; the next update starts a fresh session"""
        self.scheduler.reset()
        self.tokenizer.session_reset(self.session)

    def start(self) -> None:
        """Replay the reveal from the first token"""
        self.scheduler.reveal_restart()

    def close(self) -> None:
        """Tear down: the consuming view is gone"""
        self.scheduler.cancel()

    def segments_get(self) -> List[RevealToken]:
        """Snapshot of the tokens produced so far"""
        return list(self.session.tokens)

    async def wait_complete(self) -> None:
        """Wait until the reveal completes"""
        await self.scheduler.completed.wait()
