"""
Reveal scheduler: shows a session's tokens one tick at a time

Each tick appends the next token's content to the session's display text.
Ticks are driven by an asyncio TimerHandle from loop.call_later(), held by
the scheduler so cancelling is one synchronous call.

States:
    IDLE      nothing to show yet, waiting for tokens
    RUNNING   a tick is scheduled
    COMPLETE  every token is shown and the session is finalized

Completion fires once. It is re-armed only by reset(), which the
typewriter calls when unrelated content starts a fresh session.
"""

import asyncio
from enum import Enum
from typing import Any, Callable, Optional

from ..models.session import StreamSession
from .log import LOG


UpdateCallback = Callable[[str, bool], None]
CompleteCallback = Callable[[], None]


class ScheduleError(Exception):
    """Raised when the scheduler is configured with an unusable timing"""
    pass


class SchedulerState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETE = "complete"


class RevealScheduler:
    """
    Timer-driven reveal over a StreamSession

    The token list is read, never written; the scheduler only moves
    session.reveal_cursor and grows session.display_text.
    """

    def __init__(
        self,
        session: StreamSession,
        delay: float,
        on_update: Optional[UpdateCallback] = None,
        on_complete: Optional[CompleteCallback] = None,
        loop: Optional[Any] = None,
    ) -> None:
        """
        Args:
            session: Session whose tokens are revealed
            delay: Seconds between two ticks
            on_update: Called with (display_text, is_complete) after every
                       change of the display text or completion state
            on_complete: Called once when the reveal completes
            loop: Object providing call_later(); defaults to the running
                  asyncio loop at the time a tick is scheduled
        """
        if delay < 0:
            raise ScheduleError(f"Reveal delay must not be negative, got {delay}")
        self.session = session
        self.delay = delay
        self.on_update = on_update
        self.on_complete = on_complete
        self.loop = loop
        self.state = SchedulerState.IDLE
        self.completed = asyncio.Event()
        self._timer: Optional[asyncio.TimerHandle] = None
        self._fired = False

    @property
    def is_running(self) -> bool:
        return self._timer is not None

    def tokens_arrived(self) -> None:
        """
        Wake up after the token list grew or the session was finalized

        Safe to call at any time; a tick already scheduled is left alone.
        """
        if self._timer is not None:
            return
        if self.session.tokens_pending() > 0:
            self.state = SchedulerState.RUNNING
            self.session.completed = False
            self.completed.clear()
            self.timer_arm()
        else:
            self.idle_settle()

    def tick(self) -> None:
        """Reveal one token, or settle when caught up"""
        self._timer = None
        session = self.session
        if session.reveal_cursor < len(session.tokens):
            token = session.tokens[session.reveal_cursor]
            session.display_text += token.content
            session.reveal_cursor += 1
            self.update_notify()
            self.timer_arm()
        else:
            self.idle_settle()

    def display_set(self, text: str) -> None:
        """
        Bypass timing: show text at once and complete synchronously

        Used when typing is disabled; the session should already be
        finalized so its tokens cover text.
        """
        self.cancel()
        self.session.display_text = text
        self.session.reveal_cursor = len(self.session.tokens)
        self.complete_enter()

    def cancel(self) -> None:
        """Drop the scheduled tick, if any"""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def reset(self) -> None:
        """Cancel, forget progress and re-arm the completion signal"""
        self.progress_clear()
        self._fired = False

    def reveal_restart(self) -> None:
        """
        Reveal the same tokens again from the first one

        on_complete has already fired for these tokens and does not fire
        a second time.
        """
        self.progress_clear()
        self.tokens_arrived()

    def progress_clear(self) -> None:
        self.cancel()
        self.session.reveal_cursor = 0
        self.session.display_text = ""
        self.session.completed = False
        self.state = SchedulerState.IDLE
        self.completed.clear()

    def timer_arm(self) -> None:
        loop = self.loop if self.loop is not None else asyncio.get_running_loop()
        self._timer = loop.call_later(self.delay, self.tick)

    def idle_settle(self) -> None:
        """Caught up: complete if no growth can follow, otherwise wait"""
        if self.session.finalized:
            self.complete_enter()
        elif self.state is not SchedulerState.IDLE:
            self.state = SchedulerState.IDLE
            self.update_notify()

    def complete_enter(self) -> None:
        self.state = SchedulerState.COMPLETE
        self.session.completed = True
        self.completed.set()
        self.update_notify()
        if not self._fired:
            self._fired = True
            LOG(f"Reveal complete after {self.session.reveal_cursor} tokens", level=2)
            if self.on_complete is not None:
                self.on_complete()

    def update_notify(self) -> None:
        if self.on_update is not None:
            self.on_update(self.session.display_text, self.session.completed)
