"""
Shared fixtures

FakeLoop stands in for the asyncio loop the reveal scheduler arms its timer
on, so reveal ticks can be stepped by hand.
"""

import pytest


class FakeTimer:
    def __init__(self, loop: "FakeLoop", delay: float, callback) -> None:
        self.loop = loop
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True
        if self in self.loop.timers:
            self.loop.timers.remove(self)


class FakeLoop:
    """Records call_later() requests; step() fires the oldest one"""

    def __init__(self) -> None:
        self.timers: list[FakeTimer] = []
        self.fired = 0

    def call_later(self, delay: float, callback) -> FakeTimer:
        timer = FakeTimer(self, delay, callback)
        self.timers.append(timer)
        return timer

    def step(self) -> bool:
        if not self.timers:
            return False
        timer = self.timers.pop(0)
        self.fired += 1
        timer.callback()
        return True

    def run_all(self, limit: int = 10000) -> int:
        steps = 0
        while steps < limit and self.step():
            steps += 1
        return steps


@pytest.fixture
def fake_loop() -> FakeLoop:
    return FakeLoop()
