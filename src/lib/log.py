"""
Centralized logging using Loguru with context-aware verbosity.

LOG() respects the verbosity of whatever state object was last connected
with state_connectToLogger(), so library code (tokenizer, scheduler, tree
transform) can log without having the CLI's ProgramState passed down to it.

Verbosity levels:
    1 = Normal output (default)
    2 = Verbose: session resets, flushes, completion
    3 = Debug: per-token and per-match traces

Usage:
    from flowtype.lib.log import LOG, state_connectToLogger

    state_connectToLogger(state)
    LOG("Replaying 42 stream events", level=2)
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

# Context variable to hold current ProgramState (or any object with .verbosity)
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{function: <20}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Bind a state object to the logging context.

    Args:
        state: Any object with an integer ``verbosity`` attribute
    """
    _program_state.set(state)


def verbosity_get() -> int:
    """Verbosity of the connected state, 0 when nothing is connected"""
    state = _program_state.get()
    return getattr(state, 'verbosity', 0) if state is not None else 0


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if the connected state's verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=normal, 2=verbose, 3=debug)
        **kwargs: Additional loguru metadata

    Example:
        LOG("Stream finished", level=1)
        LOG("Session reset: content is not an extension", level=2)
        LOG("Token 17: bold '**world**'", level=3)
    """
    if verbosity_get() >= level:
        logger.opt(depth=1).debug(message, **kwargs)
