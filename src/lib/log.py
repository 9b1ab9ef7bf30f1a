"""
Diagnostic output for mdsh runs

Everything mdsh says about what it is doing goes through LOG(): a notice
for each command it runs and each link it follows, and with -v/-vv the
work directory, exit statuses and per-directive details. It is written
to stderr through loguru and never ends up in the regenerated document,
which may itself be going to stdout.

How much is said depends on the verbosity of the run in progress. The
pipeline registers its ProgramState once; library code then calls LOG()
without carrying the state around.

Usage:
    from .log import LOG, state_connectToLogger

    # run() in __main__, before the stages:
    state_connectToLogger(state)

    # Regenerator, for each directive it fills:
    LOG(spec.notice_make(directive.description), level=1)    # "$ make docs"
    LOG(f"`{directive.payload}` exited with status 2", level=2)
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

# ProgramState of the run in progress
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{function: <16}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Register the state whose verbosity gates LOG().

    Args:
        state: Object with an integer ``verbosity`` attribute
    """
    _program_state.set(state)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Emit a diagnostic line when the run is verbose enough.

    Nothing is emitted before state_connectToLogger() has been called.

    Args:
        message: Text of the line
        level: Verbosity needed to see it
            1 = default: the `$ cmd` / `> cmd` / `[$ link]` / `[> link]` notices
            2 = -v: paths, counts, non-zero exit statuses
            3 = -vv: every directive found, foreign-style blocks the cleaner strips
        **kwargs: Passed through to loguru
    """
    state = _program_state.get()

    if state and hasattr(state, 'verbosity') and state.verbosity >= level:
        logger.opt(depth=1).debug(message, **kwargs)
