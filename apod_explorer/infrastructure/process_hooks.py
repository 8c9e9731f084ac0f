"""Process Hooks — last-resort logging for faults that escape request handling.

Invariants:
    - Uncaught synchronous exceptions are logged at CRITICAL, then the default
      hook runs and the interpreter exits non-zero
    - Unhandled async errors (never-retrieved task exceptions) are logged and
      the event loop keeps serving
    - KeyboardInterrupt is left to the default hook without a CRITICAL log
"""

import asyncio
import logging
import sys

logger = logging.getLogger(__name__)


def log_uncaught_exception(exc_type, exc_value, exc_traceback) -> None:
    if not issubclass(exc_type, KeyboardInterrupt):
        logger.critical(
            f"Uncaught exception: {exc_value}",
            exc_info=(exc_type, exc_value, exc_traceback),
        )
    sys.__excepthook__(exc_type, exc_value, exc_traceback)


def log_unhandled_async_error(
    loop: asyncio.AbstractEventLoop, context: dict,
) -> None:
    exc = context.get("exception")
    logger.error(
        f"Unhandled async error: {context.get('message', 'no message')}",
        exc_info=(type(exc), exc, exc.__traceback__) if exc else None,
    )


def install_process_hooks(loop: asyncio.AbstractEventLoop | None = None) -> None:
    """Install both hooks; loop defaults to the running loop when there is one."""
    sys.excepthook = log_uncaught_exception
    if loop is None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
    loop.set_exception_handler(log_unhandled_async_error)
