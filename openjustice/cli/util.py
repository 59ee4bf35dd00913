"""
Terminal helpers for the CLI: interrupt handling and line input.

A Ctrl-C or SIGTERM while a stream is open ends the call. The open response
is closed by the stream's own cleanup; here we only turn the interrupt into
a one-line message and exit code 130 instead of a traceback.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
import contextlib
import signal
import sys
from typing import Any

CANCELLED_EXIT = 130  # 128 + SIGINT


def _print_cancelled(msg: str = "✖ Cancelled") -> None:
    sys.stderr.write(f"\n{msg}\n")
    sys.stderr.flush()


def _raise_interrupt(_signum: int, _frame: Any) -> None:
    raise KeyboardInterrupt()


@contextlib.contextmanager
def _interrupts_cancel() -> Iterator[None]:
    """Treat SIGTERM like Ctrl-C and keep KeyboardInterrupt tracebacks off the screen."""
    previous_hook = sys.excepthook
    previous_term = signal.getsignal(signal.SIGTERM)

    def _hook(exc_type: type[BaseException], exc: BaseException, tb: Any) -> None:
        if issubclass(exc_type, KeyboardInterrupt):
            _print_cancelled()
            sys.exit(CANCELLED_EXIT)
        previous_hook(exc_type, exc, tb)

    sys.excepthook = _hook
    signal.signal(signal.SIGTERM, _raise_interrupt)
    try:
        yield
    finally:
        signal.signal(signal.SIGTERM, previous_term)
        sys.excepthook = previous_hook


def read_line(label: str) -> str | None:
    """Read one line of chat input. Returns None on EOF (Ctrl-D)."""
    try:
        return input(label)
    except EOFError:
        return None


def graceful_main(fn: Callable[[list[str]], int], argv: list[str]) -> int:
    """Run ``fn(argv)``; an interrupt prints a short notice and returns 130."""
    try:
        with _interrupts_cancel():
            return int(fn(argv) or 0)
    except KeyboardInterrupt:
        _print_cancelled()
        return CANCELLED_EXIT
