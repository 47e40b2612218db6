from __future__ import annotations

import logging
import signal
import threading
from contextlib import contextmanager
from typing import Iterator, List, Sequence

from ..errors import SessionInterrupted

logger = logging.getLogger(__name__)

CLEANUP_SIGNALS: Sequence[int] = (signal.SIGTERM, signal.SIGHUP)
DEFERRED_SIGNALS: Sequence[int] = (signal.SIGINT, signal.SIGTERM, signal.SIGHUP)


def _restore(previous) -> None:
    for signum, handler in previous.items():
        signal.signal(signum, handler if handler is not None else signal.SIG_DFL)


@contextmanager
def raise_on_signals(signums: Sequence[int] = CLEANUP_SIGNALS) -> Iterator[None]:
    """Turn termination signals into an exception so finally blocks run."""

    def _handler(signum, frame):
        raise SessionInterrupted(signum)

    previous = {}
    for signum in signums:
        previous[signum] = signal.signal(signum, _handler)
    try:
        yield
    finally:
        _restore(previous)


@contextmanager
def deferred_signals(signums: Sequence[int] = DEFERRED_SIGNALS) -> Iterator[None]:
    """Hold signals back until the block is done, then deliver them.

    Signals that arrive inside the block are re-raised afterwards against
    whatever handlers were installed before it.
    """

    # Handlers can only be installed from the main thread.
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    pending: List[int] = []

    def _record(signum, frame):
        logger.warning("Received %s, finishing mount table changes first", signal.Signals(signum).name)
        pending.append(signum)

    previous = {}
    for signum in signums:
        previous[signum] = signal.signal(signum, _record)
    try:
        yield
    finally:
        _restore(previous)
        for signum in dict.fromkeys(pending):
            signal.raise_signal(signum)
