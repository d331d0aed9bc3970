from __future__ import annotations

import logging
import signal
from contextlib import contextmanager
from typing import Any, Dict, Iterator

from ..errors import OperationInterruptedError

logger = logging.getLogger(__name__)

# SIGINT already arrives as KeyboardInterrupt.
_HANDLED = ("SIGTERM", "SIGHUP")


def _raise_interrupted(signum: int, frame: Any) -> None:
    raise OperationInterruptedError(f"Interrupted by {signal.Signals(signum).name}")


@contextmanager
def interrupt_on_signals() -> Iterator[None]:
    """Turn termination signals into OperationInterruptedError for the block.

    Raising from the handler unwinds the stack, so context managers and
    finally blocks (temporary directory cleanup) run before exit.
    """

    previous: Dict[signal.Signals, Any] = {}
    for name in _HANDLED:
        sig = getattr(signal, name, None)
        if sig is None:
            continue
        previous[sig] = signal.signal(sig, _raise_interrupted)
    try:
        yield
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)
