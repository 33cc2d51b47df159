"""
Event reporter: an unbounded queue drained by one worker thread.

Events are untyped. The default handler prints each event to a stream,
using the event's own render() method when it has one. Closing the
reporter enqueues a terminal marker; everything reported before the
close is handled before the worker exits.
"""

import queue
import sys
import threading
from collections.abc import Callable
from typing import Any, Optional, TextIO

from ..errors import ReporterClosedError
from ..logging.config import get_logger

logger = get_logger(__name__)

_CLOSED = object()


def render_event(event: Any) -> str:
    """Render an event as a single line of text."""
    render = getattr(event, "render", None)
    if callable(render):
        return render()
    return str(event)


class EventReporter:
    """Processes reported events in arrival order on a background thread."""

    def __init__(
        self,
        handler: Optional[Callable[[Any], None]] = None,
        stream: Optional[TextIO] = None,
        name: str = "solar-reporter"
    ):
        self.logger = logger.bind(reporter=name)
        self._handler = handler or self._print_event
        self._stream = stream
        self._queue: "queue.Queue[Any]" = queue.Queue()
        self._lock = threading.Lock()
        self._closed = False
        self._processed = 0
        self._errors = 0
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)

    def start(self) -> None:
        """Start the worker thread."""
        self._thread.start()
        self.logger.info("Event reporter started")

    def report(self, event: Any) -> None:
        """
        Enqueue an event. Never blocks.

        Raises:
            ReporterClosedError: If the reporter has been closed
        """
        with self._lock:
            if self._closed:
                raise ReporterClosedError("event reporter is closed")
            self._queue.put(event)

    def close(self, timeout: Optional[float] = None) -> bool:
        """
        Stop accepting events and wait for queued events to be handled.

        Returns:
            True if the worker finished within timeout
        """
        with self._lock:
            if not self._closed:
                self._closed = True
                self._queue.put(_CLOSED)

        if self._thread.is_alive():
            self._thread.join(timeout)

        finished = not self._thread.is_alive()
        self.logger.info(
            "Event reporter closed",
            finished=finished,
            processed=self._processed,
            errors=self._errors
        )
        return finished

    @property
    def closed(self) -> bool:
        return self._closed

    def get_stats(self) -> dict[str, Any]:
        """Get reporting statistics."""
        return {
            "processed": self._processed,
            "errors": self._errors,
            "pending": self._queue.qsize(),
            "running": self._thread.is_alive(),
        }

    def _run(self) -> None:
        while True:
            event = self._queue.get()
            if event is _CLOSED:
                break

            try:
                self._handler(event)
            except Exception:
                self._errors += 1
                self.logger.exception("Event handler failed", event_type=type(event).__name__)
            finally:
                self._processed += 1

    def _print_event(self, event: Any) -> None:
        stream = self._stream or sys.stdout
        print(render_event(event), file=stream, flush=True)
