from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from types import TracebackType

from adventure.core.errors import IoError, TimeWriteError, WorkerStartError, WorkerStoppedError

logger = logging.getLogger(__name__)

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def format_timestamp(moment: datetime) -> str:
    """Format like `1:03pm, Monday, October 19, 2026` regardless of locale."""

    hour = moment.hour % 12 or 12
    meridiem = "am" if moment.hour < 12 else "pm"
    return (
        f"{hour}:{moment.minute:02d}{meridiem}, "
        f"{WEEKDAYS[moment.weekday()]}, {MONTHS[moment.month - 1]} {moment.day}, {moment.year}"
    )


class TimeWorker:
    """Background thread that writes the current time to `path` on request.

    Contract:
      - `start()` launches the worker; `shutdown()` stops and joins it.
      - `request_time()` blocks until the worker has written the file, then reads it
        back and returns the line. At most one request is outstanding at a time and
        requests strictly alternate with completions.
      - The file is only written by the worker and only read by the requester, both
        while holding the condition's lock, so neither sees a half-written file.
      - A failed write is reported to the requester as TimeWriteError and the worker keeps
        serving; a worker thread that has exited is reported as WorkerStoppedError.

    Only a single requester thread is supported.
    """

    def __init__(self, path: Path, *, now: Callable[[], datetime] = datetime.now) -> None:
        self.path = path
        self._now = now
        self._cond = threading.Condition()
        self._thread: threading.Thread | None = None

        self._requested = False
        self._ready = False
        self._closing = False
        self._stopped = False
        self._error: OSError | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("Time worker already started")

        thread = threading.Thread(target=self._run, name="time-worker")
        try:
            thread.start()
        except RuntimeError as e:
            raise WorkerStartError(f"Failed to start time worker: {e}") from e
        self._thread = thread
        logger.info("time worker started (file=%s)", self.path)

    def _write(self) -> None:
        self.path.write_text(format_timestamp(self._now()) + "\n", encoding="utf-8")

    def _run(self) -> None:
        try:
            with self._cond:
                while True:
                    self._cond.wait_for(lambda: self._requested or self._closing)
                    if self._closing:
                        break

                    logger.debug("time worker woke for a request")
                    try:
                        self._write()
                        self._error = None
                    except OSError as e:
                        logger.error("failed to write time file %s: %s", self.path, e)
                        self._error = e

                    self._requested = False
                    self._ready = True
                    self._cond.notify_all()
        finally:
            # Wake a requester that would otherwise wait for a worker that is gone.
            with self._cond:
                self._stopped = True
                self._cond.notify_all()

    def request_time(self) -> str:
        with self._cond:
            if self._thread is None or self._closing:
                raise RuntimeError("Time worker is not running")
            if self._stopped:
                raise WorkerStoppedError("Time worker has stopped")

            self._requested = True
            self._cond.notify_all()
            self._cond.wait_for(lambda: self._ready or self._stopped)
            if not self._ready:
                raise WorkerStoppedError("Time worker stopped before answering")

            self._ready = False
            if self._error is not None:
                err, self._error = self._error, None
                raise TimeWriteError(f"Failed to write time file {self.path}: {err}") from err

            try:
                return self.path.read_text(encoding="utf-8").rstrip("\n")
            except OSError as e:
                raise IoError(f"Failed to read time file {self.path}: {e}") from e

    def shutdown(self, timeout: float | None = None) -> None:
        if self._thread is None:
            return

        with self._cond:
            self._closing = True
            self._cond.notify_all()

        self._thread.join(timeout)
        logger.info("time worker stopped")

    def __enter__(self) -> "TimeWorker":
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.shutdown()
