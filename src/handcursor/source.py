from __future__ import annotations

import logging
import threading
from typing import Optional, Sequence, Tuple

from .types import Hand

logger = logging.getLogger(__name__)


class LatestHands:
    """
    Single-slot cell holding the most recent detection result.

    One writer (the detection worker) overwrites it, one reader (the frame
    loop) reads whatever is current. The lock covers the swap only; readers
    never wait for a fresh result.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._hands: Tuple[Hand, ...] = ()
        self._version = 0

    def publish(self, hands: Sequence[Hand]) -> None:
        snapshot = tuple(hands)
        with self._lock:
            self._hands = snapshot
            self._version += 1

    def read(self) -> Tuple[Hand, ...]:
        with self._lock:
            return self._hands

    @property
    def version(self) -> int:
        """Number of results published so far."""
        with self._lock:
            return self._version


class DetectionWorker:
    """
    Runs a detector on a background thread and publishes into `LatestHands`.

    `submit()` hands over a frame through a one-deep slot: a frame that has
    not been picked up yet is replaced by the newer one. Detection keeps
    running until `stop()`.
    """

    def __init__(self, detector, latest: Optional[LatestHands] = None) -> None:
        self._detector = detector
        self.latest = latest if latest is not None else LatestHands()

        self._cond = threading.Condition()
        self._pending = None
        self._running = False
        self._dropped = 0
        self._thread: Optional[threading.Thread] = None

    @property
    def dropped_frames(self) -> int:
        with self._cond:
            return self._dropped

    @property
    def alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.alive:
            if not self._running:
                # A stopped thread still inside detect() owns the detector.
                logger.warning("Detection worker is still shutting down, not restarting")
            return
        with self._cond:
            self._running = True
        self._thread = threading.Thread(target=self._run, name="hand-detection", daemon=True)
        self._thread.start()
        logger.debug("Detection worker started")

    def stop(self, timeout: Optional[float] = 2.0) -> None:
        if self._thread is None:
            return
        with self._cond:
            self._running = False
            self._cond.notify_all()
        self._thread.join(timeout=timeout)
        if self._thread.is_alive():
            logger.warning("Detection worker did not stop within %.1fs", timeout)
            return
        self._thread = None
        logger.debug("Detection worker stopped (%d frames dropped)", self.dropped_frames)

    def submit(self, frame) -> None:
        with self._cond:
            if self._pending is not None:
                self._dropped += 1
            self._pending = frame
            self._cond.notify()

    def _take(self):
        with self._cond:
            while self._running and self._pending is None:
                self._cond.wait()
            if not self._running:
                return None
            frame, self._pending = self._pending, None
            return frame

    def _run(self) -> None:
        while True:
            frame = self._take()
            if frame is None:
                return
            try:
                hands = self._detector.detect(frame)
            except Exception:
                # Keep the last published hands and carry on with the next frame.
                logger.exception("Hand detection failed")
                continue
            self.latest.publish(hands)

    def __enter__(self) -> "DetectionWorker":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
