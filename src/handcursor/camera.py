from __future__ import annotations

import logging
import platform
from typing import Optional, Tuple

import cv2
import numpy as np

logger = logging.getLogger(__name__)


class Camera:
    """
    Thin wrapper over `cv2.VideoCapture`.

    `ready` turns true once the first frame has been read. `mirror` is only
    recorded here; the coordinate mapper applies it when drawing.
    """

    def __init__(self, index: int = 0, width: int = 1280, height: int = 720, mirror: bool = True) -> None:
        self.index = index
        self.mirror = mirror
        self.ready = False

        # On macOS, AVFoundation is the reliable backend and triggers the camera permission prompt.
        if platform.system() == "Darwin":
            self._cap = cv2.VideoCapture(index, cv2.CAP_AVFOUNDATION)
        else:
            self._cap = cv2.VideoCapture(index)

        if not self._cap.isOpened():
            raise RuntimeError(
                f"Could not open camera index {index}.\n\n"
                "On macOS, grant Camera access to the app you launched this from in:\n"
                "  System Settings -> Privacy & Security -> Camera\n"
            )

        self._cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
        self._cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
        logger.info("Opened camera %d (requested %dx%d)", index, width, height)

    @property
    def active(self) -> str:
        return f"camera {self.index}"

    def read(self) -> Optional[np.ndarray]:
        ok, frame = self._cap.read()
        if not ok:
            return None
        if not self.ready:
            h, w = frame.shape[:2]
            logger.info("Camera ready: %dx%d", w, h)
            self.ready = True
        return frame

    def frame_size(self, frame: np.ndarray) -> Tuple[int, int]:
        h, w = frame.shape[:2]
        return (w, h)

    def release(self) -> None:
        self._cap.release()

    def __enter__(self) -> "Camera":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()
