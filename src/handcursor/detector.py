from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

import cv2

from .landmarks import KEYPOINT_NAMES
from .model_assets import DEFAULT_MODEL_PATH, ensure_hand_landmarker_task
from .types import Hand, Keypoint, Keypoint3D

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _SolutionsBackend:
    mp: object
    hands: object


@dataclass(frozen=True)
class _TasksBackend:
    mp: object
    landmarker: object


def _try_create_solutions_backend(
    static_image_mode: bool,
    max_num_hands: int,
    model_complexity: int,
    min_detection_confidence: float,
    min_tracking_confidence: float,
) -> Optional[_SolutionsBackend]:
    import mediapipe as mp  # type: ignore

    if not hasattr(mp, "solutions"):
        return None
    hands = mp.solutions.hands.Hands(
        static_image_mode=static_image_mode,
        max_num_hands=max_num_hands,
        model_complexity=model_complexity,
        min_detection_confidence=min_detection_confidence,
        min_tracking_confidence=min_tracking_confidence,
    )
    return _SolutionsBackend(mp=mp, hands=hands)


def _try_create_tasks_backend(
    model_path: str,
    static_image_mode: bool,
    max_num_hands: int,
    min_detection_confidence: float,
    min_tracking_confidence: float,
) -> _TasksBackend:
    """
    Build a Tasks `HandLandmarker` for MediaPipe builds without `mp.solutions`.

    Needs a `.task` model asset on disk; it is downloaded on first use.
    """

    import mediapipe as mp  # type: ignore
    from mediapipe.tasks.python import BaseOptions  # type: ignore
    from mediapipe.tasks.python.vision import HandLandmarker, HandLandmarkerOptions, RunningMode  # type: ignore

    model_path = ensure_hand_landmarker_task(model_path)

    options = HandLandmarkerOptions(
        base_options=BaseOptions(model_asset_path=model_path),
        running_mode=RunningMode.IMAGE if static_image_mode else RunningMode.VIDEO,
        num_hands=max_num_hands,
        min_hand_detection_confidence=min_detection_confidence,
        min_tracking_confidence=min_tracking_confidence,
    )
    return _TasksBackend(mp=mp, landmarker=HandLandmarker.create_from_options(options))


def build_hand(
    landmarks: Sequence,
    world_landmarks: Optional[Sequence],
    label: Optional[str],
    score: Optional[float],
    w: int,
    h: int,
) -> Hand:
    """
    Convert MediaPipe landmark lists into a `Hand`.

    2D keypoints are scaled to source-frame pixels and left unclamped. 3D
    keypoints are the world landmarks as reported.
    """

    keypoints = [
        Keypoint(x=float(lm.x) * w, y=float(lm.y) * h, name=_name(i)) for i, lm in enumerate(landmarks)
    ]
    keypoints3d = None
    if world_landmarks:
        keypoints3d = [
            Keypoint3D(x=float(lm.x), y=float(lm.y), z=float(getattr(lm, "z", 0.0)), name=_name(i))
            for i, lm in enumerate(world_landmarks)
        ]
    return Hand(keypoints=keypoints, keypoints3d=keypoints3d, handedness=label, score=score)


def _name(i: int) -> Optional[str]:
    return KEYPOINT_NAMES[i] if i < len(KEYPOINT_NAMES) else None


class HandposeDetector:
    """
    Hand keypoint detector using MediaPipe Hands.

    Input frames are expected as **BGR** images (OpenCV default). Detection
    runs on the unmirrored frame; mirroring is a display concern.
    """

    def __init__(
        self,
        static_image_mode: bool = False,
        max_num_hands: int = 2,
        model_complexity: int = 1,
        min_detection_confidence: float = 0.5,
        min_tracking_confidence: float = 0.5,
        tasks_model_path: str = DEFAULT_MODEL_PATH,
    ) -> None:
        self._solutions: Optional[_SolutionsBackend] = _try_create_solutions_backend(
            static_image_mode=static_image_mode,
            max_num_hands=max_num_hands,
            model_complexity=model_complexity,
            min_detection_confidence=min_detection_confidence,
            min_tracking_confidence=min_tracking_confidence,
        )
        self._tasks: Optional[_TasksBackend] = None
        self._tasks_timestamp_ms = 0
        self._static_image_mode = static_image_mode

        if self._solutions is not None:
            logger.info("Using MediaPipe solutions backend (max hands: %d)", max_num_hands)
            return

        try:
            self._tasks = _try_create_tasks_backend(
                model_path=tasks_model_path,
                static_image_mode=static_image_mode,
                max_num_hands=max_num_hands,
                min_detection_confidence=min_detection_confidence,
                min_tracking_confidence=min_tracking_confidence,
            )
        except FileNotFoundError as e:
            raise RuntimeError(
                "MediaPipe does not provide `mp.solutions` in your environment, so the Tasks\n"
                "HandLandmarker is used instead. It needs a model file on disk:\n"
                f"  {tasks_model_path}\n"
            ) from e
        except (ImportError, AttributeError) as e:
            raise RuntimeError(
                "Could not initialize MediaPipe Hands.\n"
                "Your installed `mediapipe` package exposes neither `mp.solutions` nor the Tasks\n"
                "HandLandmarker API. Reinstall it with `pip install --upgrade mediapipe`."
            ) from e
        logger.info("Using MediaPipe Tasks backend with model %s (max hands: %d)", tasks_model_path, max_num_hands)

    def close(self) -> None:
        if self._solutions is not None:
            self._solutions.hands.close()
        if self._tasks is not None:
            self._tasks.landmarker.close()

    def __enter__(self) -> "HandposeDetector":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def detect(self, frame_bgr) -> List[Hand]:
        h, w = frame_bgr.shape[:2]
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)

        if self._solutions is not None:
            results = self._solutions.hands.process(frame_rgb)
            if not results.multi_hand_landmarks:
                return []

            handedness_list = results.multi_handedness or []
            world_list = getattr(results, "multi_hand_world_landmarks", None) or []
            hands: List[Hand] = []
            for i, hand_landmarks in enumerate(results.multi_hand_landmarks):
                label: Optional[str] = None
                score: Optional[float] = None
                if i < len(handedness_list) and handedness_list[i].classification:
                    c = handedness_list[i].classification[0]
                    label = getattr(c, "label", None)
                    score = float(getattr(c, "score", 0.0))
                world = world_list[i].landmark if i < len(world_list) else None
                hands.append(build_hand(hand_landmarks.landmark, world, label, score, w, h))
            return hands

        if self._tasks is None:
            return []

        mp = self._tasks.mp
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=frame_rgb)
        if self._static_image_mode:
            result = self._tasks.landmarker.detect(mp_image)
        else:
            # VIDEO mode requires monotonically increasing timestamps.
            self._tasks_timestamp_ms += 33
            result = self._tasks.landmarker.detect_for_video(mp_image, self._tasks_timestamp_ms)

        landmarks_list = getattr(result, "hand_landmarks", None) or []
        world_list = getattr(result, "hand_world_landmarks", None) or []
        handedness_list = getattr(result, "handedness", None) or []

        hands = []
        for i, landmarks in enumerate(landmarks_list):
            label = None
            score = None
            if i < len(handedness_list) and handedness_list[i]:
                cat0 = handedness_list[i][0]
                label = getattr(cat0, "category_name", None) or getattr(cat0, "display_name", None)
                score = float(getattr(cat0, "score", 0.0))
            world = world_list[i] if i < len(world_list) else None
            hands.append(build_hand(landmarks, world, label, score, w, h))
        return hands
