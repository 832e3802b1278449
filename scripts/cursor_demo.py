from __future__ import annotations

import argparse
import logging
import os
import sys

import cv2

# Allow running without installing the package (repo-local usage).
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC_ROOT = os.path.join(REPO_ROOT, "src")
if SRC_ROOT not in sys.path:
    sys.path.insert(0, SRC_ROOT)

from handcursor.camera import Camera  # noqa: E402
from handcursor.config import HAND_POLICIES, TrackingConfig  # noqa: E402
from handcursor.detector import HandposeDetector  # noqa: E402
from handcursor.log import setup_logging  # noqa: E402
from handcursor.mapping import FIT_MODES, CoordinateMapper  # noqa: E402
from handcursor.model_assets import DEFAULT_MODEL_PATH  # noqa: E402
from handcursor.renderer import Renderer  # noqa: E402
from handcursor.source import DetectionWorker  # noqa: E402
from handcursor.tracker import CursorTracker  # noqa: E402

logger = logging.getLogger("cursor_demo")


def parse_args(argv=None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Webcam hand skeleton overlay with a tracked keypoint cursor.")
    ap.add_argument("--camera", type=int, default=0, help="Camera index (default: 0)")
    ap.add_argument("--width", type=int, default=1280, help="Capture width (best effort)")
    ap.add_argument("--height", type=int, default=720, help="Capture height (best effort)")
    ap.add_argument("--display-width", type=int, default=0, help="Window width (default: capture width)")
    ap.add_argument("--display-height", type=int, default=0, help="Window height (default: capture height)")
    ap.add_argument("--fit", choices=FIT_MODES, default="fitHeight", help="How the video fills the window")
    ap.add_argument(
        "--no-mirror",
        action="store_true",
        help="Disable horizontal mirroring (default is mirrored/selfie mode)",
    )
    ap.add_argument("--hand", choices=HAND_POLICIES, default="Left", help="Which hand drives the cursor")
    ap.add_argument("--keypoint", type=int, default=8, help="Tracked keypoint index 0-20 (default: 8, index tip)")
    ap.add_argument("--trail-length", type=int, default=20, help="Number of trail points kept")
    ap.add_argument("--max-hands", type=int, default=2, help="Maximum number of hands to detect")
    ap.add_argument(
        "--tasks-model",
        default=DEFAULT_MODEL_PATH,
        help="Path to MediaPipe Tasks model (auto-downloaded if missing)",
    )
    ap.add_argument("--sync", action="store_true", help="Run detection inline instead of on a worker thread")
    ap.add_argument(
        "--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging level"
    )
    ap.add_argument("--log-file", default=None, help="Optional rotating log file")
    return ap.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    try:
        config = TrackingConfig(
            tracked_hand=args.hand,
            keypoint_index=args.keypoint,
            trail_capacity=args.trail_length,
        )
    except ValueError as e:
        logger.error("Invalid tracking settings: %s", e)
        return 2

    renderer = Renderer(config)
    window_name = "handcursor"
    cv2.namedWindow(window_name, cv2.WINDOW_NORMAL)

    def on_mouse(event, x, y, flags, param) -> None:
        if event == cv2.EVENT_LBUTTONDOWN:
            renderer.options.toggle_video()

    cv2.setMouseCallback(window_name, on_mouse)

    with Camera(args.camera, args.width, args.height, mirror=not args.no_mirror) as cam, HandposeDetector(
        max_num_hands=args.max_hands, tasks_model_path=args.tasks_model
    ) as detector:
        worker = None if args.sync else DetectionWorker(detector)
        tracker = None
        canvas = None
        try:
            if worker is not None:
                worker.start()
            while True:
                frame = cam.read()
                if frame is None:
                    logger.warning("Camera stopped delivering frames")
                    break

                if tracker is None:
                    src_w, src_h = cam.frame_size(frame)
                    display_size = (args.display_width or src_w, args.display_height or src_h)
                    mapper = CoordinateMapper((src_w, src_h), display_size, fit=args.fit, mirror=cam.mirror)
                    tracker = CursorTracker(config, mapper)
                    canvas = renderer.new_canvas(display_size)

                # Detect on the raw (unmirrored) frame so handedness labels remain correct.
                if worker is not None:
                    worker.submit(frame)
                    hands = worker.latest.read()
                else:
                    hands = detector.detect(frame)

                state = tracker.update(hands)
                renderer.render(canvas, state, frame, tracker.mapper, cam)

                cv2.imshow(window_name, canvas)
                key = cv2.waitKey(1) & 0xFF
                if key in (ord("q"), 27):
                    break
                if key == ord("v"):
                    renderer.options.toggle_video()
                elif key == ord("k"):
                    renderer.options.toggle_keypoints()
        finally:
            if worker is not None:
                worker.stop()

    cv2.destroyAllWindows()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
