from __future__ import annotations

import argparse
import os
import sys
from types import SimpleNamespace

import cv2

# Allow running without installing the package (repo-local usage).
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC_ROOT = os.path.join(REPO_ROOT, "src")
if SRC_ROOT not in sys.path:
    sys.path.insert(0, SRC_ROOT)

from handcursor.config import HAND_POLICIES, TrackingConfig  # noqa: E402
from handcursor.detector import HandposeDetector  # noqa: E402
from handcursor.log import setup_logging  # noqa: E402
from handcursor.mapping import CoordinateMapper  # noqa: E402
from handcursor.renderer import Renderer  # noqa: E402
from handcursor.tracker import CursorTracker  # noqa: E402


def main() -> int:
    ap = argparse.ArgumentParser(description="Annotate a still image with hand skeletons and the tracked cursor.")
    ap.add_argument("--image", required=True, help="Path to input image")
    ap.add_argument("--out", required=True, help="Path to output image (annotated)")
    ap.add_argument("--max-hands", type=int, default=2, help="Maximum number of hands to detect")
    ap.add_argument("--hand", choices=HAND_POLICIES, default="First", help="Which hand drives the cursor")
    ap.add_argument("--keypoint", type=int, default=8, help="Tracked keypoint index 0-20")
    ap.add_argument(
        "--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging level"
    )
    args = ap.parse_args()

    setup_logging(args.log_level)

    frame = cv2.imread(args.image)
    if frame is None:
        raise RuntimeError(f"Could not read image: {args.image}")

    h, w = frame.shape[:2]
    config = TrackingConfig(tracked_hand=args.hand, keypoint_index=args.keypoint)
    tracker = CursorTracker(config, CoordinateMapper((w, h), (w, h), fit="stretch"))
    renderer = Renderer(config)

    with HandposeDetector(static_image_mode=True, max_num_hands=args.max_hands) as detector:
        hands = detector.detect(frame)

    state = tracker.update(hands)
    source = SimpleNamespace(ready=True, active=os.path.basename(args.image), mirror=False)
    out = renderer.render(renderer.new_canvas((w, h)), state, frame, tracker.mapper, source)

    ok = cv2.imwrite(args.out, out)
    if not ok:
        raise RuntimeError(f"Could not write output image: {args.out}")

    print(f"hands: {len(hands)}")
    for i, hand in enumerate(hands):
        has_3d = "yes" if hand.keypoints3d else "no"
        print(f"[{i}] {hand.handedness} score={hand.score} 3d={has_3d}")
    if state.cursor is not None:
        p = state.cursor.point
        print(f"cursor: x={p.x:.1f} y={p.y:.1f} z={p.z} size={state.cursor.depth_size:.1f}")
    else:
        print("cursor: none")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
