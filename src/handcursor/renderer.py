from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from .config import CursorStyle, TrackingConfig
from .drawing import draw_line_alpha, draw_point, draw_points_alpha, draw_text
from .landmarks import HAND_CONNECTIONS, display_name
from .mapping import CoordinateMapper
from .tracker import FrameState
from .trail import trail_segments
from .types import Cursor, ScreenPoint

GREEN = (0, 255, 0)
GREY = (150, 150, 150)
WHITE = (255, 255, 255)


@dataclass
class DisplayOptions:
    """Display flags toggled from user input while running."""

    show_video: bool = True
    show_all_keypoints: bool = True

    def toggle_video(self) -> None:
        self.show_video = not self.show_video

    def toggle_keypoints(self) -> None:
        self.show_all_keypoints = not self.show_all_keypoints


class Renderer:
    """
    Draws a `FrameState` onto a display canvas.

    Purely presentational: selection and cursor derivation already happened
    in the tracker.
    """

    def __init__(
        self,
        config: TrackingConfig,
        style: Optional[CursorStyle] = None,
        options: Optional[DisplayOptions] = None,
    ) -> None:
        self.config = config
        self.style = style or CursorStyle()
        self.options = options or DisplayOptions()

    def new_canvas(self, size) -> np.ndarray:
        w, h = size
        canvas = np.zeros((h, w, 3), dtype=np.uint8)
        canvas[:] = self.style.background
        return canvas

    def render(
        self,
        canvas_bgr: np.ndarray,
        state: Optional[FrameState],
        frame_bgr: Optional[np.ndarray] = None,
        mapper: Optional[CoordinateMapper] = None,
        camera=None,
    ) -> np.ndarray:
        canvas_bgr[:] = self.style.background
        if self.options.show_video and frame_bgr is not None and mapper is not None:
            mapper.place_frame(frame_bgr, canvas_bgr)

        if state is not None and state.hands:
            self.draw_hands(canvas_bgr, state)
            if state.cursor is not None:
                self.draw_cursor(canvas_bgr, state.cursor, state.trail)

        self.draw_ui(canvas_bgr, state, camera)
        return canvas_bgr

    def hand_color(self, label: Optional[str]):
        if label == "Left":
            return self.style.left_color
        if label == "Right":
            return self.style.right_color
        return self.style.unknown_color

    def draw_hands(self, canvas_bgr: np.ndarray, state: FrameState) -> None:
        for hand, points in zip(state.hands, state.mapped_hands):
            if not points:
                continue
            color = self.hand_color(hand.handedness)
            if self.options.show_all_keypoints:
                draw_points_alpha(
                    canvas_bgr,
                    [p.xy for p in points],
                    color,
                    alpha=150,
                    radius=self.style.keypoint_size / 2.0,
                )
                self.draw_skeleton(canvas_bgr, points, color)

            wrist = points[0]
            draw_text(
                canvas_bgr,
                hand.handedness or "Unknown",
                (wrist.x, wrist.y - 10),
                color=color,
                size_px=12,
                align="center",
                valign="bottom",
                outline=None,
            )

    def draw_skeleton(self, canvas_bgr: np.ndarray, points: Sequence[ScreenPoint], color) -> None:
        for a, b in HAND_CONNECTIONS:
            if a < len(points) and b < len(points):
                draw_line_alpha(canvas_bgr, points[a].xy, points[b].xy, color, alpha=150, thickness=2)

    def draw_cursor(self, canvas_bgr: np.ndarray, cursor: Cursor, trail) -> None:
        color = self.style.cursor_color
        for seg in trail_segments(list(trail)):
            draw_line_alpha(canvas_bgr, seg.start, seg.end, color, alpha=seg.alpha, thickness=seg.width)

        p = cursor.point
        draw_point(canvas_bgr, p.xy, color, radius=cursor.depth_size * self.style.cursor_scale / 2.0)

        z_text = f"{p.z:.4f}" if p.z is not None else "N/A"
        draw_text(
            canvas_bgr,
            f"x: {p.x:.0f}, y: {p.y:.0f}, z: {z_text}",
            (p.x, p.y + cursor.depth_size / 2.0 + 10),
            size_px=14,
            align="center",
            valign="top",
            outline_px=3,
        )

    def draw_ui(self, canvas_bgr: np.ndarray, state: Optional[FrameState], camera=None) -> None:
        h, w = canvas_bgr.shape[:2]
        cx = w / 2.0
        camera_ready = camera is not None and camera.ready
        n_hands = len(state.hands) if state is not None else 0

        if not camera_ready:
            draw_text(canvas_bgr, "Starting camera...", (cx, 20), size_px=18, align="center", valign="top")
        elif n_hands == 0:
            draw_text(
                canvas_bgr,
                "Show your hand(s) to start tracking",
                (cx, 20),
                size_px=18,
                align="center",
                valign="top",
            )
        else:
            name = display_name(self.config.keypoint_index)
            draw_text(
                canvas_bgr,
                f"Tracking {self.config.tracked_hand} Hand: {name}",
                (cx, 20),
                size_px=18,
                align="center",
                valign="top",
            )
            draw_text(canvas_bgr, f"Hands detected: {n_hands}", (cx, 45), size_px=14, align="center", valign="top")

        draw_text(
            canvas_bgr,
            "Click or press v to toggle video, k for keypoints",
            (cx, h - 20),
            color=(200, 200, 200),
            size_px=14,
            align="center",
            valign="bottom",
        )
        draw_text(
            canvas_bgr,
            f"Video: {'ON' if self.options.show_video else 'OFF'}",
            (cx, h - 40),
            color=GREEN if self.options.show_video else GREY,
            size_px=12,
            align="center",
            valign="bottom",
        )
        draw_text(
            canvas_bgr,
            f"All Keypoints: {'ON' if self.options.show_all_keypoints else 'OFF'}",
            (cx, h - 55),
            color=GREEN if self.options.show_all_keypoints else GREY,
            size_px=12,
            align="center",
            valign="bottom",
        )
        if camera_ready:
            draw_text(
                canvas_bgr,
                f"Camera: {camera.active} (mirrored: {str(camera.mirror).lower()})",
                (cx, h - 70),
                color=WHITE,
                size_px=12,
                align="center",
                valign="bottom",
            )
