from __future__ import annotations

from typing import Dict, List, Tuple


NUM_KEYPOINTS = 21

KEYPOINT_NAMES: List[str] = [
    "wrist",
    "thumb_cmc",
    "thumb_mcp",
    "thumb_ip",
    "thumb_tip",
    "index_finger_mcp",
    "index_finger_pip",
    "index_finger_dip",
    "index_finger_tip",
    "middle_finger_mcp",
    "middle_finger_pip",
    "middle_finger_dip",
    "middle_finger_tip",
    "ring_finger_mcp",
    "ring_finger_pip",
    "ring_finger_dip",
    "ring_finger_tip",
    "pinky_finger_mcp",
    "pinky_finger_pip",
    "pinky_finger_dip",
    "pinky_finger_tip",
]

# Labels shown in the status line; other indices fall back to "Keypoint <n>".
DISPLAY_NAMES: Dict[int, str] = {
    8: "Index Finger Tip",
    4: "Thumb Tip",
    12: "Middle Finger Tip",
    16: "Ring Finger Tip",
    20: "Pinky Tip",
    0: "Wrist",
}


HAND_CONNECTIONS: List[Tuple[int, int]] = [
    # thumb
    (0, 1),
    (1, 2),
    (2, 3),
    (3, 4),
    # index
    (0, 5),
    (5, 6),
    (6, 7),
    (7, 8),
    # middle
    (0, 9),
    (9, 10),
    (10, 11),
    (11, 12),
    # ring
    (0, 13),
    (13, 14),
    (14, 15),
    (15, 16),
    # pinky
    (0, 17),
    (17, 18),
    (18, 19),
    (19, 20),
    # palm
    (5, 9),
    (9, 13),
    (13, 17),
]


def display_name(index: int) -> str:
    return DISPLAY_NAMES.get(index, f"Keypoint {index}")
