from __future__ import annotations

from typing import Optional, Sequence

from .config import TrackingConfig
from .types import Hand


def select_hand(hands: Sequence[Hand], policy: str) -> Optional[Hand]:
    """
    Pick the hand to track this frame.

    `policy` is "First" (first detection) or a handedness label; with a label
    the first hand carrying that label wins.
    """

    if policy == "First":
        return hands[0] if hands else None
    for hand in hands:
        if hand.handedness == policy:
            return hand
    return None


class HandSelector:
    def __init__(self, config: TrackingConfig) -> None:
        self._policy = config.tracked_hand

    @property
    def policy(self) -> str:
        return self._policy

    def select(self, hands: Sequence[Hand]) -> Optional[Hand]:
        return select_hand(hands, self._policy)
