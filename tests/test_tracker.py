import logging

import pytest

from handcursor.config import TrackingConfig
from handcursor.mapping import CoordinateMapper
from handcursor.tracker import CursorTracker
from handcursor.types import Hand, Keypoint3D


@pytest.fixture
def tracker():
    config = TrackingConfig(tracked_hand="Left", keypoint_index=8)
    return CursorTracker(config, CoordinateMapper((640, 480), (640, 480), fit="stretch"))


def test_two_frame_scenario(tracker, hand_factory):
    state = tracker.update([hand_factory("Left", z=-0.1)])
    assert state.cursor is not None
    assert state.cursor.depth_size == pytest.approx(50.0)
    assert len(state.trail) == 1

    state = tracker.update([])
    assert state.cursor is None
    assert tracker.cursor is None
    assert len(state.trail) == 1


def test_missing_3d_leaves_trail_untouched(tracker, hand_factory):
    tracker.update([hand_factory("Left")])
    tracker.update([hand_factory("Left", offset=3.0)])
    assert len(tracker.trail) == 2

    state = tracker.update([hand_factory("Left", with_3d=False)])
    assert state.cursor is None
    assert len(tracker.trail) == 2


def test_unselected_hand_does_not_drive_cursor(tracker, hand_factory):
    state = tracker.update([hand_factory("Right")])
    assert state.selected is None
    assert state.cursor is None
    assert len(state.mapped_hands) == 1
    assert len(state.trail) == 0


def test_cursor_replaced_each_frame(tracker, hand_factory):
    first = tracker.update([hand_factory("Left", z=0.0)]).cursor
    second = tracker.update([hand_factory("Left", z=0.1, offset=10.0)]).cursor
    assert tracker.cursor is second
    assert second.point.x == pytest.approx(first.point.x + 10.0)
    assert second.depth_size == pytest.approx(20.0)


def test_trail_keeps_last_points(hand_factory):
    config = TrackingConfig(tracked_hand="First", trail_capacity=3)
    tracker = CursorTracker(config, CoordinateMapper((640, 480), (640, 480), fit="stretch"))
    for i in range(5):
        tracker.update([hand_factory(None, offset=float(i))])
    xs = [x for x, _ in tracker.trail]
    assert xs == [82.0, 83.0, 84.0]


def test_mapped_hands_parallel_to_hands(tracker, hand_factory):
    hands = [hand_factory("Right"), hand_factory("Left")]
    state = tracker.update(hands)
    assert len(state.mapped_hands) == 2
    assert len(state.mapped_hands[0]) == 21
    assert state.mapped_hands[1][8].xy == (80.0, 40.0)


def test_logs_acquire_and_loss(tracker, hand_factory, caplog):
    with caplog.at_level(logging.INFO, logger="handcursor.tracker"):
        tracker.update([hand_factory("Left")])
        tracker.update([hand_factory("Left")])
        tracker.update([])
    messages = [r.getMessage() for r in caplog.records]
    assert messages == ["Tracking Left hand", "Lost Left hand"]


def test_hand_without_2d_keypoints_is_no_hand(tracker, hand_factory):
    tracker.update([hand_factory("Left")])
    broken = Hand(keypoints=None, keypoints3d=[Keypoint3D(0.0, 0.0, 0.0)] * 21, handedness="Left")

    state = tracker.update([broken, hand_factory("Right")])

    assert state.selected is broken
    assert state.cursor is None
    assert state.mapped_hands[0] == ()
    assert len(state.mapped_hands[1]) == 21
    assert len(tracker.trail) == 1
