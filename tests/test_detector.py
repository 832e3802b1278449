import pytest

from handcursor.detector import build_hand


def test_build_hand_scales_to_pixels(landmark):
    landmarks = [landmark(0.5, 0.25) for _ in range(21)]
    world = [landmark(0.01, 0.02, -0.05) for _ in range(21)]
    hand = build_hand(landmarks, world, "Left", 0.9, 640, 480)

    assert hand.handedness == "Left"
    assert hand.score == pytest.approx(0.9)
    assert len(hand.keypoints) == 21
    assert hand.keypoints[8].x == pytest.approx(320.0)
    assert hand.keypoints[8].y == pytest.approx(120.0)
    assert hand.keypoints[8].name == "index_finger_tip"
    assert hand.keypoints3d[8].z == pytest.approx(-0.05)
    assert hand.keypoints3d[0].name == "wrist"


def test_build_hand_without_world_landmarks(landmark):
    hand = build_hand([landmark(0.1, 0.1) for _ in range(21)], None, None, None, 100, 100)
    assert hand.keypoints3d is None
    assert hand.handedness is None


def test_keypoints_are_not_clamped(landmark):
    hand = build_hand([landmark(1.2, -0.1)], [landmark(0, 0, 0)], "Right", 1.0, 100, 50)
    assert hand.keypoints[0].x == pytest.approx(120.0)
    assert hand.keypoints[0].y == pytest.approx(-5.0)
