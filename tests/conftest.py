from types import SimpleNamespace

import pytest

from handcursor.types import Hand, Keypoint, Keypoint3D


def make_hand(handedness="Left", z=0.0, with_3d=True, index=8, n=21, offset=0.0):
    """21 keypoints on a diagonal; keypoint `index` gets depth `z`."""

    keypoints = [Keypoint(x=10.0 * i + offset, y=5.0 * i + offset) for i in range(n)]
    keypoints3d = None
    if with_3d:
        keypoints3d = [Keypoint3D(x=0.0, y=0.0, z=(z if i == index else 0.0)) for i in range(n)]
    return Hand(keypoints=keypoints, keypoints3d=keypoints3d, handedness=handedness)


@pytest.fixture
def hand_factory():
    return make_hand


@pytest.fixture
def landmark():
    def _make(x, y, z=0.0):
        return SimpleNamespace(x=x, y=y, z=z)

    return _make
