import numpy as np
import pytest

from handcursor.mapping import CoordinateMapper
from handcursor.types import Keypoint


class TestGeometry:
    def test_fit_height_centres_horizontally(self):
        mapper = CoordinateMapper((640, 480), (1280, 720), fit="fitHeight")
        assert mapper.scale == (1.5, 1.5)
        assert mapper.map_xy(0, 0) == pytest.approx((160.0, 0.0))
        assert mapper.map_xy(640, 480) == pytest.approx((1120.0, 720.0))

    def test_fit_width_centres_vertically(self):
        mapper = CoordinateMapper((640, 480), (1280, 720), fit="fitWidth")
        assert mapper.map_xy(0, 0) == pytest.approx((0.0, -120.0))

    def test_contain_and_cover(self):
        contain = CoordinateMapper((640, 480), (1280, 720), fit="contain")
        cover = CoordinateMapper((640, 480), (1280, 720), fit="cover")
        assert contain.scale == (1.5, 1.5)
        assert cover.scale == (2.0, 2.0)

    def test_stretch(self):
        mapper = CoordinateMapper((640, 480), (1280, 720), fit="stretch")
        assert mapper.map_xy(320, 240) == pytest.approx((640.0, 360.0))

    def test_mirror(self):
        mapper = CoordinateMapper((640, 480), (1280, 720), fit="fitHeight", mirror=True)
        assert mapper.map_xy(0, 0) == pytest.approx((1120.0, 0.0))
        assert mapper.map_xy(640, 0) == pytest.approx((160.0, 0.0))

    def test_map_keypoints(self):
        mapper = CoordinateMapper((100, 100), (200, 200), fit="stretch")
        points = mapper.map_keypoints([Keypoint(1, 2), Keypoint(3, 4)])
        assert [p.xy for p in points] == [(2.0, 4.0), (6.0, 8.0)]
        assert all(p.z is None for p in points)

    def test_rejects_unknown_fit(self):
        with pytest.raises(ValueError):
            CoordinateMapper((640, 480), (640, 480), fit="zoom")

    def test_rejects_empty_sizes(self):
        with pytest.raises(ValueError):
            CoordinateMapper((0, 480), (640, 480))


class TestPlaceFrame:
    def test_letterbox(self):
        mapper = CoordinateMapper((4, 2), (8, 8), fit="fitWidth")
        frame = np.full((2, 4, 3), 255, dtype=np.uint8)
        canvas = np.zeros((8, 8, 3), dtype=np.uint8)
        mapper.place_frame(frame, canvas)
        assert canvas[2:6].min() == 255
        assert canvas[:2].max() == 0
        assert canvas[6:].max() == 0

    def test_cover_overflow_is_clipped(self):
        mapper = CoordinateMapper((4, 2), (4, 4), fit="cover")
        frame = np.full((2, 4, 3), 200, dtype=np.uint8)
        canvas = np.zeros((4, 4, 3), dtype=np.uint8)
        mapper.place_frame(frame, canvas)
        assert canvas.min() == 200

    def test_mirror_flips_image(self):
        mapper = CoordinateMapper((2, 1), (2, 1), fit="stretch", mirror=True)
        frame = np.zeros((1, 2, 3), dtype=np.uint8)
        frame[0, 0] = 255
        canvas = np.zeros((1, 2, 3), dtype=np.uint8)
        mapper.place_frame(frame, canvas)
        assert canvas[0, 1].tolist() == [255, 255, 255]
        assert canvas[0, 0].tolist() == [0, 0, 0]
