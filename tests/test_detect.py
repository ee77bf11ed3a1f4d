"""
Tests for square extraction and circle association.
"""

import cv2
import numpy as np
import pytest

from symdetect.detect import (
    associate_circles,
    find_circles,
    find_squares,
    hough_radius_range,
    squares_with_circles,
)
from symdetect.geometry import as_contour
from symdetect.types import Circle


class TestFindSquares:
    """Contour -> validated square."""

    def test_keeps_only_valid_squares(self, make_square):
        """Small, elongated and non-quad contours are rejected."""
        good = make_square(50, 50, 100)
        small = make_square(0, 0, 10)
        rect = as_contour([(0, 0), (200, 0), (200, 100), (0, 100)])
        tri = as_contour([(0, 0), (200, 0), (100, 150)])
        result = find_squares([small, good, rect, tri], (300, 300), poly_acc=0.02)
        assert len(result) == 1
        assert sorted(map(tuple, result[0].reshape(-1, 2).tolist())) == sorted(
            map(tuple, good.reshape(-1, 2).tolist())
        )

    def test_simplifies_dense_contour(self):
        """A densely sampled square outline is simplified to 4 vertices."""
        mask = np.zeros((300, 300), dtype=np.uint8)
        cv2.rectangle(mask, (50, 50), (200, 200), 255, -1)
        contours, _ = cv2.findContours(mask, cv2.RETR_LIST, cv2.CHAIN_APPROX_NONE)
        result = find_squares(list(contours), (300, 300), poly_acc=0.02)
        assert len(result) == 1
        assert len(result[0]) == 4

    def test_no_contours(self):
        """Empty input is not an error."""
        assert find_squares([], (300, 300), 0.02) == []


class TestHoughRadiusRange:
    """Radius bounds derived from the crop size."""

    def test_small_crop_uses_floor(self):
        """min radius never drops below 7."""
        assert hough_radius_range((100, 80)) == (7, 40, 14)

    def test_large_crop_scales(self):
        """Large crops get min radius max_radius / 50."""
        assert hough_radius_range((2000, 1000)) == (10, 500, 20)


class TestAssociateCircles:
    """Mapping circles from crop space to image space."""

    def test_offset_applied(self, make_square):
        """Local (5, 5) in a crop at (100, 200) becomes (105, 205)."""
        gray = np.zeros((400, 400), dtype=np.uint8)
        square = make_square(100, 200, 50)
        seen = []

        def finder(roi):
            seen.append(roi.shape)
            return [Circle(5.0, 5.0, 3.0)]

        result = associate_circles(gray, square, finder)
        assert seen == [(51, 51)]
        assert result.circles == [Circle(105.0, 205.0, 3.0)]
        assert result.square is square

    def test_no_circles_drops_square(self, make_square):
        """A square with no circle yields nothing."""
        gray = np.zeros((400, 400), dtype=np.uint8)
        assert associate_circles(gray, make_square(0, 0, 50), lambda roi: []) is None


class TestSquaresWithCircles:
    """Fan-out over all squares."""

    @staticmethod
    def finder_with_circle_when_bright(roi):
        if roi.mean() > 0:
            return [Circle(1.0, 2.0, 8.0)]
        return []

    def test_drops_squares_without_circles(self, make_square):
        """Only squares whose crop yields circles survive."""
        gray = np.zeros((400, 400), dtype=np.uint8)
        gray[0:60, 0:60] = 255
        squares = [make_square(0, 0, 50), make_square(200, 200, 50)]
        result = squares_with_circles(gray, squares, self.finder_with_circle_when_bright)
        assert len(result) == 1
        assert result[0].square is squares[0]
        assert all(len(s.circles) >= 1 for s in result)

    def test_workers_preserve_order(self, make_square):
        """Thread pool output matches the sequential path."""
        gray = np.full((400, 400), 255, dtype=np.uint8)
        squares = [make_square(x, y, 40) for x in (0, 100, 200, 300) for y in (0, 100, 200)]
        seq = squares_with_circles(gray, squares, self.finder_with_circle_when_bright, workers=1)
        par = squares_with_circles(gray, squares, self.finder_with_circle_when_bright, workers=4)
        assert [s.square is q for s, q in zip(par, squares)] == [True] * len(squares)
        assert [s.circles for s in par] == [s.circles for s in seq]


class TestFindCircles:
    """Hough detector on a synthetic crop."""

    def test_detects_disk(self):
        """A dark disk on white is found near its true center."""
        img = np.full((120, 120), 255, dtype=np.uint8)
        cv2.circle(img, (60, 60), 20, 0, -1)
        img = cv2.GaussianBlur(img, (7, 7), 0)
        circles = find_circles(img, circle_acc=0.87)
        assert len(circles) >= 1
        best = min(circles, key=lambda c: abs(c.x - 60) + abs(c.y - 60))
        assert best.x == pytest.approx(60, abs=3)
        assert best.y == pytest.approx(60, abs=3)
        assert best.radius == pytest.approx(20, abs=3)

    def test_blank_crop(self):
        """A uniform crop has no circles."""
        assert find_circles(np.full((100, 100), 128, dtype=np.uint8), 0.87) == []
