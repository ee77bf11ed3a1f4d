from typing import List, Sequence, Tuple
import math
import numpy as np
import cv2

from .config import SQUARE_THRESH


class DegenerateSegmentError(ValueError):
    """Raised when an angle is requested for a zero-length segment."""


def _xy(p) -> Tuple[int, int]:
    x, y = np.asarray(p).reshape(-1)[:2]
    return int(x), int(y)


def segment_length_sq(a, b) -> int:
    ax, ay = _xy(a)
    bx, by = _xy(b)
    dx, dy = ax - bx, ay - by
    return dx * dx + dy * dy


def segment_length(a, b) -> float:
    return math.sqrt(segment_length_sq(a, b))


def angle_between(u: Tuple, v: Tuple) -> float:
    """
    Angle in degrees [0, 180] between segments u=(a, b) and v=(a, c)
    sharing their first vertex.
    """
    ua, ub = np.asarray(u[0], np.float64).reshape(2), np.asarray(u[1], np.float64).reshape(2)
    va, vb = np.asarray(v[0], np.float64).reshape(2), np.asarray(v[1], np.float64).reshape(2)
    l1 = ua - ub
    l2 = va - vb
    denom = math.sqrt(float(np.dot(l1, l1)) * float(np.dot(l2, l2)))
    if denom == 0.0:
        raise DegenerateSegmentError("zero-length segment in angle computation")
    cosang = float(np.dot(l1, l2)) / denom
    cosang = max(-1.0, min(1.0, cosang))
    return math.degrees(math.acos(cosang))


def find_contours(mask: np.ndarray) -> List[np.ndarray]:
    contours, _ = cv2.findContours(mask, cv2.RETR_LIST, cv2.CHAIN_APPROX_SIMPLE)
    return list(contours)


def approx_poly(cnt: np.ndarray, eps_ratio: float) -> np.ndarray:
    peri = cv2.arcLength(cnt, True)
    eps = eps_ratio * peri
    return cv2.approxPolyDP(cnt, eps, True)


def min_quad_area(im_size: Tuple[int, int]) -> int:
    w, h = im_size
    return max((w * h) // SQUARE_THRESH["area_divisor"], SQUARE_THRESH["min_area"])


def is_quad(contour: np.ndarray, im_size: Tuple[int, int]) -> bool:
    """4 vertices, convex, and larger than the resolution-scaled area floor.

    im_size is (width, height).
    """
    return (
        len(contour) == 4
        and bool(cv2.isContourConvex(contour))
        and float(cv2.contourArea(contour)) > min_quad_area(im_size)
    )


def is_quad_square(quad: np.ndarray) -> bool:
    pts = quad.reshape(-1, 2)
    if len(pts) != 4:
        return False

    sq_lengths = []
    for i in range(4):
        j = (i + 1) % 4
        k = (i + 2) % 4
        u = (pts[j], pts[i])
        v = (pts[j], pts[k])
        try:
            ang = angle_between(u, v)
        except DegenerateSegmentError:
            return False
        if ang < SQUARE_THRESH["angle_min_deg"] or ang > SQUARE_THRESH["angle_max_deg"]:
            return False
        sq_lengths.append(segment_length_sq(*u))

    ratio_max = SQUARE_THRESH["side_ratio_max"]
    return max(sq_lengths) / min(sq_lengths) <= ratio_max * ratio_max


def is_inside(inner: np.ndarray, outer: np.ndarray) -> bool:
    """True when every vertex of inner lies inside or on outer."""
    for x, y in inner.reshape(-1, 2):
        if cv2.pointPolygonTest(outer, (float(x), float(y)), False) < 0:
            return False
    return True


def bounding_rect(contour: np.ndarray) -> Tuple[int, int, int, int]:
    x, y, w, h = cv2.boundingRect(contour)
    return int(x), int(y), int(w), int(h)


def as_contour(points: Sequence[Sequence[int]]) -> np.ndarray:
    return np.asarray(points, dtype=np.int32).reshape(-1, 1, 2)
