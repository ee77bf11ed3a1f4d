import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Tuple
import cv2
import numpy as np

from .config import HOUGH
from .geometry import approx_poly, bounding_rect, is_quad, is_quad_square
from .types import Circle, SquareWithCircles

logger = logging.getLogger(__name__)

CircleFinder = Callable[[np.ndarray], List[Circle]]


def find_squares(
    contours: List[np.ndarray],
    im_size: Tuple[int, int],
    poly_acc: float,
) -> List[np.ndarray]:
    """Simplify each contour and keep the ones passing both quad gates."""
    quads: List[np.ndarray] = []
    for cnt in contours:
        poly = approx_poly(cnt, poly_acc)
        if is_quad(poly, im_size) and is_quad_square(poly):
            quads.append(poly)
    logger.debug("find_squares: %d contours -> %d squares", len(contours), len(quads))
    return quads


def hough_radius_range(region_size: Tuple[int, int]) -> Tuple[int, int, int]:
    """(min_radius, max_radius, min_dist) for a crop of the given (width, height)."""
    w, h = region_size
    max_radius = min(w, h) // 2
    min_radius = max(max_radius // HOUGH["radius_divisor"], HOUGH["min_radius"])
    return min_radius, max_radius, 2 * min_radius


def find_circles(region: np.ndarray, circle_acc: float) -> List[Circle]:
    h, w = region.shape[:2]
    min_radius, max_radius, min_dist = hough_radius_range((w, h))

    found = cv2.HoughCircles(
        region,
        cv2.HOUGH_GRADIENT_ALT,
        HOUGH["dp"],
        min_dist,
        param1=HOUGH["param1"],
        param2=circle_acc,
        minRadius=min_radius,
        maxRadius=max_radius,
    )
    if found is None:
        return []
    return [Circle.from_hough(v) for v in found.reshape(-1, 3)]


def crop_region(img: np.ndarray, contour: np.ndarray) -> Tuple[np.ndarray, Tuple[int, int]]:
    x, y, w, h = bounding_rect(contour)
    return img[y : y + h, x : x + w], (x, y)


def associate_circles(
    gray: np.ndarray,
    square: np.ndarray,
    circle_finder: CircleFinder,
) -> Optional[SquareWithCircles]:
    roi, offset = crop_region(gray, square)
    circles = [c.translate(offset) for c in circle_finder(roi)]
    if not circles:
        return None
    return SquareWithCircles(square=square, circles=circles)


def squares_with_circles(
    gray: np.ndarray,
    squares: List[np.ndarray],
    circle_finder: CircleFinder,
    workers: int = 1,
) -> List[SquareWithCircles]:
    """
    Run the circle finder inside each square's bounding box and keep the squares
    that contain at least one circle. Circle coordinates are in gray's space.

    With workers > 1 the squares are processed on a thread pool; results come
    back in input order either way.
    """
    def _one(square: np.ndarray) -> Optional[SquareWithCircles]:
        return associate_circles(gray, square, circle_finder)

    if workers > 1 and len(squares) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            found = list(executor.map(_one, squares))
    else:
        found = [_one(sq) for sq in squares]

    out = [s for s in found if s is not None]
    logger.debug("squares_with_circles: %d squares -> %d symbols", len(squares), len(out))
    return out
