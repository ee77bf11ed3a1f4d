import logging
from functools import partial
from typing import Any, Dict, List, Optional, Tuple, Union
import numpy as np
import cv2

from .config import COLORS
from .detect import find_circles, find_squares, squares_with_circles
from .geometry import find_contours
from .nms import remove_inner_quads
from .preprocess import blur_and_resize, edge_map, ensure_bgr, image_size, line_thickness, to_gray
from .ranking import centering_score, sort_squares
from .types import DetectorParams, SquareWithCircles
from .visualize import ImageStacker, draw_contours, draw_result

logger = logging.getLogger(__name__)


def load_image(path: str) -> np.ndarray:
    img = cv2.imread(path, cv2.IMREAD_COLOR)
    if img is None:
        raise FileNotFoundError(f"Cannot read image: {path}")
    return img


def format_contour(contour: np.ndarray) -> str:
    return " ".join(f"({x}; {y})" for x, y in contour.reshape(-1, 2))


def result_to_json(symbols: List[SquareWithCircles]) -> Dict[str, Any]:
    out = []
    for s in symbols:
        cx, cy = s.center
        out.append({
            "square": [[int(x), int(y)] for x, y in s.points()],
            "center": [cx, cy],
            "side_length": s.side_length,
            "score": centering_score(s),
            "circles": [{"x": c.x, "y": c.y, "radius": c.radius} for c in s.circles],
        })
    return {"symbols": out}


class SymbolDetector:
    """Find square frames holding circles and rank them by how centered the circles are."""

    def __init__(self, params: Optional[DetectorParams] = None, target_size: Optional[Tuple[int, int]] = None):
        self.params = params or DetectorParams()
        self.target_size = target_size

    def detect(
        self,
        image: np.ndarray,
        return_overlay: bool = False,
        debug: bool = False,
    ) -> Union[List[SquareWithCircles], Tuple[List[SquareWithCircles], np.ndarray]]:
        if debug and not return_overlay:
            raise ValueError("debug=True only applies with return_overlay=True")
        p = self.params
        image = ensure_bgr(image)

        filtered = blur_and_resize(image, self.target_size)
        im_size = image_size(filtered)
        thickness = line_thickness(filtered)

        edges = edge_map(filtered, p.t1, p.t2, p.grayscale_only)
        contours = find_contours(edges)
        logger.debug("Found %d contours", len(contours))

        squares = remove_inner_quads(find_squares(contours, im_size, p.poly_acc))
        logger.debug("Found %d squares after removing inner quads", len(squares))

        gray = to_gray(filtered)
        finder = partial(find_circles, circle_acc=p.circle_acc)
        symbols = squares_with_circles(gray, squares, finder, workers=p.workers)
        symbols = sort_squares(symbols)
        logger.debug("Found %d symbols", len(symbols))

        if not return_overlay:
            return symbols

        if debug:
            dbg = ImageStacker()
            dbg.add(filtered).add(edges)
            draw_contours(dbg.with_copy(filtered), contours, COLORS["contour"], thickness)
            draw_contours(dbg.with_copy(filtered), squares, COLORS["square"], thickness)
            draw_result(dbg.with_copy(filtered), symbols, True, thickness)
            overlay = dbg.get()
        else:
            overlay = draw_result(filtered.copy(), symbols, False, thickness)
        return symbols, overlay


def detect_symbols(
    image: np.ndarray,
    params: Optional[DetectorParams] = None,
    **kwargs: Any,
) -> Union[List[SquareWithCircles], Tuple[List[SquareWithCircles], np.ndarray]]:
    return SymbolDetector(params).detect(image, **kwargs)
