import math
from typing import List

from .types import SquareWithCircles


def centering_score(sq: SquareWithCircles) -> float:
    """Distance from the square's center to its nearest circle, over the side length."""
    cx, cy = sq.center
    min_dist = min(math.hypot(c.x - cx, c.y - cy) for c in sq.circles)
    return min_dist / sq.side_length


def sort_squares(squares: List[SquareWithCircles]) -> List[SquareWithCircles]:
    # sorted() is stable: equal scores keep input order
    return sorted(squares, key=centering_score)
