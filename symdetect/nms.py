import logging
from typing import List
import numpy as np

from .geometry import is_inside

logger = logging.getLogger(__name__)


def remove_inner_quads(quads: List[np.ndarray]) -> List[np.ndarray]:
    """
    Drop every quad whose vertices all lie inside (or on) another quad.

    Border strokes usually yield an inner and an outer contour; only the
    outermost survives. Congruent quads dominate each other, in which case
    the earliest one in input order is kept. O(n^2), fine for the tens of
    candidates a single image produces.
    """
    keep: List[np.ndarray] = []
    for i, cur in enumerate(quads):
        dominated = False
        for j, other in enumerate(quads):
            if i == j or not is_inside(cur, other):
                continue
            if j < i or not is_inside(other, cur):
                dominated = True
                break
        if not dominated:
            keep.append(cur)

    logger.debug("remove_inner_quads: %d -> %d", len(quads), len(keep))
    return keep
