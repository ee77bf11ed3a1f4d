from typing import List, Optional, Tuple
import matplotlib.pyplot as plt
import numpy as np
import cv2

from .config import COLORS
from .types import Circle, SquareWithCircles


def draw_contours(
    img: np.ndarray,
    contours: List[np.ndarray],
    color: Tuple[int, int, int],
    thickness: int = 1,
) -> np.ndarray:
    if contours:
        cv2.drawContours(img, contours, -1, color, thickness)
    return img


def draw_circles(
    img: np.ndarray,
    circles: List[Circle],
    color: Tuple[int, int, int] = COLORS["circle"],
    thickness: int = 1,
) -> np.ndarray:
    for c in circles:
        cv2.circle(img, c.int_center(), c.int_radius(), color, thickness)
    return img


def draw_result(
    img: np.ndarray,
    symbols: List[SquareWithCircles],
    paint_circles: bool,
    thickness: int = 1,
) -> np.ndarray:
    draw_contours(img, [s.square for s in symbols], COLORS["result"], thickness)
    if paint_circles:
        for s in symbols:
            draw_circles(img, s.circles, thickness=thickness)
    return img


class ImageStacker:
    """Collect same-height stage images and join them side by side."""

    def __init__(self):
        self.images: List[np.ndarray] = []

    def add(self, img: np.ndarray) -> "ImageStacker":
        if img.ndim == 2:
            img = cv2.cvtColor(img, cv2.COLOR_GRAY2BGR)
        self.images.append(img.astype(np.uint8, copy=True))
        return self

    def with_copy(self, img: np.ndarray) -> np.ndarray:
        """Append a copy of img and return it for drawing on."""
        self.add(img)
        return self.images[-1]

    def get(self) -> np.ndarray:
        return cv2.hconcat(self.images)


def show_image(img_bgr: np.ndarray, title: Optional[str] = None, figsize: tuple = (14, 10)) -> None:
    vis_rgb = cv2.cvtColor(img_bgr, cv2.COLOR_BGR2RGB)
    plt.figure(figsize=figsize)
    plt.imshow(vis_rgb)
    if title:
        plt.title(title)
    plt.axis("off")
    plt.show()
