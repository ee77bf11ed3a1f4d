from typing import Optional, Tuple
import cv2
import numpy as np

from .config import PREPROCESS


def ensure_bgr(img: np.ndarray) -> np.ndarray:
    if img.ndim == 2 or img.shape[2] == 1:
        return cv2.cvtColor(img, cv2.COLOR_GRAY2BGR)
    if img.shape[2] == 4:
        return cv2.cvtColor(img, cv2.COLOR_BGRA2BGR)
    return img


def to_gray(img: np.ndarray) -> np.ndarray:
    return cv2.cvtColor(img, cv2.COLOR_BGR2GRAY) if img.ndim == 3 else img


def image_size(img: np.ndarray) -> Tuple[int, int]:
    """(width, height), OpenCV order."""
    h, w = img.shape[:2]
    return w, h


def blur_and_resize(img: np.ndarray, target_size: Optional[Tuple[int, int]] = None) -> np.ndarray:
    k = PREPROCESS["blur_ksize"]
    out = cv2.GaussianBlur(img, (k, k), 0)
    if target_size is None:
        target_size = image_size(img)
    return cv2.resize(out, target_size, interpolation=cv2.INTER_CUBIC)


def edge_map(img_bgr: np.ndarray, t1: float, t2: float, grayscale_only: bool = False) -> np.ndarray:
    if grayscale_only:
        edges = cv2.Canny(to_gray(img_bgr), t1, t2)
    else:
        # keep colour edges that vanish in grayscale
        edges = None
        for c in range(3):
            channel = np.ascontiguousarray(img_bgr[:, :, c])
            ch_edges = cv2.Canny(channel, t1, t2)
            edges = ch_edges if edges is None else np.maximum(edges, ch_edges)

    k = PREPROCESS["dilate_ksize"]
    kernel = cv2.getStructuringElement(cv2.MORPH_ELLIPSE, (k, k))
    return cv2.dilate(edges, kernel)


def line_thickness(img: np.ndarray) -> int:
    w, h = image_size(img)
    return max(1, min(w, h) // PREPROCESS["thickness_divisor"])
