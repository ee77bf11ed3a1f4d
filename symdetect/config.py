from typing import Dict, Tuple

# Squareness gate. Values kept from the original tool; recalibrate here if needed.
SQUARE_THRESH = {
    "angle_min_deg": 80.0,
    "angle_max_deg": 100.0,
    "side_ratio_max": 1.15,
    # size floor: area > max(image_area // area_divisor, min_area)
    "area_divisor": 128,
    "min_area": 256,
}

PREPROCESS = {
    "blur_ksize": 7,
    "dilate_ksize": 5,
    "thickness_divisor": 500,
}

HOUGH = {
    "dp": 1.5,
    "param1": 300,
    "min_radius": 7,
    "radius_divisor": 50,
}

DEFAULT_PARAMS = {
    "t1": 1.0,
    "t2": 5.0,
    "poly_acc": 0.02,
    "circle_acc": 0.87,
    "grayscale_only": False,
    "workers": 1,
}

# BGR
COLORS: Dict[str, Tuple[int, int, int]] = {
    "contour": (0, 0, 255),
    "square": (255, 0, 0),
    "result": (0, 255, 0),
    "circle": (0, 255, 255),
}

