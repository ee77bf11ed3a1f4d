"""
Pytest configuration and shared fixtures.
"""

import os
import sys

import cv2
import numpy as np
import pytest

# Make the package importable without installation
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from symdetect.geometry import as_contour


def square_contour(x, y, side):
    return as_contour([(x, y), (x + side, y), (x + side, y + side), (x, y + side)])


def draw_symbol_image(size=400, square=(150, 150, 100), circle_radius=10, noise=True):
    """White canvas with one black square frame and a filled circle at its center."""
    img = np.full((size, size, 3), 255, dtype=np.uint8)
    x, y, side = square
    cv2.rectangle(img, (x, y), (x + side, y + side), (0, 0, 0), 3)
    if circle_radius:
        cv2.circle(img, (x + side // 2, y + side // 2), circle_radius, (0, 0, 0), -1)
    if noise:
        for nx, ny in [(20, 20), (350, 30), (40, 340), (330, 360), (60, 200)]:
            cv2.rectangle(img, (nx, ny), (nx + 5, ny + 5), (0, 0, 0), 1)
    return img


@pytest.fixture
def make_square():
    return square_contour


@pytest.fixture
def symbol_image():
    return draw_symbol_image()


@pytest.fixture
def blank_image():
    return np.full((300, 300, 3), 255, dtype=np.uint8)
