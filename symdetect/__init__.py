"""Top-level package interface for symdetect.

Expose the main API: SymbolDetector / detect_symbols and the result types.
"""
from .core import SymbolDetector, detect_symbols, load_image, result_to_json  # re-export
from .types import Circle, DetectorParams, SquareWithCircles

__all__ = [
    "SymbolDetector",
    "detect_symbols",
    "load_image",
    "result_to_json",
    "Circle",
    "DetectorParams",
    "SquareWithCircles",
]
