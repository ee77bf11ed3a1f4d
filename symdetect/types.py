from dataclasses import dataclass, fields
from typing import Any, Dict, List, Tuple
import numpy as np

from .config import DEFAULT_PARAMS


@dataclass(frozen=True)
class Circle:
    x: float
    y: float
    radius: float

    @classmethod
    def from_hough(cls, v) -> "Circle":
        return cls(float(v[0]), float(v[1]), float(v[2]))

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def int_center(self) -> Tuple[int, int]:
        return (int(round(self.x)), int(round(self.y)))

    def int_radius(self) -> int:
        return int(round(self.radius))

    def translate(self, offset: Tuple[float, float]) -> "Circle":
        dx, dy = offset
        return Circle(self.x + dx, self.y + dy, self.radius)


@dataclass(eq=False)
class SquareWithCircles:
    square: np.ndarray                       # (4,1,2) int32, full-image coords
    circles: List[Circle]

    def __post_init__(self):
        if not self.circles:
            raise ValueError("SquareWithCircles needs at least one circle")

    def points(self) -> np.ndarray:
        return self.square.reshape(-1, 2)

    @property
    def side_length(self) -> float:
        pts = self.points().astype(np.float64)
        edges = np.roll(pts, -1, axis=0) - pts
        return float(np.linalg.norm(edges, axis=1).sum() / 4.0)

    @property
    def center(self) -> Tuple[float, float]:
        cx, cy = self.points().astype(np.float64).sum(axis=0) / 4.0
        return (float(cx), float(cy))


@dataclass
class DetectorParams:
    """Tunable thresholds of one detection run."""
    t1: float = DEFAULT_PARAMS["t1"]
    t2: float = DEFAULT_PARAMS["t2"]
    poly_acc: float = DEFAULT_PARAMS["poly_acc"]
    circle_acc: float = DEFAULT_PARAMS["circle_acc"]
    grayscale_only: bool = DEFAULT_PARAMS["grayscale_only"]
    workers: int = DEFAULT_PARAMS["workers"]

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "DetectorParams":
        known = {f.name for f in fields(cls)}
        unknown = set(d) - known
        if unknown:
            raise ValueError(f"Unknown detector parameters: {sorted(unknown)}")
        return cls(**d)

    @classmethod
    def from_ratio(cls, t1: float, ratio: float, **kwargs: Any) -> "DetectorParams":
        return cls(t1=t1, t2=t1 * ratio, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "t1": self.t1,
            "t2": self.t2,
            "poly_acc": self.poly_acc,
            "circle_acc": self.circle_acc,
            "grayscale_only": self.grayscale_only,
            "workers": self.workers,
        }
