from typing import Tuple
from dataclasses import dataclass
import math


@dataclass(frozen=True)
class Point2D:
    """Represents a 2D point on the ground plane"""
    x: float
    y: float

    def __add__(self, other: 'Point2D') -> 'Point2D':
        return Point2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Point2D') -> 'Point2D':
        return Point2D(self.x - other.x, self.y - other.y)

    def scaled(self, factor: float) -> 'Point2D':
        return Point2D(self.x * factor, self.y * factor)

    def dot(self, other: 'Point2D') -> float:
        return self.x * other.x + self.y * other.y

    def distance_to(self, other: 'Point2D') -> float:
        """Euclidean distance to another point"""
        return math.hypot(self.x - other.x, self.y - other.y)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @classmethod
    def from_tuple(cls, coords) -> 'Point2D':
        return cls(float(coords[0]), float(coords[1]))
