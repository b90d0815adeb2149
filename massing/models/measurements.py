"""Site measurement models"""
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple


@dataclass(frozen=True)
class SideLength:
    """Length of one polygon edge, wrapping last -> first"""
    length: float
    start_index: int
    end_index: int
    start_point: Tuple[float, float]
    end_point: Tuple[float, float]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start": self.start_index,
            "end": self.end_index,
            "length": self.length,
            "startPoint": list(self.start_point),
            "endPoint": list(self.end_point),
        }


@dataclass(frozen=True)
class SiteMeasurements:
    """Side lengths, perimeter and area of the site boundary"""
    sides: List[SideLength]
    total_perimeter: float
    area: float

    @property
    def number_of_sides(self) -> int:
        return len(self.sides)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sides": [side.to_dict() for side in self.sides],
            "totalPerimeter": self.total_perimeter,
            "area": self.area,
            "numberOfSides": self.number_of_sides,
        }
