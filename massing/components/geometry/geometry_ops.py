"""
Geometry Operations

2D polygon primitives used for hit testing, editing and export: containment,
shoelace area, perimeter, centroid, shape construction and edge normals.
"""
import math
from typing import List, Optional, Sequence, Tuple

import numpy as np
from shapely.geometry import LineString as ShapelyLine, Point as ShapelyPoint, Polygon as ShapelyPolygon

from massing.core import EDITOR_CONSTANTS, GeometryError
from massing.components.geometry.point_2d import Point2D
from massing.models.building import Ring, to_ring
from massing.models.measurements import SideLength

Coords = Sequence[Sequence[float]]


class GeometryOps:
    """
    Pure 2D polygon primitives.

    Polygons are sequences of (x, y) pairs without a closing duplicate.
    Point containment uses an even-odd ray cast towards +X with half-open
    edge crossings: points on a boundary edge facing -X or -Y of an
    axis-aligned polygon count as inside, points on edges facing +X or +Y
    count as outside.
    """

    @classmethod
    def _as_array(cls, polygon: Coords) -> np.ndarray:
        return np.asarray([(float(p[0]), float(p[1])) for p in polygon], dtype=float).reshape(-1, 2)

    @classmethod
    def point_in_polygon(cls, point: Point2D | Sequence[float], polygon: Coords) -> bool:
        """
        Even-odd ray casting containment test

        Args:
            point: Point to test
            polygon: Polygon vertices

        Returns:
            True if the ray from point crosses the boundary an odd number of times
        """
        if isinstance(point, Point2D):
            x, y = point.x, point.y
        else:
            x, y = float(point[0]), float(point[1])

        inside = False
        n = len(polygon)
        j = n - 1
        for i in range(n):
            xi, yi = polygon[i][0], polygon[i][1]
            xj, yj = polygon[j][0], polygon[j][1]
            if (yi > y) != (yj > y):
                x_cross = (xj - xi) * (y - yi) / (yj - yi) + xi
                if x < x_cross:
                    inside = not inside
            j = i
        return inside

    @classmethod
    def is_polygon_inside(cls, inner: Coords, outer: Coords) -> bool:
        """Check that every vertex of inner lies inside outer"""
        return all(cls.point_in_polygon(p, outer) for p in inner)

    @classmethod
    def signed_area(cls, polygon: Coords) -> float:
        """Shoelace sum halved; positive for counter-clockwise rings"""
        if len(polygon) < 3:
            return 0.0
        coords = cls._as_array(polygon)
        x, y = coords[:, 0], coords[:, 1]
        return float(np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y) / 2.0)

    @classmethod
    def polygon_area(cls, polygon: Coords) -> float:
        """Absolute shoelace area"""
        return abs(cls.signed_area(polygon))

    @classmethod
    def side_lengths(cls, polygon: Coords) -> List[SideLength]:
        """
        Euclidean length of every edge, wrapping last -> first

        Args:
            polygon: Polygon vertices

        Returns:
            One SideLength per vertex
        """
        n = len(polygon)
        sides = []
        for i in range(n):
            j = (i + 1) % n
            start = (float(polygon[i][0]), float(polygon[i][1]))
            end = (float(polygon[j][0]), float(polygon[j][1]))
            sides.append(SideLength(
                length=math.hypot(end[0] - start[0], end[1] - start[1]),
                start_index=i,
                end_index=j,
                start_point=start,
                end_point=end
            ))
        return sides

    @classmethod
    def total_perimeter(cls, polygon: Coords) -> float:
        return sum(side.length for side in cls.side_lengths(polygon))

    @classmethod
    def centroid(cls, polygon: Coords) -> Point2D:
        """
        Arithmetic mean of the vertices (not area weighted)

        Raises:
            GeometryError: If the polygon has no vertices
        """
        if len(polygon) == 0:
            raise GeometryError("Cannot compute centroid of an empty polygon")
        mean = cls._as_array(polygon).mean(axis=0)
        return Point2D(float(mean[0]), float(mean[1]))

    @classmethod
    def bounding_box(cls, polygon: Coords) -> Tuple[float, float, float, float]:
        """
        Axis-aligned bounds

        Returns:
            (min_x, min_y, max_x, max_y) tuple
        """
        if len(polygon) == 0:
            raise GeometryError("Cannot compute bounds of an empty polygon")
        coords = cls._as_array(polygon)
        min_x, min_y = coords.min(axis=0)
        max_x, max_y = coords.max(axis=0)
        return (float(min_x), float(min_y), float(max_x), float(max_y))

    @classmethod
    def dedupe_consecutive(cls, points: Coords,
                           epsilon: float = EDITOR_CONSTANTS.DEDUPE_EPSILON) -> Ring:
        """
        Drop every point that lies within epsilon of its successor

        The last point is compared with the first, so a closing duplicate is
        removed as well.

        Args:
            points: Input points
            epsilon: Per-axis tolerance

        Returns:
            Points without zero-length edges
        """
        n = len(points)
        kept = []
        for i in range(n):
            current = points[i]
            following = points[(i + 1) % n]
            if abs(current[0] - following[0]) > epsilon or abs(current[1] - following[1]) > epsilon:
                kept.append(current)
        return to_ring(kept)

    @classmethod
    def rectangle_vertices(cls, a: Point2D, b: Point2D) -> Ring:
        """Axis-aligned rectangle spanned by two corners, counter-clockwise from min corner"""
        min_x, max_x = min(a.x, b.x), max(a.x, b.x)
        min_y, max_y = min(a.y, b.y), max(a.y, b.y)
        return ((min_x, min_y), (max_x, min_y), (max_x, max_y), (min_x, max_y))

    @classmethod
    def circle_vertices(cls, center: Point2D, radius: float,
                        segments: int = EDITOR_CONSTANTS.CIRCLE_SEGMENTS) -> Ring:
        """Regular polygon approximating a circle, starting on +X"""
        angles = np.arange(segments) * (2.0 * math.pi / segments)
        xs = center.x + np.cos(angles) * radius
        ys = center.y + np.sin(angles) * radius
        return tuple((float(x), float(y)) for x, y in zip(xs, ys))

    @classmethod
    def edge_normal(cls, polygon: Coords, edge_index: int) -> Optional[Point2D]:
        """
        Unit perpendicular (-dy, dx) of the edge starting at edge_index

        Returns:
            Normal vector, or None for a zero-length edge
        """
        n = len(polygon)
        x1, y1 = polygon[edge_index % n][0], polygon[edge_index % n][1]
        x2, y2 = polygon[(edge_index + 1) % n][0], polygon[(edge_index + 1) % n][1]
        dx, dy = x2 - x1, y2 - y1
        length = math.hypot(dx, dy)
        if length == 0:
            return None
        return Point2D(-dy / length, dx / length)

    @classmethod
    def displace_edge(cls, polygon: Coords, edge_index: int, normal: Point2D, distance: float) -> Ring:
        """
        Move the two vertices bounding one edge along its normal

        All other vertices are returned unchanged.
        """
        n = len(polygon)
        moved = {edge_index % n, (edge_index + 1) % n}
        result = []
        for i, (x, y) in enumerate(polygon):
            if i in moved:
                result.append((x + normal.x * distance, y + normal.y * distance))
            else:
                result.append((x, y))
        return to_ring(result)

    @classmethod
    def nearest_edge(cls, polygon: Coords, point: Point2D) -> int:
        """
        Index of the polygon edge closest to a point

        Raises:
            GeometryError: If the polygon has fewer than 2 vertices
        """
        n = len(polygon)
        if n < 2:
            raise GeometryError("Polygon needs at least 2 vertices to have edges")
        target = ShapelyPoint(point.x, point.y)
        distances = [
            ShapelyLine([tuple(polygon[i]), tuple(polygon[(i + 1) % n])]).distance(target)
            for i in range(n)
        ]
        return int(np.argmin(distances))

    @classmethod
    def is_simple(cls, polygon: Coords) -> bool:
        """Whether the ring forms a valid, non self-intersecting polygon"""
        if len(polygon) < 3:
            return False
        return ShapelyPolygon([tuple(p) for p in polygon]).is_valid

    @classmethod
    def buffer(cls, polygon: Coords, distance: float) -> Ring:
        """
        Offset a polygon outwards by distance

        Returns:
            Exterior ring of the buffered polygon without the closing duplicate
        """
        buffered = ShapelyPolygon([tuple(p) for p in polygon]).buffer(distance)
        if buffered.is_empty or buffered.geom_type != "Polygon":
            raise GeometryError(f"Buffering by {distance} did not produce a single polygon")
        return to_ring(list(buffered.exterior.coords)[:-1])
