"""
Geometry module for footprint editing.

This module provides the 2D polygon primitives used for hit testing,
containment, measurement and shape construction, plus parsers for the
coordinate list formats accepted at the import boundary.
"""

from massing.components.geometry.point_2d import Point2D
from massing.components.geometry.geometry_ops import GeometryOps
from massing.components.geometry.polygon_parser import (
    IPolygonDataParser,
    DictPolygonParser,
    ListPolygonParser,
    PolygonParserFactory
)

__all__ = [
    'Point2D',
    'GeometryOps',
    'IPolygonDataParser',
    'DictPolygonParser',
    'ListPolygonParser',
    'PolygonParserFactory',
]
