"""
Editor Constants

Centralized location for the numeric constants of the drawing tools,
the grid export and the geodetic projections.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class EditorConstants:
    """
    Immutable constants for the massing editor (Immutable Object Pattern)

    All measurements are in their natural units:
    - Meters (or scene units) for planar measurements
    - Grid units for exported coordinates
    """

    # Building heights
    FLAT_HEIGHT_THRESHOLD: float = 0.1  # height <= this means "not yet extruded"
    DRAWN_SHAPE_HEIGHT: float = 0.1
    DEFAULT_IMPORTED_HEIGHT: float = 10.0

    # Drawing tools
    MIN_SHAPE_EXTENT: float = 0.5  # rectangle sides / circle radius must exceed this
    CIRCLE_SEGMENTS: int = 32
    POLYGON_CLOSE_RADIUS: float = 8.0
    DEDUPE_EPSILON: float = 0.001

    # Extrude drag mapping: height = max(min, max_height * (1 - vertical_fraction))
    EXTRUDE_MAX_HEIGHT: float = 50.0
    EXTRUDE_MIN_HEIGHT: float = 0.1

    # Pan
    PAN_SPEED_FACTOR: float = 0.003

    # Floor stacking
    MIN_FLOORS: int = 2
    MAX_FLOORS: int = 20

    # Grid export
    GRID_SIZE: float = 2000.0
    GRID_DIVISIONS: int = 1000

    # Geodesy
    EARTH_RADIUS_M: float = 6378137.0
    DEFAULT_BUFFER_DISTANCE_M: float = 250.0

    # Zone export formatting
    COORDINATE_DECIMALS: int = 2

    @classmethod
    def get_cell_size(cls, grid_size: float = GRID_SIZE,
                      grid_divisions: int = GRID_DIVISIONS) -> float:
        """
        Calculate grid cell size

        Args:
            grid_size: Total grid extent
            grid_divisions: Number of divisions along one axis

        Returns:
            Size of one grid cell
        """
        return grid_size / grid_divisions

    @classmethod
    def is_flat(cls, height: float) -> bool:
        """Check whether a height marks a flat, not yet extruded shape"""
        return height <= cls.FLAT_HEIGHT_THRESHOLD


# Singleton instance for easy access
EDITOR_CONSTANTS = EditorConstants()
