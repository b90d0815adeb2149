from massing.components.projection.geodetic import (
    IGeodeticProjection,
    WebMercatorProjection,
    EquirectangularProjection,
    ProjectionFactory,
)
from massing.components.projection.grid_spec import GridSpec
from massing.components.projection.coordinate_projector import CoordinateProjector

__all__ = [
    "IGeodeticProjection",
    "WebMercatorProjection",
    "EquirectangularProjection",
    "ProjectionFactory",
    "GridSpec",
    "CoordinateProjector",
]
