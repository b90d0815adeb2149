"""Base class for serializers that read the building collection and roads"""
from abc import ABC, abstractmethod
from typing import Any, Sequence, Tuple

from massing.core import ExportError
from massing.components.projection import CoordinateProjector
from massing.models.building import Building, Ring


class BaseExporter(ABC):
    """Abstract base class for serializers of a building collection"""

    export_name: str = "export"

    def __init__(self, projector: CoordinateProjector):
        self._projector = projector

    @abstractmethod
    def export(self, buildings: Sequence[Building], roads: Sequence[Ring] = ()) -> Any:
        """
        Serialize a building collection

        Args:
            buildings: Building collection in store order
            roads: Road polylines in world coordinates

        Returns:
            Export document

        Raises:
            ExportError: If the collection has no site boundary
        """
        pass

    def _site(self, buildings: Sequence[Building]) -> Tuple[int, Building]:
        for index, building in enumerate(buildings):
            if building.is_main:
                return index, building
        raise ExportError(self.export_name, "no main site boundary found")
