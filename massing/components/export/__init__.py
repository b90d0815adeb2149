"""
Export serializers.

Grid-coordinate JSON, flat CSV and zone/surface JSON documents, all built
from the same floor grouping of the buildings inside the site boundary.
"""

from massing.components.export.base_exporter import BaseExporter
from massing.components.export.floor_groups import FloorGrouper
from massing.components.export.grid_exporter import GridExporter
from massing.components.export.csv_exporter import CsvExporter
from massing.components.export.zone_exporter import ZoneExporter, format_coordinates

__all__ = [
    'BaseExporter',
    'FloorGrouper',
    'GridExporter',
    'CsvExporter',
    'ZoneExporter',
    'format_coordinates',
]
