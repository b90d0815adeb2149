"""
Massing editor engine.

Draft building footprints on a 2D plane, extrude them into volumes, stack
floors and export the result as grid coordinates and zone/surface documents.
"""

__version__ = "0.3.0"
