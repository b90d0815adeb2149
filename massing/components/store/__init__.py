from massing.components.store.history import History
from massing.components.store.building_store import BuildingStore

__all__ = ["History", "BuildingStore"]
