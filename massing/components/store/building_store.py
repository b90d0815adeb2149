"""
Building Store

Owns the ordered building collection and its undo history. Every mutation
validates first, pushes a snapshot, then swaps the backing tuple in a
single assignment, so readers never see a half-applied edit.
"""
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from massing.core import BuildingField
from massing.components.store.history import History, Snapshot
from massing.models.building import Building
from massing.validation import (
    CollectionValidator,
    FloorCountValidator,
    HeightValidator,
    IndexValidator,
    ValidationError,
    ValidationErrorType,
)

logger = logging.getLogger(__name__)


class BuildingStore:
    """Ordered building collection with snapshot-based undo"""

    def __init__(self, buildings: Sequence[Building] = ()):
        self._collection_validator = CollectionValidator()
        self._index_validator = IndexValidator()
        self._floor_count_validator = FloorCountValidator()
        self._floor_height_validator = HeightValidator("height")

        initial = tuple(buildings)
        self._collection_validator.validate(initial).raise_if_invalid()
        self._buildings: Snapshot = initial
        self._history = History()

    @property
    def buildings(self) -> Snapshot:
        return self._buildings

    @property
    def history_depth(self) -> int:
        return len(self._history)

    @property
    def main_index(self) -> Optional[int]:
        """Index of the site boundary, if any"""
        return next((i for i, b in enumerate(self._buildings) if b.is_main), None)

    @property
    def main_building(self) -> Optional[Building]:
        index = self.main_index
        return None if index is None else self._buildings[index]

    def __len__(self) -> int:
        return len(self._buildings)

    def get(self, index: int) -> Building:
        self._check_index(index)
        return self._buildings[index]

    def floors_of(self, base_index: int) -> List[int]:
        """Indices of buildings stacked on base_index"""
        return [i for i, b in enumerate(self._buildings) if b.base_building == base_index]

    def add(self, building: Building) -> int:
        """
        Append a building

        Args:
            building: Building to append

        Returns:
            Index of the new building

        Raises:
            ValidationError: If the building or resulting collection is invalid
        """
        candidate = self._buildings + (building,)
        self._validate_collection(candidate)
        self._commit(candidate)
        index = len(candidate) - 1
        logger.info(f"Added building {index} ({len(building.vertices)} vertices, height {building.height})")
        return index

    def update_at(self, index: int, patch: Dict[str, Any], record_history: bool = True) -> Building:
        """
        Replace fields of one building

        Args:
            index: Building index
            patch: Field values keyed by attribute or camelCase wire name
            record_history: Push a snapshot first; live drag updates after the
                first one pass False so a whole drag undoes in one step

        Returns:
            The updated building

        Raises:
            ValidationError: If the index, patch or result is invalid
        """
        self._check_index(index)
        try:
            changes = Building.patch_from_wire(patch)
            updated = self._buildings[index].with_changes(**changes)
        except (TypeError, ValueError) as e:
            raise ValidationError(
                error_type=ValidationErrorType.INVALID_FORMAT,
                message=str(e),
                parameter_name="patch"
            )

        candidate = self._buildings[:index] + (updated,) + self._buildings[index + 1:]
        self._validate_collection(candidate)
        self._commit(candidate, record_history=record_history)
        return updated

    def remove_at(self, index: int) -> List[int]:
        """
        Remove a building; removing a floor-stack foundation removes its floors

        Floor references are shifted down past every removed index.

        Returns:
            Removed indices in ascending order
        """
        self._check_index(index)
        removed = sorted({index, *self.floors_of(index)})
        removed_set = set(removed)

        kept = []
        for i, building in enumerate(self._buildings):
            if i in removed_set:
                continue
            if building.base_building is not None:
                shift = sum(1 for r in removed if r < building.base_building)
                building = building.with_changes(base_building=building.base_building - shift)
            kept.append(building)

        self._commit(tuple(kept))
        logger.info(f"Removed buildings {removed}")
        return removed

    def stack_floors(self, base_index: int, count: int, height: float) -> List[int]:
        """
        Turn a building into a stack of count floors of equal height

        The base becomes floor 0 with the given height and count - 1 clones
        of its footprint are appended with floorLevel 1..count-1.

        Returns:
            Indices of the new floor buildings

        Raises:
            ValidationError: If count, height or the base is invalid
        """
        self._check_index(base_index)
        self._floor_count_validator.validate(count).raise_if_invalid()
        self._floor_height_validator.validate(height).raise_if_invalid()

        base = self._buildings[base_index]
        if base.is_main:
            raise ValidationError(
                error_type=ValidationErrorType.INVALID_STATE,
                message="The site boundary cannot be stacked",
                parameter_name=BuildingField.IS_MAIN.value
            )
        if base.base_building is not None or self.floors_of(base_index):
            raise ValidationError(
                error_type=ValidationErrorType.INVALID_STATE,
                message=f"Building {base_index} is already part of a floor stack",
                parameter_name=BuildingField.BASE_BUILDING.value
            )

        foundation = base.with_changes(height=float(height), floor_level=0)
        floors = tuple(
            base.with_changes(height=float(height), floor_level=level, base_building=base_index)
            for level in range(1, count)
        )
        candidate = (
            self._buildings[:base_index] + (foundation,) + self._buildings[base_index + 1:] + floors
        )
        self._validate_collection(candidate)
        self._commit(candidate)

        new_indices = list(range(len(candidate) - len(floors), len(candidate)))
        logger.info(f"Stacked {count} floors of height {height} on building {base_index}")
        return new_indices

    def replace_all(self, buildings: Sequence[Building]) -> None:
        """Swap in a whole new collection (site import)"""
        candidate = tuple(buildings)
        self._validate_collection(candidate)
        self._commit(candidate)

    def clear_all(self) -> None:
        if not self._buildings:
            return
        self._commit(())
        logger.info("Cleared all buildings")

    def undo(self) -> bool:
        """
        Restore the latest snapshot

        Returns:
            False when there was nothing to undo
        """
        snapshot = self._history.pop()
        if snapshot is None:
            return False
        self._buildings = snapshot
        logger.debug(f"Undo restored {len(snapshot)} buildings ({len(self._history)} snapshots left)")
        return True

    def _commit(self, candidate: Tuple[Building, ...], record_history: bool = True) -> None:
        if record_history:
            self._history.push(self._buildings)
        self._buildings = candidate

    def _check_index(self, index: int) -> None:
        self._index_validator.validate(index, {"size": len(self._buildings)}).raise_if_invalid()

    def _validate_collection(self, candidate: Tuple[Building, ...]) -> None:
        self._collection_validator.validate(candidate).raise_if_invalid()
