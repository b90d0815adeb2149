"""Validators for buildings and building collections"""
from massing.validation.building_validators.building_validator import BuildingValidator
from massing.validation.building_validators.collection_validator import CollectionValidator

__all__ = [
    "BuildingValidator",
    "CollectionValidator",
]
