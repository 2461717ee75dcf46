"""
Pydantic models for catalog records, catalog keys and selection results.
"""

from gearsel.models.catalog import Motor, RatioSpec, Reducer, Bushing, Adapter
from gearsel.models.keys import ShaftKey, AdapterCode, DrawingKey
from gearsel.models.selection import (
    Suitability,
    LoadType,
    MountingDirection,
    OperatingConditions,
    SizingOutputs,
    CandidateResult,
    DrawingFiles,
    SelectionResult,
    SelectionReport,
    CandidateRequest,
    SelectRequest,
)

__all__ = [
    "Motor",
    "RatioSpec",
    "Reducer",
    "Bushing",
    "Adapter",
    "ShaftKey",
    "AdapterCode",
    "DrawingKey",
    "Suitability",
    "LoadType",
    "MountingDirection",
    "OperatingConditions",
    "SizingOutputs",
    "CandidateResult",
    "DrawingFiles",
    "SelectionResult",
    "SelectionReport",
    "CandidateRequest",
    "SelectRequest",
]
