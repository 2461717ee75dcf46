"""
Models for operating conditions and selection outputs.

These describe what the selector returns: per-candidate sizing results,
the final selection, and the report wrapping a candidate list.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from gearsel.models.catalog import Adapter, Bushing, Motor, Reducer


class Suitability(str, Enum):
    """Suitability tier of a motor/reducer/ratio combination."""
    SUITABLE = "suitable"
    CAUTION = "caution"
    UNSUITABLE = "unsuitable"

    @property
    def rank(self) -> int:
        """Sort rank, best first."""
        return _SUITABILITY_RANK[self]


_SUITABILITY_RANK = {
    Suitability.SUITABLE: 0,
    Suitability.CAUTION: 1,
    Suitability.UNSUITABLE: 2,
}


class LoadType(str, Enum):
    """Character of the driven load."""
    UNIFORM = "uniform"
    MODERATE_SHOCK = "moderate_shock"
    HEAVY_SHOCK = "heavy_shock"


class MountingDirection(str, Enum):
    """Gearbox mounting orientation."""
    HORIZONTAL = "horizontal"
    VERTICAL_UP = "vertical_up"
    VERTICAL_DOWN = "vertical_down"


class OperatingConditions(BaseModel):
    """Operating conditions entered before candidates are evaluated."""
    hours_per_day: float = Field(default=8.0, gt=0, le=24, description="Daily operating hours")
    load_type: str = Field(
        default=LoadType.UNIFORM.value,
        description="Load type label; unknown labels use a load factor of 1.0",
    )
    mounting_direction: MountingDirection = Field(default=MountingDirection.HORIZONTAL)

    model_config = {"frozen": True}


class SizingOutputs(BaseModel):
    """Numbers produced by the sizing calculator for one motor/reducer/ratio."""
    ratio: float
    output_rpm: float = Field(..., ge=0)
    output_torque: float = Field(..., ge=0, description="N·m")
    rated_torque: float = Field(..., ge=0, description="Reducer rated torque at this ratio (N·m)")
    efficiency: float = Field(..., gt=0, le=1)
    stage: str = "-"
    service_factor: float = Field(..., ge=0)
    load_factor: float = Field(default=1.0, gt=0)
    suitability: Suitability

    model_config = {"frozen": True}


class CandidateResult(BaseModel):
    """One reducer evaluated against the selected motor and ratio."""
    reducer: Reducer
    ratio: float
    output_rpm: float
    output_torque: float
    rated_torque: float
    efficiency: float
    stage: str
    service_factor: float
    suitability: Suitability
    bushing: Optional[Bushing] = None
    adapter: Optional[Adapter] = None

    model_config = {"frozen": True}

    @property
    def needs_bushing(self) -> bool:
        return self.bushing is not None


class DrawingFiles(BaseModel):
    """2D drawings and 3D CAD files found for a reducer configuration."""
    pdf: list[str] = Field(default_factory=list)
    step: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def is_empty(self) -> bool:
        return not self.pdf and not self.step


class SelectionResult(BaseModel):
    """
    Final selection: a motor, a reducer, a ratio and everything derived
    from them. Replaced wholesale when the user re-selects.
    """
    motor: Motor
    reducer: Reducer
    selected_ratio: float
    output_rpm: float
    output_torque: float
    rated_torque: float
    efficiency: float
    stage: str
    service_factor: float
    suitability: Suitability
    load_type: str
    load_factor: float
    bushing: Optional[Bushing] = None
    adapter: Optional[Adapter] = None
    drawings: DrawingFiles = Field(default_factory=DrawingFiles)
    notes: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}


class SelectionReport(BaseModel):
    """Candidate list for a motor/ratio/conditions request."""
    motor: Motor
    ratio: float
    conditions: OperatingConditions
    load_factor: float
    candidates: list[CandidateResult] = Field(default_factory=list)
    notes: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @property
    def best_candidate(self) -> Optional[CandidateResult]:
        return self.candidates[0] if self.candidates else None

    @property
    def suitable_candidates(self) -> list[CandidateResult]:
        return [c for c in self.candidates if c.suitability == Suitability.SUITABLE]


class CandidateRequest(BaseModel):
    """Request body for candidate evaluation (CLI input file and API body)."""
    motor_id: str = Field(..., description="Motor catalog id")
    ratio: float = Field(..., gt=0, description="Gear ratio")
    series: Optional[str] = Field(default=None, description="Restrict to one reducer series")
    reducer_type: Optional[str] = Field(default=None, description="Restrict to one reducer category")
    conditions: OperatingConditions = Field(default_factory=OperatingConditions)

    model_config = {
        "json_schema_extra": {
            "example": {
                "motor_id": "M0001",
                "ratio": 10,
                "series": "GPB",
                "conditions": {
                    "hours_per_day": 8,
                    "load_type": "uniform",
                    "mounting_direction": "horizontal",
                },
            }
        }
    }


class SelectRequest(CandidateRequest):
    """Request body for confirming one reducer from the candidate list."""
    reducer_id: str = Field(..., description="Reducer catalog id to select")
