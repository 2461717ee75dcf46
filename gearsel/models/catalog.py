"""
Catalog record models.

Motors, reducers (planetary gearboxes), bushings and resolved adapters.
Records are frozen: catalogs are loaded once and shared read-only.
Validation happens here so malformed rows are rejected at load time
instead of reaching the resolvers.
"""

import re
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


RATIO_SUFFIX = re.compile(r"[Kk]$")


def parse_ratio(value) -> float:
    """Normalise a ratio value: 10 -> 10.0, '3K' -> 3.0, '10k' -> 10.0."""
    if isinstance(value, str):
        value = RATIO_SUFFIX.sub("", value.strip())
    ratio = float(value)
    if ratio <= 0:
        raise ValueError(f"Ratio must be positive, got {ratio}")
    return ratio


class Motor(BaseModel):
    """
    Servo motor catalog record.

    Flange attributes (centering diameter, fixing PCD, mounting tap) are
    optional; adapter matching is only exact when all three are known.
    """
    id: str = Field(..., description="Catalog identifier, e.g. 'M0001'")
    brand: str = Field(..., description="Manufacturer")
    series: str = Field(default="", description="Product family, e.g. 'HG', 'MINAS A6'")
    basic_type: str = Field(default="", description="Category, e.g. 'HG-KR'")
    model_name: str = Field(..., description="Full model designation")
    shaft_diameter: float = Field(..., description="Output shaft diameter (mm)")
    rated_power: float = Field(default=0.0, ge=0, description="Rated power (kW)")
    rated_torque: float = Field(..., ge=0, description="Rated torque (N·m)")
    peak_torque: float = Field(default=0.0, ge=0, description="Peak torque (N·m)")
    rated_rpm: float = Field(..., ge=0, description="Rated speed (rpm)")
    max_rpm: float = Field(default=0.0, ge=0, description="Maximum speed (rpm)")
    inertia: float = Field(default=0.0, ge=0, description="Rotor inertia (kg·cm²)")

    weight_kg: Optional[float] = Field(default=None, ge=0)
    shaft_length: Optional[float] = Field(default=None, ge=0, description="Shaft length (mm)")
    centering_dia: Optional[float] = Field(default=None, gt=0, description="Flange centering diameter (mm)")
    centering_height: Optional[float] = Field(default=None, ge=0, description="Centering depth (mm)")
    fixing_pcd: Optional[float] = Field(default=None, gt=0, description="Fixing bolt PCD (mm)")
    fixing_hole_size: Optional[float] = Field(default=None, gt=0, description="Fixing hole size (mm)")
    body_size: Optional[float] = Field(default=None, gt=0, description="Flange body size (mm)")
    adapter_code: Optional[str] = Field(default=None, description="Manufacturer adapter code, e.g. '8-30-46-M4'")
    mounting_tap: Optional[str] = Field(default=None, description="Mounting tap thread, e.g. 'M4'")

    model_config = {"frozen": True}

    @field_validator("shaft_diameter")
    @classmethod
    def validate_shaft_diameter(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("shaft_diameter must be > 0")
        return v

    @field_validator("mounting_tap")
    @classmethod
    def normalize_tap(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip().upper()
        return v or None

    @property
    def has_flange_spec(self) -> bool:
        """Whether all flange attributes needed for an exact adapter match are known."""
        return (
            self.centering_dia is not None
            and self.fixing_pcd is not None
            and bool(self.mounting_tap)
        )


class RatioSpec(BaseModel):
    """Per-ratio rating of a reducer."""
    torque: float = Field(..., ge=0, description="Rated output torque at this ratio (N·m)")
    efficiency: float = Field(..., gt=0, le=1, description="Efficiency as a fraction")
    stage: str = Field(default="-", description="Gear stage label, e.g. 'L1', 'L2'")

    model_config = {"frozen": True}


class Reducer(BaseModel):
    """
    Planetary gearbox model.

    `supported_ratios` and `ratio_data` must describe the same set of ratios.
    Aggregate fields (max torque, representative efficiency, loads, weight...)
    are for display and fallbacks only.
    """
    id: str = Field(..., description="Catalog identifier")
    type: str = Field(default="", description="Gearbox category")
    series: str = Field(..., description="Series, e.g. 'GPB'")
    size: int = Field(..., gt=0, description="Frame size, e.g. 42")
    model_name: str = Field(..., description="Model name used by the adapter catalog, e.g. 'GPB042'")
    shaft_hole_diameter: float = Field(
        ...,
        ge=0,
        description="Input bore diameter (mm); 0 when the model has no adapter data",
    )
    supported_ratios: list[float] = Field(..., min_length=1)
    ratio_data: dict[float, RatioSpec] = Field(...)

    max_input_rpm: Optional[float] = Field(default=None, ge=0)
    max_output_torque: float = Field(default=0.0, ge=0, description="Largest rated torque over all ratios (N·m)")
    efficiency: Optional[float] = Field(default=None, ge=0, description="Representative efficiency")
    allowed_radial_load: Optional[float] = Field(default=None, ge=0, description="N")
    allowed_axial_load: Optional[float] = Field(default=None, ge=0, description="N")
    weight: Optional[float] = Field(default=None, ge=0, description="kg")
    noise: Optional[float] = Field(default=None, ge=0, description="dB")
    rigidity: Optional[float] = Field(default=None, ge=0, description="N·m/arcmin")
    inertia: Optional[float] = Field(default=None, ge=0, description="kg·cm²")
    tilting_moment: Optional[float] = Field(default=None, ge=0, description="N·m")

    model_config = {"frozen": True}

    @field_validator("supported_ratios", mode="before")
    @classmethod
    def normalize_ratios(cls, v):
        return [parse_ratio(r) for r in v]

    @field_validator("ratio_data", mode="before")
    @classmethod
    def normalize_ratio_keys(cls, v):
        if isinstance(v, dict):
            return {parse_ratio(k): spec for k, spec in v.items()}
        return v

    @model_validator(mode="after")
    def check_ratio_sets(self) -> "Reducer":
        ratios = set(self.supported_ratios)
        specs = set(self.ratio_data)
        if ratios != specs:
            missing = sorted(ratios - specs)
            extra = sorted(specs - ratios)
            raise ValueError(
                f"Reducer {self.id}: ratio_data keys do not match supported_ratios "
                f"(missing specs: {missing}, unlisted specs: {extra})"
            )
        return self

    def spec_for(self, ratio: float) -> Optional[RatioSpec]:
        return self.ratio_data.get(float(ratio))

    def supports(self, ratio: float) -> bool:
        return float(ratio) in self.ratio_data

    def stage_for(self, ratio: float) -> str:
        spec = self.spec_for(ratio)
        return spec.stage if spec is not None else "-"


class Bushing(BaseModel):
    """Sleeve that seats a smaller motor shaft in a larger gearbox bore."""
    id: str = Field(..., description="Catalog identifier")
    code: str = Field(..., description="Bushing part code")
    shaft_mm: float = Field(..., gt=0, description="Motor shaft diameter (mm)")
    hole_mm: float = Field(..., gt=0, description="Gearbox bore diameter (mm)")
    len_mm: float = Field(default=0.0, ge=0, description="Bushing length (mm)")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_sizes(self) -> "Bushing":
        if self.shaft_mm >= self.hole_mm:
            raise ValueError(
                f"Bushing {self.code}: shaft_mm ({self.shaft_mm}) must be smaller "
                f"than hole_mm ({self.hole_mm})"
            )
        return self


class Adapter(BaseModel):
    """Adapter part resolved from the adapter catalog for a reducer/motor pair."""
    reducer_model: str = Field(..., description="Reducer model name, e.g. 'GPB042'")
    shaft: str = Field(..., description="Shaft-size key, e.g. 'G08'")
    type: str = Field(..., description="Adapter type label, e.g. 'SV1'")
    code: str = Field(..., description="Part code, e.g. '8-30-45-M3'")
    shaft_dia: float
    centering_dia: float
    fixing_pcd: float
    mounting_tap: Optional[str] = None

    model_config = {"frozen": True}
