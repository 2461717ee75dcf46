"""
Structured keys for the catalog's string-encoded lookups.

The adapter catalog, adapter part codes and the drawing index are all keyed
by strings built from numeric fields. Each key format lives here as a small
model with a matching encode/decode pair so producers and consumers cannot
drift apart (zero padding, decimal rendering, tap case).
"""

from typing import Optional

from pydantic import BaseModel, Field


def format_number(value: float) -> str:
    """Render a number the way catalog keys expect: 8.0 -> '8', 6.35 -> '6.35'."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def _parse_number(text: str, what: str, source: str) -> float:
    try:
        return float(text)
    except ValueError:
        raise ValueError(f"Invalid {what} '{text}' in '{source}'") from None


class ShaftKey(BaseModel):
    """Shaft-size key used by the adapter catalog ('G08', 'G14', 'G6.35')."""
    diameter_mm: float = Field(..., gt=0, description="Motor shaft diameter in mm")

    model_config = {"frozen": True}

    def encode(self) -> str:
        if float(self.diameter_mm).is_integer():
            return f"G{int(self.diameter_mm):02d}"
        return f"G{format_number(self.diameter_mm)}"

    @classmethod
    def decode(cls, key: str) -> "ShaftKey":
        if not key or key[0] != "G":
            raise ValueError(f"Shaft key must start with 'G': '{key}'")
        return cls(diameter_mm=_parse_number(key[1:], "shaft diameter", key))

    def __str__(self) -> str:
        return self.encode()


class AdapterCode(BaseModel):
    """
    Adapter part code, e.g. '8-30-45-M3'.

    Segments are shaft diameter, centering diameter, fixing PCD and an
    optional mounting-tap thread. A code whose last segment does not start
    with 'M' has no tap.
    """
    shaft_dia: float = Field(..., description="Motor shaft diameter (mm)")
    centering_dia: float = Field(..., description="Flange centering diameter (mm)")
    fixing_pcd: float = Field(..., description="Fixing bolt pitch circle diameter (mm)")
    mounting_tap: Optional[str] = Field(default=None, description="Mounting tap thread, e.g. 'M3'")

    model_config = {"frozen": True}

    def encode(self) -> str:
        parts = [
            format_number(self.shaft_dia),
            format_number(self.centering_dia),
            format_number(self.fixing_pcd),
        ]
        if self.mounting_tap:
            parts.append(self.mounting_tap)
        return "-".join(parts)

    @classmethod
    def decode(cls, code: str) -> "AdapterCode":
        parts = code.split("-")
        if len(parts) < 3:
            raise ValueError(f"Adapter code needs at least 3 segments: '{code}'")
        last = parts[-1]
        return cls(
            shaft_dia=_parse_number(parts[0], "shaft diameter", code),
            centering_dia=_parse_number(parts[1], "centering diameter", code),
            fixing_pcd=_parse_number(parts[2], "fixing PCD", code),
            mounting_tap=last if last.startswith("M") else None,
        )

    def __str__(self) -> str:
        return self.encode()


class DrawingKey(BaseModel):
    """
    Drawing index key: 'series|size|stage|bore[|TAP]'.

    Size is zero-padded to three digits, bore is a bare number and the
    mounting tap is uppercased. The bore is the adapter flange bore, i.e.
    the motor shaft diameter, not the reducer input bore.
    """
    series: str
    size: int = Field(..., ge=0)
    stage: str
    bore_mm: float = Field(..., ge=0)
    mounting_tap: Optional[str] = None

    model_config = {"frozen": True}

    def prefix(self) -> str:
        return "|".join([
            self.series.upper(),
            f"{self.size:03d}",
            self.stage.upper(),
            format_number(self.bore_mm),
        ])

    def encode(self) -> str:
        if self.mounting_tap:
            return f"{self.prefix()}|{self.mounting_tap.upper()}"
        return self.prefix()

    @classmethod
    def decode(cls, key: str) -> "DrawingKey":
        parts = key.split("|")
        if len(parts) not in (4, 5):
            raise ValueError(f"Drawing key needs 4 or 5 segments: '{key}'")
        size = _parse_number(parts[1], "size", key)
        return cls(
            series=parts[0],
            size=int(size),
            stage=parts[2],
            bore_mm=_parse_number(parts[3], "bore diameter", key),
            mounting_tap=parts[4] if len(parts) == 5 and parts[4] else None,
        )

    def __str__(self) -> str:
        return self.encode()
