"""
In-memory catalog container.

Holds the four catalog datasets plus the drawing index. Built once by the
loader and shared read-only; nothing mutates it afterwards.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from gearsel.models.catalog import Bushing, Motor, Reducer
from gearsel.models.selection import DrawingFiles
from gearsel.sizing.compatibility import BushingIndex


def _freeze_adapters(raw: Mapping) -> Mapping:
    return MappingProxyType({
        model: MappingProxyType({
            shaft: MappingProxyType(dict(entries))
            for shaft, entries in shafts.items()
        })
        for model, shafts in raw.items()
    })


@dataclass(frozen=True)
class Catalog:
    """Motors, reducers, bushings, adapter catalog and drawing index."""
    motors: tuple[Motor, ...]
    reducers: tuple[Reducer, ...]
    bushings: tuple[Bushing, ...]
    adapters: Mapping[str, Mapping[str, Mapping[str, str]]] = field(default_factory=dict)
    drawings: Mapping[str, DrawingFiles] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "motors", tuple(self.motors))
        object.__setattr__(self, "reducers", tuple(self.reducers))
        object.__setattr__(self, "bushings", tuple(self.bushings))
        object.__setattr__(self, "adapters", _freeze_adapters(self.adapters))
        object.__setattr__(self, "drawings", MappingProxyType(dict(self.drawings)))
        object.__setattr__(self, "bushing_index", BushingIndex(self.bushings))
        object.__setattr__(self, "_motors_by_id", {m.id: m for m in self.motors})
        object.__setattr__(self, "_reducers_by_id", {r.id: r for r in self.reducers})

    def get_motor(self, motor_id: str) -> Optional[Motor]:
        return self._motors_by_id.get(motor_id)

    def get_reducer(self, reducer_id: str) -> Optional[Reducer]:
        return self._reducers_by_id.get(reducer_id)

    @property
    def brands(self) -> list[str]:
        return sorted({m.brand for m in self.motors})

    def summary(self) -> dict[str, int]:
        """Record counts per dataset."""
        return {
            "motors": len(self.motors),
            "reducers": len(self.reducers),
            "bushings": len(self.bushings),
            "adapter_models": len(self.adapters),
            "drawing_keys": len(self.drawings),
        }
