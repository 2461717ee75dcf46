"""
Suitability classification.

The required service factor scales with the load type: a shock-loaded
drive needs more margin than a uniformly loaded one.

    suitable:   SF >= 1.2 x load factor
    caution:    1.0 x load factor <= SF < 1.2 x load factor
    unsuitable: anything lower, including SF == 0
"""

from typing import Optional

from gearsel.models.selection import LoadType, Suitability

SUITABLE_MARGIN = 1.2
CAUTION_MARGIN = 1.0
DEFAULT_LOAD_FACTOR = 1.0

# Required service factor multiplier by load type
LOAD_FACTORS: dict[str, float] = {
    LoadType.UNIFORM.value: 1.25,
    LoadType.MODERATE_SHOCK.value: 1.5,
    LoadType.HEAVY_SHOCK.value: 2.0,
    # Labels used by the Korean-language catalog front end
    "균일 부하": 1.25,
    "중충격": 1.5,
    "강충격": 2.0,
}

LOAD_TYPE_DESCRIPTIONS = {
    LoadType.UNIFORM.value: "Uniform load (conveyors, light indexing)",
    LoadType.MODERATE_SHOCK.value: "Moderate shock (frequent start/stop, reversing)",
    LoadType.HEAVY_SHOCK.value: "Heavy shock (presses, crushers, hard reversing)",
}


def load_factor_for(load_type: Optional[str]) -> float:
    """Load factor for a load type label; unknown labels get 1.0."""
    if load_type is None:
        return DEFAULT_LOAD_FACTOR
    if isinstance(load_type, LoadType):
        load_type = load_type.value
    return LOAD_FACTORS.get(load_type, DEFAULT_LOAD_FACTOR)


def classify(service_factor: float, load_factor: float = DEFAULT_LOAD_FACTOR) -> Suitability:
    """Classify a service factor against the load factor."""
    if service_factor >= SUITABLE_MARGIN * load_factor:
        return Suitability.SUITABLE
    if service_factor >= CAUTION_MARGIN * load_factor:
        return Suitability.CAUTION
    return Suitability.UNSUITABLE
