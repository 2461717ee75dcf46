"""
Sizing engine: shaft compatibility, adapter resolution and output
speed/torque/service-factor calculations.
"""

from gearsel.sizing.compatibility import BushingIndex, find_bushing, is_shaft_compatible
from gearsel.sizing.adapters import find_adapter
from gearsel.sizing.calculator import (
    output_rpm,
    output_torque,
    effective_efficiency,
    effective_rated_torque,
    service_factor,
    evaluate,
)

__all__ = [
    "BushingIndex",
    "find_bushing",
    "is_shaft_compatible",
    "find_adapter",
    "output_rpm",
    "output_torque",
    "effective_efficiency",
    "effective_rated_torque",
    "service_factor",
    "evaluate",
]
