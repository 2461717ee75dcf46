"""
Output speed, output torque and service factor.

All functions are pure and absorb degenerate inputs (missing or
non-positive ratio, zero torque) by returning 0 instead of raising.

Service factor is rated / applied: how many times over-rated the gearbox
is for the torque it has to deliver. Higher is safer, and the suitability
thresholds are calibrated to this orientation.
"""

from typing import Optional

from gearsel.models.catalog import Motor, Reducer
from gearsel.models.selection import SizingOutputs
from gearsel.scoring.suitability import classify


def _clamp_efficiency(efficiency: Optional[float]) -> float:
    """Efficiency outside (0, 1] is treated as 1."""
    if efficiency is not None and 0 < efficiency <= 1:
        return efficiency
    return 1.0


def output_rpm(motor_rated_rpm: float, ratio: Optional[float]) -> float:
    """Gearbox output speed: motor speed / ratio (0 for a missing or non-positive ratio)."""
    if not ratio or ratio <= 0:
        return 0.0
    return (motor_rated_rpm or 0.0) / ratio


def output_torque(motor_rated_torque: float, ratio: Optional[float], efficiency: Optional[float]) -> float:
    """Gearbox output torque: motor torque x ratio x efficiency."""
    if not ratio or ratio <= 0:
        return 0.0
    return (motor_rated_torque or 0.0) * ratio * _clamp_efficiency(efficiency)


def effective_efficiency(reducer: Reducer, ratio: float) -> float:
    """
    Efficiency of a reducer at a ratio.

    Uses the ratio's own spec, falling back to the representative
    efficiency when the ratio has no entry or its value is zero.
    """
    spec = reducer.spec_for(ratio)
    efficiency = spec.efficiency if spec is not None else None
    if not efficiency:
        efficiency = reducer.efficiency
    return _clamp_efficiency(efficiency)


def effective_rated_torque(reducer: Reducer, ratio: float) -> float:
    """Rated output torque at a ratio, falling back to the reducer's maximum."""
    spec = reducer.spec_for(ratio)
    torque = spec.torque if spec is not None else None
    if not torque:
        torque = reducer.max_output_torque
    return torque or 0.0


def service_factor(applied_output_torque: float, reducer_rated_torque: float) -> float:
    """Rated torque / applied torque, or 0 if either is non-positive."""
    if not applied_output_torque or applied_output_torque <= 0:
        return 0.0
    if not reducer_rated_torque or reducer_rated_torque <= 0:
        return 0.0
    return reducer_rated_torque / applied_output_torque


def evaluate(
    motor: Motor,
    reducer: Reducer,
    ratio: float,
    load_factor: float = 1.0,
) -> SizingOutputs:
    """
    Run the full sizing chain for one motor/reducer/ratio.

    Args:
        motor: Selected motor (rated speed and torque are used)
        reducer: Candidate reducer
        ratio: Gear ratio
        load_factor: Multiplier for the required service factor

    Returns:
        SizingOutputs with speeds, torques, service factor and tier
    """
    efficiency = effective_efficiency(reducer, ratio)
    rated_torque = effective_rated_torque(reducer, ratio)
    torque_out = output_torque(motor.rated_torque, ratio, efficiency)
    sf = service_factor(torque_out, rated_torque)

    return SizingOutputs(
        ratio=ratio,
        output_rpm=output_rpm(motor.rated_rpm, ratio),
        output_torque=torque_out,
        rated_torque=rated_torque,
        efficiency=efficiency,
        stage=reducer.stage_for(ratio),
        service_factor=sf,
        load_factor=load_factor,
        suitability=classify(sf, load_factor),
    )
