"""
Unit registry and helpers for catalog normalisation.

Uses pint so power, torque and speed conversions stay dimensionally
correct when ingesting manufacturer data.
"""

import pint

# Create a shared unit registry for the entire application
ureg = pint.UnitRegistry()

# Shorthand for creating quantities
Q_ = ureg.Quantity

# Common unit definitions for convenience
watt = ureg.watt
kilowatt = ureg.kilowatt
newton_meter = ureg.newton * ureg.meter
rpm = ureg.revolution / ureg.minute


def magnitude_in(quantity: pint.Quantity, unit) -> float:
    """Get the magnitude of a quantity in specified units."""
    return quantity.to(unit).magnitude


def watts_to_kw(power_w: float, ndigits: int = 2) -> float:
    """Convert a power in watts to kilowatts, rounded to `ndigits`."""
    return round(magnitude_in(Q_(power_w, watt), kilowatt), ndigits)


def kw_to_watts(power_kw: float) -> float:
    """Convert a power in kilowatts to watts."""
    return magnitude_in(Q_(power_kw, kilowatt), watt)


def format_power(power_kw: float) -> str:
    """
    Render a rated power for display.

    Values below 1 kW are shown in watts (e.g. 0.4 kW -> "400 W").
    """
    if power_kw < 1:
        return f"{kw_to_watts(power_kw):.0f} W"
    return f"{power_kw:g} kW"


def mechanical_power_kw(torque_nm: float, speed_rpm: float) -> float:
    """Shaft power in kW from torque (N·m) and speed (rpm)."""
    omega = Q_(speed_rpm, rpm).to("rad/s")
    power = Q_(torque_nm, newton_meter) * omega
    return magnitude_in(power, kilowatt)
