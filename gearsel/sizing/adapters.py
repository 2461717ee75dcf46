"""
Adapter part resolution.

The adapter catalog is keyed model name -> shaft key -> adapter type ->
part code. Resolution runs an ordered list of strategies over the entries
for one model/shaft; the first strategy that finds an entry wins.
"""

from typing import Callable, Mapping, Optional

from gearsel.models.catalog import Adapter, Motor
from gearsel.models.keys import AdapterCode, ShaftKey, format_number

AdapterEntries = Mapping[str, str]
AdapterCatalog = Mapping[str, Mapping[str, AdapterEntries]]
Strategy = Callable[[AdapterEntries, Motor], Optional[tuple[str, str]]]


def flange_code_for(motor: Motor) -> Optional[str]:
    """
    Part code a motor's flange would need, or None if its flange spec is incomplete.
    """
    if not motor.has_flange_spec:
        return None
    return "-".join([
        format_number(motor.shaft_diameter),
        format_number(motor.centering_dia),
        format_number(motor.fixing_pcd),
        motor.mounting_tap,
    ])


def match_exact_flange(entries: AdapterEntries, motor: Motor) -> Optional[tuple[str, str]]:
    """Entry whose part code equals the motor's full flange code."""
    target = flange_code_for(motor)
    if target is None:
        return None
    for adapter_type, code in entries.items():
        if code == target:
            return adapter_type, code
    return None


def prefer_servo_type(entries: AdapterEntries, motor: Motor) -> Optional[tuple[str, str]]:
    """First entry with an 'SV' (servo) adapter type."""
    for adapter_type, code in entries.items():
        if adapter_type.startswith("SV"):
            return adapter_type, code
    return None


def first_entry(entries: AdapterEntries, motor: Motor) -> Optional[tuple[str, str]]:
    """First entry in catalog order."""
    for adapter_type, code in entries.items():
        return adapter_type, code
    return None


DEFAULT_STRATEGIES: tuple[Strategy, ...] = (
    match_exact_flange,
    prefer_servo_type,
    first_entry,
)


def adapter_entries(
    catalog: AdapterCatalog,
    reducer_model: str,
    shaft_diameter: float,
) -> Optional[AdapterEntries]:
    """Type -> code entries for a model and shaft size, or None if not catalogued."""
    shaft_key = ShaftKey(diameter_mm=shaft_diameter).encode()
    return catalog.get(reducer_model, {}).get(shaft_key)


def find_adapter(
    reducer_model: str,
    motor: Motor,
    catalog: AdapterCatalog,
    strategies: tuple[Strategy, ...] = DEFAULT_STRATEGIES,
) -> Optional[Adapter]:
    """
    Resolve the adapter part for a reducer model and motor.

    Args:
        reducer_model: Reducer model name as used by the catalog, e.g. 'GPB042'
        motor: Selected motor
        catalog: Adapter catalog
        strategies: Resolution strategies, tried in order

    Returns:
        Adapter, or None when the model/shaft combination has no adapter
        (e.g. hollow rotary models mounted without one).
    """
    shaft_key = ShaftKey(diameter_mm=motor.shaft_diameter).encode()
    entries = adapter_entries(catalog, reducer_model, motor.shaft_diameter)
    if not entries:
        return None

    for strategy in strategies:
        found = strategy(entries, motor)
        if found is None:
            continue
        adapter_type, code = found
        parsed = AdapterCode.decode(code)
        return Adapter(
            reducer_model=reducer_model,
            shaft=shaft_key,
            type=adapter_type,
            code=code,
            shaft_dia=parsed.shaft_dia,
            centering_dia=parsed.centering_dia,
            fixing_pcd=parsed.fixing_pcd,
            mounting_tap=parsed.mounting_tap,
        )
    return None
