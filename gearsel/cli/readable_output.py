"""
Helpers to turn selection outputs into a compact, human-readable console
summary. Works on the models directly or on a saved candidates JSON file.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from gearsel.models.selection import SelectionReport, SelectionResult, Suitability
from gearsel.units import format_power, mechanical_power_kw

_TIER_LABELS = {
    Suitability.SUITABLE: "OK",
    Suitability.CAUTION: "CAUTION",
    Suitability.UNSUITABLE: "NG",
}


def _fmt_float(value: Any, unit: str = "", zero_default: str = "n/a") -> str:
    """Safely format a float with optional unit suffix."""
    try:
        fval = float(value)
    except (TypeError, ValueError):
        return zero_default
    suffix = f" {unit}" if unit else ""
    if abs(fval) >= 100:
        return f"{fval:,.0f}{suffix}"
    return f"{fval:.2f}{suffix}"


def print_report(report: SelectionReport, max_rows: int = 10) -> None:
    """
    Print a candidate report.

    Args:
        report: Output of GearboxSelector.generate_result
        max_rows: Max number of candidates to list
    """
    motor = report.motor
    print(f"Motor: {motor.brand} {motor.model_name} ({format_power(motor.rated_power)})")
    print(
        f"Ratio: {report.ratio:g} | Load: {report.conditions.load_type} "
        f"(factor {_fmt_float(report.load_factor)})"
    )
    print(
        f"Candidates: {len(report.candidates)} | "
        f"Suitable: {len(report.suitable_candidates)}"
    )

    if report.warnings:
        print("Warnings:")
        for w in report.warnings:
            print(f"  - {w}")

    shown = report.candidates[:max_rows]
    for idx, c in enumerate(shown, 1):
        print(
            f"\n[{idx}] {c.reducer.model_name} ({c.reducer.type}) | "
            f"SF {_fmt_float(c.service_factor)} | {_TIER_LABELS[c.suitability]}"
        )
        print(
            f"  Output: {_fmt_float(c.output_rpm, 'rpm')}, "
            f"{_fmt_float(c.output_torque, 'N·m')} "
            f"(rated {_fmt_float(c.rated_torque, 'N·m')}, eff {c.efficiency * 100:.0f}%, stage {c.stage})"
        )
        coupling = f"bushing {c.bushing.code}" if c.bushing else "direct"
        adapter = f"{c.adapter.type} {c.adapter.code}" if c.adapter else "none"
        print(f"  Coupling: {coupling} | Adapter: {adapter}")

    if len(report.candidates) > max_rows:
        print(f"\n... {len(report.candidates) - max_rows} more")

    if report.notes:
        print("\nNotes:")
        for note in report.notes:
            print(f"  - {note}")


def print_selection(result: SelectionResult) -> None:
    """Print a confirmed selection with its parts list and drawings."""
    motor = result.motor
    reducer = result.reducer
    print(f"Motor:   {motor.brand} {motor.model_name} ({format_power(motor.rated_power)}, "
          f"{_fmt_float(motor.rated_torque, 'N·m')}, {_fmt_float(motor.rated_rpm, 'rpm')})")
    print(f"Gearbox: {reducer.model_name} ({reducer.type}) i={result.selected_ratio:g}, stage {result.stage}")
    print(
        f"Output:  {_fmt_float(result.output_rpm, 'rpm')}, {_fmt_float(result.output_torque, 'N·m')} "
        f"({format_power(mechanical_power_kw(result.output_torque, result.output_rpm))})"
    )
    print(
        f"Check:   SF {_fmt_float(result.service_factor)} vs load factor "
        f"{_fmt_float(result.load_factor)} ({result.load_type}) -> {_TIER_LABELS[result.suitability]}"
    )
    if result.bushing:
        print(f"Bushing: {result.bushing.code} ({result.bushing.shaft_mm:g} -> {result.bushing.hole_mm:g} mm)")
    if result.adapter:
        print(f"Adapter: {result.adapter.type} {result.adapter.code}")

    for label, files in (("2D", result.drawings.pdf), ("3D", result.drawings.step)):
        for name in files:
            print(f"{label}:      {name}")

    if result.notes:
        print("Notes:")
        for note in result.notes:
            print(f"  - {note}")


def print_readable_output(json_path: Path, max_rows: int = 10) -> None:
    """
    Print a human-friendly summary of a saved candidates JSON file.

    Args:
        json_path: Path to the JSON output of `gearsel candidates`.
        max_rows: Max number of candidates to list.
    """
    data = json.loads(Path(json_path).read_text(encoding="utf-8"))
    print_report(SelectionReport.model_validate(data), max_rows=max_rows)
