"""
CSV importer for manufacturer catalog exports.

Converts the motor, gearbox and bushing CSV exports into the JSON datasets
read by gearsel.catalog.loader. Gearbox rows (one per ratio) are grouped by
series and frame size into one reducer each.

Usage:
    python -m gearsel.catalog.importer \\
        --motors motor_db.csv --gearboxes gearbox_data.csv \\
        --bushings bushing_data.csv --adapters data/adapters.json
"""

import argparse
import csv
import json
import sys
from pathlib import Path
from typing import Iterable, Optional

from pydantic import ValidationError

from gearsel.models.catalog import Bushing, Motor, Reducer, RatioSpec, parse_ratio
from gearsel.models.keys import AdapterCode, ShaftKey
from gearsel.units import watts_to_kw


# CSV column names per export
MOTOR_COLUMNS = {
    "id": "id",
    "brand": "Manufacturer",
    "series": "series",
    "basic_type": "basic_type",
    "model_name": "special_type",
    "power_w": "power_P_W",
    "rated_torque": "nominal_output_torque_Tn_Nm",
    "peak_torque": "torque_peak_Tmax_Nm",
    "rated_rpm": "nominal_speed_n_rpm",
    "max_rpm": "max_speed_nmax_rpm",
    "inertia": "inertia_J_kgcm2_e4",
    "weight_kg": "mass_m_kg2",
    "shaft_diameter": "shaft_diameter_D60",
    "shaft_length": "shaft_length_L60",
    "centering_dia": "centering_diameter_D61",
    "fixing_pcd": "pitch_circle_diameter",
    "fixing_hole_size": "fixing_hole_size",
    "centering_height": "centering_depth_L612",
    "body_size": "body_size",
    "adapter_code": "adapter_code",
}

GEARBOX_COLUMNS = {
    "id": "gearbox_data_id",
    "type": "gb_type",
    "series": "gb_series",
    "size": "gb_size",
    "ratio": "gb_ratio",
    "stage": "gb_stage",
    "rated_torque": "gb_rated_torque",
    "inertia": "gb_inertia",
    "input_speed": "gb_input_speed",
    "rigidity": "gb_rigidity",
    "radial_force": "gb_radial_force",
    "axial_force": "gb_axial_force",
    "efficiency": "gb_efficiency",
    "weight": "gb_weight",
    "noise": "gb_noise",
    "tilting_moment": "gb_tilting_moment",
}

BUSHING_COLUMNS = {
    "id": "busing_id",
    "code": "bushing_code",
    "shaft_mm": "shaft_mm",
    "hole_mm": "hole_mm",
    "len_mm": "len_mm",
}

DEFAULT_EFFICIENCY = 0.95


def parse_number(s: Optional[str]) -> Optional[float]:
    """Parse a string to float, returning None for blanks, 'NULL' or junk."""
    if s is None:
        return None
    s = s.strip().replace(",", "")
    if not s or s.upper() == "NULL":
        return None
    try:
        return float(s)
    except ValueError:
        return None


def infer_stage(efficiency: Optional[float]) -> str:
    """Guess the stage label from efficiency when the export has none."""
    if efficiency is not None and efficiency >= 0.96:
        return "L1"
    if efficiency is not None and efficiency >= 0.93:
        return "L2"
    return "L3"


def read_csv_rows(path: str) -> list[dict[str, str]]:
    """Read a CSV export (BOM tolerant) into a list of dicts."""
    with open(path, "r", encoding="utf-8-sig", newline="") as f:
        reader = csv.DictReader(f)
        return [
            {(k or "").strip(): (v or "").strip() for k, v in row.items()}
            for row in reader
        ]


def check_columns(rows: list[dict[str, str]], columns: dict[str, str], source: str) -> None:
    """Raise ValueError if any expected column is missing."""
    if not rows:
        return
    missing = [col for col in columns.values() if col not in rows[0]]
    if missing:
        raise ValueError(f"{source}: missing columns: {', '.join(missing)}")


def parse_motor_row(row: dict[str, str]) -> Optional[Motor]:
    """
    Convert one motor export row.

    Rated power is exported in watts and stored in kW. The mounting tap is
    the last segment of the adapter code when it is a thread ('M4').

    Returns None for rows that aren't motor records or have no usable
    shaft diameter.
    """
    col = MOTOR_COLUMNS
    motor_id = row.get(col["id"], "")
    if not motor_id.startswith("M"):
        return None

    shaft = parse_number(row.get(col["shaft_diameter"]))
    if shaft is None or shaft <= 0:
        return None

    power_w = parse_number(row.get(col["power_w"]))
    adapter_code = row.get(col["adapter_code"], "").replace("(", "").replace(")", "") or None
    mounting_tap = None
    if adapter_code:
        try:
            mounting_tap = AdapterCode.decode(adapter_code).mounting_tap
        except ValueError:
            mounting_tap = None

    fields = {
        "id": motor_id,
        "brand": row.get(col["brand"], ""),
        "series": row.get(col["series"], ""),
        "basic_type": row.get(col["basic_type"], ""),
        "model_name": row.get(col["model_name"], ""),
        "shaft_diameter": shaft,
        "rated_power": watts_to_kw(power_w) if power_w is not None else 0.0,
        "rated_torque": parse_number(row.get(col["rated_torque"])) or 0.0,
        "peak_torque": parse_number(row.get(col["peak_torque"])) or 0.0,
        "rated_rpm": parse_number(row.get(col["rated_rpm"])) or 0.0,
        "max_rpm": parse_number(row.get(col["max_rpm"])) or 0.0,
        "inertia": parse_number(row.get(col["inertia"])) or 0.0,
        "weight_kg": parse_number(row.get(col["weight_kg"])),
        "shaft_length": parse_number(row.get(col["shaft_length"])),
        "centering_dia": parse_number(row.get(col["centering_dia"])),
        "fixing_pcd": parse_number(row.get(col["fixing_pcd"])),
        "fixing_hole_size": parse_number(row.get(col["fixing_hole_size"])),
        "centering_height": parse_number(row.get(col["centering_height"])),
        "body_size": parse_number(row.get(col["body_size"])),
        "adapter_code": adapter_code,
        "mounting_tap": mounting_tap,
    }
    return Motor(**fields)


def bore_from_adapters(model_name: str, adapters: dict) -> float:
    """
    Input bore of a reducer: the largest shaft size the adapter catalog lists
    for the model, or 0 when the model has no adapter data.
    """
    shafts = adapters.get(model_name)
    if not shafts:
        return 0.0
    sizes = []
    for key in shafts:
        try:
            sizes.append(ShaftKey.decode(key).diameter_mm)
        except ValueError:
            continue
    return max(sizes) if sizes else 0.0


def group_gearbox_rows(rows: Iterable[dict[str, str]], adapters: dict) -> list[Reducer]:
    """
    Group per-ratio gearbox rows into reducers keyed by (series, size).

    Ratios such as '3K' are normalised to numbers; a missing stage is
    inferred from efficiency.
    """
    col = GEARBOX_COLUMNS
    groups: dict[tuple[str, str], dict] = {}

    for row in rows:
        row_id = row.get(col["id"], "")
        if not row_id.startswith("G"):
            continue
        series = row.get(col["series"], "")
        size = row.get(col["size"], "")
        if not series or not size:
            continue
        try:
            ratio = parse_ratio(row.get(col["ratio"], ""))
        except ValueError:
            continue

        torque = parse_number(row.get(col["rated_torque"]))
        efficiency = parse_number(row.get(col["efficiency"]))
        stage = row.get(col["stage"], "") or infer_stage(efficiency)

        key = (series, size)
        if key not in groups:
            size_num = int(float(size))
            model_name = f"{series}{size_num:03d}"
            groups[key] = {
                "id": f"reducer-{series}-{size}",
                "type": row.get(col["type"], ""),
                "series": series,
                "size": size_num,
                "model_name": model_name,
                "shaft_hole_diameter": bore_from_adapters(model_name, adapters),
                "max_input_rpm": parse_number(row.get(col["input_speed"])),
                "allowed_radial_load": parse_number(row.get(col["radial_force"])),
                "allowed_axial_load": parse_number(row.get(col["axial_force"])),
                "efficiency": efficiency,
                "weight": parse_number(row.get(col["weight"])),
                "noise": parse_number(row.get(col["noise"])),
                "rigidity": parse_number(row.get(col["rigidity"])),
                "inertia": parse_number(row.get(col["inertia"])),
                "tilting_moment": parse_number(row.get(col["tilting_moment"])),
                "ratio_data": {},
                "max_output_torque": 0.0,
            }

        entry = groups[key]
        entry["ratio_data"][ratio] = RatioSpec(
            torque=torque or 0.0,
            efficiency=efficiency if efficiency and 0 < efficiency <= 1 else DEFAULT_EFFICIENCY,
            stage=stage,
        )
        if (torque or 0.0) > entry["max_output_torque"]:
            entry["max_output_torque"] = torque

    reducers = []
    for entry in groups.values():
        entry["supported_ratios"] = sorted(entry["ratio_data"])
        reducers.append(Reducer(**entry))
    return reducers


def parse_bushing_row(row: dict[str, str]) -> Optional[Bushing]:
    """
    Convert one bushing export row.

    Rows without a code, or whose shaft/hole pair is not a valid bushing
    (blank diameters, shaft not smaller than the hole), are skipped.
    """
    col = BUSHING_COLUMNS
    code = row.get(col["code"], "")
    if not code:
        return None
    try:
        return Bushing(
            id=row.get(col["id"], "") or code,
            code=code,
            shaft_mm=parse_number(row.get(col["shaft_mm"])) or 0.0,
            hole_mm=parse_number(row.get(col["hole_mm"])) or 0.0,
            len_mm=parse_number(row.get(col["len_mm"])) or 0.0,
        )
    except ValidationError as e:
        print(f"  Skipping bushing {code}: {e.errors()[0]['msg']}", file=sys.stderr)
        return None


def import_motors(path: str) -> list[Motor]:
    rows = read_csv_rows(path)
    check_columns(rows, MOTOR_COLUMNS, path)
    motors = [m for m in (parse_motor_row(r) for r in rows) if m is not None]
    print(f"  Parsed {len(motors)} motors from {len(rows)} rows")
    return motors


def import_gearboxes(path: str, adapters: dict) -> list[Reducer]:
    rows = read_csv_rows(path)
    check_columns(rows, GEARBOX_COLUMNS, path)
    reducers = group_gearbox_rows(rows, adapters)
    print(f"  Parsed {len(reducers)} reducers from {len(rows)} rows")
    return reducers


def import_bushings(path: str) -> list[Bushing]:
    rows = read_csv_rows(path)
    check_columns(rows, BUSHING_COLUMNS, path)
    bushings = [b for b in (parse_bushing_row(r) for r in rows) if b is not None]
    print(f"  Parsed {len(bushings)} bushings")
    return bushings


def _write_records(path: Path, records: list) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(
            [r.model_dump(mode="json", exclude_none=True) for r in records],
            f,
            indent=2,
            ensure_ascii=False,
        )
    print(f"Wrote {len(records)} records to {path}")


def run_import(
    motors_path: Optional[str],
    gearboxes_path: Optional[str],
    bushings_path: Optional[str],
    adapters_path: Optional[str] = None,
    output_dir: str = "data",
) -> list[Path]:
    """
    Run the import for whichever exports were given.

    Args:
        motors_path: Motor CSV export (optional)
        gearboxes_path: Gearbox CSV export (optional)
        bushings_path: Bushing CSV export (optional)
        adapters_path: Adapter catalog JSON used to derive reducer bores
        output_dir: Directory for output JSON files

    Returns:
        Paths of the files written
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)
    written = []

    adapters: dict = {}
    if adapters_path:
        with open(adapters_path, "r", encoding="utf-8") as f:
            adapters = json.load(f)

    # Parse every export before writing any file
    datasets = []
    if motors_path:
        datasets.append(("motors.json", import_motors(motors_path)))
    if gearboxes_path:
        datasets.append(("reducers.json", import_gearboxes(gearboxes_path, adapters)))
    if bushings_path:
        datasets.append(("bushings.json", import_bushings(bushings_path)))

    for name, records in datasets:
        target = output_path / name
        _write_records(target, records)
        written.append(target)

    return written


def main():
    """CLI entry point for CSV import."""
    parser = argparse.ArgumentParser(
        description="Import motor, gearbox and bushing CSV exports"
    )
    parser.add_argument("--motors", help="Path to motor CSV export")
    parser.add_argument("--gearboxes", help="Path to gearbox CSV export")
    parser.add_argument("--bushings", help="Path to bushing CSV export")
    parser.add_argument("--adapters", help="Adapter catalog JSON (for reducer bores)")
    parser.add_argument(
        "--output-dir",
        default="data",
        help="Output directory for JSON files (default: data)"
    )

    args = parser.parse_args()

    for label, path in (("Motor", args.motors), ("Gearbox", args.gearboxes), ("Bushing", args.bushings)):
        if path and not Path(path).exists():
            print(f"Error: {label} CSV not found: {path}")
            sys.exit(1)

    run_import(args.motors, args.gearboxes, args.bushings, args.adapters, args.output_dir)
    print("\nImport complete!")


if __name__ == "__main__":
    main()
