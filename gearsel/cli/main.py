"""
Command-line interface for the gearbox selector.

Usage:
    python -m gearsel make-example [--output example_request.json]
    python -m gearsel motors [--brand Mitsubishi] [--query HG-KR]
    python -m gearsel reducers --motor M0001
    python -m gearsel candidates --input example_request.json [--output results.json]
    python -m gearsel select --input example_request.json --reducer reducer-GPB-60
    python -m gearsel import-csv --motors motor_db.csv --gearboxes gearbox.csv ...
    python -m gearsel serve [--port 8000]
"""

import argparse
import json
import sys
from pathlib import Path

from gearsel import __version__
from gearsel.catalog.loader import CatalogLoadError, load_catalog
from gearsel.cli.readable_output import print_report, print_selection
from gearsel.models.selection import CandidateRequest, OperatingConditions
from gearsel.selector.candidates import GearboxSelector, filter_motors
from gearsel.units import format_power


def _add_data_dir(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory with the catalog JSON files (default: packaged catalog)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="gearsel",
        description="Gearbox Selector - match servo motors with planetary gearboxes "
                    "and check output torque, speed and service factor.",
    )
    parser.add_argument("--version", action="version", version=f"gearsel {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # make-example command
    example_parser = subparsers.add_parser(
        "make-example",
        help="Generate an example request JSON file",
    )
    example_parser.add_argument(
        "--output", "-o",
        type=Path,
        default=Path("example_request.json"),
        help="Output path for example file (default: example_request.json)",
    )

    # motors command
    motors_parser = subparsers.add_parser(
        "motors",
        help="List catalog motors",
    )
    motors_parser.add_argument("--brand", help="Filter by manufacturer")
    motors_parser.add_argument("--series", help="Filter by product series")
    motors_parser.add_argument("--basic-type", help="Filter by category")
    motors_parser.add_argument("--query", "-q", help="Model name search (case-insensitive)")
    _add_data_dir(motors_parser)

    # reducers command
    reducers_parser = subparsers.add_parser(
        "reducers",
        help="List gearboxes compatible with a motor",
    )
    reducers_parser.add_argument("--motor", "-m", required=True, help="Motor catalog id")
    reducers_parser.add_argument("--series", help="Restrict to one series")
    reducers_parser.add_argument("--type", dest="reducer_type", help="Restrict to one category")
    _add_data_dir(reducers_parser)

    # candidates command
    candidates_parser = subparsers.add_parser(
        "candidates",
        help="Evaluate gearbox candidates for a motor and ratio",
    )
    candidates_parser.add_argument(
        "--input", "-i",
        type=Path,
        required=True,
        help="Path to JSON request file (motor_id, ratio, conditions)",
    )
    candidates_parser.add_argument(
        "--output", "-o",
        type=Path,
        default=None,
        help="Path to save JSON output (prints to stdout if not specified)",
    )
    candidates_parser.add_argument(
        "--readable",
        action="store_true",
        help="Print a human-readable summary instead of JSON",
    )
    _add_data_dir(candidates_parser)

    # select command
    select_parser = subparsers.add_parser(
        "select",
        help="Confirm one gearbox and show the full selection",
    )
    select_parser.add_argument(
        "--input", "-i",
        type=Path,
        required=True,
        help="Path to JSON request file (motor_id, ratio, conditions)",
    )
    select_parser.add_argument("--reducer", "-r", required=True, help="Reducer catalog id")
    select_parser.add_argument(
        "--output", "-o",
        type=Path,
        default=None,
        help="Path to save JSON output (prints to stdout if not specified)",
    )
    select_parser.add_argument(
        "--readable",
        action="store_true",
        help="Print a human-readable summary instead of JSON",
    )
    _add_data_dir(select_parser)

    # import-csv command
    import_parser = subparsers.add_parser(
        "import-csv",
        help="Import catalog data from CSV exports",
    )
    import_parser.add_argument("--motors", type=Path, help="Path to motor CSV export")
    import_parser.add_argument("--gearboxes", "--reducers", dest="gearboxes", type=Path,
                               help="Path to gearbox CSV export")
    import_parser.add_argument("--bushings", type=Path, help="Path to bushing CSV export")
    import_parser.add_argument(
        "--adapters",
        type=Path,
        help="Adapter catalog JSON used to derive gearbox input bores",
    )
    import_parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("data"),
        help="Output directory for JSON files (default: data)",
    )

    # serve command
    serve_parser = subparsers.add_parser(
        "serve",
        help="Start the FastAPI web server",
    )
    serve_parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)",
    )
    serve_parser.add_argument(
        "--port", "-p",
        type=int,
        default=8000,
        help="Port to listen on (default: 8000)",
    )
    serve_parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )

    return parser


def _load(args: argparse.Namespace):
    data_dir = getattr(args, "data_dir", None)
    return load_catalog(str(data_dir) if data_dir else None)


def _write_output(output_json: str, output: Path | None) -> None:
    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(output_json)
        print(f"\nResults saved to {output}", file=sys.stderr)
    else:
        print(output_json)


def _read_request(path: Path) -> CandidateRequest:
    with open(path, encoding="utf-8") as f:
        input_data = json.load(f)
    return CandidateRequest(**input_data)


def cmd_make_example(args: argparse.Namespace) -> int:
    """Generate an example request JSON file."""
    example = CandidateRequest(
        motor_id="M0002",
        ratio=10,
        series="GPB",
        conditions=OperatingConditions(
            hours_per_day=8,
            load_type="uniform",
        ),
    )

    output_json = example.model_dump_json(indent=2)

    with open(args.output, "w", encoding="utf-8") as f:
        f.write(output_json)

    print(f"Created example request file: {args.output}")
    print("\nEvaluate candidates with:")
    print(f"  python -m gearsel candidates --input {args.output}")

    return 0


def cmd_motors(args: argparse.Namespace) -> int:
    """List motors, optionally filtered."""
    try:
        catalog = _load(args)
    except (FileNotFoundError, CatalogLoadError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    motors = filter_motors(catalog.motors, args.brand, args.series, args.basic_type, args.query)
    for m in motors:
        print(
            f"{m.id:8s} {m.brand:15s} {m.model_name:20s} "
            f"{format_power(m.rated_power):>8s}  {m.rated_torque:6.2f} N·m  "
            f"{m.rated_rpm:6.0f} rpm  shaft {m.shaft_diameter:g} mm"
        )
    print(f"\n{len(motors)} motor(s)", file=sys.stderr)
    return 0


def cmd_reducers(args: argparse.Namespace) -> int:
    """List gearboxes that accept a motor's shaft."""
    try:
        catalog = _load(args)
    except (FileNotFoundError, CatalogLoadError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    motor = catalog.get_motor(args.motor)
    if motor is None:
        print(f"Error: Unknown motor id: {args.motor}", file=sys.stderr)
        return 1

    selector = GearboxSelector(catalog)
    reducers = selector.compatible_reducers(motor, args.series, args.reducer_type)
    for r in reducers:
        coupling = "direct" if r.shaft_hole_diameter == motor.shaft_diameter else "bushing"
        ratios = ", ".join(f"{x:g}" for x in r.supported_ratios)
        print(f"{r.id:18s} {r.model_name:8s} bore {r.shaft_hole_diameter:g} mm ({coupling})  ratios: {ratios}")

    if not reducers:
        print(f"\nNo compatible gearbox for a {motor.shaft_diameter:g} mm shaft", file=sys.stderr)
    else:
        ratios = ", ".join(f"{x:g}" for x in selector.available_ratios(motor, args.series, args.reducer_type))
        print(f"\nAvailable ratios: {ratios}", file=sys.stderr)
    return 0


def cmd_candidates(args: argparse.Namespace) -> int:
    """Evaluate gearbox candidates."""
    try:
        request = _read_request(args.input)
        catalog = _load(args)

        motor = catalog.get_motor(request.motor_id)
        if motor is None:
            print(f"Error: Unknown motor id: {request.motor_id}", file=sys.stderr)
            return 1

        print("\nGearbox Selector", file=sys.stderr)
        print(f"Motor: {motor.model_name} ({motor.brand})", file=sys.stderr)
        print(f"Ratio: {request.ratio:g} | Load: {request.conditions.load_type}", file=sys.stderr)
        print("Evaluating candidates...", file=sys.stderr)

        selector = GearboxSelector(catalog)
        report = selector.generate_result(
            motor,
            request.ratio,
            request.conditions,
            series=request.series,
            reducer_type=request.reducer_type,
        )

        if args.readable:
            print_report(report)
        else:
            _write_output(report.model_dump_json(indent=2), args.output)

        print(f"\nSummary: {len(report.candidates)} candidate(s), "
              f"{len(report.suitable_candidates)} suitable", file=sys.stderr)
        if report.warnings:
            print("\nWarnings:", file=sys.stderr)
            for w in report.warnings:
                print(f"  - {w}", file=sys.stderr)

        return 0

    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON in {args.input}: {e}", file=sys.stderr)
        return 1
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Validation Error: {e}", file=sys.stderr)
        return 1


def cmd_select(args: argparse.Namespace) -> int:
    """Confirm one gearbox for the request."""
    try:
        request = _read_request(args.input)
        catalog = _load(args)

        motor = catalog.get_motor(request.motor_id)
        if motor is None:
            print(f"Error: Unknown motor id: {request.motor_id}", file=sys.stderr)
            return 1
        reducer = catalog.get_reducer(args.reducer)
        if reducer is None:
            print(f"Error: Unknown reducer id: {args.reducer}", file=sys.stderr)
            return 1

        selector = GearboxSelector(catalog)
        result = selector.select_reducer(motor, reducer, request.ratio, request.conditions)
        if result is None:
            print(
                f"Error: {reducer.model_name} cannot take motor {motor.model_name} "
                f"at ratio {request.ratio:g}",
                file=sys.stderr,
            )
            return 1

        if args.readable:
            print_selection(result)
        else:
            _write_output(result.model_dump_json(indent=2), args.output)

        print(f"\nSelected {reducer.model_name} i={request.ratio:g}: "
              f"{result.suitability.value} (SF {result.service_factor:.2f})", file=sys.stderr)
        return 0

    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON in {args.input}: {e}", file=sys.stderr)
        return 1
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Validation Error: {e}", file=sys.stderr)
        return 1


def cmd_import_csv(args: argparse.Namespace) -> int:
    """Import catalog data from CSV exports."""
    from gearsel.catalog.importer import run_import

    if not (args.motors or args.gearboxes or args.bushings):
        print("Error: give at least one of --motors, --gearboxes, --bushings", file=sys.stderr)
        return 1

    for label, path in (("Motor", args.motors), ("Gearbox", args.gearboxes),
                        ("Bushing", args.bushings), ("Adapter", args.adapters)):
        if path and not path.exists():
            print(f"Error: {label} file not found: {path}", file=sys.stderr)
            return 1

    try:
        print("\nImporting catalog exports...", file=sys.stderr)
        written = run_import(
            str(args.motors) if args.motors else None,
            str(args.gearboxes) if args.gearboxes else None,
            str(args.bushings) if args.bushings else None,
            str(args.adapters) if args.adapters else None,
            str(args.output_dir),
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("\nImport complete!", file=sys.stderr)
    for path in written:
        print(f"  {path}", file=sys.stderr)
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Start the FastAPI web server."""
    try:
        import uvicorn

        print("\nStarting Gearbox Selector API", file=sys.stderr)
        print(f"API: http://{args.host}:{args.port}/", file=sys.stderr)
        print(f"Docs: http://{args.host}:{args.port}/docs", file=sys.stderr)
        print("\nPress Ctrl+C to stop\n", file=sys.stderr)

        uvicorn.run(
            "gearsel.api.server:app",
            host=args.host,
            port=args.port,
            reload=args.reload,
        )
        return 0

    except ImportError as e:
        print(f"Error: Missing dependency: {e}", file=sys.stderr)
        print("Install with: pip install uvicorn fastapi", file=sys.stderr)
        return 1


def cli(argv=None):
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "make-example": cmd_make_example,
        "motors": cmd_motors,
        "reducers": cmd_reducers,
        "candidates": cmd_candidates,
        "select": cmd_select,
        "import-csv": cmd_import_csv,
        "serve": cmd_serve,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


def main():
    """Console script entrypoint wrapper."""
    return cli()


if __name__ == "__main__":
    sys.exit(cli())
