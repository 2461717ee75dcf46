"""
Drawing / CAD file lookup.

The drawing index maps 'series|size|stage|bore|TAP' keys to 2D PDF and 3D
STEP file paths. Lookup is an ordered chain of strategies:

1. exact key, when the motor's mounting tap is known;
2. merge of every entry sharing the 'series|size|stage|bore' prefix, only
   when no tap is known. A known tap with no exact entry returns nothing
   rather than drawings for a different flange.
"""

import re
from pathlib import PurePosixPath
from typing import Callable, Iterable, Mapping, Optional

from gearsel.models.keys import DrawingKey
from gearsel.models.selection import DrawingFiles

DrawingIndex = Mapping[str, DrawingFiles]
Lookup = Callable[[DrawingIndex, DrawingKey], Optional[DrawingFiles]]

# e.g. GPB042-L1-(8-30-45-M3).PDF
DRAWING_FILENAME = re.compile(
    r"^([A-Z]+)(\d+)-([^-]+)-\(([0-9.]+)-.*-(M\d+)\)\.",
    re.IGNORECASE,
)

FILE_CLASSES = {
    "pdf": "pdf",
    "dwg": "step",
}


def exact_key(index: DrawingIndex, key: DrawingKey) -> Optional[DrawingFiles]:
    if not key.mounting_tap:
        return None
    entry = index.get(key.encode())
    if entry is None or entry.is_empty:
        return None
    return entry


def merge_by_prefix(index: DrawingIndex, key: DrawingKey) -> Optional[DrawingFiles]:
    if key.mounting_tap:
        return None
    prefix = key.prefix() + "|"
    pdf: list[str] = []
    step: list[str] = []
    for k, entry in index.items():
        if k.startswith(prefix):
            pdf.extend(entry.pdf)
            step.extend(entry.step)
    merged = DrawingFiles(pdf=pdf, step=step)
    return None if merged.is_empty else merged


DEFAULT_LOOKUPS: tuple[Lookup, ...] = (exact_key, merge_by_prefix)


def find_drawings(
    index: DrawingIndex,
    series: str,
    size: int,
    stage: str,
    bore_mm: float,
    mounting_tap: Optional[str] = None,
    lookups: tuple[Lookup, ...] = DEFAULT_LOOKUPS,
) -> DrawingFiles:
    """
    Find drawing files for a reducer configuration.

    Returns:
        DrawingFiles (empty when nothing matches)
    """
    key = DrawingKey(
        series=series,
        size=size,
        stage=stage,
        bore_mm=bore_mm,
        mounting_tap=mounting_tap or None,
    )
    for lookup in lookups:
        found = lookup(index, key)
        if found is not None:
            return found
    return DrawingFiles()


def parse_drawing_filename(filename: str) -> Optional[DrawingKey]:
    """Parse a drawing file name into its index key, or None if it doesn't follow the convention."""
    match = DRAWING_FILENAME.match(filename)
    if not match:
        return None
    series, size, stage, shaft, tap = match.groups()
    return DrawingKey(
        series=series.upper(),
        size=int(size),
        stage=stage.upper(),
        bore_mm=float(shaft),
        mounting_tap=tap.upper(),
    )


def build_index_from_filenames(paths: Iterable[str]) -> dict[str, DrawingFiles]:
    """
    Build a drawing index from relative paths like 'pdf/GPB/GPB042-L1-(8-30-45-M3).PDF'.

    The top-level folder decides the file class: 'pdf' for 2D drawings,
    'dwg' for 3D CAD. Paths that don't follow the naming convention are skipped.
    """
    collected: dict[str, dict[str, list[str]]] = {}
    for path in paths:
        parts = PurePosixPath(path).parts
        if not parts:
            continue
        file_class = FILE_CLASSES.get(parts[0].lower())
        if file_class is None:
            continue
        key = parse_drawing_filename(parts[-1])
        if key is None:
            continue
        entry = collected.setdefault(key.encode(), {"pdf": [], "step": []})
        entry[file_class].append(path)

    return {
        key: DrawingFiles(pdf=files["pdf"], step=files["step"])
        for key, files in collected.items()
    }
