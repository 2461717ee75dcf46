"""
Catalog loader.

Loads the prepared JSON datasets (motors, reducers, bushings, adapter
catalog, drawing index) and validates every record. A malformed record
stops the load with a CatalogLoadError naming the file and record.
"""

import json
import importlib.resources as resources
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from gearsel.catalog.datasets import Catalog
from gearsel.models.catalog import Bushing, Motor, Reducer
from gearsel.models.keys import AdapterCode, ShaftKey
from gearsel.models.selection import DrawingFiles


# Default catalog filenames
MOTORS_NAME = "motors.json"
REDUCERS_NAME = "reducers.json"
BUSHINGS_NAME = "bushings.json"
ADAPTERS_NAME = "adapters.json"
DRAWINGS_NAME = "drawings_index.json"

REQUIRED_FILES = (MOTORS_NAME, REDUCERS_NAME, BUSHINGS_NAME, ADAPTERS_NAME)

RecordT = TypeVar("RecordT", bound=BaseModel)


class CatalogLoadError(ValueError):
    """A catalog file exists but its contents are invalid."""


def get_project_root() -> Path:
    """Get the project root directory."""
    # Try to find project root by looking for pyproject.toml
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / "pyproject.toml").exists():
            return parent
    # Fallback to current working directory
    return Path.cwd()


def _packaged_data_dir() -> Optional[Path]:
    """Directory of the catalog files shipped inside gearsel.data, if available."""
    resource = resources.files("gearsel.data")
    if resource.joinpath(MOTORS_NAME).is_file():
        return Path(str(resource))
    return None


def resolve_data_dir(data_dir: Optional[str] = None) -> Path:
    """
    Find the directory holding the catalog files.

    Order: explicit directory, <project root>/data, ./data, packaged data.
    """
    if data_dir:
        return Path(data_dir)

    candidates = [
        get_project_root() / "data",
        Path.cwd() / "data",
    ]
    pkg_dir = _packaged_data_dir()
    if pkg_dir:
        candidates.append(pkg_dir)

    for candidate in candidates:
        if (candidate / MOTORS_NAME).exists():
            return candidate

    # Default to last candidate for error reporting
    return candidates[-1]


def catalog_exists(data_dir: Optional[str] = None) -> bool:
    """Check that all required catalog files are present."""
    directory = resolve_data_dir(data_dir)
    return all((directory / name).exists() for name in REQUIRED_FILES)


def _read_json(path: Path) -> Any:
    if not path.exists():
        raise FileNotFoundError(
            f"Catalog file not found at {path}. "
            f"Run 'python -m gearsel import-csv' to generate it."
        )
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise CatalogLoadError(f"{path.name}: invalid JSON: {e}") from e


def _parse_records(path: Path, model: Type[RecordT]) -> list[RecordT]:
    data = _read_json(path)
    if not isinstance(data, list):
        raise CatalogLoadError(f"{path.name}: expected a list of records")

    records = []
    seen_ids: set[str] = set()
    for i, item in enumerate(data):
        try:
            record = model.model_validate(item)
        except ValidationError as e:
            label = item.get("id", f"#{i}") if isinstance(item, dict) else f"#{i}"
            raise CatalogLoadError(f"{path.name}: invalid record {label}: {e}") from e
        record_id = getattr(record, "id", None)
        if record_id is not None:
            if record_id in seen_ids:
                raise CatalogLoadError(f"{path.name}: duplicate id {record_id}")
            seen_ids.add(record_id)
        records.append(record)
    return records


def load_motors(path: Optional[str] = None) -> list[Motor]:
    """
    Load motor records.

    Raises:
        FileNotFoundError: If the file doesn't exist
        CatalogLoadError: If a record is invalid (e.g. non-positive shaft diameter)
    """
    file_path = Path(path) if path else resolve_data_dir() / MOTORS_NAME
    return _parse_records(file_path, Motor)


def load_reducers(path: Optional[str] = None) -> list[Reducer]:
    """
    Load reducer records.

    Raises:
        FileNotFoundError: If the file doesn't exist
        CatalogLoadError: If a record is invalid (e.g. ratio sets disagree)
    """
    file_path = Path(path) if path else resolve_data_dir() / REDUCERS_NAME
    return _parse_records(file_path, Reducer)


def load_bushings(path: Optional[str] = None) -> list[Bushing]:
    """Load bushing records."""
    file_path = Path(path) if path else resolve_data_dir() / BUSHINGS_NAME
    return _parse_records(file_path, Bushing)


def load_adapters(path: Optional[str] = None) -> dict[str, dict[str, dict[str, str]]]:
    """
    Load the adapter catalog (model -> shaft key -> type -> part code).

    Shaft keys and part codes are decoded once here so a malformed entry
    is reported at load time.
    """
    file_path = Path(path) if path else resolve_data_dir() / ADAPTERS_NAME
    data = _read_json(file_path)
    if not isinstance(data, dict):
        raise CatalogLoadError(f"{file_path.name}: expected a mapping of model names")

    for model, shafts in data.items():
        if not isinstance(shafts, dict):
            raise CatalogLoadError(f"{file_path.name}: {model}: expected a mapping of shaft keys")
        for shaft_key, entries in shafts.items():
            if not isinstance(entries, dict):
                raise CatalogLoadError(f"{file_path.name}: {model}/{shaft_key}: expected a mapping of types")
            try:
                ShaftKey.decode(shaft_key)
                for code in entries.values():
                    AdapterCode.decode(code)
            except (ValueError, ValidationError) as e:
                raise CatalogLoadError(f"{file_path.name}: {model}/{shaft_key}: {e}") from e
    return data


def load_drawings(path: Optional[str] = None) -> dict[str, DrawingFiles]:
    """
    Load the drawing index. The index is optional: a missing file yields an
    empty index.
    """
    file_path = Path(path) if path else resolve_data_dir() / DRAWINGS_NAME
    if not file_path.exists():
        return {}
    data = _read_json(file_path)
    try:
        return {key: DrawingFiles.model_validate(entry) for key, entry in data.items()}
    except (AttributeError, ValidationError) as e:
        raise CatalogLoadError(f"{file_path.name}: {e}") from e


def load_catalog(data_dir: Optional[str] = None) -> Catalog:
    """
    Load and validate every dataset from one directory.

    Args:
        data_dir: Directory containing the catalog files. If None, uses the
            default resolution order (see resolve_data_dir).

    Returns:
        Catalog

    Raises:
        FileNotFoundError: If a required catalog file doesn't exist
        CatalogLoadError: If any dataset is invalid
    """
    directory = resolve_data_dir(data_dir)
    try:
        return Catalog(
            motors=load_motors(str(directory / MOTORS_NAME)),
            reducers=load_reducers(str(directory / REDUCERS_NAME)),
            bushings=load_bushings(str(directory / BUSHINGS_NAME)),
            adapters=load_adapters(str(directory / ADAPTERS_NAME)),
            drawings=load_drawings(str(directory / DRAWINGS_NAME)),
        )
    except CatalogLoadError:
        raise
    except ValueError as e:
        # Cross-record checks (duplicate bushing pairs)
        raise CatalogLoadError(str(e)) from e


@lru_cache(maxsize=1)
def default_catalog() -> Catalog:
    """Catalog from the default location, loaded once per process."""
    return load_catalog()
