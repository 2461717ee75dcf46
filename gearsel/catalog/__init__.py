"""
Catalog datasets: loading, validation, drawing index lookup and CSV import.

Catalogs are loaded once and shared read-only for the life of the process.
"""

from gearsel.catalog.datasets import Catalog
from gearsel.catalog.loader import (
    CatalogLoadError,
    catalog_exists,
    default_catalog,
    load_catalog,
)
from gearsel.catalog.drawings import find_drawings, build_index_from_filenames

__all__ = [
    "Catalog",
    "CatalogLoadError",
    "catalog_exists",
    "default_catalog",
    "load_catalog",
    "find_drawings",
    "build_index_from_filenames",
]
