"""
Gearbox Selector (gearsel)

A selection tool that pairs servo/stepper motors with planetary gearboxes,
checks shaft compatibility, resolves bushings, adapters and drawings, and
classifies each candidate by service factor.

WARNING: Results are catalog-based estimates. Confirm final selections
against the manufacturer's data sheets.

Usage:
    python -m gearsel make-example
    python -m gearsel candidates --input example_request.json
    python -m gearsel select --input example_request.json --reducer reducer-GPB-60
    python -m gearsel serve --port 8000
"""

__version__ = "0.1.0"
__author__ = "Gearbox Selector Project"

from gearsel.models.catalog import Adapter, Bushing, Motor, RatioSpec, Reducer
from gearsel.models.selection import (
    CandidateResult,
    LoadType,
    OperatingConditions,
    SelectionReport,
    SelectionResult,
    Suitability,
)
from gearsel.catalog.datasets import Catalog
from gearsel.catalog.loader import load_catalog
from gearsel.selector.candidates import GearboxSelector
from gearsel.selector.session import SelectionSession

__all__ = [
    "Adapter",
    "Bushing",
    "Motor",
    "RatioSpec",
    "Reducer",
    "CandidateResult",
    "LoadType",
    "OperatingConditions",
    "SelectionReport",
    "SelectionResult",
    "Suitability",
    "Catalog",
    "load_catalog",
    "GearboxSelector",
    "SelectionSession",
]
