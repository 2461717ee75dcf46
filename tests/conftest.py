"""
Pytest configuration and shared fixtures.
"""

from pathlib import Path

import pytest

from gearsel.catalog.datasets import Catalog
from gearsel.catalog.loader import load_catalog
from gearsel.models.catalog import Bushing, Motor, RatioSpec, Reducer
from gearsel.selector.candidates import GearboxSelector

DATA_DIR = Path(__file__).resolve().parents[1] / "gearsel" / "data"


@pytest.fixture
def data_dir() -> Path:
    """Directory of the packaged sample catalog."""
    return DATA_DIR


@pytest.fixture
def catalog() -> Catalog:
    """Sample catalog shipped with the package."""
    return load_catalog(str(DATA_DIR))


@pytest.fixture
def selector(catalog) -> GearboxSelector:
    """Selector over the sample catalog."""
    return GearboxSelector(catalog)


@pytest.fixture
def servo_motor() -> Motor:
    """Provide a 750 W servo motor with a full flange spec."""
    return Motor(
        id="M9001",
        brand="Test",
        model_name="TEST-750",
        shaft_diameter=14,
        rated_power=0.75,
        rated_torque=2.39,
        rated_rpm=3000,
        centering_dia=70,
        fixing_pcd=90,
        mounting_tap="M6",
    )


@pytest.fixture
def small_motor() -> Motor:
    """Provide a small motor with no flange data."""
    return Motor(
        id="M9002",
        brand="Test",
        model_name="TEST-100",
        shaft_diameter=8,
        rated_power=0.1,
        rated_torque=0.318,
        rated_rpm=3000,
    )


@pytest.fixture
def gpb060() -> Reducer:
    """Provide a 60 mm frame reducer rated 24 N·m at 95% for ratio 10."""
    return Reducer(
        id="reducer-T-60",
        type="Inline",
        series="GPB",
        size=60,
        model_name="GPB060",
        shaft_hole_diameter=14,
        supported_ratios=[5, 10],
        ratio_data={
            5: RatioSpec(torque=40, efficiency=0.97, stage="L1"),
            10: RatioSpec(torque=24, efficiency=0.95, stage="L1"),
        },
        max_output_torque=40,
        efficiency=0.97,
    )


@pytest.fixture
def bushings() -> list[Bushing]:
    """Provide a small bushing catalog."""
    return [
        Bushing(id="BU001", code="B0814", shaft_mm=8, hole_mm=14, len_mm=16),
        Bushing(id="BU002", code="B1419", shaft_mm=14, hole_mm=19, len_mm=20),
    ]
