"""
Tests for catalog loading and load-time validation.
"""

import json
import shutil

import pytest

from gearsel.catalog.loader import (
    ADAPTERS_NAME,
    BUSHINGS_NAME,
    MOTORS_NAME,
    REDUCERS_NAME,
    CatalogLoadError,
    catalog_exists,
    default_catalog,
    load_catalog,
    load_drawings,
    resolve_data_dir,
)


@pytest.fixture
def catalog_dir(tmp_path, data_dir):
    """Writable copy of the sample catalog."""
    target = tmp_path / "catalog"
    shutil.copytree(data_dir, target)
    return target


def _rewrite(path, mutate):
    data = json.loads(path.read_text(encoding="utf-8"))
    mutate(data)
    path.write_text(json.dumps(data), encoding="utf-8")


class TestLoadCatalog:
    """Tests for load_catalog on the sample data."""

    def test_sample_catalog_loads(self, catalog):
        summary = catalog.summary()

        assert summary["motors"] == 5
        assert summary["reducers"] == 5
        assert summary["bushings"] == 3
        assert summary["adapter_models"] == 4
        assert summary["drawing_keys"] == 6

    def test_ratio_suffix_normalised(self, catalog):
        """'16K' in the source data becomes ratio 16."""
        reducer = catalog.get_reducer("reducer-GPL-60")

        assert 16.0 in reducer.supported_ratios
        assert reducer.stage_for(16) == "L2"

    def test_lookup_by_id(self, catalog):
        assert catalog.get_motor("M0001").model_name == "HG-KR43"
        assert catalog.get_motor("nope") is None
        assert catalog.get_reducer("reducer-GPB-90").size == 90

    def test_catalog_is_read_only(self, catalog):
        with pytest.raises(TypeError):
            catalog.adapters["GPB042"]["G08"]["SV9"] = "8-30-45-M3"
        with pytest.raises(AttributeError):
            catalog.motors.append(catalog.motors[0])

    def test_brands(self, catalog):
        assert "Mitsubishi" in catalog.brands
        assert catalog.brands == sorted(catalog.brands)


class TestLoadValidation:
    """Malformed records stop the load."""

    def test_non_positive_shaft_rejected(self, catalog_dir):
        _rewrite(catalog_dir / MOTORS_NAME, lambda d: d[0].update(shaft_diameter=0))

        with pytest.raises(CatalogLoadError, match="M0001"):
            load_catalog(str(catalog_dir))

    def test_mismatched_ratio_sets_rejected(self, catalog_dir):
        def drop_spec(data):
            del data[0]["ratio_data"]["20"]

        _rewrite(catalog_dir / REDUCERS_NAME, drop_spec)

        with pytest.raises(CatalogLoadError, match="reducer-GPB-42"):
            load_catalog(str(catalog_dir))

    def test_duplicate_ids_rejected(self, catalog_dir):
        _rewrite(catalog_dir / MOTORS_NAME, lambda d: d.append(dict(d[0])))

        with pytest.raises(CatalogLoadError, match="duplicate id"):
            load_catalog(str(catalog_dir))

    def test_duplicate_bushing_pair_rejected(self, catalog_dir):
        def add_duplicate(data):
            data.append({"id": "BU099", "code": "B1419-B", "shaft_mm": 14, "hole_mm": 19})

        _rewrite(catalog_dir / BUSHINGS_NAME, add_duplicate)

        with pytest.raises(CatalogLoadError, match="Duplicate bushing"):
            load_catalog(str(catalog_dir))

    def test_inverted_bushing_rejected(self, catalog_dir):
        _rewrite(catalog_dir / BUSHINGS_NAME, lambda d: d[0].update(shaft_mm=20))

        with pytest.raises(CatalogLoadError):
            load_catalog(str(catalog_dir))

    def test_bad_adapter_code_rejected(self, catalog_dir):
        _rewrite(catalog_dir / ADAPTERS_NAME, lambda d: d["GPB042"]["G08"].update(SV9="8-30"))

        with pytest.raises(CatalogLoadError, match="GPB042/G08"):
            load_catalog(str(catalog_dir))

    def test_bad_shaft_key_rejected(self, catalog_dir):
        _rewrite(catalog_dir / ADAPTERS_NAME, lambda d: d["GPB042"].update({"08": {"SV1": "8-30-45-M3"}}))

        with pytest.raises(CatalogLoadError):
            load_catalog(str(catalog_dir))

    def test_invalid_json(self, catalog_dir):
        (catalog_dir / MOTORS_NAME).write_text("[{", encoding="utf-8")

        with pytest.raises(CatalogLoadError, match="invalid JSON"):
            load_catalog(str(catalog_dir))

    def test_load_error_is_value_error(self):
        assert issubclass(CatalogLoadError, ValueError)


class TestMissingFiles:
    """Tests for missing catalog files."""

    def test_missing_required_file(self, catalog_dir):
        (catalog_dir / REDUCERS_NAME).unlink()

        assert not catalog_exists(str(catalog_dir))
        with pytest.raises(FileNotFoundError, match="import-csv"):
            load_catalog(str(catalog_dir))

    def test_drawing_index_is_optional(self, catalog_dir, tmp_path):
        (catalog_dir / "drawings_index.json").unlink()

        catalog = load_catalog(str(catalog_dir))

        assert catalog_exists(str(catalog_dir))
        assert len(catalog.drawings) == 0
        assert load_drawings(str(tmp_path / "missing.json")) == {}

    def test_explicit_dir_wins(self, tmp_path):
        assert resolve_data_dir(str(tmp_path)) == tmp_path

    def test_default_catalog_loaded_once(self):
        catalog = default_catalog()

        assert catalog is default_catalog()
        assert len(catalog.motors) > 0
