import pytest
import yaml

from bank_recon.config import (
    ReconConfig,
    _deep_merge,
    generate_default_config,
    get_default_config,
    load_config,
)
from bank_recon.utils.exceptions import ConfigurationError


def test_defaults():
    config = load_config(None)

    assert config.input.timezone == "Asia/Jakarta"
    assert config.input.system.column_mappings["id"] == "trxID"
    assert config.input.bank.column_mappings["id"] == "unique_identifier"
    assert config.matching.strategy == "exact"
    assert config.output.currency_prefix == "Rp."
    assert config.config_file_path is None


def test_yaml_overrides_are_deep_merged(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "input": {"timezone": "UTC", "bank": {"delimiter": ";"}},
                "output": {"currency_prefix": "IDR"},
            }
        )
    )

    config = load_config(path)

    assert config.input.timezone == "UTC"
    assert config.input.bank.delimiter == ";"
    # Untouched siblings keep their defaults
    assert config.input.bank.column_mappings["date"] == "date"
    assert config.output.currency_prefix == "IDR"
    assert config.output.sheets.summary.name == "Summary"
    assert config.config_file_path == str(path)


def test_missing_file_falls_back_to_defaults(tmp_path):
    config = load_config(tmp_path / "absent.yaml")
    assert config.config_file_path is None


def test_invalid_timezone_rejected(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("input:\n  timezone: Not/AZone\n")

    with pytest.raises(ConfigurationError, match="Invalid configuration"):
        load_config(path)


def test_non_mapping_yaml_rejected(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- just\n- a list\n")

    with pytest.raises(ConfigurationError, match="must be a mapping"):
        load_config(path)


def test_generate_default_config_round_trips(tmp_path):
    path = tmp_path / "nested" / "config.yaml"

    generate_default_config(path)

    content = path.read_text()
    assert content.startswith("# Bank Statement Reconciliation Configuration")
    assert yaml.safe_load(content) == get_default_config()
    assert load_config(path).input == ReconConfig().input


def test_deep_merge_replaces_non_dict_values():
    base = {"a": {"b": 1, "c": [1, 2]}, "d": 1}
    merged = _deep_merge(base, {"a": {"c": [3]}, "e": 2})

    assert merged == {"a": {"b": 1, "c": [3]}, "d": 1, "e": 2}
    assert base["a"]["c"] == [1, 2]
