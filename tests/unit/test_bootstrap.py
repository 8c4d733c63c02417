"""
Unit tests for bootstrap/config.py and bootstrap/logging_setup.py
"""

import json
import logging

import pytest

from cerrex.bootstrap import (
    CashflowConfig,
    CerrexConfig,
    JSONFormatter,
    get_config,
    load_config,
    setup_logging,
)
from cerrex.cost import MissingUnitFactorPolicy
from cerrex.errors import ConfigurationError


def _installed(root):
    return [h for h in root.handlers if getattr(h, "_cerrex_handler", False)]


class TestDefaults:
    """Test default values."""

    def test_defaults(self):
        config = CerrexConfig.from_env()
        assert config.estimate.default_contingency_rate == 10.0
        assert config.estimate.missing_policy is MissingUnitFactorPolicy.ZERO
        assert config.cashflow.start_year == 2026
        assert config.cashflow.inflation_rate == 2.0
        assert config.cashflow.discount_rate == 4.0
        assert config.cashflow.duration_years == 10
        assert config.sensitivity.uf_multipliers == [0.5, 0.75, 1.0, 1.25, 1.5]
        assert config.sensitivity.deferral_years == [0, 5, 10, 30, 50]
        assert config.logging.level == "INFO"


class TestEnvironment:
    """Test CERREX_* overrides."""

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("CERREX_DISCOUNT_RATE", "3.5")
        monkeypatch.setenv("CERREX_DURATION_YEARS", "15")
        monkeypatch.setenv("CERREX_MISSING_UF_POLICY", "raise")
        monkeypatch.setenv("CERREX_UF_MULTIPLIERS", "0.9,1.1")
        config = CerrexConfig.from_env()
        assert config.cashflow.discount_rate == 3.5
        assert config.cashflow.duration_years == 15
        assert config.estimate.missing_policy is MissingUnitFactorPolicy.RAISE
        assert config.sensitivity.uf_multipliers == [0.9, 1.1]

    def test_unparseable_value(self, monkeypatch):
        monkeypatch.setenv("CERREX_DURATION_YEARS", "ten")
        with pytest.raises(ConfigurationError, match="CERREX_DURATION_YEARS"):
            CerrexConfig.from_env()

    def test_out_of_range_value(self, monkeypatch):
        monkeypatch.setenv("CERREX_DURATION_YEARS", "0")
        with pytest.raises(ConfigurationError, match="duration_years"):
            CerrexConfig.from_env()

    def test_unknown_policy(self, monkeypatch):
        monkeypatch.setenv("CERREX_MISSING_UF_POLICY", "ignore")
        with pytest.raises(ConfigurationError):
            CerrexConfig.from_env()


class TestConfigFile:
    """Test JSON config files."""

    def test_file_overrides(self, tmp_path):
        path = tmp_path / "cerrex.json"
        path.write_text(json.dumps({
            "cashflow": {"inflation_rate": 3.0},
            "sensitivity": {"deferral_years": [0, 20]},
        }))
        config = load_config(str(path))
        assert config.cashflow.inflation_rate == 3.0
        assert config.cashflow.discount_rate == 4.0
        assert config.sensitivity.deferral_years == [0, 20]
        assert get_config() is config

    def test_invalid_value_in_file(self, tmp_path):
        path = tmp_path / "cerrex.json"
        path.write_text(json.dumps({"cashflow": {"discount_rate": -100}}))
        with pytest.raises(ConfigurationError, match="discount_rate"):
            load_config(str(path))

    def test_section_not_an_object(self, tmp_path):
        path = tmp_path / "cerrex.json"
        path.write_text(json.dumps({"cashflow": 5}))
        with pytest.raises(ConfigurationError, match="'cashflow' must be an object"):
            load_config(str(path))

    @pytest.mark.parametrize("section,values,match", [
        ("cashflow", {"inflation_rate": "abc"}, "cashflow.inflation_rate must be a number"),
        ("cashflow", {"duration_years": True}, "duration_years"),
        ("estimate", {"default_contingency_rate": "10"}, "default_contingency_rate must be a number"),
        ("sensitivity", {"uf_multipliers": "0.5,1.0"}, "list of numbers"),
        ("sensitivity", {"deferral_years": [0, "ten"]}, "deferral_years must be a number"),
    ])
    def test_wrong_value_type(self, tmp_path, section, values, match):
        path = tmp_path / "cerrex.json"
        path.write_text(json.dumps({section: values}))
        with pytest.raises(ConfigurationError, match=match):
            load_config(str(path))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "cerrex.json"
        path.write_text("{not json")
        with pytest.raises(ConfigurationError, match="not valid JSON"):
            load_config(str(path))

    def test_missing_file_falls_back(self, tmp_path):
        config = load_config(str(tmp_path / "absent.json"))
        assert config.cashflow == CashflowConfig()

    def test_to_dict(self):
        data = CerrexConfig().to_dict()
        assert data["cashflow"]["duration_years"] == 10
        assert data["estimate"]["missing_unit_factor_policy"] == "zero"


class TestLogging:
    """Test setup_logging."""

    @pytest.fixture
    def root_logger(self):
        root = logging.getLogger()
        level = root.level
        yield root
        for handler in _installed(root):
            root.removeHandler(handler)
            handler.close()
        root.setLevel(level)

    def test_handlers_replaced_not_stacked(self, tmp_path, root_logger):
        setup_logging("DEBUG", log_file=str(tmp_path / "a.log"))
        setup_logging("WARNING", log_file=str(tmp_path / "b.log"))
        assert len(_installed(root_logger)) == 2
        assert root_logger.level == logging.WARNING

    def test_file_handler_writes(self, tmp_path, root_logger):
        log_file = tmp_path / "cerrex.log"
        setup_logging("INFO", log_file=str(log_file), json_format=True)
        logging.getLogger("cerrex.test").info("written")
        for handler in _installed(root_logger):
            handler.flush()
        assert json.loads(log_file.read_text().splitlines()[-1])["message"] == "written"

    def test_json_formatter(self):
        record = logging.LogRecord("cerrex.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
        payload = json.loads(JSONFormatter().format(record))
        assert payload["message"] == "hello world"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "cerrex.test"
