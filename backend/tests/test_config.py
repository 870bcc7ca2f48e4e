"""
QRVault Backend — Configuration Tests
=======================================

What:  Settings load from the environment, apply defaults, and reject bad values.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from qrvault.config import Settings


class TestSettings:

    def test_port_and_db_path_from_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("PORT", "9090")
        monkeypatch.setenv("DB_PATH", str(tmp_path / "codes.db"))

        settings = Settings()

        assert settings.port == 9090
        assert settings.db_path == str(tmp_path / "codes.db")

    def test_defaults(self, monkeypatch):
        for name in ("PORT", "DB_PATH", "LOG_LEVEL", "QR_SIZE", "QR_ERROR_CORRECTION", "LIST_LIMIT"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings()

        assert settings.port == 8080
        assert settings.db_path == "./data/qrcodes.db"
        assert settings.qr_size == 256
        assert settings.qr_error_correction == "M"
        assert settings.list_limit == 100
        assert settings.log_level == "INFO"

    def test_levels_are_normalized(self):
        settings = Settings(log_level="debug", qr_error_correction="h")

        assert settings.log_level == "DEBUG"
        assert settings.qr_error_correction == "H"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"port": 0},
            {"port": 70000},
            {"log_level": "VERBOSE"},
            {"qr_error_correction": "X"},
            {"qr_size": 8},
            {"list_limit": 0},
            {"db_path": ""},
        ],
    )
    def test_invalid_values_rejected(self, overrides):
        with pytest.raises(PydanticValidationError):
            Settings(**overrides)

    def test_invalid_port_in_environment_rejected(self, monkeypatch):
        monkeypatch.setenv("PORT", "not-a-port")

        with pytest.raises(PydanticValidationError):
            Settings()
