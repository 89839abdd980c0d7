"""
Модульные тесты для barcodeforge/__init__.py
Тестирует метаданные, логирование, загрузку конфигурации и публичный API.
"""

import json
import logging
import re
from pathlib import Path
from unittest import mock

import pytest

import barcodeforge


class TestVersionMetadata:
    """Тестирование метаданных версии и констант."""

    def test_version_format(self) -> None:
        """Проверить, что __version__ следует семантическому версионированию."""
        assert re.match(r"^\d+\.\d+\.\d+$", barcodeforge.__version__)

    def test_version_components(self) -> None:
        expected = (
            f"{barcodeforge.VERSION_MAJOR}."
            f"{barcodeforge.VERSION_MINOR}."
            f"{barcodeforge.VERSION_PATCH}"
        )
        assert barcodeforge.__version__ == expected

    def test_metadata_attributes(self) -> None:
        for name in ("__author__", "__description__", "__license__", "__python_requires__"):
            value = getattr(barcodeforge, name)
            assert isinstance(value, str) and value, f"{name} должен быть непустой строкой"


class TestPublicAPI:
    """Тестирование экспортов __all__."""

    def test_all_exports_exist(self) -> None:
        for name in barcodeforge.__all__:
            assert hasattr(barcodeforge, name), f"Экспорт {name} отсутствует"

    def test_no_duplicate_exports(self) -> None:
        assert len(barcodeforge.__all__) == len(set(barcodeforge.__all__))

    def test_core_classes_exported(self) -> None:
        for name in ("BarcodeService", "QrCodeBuilder", "Validator", "BarcodeError"):
            assert name in barcodeforge.__all__

    def test_exception_hierarchy(self) -> None:
        assert issubclass(barcodeforge.ChecksumError, barcodeforge.ValidationError)
        assert issubclass(barcodeforge.RenderError, barcodeforge.BarcodeError)


class TestLogging:
    """Тестирование настройки логирования."""

    def test_get_logger_name_format(self) -> None:
        assert barcodeforge.get_logger("plugin").name == "barcodeforge.plugin"

    def test_get_logger_with_qualified_name(self) -> None:
        logger = barcodeforge.get_logger("barcodeforge.renderers")
        assert logger.name == "barcodeforge.renderers"

    def test_get_logger_with_main(self) -> None:
        assert barcodeforge.get_logger("__main__").name == "barcodeforge.main"

    def test_get_logger_with_dots(self) -> None:
        assert barcodeforge.get_logger(".relative").name == "barcodeforge.relative"

    def test_package_logger_configured(self) -> None:
        """Логгер пакета имеет обработчик и не передаёт записи корневому логгеру."""
        root = logging.getLogger("barcodeforge")
        assert root.handlers
        assert root.propagate is False

    def test_setup_is_idempotent(self) -> None:
        root = logging.getLogger("barcodeforge")
        before = list(root.handlers)
        barcodeforge._setup_logging()
        assert root.handlers == before


class TestConfiguration:
    """Тестирование управления конфигурацией."""

    def test_load_config_defaults(self, tmp_path: Path) -> None:
        """Отсутствующий файл даёт значения по умолчанию."""
        config = barcodeforge.load_config(tmp_path / "missing.json")
        assert config["default_type"] == "code128"
        assert config["default_format"] == "png"
        assert config["render_defaults"] == {}
        assert config["qr_defaults"] == {}
        assert config["log_level"] == "INFO"

    def test_load_config_from_file(self, tmp_path: Path) -> None:
        config_path = tmp_path / "barcodeforge.json"
        config_path.write_text(
            json.dumps(
                {
                    "default_type": "ean13",
                    "render_defaults": {"height": 80},
                    "custom_key": "custom_value",
                }
            ),
            encoding="utf-8",
        )
        config = barcodeforge.load_config(config_path)

        assert config["default_type"] == "ean13"
        assert config["render_defaults"] == {"height": 80}
        assert config["custom_key"] == "custom_value"
        # Отсутствующие ключи берутся по умолчанию
        assert config["default_format"] == "png"

    def test_load_config_invalid_json(self, tmp_path: Path) -> None:
        config_path = tmp_path / "broken.json"
        config_path.write_text("{invalid json content", encoding="utf-8")

        with mock.patch.object(barcodeforge, "get_logger") as get_logger:
            config = barcodeforge.load_config(config_path)

        assert config["default_type"] == "code128"
        warning = get_logger.return_value.warning
        warning.assert_called_once()
        assert "Недопустимый JSON" in warning.call_args[0][0]

    def test_load_config_non_dict_json(self, tmp_path: Path) -> None:
        config_path = tmp_path / "list.json"
        config_path.write_text(json.dumps(["not", "a", "dict"]), encoding="utf-8")

        with mock.patch.object(barcodeforge, "get_logger") as get_logger:
            config = barcodeforge.load_config(config_path)

        assert config["default_format"] == "png"
        assert "JSON-объект" in get_logger.return_value.warning.call_args[0][0]

    def test_load_config_env_var(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        config_path = tmp_path / "from_env.json"
        config_path.write_text(json.dumps({"default_format": "svg"}), encoding="utf-8")
        monkeypatch.setenv(barcodeforge.CONFIG_ENV_VAR, str(config_path))

        assert barcodeforge.load_config()["default_format"] == "svg"

    def test_defaults_not_mutated(self, tmp_path: Path) -> None:
        config = barcodeforge.load_config(tmp_path / "missing.json")
        config["render_defaults"]["height"] = 10
        config["default_type"] = "qrcode"

        fresh = barcodeforge.load_config(tmp_path / "missing.json")
        assert fresh["render_defaults"] == {}
        assert fresh["default_type"] == "code128"

    def test_load_config_directory_path(self, tmp_path: Path) -> None:
        """Каталог вместо файла: ошибка чтения не пробрасывается."""
        with mock.patch.object(barcodeforge, "get_logger") as get_logger:
            config = barcodeforge.load_config(tmp_path)

        assert config["default_type"] == "code128"
        get_logger.return_value.warning.assert_called_once()
