"""
Пакет barcodeforge
==================

Генерация штрихкодов и QR-кодов с несколькими выходными форматами.

Этот пакет предоставляет:
    - Реестр из 45 символик (линейные, EAN/UPC, почтовые, 2D, многострочные)
    - Проверку данных перед рендерингом (длина, набор символов, контрольная цифра)
    - Рендеринг в PNG/JPEG (Pillow), SVG, HTML и PDF (reportlab)
    - Пакетную генерацию с отчётом по каждому элементу
    - Построитель QR-кодов с логотипом, водяным знаком и подписью

Пример базового использования:
    >>> from barcodeforge import BarcodeService, get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> service = BarcodeService()
    >>> png = service.png("1234567890", "code128")
    >>> logger.info(f"Сгенерировано {len(png)} байт PNG")

QR-код с логотипом:
    >>> from barcodeforge import QrCodeBuilder
    >>>
    >>> result = (
    ...     QrCodeBuilder.create(data="https://example.com", size=400)
    ...     .logo_path("logo.png")
    ...     .label("Scan me")
    ...     .build()
    ... )
    >>> result.save_to_file("qr.png")

Управление конфигурацией:
    >>> import os
    >>> os.environ['BARCODEFORGE_LOG_LEVEL'] = 'DEBUG'
    >>>
    >>> from barcodeforge import load_config, BarcodeService
    >>>
    >>> config = load_config()
    >>> service = BarcodeService(config)

Версия: 0.1.0
Лицензия: MIT
"""

import json
import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

# =============================================================================
# МЕТАДАННЫЕ ВЕРСИИ
# =============================================================================

__version__ = "0.1.0"
__author__ = "barcodeforge developers"
__description__ = "Barcode and QR code generation with PNG, SVG, HTML and PDF output"
__license__ = "MIT"
__python_requires__ = ">=3.10"

VERSION_MAJOR = 0
VERSION_MINOR = 1
VERSION_PATCH = 0

CONFIG_ENV_VAR = "BARCODEFORGE_CONFIG"
LOG_LEVEL_ENV_VAR = "BARCODEFORGE_LOG_LEVEL"
LOG_DIR_ENV_VAR = "BARCODEFORGE_LOG_DIR"
DEFAULT_CONFIG_FILE = "barcodeforge.json"

# =============================================================================
# КОНФИГУРАЦИЯ ЛОГИРОВАНИЯ
# =============================================================================


def _setup_logging() -> None:
    """
    Инициализировать общепакетную конфигурацию логирования.

    Настраивает логгер ``barcodeforge`` с:
    - Консольным обработчиком (stderr) для WARNING и выше
    - Ротирующим файловым обработчиком, если задана переменная
      окружения BARCODEFORGE_LOG_DIR

    Уровень логирования задаётся переменной окружения
    BARCODEFORGE_LOG_LEVEL (DEBUG, INFO, WARNING, ERROR, CRITICAL).

    Функция идемпотентна: повторные вызовы не добавляют обработчиков.
    """
    log_level_str = os.environ.get(LOG_LEVEL_ENV_VAR, "INFO").upper()

    log_level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    log_level = log_level_map.get(log_level_str, logging.INFO)

    root_logger = logging.getLogger("barcodeforge")
    if root_logger.handlers:
        return

    root_logger.setLevel(log_level)

    formatter = logging.Formatter(
        fmt=("[%(asctime)s] %(levelname)-8s " "[%(name)s.%(funcName)s:%(lineno)d] %(message)s"),
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Консольный обработчик (stderr) - WARNING и выше
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    log_dir_str = os.environ.get(LOG_DIR_ENV_VAR)
    if log_dir_str:
        try:
            log_dir = Path(log_dir_str)
            log_dir.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                filename=log_dir / "barcodeforge.log",
                maxBytes=10 * 1024 * 1024,  # 10 МБ
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            root_logger.warning(
                f"Не удалось инициализировать файловое логирование: {e}. "
                f"Используется только консоль."
            )

    root_logger.propagate = False


def get_logger(module_name: str) -> logging.Logger:
    """
    Получить логгер в пространстве имён ``barcodeforge``.

    Аргументы:
        module_name: Имя модуля, обычно ``__name__``.

    Возвращает:
        Логгер ``barcodeforge.<module_name>`` (или сам ``module_name``,
        если он уже начинается с ``barcodeforge``).

    Пример:
        >>> logger = get_logger("my_plugin")
        >>> logger.name
        'barcodeforge.my_plugin'
    """
    if not module_name.startswith("barcodeforge"):
        if module_name == "__main__":
            full_name = "barcodeforge.main"
        else:
            clean_name = module_name.lstrip(".")
            full_name = f"barcodeforge.{clean_name}"
    else:
        full_name = module_name

    return logging.getLogger(full_name)


# =============================================================================
# УПРАВЛЕНИЕ КОНФИГУРАЦИЕЙ
# =============================================================================

_DEFAULT_CONFIG: Dict[str, Any] = {
    "default_type": "code128",
    "default_format": "png",
    "render_defaults": {},
    "qr_defaults": {},
    "log_level": "INFO",
}


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Загрузить конфигурацию из JSON-файла или использовать значения по умолчанию.

    Ключи конфигурации:
        - default_type: str - Тип штрихкода по умолчанию
        - default_format: str - Формат вывода по умолчанию
        - render_defaults: dict - Опции рендеринга для всех рендереров
        - qr_defaults: dict - Опции QrCodeBuilder.create по умолчанию
        - log_level: str - Уровень логирования

    Аргументы:
        config_path: Путь к файлу. Если None, используется переменная
            окружения BARCODEFORGE_CONFIG, затем 'barcodeforge.json'
            в текущем каталоге.

    Возвращает:
        Новый словарь: значения по умолчанию, поверх которых наложены
        значения из файла. Отсутствующий или повреждённый файл не
        является ошибкой: пишется предупреждение и возвращаются
        значения по умолчанию.

    Пример:
        >>> config = load_config()
        >>> config['default_type']
        'code128'
    """
    logger = get_logger(__name__)

    if config_path is None:
        config_path = Path(os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_FILE)
    else:
        config_path = Path(config_path)

    config = {
        key: dict(value) if isinstance(value, dict) else value
        for key, value in _DEFAULT_CONFIG.items()
    }

    if config_path.exists():
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                user_config = json.load(f)

            if not isinstance(user_config, dict):
                raise ValueError(
                    f"Файл конфигурации должен содержать JSON-объект, "
                    f"получен {type(user_config).__name__}"
                )

            config.update(user_config)

            logger.info(f"Конфигурация загружена из {config_path}")
            logger.debug(f"Конфигурация: {config}")

        except json.JSONDecodeError as e:
            logger.warning(
                f"Не удалось разобрать {config_path}: Недопустимый JSON "
                f"в строке {e.lineno}, столбце {e.colno}. "
                f"Используется конфигурация по умолчанию."
            )
        except OSError as e:
            logger.warning(
                f"Не удалось прочитать {config_path}: {e}. "
                f"Используется конфигурация по умолчанию."
            )
        except ValueError as e:
            logger.warning(
                f"Недопустимый формат конфигурации: {e}. "
                f"Используется конфигурация по умолчанию."
            )
    else:
        logger.info(
            f"Файл конфигурации {config_path} не найден. "
            f"Используется конфигурация по умолчанию."
        )

    return config


_setup_logging()

# =============================================================================
# ПУБЛИЧНЫЙ API
# =============================================================================

# Импорты размещены после утилит, чтобы логирование было настроено первым.

from barcodeforge.builders import QrCodeBuilder, QrCodeConfig, QrCodeResult  # noqa: E402
from barcodeforge.exceptions import (  # noqa: E402
    BarcodeError,
    ChecksumError,
    CharsetError,
    CompositionError,
    InvalidInputError,
    LengthError,
    RenderError,
    StorageError,
    SymbolGenerationError,
    UnsupportedFormatError,
    UnsupportedTypeError,
    ValidationError,
)
from barcodeforge.model.enums import (  # noqa: E402
    BarcodeCategory,
    BarcodeType,
    ErrorCorrectionLevel,
    WatermarkPosition,
)
from barcodeforge.services import BarcodeService  # noqa: E402
from barcodeforge.validators import ValidationResult, Validator  # noqa: E402

__all__ = [
    # Метаданные версии
    "__version__",
    "__author__",
    "__description__",
    "__license__",
    "__python_requires__",
    "VERSION_MAJOR",
    "VERSION_MINOR",
    "VERSION_PATCH",
    # Утилиты
    "get_logger",
    "load_config",
    # Сервисы и построители
    "BarcodeService",
    "QrCodeBuilder",
    "QrCodeConfig",
    "QrCodeResult",
    "Validator",
    "ValidationResult",
    # Перечисления
    "BarcodeCategory",
    "BarcodeType",
    "ErrorCorrectionLevel",
    "WatermarkPosition",
    # Исключения
    "BarcodeError",
    "ValidationError",
    "InvalidInputError",
    "LengthError",
    "CharsetError",
    "ChecksumError",
    "UnsupportedTypeError",
    "UnsupportedFormatError",
    "SymbolGenerationError",
    "RenderError",
    "CompositionError",
    "StorageError",
]
