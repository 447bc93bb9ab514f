"""
Загрузчик конфигурации движка тегов.

Конфигурация хранится в YAML-файле mtags.yaml и настраивает встроенные
теги (формат даты, перевод строки) и набор отключенных тегов.
Отсутствующий файл равнозначен конфигурации по умолчанию.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ConfigLoadError

logger = logging.getLogger(__name__)

CONFIG_FILE = "mtags.yaml"

_yaml = YAML(typ="safe")


@dataclass
class EngineConfig:
    """
    Настройки движка.

    Attributes:
        newline: Текст, который выводит тег br
        datetime_format: strftime-формат тега now
        date_format: strftime-формат тега now-date-only
        disabled_tags: Имена встроенных тегов, которые не регистрируются
        remove_newlines: Удалять переводы строк из текстовых узлов
    """
    newline: str = "\n"
    datetime_format: str = "%Y-%m-%d %H:%M:%S"
    date_format: str = "%Y-%m-%d"
    disabled_tags: List[str] = field(default_factory=list)
    remove_newlines: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EngineConfig":
        """Создание экземпляра из словаря (из YAML)."""
        known = {"newline", "datetime_format", "date_format", "disabled_tags", "remove_newlines"}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigLoadError(f"Unknown config keys: {', '.join(map(str, unknown))}")

        defaults = cls()
        return cls(
            newline=_expect_str(data, "newline", defaults.newline),
            datetime_format=_expect_str(data, "datetime_format", defaults.datetime_format),
            date_format=_expect_str(data, "date_format", defaults.date_format),
            disabled_tags=_expect_str_list(data, "disabled_tags"),
            remove_newlines=_expect_bool(data, "remove_newlines", defaults.remove_newlines),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация в словарь для YAML."""
        return {
            "newline": self.newline,
            "datetime_format": self.datetime_format,
            "date_format": self.date_format,
            "disabled_tags": list(self.disabled_tags),
            "remove_newlines": self.remove_newlines,
        }


def _expect_str(data: Dict[str, Any], key: str, default: str) -> str:
    value = data.get(key, default)
    if not isinstance(value, str):
        raise ConfigLoadError(f"{key}: expected string, got {type(value).__name__}")
    return value


def _expect_bool(data: Dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ConfigLoadError(f"{key}: expected boolean, got {type(value).__name__}")
    return value


def _expect_str_list(data: Dict[str, Any], key: str) -> List[str]:
    value = data.get(key) or []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigLoadError(f"{key}: expected list of strings")
    return list(value)


def _read_yaml_map(path: Path) -> dict:
    """Читает YAML файл и возвращает словарь."""
    if not path.is_file():
        return {}
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigLoadError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigLoadError(f"YAML must be a mapping: {path}")
    return raw


def load_config(path: Optional[Path] = None) -> EngineConfig:
    """
    Загружает конфигурацию из файла.

    Args:
        path: Путь к YAML-файлу; None или несуществующий файл дают значения по умолчанию

    Raises:
        ConfigLoadError: Если файл не является отображением или поля имеют неверный тип
    """
    if path is None:
        return EngineConfig()
    raw = _read_yaml_map(path)
    cfg = EngineConfig.from_dict(raw)
    logger.debug(f"Loaded config from {path}: {len(raw)} keys")
    return cfg


def find_config(root: Path) -> Optional[Path]:
    """Возвращает путь к mtags.yaml в каталоге root, если файл существует."""
    candidate = root / CONFIG_FILE
    return candidate if candidate.is_file() else None


__all__ = ["EngineConfig", "load_config", "find_config", "CONFIG_FILE"]
