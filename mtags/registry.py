"""
Реестр определений тегов.

Хранит по одному stateless-экземпляру на имя тега. Экземпляры
разделяются между всеми рендерингами, поэтому реестр заполняется
один раз при старте и дальше только читается.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from .config import EngineConfig
from .errors import DuplicateTagError, UnknownTagError
from .tags import TagDefinition, TagKind, builtin_tags

logger = logging.getLogger(__name__)


class TagRegistry:
    """
    Централизованный реестр тегов.

    Имена тегов уникальны в пределах реестра.
    """

    def __init__(self):
        """Инициализирует пустой реестр."""
        self._tags: Dict[str, TagDefinition] = {}
        logger.debug("TagRegistry initialized")

    def register(self, tag: TagDefinition) -> None:
        """
        Регистрирует определение тега.

        Args:
            tag: Определение для регистрации

        Raises:
            DuplicateTagError: Если тег с таким именем уже зарегистрирован
        """
        if tag.name in self._tags:
            raise DuplicateTagError(tag.name)
        self._tags[tag.name] = tag
        logger.debug(f"Registered tag: {tag.name} ({tag.kind.value})")

    def register_all(self, tags: Iterable[TagDefinition]) -> None:
        """Регистрирует несколько тегов по порядку."""
        for tag in tags:
            self.register(tag)

    def unregister(self, name: str) -> None:
        """
        Удаляет тег из реестра.

        Raises:
            UnknownTagError: Если тег не зарегистрирован
        """
        if name not in self._tags:
            raise UnknownTagError(name)
        del self._tags[name]
        logger.debug(f"Unregistered tag: {name}")

    def get(self, name: str) -> TagDefinition:
        """
        Возвращает тег по имени.

        Raises:
            UnknownTagError: Если тег не зарегистрирован
        """
        tag = self._tags.get(name)
        if tag is None:
            raise UnknownTagError(name)
        return tag

    def find(self, name: str) -> Optional[TagDefinition]:
        """Возвращает тег по имени или None."""
        return self._tags.get(name)

    def names(self) -> List[str]:
        """Имена зарегистрированных тегов в алфавитном порядке."""
        return sorted(self._tags)

    def tags(self) -> List[TagDefinition]:
        """Определения тегов в алфавитном порядке имен."""
        return [self._tags[name] for name in self.names()]

    def __contains__(self, name: str) -> bool:
        return name in self._tags

    def __len__(self) -> int:
        return len(self._tags)

    def get_stats(self) -> Dict[str, int]:
        """
        Возвращает статистику по зарегистрированным тегам.

        Returns:
            Словарь: общее число и число тегов каждого вида
        """
        stats = {"tags": len(self._tags)}
        for kind in TagKind:
            stats[kind.value] = sum(1 for tag in self._tags.values() if tag.kind is kind)
        return stats


def create_default_registry(config: Optional[EngineConfig] = None) -> TagRegistry:
    """
    Создает реестр со всеми встроенными тегами.

    Теги из config.disabled_tags пропускаются.
    """
    cfg = config or EngineConfig()
    disabled = set(cfg.disabled_tags)
    tags = builtin_tags(cfg)
    registry = TagRegistry()
    registry.register_all(tag for tag in tags if tag.name not in disabled)

    unknown = disabled - {tag.name for tag in tags}
    if unknown:
        logger.warning(f"disabled_tags refers to unknown tags: {', '.join(sorted(unknown))}")
    return registry


_default_registry: Optional[TagRegistry] = None


def get_registry() -> TagRegistry:
    """Возвращает общий реестр со встроенными тегами (создается при первом вызове)."""
    global _default_registry
    if _default_registry is None:
        _default_registry = create_default_registry()
    return _default_registry


__all__ = ["TagRegistry", "create_default_registry", "get_registry"]
