"""
Базовые интерфейсы и абстракции для определений тегов.

Тег - это stateless-синглтон, который объявляет свое имя и параметры
и реализует одну из трех стратегий вычисления:

- InlineTagDefinition: пишет текст прямо в текущий приемник;
- ContentTagDefinition: рендерит дочерние узлы в отдельный буфер
  и преобразует получившийся текст целиком;
- ConditionTagDefinition: выбирает основную или альтернативную ветку.

Все состояние конкретного вызова передается через аргументы методов.
"""

from __future__ import annotations

import enum
import io
import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, ClassVar, Dict, Iterator, List, Optional

from ..protocols import TextSink
from ..scope import Scope

logger = logging.getLogger(__name__)

# Аргументы одного вызова: имя параметра -> значение
TagArguments = Dict[str, Any]

# Целое число: необязательный знак и ASCII-цифры, без "_"
_INT_RE = re.compile(r"[+-]?\d+", re.ASCII)


class TagKind(enum.Enum):
    """Стратегия вычисления тега."""
    INLINE = "inline"
    CONTENT = "content"
    CONDITION = "condition"


@dataclass(frozen=True)
class TagParameter:
    """
    Описание параметра, который принимает тег.
    """
    name: str                # Имя параметра в шаблоне
    required: bool = False   # Обязателен ли аргумент
    default: Any = None      # Значение, если аргумент не передан


@dataclass
class NestedContext:
    """
    Контекст рендеринга дочернего блока.

    writer и key_scope равные None означают "использовать родительские".
    Если needs_consolidation истинно, writer - это собственный буфер тега,
    и его содержимое проходит через consolidate() перед записью в родителя.
    """
    writer: Optional[TextSink] = None
    key_scope: Optional[Scope] = None
    context_scope: Optional[Scope] = None
    needs_consolidation: bool = False


class TagDefinition(ABC):
    """
    Общий контракт для всех тегов.

    Наследники задают name и kind как атрибуты класса.
    """

    name: ClassVar[str]
    kind: ClassVar[TagKind]

    def parameters(self) -> List[TagParameter]:
        """
        Объявленные параметры тега.

        Returns:
            Список описаний параметров (по умолчанию пустой)
        """
        return []

    def is_context_sensitive(self) -> bool:
        """Зависит ли вывод тега от окружающего контекста, а не только от аргументов."""
        return True

    def child_context_parameters(self) -> List[TagParameter]:
        """Параметры, которые должны быть вычислены до создания дочернего контекста."""
        return []

    @property
    def has_content(self) -> bool:
        """Может ли тег содержать дочерние узлы."""
        return self.kind is not TagKind.INLINE

    @property
    def has_else_branch(self) -> bool:
        """Может ли тег содержать альтернативную ветку."""
        return self.kind is TagKind.CONDITION

    def __repr__(self) -> str:
        return f"<{type(self).__name__} '{self.name}'>"


class InlineTagDefinition(TagDefinition):
    """
    Тег без содержимого, который сразу пишет текст в текущий приемник.
    """

    kind = TagKind.INLINE

    @abstractmethod
    def emit_text(self, writer: TextSink, arguments: TagArguments, context_scope: Scope) -> None:
        """
        Пишет текст тега.

        Args:
            writer: Текущий приемник
            arguments: Вычисленные аргументы вызова
            context_scope: Контекстная область видимости
        """
        pass


class ContentTagDefinition(TagDefinition):
    """
    Тег, оборачивающий область шаблона.

    По умолчанию открывает ровно один дочерний контекст с новым буфером;
    после рендеринга детей текст буфера передается в consolidate().
    """

    kind = TagKind.CONTENT

    def child_context_parameters(self) -> List[TagParameter]:
        return self.parameters()

    def open_child_contexts(
        self,
        writer: TextSink,
        key_scope: Scope,
        arguments: TagArguments,
        context_scope: Scope,
    ) -> Iterator[NestedContext]:
        """
        Выдает контексты, в которых будут отрендерены дочерние узлы.

        Генератор ленивый: ноль контекстов подавляет блок,
        несколько - повторяют его (циклы).
        """
        yield NestedContext(
            writer=io.StringIO(),
            key_scope=key_scope,
            context_scope=context_scope,
            needs_consolidation=True,
        )

    def consolidate(self, text: str, arguments: TagArguments) -> str:
        """
        Преобразует полностью отрендеренный текст дочернего блока.

        Args:
            text: Содержимое буфера
            arguments: Аргументы вызова

        Returns:
            Итоговый текст для родительского приемника
        """
        return text


class ConditionTagDefinition(TagDefinition):
    """
    Тег-ветвление: рендерит основную группу или ветку else.

    Ни одна из веток не буферизуется.
    """

    kind = TagKind.CONDITION

    @abstractmethod
    def should_render_primary(self, arguments: TagArguments) -> bool:
        """
        Решает, какую группу рендерить.

        Returns:
            True для основной группы, False для ветки else
        """
        pass


def coerce_int(value: Any) -> Optional[int]:
    """
    Мягкое приведение аргумента к int.

    Принимает целые числа, целочисленные Decimal/float и строки с целым числом.
    Для всего остального возвращает None вместо исключения.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, (Decimal, float)):
        try:
            if value == int(value):
                return int(value)
        except (ValueError, OverflowError):
            pass
        return None
    text = str(value).strip()
    if not _INT_RE.fullmatch(text):
        logger.debug(f"Cannot convert argument {value!r} to int")
        return None
    return int(text)


__all__ = [
    "TagArguments",
    "TagKind",
    "TagParameter",
    "NestedContext",
    "TagDefinition",
    "InlineTagDefinition",
    "ContentTagDefinition",
    "ConditionTagDefinition",
    "coerce_int",
]
