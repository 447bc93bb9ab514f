"""
Условные теги.

Каждый тег решает, рендерить ли основную группу дочерних узлов
или ветку else. Ветки пишутся прямо в текущий приемник.
"""

from __future__ import annotations

from collections.abc import Iterable, Sized
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional

from .base import ConditionTagDefinition, TagArguments, TagParameter

CONDITION_PARAMETER = "condition"
TARGET_VALUE_PARAMETER = "targetValue"


def is_numeric(value: Any) -> bool:
    """
    Является ли значение числом по типу.

    Строки, похожие на числа, и bool числами не считаются.
    """
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def to_decimal(value: Any) -> Optional[Decimal]:
    """Приводит числовое значение к Decimal (float - через его кратчайшую запись)."""
    try:
        if isinstance(value, float):
            return Decimal(repr(value))
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return None


def has_elements(value: Any) -> bool:
    """Истинно, если значение - итерируемая коллекция хотя бы с одним элементом."""
    if not isinstance(value, Iterable):
        return False
    if isinstance(value, Sized):
        return len(value) > 0
    for _ in value:
        return True
    return False


def is_truthy(value: Any) -> bool:
    """
    Истинность значения для тега if.

    Правила:
    - None ложно
    - коллекции (включая строки) истинны, если не пусты
    - числа истинны, если не равны нулю
    - все остальное истинно
    """
    if value is None:
        return False
    if isinstance(value, Iterable):
        return has_elements(value)
    if isinstance(value, bool):
        return value
    if is_numeric(value):
        return value != 0
    return True


class _SingleConditionTag(ConditionTagDefinition):
    """Условный тег с одним обязательным параметром condition."""

    _CONDITION = TagParameter(CONDITION_PARAMETER, required=True)

    def parameters(self) -> List[TagParameter]:
        return [self._CONDITION]


class _ComparisonTag(ConditionTagDefinition):
    """Условный тег, сравнивающий condition с targetValue."""

    _CONDITION = TagParameter(CONDITION_PARAMETER, required=True)
    _TARGET = TagParameter(TARGET_VALUE_PARAMETER, required=True)

    def parameters(self) -> List[TagParameter]:
        return [self._CONDITION, self._TARGET]

    def is_context_sensitive(self) -> bool:
        return False


class IfTagDefinition(_SingleConditionTag):
    """{{#if condition}}...{{else}}...{{/if}}"""

    name = "if"

    def should_render_primary(self, arguments: TagArguments) -> bool:
        return is_truthy(arguments.get(CONDITION_PARAMETER))


class EqTagDefinition(_ComparisonTag):
    """
    Равенство значений.

    - оба None: равны
    - ровно один None: не равны
    - один и тот же тип: обычное сравнение
    - оба числа по типу: сравнение как Decimal
    - иначе: не равны
    """

    name = "eq"

    def should_render_primary(self, arguments: TagArguments) -> bool:
        return self.are_equal(arguments.get(CONDITION_PARAMETER), arguments.get(TARGET_VALUE_PARAMETER))

    @staticmethod
    def are_equal(left: Any, right: Any) -> bool:
        if left is None and right is None:
            return True
        if left is None or right is None:
            return False
        if type(left) is type(right):
            return bool(left == right)
        if is_numeric(left) and is_numeric(right):
            left_number, right_number = to_decimal(left), to_decimal(right)
            if left_number is None or right_number is None:
                return False
            return left_number == right_number
        return False


class LtTagDefinition(_ComparisonTag):
    """
    condition < targetValue.

    Ложно, если хотя бы один операнд отсутствует или не является числом.
    """

    name = "lt"

    def should_render_primary(self, arguments: TagArguments) -> bool:
        return self.is_less(arguments.get(CONDITION_PARAMETER), arguments.get(TARGET_VALUE_PARAMETER))

    @staticmethod
    def is_less(left: Any, right: Any) -> bool:
        if left is None or right is None:
            return False
        if not (is_numeric(left) and is_numeric(right)):
            return False
        left_number, right_number = to_decimal(left), to_decimal(right)
        if left_number is None or right_number is None or left_number.is_nan() or right_number.is_nan():
            return False
        return left_number < right_number


class AnyTagDefinition(_SingleConditionTag):
    """Истинно для непустой коллекции."""

    name = "any"

    def is_context_sensitive(self) -> bool:
        return False

    def should_render_primary(self, arguments: TagArguments) -> bool:
        return has_elements(arguments.get(CONDITION_PARAMETER))


class IsNullOrEmptyTagDefinition(_SingleConditionTag):
    """Истинно для отсутствующего значения или пустой строки."""

    name = "is-null-or-empty"

    def is_context_sensitive(self) -> bool:
        return False

    def should_render_primary(self, arguments: TagArguments) -> bool:
        value = arguments.get(CONDITION_PARAMETER)
        if value is None:
            return True
        return isinstance(value, str) and value == ""


__all__ = [
    "is_numeric",
    "to_decimal",
    "has_elements",
    "is_truthy",
    "IfTagDefinition",
    "EqTagDefinition",
    "LtTagDefinition",
    "AnyTagDefinition",
    "IsNullOrEmptyTagDefinition",
]
