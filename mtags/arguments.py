"""
Аргументы тегов и их привязка к параметрам.

Аргумент - это то, что шаблон передает в параметр тега: строковый или
числовой литерал, ссылка на ключ данных или на контекстную переменную.
ArgumentCollection сопоставляет аргументы с объявленными параметрами тега
и на каждый вызов строит свежий словарь значений.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Sequence, Union

from .errors import BindingError
from .scope import Scope

if TYPE_CHECKING:
    from .tags.base import TagParameter


class Argument(ABC):
    """Значение, передаваемое в параметр тега."""

    def get_key(self) -> Optional[str]:
        """Имя ключа, если аргумент ссылается на данные."""
        return None

    @abstractmethod
    def get_value(self, key_scope: Scope, context_scope: Scope) -> Any:
        """Вычисляет значение аргумента в текущих областях видимости."""
        pass


@dataclass(frozen=True)
class StringArgument(Argument):
    """Строковый литерал: name="value"."""
    value: str

    def get_value(self, key_scope: Scope, context_scope: Scope) -> Any:
        return self.value


@dataclass(frozen=True)
class NumberArgument(Argument):
    """Числовой литерал: count=3. Хранится как Decimal."""
    value: Union[int, float, str, Decimal]

    def __post_init__(self):
        if not isinstance(self.value, Decimal):
            object.__setattr__(self, "value", Decimal(str(self.value)))

    def get_value(self, key_scope: Scope, context_scope: Scope) -> Any:
        return self.value


@dataclass(frozen=True)
class PlaceholderArgument(Argument):
    """Ссылка на ключ данных: condition=user.name."""
    name: str

    def get_key(self) -> Optional[str]:
        return self.name

    def get_value(self, key_scope: Scope, context_scope: Scope) -> Any:
        return key_scope.find(self.name)


@dataclass(frozen=True)
class VariableArgument(Argument):
    """Ссылка на контекстную переменную: condition=@index."""
    name: str

    def get_value(self, key_scope: Scope, context_scope: Scope) -> Any:
        return context_scope.find(self.name)


class ArgumentCollection:
    """
    Связывает параметры тега с переданными аргументами.

    Проверка выполняется при создании (bind): отсутствующий обязательный
    параметр или неизвестное имя параметра приводят к BindingError.
    """

    def __init__(self, tag_name: str, bindings: Dict[str, Optional[Argument]], defaults: Dict[str, Any]):
        self.tag_name = tag_name
        self._bindings = bindings
        self._defaults = defaults

    @classmethod
    def bind(
        cls,
        tag_name: str,
        parameters: Sequence[TagParameter],
        arguments: Mapping[str, Argument],
    ) -> ArgumentCollection:
        """
        Создает коллекцию, проверяя аргументы узла против параметров тега.

        Args:
            tag_name: Имя тега для диагностики
            parameters: Объявленные параметры тега
            arguments: Аргументы из узла шаблона

        Raises:
            BindingError: Если не хватает обязательного параметра
                          или передан неизвестный
        """
        known = {parameter.name for parameter in parameters}
        for name in arguments:
            if name not in known:
                raise BindingError.unexpected(tag_name, name)

        bindings: Dict[str, Optional[Argument]] = {}
        defaults: Dict[str, Any] = {}
        for parameter in parameters:
            argument = arguments.get(parameter.name)
            if argument is None and parameter.required:
                raise BindingError.missing(tag_name, parameter.name)
            bindings[parameter.name] = argument
            defaults[parameter.name] = parameter.default

        return cls(tag_name, bindings, defaults)

    def get_key(self, name: str) -> Optional[str]:
        """Имя ключа, к которому привязан параметр (или None)."""
        argument = self._bindings.get(name)
        return argument.get_key() if argument is not None else None

    def get_arguments(self, key_scope: Scope, context_scope: Scope) -> Dict[str, Any]:
        """
        Вычисляет значения всех параметров в текущих областях видимости.

        Для параметров без аргумента подставляется значение по умолчанию.

        Returns:
            Новый словарь "имя параметра -> значение" для одного вызова
        """
        values: Dict[str, Any] = {}
        for name, argument in self._bindings.items():
            if argument is None:
                values[name] = self._defaults[name]
            else:
                values[name] = argument.get_value(key_scope, context_scope)
        return values

    def __len__(self) -> int:
        return len(self._bindings)

    def __repr__(self) -> str:
        return f"ArgumentCollection(tag={self.tag_name!r}, parameters={list(self._bindings)!r})"


__all__ = [
    "Argument",
    "StringArgument",
    "NumberArgument",
    "PlaceholderArgument",
    "VariableArgument",
    "ArgumentCollection",
]
