"""
Цепочка областей видимости для рендеринга тегов.

Каждый фрейм хранит локальные имена, необязательное позиционное значение
(текущий элемент цикла или исходный объект данных) и ссылку на родителя.
Поиск идет от дочернего фрейма к корню и возвращает первое совпадение.
Отсутствие ключа никогда не является ошибкой: результатом будет None.
"""

from __future__ import annotations

import inspect
import logging
import re
from decimal import Decimal
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

# (name, value) -> substitute
KeyFoundHook = Callable[[str, Any], Any]
# name -> substitute (None оставляет ключ отсутствующим)
KeyMissingHook = Callable[[str], Any]

THIS_KEY = "this"
PATH_DELIMITER = "."

_UNSET = object()

# Значения, у которых не ищем атрибуты как у объектов данных
_SCALARS = (str, bytes, int, float, bool, Decimal, complex)

# Индекс последовательности: только ASCII-цифры
_INDEX_RE = re.compile(r"\d+", re.ASCII)


def lookup_member(obj: Any, member: str) -> Tuple[bool, Any]:
    """
    Ищет член объекта данных.

    Порядок: ключ отображения, индекс последовательности, публичный атрибут.
    Методы и приватные атрибуты не видны из шаблона.
    """
    if obj is None:
        return False, None

    if isinstance(obj, Mapping):
        if member in obj:
            return True, obj[member]
        return False, None

    if isinstance(obj, _SCALARS):
        return False, None

    if isinstance(obj, Sequence) and _INDEX_RE.fullmatch(member):
        index = int(member)
        if index < len(obj):
            return True, obj[index]
        return False, None

    if member.startswith("_"):
        return False, None

    try:
        value = getattr(obj, member)
    except AttributeError:
        return False, None

    if inspect.isroutine(value):
        return False, None
    return True, value


class Scope:
    """
    Фрейм цепочки областей видимости.

    Дочерние фреймы создаются через create_child() и никогда не изменяют
    родителя: set() пишет только в локальный словарь текущего фрейма.
    Хуки on_key_found / on_key_missing наследуются дочерними фреймами.
    """

    __slots__ = ("_locals", "_value", "_parent", "_on_found", "_on_missing")

    def __init__(
        self,
        value: Any = _UNSET,
        parent: Optional[Scope] = None,
        *,
        on_key_found: Optional[KeyFoundHook] = None,
        on_key_missing: Optional[KeyMissingHook] = None,
    ):
        self._locals: Dict[str, Any] = {}
        self._value = value
        self._parent = parent
        self._on_found = on_key_found
        self._on_missing = on_key_missing

    # Структура цепочки

    @property
    def parent(self) -> Optional[Scope]:
        return self._parent

    @property
    def has_value(self) -> bool:
        """Есть ли у фрейма собственное позиционное значение."""
        return self._value is not _UNSET

    @property
    def value(self) -> Any:
        """
        Позиционное значение ближайшего фрейма, у которого оно есть.

        Именно его возвращает ключ 'this'.
        """
        scope: Optional[Scope] = self
        while scope is not None:
            if scope._value is not _UNSET:
                return scope._value
            scope = scope._parent
        return None

    @property
    def depth(self) -> int:
        depth = 0
        scope = self._parent
        while scope is not None:
            depth += 1
            scope = scope._parent
        return depth

    def create_child(self, value: Any = _UNSET) -> Scope:
        """
        Создает дочерний фрейм с пустым локальным словарем.

        Args:
            value: Позиционное значение фрейма (например, текущий элемент цикла)
        """
        return Scope(
            value,
            self,
            on_key_found=self._on_found,
            on_key_missing=self._on_missing,
        )

    def iter_chain(self) -> Iterator[Scope]:
        """Фреймы от текущего к корню."""
        scope: Optional[Scope] = self
        while scope is not None:
            yield scope
            scope = scope._parent

    # Запись

    def set(self, name: str, value: Any) -> None:
        """Записывает значение только в локальный фрейм."""
        self._locals[name] = value

    def local_names(self) -> Tuple[str, ...]:
        return tuple(self._locals)

    # Поиск

    def try_find(self, name: str) -> Tuple[bool, Any]:
        """
        Ищет значение по имени, поддерживая точечные пути ('user.address.city').

        Первый сегмент ищется вверх по цепочке, остальные спускаются
        внутрь найденного значения.

        Returns:
            Пара (найдено, значение)
        """
        members = name.split(PATH_DELIMITER)
        head = members[0]

        if head == THIS_KEY:
            found, value = True, self.value
        else:
            found, value = self._find_first(head)

        for member in members[1:]:
            if not found:
                break
            found, value = lookup_member(value, member)

        return found, value

    def find(self, name: str) -> Any:
        """
        Возвращает значение по имени или None, если его нет ни в одном фрейме.

        Хуки могут подменить найденное значение или подставить значение
        для отсутствующего ключа.
        """
        found, value = self.try_find(name)
        if found:
            if self._on_found is not None:
                return self._on_found(name, value)
            return value

        if self._on_missing is not None:
            return self._on_missing(name)

        logger.debug(f"Key '{name}' not found in scope chain (depth {self.depth})")
        return None

    def __contains__(self, name: str) -> bool:
        return self.try_find(name)[0]

    def _find_first(self, name: str) -> Tuple[bool, Any]:
        for scope in self.iter_chain():
            if name in scope._locals:
                return True, scope._locals[name]
            if scope._value is not _UNSET:
                found, value = lookup_member(scope._value, name)
                if found:
                    return True, value
        return False, None

    def __repr__(self) -> str:
        return f"Scope(locals={self._locals!r}, depth={self.depth})"


__all__ = ["Scope", "KeyFoundHook", "KeyMissingHook", "lookup_member", "THIS_KEY"]
