"""
AST-узлы дерева тегов.

Определяет иерархию неизменяемых классов узлов, из которых состоит
уже разобранный шаблон: статический текст, подстановка ключа и блок тега.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from .arguments import Argument


@dataclass(frozen=True)
class TemplateNode:
    """Базовый класс для всех узлов AST шаблона."""
    pass


@dataclass(frozen=True)
class TextNode(TemplateNode):
    """
    Обычный текстовый контент в шаблоне.

    Представляет статический текст, который не требует обработки
    и выводится в результат как есть.
    """
    text: str


@dataclass(frozen=True)
class KeyNode(TemplateNode):
    """
    Подстановка значения {{key}} или {{@variable}}.

    Ключ без префикса ищется в цепочке ключей (данные и элементы циклов),
    ключ с префиксом '@' - в контекстной цепочке (например, @index).

    Attributes:
        key: Имя ключа, возможно с точками ('user.name') и префиксом '@'
        format_spec: Спецификация формата для format() ('.2f', ',', ...)
        alignment: Ширина поля; положительная - выравнивание вправо,
                   отрицательная - влево
    """
    key: str
    format_spec: str = ""
    alignment: Optional[int] = None

    @property
    def is_variable(self) -> bool:
        return self.key.startswith("@")

    @property
    def name(self) -> str:
        return self.key[1:] if self.is_variable else self.key


@dataclass(frozen=True)
class TagNode(TemplateNode):
    """
    Вызов тега {{#name arg=...}}...{{else}}...{{/name}}.

    Для inline-тегов body и else_body пусты. Для content-тегов
    используется только body. Условные теги выбирают body либо else_body.

    Attributes:
        tag_name: Имя тега в реестре
        arguments: Аргументы по имени параметра
        body: Основная группа дочерних узлов
        else_body: Альтернативная группа (ветка else)
    """
    tag_name: str
    arguments: Dict[str, Argument] = field(default_factory=dict)
    body: List[TemplateNode] = field(default_factory=list)
    else_body: List[TemplateNode] = field(default_factory=list)


# Алиас для списка узлов (AST)
TemplateAST = List[TemplateNode]


def iter_tag_nodes(ast: TemplateAST) -> Iterator[TagNode]:
    """Обходит все узлы тегов в порядке документа, включая вложенные."""
    for node in ast:
        if isinstance(node, TagNode):
            yield node
            yield from iter_tag_nodes(node.body)
            yield from iter_tag_nodes(node.else_body)


__all__ = [
    "TemplateNode",
    "TextNode",
    "KeyNode",
    "TagNode",
    "TemplateAST",
    "iter_tag_nodes",
]
