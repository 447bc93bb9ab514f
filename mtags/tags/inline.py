"""
Inline-теги: пишут текст сразу в текущий приемник, без дочерних узлов.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import List

from .base import InlineTagDefinition, TagArguments, TagParameter, coerce_int
from ..protocols import TextSink
from ..scope import Scope

DEFAULT_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_DATE_FORMAT = "%Y-%m-%d"


class NowTagDefinition(InlineTagDefinition):
    """Текущие дата и время: {{#now}}."""

    name = "now"

    def __init__(self, fmt: str = DEFAULT_DATETIME_FORMAT):
        self._fmt = fmt

    def emit_text(self, writer: TextSink, arguments: TagArguments, context_scope: Scope) -> None:
        writer.write(datetime.now().strftime(self._fmt))


class NowDateOnlyTagDefinition(NowTagDefinition):
    """Текущая дата без времени: {{#now-date-only}}."""

    name = "now-date-only"

    def __init__(self, fmt: str = DEFAULT_DATE_FORMAT):
        super().__init__(fmt)


class GuidTagDefinition(InlineTagDefinition):
    """Новый UUID4 на каждый вызов: {{#guid}}."""

    name = "guid"

    def emit_text(self, writer: TextSink, arguments: TagArguments, context_scope: Scope) -> None:
        writer.write(str(uuid.uuid4()))


class TabTagDefinition(InlineTagDefinition):
    name = "tab"

    def emit_text(self, writer: TextSink, arguments: TagArguments, context_scope: Scope) -> None:
        writer.write("\t")


class LineBreakTagDefinition(InlineTagDefinition):
    name = "br"

    def __init__(self, newline: str = "\n"):
        self._newline = newline

    def emit_text(self, writer: TextSink, arguments: TagArguments, context_scope: Scope) -> None:
        writer.write(self._newline)


class RepeatTagDefinition(InlineTagDefinition):
    """
    Повторяет значение заданное число раз: {{#repeat count=3 value="-"}}.

    Нечисловой count или отсутствующее value дают пустой вывод.
    """

    name = "repeat"

    _COUNT = TagParameter("count", required=True)
    _VALUE = TagParameter("value", required=True)

    def parameters(self) -> List[TagParameter]:
        return [self._COUNT, self._VALUE]

    def emit_text(self, writer: TextSink, arguments: TagArguments, context_scope: Scope) -> None:
        count = coerce_int(arguments.get("count"))
        value = arguments.get("value")
        if count is None or value is None:
            return
        text = str(value)
        for _ in range(count):
            writer.write(text)


class SpaceTagDefinition(InlineTagDefinition):
    """N пробелов: {{#space count=4}}."""

    name = "space"

    _COUNT = TagParameter("count", required=True)

    def parameters(self) -> List[TagParameter]:
        return [self._COUNT]

    def emit_text(self, writer: TextSink, arguments: TagArguments, context_scope: Scope) -> None:
        count = coerce_int(arguments.get("count"))
        if count is None or count <= 0:
            return
        writer.write(" " * count)


class EchoTagDefinition(InlineTagDefinition):
    """Выводит значение аргумента как есть: {{#echo text=user.name}}."""

    name = "echo"

    def parameters(self) -> List[TagParameter]:
        return [TagParameter("text")]

    def emit_text(self, writer: TextSink, arguments: TagArguments, context_scope: Scope) -> None:
        value = arguments.get("text")
        if value is not None:
            writer.write(str(value))


__all__ = [
    "NowTagDefinition",
    "NowDateOnlyTagDefinition",
    "GuidTagDefinition",
    "TabTagDefinition",
    "LineBreakTagDefinition",
    "RepeatTagDefinition",
    "SpaceTagDefinition",
    "EchoTagDefinition",
    "DEFAULT_DATETIME_FORMAT",
    "DEFAULT_DATE_FORMAT",
]
