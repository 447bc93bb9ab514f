"""
Теги-циклы и смена контекста.

Это content-теги, которые выдают несколько (или ни одного) дочерних
контекстов и пишут прямо в родительский приемник, без консолидации.
Текущее значение итерации становится позиционным значением дочерней
цепочки ключей ({{this}}), а счетчик доступен как {{@index}}.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Iterator, List

from .base import ContentTagDefinition, NestedContext, TagArguments, TagParameter, coerce_int
from ..protocols import TextSink
from ..scope import Scope

logger = logging.getLogger(__name__)

INDEX_VARIABLE = "index"

# Предел итераций одного цикла (граница 32-битного целого)
LOOP_GUARD = 2_147_483_647


def _iteration_context(writer: TextSink, key_scope: Scope, context_scope: Scope, value: Any, index: int) -> NestedContext:
    child_context = context_scope.create_child()
    child_context.set(INDEX_VARIABLE, index)
    return NestedContext(
        writer=writer,
        key_scope=key_scope.create_child(value),
        context_scope=child_context,
    )


class ForTagDefinition(ContentTagDefinition):
    """
    Числовой цикл: {{#for start=1 end=5 step=1}}{{@index}}{{/for}}.

    Направление определяется так: если end > start и step > 0, цикл идет
    вперед, пока i <= end; иначе - назад, пока i >= end. Число итераций
    ограничено max_iterations, поэтому шаг с "неправильным" знаком или
    нулевой шаг не приводят к бесконечному циклу.
    """

    name = "for"

    _START = TagParameter("start", required=True)
    _END = TagParameter("end", required=True)
    _STEP = TagParameter("step", required=True)

    def __init__(self, max_iterations: int = LOOP_GUARD):
        self.max_iterations = max_iterations

    def parameters(self) -> List[TagParameter]:
        return [self._START, self._END, self._STEP]

    def is_context_sensitive(self) -> bool:
        return False

    def open_child_contexts(
        self,
        writer: TextSink,
        key_scope: Scope,
        arguments: TagArguments,
        context_scope: Scope,
    ) -> Iterator[NestedContext]:
        start = coerce_int(arguments.get("start"))
        end = coerce_int(arguments.get("end"))
        step = coerce_int(arguments.get("step"))
        if start is None or end is None or step is None:
            logger.debug(f"for: non-integer bounds {arguments!r}, no iterations")
            return

        forward = end > start and step > 0
        counter = 0
        i = start
        while (start <= i <= end) if forward else (start >= i >= end):
            if counter >= self.max_iterations:
                logger.warning(f"for: loop guard reached after {counter} iterations (start={start}, end={end}, step={step})")
                return
            counter += 1
            yield _iteration_context(writer, key_scope, context_scope, i, i)
            i += step


class EachTagDefinition(ContentTagDefinition):
    """
    Цикл по коллекции: {{#each items}}{{this}}{{/each}}.

    Элементы отображения выдаются как {"key": ..., "value": ...}.
    @index - позиция элемента с нуля. Отсутствующее или неитерируемое
    значение не дает ни одной итерации.
    """

    name = "each"

    _COLLECTION = TagParameter("collection", required=True)

    def __init__(self, max_iterations: int = LOOP_GUARD):
        self.max_iterations = max_iterations

    def parameters(self) -> List[TagParameter]:
        return [self._COLLECTION]

    def open_child_contexts(
        self,
        writer: TextSink,
        key_scope: Scope,
        arguments: TagArguments,
        context_scope: Scope,
    ) -> Iterator[NestedContext]:
        collection = arguments.get("collection")
        if not isinstance(collection, Iterable):
            return

        if isinstance(collection, Mapping):
            items: Iterable[Any] = ({"key": k, "value": v} for k, v in collection.items())
        else:
            items = collection

        for index, item in enumerate(items):
            if index >= self.max_iterations:
                logger.warning(f"each: loop guard reached after {index} iterations")
                return
            yield _iteration_context(writer, key_scope, context_scope, item, index)


class WithTagDefinition(ContentTagDefinition):
    """
    Переключает контекст на значение: {{#with user}}{{name}}{{/with}}.

    Отсутствующее значение подавляет блок.
    """

    name = "with"

    _CONTEXT = TagParameter("context", required=True)

    def parameters(self) -> List[TagParameter]:
        return [self._CONTEXT]

    def open_child_contexts(
        self,
        writer: TextSink,
        key_scope: Scope,
        arguments: TagArguments,
        context_scope: Scope,
    ) -> Iterator[NestedContext]:
        value = arguments.get("context")
        if value is None:
            return
        yield NestedContext(
            writer=writer,
            key_scope=key_scope.create_child(value),
            context_scope=context_scope.create_child(),
        )


__all__ = [
    "ForTagDefinition",
    "EachTagDefinition",
    "WithTagDefinition",
    "INDEX_VARIABLE",
    "LOOP_GUARD",
]
