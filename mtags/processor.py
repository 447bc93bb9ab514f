"""
Оркестратор вычисления дерева тегов.

Обходит AST в глубину в порядке документа. Для каждого узла тега:
привязывает аргументы к параметрам, вычисляет их в текущих областях
видимости и передает управление стратегии тега (inline / content /
condition). Content-теги рендерят детей в собственный буфер, после чего
их текст консолидируется и дописывается в родительский приемник.
"""

from __future__ import annotations

import io
import logging
from typing import Any, Callable, Dict, List, Optional

from .arguments import ArgumentCollection
from .config import EngineConfig
from .errors import BindingError, MTagsUserError, TemplateProcessingError
from .nodes import KeyNode, TagNode, TemplateAST, TemplateNode, TextNode, iter_tag_nodes
from .protocols import TextSink
from .registry import TagRegistry, create_default_registry, get_registry
from .scope import KeyFoundHook, KeyMissingHook, Scope
from .tags import (
    ConditionTagDefinition,
    ContentTagDefinition,
    InlineTagDefinition,
    TagDefinition,
)

logger = logging.getLogger(__name__)

# (key, formatted text) -> итоговый текст подстановки
KeyFormattedHook = Callable[[str, str], str]

# Привязки аргументов одного рендеринга: id(TagNode) -> коллекция
_Bindings = Dict[int, ArgumentCollection]


class TemplateProcessor:
    """
    Основной процессор дерева тегов.

    Экземпляр не хранит состояния рендеринга: каждый вызов render()
    создает собственные корневые области видимости и буферы, поэтому
    один процессор можно использовать для многих шаблонов.
    """

    def __init__(
        self,
        registry: Optional[TagRegistry] = None,
        config: Optional[EngineConfig] = None,
        *,
        on_key_found: Optional[KeyFoundHook] = None,
        on_key_missing: Optional[KeyMissingHook] = None,
        post_processor: Optional[KeyFormattedHook] = None,
    ):
        """
        Инициализирует процессор.

        Args:
            registry: Реестр тегов; по умолчанию общий реестр встроенных тегов
                      (или новый, если передана собственная конфигурация)
            config: Настройки движка
            on_key_found: Хук, подменяющий найденное значение ключа
            on_key_missing: Хук, подставляющий значение для отсутствующего ключа
            post_processor: Хук, подменяющий отформатированный текст подстановки
        """
        self.config = config or EngineConfig()
        if registry is None:
            registry = create_default_registry(self.config) if config is not None else get_registry()
        self.registry = registry
        self.on_key_found = on_key_found
        self.on_key_missing = on_key_missing
        self.post_processor = post_processor

    # Публичный API

    def validate(self, ast: TemplateAST) -> None:
        """
        Проверяет дерево целиком, ничего не рендеря.

        Raises:
            UnknownTagError: Тег не зарегистрирован
            BindingError: Аргументы не соответствуют параметрам тега
                          или блок тега не поддерживается его видом
        """
        self._bind_tree(ast, {})

    def render(self, ast: TemplateAST, source: Any = None, template_name: str = "") -> str:
        """
        Рендерит дерево в строку.

        Args:
            ast: Дерево узлов
            source: Объект данных, позиционное значение корневой области ключей
            template_name: Опциональное имя шаблона для диагностики

        Returns:
            Отрендеренный текст

        Raises:
            MTagsUserError: Ошибки привязки и неизвестные теги (до вывода)
            TemplateProcessingError: Непредвиденная ошибка при вычислении
        """
        buffer = io.StringIO()
        self.render_to(buffer, ast, source, template_name)
        return buffer.getvalue()

    def render_to(self, writer: TextSink, ast: TemplateAST, source: Any = None, template_name: str = "") -> None:
        """
        Рендерит дерево в произвольный приемник.

        Дерево проверяется до записи первого символа, так что при ошибке
        привязки приемник остается нетронутым.
        """
        def process():
            bindings: _Bindings = {}
            self._bind_tree(ast, bindings)
            key_scope, context_scope = self._create_root_scopes(source)
            self._evaluate_nodes(ast, writer, key_scope, context_scope, bindings)
            logger.debug(f"Rendered template '{template_name}' ({len(ast)} top-level nodes)")

        self._handle_template_errors(process, template_name, "Failed to render template")

    # Привязка

    def _bind_tree(self, ast: TemplateAST, bindings: _Bindings) -> None:
        for node in iter_tag_nodes(ast):
            tag = self.registry.get(node.tag_name)
            self._check_blocks(tag, node)
            bindings[id(node)] = ArgumentCollection.bind(tag.name, tag.parameters(), node.arguments)
        logger.debug(f"Bound {len(bindings)} tag nodes")

    @staticmethod
    def _check_blocks(tag: TagDefinition, node: TagNode) -> None:
        if node.body and not tag.has_content:
            raise BindingError(f"tag '{tag.name}' does not accept a body", tag.name)
        if node.else_body and not tag.has_else_branch:
            raise BindingError(f"tag '{tag.name}' does not accept an else block", tag.name)

    def _create_root_scopes(self, source: Any):
        key_scope = Scope(
            source,
            on_key_found=self.on_key_found,
            on_key_missing=self.on_key_missing,
        )
        context_scope = Scope()
        return key_scope, context_scope

    # Вычисление

    def _evaluate_nodes(
        self,
        nodes: List[TemplateNode],
        writer: TextSink,
        key_scope: Scope,
        context_scope: Scope,
        bindings: _Bindings,
    ) -> None:
        for node in nodes:
            self._evaluate_node(node, writer, key_scope, context_scope, bindings)

    def _evaluate_node(
        self,
        node: TemplateNode,
        writer: TextSink,
        key_scope: Scope,
        context_scope: Scope,
        bindings: _Bindings,
    ) -> None:
        if isinstance(node, TextNode):
            writer.write(self._literal_text(node.text))
        elif isinstance(node, KeyNode):
            writer.write(self._evaluate_key(node, key_scope, context_scope))
        elif isinstance(node, TagNode):
            self._evaluate_tag(node, writer, key_scope, context_scope, bindings)
        else:
            logger.warning(f"No processor found for node type: {type(node).__name__}")

    def _literal_text(self, text: str) -> str:
        if self.config.remove_newlines:
            return text.replace("\r\n", "").replace("\n", "")
        return text

    def _evaluate_key(self, node: KeyNode, key_scope: Scope, context_scope: Scope) -> str:
        scope = context_scope if node.is_variable else key_scope
        value = scope.find(node.name)
        text = self._format_value(value, node.format_spec, node.alignment)
        if self.post_processor is not None:
            text = self.post_processor(node.key, text)
        return text

    @staticmethod
    def _format_value(value: Any, format_spec: str, alignment: Optional[int]) -> str:
        if value is None:
            text = ""
        elif format_spec:
            try:
                text = format(value, format_spec)
            except (ValueError, TypeError):
                logger.debug(f"Format spec {format_spec!r} does not apply to {type(value).__name__}")
                text = str(value)
        else:
            text = str(value)

        if alignment:
            width = abs(alignment)
            text = text.rjust(width) if alignment > 0 else text.ljust(width)
        return text

    def _evaluate_tag(
        self,
        node: TagNode,
        writer: TextSink,
        key_scope: Scope,
        context_scope: Scope,
        bindings: _Bindings,
    ) -> None:
        tag = self.registry.get(node.tag_name)
        arguments = bindings[id(node)].get_arguments(key_scope, context_scope)

        if isinstance(tag, InlineTagDefinition):
            tag.emit_text(writer, arguments, context_scope)
            return

        if isinstance(tag, ConditionTagDefinition):
            primary = tag.should_render_primary(arguments)
            logger.debug(f"Tag '{tag.name}' selects {'primary' if primary else 'else'} branch")
            branch = node.body if primary else node.else_body
            self._evaluate_nodes(branch, writer, key_scope, context_scope, bindings)
            return

        if isinstance(tag, ContentTagDefinition):
            for ctx in tag.open_child_contexts(writer, key_scope, arguments, context_scope):
                target = ctx.writer if ctx.writer is not None else writer
                self._evaluate_nodes(
                    node.body,
                    target,
                    ctx.key_scope if ctx.key_scope is not None else key_scope,
                    ctx.context_scope if ctx.context_scope is not None else context_scope,
                    bindings,
                )
                if ctx.needs_consolidation:
                    writer.write(tag.consolidate(_buffer_text(target), arguments))
            return

        raise TypeError(f"Unsupported tag definition type: {type(tag).__name__}")

    def _handle_template_errors(self, func, template_name: str, error_message: str):
        """Общий обработчик ошибок для операций с шаблонами."""
        try:
            return func()
        except MTagsUserError:
            # Ошибки пользователя передаем как есть
            raise
        except Exception as e:
            # Оборачиваем остальные ошибки в TemplateProcessingError
            raise TemplateProcessingError(error_message, template_name, e)


def _buffer_text(writer: TextSink) -> str:
    getvalue = getattr(writer, "getvalue", None)
    if getvalue is None:
        raise TypeError(f"Consolidated writer must expose getvalue(): {type(writer).__name__}")
    return getvalue()


def render(ast: TemplateAST, source: Any = None, **kwargs) -> str:
    """Рендерит дерево процессором по умолчанию."""
    return TemplateProcessor(**kwargs).render(ast, source)


__all__ = ["TemplateProcessor", "KeyFormattedHook", "render"]
