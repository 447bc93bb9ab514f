"""
Тесты реестра тегов.
"""

import pytest

from mtags.config import EngineConfig
from mtags.errors import DuplicateTagError, UnknownTagError
from mtags.registry import TagRegistry, create_default_registry, get_registry
from mtags.tags import TagKind
from mtags.tags.content import UpperTagDefinition
from mtags.tags.inline import TabTagDefinition


class TestTagRegistry:

    def setup_method(self):
        self.registry = TagRegistry()

    def test_register_and_get(self):
        """Тест регистрации и получения тега"""
        upper = UpperTagDefinition()
        self.registry.register(upper)
        assert self.registry.get("upper") is upper
        assert "upper" in self.registry
        assert len(self.registry) == 1

    def test_duplicate_name_rejected(self):
        """Имена тегов уникальны"""
        self.registry.register(UpperTagDefinition())
        with pytest.raises(DuplicateTagError, match="tag 'upper' already registered"):
            self.registry.register(UpperTagDefinition())

    def test_unknown_tag(self):
        """Неизвестный тег - UnknownTagError; find() возвращает None"""
        with pytest.raises(UnknownTagError, match="unknown tag 'nope'"):
            self.registry.get("nope")
        assert self.registry.find("nope") is None

    def test_unregister(self):
        """Тест удаления тега"""
        self.registry.register(TabTagDefinition())
        self.registry.unregister("tab")
        assert "tab" not in self.registry
        with pytest.raises(UnknownTagError):
            self.registry.unregister("tab")

    def test_stats(self):
        """Статистика по видам тегов"""
        self.registry.register_all([UpperTagDefinition(), TabTagDefinition()])
        assert self.registry.get_stats() == {
            "tags": 2,
            TagKind.INLINE.value: 1,
            TagKind.CONTENT.value: 1,
            TagKind.CONDITION.value: 0,
        }


class TestDefaultRegistry:

    def test_builtins_registered(self):
        """Все встроенные теги зарегистрированы"""
        registry = create_default_registry()
        expected = {
            "now", "now-date-only", "guid", "tab", "br", "repeat", "space", "echo",
            "upper", "lower", "capitalize", "trim", "trim-start", "trim-end",
            "left", "right", "mid", "html-decode", "url-decode", "url-encode",
            "md5", "sha256", "format-number", "normalize-accent-marks",
            "remove-blank-lines", "remove-non-ascii-chars",
            "if", "eq", "lt", "any", "is-null-or-empty",
            "for", "each", "with",
        }
        assert set(registry.names()) == expected
        assert registry.names() == sorted(expected)

    def test_disabled_tags(self):
        """disabled_tags исключает теги из реестра"""
        registry = create_default_registry(EngineConfig(disabled_tags=["guid", "now"]))
        assert "guid" not in registry
        assert "now" not in registry
        assert "now-date-only" in registry

    def test_get_registry_is_shared(self):
        """get_registry() возвращает один и тот же экземпляр"""
        assert get_registry() is get_registry()

    def test_context_sensitivity_flags(self):
        """Сравнивающие теги не зависят от контекста"""
        registry = create_default_registry()
        for name in ("eq", "lt", "any", "is-null-or-empty", "for"):
            assert registry.get(name).is_context_sensitive() is False
        assert registry.get("upper").is_context_sensitive() is True

    def test_for_child_context_parameters(self):
        """for объявляет start/end/step как параметры дочернего контекста"""
        loop = create_default_registry().get("for")
        assert [p.name for p in loop.child_context_parameters()] == ["start", "end", "step"]
        assert all(p.required for p in loop.parameters())

    def test_inline_tags_have_no_child_context_parameters(self):
        """Inline-теги не открывают дочерний контекст"""
        registry = create_default_registry()
        for name in ("repeat", "space", "echo"):
            assert registry.get(name).child_context_parameters() == []
