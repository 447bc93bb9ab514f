"""
Тесты цепочки областей видимости.
"""

from dataclasses import dataclass

import pytest

from mtags.scope import Scope, lookup_member


@dataclass
class User:
    name: str
    tags: list

    def greet(self):
        return "hi"


class TestScopeLookup:

    def setup_method(self):
        self.root = Scope({"user": {"name": "Ann", "address": {"city": "Riga"}}, "count": 3})

    def test_find_in_root_value(self):
        """Тест поиска ключа в позиционном значении корня"""
        assert self.root.find("count") == 3

    def test_dotted_path(self):
        """Тест точечных путей"""
        assert self.root.find("user.name") == "Ann"
        assert self.root.find("user.address.city") == "Riga"

    def test_dotted_path_miss(self):
        """Тест промаха внутри точечного пути"""
        assert self.root.find("user.address.zip") is None
        assert self.root.find("user.name.first") is None

    @pytest.mark.parametrize("depth", [0, 1, 5, 50])
    def test_absent_at_any_depth(self, depth):
        """Отсутствующий ключ дает None на любой глубине цепочки"""
        scope = Scope()
        for _ in range(depth):
            scope = scope.create_child()
        assert scope.depth == depth
        assert scope.find("missing") is None
        assert scope.try_find("missing") == (False, None)

    def test_child_sees_parent(self):
        """Тест поиска от дочернего фрейма к корню"""
        child = self.root.create_child()
        child.set("local", 1)
        assert child.find("local") == 1
        assert child.find("count") == 3

    def test_nearest_frame_wins(self):
        """Тест затенения: ближайший фрейм имеет приоритет"""
        child = self.root.create_child({"count": 10})
        assert child.find("count") == 10

    def test_this_returns_positional_value(self):
        """Тест ключа this"""
        child = self.root.create_child(42)
        grandchild = child.create_child()
        assert child.find("this") == 42
        assert grandchild.find("this") == 42

    def test_explicit_none_is_found(self):
        """None, записанный явно, считается найденным значением"""
        scope = Scope()
        scope.set("x", None)
        assert "x" in scope
        assert scope.try_find("x") == (True, None)


class TestScopeIsolation:

    @pytest.mark.parametrize("depth", [1, 3, 20])
    def test_child_set_never_mutates_ancestors(self, depth):
        """set() в потомке не меняет ни один фрейм-предок"""
        root = Scope()
        root.set("name", "root")
        chain = [root]
        for _ in range(depth):
            chain.append(chain[-1].create_child())

        chain[-1].set("name", "leaf")
        chain[-1].set("extra", 1)

        assert chain[-1].find("name") == "leaf"
        for scope in chain[:-1]:
            assert scope.find("name") == "root"
            assert "extra" not in scope
            assert "extra" not in scope.local_names()

    def test_create_child_keeps_parent_value(self):
        """create_child() не меняет позиционное значение родителя"""
        root = Scope("root-value")
        root.create_child("child-value")
        assert root.value == "root-value"


class TestScopeHooks:

    def test_key_found_hook_substitutes_value(self):
        """Тест хука найденного ключа"""
        scope = Scope({"a": 1}, on_key_found=lambda name, value: value * 10)
        assert scope.find("a") == 10

    def test_key_missing_hook_inherited(self):
        """Хук отсутствующего ключа наследуется дочерними фреймами"""
        scope = Scope(on_key_missing=lambda name: f"<{name}>")
        child = scope.create_child().create_child()
        assert child.find("nope") == "<nope>"


class TestLookupMember:

    def test_attribute(self):
        """Тест публичного атрибута объекта"""
        assert lookup_member(User("Bob", []), "name") == (True, "Bob")

    def test_methods_and_private_hidden(self):
        """Методы и приватные атрибуты не видны"""
        user = User("Bob", [])
        assert lookup_member(user, "greet") == (False, None)
        assert lookup_member(user, "__dict__") == (False, None)

    def test_sequence_index(self):
        """Тест индекса последовательности"""
        assert lookup_member(["a", "b"], "1") == (True, "b")
        assert lookup_member(["a", "b"], "2") == (False, None)

    def test_non_ascii_digit_index(self):
        """Не-ASCII цифры не считаются индексом"""
        assert lookup_member(["a"], "\u00b2") == (False, None)
        assert lookup_member(["a", "b"], "\u0661") == (False, None)
        assert Scope({"items": ["a", "b"]}).find("items.\u00b2") is None

    def test_scalars_have_no_members(self):
        """У скаляров нет членов"""
        assert lookup_member("text", "upper") == (False, None)
        assert lookup_member(5, "real") == (False, None)
