"""
Тесты content-тегов: рендеринг в буфер и консолидация.
"""

import hashlib

import pytest

from mtags.arguments import PlaceholderArgument
from mtags.nodes import KeyNode

from .conftest import doc, tag


class TestTransformTags:

    @pytest.mark.parametrize("name,text,expected", [
        ("upper", "Hello", "HELLO"),
        ("lower", "Hello", "hello"),
        ("capitalize", "hello world", "Hello world"),
        ("trim", "  x  ", "x"),
        ("trim-start", "  x  ", "x  "),
        ("trim-end", "  x  ", "  x"),
        ("html-decode", "&lt;p&gt;", "<p>"),
        ("url-decode", "a%20b+c", "a b c"),
        ("url-encode", "a b/c", "a+b%2Fc"),
        ("normalize-accent-marks", "it’s", "it's"),
        ("remove-blank-lines", "a\n\n\nb", "a\nb"),
        ("remove-non-ascii-chars", "naïve", "nave"),
    ])
    def test_transform(self, processor, name, text, expected):
        """Тест content-тегов, преобразующих текст блока"""
        assert processor.render(doc(tag(name, text))) == expected

    def test_hashes(self, processor):
        """md5 и sha256 - нижний регистр hex"""
        assert processor.render(doc(tag("md5", "abc"))) == hashlib.md5(b"abc").hexdigest()
        assert processor.render(doc(tag("sha256", "abc"))) == hashlib.sha256(b"abc").hexdigest()

    def test_transform_sees_rendered_children(self, processor):
        """Консолидация применяется к уже отрендеренным детям"""
        ast = doc(tag("upper", "hi ", KeyNode("name"), "!"))
        assert processor.render(ast, {"name": "ann"}) == "HI ANN!"

    def test_nested_consolidation(self, processor):
        """Вложенные content-теги консолидируются изнутри наружу"""
        ast = doc("[", tag("trim", tag("upper", "  abc  ")), "]")
        assert processor.render(ast) == "[ABC]"

    def test_empty_body(self, processor):
        """Пустой блок консолидируется в пустую строку"""
        assert processor.render(doc("a", tag("upper"), "b")) == "ab"


class TestSubstringTags:

    def test_left_right(self, processor):
        """Тест left и right"""
        assert processor.render(doc(tag("left", "abcdef", length=2))) == "ab"
        assert processor.render(doc(tag("right", "abcdef", length=2))) == "ef"
        assert processor.render(doc(tag("left", "ab", length=10))) == "ab"

    def test_mid(self, processor):
        """mid: позиция с единицы"""
        assert processor.render(doc(tag("mid", "abcdef", startPosition=2, length=3))) == "bcd"

    def test_soft_fail_on_bad_numbers(self, processor):
        """Нечисловые или отсутствующие аргументы дают пустой вывод"""
        assert processor.render(doc(tag("left", "abcdef", length="x"))) == ""
        assert processor.render(doc(tag("right", "abcdef"))) == ""
        assert processor.render(doc(tag("mid", "abcdef", length=2))) == ""

    def test_length_from_data(self, processor):
        """Длина может приходить из данных строкой"""
        ast = doc(tag("left", "abcdef", length=PlaceholderArgument("n")))
        assert processor.render(ast, {"n": "3"}) == "abc"


class TestFormatNumber:

    def test_format(self, processor):
        """Тест format-number"""
        assert processor.render(doc(tag("format-number", "1234.5", decimalPlaces=2))) == "1,234.50"

    def test_non_numeric_body_unchanged(self, processor):
        """Нечисловой текст остается как есть"""
        assert processor.render(doc(tag("format-number", "n/a", decimalPlaces=2))) == "n/a"

    def test_invalid_places(self, processor):
        """Некорректный decimalPlaces дает пустой вывод"""
        assert processor.render(doc(tag("format-number", "1", decimalPlaces="two"))) == ""
