"""
Тесты inline-тегов.
"""

import re
from datetime import datetime
from decimal import Decimal

import pytest

from mtags.arguments import PlaceholderArgument
from mtags.config import EngineConfig
from mtags.processor import TemplateProcessor
from mtags.tags.base import coerce_int

from .conftest import doc, tag


class TestInlineTags:

    def test_tab_and_br(self, processor):
        """Тест tab и br"""
        assert processor.render(doc("a", tag("tab"), "b", tag("br"), "c")) == "a\tb\nc"

    def test_br_uses_configured_newline(self):
        """br выводит перевод строки из конфигурации"""
        processor = TemplateProcessor(config=EngineConfig(newline="\r\n"))
        assert processor.render(doc(tag("br"))) == "\r\n"

    def test_repeat(self, processor):
        """Тест repeat"""
        assert processor.render(doc(tag("repeat", count=3, value="ab"))) == "ababab"

    def test_repeat_soft_fails_on_bad_count(self, processor):
        """Нечисловой count дает пустой вывод"""
        assert processor.render(doc("[", tag("repeat", count="many", value="x"), "]")) == "[]"

    def test_repeat_count_from_data(self, processor):
        """count можно взять из данных"""
        node = tag("repeat", count=PlaceholderArgument("n"), value="*")
        assert processor.render(doc(node), {"n": 4}) == "****"

    def test_space(self, processor):
        """Тест space"""
        assert processor.render(doc("a", tag("space", count=2), "b")) == "a  b"
        assert processor.render(doc(tag("space", count=-1))) == ""

    def test_guid_is_unique(self, processor):
        """guid выдает новый UUID на каждый вызов"""
        first, second = processor.render(doc(tag("guid"), " ", tag("guid"))).split(" ")
        pattern = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[0-9a-f]{4}-[0-9a-f]{12}$")
        assert pattern.match(first)
        assert pattern.match(second)
        assert first != second

    def test_now_uses_format(self):
        """now форматируется strftime-форматом из конфигурации"""
        processor = TemplateProcessor(config=EngineConfig(datetime_format="%Y"))
        assert processor.render(doc(tag("now"))) in {str(datetime.now().year), str(datetime.now().year - 1)}

    def test_now_date_only(self, processor):
        """now-date-only выводит дату без времени"""
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}", processor.render(doc(tag("now-date-only"))))

    def test_echo(self, processor):
        """echo выводит значение; отсутствующее - пусто"""
        assert processor.render(doc(tag("echo", text=PlaceholderArgument("user.name"))), {"user": {"name": "Ann"}}) == "Ann"
        assert processor.render(doc(tag("echo", text=PlaceholderArgument("missing")))) == ""
        assert processor.render(doc(tag("echo"))) == ""


class TestCoerceInt:

    @pytest.mark.parametrize("value,expected", [
        (7, 7),
        (" 42 ", 42),
        ("-3", -3),
        ("+5", 5),
        (Decimal("2"), 2),
        (3.0, 3),
        (2.5, None),
        (True, None),
        (None, None),
        ("1_000", None),
        ("٣", None),
        ("1.0", None),
        ("", None),
    ])
    def test_coerce_int(self, value, expected):
        """Мягкое приведение к int: только знак и ASCII-цифры"""
        assert coerce_int(value) == expected

    def test_repeat_with_underscored_count_is_empty(self, processor):
        """Счетчик с "_" не распознается как число"""
        assert processor.render(doc("[", tag("repeat", count="1_0", value="*"), "]")) == "[]"
