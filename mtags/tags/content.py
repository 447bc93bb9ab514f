"""
Content-теги: рендерят дочерний блок в собственный буфер
и преобразуют его текст целиком.
"""

from __future__ import annotations

import logging
from typing import List

from .base import ContentTagDefinition, TagArguments, TagParameter, coerce_int
from .. import textops

logger = logging.getLogger(__name__)


class TransformTagDefinition(ContentTagDefinition):
    """
    Content-тег, применяющий к тексту блока чистую функцию str -> str.

    Наследники переопределяют transform.
    """

    @staticmethod
    def transform(text: str) -> str:
        return text

    def consolidate(self, text: str, arguments: TagArguments) -> str:
        return self.transform(text)


class UpperTagDefinition(TransformTagDefinition):
    name = "upper"
    transform = staticmethod(str.upper)


class LowerTagDefinition(TransformTagDefinition):
    name = "lower"
    transform = staticmethod(str.lower)


class CapitalizeTagDefinition(TransformTagDefinition):
    name = "capitalize"
    transform = staticmethod(textops.capitalize)


class TrimTagDefinition(TransformTagDefinition):
    name = "trim"
    transform = staticmethod(str.strip)


class TrimStartTagDefinition(TransformTagDefinition):
    name = "trim-start"
    transform = staticmethod(str.lstrip)


class TrimEndTagDefinition(TransformTagDefinition):
    name = "trim-end"
    transform = staticmethod(str.rstrip)


class HtmlDecodeTagDefinition(TransformTagDefinition):
    name = "html-decode"
    transform = staticmethod(textops.html_decode)


class UrlDecodeTagDefinition(TransformTagDefinition):
    name = "url-decode"
    transform = staticmethod(textops.url_decode)


class UrlEncodeTagDefinition(TransformTagDefinition):
    name = "url-encode"
    transform = staticmethod(textops.url_encode)


class Md5TagDefinition(TransformTagDefinition):
    name = "md5"
    transform = staticmethod(textops.md5)


class Sha256TagDefinition(TransformTagDefinition):
    name = "sha256"
    transform = staticmethod(textops.sha256)


class NormalizeAccentMarksTagDefinition(TransformTagDefinition):
    name = "normalize-accent-marks"
    transform = staticmethod(textops.normalize_accents)


class RemoveBlankLinesTagDefinition(TransformTagDefinition):
    name = "remove-blank-lines"
    transform = staticmethod(textops.remove_blank_lines)


class RemoveNonAsciiCharsTagDefinition(TransformTagDefinition):
    name = "remove-non-ascii-chars"
    transform = staticmethod(textops.remove_non_ascii)


class LeftTagDefinition(ContentTagDefinition):
    """
    Первые length символов блока: {{#left length=3}}...{{/left}}.

    Нечисловой length дает пустую строку.
    """

    name = "left"

    def parameters(self) -> List[TagParameter]:
        return [TagParameter("length")]

    def consolidate(self, text: str, arguments: TagArguments) -> str:
        length = coerce_int(arguments.get("length"))
        if length is None:
            return ""
        return textops.safe_left(text, length)


class RightTagDefinition(ContentTagDefinition):
    """Последние length символов блока."""

    name = "right"

    def parameters(self) -> List[TagParameter]:
        return [TagParameter("length")]

    def consolidate(self, text: str, arguments: TagArguments) -> str:
        length = coerce_int(arguments.get("length"))
        if length is None:
            return ""
        return textops.safe_right(text, length)


class MidTagDefinition(ContentTagDefinition):
    """
    Подстрока с позиции startPosition (с единицы) длиной length.
    """

    name = "mid"

    def parameters(self) -> List[TagParameter]:
        return [TagParameter("startPosition"), TagParameter("length")]

    def consolidate(self, text: str, arguments: TagArguments) -> str:
        start = coerce_int(arguments.get("startPosition"))
        length = coerce_int(arguments.get("length"))
        if start is None or length is None:
            return ""
        return textops.mid(text, start, length)


class FormatNumberTagDefinition(ContentTagDefinition):
    """
    Форматирует число с разделителями тысяч: {{#format-number decimalPlaces=2}}.

    Нечисловой текст блока остается как есть; без корректного
    decimalPlaces вывод пустой.
    """

    name = "format-number"

    def parameters(self) -> List[TagParameter]:
        return [TagParameter("decimalPlaces")]

    def consolidate(self, text: str, arguments: TagArguments) -> str:
        places = coerce_int(arguments.get("decimalPlaces"))
        if places is None:
            logger.debug(f"format-number: invalid decimalPlaces {arguments.get('decimalPlaces')!r}")
            return ""
        return textops.format_number(text, places)


__all__ = [
    "TransformTagDefinition",
    "UpperTagDefinition",
    "LowerTagDefinition",
    "CapitalizeTagDefinition",
    "TrimTagDefinition",
    "TrimStartTagDefinition",
    "TrimEndTagDefinition",
    "HtmlDecodeTagDefinition",
    "UrlDecodeTagDefinition",
    "UrlEncodeTagDefinition",
    "Md5TagDefinition",
    "Sha256TagDefinition",
    "NormalizeAccentMarksTagDefinition",
    "RemoveBlankLinesTagDefinition",
    "RemoveNonAsciiCharsTagDefinition",
    "LeftTagDefinition",
    "RightTagDefinition",
    "MidTagDefinition",
    "FormatNumberTagDefinition",
]
