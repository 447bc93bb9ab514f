"""
Встроенные теги движка.
"""

from __future__ import annotations

from typing import List, Optional

from .base import (
    TagArguments,
    TagKind,
    TagParameter,
    NestedContext,
    TagDefinition,
    InlineTagDefinition,
    ContentTagDefinition,
    ConditionTagDefinition,
    coerce_int,
)
from .conditions import (
    IfTagDefinition,
    EqTagDefinition,
    LtTagDefinition,
    AnyTagDefinition,
    IsNullOrEmptyTagDefinition,
)
from .content import (
    TransformTagDefinition,
    UpperTagDefinition,
    LowerTagDefinition,
    CapitalizeTagDefinition,
    TrimTagDefinition,
    TrimStartTagDefinition,
    TrimEndTagDefinition,
    HtmlDecodeTagDefinition,
    UrlDecodeTagDefinition,
    UrlEncodeTagDefinition,
    Md5TagDefinition,
    Sha256TagDefinition,
    NormalizeAccentMarksTagDefinition,
    RemoveBlankLinesTagDefinition,
    RemoveNonAsciiCharsTagDefinition,
    LeftTagDefinition,
    RightTagDefinition,
    MidTagDefinition,
    FormatNumberTagDefinition,
)
from .inline import (
    NowTagDefinition,
    NowDateOnlyTagDefinition,
    GuidTagDefinition,
    TabTagDefinition,
    LineBreakTagDefinition,
    RepeatTagDefinition,
    SpaceTagDefinition,
    EchoTagDefinition,
)
from .loops import ForTagDefinition, EachTagDefinition, WithTagDefinition, LOOP_GUARD
from ..config import EngineConfig


def builtin_tags(config: Optional[EngineConfig] = None) -> List[TagDefinition]:
    """
    Создает экземпляры всех встроенных тегов.

    Args:
        config: Настройки движка (формат даты, перевод строки)

    Returns:
        Список определений в порядке регистрации
    """
    cfg = config or EngineConfig()
    return [
        # inline
        NowTagDefinition(cfg.datetime_format),
        NowDateOnlyTagDefinition(cfg.date_format),
        GuidTagDefinition(),
        TabTagDefinition(),
        LineBreakTagDefinition(cfg.newline),
        RepeatTagDefinition(),
        SpaceTagDefinition(),
        EchoTagDefinition(),
        # content
        UpperTagDefinition(),
        LowerTagDefinition(),
        CapitalizeTagDefinition(),
        TrimTagDefinition(),
        TrimStartTagDefinition(),
        TrimEndTagDefinition(),
        HtmlDecodeTagDefinition(),
        UrlDecodeTagDefinition(),
        UrlEncodeTagDefinition(),
        Md5TagDefinition(),
        Sha256TagDefinition(),
        NormalizeAccentMarksTagDefinition(),
        RemoveBlankLinesTagDefinition(),
        RemoveNonAsciiCharsTagDefinition(),
        LeftTagDefinition(),
        RightTagDefinition(),
        MidTagDefinition(),
        FormatNumberTagDefinition(),
        # условия
        IfTagDefinition(),
        EqTagDefinition(),
        LtTagDefinition(),
        AnyTagDefinition(),
        IsNullOrEmptyTagDefinition(),
        # циклы и контекст
        ForTagDefinition(),
        EachTagDefinition(),
        WithTagDefinition(),
    ]


__all__ = [
    "TagArguments",
    "TagKind",
    "TagParameter",
    "NestedContext",
    "TagDefinition",
    "InlineTagDefinition",
    "ContentTagDefinition",
    "ConditionTagDefinition",
    "TransformTagDefinition",
    "ForTagDefinition",
    "EachTagDefinition",
    "WithTagDefinition",
    "LOOP_GUARD",
    "coerce_int",
    "builtin_tags",
]
