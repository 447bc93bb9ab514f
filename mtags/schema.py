"""
Схемы JSON-ответов CLI.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ParameterInfo(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: str
    required: bool
    default: Optional[Any] = None


class TagInfo(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: str
    kind: str
    parameters: List[ParameterInfo]
    context_sensitive: bool = Field(..., alias="contextSensitive")
    has_content: bool = Field(..., alias="hasContent")
    has_else: bool = Field(..., alias="hasElse")


class TagsList(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    tags: List[TagInfo]


class DiagReport(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    tool_version: str = Field(..., alias="toolVersion")
    python: str
    platform: str
    config_path: Optional[str] = Field(None, alias="configPath")
    config: Dict[str, Any]
    tag_stats: Dict[str, int] = Field(..., alias="tagStats")


__all__ = ["ParameterInfo", "TagInfo", "TagsList", "DiagReport"]
