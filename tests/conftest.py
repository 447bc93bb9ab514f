from __future__ import annotations

import json
import os
import subprocess
import sys
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict

import pytest

from mtags.arguments import Argument, NumberArgument, StringArgument
from mtags.nodes import TagNode, TextNode
from mtags.processor import TemplateProcessor
from mtags.registry import create_default_registry


def arg(value: Any) -> Argument:
    """Литерал Python -> аргумент шаблона (Argument передается как есть)."""
    if isinstance(value, Argument):
        return value
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        return NumberArgument(value)
    return StringArgument(str(value))


def tag(name: str, *body, else_body=(), **arguments: Any) -> TagNode:
    """
    Короткая запись узла тега для тестов.

    Строки в body превращаются в TextNode.
    """
    args: Dict[str, Argument] = {k: arg(v) for k, v in arguments.items()}
    return TagNode(
        tag_name=name,
        arguments=args,
        body=[_node(n) for n in body],
        else_body=[_node(n) for n in else_body],
    )


def doc(*items) -> list:
    """Список узлов верхнего уровня; строки превращаются в TextNode."""
    return [_node(n) for n in items]


def _node(n):
    return TextNode(n) if isinstance(n, str) else n


@pytest.fixture
def processor() -> TemplateProcessor:
    """Процессор со свежим реестром встроенных тегов."""
    return TemplateProcessor(registry=create_default_registry())


def run_cli(root: Path, *args: str) -> subprocess.CompletedProcess:
    env = os.environ.copy()
    return subprocess.run(
        [sys.executable, "-m", "mtags.cli", *args],
        cwd=root, env=env, capture_output=True, text=True, encoding="utf-8"
    )


def jload(s: str):
    return json.loads(s)


__all__ = ["arg", "tag", "doc", "run_cli", "jload"]
