"""
Протоколы для движка тегов.

Определяет интерфейсы, через которые движок взаимодействует с внешним миром.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TextSink(Protocol):
    """
    Приемник текста, в который пишет движок.

    Движок только дописывает в конец и никогда не читает обратно,
    поэтому подходит любой объект с методом write(): io.StringIO,
    открытый текстовый файл, sys.stdout.
    """

    def write(self, text: str) -> int:
        ...


__all__ = ["TextSink"]
