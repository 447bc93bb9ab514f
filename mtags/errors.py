"""
Exception taxonomy for the tag engine.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from MTagsUserError.

Programming errors and bugs should NOT inherit from MTagsUserError:
they will propagate with full tracebacks.
"""

from __future__ import annotations

from typing import Optional


class MTagsUserError(Exception):
    """
    Base class for all user-facing errors in mtags.

    These errors indicate problems that the template author can fix:
    unknown tags, missing arguments, broken configuration, etc.
    """
    pass


class UnknownTagError(MTagsUserError):
    """A tag node refers to a name that is not in the registry."""

    def __init__(self, tag_name: str):
        super().__init__(f"unknown tag '{tag_name}'")
        self.tag_name = tag_name


class DuplicateTagError(MTagsUserError):
    """A second tag definition was registered under an existing name."""

    def __init__(self, tag_name: str):
        super().__init__(f"tag '{tag_name}' already registered")
        self.tag_name = tag_name


class BindingError(MTagsUserError):
    """Arguments of a tag node do not match the tag's declared parameters."""

    def __init__(self, message: str, tag_name: str, parameter: Optional[str] = None):
        super().__init__(message)
        self.tag_name = tag_name
        self.parameter = parameter

    @classmethod
    def missing(cls, tag_name: str, parameter: str) -> "BindingError":
        return cls(
            f"missing required parameter '{parameter}' for tag '{tag_name}'",
            tag_name,
            parameter,
        )

    @classmethod
    def unexpected(cls, tag_name: str, parameter: str) -> "BindingError":
        return cls(
            f"unexpected parameter '{parameter}' for tag '{tag_name}'",
            tag_name,
            parameter,
        )


class ConfigLoadError(MTagsUserError):
    """Engine configuration could not be read or has the wrong shape."""
    pass


class TemplateProcessingError(MTagsUserError):
    """
    Failure while evaluating a tag tree.

    Wraps the underlying exception and keeps the name of the template
    (if the caller supplied one) for diagnostics.
    """

    def __init__(self, message: str, template_name: str = "", cause: Optional[BaseException] = None):
        super().__init__(message)
        self.template_name = template_name
        self.cause = cause

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.template_name:
            parts.append(f"Template: {self.template_name}")
        if self.cause is not None:
            parts.append(f"Cause: {self.cause}")
        return " | ".join(parts)


__all__ = [
    "MTagsUserError",
    "UnknownTagError",
    "DuplicateTagError",
    "BindingError",
    "ConfigLoadError",
    "TemplateProcessingError",
]
