"""
mtags: движок вычисления mustache-подобных тегов.
"""

from .arguments import (
    Argument,
    ArgumentCollection,
    NumberArgument,
    PlaceholderArgument,
    StringArgument,
    VariableArgument,
)
from .config import EngineConfig, load_config
from .errors import (
    BindingError,
    ConfigLoadError,
    DuplicateTagError,
    MTagsUserError,
    TemplateProcessingError,
    UnknownTagError,
)
from .nodes import KeyNode, TagNode, TemplateAST, TextNode
from .processor import TemplateProcessor, render
from .registry import TagRegistry, create_default_registry, get_registry
from .scope import Scope

__all__ = [
    "Argument",
    "ArgumentCollection",
    "NumberArgument",
    "PlaceholderArgument",
    "StringArgument",
    "VariableArgument",
    "EngineConfig",
    "load_config",
    "BindingError",
    "ConfigLoadError",
    "DuplicateTagError",
    "MTagsUserError",
    "TemplateProcessingError",
    "UnknownTagError",
    "KeyNode",
    "TagNode",
    "TemplateAST",
    "TextNode",
    "TemplateProcessor",
    "render",
    "TagRegistry",
    "create_default_registry",
    "get_registry",
    "Scope",
]
