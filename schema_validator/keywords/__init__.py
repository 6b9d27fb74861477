"""Keyword protocol, registry and the bundled keyword implementations."""

from .base import (
    AbstractKeyword,
    AbstractValidator,
    FunctionKeyword,
    Keyword,
    Validator,
    read_string_list,
)
from .enum_names import EnumNamesKeyword
from .registry import KeywordRegistry

__all__ = [
    'AbstractKeyword',
    'AbstractValidator',
    'EnumNamesKeyword',
    'FunctionKeyword',
    'Keyword',
    'KeywordRegistry',
    'Validator',
    'read_string_list',
]
