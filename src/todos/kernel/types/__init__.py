"""Kernel types – EntityId plus the Option and Result containers."""

from todos.kernel.types.ids import EntityId
from todos.kernel.types.option import Nothing, Option, Some
from todos.kernel.types.result import Err, Ok, Result

__all__ = [
    "EntityId",
    "Err",
    "Nothing",
    "Ok",
    "Option",
    "Result",
    "Some",
]
