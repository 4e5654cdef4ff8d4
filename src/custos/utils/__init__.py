"""Utility module for Custos

Definitions/declaractions in this module should be independent of other modules,
to the maximum extent possible.
"""

import importlib
import importlib.metadata
from typing import Any, Callable, Iterable, TypeVar

T = TypeVar("T")


def get_version() -> str:
    return importlib.metadata.version("custos")


def fully_qualified_name(cls) -> str:
    """Return Fully Qualified name along with module"""
    return ".".join([cls.__module__, cls.__qualname__])


def import_from_full_path(full_path: str) -> Any:
    """Import an attribute given its dotted path, like `custos.adapters.memory.MemoryDocumentStore`"""
    module_name, attribute_name = full_path.rsplit(".", maxsplit=1)
    return getattr(importlib.import_module(module_name), attribute_name)


def contains(items: Iterable[T], item: T, equals: Callable[[T, T], bool]) -> bool:
    """Membership test under a custom equality function"""
    return any(equals(existing, item) for existing in items)


def remove_all(items: list[T], item: T, equals: Callable[[T, T], bool]) -> int:
    """Remove, in place, every entry of `items` that equals `item`.

    Returns the number of entries removed.
    """
    retained = [existing for existing in items if not equals(existing, item)]
    removed = len(items) - len(retained)
    items[:] = retained
    return removed


def casefold_equals(left: str, right: str) -> bool:
    return left.casefold() == right.casefold()
