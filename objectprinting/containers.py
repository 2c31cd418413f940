"""
Collection support for object printing.

Classifies sequences, sets and mappings, lists their elements in a deterministic
order, and provides the block markers surrounding printed collections.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
from enum import Enum, unique
from typing import Any


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class ContainerKind(str, Enum):
    """
    Collection rendering strategy:
        - "sequence": one element per line inside [ ]
        - "mapping": one 'key: value' entry per line inside { }
    """
    SEQUENCE = "sequence"
    MAPPING = "mapping"

    @property
    def markers(self) -> tuple[str, str]:
        """Opening and closing block markers."""
        return ("{", "}") if self is ContainerKind.MAPPING else ("[", "]")


# Methods --------------------------------------------------------------------------------------------------------------

def container_kind(obj: Any) -> ContainerKind | None:
    """
    Return the rendering strategy for a collection, or None if obj is not a collection.

    Text-like values (str, bytes) must be handled as final values by the caller.
    Namedtuples are not collections here, they are printed through their fields.

    Routing:
        - Mapping, ItemsView, dict-like objects with items() -> MAPPING
        - Sequence, Set, KeysView, ValuesView, other sized iterables -> SEQUENCE
    """
    if isinstance(obj, tuple) and hasattr(obj, "_fields"):
        return None
    if isinstance(obj, (abc.Mapping, abc.ItemsView)):
        return ContainerKind.MAPPING
    if isinstance(obj, (abc.Sequence, abc.Set, abc.MappingView)):
        return ContainerKind.SEQUENCE
    if not _is_sized_iterable(obj):
        return None
    if _is_dict_like(obj):
        return ContainerKind.MAPPING
    return ContainerKind.SEQUENCE


def container_entries(obj: Any, kind: ContainerKind) -> list[Any]:
    """
    List collection entries in printing order.

    Mappings yield (key, value) pairs in iteration order. Sequences yield elements in
    iteration order, except sets which are sorted when their elements are orderable,
    so that output does not depend on hash randomization.
    """
    if kind is ContainerKind.MAPPING:
        if isinstance(obj, abc.ItemsView):
            return list(obj)
        return list(obj.items())

    if isinstance(obj, abc.Set) and not isinstance(obj, abc.MappingView):
        try:
            return sorted(obj)
        except TypeError:
            return list(obj)  # Unorderable elements keep iteration order
    return list(obj)


def block_header(kind: ContainerKind, type_name: str, empty: bool = False) -> str:
    """
    Return the line opening a collection block.

    Examples:
        >>> block_header(ContainerKind.SEQUENCE, "list")
        'list ['
        >>> block_header(ContainerKind.MAPPING, "dict", empty=True)
        'dict {}'
    """
    opening, closing = kind.markers
    return f"{type_name} {opening}{closing}" if empty else f"{type_name} {opening}"


def block_footer(kind: ContainerKind) -> str:
    """Return the line closing a collection block."""
    return kind.markers[1]


# Private Methods ------------------------------------------------------------------------------------------------------

def _is_sized_iterable(obj: Any) -> bool:
    """
    Returns True if obj is a sized iterable (e.g. Collection or MappingView with __iter__ and __len__)

    Tries to iterate and to get length, does not rely on plain type checks.
    """
    if not isinstance(obj, abc.Sized):
        return False
    try:
        iter(obj)
        len(obj)
    except TypeError:
        return False
    return True


def _is_dict_like(obj: Any) -> bool:
    return hasattr(obj, "items") and callable(getattr(obj, "items"))
