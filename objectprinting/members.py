"""
Declared member enumeration for object printing.

Lists an object's data members as (name, value) pairs in a stable declaration order,
so that printing the same object twice always yields the same member sequence.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import inspect
import logging
import typing
import warnings
from dataclasses import fields, is_dataclass
from typing import Any, Iterator, Literal

# Local ----------------------------------------------------------------------------------------------------------------
from .formatters import fmt_value
from .utils import class_name

logger = logging.getLogger(__name__)

OnError = Literal["raise", "warn", "skip"]


# Methods --------------------------------------------------------------------------------------------------------------

def declared_members(obj: Any,
                     *,
                     include_private: bool = False,
                     include_properties: bool = False,
                     on_error: OnError = "raise") -> list[tuple[str, Any]]:
    """
    Return data members of an object as (name, value) pairs in declaration order.

    Order of members:
        1. Dataclass fields or namedtuple fields, in field order; for other objects
           class annotations (base classes first), then __slots__ (base classes first),
           then remaining instance attributes in assignment order.
        2. Public properties in class body order (base classes first), if include_properties.

    Args:
        obj: Object instance to inspect.
        include_private: Include members starting with a single underscore.
        include_properties: Include values of property descriptors.
        on_error: Behavior when reading a member raises:
            - "raise": propagate the exception (default)
            - "warn": emit RuntimeWarning and skip the member
            - "skip": silently skip the member

    Returns:
        List of (name, value) pairs. Dunder names, methods and members raising
        AttributeError (unassigned slots or annotations, property getters) are never listed.

    Raises:
        ValueError: If on_error is not a valid literal.

    Examples:
        >>> class Point:
        ...     def __init__(self, x, y):
        ...         self.x = x
        ...         self.y = y
        >>> declared_members(Point(1, 2))
        [('x', 1), ('y', 2)]
    """
    if on_error not in ("raise", "warn", "skip"):
        raise ValueError(f"on_error must be 'raise', 'warn' or 'skip', but got {fmt_value(on_error)}")

    cls = type(obj)
    members = []

    for name in _data_member_names(obj):
        if not _is_listed_name(name, include_private) or _is_property(cls, name):
            continue
        try:
            value = getattr(obj, name)
        except AttributeError:
            continue  # Declared but never assigned
        except Exception as e:
            _handle_error(obj, name, e, on_error)
            continue
        if inspect.isroutine(value):
            continue  # Should skip methods (properties see below)
        members.append((name, value))

    if include_properties:
        for name in _property_names(cls):
            if not _is_listed_name(name, include_private):
                continue
            try:
                value = getattr(obj, name)
            except AttributeError:
                continue  # Same as unassigned data members
            except Exception as e:
                _handle_error(obj, name, e, on_error)
                continue
            members.append((name, value))

    return members


# Private Methods ------------------------------------------------------------------------------------------------------

def _data_member_names(obj: Any) -> list[str]:
    """Collect unique member names in declaration order."""
    if is_dataclass(obj) and not isinstance(obj, type):
        return [f.name for f in fields(obj)]

    if isinstance(obj, tuple) and hasattr(obj, "_fields"):
        return list(obj._fields)

    names = dict.fromkeys(_annotated_names(type(obj)))
    for klass in reversed(type(obj).__mro__):
        slots = klass.__dict__.get("__slots__", ())
        names.update(dict.fromkeys([slots] if isinstance(slots, str) else slots))

    instance_dict = getattr(obj, "__dict__", None)
    if isinstance(instance_dict, dict):
        names.update(dict.fromkeys(instance_dict))

    return [name for name in names if isinstance(name, str)]


def _annotated_names(cls: type) -> Iterator[str]:
    """Yield class-body annotated names of cls and its bases, base classes first, ClassVar excluded."""
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        try:
            annotations = inspect.get_annotations(klass)
        except Exception:
            continue  # Broken or non-evaluable annotations
        for name, annotation in annotations.items():
            if _is_class_var(annotation):
                continue
            yield name


def _is_class_var(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return annotation is typing.ClassVar or typing.get_origin(annotation) is typing.ClassVar


def _property_names(cls: type) -> list[str]:
    """Return property names in class body order, base classes first."""
    names = {}
    for klass in reversed(cls.__mro__):
        for name, attr in klass.__dict__.items():
            if isinstance(attr, property):
                names[name] = None
    return list(names)


def _is_property(cls: type, name: str) -> bool:
    """Check if an attribute is a property descriptor on the class."""
    return isinstance(inspect.getattr_static(cls, name, None), property)


def _is_listed_name(name: str, include_private: bool) -> bool:
    if name.startswith("__") and name.endswith("__"):
        return False  # Always skip dunder
    if name.startswith("_") and not include_private:
        return False
    return True


def _handle_error(obj: Any, name: str, exc: Exception, on_error: OnError) -> None:
    if on_error == "raise":
        raise exc
    message = f"Failed to read member {class_name(obj)}.{name}: {type(exc).__name__}: {exc}"
    if on_error == "warn":
        warnings.warn(message, RuntimeWarning, stacklevel=3)
    else:
        logger.debug(message)
