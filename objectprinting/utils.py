"""
Object Printing utilities shared across the package.

Contains functions used by multiple modules to avoid circular imports.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any


# Methods --------------------------------------------------------------------------------------------------------------


def class_name(
    obj: Any,
    fully_qualified: bool = False,
    fully_qualified_builtins: bool = False,
) -> str:
    """
    Get the class name of an object or a class.

    Returns class name whether given an instance or the class itself.
    For example, both `class_name(10)` and `class_name(int)` return 'int'.

    Nested classes keep their qualified name, so a class `Inner` declared inside
    `Outer` is reported as 'Outer.Inner'.

    Parameters:
        obj (Any): An object or a class.
        fully_qualified (bool): If true, returns the fully qualified name for user objects or classes.
        fully_qualified_builtins (bool): If true, returns the fully qualified name for builtin objects or classes.

    Returns:
        str: The class name.

    Examples:
        Basic usage with a builtin instance:
            >>> class_name(10)
            'int'

        Fully qualified name for a builtin (when enabled):
            >>> class_name(10, fully_qualified_builtins=True)
            'builtins.int'

        User-defined class: instance and class object:
            >>> class C: ...
            >>> class_name(C())
            'C'
            >>> class_name(C, fully_qualified=True)
            'objectprinting.utils.C'
    """
    cls = obj if isinstance(obj, type) else obj.__class__
    name = getattr(cls, "__qualname__", cls.__name__)
    # Classes declared inside functions carry '<locals>' in their qualname
    if "<locals>" in name:
        name = cls.__name__

    if cls.__module__ == "builtins":
        return f"builtins.{name}" if fully_qualified_builtins else name
    return f"{cls.__module__}.{name}" if fully_qualified else name


def to_str(obj: Any, fully_qualified: bool = False) -> str:
    """
    Returns <str> value of object, overrides default stdlib __str__.

    If custom __str__ method not found, falls back to a custom __repr__ (dataclasses, namedtuples),
    then replaces the stdlib __str__ with optionally Fully Qualified Class Name.
    """
    cls = type(obj)
    if cls.__str__ is not object.__str__:
        return str(obj)
    if cls.__repr__ is not object.__repr__:
        return repr(obj)
    return f"<{class_name(obj, fully_qualified=fully_qualified)}>"
