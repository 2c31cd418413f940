"""
Value-to-text formatting for object printing.

Provides the formatter contract used by printing overrides, the pluggable numeric
culture (locale) conversion backed by Babel, the default text conversion for
primitive values, and the fmt_* helpers used to build exception messages.
"""

# Standard library -----------------------------------------------------------------------------------------------------

import datetime as dt
import pathlib
import uuid
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any, Callable, Protocol, runtime_checkable

# Third-party ----------------------------------------------------------------------------------------------------------

from babel import Locale, UnknownLocaleError
from babel.numbers import format_decimal

# Local ----------------------------------------------------------------------------------------------------------------

from .utils import class_name


# Formatter is a pure value -> text conversion, registered per type or per member
Formatter = Callable[[Any], str]

FINAL_TYPES = (
    type(None),
    bool,  # Comes before int (is subclass of int)
    int,
    float,
    complex,
    Decimal,
    Fraction,
    str,
    bytes,
    bytearray,
    memoryview,
    range,
    type(Ellipsis),  # EllipsisType (...)
    type(NotImplemented),  # NotImplementedType
    Enum,
    dt.date,  # datetime is a subclass of date
    dt.time,
    dt.timedelta,
    dt.timezone,
    uuid.UUID,
    pathlib.PurePath,
    type,
)

# Types accepted by a numeric culture override
CULTURE_TYPES = (int, float, Decimal)


# Classes --------------------------------------------------------------------------------------------------------------

@runtime_checkable
class Culture(Protocol):
    """Locale-specific numeric formatting convention (decimal separator, digit grouping)."""

    def format_number(self, value: int | float | Decimal) -> str: ...


@dataclass(frozen=True)
class BabelCulture:
    """
    Numeric culture backed by Babel CLDR locale data.

    Numbers are formatted with the locale's decimal pattern without decimal
    quantization, so fractional digits are never rounded away.

    Attributes:
        locale: Babel Locale providing decimal and grouping symbols.
        grouping: If False, digit group separators are omitted.

    Examples:
        >>> BabelCulture.parse("de_DE").format_number(1234.5)
        '1.234,5'
        >>> BabelCulture.parse("en-US").format_number(185.5)
        '185.5'
        >>> BabelCulture.parse("en_US", grouping=False).format_number(1234567)
        '1234567'
    """
    locale: Locale
    grouping: bool = True

    def __post_init__(self):
        if not isinstance(self.locale, Locale):
            raise TypeError(f"locale must be a babel Locale, but got {fmt_type(self.locale)}")

    @classmethod
    def parse(cls, identifier: str, grouping: bool = True) -> "BabelCulture":
        """
        Create culture from a locale identifier like 'de_DE' or 'en-US'.

        Raises:
            TypeError: If identifier is not a str.
            ValueError: If identifier is not a known locale.
        """
        if not isinstance(identifier, str):
            raise TypeError(f"locale identifier must be str, but got {fmt_type(identifier)}")
        try:
            locale = Locale.parse(identifier, sep="-" if "-" in identifier else "_")
        except (ValueError, UnknownLocaleError) as e:
            raise ValueError(f"unknown locale identifier: {fmt_value(identifier)}") from e
        return cls(locale=locale, grouping=grouping)

    def format_number(self, value: int | float | Decimal) -> str:
        """Format number with locale decimal symbol and digit grouping."""
        return format_decimal(value,
                              locale=self.locale,
                              decimal_quantization=False,
                              group_separator=self.grouping)

    def __str__(self) -> str:
        return str(self.locale)


# Methods --------------------------------------------------------------------------------------------------------------

def as_culture(culture: "str | Locale | Culture") -> Culture:
    """
    Coerce a locale identifier, a babel Locale or a Culture into a Culture.

    Raises:
        TypeError: If culture has an unsupported type.
        ValueError: If a locale identifier is unknown.
    """
    if isinstance(culture, str):
        return BabelCulture.parse(culture)
    if isinstance(culture, Locale):
        return BabelCulture(locale=culture)
    if isinstance(culture, Culture):
        return culture
    raise TypeError(f"culture must be a locale identifier, babel Locale or Culture, but got {fmt_type(culture)}")


def is_culture_type(typ: type) -> bool:
    """Return True if numeric culture overrides apply to typ (bool and enums excluded)."""
    if not isinstance(typ, type):
        return False
    if issubclass(typ, (bool, Enum)):
        return False
    return issubclass(typ, CULTURE_TYPES)


def is_final(obj: Any, extra_types: tuple[type, ...] = ()) -> bool:
    """Return True if obj is printed as text rather than expanded into members or elements."""
    return isinstance(obj, FINAL_TYPES + tuple(extra_types))


def default_text(obj: Any) -> str:
    """
    Default text conversion for final values.

    Uses str(), with graceful fallback for broken __str__ methods.
    """
    try:
        return str(obj)
    except Exception as e:
        return f"<{class_name(obj)} object (str failed: {type(e).__name__})>"


def apply_formatter(formatter: Formatter, obj: Any) -> str:
    """
    Invoke a registered formatter and check its result.

    Raises:
        TypeError: If the formatter returns anything but str.
    """
    text = formatter(obj)
    if not isinstance(text, str):
        raise TypeError(f"formatter for {fmt_type(obj)} must return str, but got {fmt_type(text)}")
    return text


def truncate(text: str, max_length: int, ellipsis: str = "") -> str:
    """
    Truncate text to at most max_length characters.

    The ellipsis is appended in full (not counted against max_length) and only when
    the text was actually shortened.

    Examples:
        >>> truncate("Alexander", 4)
        'Alex'
        >>> truncate("Alexander", 4, ellipsis="...")
        'Alex...'
        >>> truncate("Alex", 10, ellipsis="...")
        'Alex'
    """
    if max_length < 0:
        raise ValueError(f"max_length must be >= 0, but got {fmt_value(max_length)}")
    if len(text) <= max_length:
        return text
    return text[:max_length] + ellipsis


def fmt_type(obj: Any, *, show_module: bool = False) -> str:
    """Format type information for exception messages.

    Examples:
        >>> fmt_type(42)
        '<type: int>'
        >>> fmt_type(int)
        '<type: int>'
        >>> fmt_type([], show_module=True)
        '<type: builtins.list>'
    """
    type_name = class_name(obj, fully_qualified=show_module, fully_qualified_builtins=show_module)
    return f"<type: {type_name}>"


def fmt_value(x: Any, *, max_repr: int = 120, ellipsis: str = "...") -> str:
    """
    Format a single value as a type-value pair for exception messages.

    Handles broken __repr__ and extremely long representations gracefully.

    Examples:
        >>> fmt_value(42)
        '<int: 42>'
        >>> fmt_value("hello world", max_repr=6)
        "<str: 'hello...>"
    """
    t = class_name(x)
    try:
        base_repr = repr(x)
    except Exception as e:
        base_repr = f"<{t} object (repr failed: {type(e).__name__})>"

    # ASCII style escapes inner ">" to avoid conflicts with wrapper brackets
    base_repr = base_repr.replace(">", "\\>")
    return f"<{t}: {truncate(base_repr, max(1, max_repr), ellipsis=ellipsis)}>"
