"""
Override resolution for object printing.

Decides, for a visited member or element, whether it is excluded and which formatter,
culture and truncation rule apply.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass
from types import NoneType
from typing import Any

# Local ----------------------------------------------------------------------------------------------------------------
from .config import MemberPath, PrintingRules
from .formatters import Culture, Formatter, apply_formatter, truncate


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class Resolution:
    """
    Printing rule resolved for a single value.

    Attributes:
        excluded: The value must not be printed at all.
        formatter: Formatter to use instead of default formatting.
        culture: Numeric culture to use when no formatter applies.
        max_length: Truncation limit for the produced text.
    """
    excluded: bool = False
    formatter: Formatter | None = None
    culture: Culture | None = None
    max_length: int | None = None

    @property
    def has_override(self) -> bool:
        """Whether the value text comes from a formatter or a culture."""
        return self.formatter is not None or self.culture is not None

    def render(self, obj: Any) -> str:
        """
        Produce override text for obj.

        Raises:
            ValueError: If no formatter or culture is resolved.
            TypeError: If the formatter returns anything but str.
        """
        if self.formatter is not None:
            return apply_formatter(self.formatter, obj)
        if self.culture is not None:
            return self.culture.format_number(obj)
        raise ValueError("no formatter or culture resolved")

    def clip(self, text: str, ellipsis: str = "") -> str:
        """Apply the truncation limit, if any."""
        if self.max_length is None:
            return text
        return truncate(text, self.max_length, ellipsis=ellipsis)


EXCLUDED = Resolution(excluded=True)
DEFAULT = Resolution()


# Methods --------------------------------------------------------------------------------------------------------------

def resolve(rules: PrintingRules, typ: type, path: MemberPath | None = None) -> Resolution:
    """
    Resolve the printing rule of a member or element.

    Precedence:
        1. Excluded member path
        2. Excluded type
        3. Member formatter
        4. Type formatter
        5. Culture of the numeric type
        6. Truncation of the member path, applied after 3-5 or default formatting
        7. Default formatting

    Args:
        rules: Frozen override store.
        typ: Exact type of the value.
        path: Member path of the value; None for the root value, collection elements and mapping keys.

    Returns:
        Resolution with the applicable rules.
    """
    if path is not None and path in rules.excluded_members:
        return EXCLUDED
    if typ in rules.excluded_types:
        return EXCLUDED

    # Member formatters are never invoked for None, a NoneType formatter is
    formatter = rules.member_formatters.get(path) if path is not None and typ is not NoneType else None
    if formatter is None:
        formatter = rules.type_formatters.get(typ)

    culture = rules.cultures.get(typ) if formatter is None else None
    max_length = rules.truncations.get(path) if path is not None else None

    if formatter is None and culture is None and max_length is None:
        return DEFAULT
    return Resolution(formatter=formatter, culture=culture, max_length=max_length)


def resolve_type(rules: PrintingRules, typ: type) -> Resolution:
    """Resolve type-level rules only, used outside of a member scope."""
    return resolve(rules, typ, path=None)
