"""
Object Printing Configuration

Holds printing options and the override store: exclusions, type-wide and member-wide
formatters, numeric cultures and truncation rules.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import logging
from dataclasses import dataclass, field, replace as dataclasses_replace
from typing import Any, Literal

# Third-party ----------------------------------------------------------------------------------------------------------
from frozendict import frozendict

# Local ----------------------------------------------------------------------------------------------------------------
from .formatters import Culture, Formatter, as_culture, fmt_type, fmt_value, is_culture_type
from .utils import class_name

logger = logging.getLogger(__name__)


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class MemberPath:
    """
    Declared member identified by its owner type and member name.

    Member paths are matched by exact owner type, so every object of the owner type
    shares the same override for the member, wherever it is reached in the graph.

    Attributes:
        owner: Type declaring the member.
        name: Member name.
    """
    owner: type
    name: str

    def __post_init__(self):
        if not isinstance(self.owner, type):
            raise TypeError(f"MemberPath.owner must be a type, but got {fmt_type(self.owner)}")
        if not isinstance(self.name, str):
            raise TypeError(f"MemberPath.name must be str, but got {fmt_type(self.name)}")
        if not self.name:
            raise ValueError("MemberPath.name must be a non-empty str")

    def __str__(self) -> str:
        return f"{class_name(self.owner)}.{self.name}"


@dataclass(frozen=True)
class PrintOptions:
    """
    Layout and traversal options for object printing.

    Attributes:
        indent: Indentation unit added once per nesting level.
        newline: Line terminator appended to every emitted line.
        null_token: Text printed for None values.
        cycle_token: Text printed instead of an object already visited in the current call.
        ellipsis: Marker appended to truncated text, empty by default.
        include_private: Include members starting with a single underscore.
        include_properties: Include values of properties after data members.
        fully_qualified_names: Print module.Class instead of Class for user types.
        final_types: Extra types printed via str() instead of being expanded into members.
        on_error: Behavior when reading a member raises - 'raise', 'warn' or 'skip'.

    Examples:
        >>> opts = PrintOptions(indent="    ", null_token="null")
        >>> PrintOptions.debug().include_private
        True
        >>> PrintOptions().merge(cycle_token="<loop>").cycle_token
        '<loop>'
    """
    indent: str = "\t"
    newline: str = "\n"
    null_token: str = "None"
    cycle_token: str = "<cycle>"
    ellipsis: str = ""

    include_private: bool = False
    include_properties: bool = False
    fully_qualified_names: bool = False

    final_types: tuple[type, ...] = ()
    on_error: Literal["raise", "warn", "skip"] = "raise"

    def __post_init__(self):
        """Validate fields"""
        for name in ("indent", "newline", "null_token", "cycle_token", "ellipsis"):
            val = getattr(self, name)
            if not isinstance(val, str):
                raise TypeError(f"PrintOptions.{name} must be str, but got {fmt_type(val)}")

        if not isinstance(self.final_types, tuple) or not all(isinstance(t, type) for t in self.final_types):
            raise TypeError(f"PrintOptions.final_types must be a tuple of types, but got {fmt_value(self.final_types)}")

        if self.on_error not in ("raise", "warn", "skip"):
            raise ValueError(f"on_error expected one of 'raise', 'warn', 'skip' "
                             f"but found {fmt_value(self.on_error)}")

    @classmethod
    def debug(cls) -> "PrintOptions":
        """Options for interactive debugging: private members and properties, warn on broken getters."""
        return cls(include_private=True, include_properties=True, on_error="warn")

    @classmethod
    def compact(cls) -> "PrintOptions":
        """Options with two-space indentation."""
        return cls(indent="  ")

    def merge(self, **kwargs) -> "PrintOptions":
        """Return a copy with the given fields replaced."""
        return dataclasses_replace(self, **kwargs)


@dataclass(frozen=True)
class PrintingRules:
    """
    Immutable snapshot of the override store consumed by a single traversal.

    Attributes:
        excluded_types: Types whose values are never printed.
        excluded_members: Members which are never printed.
        type_formatters: Formatters applied to values of an exact type.
        member_formatters: Formatters applied to a member, precede type formatters.
        cultures: Numeric cultures applied to values of an exact numeric type.
        truncations: Maximum text length of a member.
        options: Layout and traversal options.
    """
    excluded_types: frozenset[type] = frozenset()
    excluded_members: frozenset[MemberPath] = frozenset()
    type_formatters: frozendict = field(default_factory=frozendict)
    member_formatters: frozendict = field(default_factory=frozendict)
    cultures: frozendict = field(default_factory=frozendict)
    truncations: frozendict = field(default_factory=frozendict)
    options: PrintOptions = field(default_factory=PrintOptions)


class PrintingConfig:
    """
    Override store for object printing.

    Registrations are additive; a later registration for the same key replaces the earlier
    one. Member names given as str are relative to root_type; members of other types are
    addressed with an explicit MemberPath. Every setter returns self to allow chaining.

    A traversal never reads this mutable store directly, it uses the frozen PrintingRules
    returned by rules(), which is cached until the next registration.

    Examples:
        >>> config = (
        ...     PrintingConfig(Person)
        ...     .exclude(str)
        ...     .set_formatter(int, lambda n: format(n, "b"))
        ...     .set_formatter("height", lambda h: f"{h} cm")
        ...     .set_culture(float, "de_DE")
        ...     .set_truncation("name", 20)
        ... )
        >>> config.rules().excluded_types
        frozenset({<class 'str'>})
    """

    def __init__(self, root_type: type | None = None, options: PrintOptions | None = None) -> None:
        if not isinstance(root_type, (type, type(None))):
            raise TypeError(f"root_type must be a type or None, but got {fmt_type(root_type)}")
        if not isinstance(options, (PrintOptions, type(None))):
            raise TypeError(f"options must be a PrintOptions instance, but got {fmt_type(options)}")

        self._root_type = root_type
        self._options = options or PrintOptions()

        self._excluded_types: set[type] = set()
        self._excluded_members: set[MemberPath] = set()
        self._type_formatters: dict[type, Formatter] = {}
        self._member_formatters: dict[MemberPath, Formatter] = {}
        self._cultures: dict[type, Culture] = {}
        self._truncations: dict[MemberPath, int] = {}

        self._rules: PrintingRules | None = None

    # Properties ---------------------------------------

    @property
    def root_type(self) -> type | None:
        """Type whose member names are used for str member paths."""
        return self._root_type

    @property
    def options(self) -> PrintOptions:
        return self._options

    @options.setter
    def options(self, value: PrintOptions) -> None:
        if not isinstance(value, PrintOptions):
            raise TypeError(f"options must be a PrintOptions instance, but got {fmt_type(value)}")
        self._options = value
        self._rules = None

    # Registration -------------------------------------

    def exclude(self, target: "type | str | MemberPath") -> "PrintingConfig":
        """
        Exclude all values of a type, or a single member, from the output.

        Args:
            target: A type, a member name of root_type, or a MemberPath.

        Returns:
            Self, to allow chaining.

        Raises:
            TypeError: If target has an unsupported type.
            ValueError: If target is a member name and no root_type is set.
        """
        if isinstance(target, type):
            self._excluded_types.add(target)
        else:
            self._excluded_members.add(self._member_path(target))
        self._rules = None
        return self

    def set_formatter(self, target: "type | str | MemberPath", formatter: Formatter) -> "PrintingConfig":
        """
        Register a value -> text formatter for a type or for a single member.

        A type formatter applies to values of exactly that type (no subclasses).
        A member formatter takes precedence over any type formatter.

        Args:
            target: A type, a member name of root_type, or a MemberPath.
            formatter: Callable receiving the value and returning str.

        Returns:
            Self, to allow chaining.

        Raises:
            TypeError: If target has an unsupported type or formatter is not callable.
            ValueError: If target is a member name and no root_type is set.
        """
        if not callable(formatter):
            raise TypeError(f"formatter must be callable, but got {fmt_type(formatter)}")

        if isinstance(target, type):
            self._log_replacement("formatter", target, self._type_formatters)
            self._type_formatters[target] = formatter
        else:
            path = self._member_path(target)
            self._log_replacement("formatter", path, self._member_formatters)
            self._member_formatters[path] = formatter
        self._rules = None
        return self

    def set_culture(self, typ: type, culture: Any) -> "PrintingConfig":
        """
        Register a numeric culture for all values of a numeric type.

        Args:
            typ: Numeric type - int, float or Decimal (or their subclasses, bool excluded).
            culture: Locale identifier like 'de_DE' or 'en-US', a babel Locale, or a Culture.

        Returns:
            Self, to allow chaining.

        Raises:
            TypeError: If typ is not a numeric type or culture has an unsupported type.
            ValueError: If culture is an unknown locale identifier.
        """
        if not is_culture_type(typ):
            raise TypeError(f"culture override requires a numeric type (int, float, Decimal), "
                            f"but got {fmt_type(typ) if isinstance(typ, type) else fmt_value(typ)}")
        culture = as_culture(culture)
        self._log_replacement("culture", typ, self._cultures)
        self._cultures[typ] = culture
        self._rules = None
        return self

    def set_truncation(self, target: "str | MemberPath", max_length: int) -> "PrintingConfig":
        """
        Limit the printed text of a member to max_length characters.

        Args:
            target: A member name of root_type, or a MemberPath.
            max_length: Maximum number of characters, >= 0.

        Returns:
            Self, to allow chaining.

        Raises:
            TypeError: If target or max_length has an unsupported type.
            ValueError: If max_length is negative, or target is a member name and no root_type is set.
        """
        if isinstance(max_length, bool) or not isinstance(max_length, int):
            raise TypeError(f"max_length must be int, but got {fmt_type(max_length)}")
        if max_length < 0:
            raise ValueError(f"max_length must be >= 0, but got {fmt_value(max_length)}")

        path = self._member_path(target)
        self._log_replacement("truncation", path, self._truncations)
        self._truncations[path] = max_length
        self._rules = None
        return self

    # Snapshot -----------------------------------------

    def rules(self) -> PrintingRules:
        """Return the frozen snapshot of the current registrations."""
        if self._rules is None:
            self._rules = PrintingRules(
                excluded_types=frozenset(self._excluded_types),
                excluded_members=frozenset(self._excluded_members),
                type_formatters=frozendict(self._type_formatters),
                member_formatters=frozendict(self._member_formatters),
                cultures=frozendict(self._cultures),
                truncations=frozendict(self._truncations),
                options=self._options,
            )
        return self._rules

    # Private ------------------------------------------

    def _member_path(self, target: Any) -> MemberPath:
        if isinstance(target, MemberPath):
            return target
        if isinstance(target, str):
            if self._root_type is None:
                raise ValueError(f"member {fmt_value(target)} requires a root type, "
                                 f"create the config with a root_type or pass a MemberPath")
            return MemberPath(self._root_type, target)
        raise TypeError(f"target must be a type, a member name or a MemberPath, but got {fmt_type(target)}")

    @staticmethod
    def _log_replacement(kind: str, key: Any, registry: dict) -> None:
        if key in registry:
            logger.debug("Replacing %s registered for %s", kind, key)
