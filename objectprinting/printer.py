"""
Object Printing Engine

Renders an arbitrary, possibly cyclic, object graph as deterministic indented text:

    Person
        name = Alex
        age = 19
        child = Person
            name = Bob
            parent = <cycle>

Every object is expanded at most once per call. An object met again anywhere later in the
same call, whether through a true cycle or through a shared reference, prints the cycle token.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import logging
from dataclasses import dataclass, replace as dataclasses_replace
from typing import Any

# Local ----------------------------------------------------------------------------------------------------------------
from .config import MemberPath, PrintingConfig, PrintingRules, PrintOptions
from .containers import ContainerKind, block_footer, block_header, container_entries, container_kind
from .formatters import default_text, fmt_type, is_final
from .members import declared_members
from .resolver import DEFAULT, Resolution, resolve, resolve_type
from .utils import class_name, to_str

logger = logging.getLogger(__name__)


# Classes --------------------------------------------------------------------------------------------------------------

class RenderBuffer:
    """Ordered text lines, each prefixed with one indentation unit per depth level."""

    def __init__(self, indent: str = "\t", newline: str = "\n") -> None:
        self.indent = indent
        self.newline = newline
        self._lines: list[str] = []

    def __len__(self) -> int:
        return len(self._lines)

    def emit(self, depth: int, text: str) -> None:
        """
        Append text at depth.

        Text spanning several lines is split on newline; continuation lines are indented
        one level deeper than the first one.
        """
        first, *rest = text.split(self.newline) if self.newline else [text]
        self._lines.append(self.indent * depth + first)
        self._lines.extend(self.indent * (depth + 1) + line for line in rest)

    def to_text(self) -> str:
        return "".join(line + self.newline for line in self._lines)


class ObjectPrinter(PrintingConfig):
    """
    Printer of object graphs with configurable overrides.

    Examples:
        >>> printer = ObjectPrinter.for_type(Person).exclude("email").set_culture(float, "de_DE")
        >>> print(printer.print_to_string(Person(name="Alex", age=19, height=185.5)))
        Person
            name = Alex
            age = 19
            height = 185,5
            child = None
            parent = None
    """

    @classmethod
    def for_type(cls, root_type: type, options: PrintOptions | None = None) -> "ObjectPrinter":
        """Create a printer whose str member names refer to members of root_type."""
        if not isinstance(root_type, type):
            raise TypeError(f"root_type must be a type, but got {fmt_type(root_type)}")
        return cls(root_type, options)

    def print_to_string(self, obj: Any) -> str:
        """
        Render obj using the current registrations.

        The printer is not modified; each call uses its own visited set and buffer.
        """
        return _Traversal(self.rules()).run(obj)


@dataclass(frozen=True, slots=True)
class _Visit:
    """Pending value to render at depth, after label on the same line."""
    value: Any
    depth: int
    label: str = ""
    resolution: Resolution = DEFAULT


@dataclass(frozen=True, slots=True)
class _Close:
    """Pending closing marker of a collection block."""
    depth: int
    text: str


class _Traversal:
    """
    Single print_to_string() call: owns the visited set and the render buffer.

    Works on an explicit stack instead of Python recursion, so arbitrarily deep graphs
    never hit the interpreter recursion limit.
    """

    def __init__(self, rules: PrintingRules) -> None:
        self.rules = rules
        self.options = rules.options
        # Visited objects are kept alive so that their ids are not reused during the call
        self.visited: dict[int, Any] = {}
        self.buffer = RenderBuffer(indent=self.options.indent, newline=self.options.newline)

    def run(self, root: Any) -> str:
        logger.debug("Printing %s", class_name(root))
        resolution = resolve_type(self.rules, type(root))
        if resolution.excluded:
            return ""

        stack: list[_Visit | _Close] = [_Visit(root, 0, "", resolution)]
        while stack:
            item = stack.pop()
            if isinstance(item, _Close):
                self.buffer.emit(item.depth, item.text)
                continue
            stack.extend(reversed(self._visit(item)))

        logger.debug("Printed %s: %d lines, %d objects expanded", class_name(root), len(self.buffer),
                     len(self.visited))
        return self.buffer.to_text()

    def _visit(self, item: _Visit) -> list[_Visit | _Close]:
        """Emit the line of item and return its pending children in output order."""
        obj, depth, res = item.value, item.depth, item.resolution
        opt = self.options

        def emit(text: str) -> None:
            self.buffer.emit(depth, item.label + text)

        if res.has_override:
            text = res.render(obj)
            # Formatter output may carry its own line terminator
            if opt.newline and text.endswith(opt.newline):
                text = text[:-len(opt.newline)]
            emit(res.clip(text, opt.ellipsis))
            return []
        if obj is None:
            emit(opt.null_token)
            return []
        if is_final(obj, opt.final_types):
            emit(res.clip(default_text(obj), opt.ellipsis))
            return []

        kind = container_kind(obj)
        type_name = class_name(obj, fully_qualified=opt.fully_qualified_names)

        # Empty collections have nothing to expand and are not tracked
        if kind is not None and len(obj) == 0:
            emit(block_header(kind, type_name, empty=True))
            return []

        if id(obj) in self.visited:
            logger.debug("Already visited %s at depth %d", type_name, depth)
            emit(opt.cycle_token)
            return []
        self.visited[id(obj)] = obj

        if kind is None:
            emit(type_name)
            return self._member_items(obj, depth + 1)

        emit(block_header(kind, type_name))
        children = self._entry_items(container_entries(obj, kind), kind, depth + 1)
        return children + [_Close(depth, block_footer(kind))]

    def _member_items(self, obj: Any, depth: int) -> list[_Visit]:
        opt = self.options
        owner = type(obj)
        items = []
        for name, value in declared_members(obj,
                                            include_private=opt.include_private,
                                            include_properties=opt.include_properties,
                                            on_error=opt.on_error):
            res = resolve(self.rules, type(value), MemberPath(owner, name))
            if res.excluded:
                continue
            items.append(_Visit(value, depth, f"{name} = ", res))
        return items

    def _entry_items(self, entries: list[Any], kind: ContainerKind, depth: int) -> list[_Visit]:
        items = []
        if kind is ContainerKind.MAPPING:
            for key, value in entries:
                res = resolve_type(self.rules, type(value))
                if res.excluded or resolve_type(self.rules, type(key)).excluded:
                    continue
                items.append(_Visit(value, depth, f"{self._inline(key)}: ", res))
        else:
            for element in entries:
                res = resolve_type(self.rules, type(element))
                if res.excluded:
                    continue
                items.append(_Visit(element, depth, "", res))
        return items

    def _inline(self, key: Any) -> str:
        """Single-line text of a mapping key, type-level overrides applied."""
        opt = self.options
        res = resolve_type(self.rules, type(key))
        if res.has_override:
            return res.render(key)
        if key is None:
            return opt.null_token
        if is_final(key, opt.final_types):
            return default_text(key)
        return to_str(key, fully_qualified=opt.fully_qualified_names)


# Methods --------------------------------------------------------------------------------------------------------------

def print_to_string(obj: Any, *,
                    printer: PrintingConfig | None = None,
                    options: PrintOptions | None = None) -> str:
    """
    Render an object graph as indented text.

    Simple entry point around ObjectPrinter with default registrations.

    Args:
        obj: Object to print.
        printer: Printer or config with registered overrides; a fresh ObjectPrinter
                 for type(obj) is used if None.
        options: PrintOptions overriding the options of printer for this call only.

    Returns:
        Rendered text, every line terminated with options.newline.

    Raises:
        TypeError: If printer or options have unsupported types.

    Examples:
        >>> print_to_string([1, 2, 3])
        'list [\\n\\t1\\n\\t2\\n\\t3\\n]\\n'
        >>> print_to_string({"a": 1}, options=PrintOptions(indent="  "))
        'dict {\\n  a: 1\\n}\\n'
    """
    if not isinstance(printer, (PrintingConfig, type(None))):
        raise TypeError(f"printer must be a PrintingConfig instance, but got {fmt_type(printer)}")
    if not isinstance(options, (PrintOptions, type(None))):
        raise TypeError(f"options must be a PrintOptions instance, but got {fmt_type(options)}")

    printer = printer or ObjectPrinter(type(obj))
    rules = printer.rules()
    if options is not None:
        rules = dataclasses_replace(rules, options=options)
    return _Traversal(rules).run(obj)
