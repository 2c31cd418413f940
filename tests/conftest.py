#
# Pytest Fixtures
#

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Any, Callable

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest


# Models ---------------------------------------------------------------------------------------------------------------

@dataclass(eq=False)
class Person:
    name: str
    age: int
    email: str | None = None
    height: float = 0.0
    child: "Person | None" = None
    parent: "Person | None" = None


class Node:
    """Singly linked node, used to build arbitrarily deep chains."""

    def __init__(self, value: Any, next: "Node | None" = None):
        self.value = value
        self.next = next


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def person() -> Person:
    """Person without relatives."""
    return Person(name="Alex", age=19, email="alex@gmail.com", height=185.5)


@pytest.fixture
def family() -> Person:
    """Parent whose child points back to the parent, forming a cycle."""
    parent = Person(name="Alex", age=41, email="alex@gmail.com", height=185.5)
    child = Person(name="Bob", age=12, email=None, height=150.0, parent=parent)
    parent.child = child
    return parent


@pytest.fixture
def make_chain() -> Callable[[int], Node]:
    """Factory of linked Node chains: make_chain(n) returns the head of n nodes valued 0..n-1."""

    def _make_chain(n: int) -> Node:
        head = None
        for value in reversed(range(n)):
            head = Node(value, head)
        return head

    return _make_chain
