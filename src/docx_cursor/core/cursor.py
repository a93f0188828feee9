"""
Shared forward-cursor behaviour for every level of the content tree.
"""

from __future__ import annotations

from enum import Enum
from typing import ClassVar, Iterator, Optional, Type, TypeVar

from lxml import etree

from ..errors import StructuralViolation


C = TypeVar("C", bound="SequenceCursor")


class CursorState(Enum):
    """Where a cursor stands in its sibling sequence."""
    UNPOSITIONED = "unpositioned"
    POSITIONED = "positioned"
    EXHAUSTED = "exhausted"


class SequenceCursor:
    """
    Forward cursor over the children of one kind beneath a parent element.

    A cursor holds the parent element and the element it currently denotes.
    Both are lxml elements, which keep their identity while the tree is
    edited, so inserting siblings never invalidates another live cursor.

    Subclasses set ``tag`` to the qualified name of the elements they walk.
    """

    tag: ClassVar[str] = ""

    def __init__(self, parent: Optional[etree._Element] = None, current: Optional[etree._Element] = None):
        if current is not None:
            if parent is None or current.getparent() is not parent:
                raise StructuralViolation(
                    f"{type(self).__name__} element is not a child of the given parent"
                )
            if current.tag != self.tag:
                raise StructuralViolation(
                    f"{type(self).__name__} cannot denote a {etree.QName(current).localname} element"
                )

        self._parent = parent
        self._current = current

        if parent is None:
            self._state = CursorState.UNPOSITIONED
        elif current is None:
            self._state = CursorState.EXHAUSTED
        else:
            self._state = CursorState.POSITIONED

    @classmethod
    def first_in(cls: Type[C], parent: Optional[etree._Element]) -> C:
        """Cursor over the first child of this kind, exhausted when there is none."""
        if parent is None:
            return cls()
        first = next(parent.iterchildren(cls.tag), None)
        return cls(parent, first)

    @property
    def state(self) -> CursorState:
        return self._state

    @property
    def parent(self) -> Optional[etree._Element]:
        return self._parent

    @property
    def element(self) -> Optional[etree._Element]:
        """The element currently denoted, or None."""
        return self._current

    @property
    def is_positioned(self) -> bool:
        return self._state is CursorState.POSITIONED

    @property
    def exhausted(self) -> bool:
        return self._state is CursorState.EXHAUSTED

    def _next_sibling(self, node: etree._Element) -> Optional[etree._Element]:
        return next(node.itersiblings(self.tag), None)

    def has_next(self) -> bool:
        """True when another element of this kind follows the current one."""
        if self._current is None:
            return False
        return self._next_sibling(self._current) is not None

    def advance(self: C) -> C:
        """
        Move to the next sibling of this kind.

        Past the last sibling the cursor becomes exhausted; advancing an
        exhausted or unpositioned cursor does nothing.
        """
        if self._current is None:
            return self

        self._current = self._next_sibling(self._current)
        if self._current is None:
            self._state = CursorState.EXHAUSTED
        return self

    def count(self) -> int:
        """Number of elements from the current one to the end, inclusive."""
        return sum(1 for _ in self)

    def __iter__(self: C) -> Iterator[C]:
        """
        Yield a positioned cursor for the current element and each one after it.

        The following sibling is looked up only after the consumer is done
        with the current one, so elements inserted after it during the loop
        are visited too. The cursor itself does not move.
        """
        node = self._current
        while node is not None:
            yield type(self)(self._parent, node)
            node = self._next_sibling(node)

    def __bool__(self) -> bool:
        return self.is_positioned

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._state.value}>"
