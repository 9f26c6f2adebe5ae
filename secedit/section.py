"""Section tree produced by the section editor."""

from __future__ import annotations

from typing import Iterator, List, Optional


class Section:
    """A node of the section tree.

    ``name`` is ``None`` for the root and for anonymous wrapper nodes the
    parser inserts to keep free text between sibling sections in place. Head
    content precedes the first child, tail content follows the last child.
    Both buffers may be rewritten by edit hooks; names, marker lines and the
    child list are fixed once parsing has finished.
    """

    def __init__(
        self,
        name: Optional[str] = None,
        *,
        starting_line: Optional[str] = None,
        ending_line: Optional[str] = None,
    ) -> None:
        self.name = name
        self.starting_line = starting_line
        self.ending_line = ending_line
        self.sections: List[Section] = []
        self._head: List[str] = []
        self._tail: List[str] = []

    # Buffers are kept as chunk lists so line-by-line parsing stays linear.

    @property
    def head_content(self) -> str:
        return "".join(self._head)

    @head_content.setter
    def head_content(self, value: str) -> None:
        self._head = [value] if value else []

    @property
    def tail_content(self) -> str:
        return "".join(self._tail)

    @tail_content.setter
    def tail_content(self, value: str) -> None:
        self._tail = [value] if value else []

    def append_head(self, text: str) -> None:
        if text:
            self._head.append(text)

    def append_tail(self, text: str) -> None:
        if text:
            self._tail.append(text)

    def has_tail_content(self) -> bool:
        return bool(self._tail)

    def take_tail(self) -> str:
        """Return the tail content and clear it."""
        content = self.tail_content
        self._tail = []
        return content

    @property
    def is_anonymous(self) -> bool:
        return self.name is None

    def walk(self) -> Iterator["Section"]:
        """Yield this section and every descendant in document (pre-)order."""
        stack = [self]
        while stack:
            section = stack.pop()
            yield section
            stack.extend(reversed(section.sections))

    def find(self, name: str) -> Optional["Section"]:
        """Return the first section named ``name`` in document order, or ``None``."""
        if name is None:
            raise TypeError("name must not be None")
        for section in self.walk():
            if section.name == name:
                return section
        return None

    def __repr__(self) -> str:
        return f"Section(name={self.name!r}, sections={len(self.sections)})"


__all__ = ["Section"]
