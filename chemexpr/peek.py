"""Lookahead buffer over any iterator."""

from __future__ import annotations

from collections import deque
from typing import Callable, Generic, Iterable, Iterator, TypeVar

T = TypeVar("T")


class PeekBuffer(Generic[T]):
    """Iterator wrapper with multi-item peek and putback.

    Items are always returned in source order. The internal buffer only
    grows as far as the deepest ``peek`` requested.

    Example:
        >>> buf = PeekBuffer("abc")
        >>> buf.peek(1)
        'b'
        >>> next(buf)
        'a'
    """

    __slots__ = ("_source", "_buffer")

    def __init__(self, source: Iterable[T]) -> None:
        self._source: Iterator[T] = iter(source)
        self._buffer: deque[T] = deque()

    def __iter__(self) -> PeekBuffer[T]:
        return self

    def __next__(self) -> T:
        if self._buffer:
            return self._buffer.popleft()
        return next(self._source)

    def _fill(self, count: int) -> bool:
        """Try to hold at least ``count`` items; False if the source ran dry."""
        while len(self._buffer) < count:
            try:
                self._buffer.append(next(self._source))
            except StopIteration:
                return False
        return True

    def peek(self, offset: int = 0) -> T | None:
        """Look at the item ``offset`` places ahead without consuming it.

        Args:
            offset: Items ahead to look (default 0 = next item).

        Returns:
            The item, or None if the source ends first.
        """
        if offset < 0:
            raise ValueError(f"peek offset must be non-negative, got {offset}")
        if not self._fill(offset + 1):
            return None
        return self._buffer[offset]

    def next(self) -> T | None:
        """Consume and return the next item, or None at the end."""
        try:
            return next(self)
        except StopIteration:
            return None

    def push_front(self, item: T) -> None:
        """Put an item back so it is returned by the next ``next``."""
        self._buffer.appendleft(item)

    def next_if(self, predicate: Callable[[T], bool]) -> T | None:
        """Consume the next item only if it satisfies ``predicate``."""
        item = self.peek()
        if item is None or not predicate(item):
            return None
        return self.next()

    def read_while(self, predicate: Callable[[T], bool]) -> list[T]:
        """Consume items while ``predicate`` holds and return them."""
        items: list[T] = []
        item = self.next_if(predicate)
        while item is not None:
            items.append(item)
            item = self.next_if(predicate)
        return items

    def is_eof(self) -> bool:
        """Check if no items remain."""
        return self.peek() is None
