"""
Coefficient vectors.

An ordered collection of ``(key, coefficient)`` pairs used for formula and
equation bookkeeping. Keys are compared by equality, so unhashable keys
(such as molecular formulas) work too.
"""

from __future__ import annotations

from typing import Generic, Iterable, Iterator, TypeVar

K = TypeVar("K")


class CoeffVec(Generic[K]):
    """Ordered, unique-keyed list of (key, integer coefficient) pairs.

    Invariants:
        - Each key appears at most once.
        - Keys keep their first-seen order.
        - No pair has coefficient 0; setting 0 removes the pair.

    Example:
        >>> v = CoeffVec([("H", 2), ("O", 1)])
        >>> (v + CoeffVec([("H", 1)])).get_coeff("H")
        3
    """

    __slots__ = ("_pairs",)

    def __init__(self, pairs: Iterable[tuple[K, int]] = ()) -> None:
        self._pairs: list[tuple[K, int]] = []
        for key, coeff in pairs:
            self.set_coeff(key, self.get_coeff(key) + coeff)

    def _index(self, key: K) -> int | None:
        for i, (existing, _) in enumerate(self._pairs):
            if existing == key:
                return i
        return None

    def get_coeff(self, key: K) -> int:
        """Coefficient for ``key``, 0 if absent."""
        i = self._index(key)
        return 0 if i is None else self._pairs[i][1]

    def set_coeff(self, key: K, coeff: int) -> None:
        """Set the coefficient for ``key``; 0 removes the pair."""
        i = self._index(key)
        if coeff == 0:
            if i is not None:
                del self._pairs[i]
            return
        if i is None:
            self._pairs.append((key, coeff))
        else:
            self._pairs[i] = (self._pairs[i][0], coeff)

    def keys(self) -> list[K]:
        return [key for key, _ in self._pairs]

    def copy(self) -> CoeffVec[K]:
        new: CoeffVec[K] = CoeffVec()
        new._pairs = list(self._pairs)
        return new

    def __iter__(self) -> Iterator[tuple[K, int]]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __contains__(self, key: object) -> bool:
        return self._index(key) is not None  # type: ignore[arg-type]

    def __iadd__(self, other: CoeffVec[K]) -> CoeffVec[K]:
        for key, coeff in other:
            self.set_coeff(key, self.get_coeff(key) + coeff)
        return self

    def __add__(self, other: CoeffVec[K]) -> CoeffVec[K]:
        result = self.copy()
        result += other
        return result

    def __imul__(self, factor: int) -> CoeffVec[K]:
        if factor == 0:
            self._pairs.clear()
            return self
        self._pairs = [(key, coeff * factor) for key, coeff in self._pairs]
        return self

    def __mul__(self, factor: int) -> CoeffVec[K]:
        result = self.copy()
        result *= factor
        return result

    __rmul__ = __mul__

    def __eq__(self, other: object) -> bool:
        """Equal when both hold the same pairs, in any order."""
        if not isinstance(other, CoeffVec):
            return NotImplemented
        if len(self) != len(other):
            return False
        return all(other.get_coeff(key) == coeff for key, coeff in self._pairs)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"CoeffVec({self._pairs!r})"
