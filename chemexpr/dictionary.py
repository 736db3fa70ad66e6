"""
Symbol table mapping names to values.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Iterator

from chemexpr.elements import PeriodicTable
from chemexpr.exceptions import UndefinedIdentifierError
from chemexpr.values import DataType, Value

logger = logging.getLogger(__name__)


class Dictionary:
    """Name -> Value mapping shared across the inputs of a session.

    Reads return copies and take no lock. Writes (``set``, ``remove``,
    ``load_elements``) hold an exclusive lock while they run.

    Example:
        >>> d = Dictionary()
        >>> d.set("n", Value.integer(3))
        >>> d.get("n").payload
        3
    """

    __slots__ = ("_values", "_write_lock")

    def __init__(self) -> None:
        self._values: dict[str, Value] = {}
        self._write_lock = threading.Lock()

    def get(self, name: str) -> Value:
        """Return a copy of the value bound to ``name``.

        Raises:
            UndefinedIdentifierError: If ``name`` is not bound.
        """
        try:
            value = self._values[name]
        except KeyError:
            raise UndefinedIdentifierError(name) from None
        return value.copy()

    def get_as(self, name: str, expected: DataType) -> Any:
        """Look up ``name`` and unwrap it as ``expected``.

        Raises:
            UndefinedIdentifierError: If ``name`` is not bound.
            BadTypeError: If the bound value has another type.
        """
        return self.get(name).as_type(expected)

    def set(self, name: str, value: Value) -> None:
        """Bind ``name`` to ``value``, replacing any previous binding."""
        with self._write_lock:
            self._values[name] = value.copy()
        logger.debug("Bound %r to %s", name, value.type)

    def remove(self, name: str) -> Value | None:
        """Unbind ``name`` and return its old value, or None if it was unbound."""
        with self._write_lock:
            return self._values.pop(name, None)

    def load_elements(self, table: PeriodicTable) -> None:
        """Bind every element symbol of ``table`` to its element reference."""
        with self._write_lock:
            for element in table:
                self._values[element.symbol] = Value.element(element)
        logger.debug("Loaded %d elements", len(table))

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._values))
