"""Immutable name sets used to recognize HTTP methods and header names."""

import re
from typing import Iterable, Iterator


class NameSet:
    """Insertion-ordered, read-only set of names.

    Instances are built once at import time and shared across worker threads
    without locking, so the class exposes no mutating methods.
    """

    __slots__ = ("_names",)

    def __init__(self, *values: str) -> None:
        self._names: tuple[str, ...] = tuple(dict.fromkeys(values))

    @classmethod
    def from_iterable(cls, values: Iterable[str]) -> "NameSet":
        """Build a set from any iterable of names."""
        return cls(*values)

    def contains(self, value: str) -> bool:
        """Return True when ``value`` is a member, compared case-sensitively."""
        return value in self._names

    def __contains__(self, value: object) -> bool:
        return value in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"NameSet({self.joined(', ')})"

    def joined(self, separator: str = ",") -> str:
        """Return the names joined by ``separator`` in insertion order."""
        return separator.join(self._names)

    def alternation_pattern(self, case_insensitive: bool = True) -> re.Pattern[str]:
        """Compile a pattern matching exactly one of the names.

        ``(?i)`` is applied when ``case_insensitive`` is set, so ``Get`` or
        ``gEt`` match a set holding ``GET``.
        """
        alternation = "|".join(re.escape(name) for name in self._names)
        flags = re.IGNORECASE if case_insensitive else 0
        return re.compile(f"^(?:{alternation})$", flags)
