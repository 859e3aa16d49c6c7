"""Selectors grouped by their innermost tag name."""

from __future__ import annotations

from .atoms import Atom
from .css import CSSPattern


class CSSPatternMap:
    """Maps a tag-name atom (by identity) to the patterns that end in it."""

    def __init__(self) -> None:
        self._patterns: dict[Atom, list[CSSPattern]] = {}

    def insert(self, name: Atom, patterns: list[CSSPattern]) -> None:
        self._patterns[name] = patterns

    def get(self, name: Atom | None) -> list[CSSPattern] | None:
        """Return the stored list for ``name`` (mutable in place), or None."""
        if name is None:
            return None
        return self._patterns.get(name)

    def setdefault(self, name: Atom) -> list[CSSPattern]:
        """Return the list for ``name``, storing an empty one first if absent."""
        return self._patterns.setdefault(name, [])

    def __len__(self) -> int:
        return len(self._patterns)