"""Interned strings ("atoms") and collections keyed by atom identity."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, eq=False)
class Atom:
    """An interned string; two atoms are equal only if they are the same object."""

    data: str

    def __len__(self) -> int:
        return len(self.data)

    def __str__(self) -> str:
        return self.data


class AtomTable:
    """Maps string contents to their unique :class:`Atom`."""

    def __init__(self) -> None:
        self._atoms: dict[str, Atom] = {}

    def get(self, data: str) -> Atom | None:
        """Return the atom interned for ``data``, or None."""
        return self._atoms.get(data)

    def insert(self, atom: Atom) -> None:
        """Register ``atom``; an atom with the same contents is replaced."""
        self._atoms[atom.data] = atom

    def intern(self, data: str) -> Atom:
        """Return the atom for ``data``, creating and registering it if needed."""
        atom = self._atoms.get(data)
        if atom is None:
            atom = Atom(data)
            self._atoms[data] = atom
        return atom

    def __len__(self) -> int:
        return len(self._atoms)

    def __contains__(self, data: object) -> bool:
        return data in self._atoms


class AtomSet:
    """A set of atoms compared by identity."""

    def __init__(self) -> None:
        self._atoms: set[Atom] = set()

    def add(self, atom: Atom) -> None:
        self._atoms.add(atom)

    def __contains__(self, atom: object) -> bool:
        return atom in self._atoms

    def __len__(self) -> int:
        return len(self._atoms)