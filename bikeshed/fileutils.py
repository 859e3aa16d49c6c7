"""Small file helpers."""

from __future__ import annotations

import os


def read_entire_file(path: str | os.PathLike[str]) -> str:
    """Read a whole file as text; raises OSError if it cannot be read."""
    with open(path, "rb") as f:
        data = f.read()
    return data.decode("utf-8", errors="replace")


def remove_carriage_return(content: str) -> str:
    """Return ``content`` with every carriage return removed."""
    return content.replace("\r", "")