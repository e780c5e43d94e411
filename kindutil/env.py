"""Environment helpers."""

from __future__ import annotations

import os


def is_terminal(w: object) -> bool:
    """Return True if the writer ``w`` is a file attached to a terminal."""
    fileno = getattr(w, "fileno", None)
    if fileno is None:
        return False
    try:
        return os.isatty(fileno())
    except (OSError, ValueError):
        return False