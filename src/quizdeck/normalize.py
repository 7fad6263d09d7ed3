"""
Text canonicalization for case- and space-insensitive comparison.
"""

from __future__ import annotations

import re
from typing import Any

_WHITESPACE = re.compile(r"\s+")


def normalize(text: Any) -> str:
    """Trim, collapse interior whitespace and lowercase. ``None`` becomes ``""``."""
    if text is None:
        return ""
    return _WHITESPACE.sub(" ", str(text).strip()).lower()
