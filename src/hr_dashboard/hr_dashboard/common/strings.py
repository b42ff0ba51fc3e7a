from __future__ import annotations

from typing import Optional


def capitalize_name(value: Optional[str]) -> str:
    """Capitalize each word of a person's name: "  jane   DOE" -> "Jane Doe"."""
    if not value:
        return ""
    return " ".join(word[0].upper() + word[1:].lower() for word in value.split())
