from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Dashboard role used to scope views."""

    ADMIN = "admin"
    HR = "hr"
    EMPLOYEE = "employee"
