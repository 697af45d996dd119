from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Identity:
    """Authenticated identity handed over by the auth provider (opaque to us)."""

    uid: str
    email: str
    display_name: str = ""
    role: Role = Role.EMPLOYEE


@dataclass(frozen=True)
class Employee:
    """Domain entity: employee profile, keyed by the identity uid."""

    employee_id: str
    name: str
    email: str
    phone: Optional[str] = None
    department: Optional[str] = None
    joining_date: Optional[date] = None
    role: Role = Role.EMPLOYEE
