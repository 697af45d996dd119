from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class WorkLocation:
    """Geo-fence an employee is expected to work from (stored, not enforced)."""

    employee_id: str
    name: str
    latitude: float
    longitude: float
    radius_m: float
    assigned_by: str
    assigned_at: datetime
