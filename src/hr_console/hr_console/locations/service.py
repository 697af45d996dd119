from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty, require_range
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..employees.model import Identity
from ..employees.repository import EmployeeRepository
from .model import WorkLocation
from .repository import WorkLocationRepository

logger = logging.getLogger(__name__)


class WorkLocationService:
    def __init__(
        self,
        locations: WorkLocationRepository,
        employees: EmployeeRepository,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._locations = locations
        self._employees = employees
        self._clock = clock

    def assign(
        self,
        employee_id: str,
        *,
        name: str,
        latitude: float,
        longitude: float,
        radius_m: float,
        assigned_by: Identity,
    ) -> WorkLocation:
        if assigned_by.role != Role.ADMIN:
            raise AuthorizationError("Only HR can assign work locations")
        if not self._employees.get_by_id(employee_id):
            raise NotFoundError("Employee not found")

        radius = require_range(radius_m, "Radius", 0, float("inf"))
        if radius == 0:
            raise ValidationError("Radius must be greater than 0")

        location = WorkLocation(
            employee_id=employee_id,
            name=require_non_empty(name, "Location name"),
            latitude=require_range(latitude, "Latitude", -90, 90),
            longitude=require_range(longitude, "Longitude", -180, 180),
            radius_m=radius,
            assigned_by=assigned_by.uid,
            assigned_at=self._clock(),
        )
        self._locations.save(location)
        logger.info("Work location %r assigned to %s", location.name, employee_id)
        return location

    def get_assignment(self, employee_id: str) -> Optional[WorkLocation]:
        return self._locations.get(employee_id)

    def list_assignments(self) -> list[WorkLocation]:
        return list(self._locations.list_all())
