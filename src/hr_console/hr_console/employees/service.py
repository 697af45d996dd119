from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..locations.repository import WorkLocationRepository
from ..payroll.repository import SalaryRepository
from .identity import IdentityProvider
from .model import Employee, Identity
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class EmployeeService:
    """Use case: provision and manage employees (HR).

    Creation is two explicit steps: the identity first, then the profile keyed
    by its uid. A failed profile write removes the identity again.
    Deleting an employee also removes their salary profile and work location;
    generated payslips are kept as payroll history.
    """

    def __init__(
        self,
        employees: EmployeeRepository,
        identities: IdentityProvider,
        *,
        salaries: Optional[SalaryRepository] = None,
        locations: Optional[WorkLocationRepository] = None,
    ):
        self._employees = employees
        self._identities = identities
        self._salaries = salaries
        self._locations = locations

    def create_employee(
        self,
        *,
        current: Identity,
        name: str,
        email: str,
        password: str,
        phone: Optional[str] = None,
        department: Optional[str] = None,
        joining_date: Optional[date] = None,
        role: Role = Role.EMPLOYEE,
    ) -> Employee:
        if current.role != Role.ADMIN:
            raise AuthorizationError("Only HR can create employees")
        name = require_non_empty(name, "Name")
        email = require_non_empty(email, "Email").lower()
        if "@" not in email:
            raise ValidationError("Email is not valid")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._employees.get_by_email(email):
            raise ValidationError("An employee with this email already exists")

        identity = self._identities.create_identity(email=email, password=password, display_name=name, role=role)
        employee = Employee(
            employee_id=identity.uid,
            name=name,
            email=email,
            phone=(phone or "").strip() or None,
            department=(department or "").strip() or None,
            joining_date=joining_date,
            role=role,
        )
        try:
            if not self._employees.create(employee):
                raise ValidationError("Employee profile already exists")
        except Exception:
            logger.error("Profile write for %s failed, removing identity %s", email, identity.uid)
            self._identities.delete_identity(identity.uid)
            raise

        logger.info("Employee %s created (%s)", identity.uid, email)
        return employee

    def get_employee(self, employee_id: str) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def list_employees(self) -> list[Employee]:
        return sorted(self._employees.list_all(), key=lambda e: e.name.lower())

    def delete_employee(self, *, current: Identity, employee_id: str) -> None:
        if current.role != Role.ADMIN:
            raise AuthorizationError("Only HR can delete employees")
        if current.uid == employee_id:
            raise ValidationError("You cannot delete your own account")

        if not self._employees.delete_by_id(employee_id):
            raise NotFoundError("Employee not found")
        self._identities.delete_identity(employee_id)
        if self._salaries is not None and self._salaries.delete_profile(employee_id):
            logger.info("Removed salary profile of %s", employee_id)
        if self._locations is not None and self._locations.delete(employee_id):
            logger.info("Removed work location of %s", employee_id)
        logger.info("Employee %s deleted", employee_id)
