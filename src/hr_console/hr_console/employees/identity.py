from __future__ import annotations

import threading
import uuid
from typing import Optional, Protocol

from werkzeug.security import generate_password_hash

from ..core.enums import Role
from ..core.exceptions import ValidationError
from .model import Identity


class IdentityProvider(Protocol):
    """Auth collaborator: owns credentials, hands out uids."""

    def create_identity(self, *, email: str, password: str, display_name: str, role: Role) -> Identity:
        raise NotImplementedError

    def delete_identity(self, uid: str) -> bool:
        raise NotImplementedError

    def get_identity(self, uid: str) -> Optional[Identity]:
        raise NotImplementedError


class InMemoryIdentityProvider(IdentityProvider):
    """Local stand-in for the hosted auth service (development and tests)."""

    def __init__(self):
        self._identities: dict[str, Identity] = {}
        self._password_hashes: dict[str, str] = {}
        self._lock = threading.Lock()

    def create_identity(self, *, email: str, password: str, display_name: str, role: Role = Role.EMPLOYEE) -> Identity:
        with self._lock:
            if any(i.email.lower() == email.lower() for i in self._identities.values()):
                raise ValidationError("Email is already registered")
            identity = Identity(uid=uuid.uuid4().hex, email=email, display_name=display_name, role=role)
            self._identities[identity.uid] = identity
            self._password_hashes[identity.uid] = generate_password_hash(password)
        return identity

    def delete_identity(self, uid: str) -> bool:
        with self._lock:
            self._password_hashes.pop(uid, None)
            return self._identities.pop(uid, None) is not None

    def get_identity(self, uid: str) -> Optional[Identity]:
        return self._identities.get(uid)
