from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import WorkLocation


class WorkLocationRepository(Protocol):
    def get(self, employee_id: str) -> Optional[WorkLocation]:
        raise NotImplementedError

    def save(self, location: WorkLocation) -> None:
        raise NotImplementedError

    def list_all(self) -> Sequence[WorkLocation]:
        raise NotImplementedError

    def delete(self, employee_id: str) -> bool:
        raise NotImplementedError
