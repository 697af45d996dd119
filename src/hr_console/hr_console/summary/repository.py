from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from .model import MonthlySummary


class SummaryRepository(Protocol):
    def get(self, employee_id: str, year_month: str) -> Optional[MonthlySummary]:
        raise NotImplementedError

    def replace(self, summary: MonthlySummary) -> int:
        """Full overwrite; returns the new version."""

        raise NotImplementedError

    def patch(
        self,
        employee_id: str,
        year_month: str,
        fields: Mapping[str, Any],
        *,
        expected_version: int,
    ) -> int:
        """Merge-write of `fields` only if the stored version still matches."""

        raise NotImplementedError
