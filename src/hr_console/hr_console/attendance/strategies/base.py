from __future__ import annotations

from abc import ABC, abstractmethod

from ...core.enums import DayStatus


class DayClassificationStrategy(ABC):
    """Strategy Pattern: decide the status of a day from its worked seconds."""

    @abstractmethod
    def classify(self, seconds: float) -> DayStatus:
        raise NotImplementedError
