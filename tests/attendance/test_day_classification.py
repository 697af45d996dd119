import pytest

from src.hr_console.hr_console.attendance.strategies.threshold_strategy import ThresholdClassificationStrategy
from src.hr_console.hr_console.core.enums import DayStatus


@pytest.mark.parametrize(
    "seconds, status",
    [
        (32400, DayStatus.PRESENT),
        (9 * 3600 + 1, DayStatus.PRESENT),
        (32399, DayStatus.HALF_DAY),
        (16200, DayStatus.HALF_DAY),
        (16199, DayStatus.ABSENT),
        (0, DayStatus.ABSENT),
    ],
)
def test_threshold_boundaries(seconds, status):
    assert ThresholdClassificationStrategy().classify(seconds) == status


def test_thresholds_are_configurable():
    strategy = ThresholdClassificationStrategy(present_hours=8, half_day_hours=4)
    assert strategy.classify(8 * 3600) == DayStatus.PRESENT
    assert strategy.classify(4 * 3600) == DayStatus.HALF_DAY


def test_half_day_threshold_cannot_exceed_present():
    with pytest.raises(ValueError):
        ThresholdClassificationStrategy(present_hours=4, half_day_hours=5)
