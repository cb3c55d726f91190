from datetime import datetime

import pytest

from src.campus_attendance.campus_attendance.attendance.window import OperatingWindow
from src.campus_attendance.campus_attendance.core.exceptions import OutsideOperatingWindow, ValidationError


def _at(hour, minute=0, second=0):
    return datetime(2026, 2, 2, hour, minute, second)


def test_daytime_window_is_inclusive():
    window = OperatingWindow.from_strings("08:00", "18:00")

    assert window.contains(_at(8, 0))
    assert window.contains(_at(18, 0, 59))
    assert not window.contains(_at(7, 59, 59))
    assert not window.contains(_at(18, 1))


def test_overnight_window_wraps():
    window = OperatingWindow.from_strings("22:00", "02:00")

    assert window.contains(_at(23, 30))
    assert window.contains(_at(1, 0))
    assert not window.contains(_at(12, 0))


def test_require_open_raises():
    window = OperatingWindow.from_strings("08:00", "09:00")
    with pytest.raises(OutsideOperatingWindow):
        window.require_open(_at(10, 0))


def test_empty_settings_disable_window():
    assert OperatingWindow.from_strings("", "") is None
    assert OperatingWindow.from_strings(None, None) is None


@pytest.mark.parametrize("open_at,close_at", [("08:00", ""), ("8am", "18:00"), ("25:00", "18:00")])
def test_bad_settings_rejected(open_at, close_at):
    with pytest.raises(ValidationError):
        OperatingWindow.from_strings(open_at, close_at)
