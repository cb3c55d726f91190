from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
from typing import Optional

from ..common.datetime_utils import parse_hhmm
from ..core.exceptions import OutsideOperatingWindow, ValidationError


@dataclass(frozen=True)
class OperatingWindow:
    """Daily wall-clock range in which check-ins are accepted.

    Both ends are inclusive. When ``open_at`` is later than ``close_at`` the
    window wraps past midnight (e.g. 22:00-02:00).
    """

    open_at: time
    close_at: time

    @classmethod
    def from_strings(cls, open_at: Optional[str], close_at: Optional[str]) -> Optional["OperatingWindow"]:
        if not open_at and not close_at:
            return None
        if not open_at or not close_at:
            raise ValidationError("Both window open and close times are required")
        try:
            return cls(open_at=parse_hhmm(open_at), close_at=parse_hhmm(close_at))
        except ValueError:
            raise ValidationError(f"Invalid operating window {open_at!r}-{close_at!r}, expected HH:MM") from None

    def contains(self, moment: datetime) -> bool:
        minute = moment.hour * 60 + moment.minute
        start = self.open_at.hour * 60 + self.open_at.minute
        end = self.close_at.hour * 60 + self.close_at.minute
        if start <= end:
            return start <= minute <= end
        return minute >= start or minute <= end

    def require_open(self, moment: datetime) -> None:
        if not self.contains(moment):
            raise OutsideOperatingWindow(
                f"Check-in is open {self.open_at:%H:%M}-{self.close_at:%H:%M}, not at {moment:%H:%M}"
            )
