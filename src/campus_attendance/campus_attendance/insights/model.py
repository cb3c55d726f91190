from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Optional


@dataclass(frozen=True)
class ParticipantStats:
    participant_id: str
    participant_name: str
    attended: int
    total_sessions: int

    @property
    def rate(self) -> float:
        if self.total_sessions <= 0:
            return 0.0
        return self.attended / self.total_sessions


@dataclass(frozen=True)
class AttendanceStats:
    """Aggregate handed to the insight generator."""

    department: Optional[str]
    total_sessions: int
    participants: tuple[ParticipantStats, ...] = ()

    def to_dict(self) -> dict:
        return {
            "department": self.department,
            "total_sessions": self.total_sessions,
            "participants": [
                {**asdict(p), "rate": round(p.rate * 100, 1)} for p in self.participants
            ],
        }


@dataclass(frozen=True)
class InsightReport:
    summary: str
    at_risk_participants: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    generated: bool = True

    def to_dict(self) -> dict:
        return asdict(self)
