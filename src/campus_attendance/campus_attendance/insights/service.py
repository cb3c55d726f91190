from __future__ import annotations

import logging
from typing import Mapping, Optional

from ..core.constants import AT_RISK_THRESHOLD
from ..storage.gateway import AttendanceGateway
from .generator import InsightGenerator
from .model import AttendanceStats, InsightReport, ParticipantStats

logger = logging.getLogger(__name__)

FALLBACK_SUMMARY = "Unable to generate AI insights at this moment."
FALLBACK_RECOMMENDATIONS = ["Ensure all students mark attendance via the verified protocol."]


class InsightService:
    """Aggregates attendance and asks an external generator to summarise it.

    The generator is best-effort: any failure yields a locally built report.
    """

    def __init__(
        self,
        gateway: AttendanceGateway,
        generator: Optional[InsightGenerator] = None,
        *,
        threshold: float = AT_RISK_THRESHOLD,
    ):
        self._gateway = gateway
        self._generator = generator
        self._threshold = float(threshold)

    def build_stats(
        self,
        *,
        department: Optional[str] = None,
        roster: Optional[Mapping[str, str]] = None,
    ) -> AttendanceStats:
        """Per-participant attendance over the matching sessions.

        Without a ``roster`` (participant_id -> name) only participants with at
        least one record are known; roster entries with no record count as
        zero attended.
        """
        sessions = self._gateway.query_sessions(department=department)

        attended: dict[str, int] = {pid: 0 for pid in (roster or {})}
        names: dict[str, str] = dict(roster or {})
        for s in sessions:
            for r in self._gateway.query_records(s.session_id):
                attended[r.participant_id] = attended.get(r.participant_id, 0) + 1
                names[r.participant_id] = r.participant_name

        participants = tuple(
            ParticipantStats(
                participant_id=pid,
                participant_name=names[pid],
                attended=count,
                total_sessions=len(sessions),
            )
            for pid, count in sorted(attended.items())
        )
        return AttendanceStats(department=department, total_sessions=len(sessions), participants=participants)

    def at_risk(self, stats: AttendanceStats) -> list[str]:
        if stats.total_sessions <= 0:
            return []
        return [p.participant_name for p in stats.participants if p.rate < self._threshold]

    def generate_report(
        self,
        *,
        department: Optional[str] = None,
        roster: Optional[Mapping[str, str]] = None,
    ) -> InsightReport:
        stats = self.build_stats(department=department, roster=roster)
        if self._generator is None:
            return self._fallback(stats)

        try:
            return self._generator.generate(stats.to_dict())
        except Exception:
            # Never let the external summary break the dashboard.
            logger.warning("Insight generator failed; using local report", exc_info=True)
            return self._fallback(stats)

    def _fallback(self, stats: AttendanceStats) -> InsightReport:
        return InsightReport(
            summary=FALLBACK_SUMMARY,
            at_risk_participants=self.at_risk(stats),
            recommendations=list(FALLBACK_RECOMMENDATIONS),
            generated=False,
        )
