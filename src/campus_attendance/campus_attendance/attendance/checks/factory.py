from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .base import VerificationCheck
from .geofence_check import GeofenceCheck
from .otp_check import OTPCheck
from .qr_check import QRCheck
from .session_check import ActiveSessionCheck


@dataclass
class VerificationPipelineFactory:
    """Factory Pattern: the ordered list of checks a check-in must pass.

    Cheapest and most global first, exact OTP last. The duplicate check is
    not part of the pipeline: it is enforced by the store on insert.
    """

    def build(self) -> Sequence[VerificationCheck]:
        return (ActiveSessionCheck(), GeofenceCheck(), QRCheck(), OTPCheck())
