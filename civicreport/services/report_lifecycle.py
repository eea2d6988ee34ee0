from datetime import datetime, timezone
from typing import Optional, Union

from civicreport import models
from civicreport.models.report import ReportStatus
from civicreport.services.errors import InvalidStatusError


def coerce_status(value: Union[str, ReportStatus]) -> ReportStatus:
    try:
        return ReportStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in ReportStatus)
        raise InvalidStatusError(f"Invalid status '{value}'. Must be one of: {allowed}") from None


def apply_status(
    report: models.Report,
    status: Union[str, ReportStatus],
    now: Optional[datetime] = None,
) -> models.Report:
    """
    Move a report to ``status``.

    Resolving stamps ``resolved_at``; every other target clears it, even when
    the report was never resolved. ``resolved_at`` is therefore set exactly
    when the status is ``resolved``.
    """
    target = coerce_status(status)
    report.status = target.value
    if target is ReportStatus.RESOLVED:
        report.resolved_at = now or datetime.now(timezone.utc)
    else:
        report.resolved_at = None
    return report
