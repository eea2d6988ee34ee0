import enum
import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, Float, String, Text

from civicreport.database import Base


class ReportSeverity(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ReportStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"


def _new_report_id() -> str:
    return uuid.uuid4().hex


class Report(Base):
    __tablename__ = "reports"
    __table_args__ = (
        CheckConstraint("severity IN ('low', 'medium', 'high')", name="ck_reports_severity"),
        CheckConstraint("status IN ('pending', 'in-progress', 'resolved')", name="ck_reports_status"),
    )

    id = Column(String(32), primary_key=True, default=_new_report_id)
    # Plain username string; not a foreign key to users
    reported_by = Column(String(100), nullable=False, index=True)
    location = Column(String(255), nullable=False)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    description = Column(Text, nullable=False)
    severity = Column(String(10), nullable=False, default=ReportSeverity.LOW.value)
    status = Column(String(20), nullable=False, default=ReportStatus.PENDING.value, index=True)
    image_description = Column(Text, nullable=True)
    image_filename = Column(String(255), nullable=True)
    reported_at = Column(DateTime(timezone=True), nullable=False, index=True)
    resolved_at = Column(DateTime(timezone=True), nullable=True)
