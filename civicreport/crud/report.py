from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from civicreport import models


def create_report(
    db: Session,
    *,
    reported_by: str,
    location: str,
    description: str,
    severity: str,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    image_description: Optional[str] = None,
    image_filename: Optional[str] = None,
    reported_at: Optional[datetime] = None,
) -> models.Report:
    report = models.Report(
        reported_by=reported_by,
        location=location,
        description=description,
        severity=severity,
        latitude=latitude,
        longitude=longitude,
        image_description=image_description,
        image_filename=image_filename,
        status=models.ReportStatus.PENDING.value,
        reported_at=reported_at or datetime.now(timezone.utc),
        resolved_at=None,
    )
    db.add(report)
    db.commit()
    db.refresh(report)
    return report


def list_reports(db: Session) -> List[models.Report]:
    return db.query(models.Report).order_by(models.Report.reported_at.desc()).all()


def get_report(db: Session, report_id: str) -> Optional[models.Report]:
    return db.query(models.Report).filter(models.Report.id == report_id).first()


def delete_report(db: Session, report: models.Report) -> None:
    db.delete(report)
    db.commit()


def save_report(db: Session, report: models.Report) -> models.Report:
    db.commit()
    db.refresh(report)
    return report
