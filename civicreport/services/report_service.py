# civicreport/services/report_service.py
"""
Report Service - one function per report endpoint.

Request handlers call into this module and translate ``ServiceError``
subclasses into HTTP responses. Image files are written before the report
document and removed after it; the two writes are not transactional.
"""

import logging
from datetime import datetime, timezone
from typing import BinaryIO, Dict, List, Optional

from sqlalchemy.orm import Session

from civicreport import models
from civicreport.crud import report as report_crud
from civicreport.models.report import ReportSeverity
from civicreport.schemas.report import parse_coordinate
from civicreport.services.errors import InvalidFieldError, MissingFieldError, NotFoundError
from civicreport.services.report_lifecycle import apply_status
from civicreport.services.storage import UploadStore

logger = logging.getLogger(__name__)


REQUIRED_REPORT_FIELDS = ("location", "description", "reportedBy", "severity")


def get_reports(db: Session) -> List[models.Report]:
    return report_crud.list_reports(db)


def submit_report(
    db: Session,
    store: UploadStore,
    fields: Dict[str, Optional[str]],
    image: Optional[BinaryIO] = None,
    image_name: Optional[str] = None,
    image_content_type: Optional[str] = None,
) -> models.Report:
    """
    Create a report from submitted form fields.

    Args:
        db: Database session
        store: Image store for the optional upload
        fields: Form values keyed by their camelCase names
        image: Readable binary stream of the uploaded image, if any
        image_name: Client-side filename of the upload
        image_content_type: Declared media type of the upload

    Returns:
        The persisted Report

    Raises:
        MissingFieldError: A required field is absent or blank
        InvalidFieldError: Severity is outside low/medium/high
        InvalidUploadError: The image was rejected (type or size)
    """
    if any(not (fields.get(name) or "").strip() for name in REQUIRED_REPORT_FIELDS):
        raise MissingFieldError("Missing required fields (location, description, severity).")

    try:
        severity = ReportSeverity(fields["severity"].strip().lower())
    except ValueError:
        allowed = ", ".join(s.value for s in ReportSeverity)
        raise InvalidFieldError(f"Invalid severity. Must be one of: {allowed}") from None

    image_filename = None
    if image is not None and image_name:
        image_filename = store.save(image, image_name, image_content_type)

    report = report_crud.create_report(
        db,
        reported_by=fields["reportedBy"],
        location=fields["location"],
        description=fields["description"],
        severity=severity.value,
        latitude=parse_coordinate(fields.get("latitude")),
        longitude=parse_coordinate(fields.get("longitude")),
        image_description=fields.get("imageDescription") or None,
        image_filename=image_filename,
        reported_at=datetime.now(timezone.utc),
    )
    logger.info("Report %s created by %s (severity=%s)", report.id, report.reported_by, report.severity)
    return report


def change_status(db: Session, report_id: str, status: Optional[str]) -> models.Report:
    if not status:
        raise MissingFieldError("Missing required field: status.")

    report = report_crud.get_report(db, report_id)
    if not report:
        raise NotFoundError("Report not found.")

    apply_status(report, status)
    report = report_crud.save_report(db, report)
    logger.info("Report %s status -> %s", report.id, report.status)
    return report


def remove_report(db: Session, store: UploadStore, report_id: str) -> None:
    report = report_crud.get_report(db, report_id)
    if not report:
        raise NotFoundError("Report not found.")

    image_filename = report.image_filename
    report_crud.delete_report(db, report)
    logger.info("Report %s deleted", report_id)

    if image_filename:
        store.delete(image_filename)
