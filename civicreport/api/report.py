import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Response, UploadFile, status
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session

from civicreport.database import get_db
from civicreport.schemas import ReportOut, StatusUpdate
from civicreport.services import report_service
from civicreport.services.errors import ServiceError
from civicreport.services.storage import UploadStore, get_upload_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/reports", tags=["Reports"])
uploads_router = APIRouter(prefix="/uploads", tags=["Uploads"])


def _service_http_error(exc: ServiceError) -> HTTPException:
    return HTTPException(status_code=exc.status_code, detail=exc.message)


@router.get("", response_model=List[ReportOut])
def list_reports(db: Session = Depends(get_db)):
    """All reports, newest first."""
    try:
        return report_service.get_reports(db)
    except Exception:
        logger.exception("Failed to fetch reports")
        raise HTTPException(status_code=500, detail="Failed to fetch reports.")


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ReportOut)
def submit_report(
    location: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    severity: Optional[str] = Form(None),
    reported_by: Optional[str] = Form(None, alias="reportedBy"),
    image_description: Optional[str] = Form(None, alias="imageDescription"),
    latitude: Optional[str] = Form(None),
    longitude: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    store: UploadStore = Depends(get_upload_store),
):
    fields = {
        "location": location,
        "description": description,
        "severity": severity,
        "reportedBy": reported_by,
        "imageDescription": image_description,
        "latitude": latitude,
        "longitude": longitude,
    }
    if image is not None:
        image.file.seek(0)
    try:
        return report_service.submit_report(
            db,
            store,
            fields,
            image=image.file if image else None,
            image_name=image.filename if image else None,
            image_content_type=image.content_type if image else None,
        )
    except ServiceError as exc:
        raise _service_http_error(exc)
    except Exception:
        db.rollback()
        logger.exception("Failed to create report")
        raise HTTPException(status_code=500, detail="Failed to create report.")


@router.put("/{report_id}", response_model=ReportOut)
def update_report_status(
    report_id: str,
    payload: StatusUpdate,
    db: Session = Depends(get_db),
):
    """Admin: move a report to pending, in-progress or resolved."""
    try:
        return report_service.change_status(
            db, report_id, payload.status.value if payload.status else None
        )
    except ServiceError as exc:
        raise _service_http_error(exc)
    except Exception:
        db.rollback()
        logger.exception("Failed to update report %s", report_id)
        raise HTTPException(status_code=500, detail="Failed to update report.")


@router.delete("/{report_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_report(
    report_id: str,
    db: Session = Depends(get_db),
    store: UploadStore = Depends(get_upload_store),
):
    """Admin: delete a report and, best-effort, its image."""
    try:
        report_service.remove_report(db, store, report_id)
    except ServiceError as exc:
        raise _service_http_error(exc)
    except Exception:
        db.rollback()
        logger.exception("Failed to delete report %s", report_id)
        raise HTTPException(status_code=500, detail="Failed to delete report.")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@uploads_router.get("/{filename}")
def get_upload(filename: str, store: UploadStore = Depends(get_upload_store)):
    path = store.path_for(filename)
    if path is None:
        raise HTTPException(status_code=404, detail="Image not found.")
    return FileResponse(path)
