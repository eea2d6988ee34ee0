# civicreport/models/__init__.py
from .user import User, UserRole
from .report import Report, ReportSeverity, ReportStatus

__all__ = ["User", "UserRole", "Report", "ReportSeverity", "ReportStatus"]
