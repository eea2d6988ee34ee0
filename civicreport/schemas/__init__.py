# civicreport/schemas/__init__.py

# User schemas
from .user import (
    RegisterRequest,
    LoginRequest,
    UserOut,
    LoginResponse,
    MessageResponse,
)

# Report schemas
from .report import ReportOut, StatusUpdate, parse_coordinate

__all__ = [
    "RegisterRequest",
    "LoginRequest",
    "UserOut",
    "LoginResponse",
    "MessageResponse",
    "ReportOut",
    "StatusUpdate",
    "parse_coordinate",
]
