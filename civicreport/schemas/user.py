from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from civicreport.models.user import UserRole


# ======================
# USER AUTHENTICATION SCHEMAS
# ======================

class RegisterRequest(BaseModel):
    full_name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    username: str = Field(..., min_length=1)
    # Bcrypt limit is 72 bytes; longer input is truncated before hashing
    password: str = Field(..., min_length=1)
    role: UserRole = UserRole.CITIZEN

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LoginRequest(BaseModel):
    # Missing credentials are a failed login (401), not a malformed request
    username: Optional[str] = None
    password: Optional[str] = None


class UserOut(BaseModel):
    """Public view of a user. Never carries the password."""

    id: int
    full_name: str
    email: str
    username: str
    role: UserRole

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class LoginResponse(BaseModel):
    user: UserOut


class MessageResponse(BaseModel):
    message: str
