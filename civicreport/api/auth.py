import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from civicreport.crud import user as user_crud
from civicreport.database import get_db
from civicreport.schemas import LoginRequest, LoginResponse, MessageResponse, RegisterRequest, UserOut
from civicreport.utils.security import verify_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Authentication"])


# ===== REGISTER ENDPOINT =====

@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=MessageResponse)
def register(user_data: RegisterRequest, db: Session = Depends(get_db)):
    """Register a new citizen or admin account."""
    try:
        user_crud.create_user(db, user_data)
        db.commit()
    except IntegrityError:
        # Unique index on username/email is the source of truth for duplicates
        db.rollback()
        raise HTTPException(status_code=409, detail="Username or email already exists.")
    except Exception:
        db.rollback()
        logger.exception("Registration failed for %s", user_data.username)
        raise HTTPException(status_code=500, detail="Registration failed.")

    logger.info("Registered user %s (%s)", user_data.username, user_data.role.value)
    return {"message": "User registered successfully!"}


# ===== LOGIN ENDPOINT =====

@router.post("/login", response_model=LoginResponse)
def login(credentials: Optional[LoginRequest] = None, db: Session = Depends(get_db)):
    """Verify credentials and return the user without its password"""
    credentials = credentials or LoginRequest()
    if not credentials.username or not credentials.password:
        logger.warning("Rejected login with missing credentials")
        raise HTTPException(status_code=401, detail="Invalid username or password.")

    try:
        user = user_crud.get_user_by_username(db, credentials.username)
        valid = bool(user) and verify_password(credentials.password, user.password_hash)
    except Exception:
        logger.exception("Login lookup failed for %s", credentials.username)
        raise HTTPException(status_code=500, detail="Login failed.")

    if not valid:
        logger.warning("Rejected login for %s", credentials.username)
        raise HTTPException(status_code=401, detail="Invalid username or password.")

    return {"user": UserOut.model_validate(user)}
