from sqlalchemy.orm import Session

from civicreport import models, schemas
from civicreport.utils.security import get_password_hash


def create_user(db: Session, user: schemas.RegisterRequest) -> models.User:
    """Insert a user. The caller commits; unique violations surface on flush."""
    db_user = models.User(
        full_name=user.full_name,
        email=user.email,
        username=user.username,
        password_hash=get_password_hash(user.password),
        role=user.role.value,
    )
    db.add(db_user)
    db.flush()
    return db_user


def get_user_by_username(db: Session, username: str):
    return db.query(models.User).filter(models.User.username == username).first()
