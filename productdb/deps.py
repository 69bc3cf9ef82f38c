from collections.abc import Generator
from typing import Optional

from fastapi import Header, HTTPException, status
from sqlalchemy.orm import Session

from productdb.core.config import settings
from productdb.db.session import SessionLocal


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def verify_admin_token(
    x_admin_token: Optional[str] = Header(None, alias="X-Admin-Token"),
) -> None:
    """
    Guard for the /admin routes. Callers are authenticated upstream; the
    shared token is only checked when one is configured.
    """
    if not settings.admin_token:
        return

    if x_admin_token != settings.admin_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing X-Admin-Token",
        )
