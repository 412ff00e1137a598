"""
API Dependencies

Shared route dependencies: admin gate and the progress store.
"""

import secrets
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import get_db
from app.services.progress_store import SqlProgressStore

security = HTTPBasic()


def require_admin(
    credentials: Annotated[HTTPBasicCredentials, Depends(security)],
) -> str:
    """
    Allow the request only for the configured admin account.

    Returns:
        The admin username.

    Raises:
        HTTPException: 401 on wrong credentials.
    """
    username_ok = secrets.compare_digest(
        credentials.username.encode("utf-8"),
        settings.ADMIN_USERNAME.encode("utf-8"),
    )
    password_ok = secrets.compare_digest(
        credentials.password.encode("utf-8"),
        settings.ADMIN_PASSWORD.encode("utf-8"),
    )
    if not (username_ok and password_ok):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid login credentials",
            headers={"WWW-Authenticate": "Basic"},
        )
    return credentials.username


def get_progress_store(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SqlProgressStore:
    return SqlProgressStore(db)
