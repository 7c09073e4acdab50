import logging

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .database import get_db
from .models import User

logger = logging.getLogger(__name__)

security = HTTPBearer()


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the bearer token to an active user"""
    token = credentials.credentials
    user = db.query(User).filter(User.api_token == token).first()
    if not user:
        logger.warning("❌ Authentication failed: unknown API token")
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    if not user.is_active:
        logger.warning(f"⚠️ Inactive user {user.id} attempted access")
        raise HTTPException(status_code=403, detail="Account is deactivated")

    return user


def require_maid(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role != "maid":
        raise HTTPException(status_code=403, detail="Only maids can perform this action")
    return current_user


def require_customer(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role != "customer":
        raise HTTPException(status_code=403, detail="Only customers can create bookings")
    return current_user
