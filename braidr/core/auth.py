from datetime import datetime, timedelta
from typing import Any, Dict, Optional
import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import ValidationError as PydanticValidationError

from braidr.core.config import settings
from braidr.schemas.actor import Actor, ActorRole

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

def create_access_token(
    data: Dict[str, Any], expires_delta: Optional[timedelta] = None
) -> str:
    """Create JWT access token."""
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(
            minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )

    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(
        to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM
    )

    return encoded_jwt

async def get_current_actor(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Actor:
    """Resolve the caller from a bearer token.

    Tokens carry ``sub`` (the user id) and ``role`` ("customer" or
    "stylist"). Stylists are identified by their user id, the same value
    bookings store in ``stylistId``.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        raise credentials_exception

    try:
        payload = jwt.decode(
            credentials.credentials, settings.SECRET_KEY, algorithms=[settings.ALGORITHM]
        )
        return Actor(id=payload.get("sub"), role=payload.get("role", ActorRole.CUSTOMER))
    except (JWTError, PydanticValidationError) as e:
        logger.warning(f"Rejected bearer token: {e}")
        raise credentials_exception

def require_role(role: ActorRole):
    """Dependency factory that admits only actors with the given role."""
    async def dependency(actor: Actor = Depends(get_current_actor)) -> Actor:
        if actor.role != role:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Only a {role.value} can perform this action",
            )
        return actor
    return dependency
