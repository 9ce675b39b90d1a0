from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional
from core.config import Settings
from core.dependencies import get_db, get_settings
from models.auth import User
from services.database import InMemoryDatabase
from .utils import decode_access_token

optional_security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security),
    db: InMemoryDatabase = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> User:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token_data = decode_access_token(credentials.credentials, settings)

    if token_data is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token"
        )

    user = db.get_user(token_data.user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found"
        )
    return user


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security),
    db: InMemoryDatabase = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> Optional[User]:
    """
    Optional authentication - returns user if authenticated, None otherwise.
    Interviews can be taken anonymously; a valid token just records the owner.
    """
    if credentials is None:
        return None

    token_data = decode_access_token(credentials.credentials, settings)
    if token_data is None:
        return None

    return db.get_user(token_data.user_id)
