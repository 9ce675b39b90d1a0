import logging
from fastapi import APIRouter, HTTPException, Depends, status
from core.config import Settings
from core.dependencies import get_db, get_settings
from models.auth import UserCreate, UserLogin, User, UserPublic, Token
from auth.utils import hash_password, verify_password, create_access_token
from auth.dependencies import get_current_user
from services.database import InMemoryDatabase, DuplicateUsernameError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _public(user: User) -> UserPublic:
    return UserPublic(id=user.id, username=user.username, created_at=user.created_at)


def _token_response(user: User, settings: Settings, message: str = None) -> Token:
    access_token = create_access_token(
        data={"user_id": user.id, "username": user.username},
        settings=settings,
    )
    return Token(message=message, access_token=access_token, token_type="bearer", user=_public(user))


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
async def register(
    user: UserCreate,
    db: InMemoryDatabase = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Register a new user"""
    try:
        if db.get_user_by_username(user.username):
            raise HTTPException(status_code=400, detail="Username already taken")

        new_user = db.create_user(user.username, hash_password(user.password))
        logger.info(f"Registered user {new_user.id}")

        return _token_response(new_user, settings, message="User registered successfully")

    except HTTPException:
        raise
    except DuplicateUsernameError:
        raise HTTPException(status_code=400, detail="Username already taken")
    except Exception:
        logger.exception("Failed to register user")
        raise HTTPException(status_code=500, detail="Failed to register user")


@router.post("/login", response_model=Token)
async def login(
    credentials: UserLogin,
    db: InMemoryDatabase = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Login and get access token"""
    user = db.get_user_by_username(credentials.username)

    if not user or not verify_password(credentials.password, user.password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
        )

    return _token_response(user, settings)


@router.get("/me", response_model=UserPublic)
async def get_me(current_user: User = Depends(get_current_user)):
    """Get current user info"""
    return _public(current_user)
