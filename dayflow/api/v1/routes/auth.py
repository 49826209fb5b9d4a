# dayflow/api/v1/routes/auth.py
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession
from dayflow.core.database import db_helper
from dayflow.core.utils import get_current_user
from dayflow.repositories.user_repository import UserRepository
from dayflow.services.auth_service import AuthService
from dayflow.core.schemas.auth import (
    UserCreate,
    UserResponse,
    Token,
    RefreshTokenRequest,
)
from dayflow.core.exceptions import AuthenticationError, ValidationError
from dayflow.models.user import User
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register_user(
    user_create: UserCreate,
    session: AsyncSession = Depends(db_helper.session_getter)
):
    """Register a new user"""
    logger.info(f"Registration attempt for email: {user_create.email}")

    try:
        auth_service = AuthService(UserRepository(session))
        user, _ = await auth_service.register_user(user_create)
    except ValidationError as e:
        logger.warning(f"Validation error during registration: {e.detail}")
        raise HTTPException(status_code=e.status_code, detail=e.detail)

    logger.info(f"Successful registration for user ID: {user.id}")
    return user


@router.post("/login", response_model=Token)
async def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    session: AsyncSession = Depends(db_helper.session_getter)
):
    """Log in with email as username and get a token pair"""
    try:
        auth_service = AuthService(UserRepository(session))
        _, token = await auth_service.authenticate_user(form_data.username, form_data.password)
    except AuthenticationError as e:
        logger.warning(f"Authentication failed for email: {form_data.username}")
        raise HTTPException(
            status_code=e.status_code,
            detail=e.detail,
            headers={"WWW-Authenticate": "Bearer"},
        )

    logger.info(f"Successful login for email: {form_data.username}")
    return token


@router.post("/refresh", response_model=Token)
async def refresh_token(
    refresh_request: RefreshTokenRequest,
    session: AsyncSession = Depends(db_helper.session_getter)
):
    try:
        auth_service = AuthService(UserRepository(session))
        return await auth_service.refresh_tokens(refresh_request.refresh_token)
    except AuthenticationError as e:
        raise HTTPException(
            status_code=e.status_code,
            detail=e.detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


@router.get("/me", response_model=UserResponse)
async def read_current_user(current_user: User = Depends(get_current_user)):
    return current_user
