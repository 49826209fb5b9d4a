# dayflow/services/auth_service.py
from typing import Tuple
from datetime import timedelta
from dayflow.core.security import (
    get_password_hash,
    verify_password,
    create_access_token,
    create_refresh_token,
    decode_token
)
from dayflow.repositories.user_repository import UserRepository
from dayflow.core.schemas.auth import UserCreate, Token
from dayflow.core.config import settings
from dayflow.core.exceptions import AuthenticationError, ValidationError
from dayflow.models.user import User


class AuthService:
    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def register_user(self, user_create: UserCreate) -> Tuple[User, Token]:
        """Register a new user and issue their first token pair"""
        existing_user = await self.user_repository.get_by_email(user_create.email)
        if existing_user:
            raise ValidationError("User with this email already exists")

        password_hash = get_password_hash(user_create.password)
        user = await self.user_repository.create(user_create, password_hash)
        token = self._generate_tokens(user.id)
        return user, token

    async def authenticate_user(self, email: str, password: str) -> Tuple[User, Token]:
        user = await self.user_repository.get_by_email(email.lower())
        if not user or not verify_password(password, user.password_hash):
            raise AuthenticationError("Invalid email or password")

        return user, self._generate_tokens(user.id)

    async def refresh_tokens(self, refresh_token: str) -> Token:
        """Exchange a refresh token for a new token pair"""
        try:
            payload = decode_token(refresh_token)
        except ValueError as e:
            raise AuthenticationError(str(e))

        if payload.get("type") != "refresh":
            raise AuthenticationError("Invalid token type")

        user_id = payload.get("sub")
        if not user_id:
            raise AuthenticationError("Invalid token payload")

        user = await self.user_repository.get_by_id(int(user_id))
        if not user:
            raise AuthenticationError("User not found")

        return self._generate_tokens(user.id)

    async def get_current_user(self, token: str) -> User:
        try:
            payload = decode_token(token)
        except ValueError as e:
            raise AuthenticationError(str(e))

        if payload.get("type") != "access":
            raise AuthenticationError("Invalid token type for this operation")

        user_id = payload.get("sub")
        if not user_id:
            raise AuthenticationError("Invalid token payload")

        user = await self.user_repository.get_by_id(int(user_id))
        if not user:
            raise AuthenticationError("User not found")

        return user

    def _generate_tokens(self, user_id: int) -> Token:
        access_token_expires = timedelta(
            minutes=settings.security.JWT_ACCESS_TOKEN_EXPIRE_MINUTES
        )

        return Token(
            access_token=create_access_token(
                data={"sub": str(user_id)},
                expires_delta=access_token_expires
            ),
            refresh_token=create_refresh_token(data={"sub": str(user_id)}),
            expires_in=int(access_token_expires.total_seconds())
        )
