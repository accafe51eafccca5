"""Shared dependencies for API routes."""

from __future__ import annotations

from typing import Any, AsyncGenerator

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from onboarding.core.config import Settings, settings
from onboarding.core.security import decode_access_token
from onboarding.db import session as db_session
from onboarding.submission.dispatcher import NotificationDispatcher

security_scheme = HTTPBearer(auto_error=False)

ADMIN_ROLE = "admin"


def get_settings() -> Settings:
    return settings


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async DB session."""
    async for session in db_session.get_db():
        yield session


def get_session_factory() -> async_sessionmaker[AsyncSession] | None:
    """Session factory for the persist step; None when no database is configured."""
    return db_session.get_session_factory()


def get_dispatcher(config: Settings = Depends(get_settings)) -> NotificationDispatcher:
    return NotificationDispatcher.from_settings(config)


async def get_current_token_payload(
    credentials: HTTPAuthorizationCredentials | None = Depends(security_scheme),
) -> dict[str, Any]:
    """Extract and validate JWT payload from bearer token."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication credentials were not provided",
        )

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )
    return payload


async def get_current_admin(
    token_payload: dict[str, Any] = Depends(get_current_token_payload),
    config: Settings = Depends(get_settings),
) -> str:
    """Resolve the admin username from the JWT payload."""
    if token_payload.get("role") != ADMIN_ROLE or token_payload.get("sub") != config.ADMIN_USERNAME:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication token",
        )
    return token_payload["sub"]
