"""FastAPI dependencies for authentication and database."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.database import get_db
from src.models.user import User
from src.services.auth import IdentityService
from src.services.post_service import PostService

# Missing or non-Bearer headers are reported by IdentityService.authenticate
security = HTTPBearer(auto_error=False)


def get_identity_service(
    db: Annotated[Session, Depends(get_db)],
) -> IdentityService:
    """Get identity service with dependencies."""
    return IdentityService(db)


def get_post_service(
    db: Annotated[Session, Depends(get_db)],
) -> PostService:
    """Get post service with dependencies."""
    return PostService(db)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    identity: Annotated[IdentityService, Depends(get_identity_service)],
) -> User:
    """Get the current authenticated user from the bearer token."""
    token = credentials.credentials if credentials else None
    return identity.authenticate(token)
