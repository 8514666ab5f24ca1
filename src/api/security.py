"""Route guard: bearer-token authentication dependencies."""

import logging

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from api.dependencies import get_token_issuer, get_user_repo
from domain.model.errors import PermissionDeniedError, UnauthorizedError
from domain.model.user import User
from port.token_issuer import TokenIssuer
from port.user_repository import UserRepository
from services import auth_service

logger = logging.getLogger(__name__)

NO_TOKEN_MESSAGE = "Access denied. No token provided."
ADMIN_REQUIRED_MESSAGE = "Access denied. Admin privileges required."

security = HTTPBearer(auto_error=False)


def get_current_user_required(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    user_repo: UserRepository = Depends(get_user_repo),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> User:
    """Get current authenticated user (required). Raises 401 if not authenticated.

    The resolved user is also placed on request.state.user.
    """
    if not credentials:
        raise UnauthorizedError(NO_TOKEN_MESSAGE)

    user = auth_service.get_current_user(user_repo, tokens, credentials.credentials)
    request.state.user = user
    return user


def require_admin(current_user: User = Depends(get_current_user_required)) -> User:
    if not current_user.is_admin:
        logger.warning("Admin route refused", extra={"userId": current_user.id})
        raise PermissionDeniedError(ADMIN_REQUIRED_MESSAGE)
    return current_user
