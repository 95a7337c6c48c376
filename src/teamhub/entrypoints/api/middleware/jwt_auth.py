"""JWT authentication middleware."""

from dataclasses import dataclass
from typing import Annotated

import structlog
from fastapi import Depends, HTTPException, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from teamhub.core.auth.jwt import JwtTokenService
from teamhub.core.exceptions import AuthenticationError
from teamhub.entrypoints.api.deps import get_token_service

logger = structlog.get_logger()

# Use Bearer token authentication
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass
class AuthContext:
    """Authenticated caller derived from a verified access token."""

    user_id: str
    email: str


async def verify_jwt(
    request: Request,
    tokens: Annotated[JwtTokenService, Depends(get_token_service)],
    credentials: HTTPAuthorizationCredentials | None = Security(bearer_scheme),  # noqa: B008
) -> AuthContext:
    """Verify the bearer access token and return the caller context.

    Args:
        request: The current request.
        tokens: Token service used to verify the JWT.
        credentials: Bearer token credentials.

    Returns:
        AuthContext with the caller's user id and email.

    Raises:
        HTTPException: 401 if token is missing, invalid or expired.
    """
    if not credentials:
        raise HTTPException(
            status_code=401,
            detail={"code": "UNAUTHENTICATED", "message": "Authentication required"},
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = tokens.verify_access_token(credentials.credentials)
    except AuthenticationError as e:
        logger.warning("jwt_validation_failed", error=e.message)
        raise HTTPException(
            status_code=401,
            detail=e.to_dict(),
            headers={"WWW-Authenticate": "Bearer"},
        ) from None

    context = AuthContext(user_id=payload.user_id, email=payload.email)

    # Store in request state for downstream use
    request.state.user = context

    logger.debug("jwt_verified", user_id=context.user_id)
    return context


CurrentUser = Annotated[AuthContext, Depends(verify_jwt)]
