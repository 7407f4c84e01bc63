"""Authentication helpers for routes."""

from fastapi import HTTPException, status

from qna.domain.service import JWTService
from qna.domain.value import Identity


def require_identity(
    jwt_service: JWTService, auth_token: str | None, action: str
) -> Identity:
    """Resolve the caller from the auth cookie or fail with 401.

    Args:
        jwt_service: JWT service for token verification
        auth_token: JWT token from cookie
        action: What the caller tried to do, for the error message

    Returns:
        The authenticated identity
    """
    identity = jwt_service.get_identity_from_token(auth_token)
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Authentication required to {action}",
        )
    return identity
