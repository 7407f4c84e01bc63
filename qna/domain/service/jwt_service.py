"""JWT token domain service."""

from typing import Optional
from uuid import UUID

import logfire

from qna.config import AuthSettings
from qna.domain.value import Identity, UserId, Username
from qna.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for JWT token operations.

    Tokens are only verified by the API. ``create_token`` exists for tests
    and tooling that need to act as a given user.
    """

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, user_id: UserId, username: Username) -> str:
        """Create JWT token for user.

        Args:
            user_id: User ID
            username: Display name

        Returns:
            JWT token string
        """
        with logfire.span(
            "jwt_service.create_token", user_id=str(user_id), username=username.root
        ):
            token = create_token(str(user_id), username.root, self.auth_settings)
            logfire.info("JWT token created", user_id=str(user_id))
            return token

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
                logfire.debug("JWT token verified", user_id=payload.user_id)
                return payload
            except JWTError as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise

    def get_identity_from_token(self, token: str | None) -> Optional[Identity]:
        """Resolve the acting identity without raising.

        Args:
            token: JWT token string (optional)

        Returns:
            Identity if the token is valid, None if it is missing or invalid
        """
        if not token:
            return None

        try:
            payload = self.verify_token(token)
            return Identity(
                user_id=UserId(UUID(payload.user_id)),
                username=Username(payload.username),
            )
        except (JWTError, ValueError) as e:
            # Bad signature, expiry or malformed claims
            logfire.debug(
                "JWT identity rejected, treating as unauthenticated", error=str(e)
            )
            return None
