"""JWT token domain service.

Resolves the voter behind a request. The identity service issues tokens;
here they are only verified.
"""

from typing import Optional
from uuid import UUID

import logfire

from tally.config import AuthSettings
from tally.domain.value import VoterId
from tally.util.jwt import TokenPayload, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for JWT token operations."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
                logfire.info("JWT token verified", voter_id=payload.sub)
                return payload
            except Exception as e:
                logfire.error("JWT token verification failed", error=str(e))
                raise

    def get_voter_id_from_token(self, token: Optional[str]) -> Optional[VoterId]:
        """Resolve the voter from a token without raising.

        Args:
            token: JWT token string (optional)

        Returns:
            Voter ID if the token is valid, None if missing or invalid
        """
        if not token:
            return None

        try:
            payload = self.verify_token(token)
            return VoterId(UUID(payload.sub))
        except Exception as e:
            # Invalid or expired token, treat as unauthenticated
            logfire.debug(
                "JWT verification failed, treating as unauthenticated", error=str(e)
            )
            return None
