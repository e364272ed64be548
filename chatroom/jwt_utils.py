"""
JWT utilities for the chatroom application.

Tokens are issued by the authentication service; this module only validates
them and, for tests and local tooling, mints tokens with the shared secret.
"""

import time

import jwt
from django.conf import settings


class JWTManager:
    """
    JWT Manager for token generation and validation.
    """

    def __init__(self):
        # Don't access settings immediately
        self._secret = None
        self._algorithm = None

    def _get_secret(self):
        """Get the signing secret, with lazy loading."""
        if self._secret is None:
            self._secret = getattr(settings, 'JWT_SECRET', 'dev-jwt-secret')
        return self._secret

    def _get_algorithm(self):
        """Get the JWT algorithm, with lazy loading."""
        if self._algorithm is None:
            self._algorithm = getattr(settings, 'JWT_ALGORITHM', 'HS256')
        return self._algorithm

    def generate_token(self, user_id, expires_in_hours=2):
        """
        Generate a JWT token for the given user.

        Args:
            user_id (str): The user ID to include in the token
            expires_in_hours (int): Token expiration time in hours

        Returns:
            str: JWT token string
        """
        payload = {
            'sub': str(user_id),
            'iat': int(time.time()),
            'exp': int(time.time()) + (expires_in_hours * 3600)
        }

        return jwt.encode(payload, self._get_secret(), algorithm=self._get_algorithm())

    def validate_token(self, token):
        """
        Validate a JWT token and extract the payload.

        Args:
            token (str): JWT token string

        Returns:
            dict: Decoded JWT payload

        Raises:
            jwt.InvalidTokenError: If token is invalid or expired
        """
        try:
            return jwt.decode(
                token,
                self._get_secret(),
                algorithms=[self._get_algorithm()]
            )
        except jwt.ExpiredSignatureError:
            raise jwt.InvalidTokenError("Token has expired")
        except jwt.InvalidTokenError as e:
            raise jwt.InvalidTokenError(f"Invalid token: {str(e)}")


_jwt_manager = None


def _get_jwt_manager():
    """Get the global JWT manager instance, creating it if needed."""
    global _jwt_manager
    if _jwt_manager is None:
        _jwt_manager = JWTManager()
    return _jwt_manager


def generate_test_token(user_id, expires_in_hours=2):
    """Generate a JWT token for the given user ID."""
    return _get_jwt_manager().generate_token(user_id, expires_in_hours)


def validate_jwt_token(token):
    """Validate a JWT token and return the payload."""
    return _get_jwt_manager().validate_token(token)