"""Session / auth client wrapping Supabase Auth"""
import logging
from dataclasses import dataclass
from typing import Optional

from supabase import Client  # type: ignore

from app.errors import BackendCallError, UnauthenticatedError

logger = logging.getLogger(__name__)


@dataclass
class AuthResult:
    """Outcome of a sign-up or sign-in"""
    user_id: str
    email: Optional[str] = None
    access_token: Optional[str] = None  # None when the provider still awaits email confirmation

    @property
    def has_session(self) -> bool:
        return self.access_token is not None


def _error_message(error: Exception, fallback: str) -> str:
    # Supabase auth errors carry a user-readable .message
    message = getattr(error, "message", None)
    return message if isinstance(message, str) and message else fallback


class AuthClient:
    """
    Thin wrapper over ``client.auth``.
    Hides the Supabase response shapes from the view layer.
    """

    def __init__(self, client: Client):
        self._client = client

    async def sign_up(self, email: str, password: str) -> AuthResult:
        """Register a new account"""
        try:
            response = self._client.auth.sign_up({"email": email, "password": password})
        except Exception as e:
            logger.warning(f"Sign-up failed for {email}: {e}")
            raise BackendCallError(_error_message(e, "An unexpected error occurred"))

        if not response.user:
            raise BackendCallError("Sign-up did not return a user")

        session = response.session
        logger.info(f"Signed up user {response.user.id}")
        return AuthResult(
            user_id=response.user.id,
            email=response.user.email,
            access_token=session.access_token if session else None,
        )

    async def sign_in(self, email: str, password: str) -> AuthResult:
        """Sign in with email and password"""
        try:
            response = self._client.auth.sign_in_with_password({"email": email, "password": password})
        except Exception as e:
            logger.warning(f"Sign-in failed for {email}: {e}")
            raise BackendCallError(_error_message(e, "Invalid email or password"))

        if not response.user or not response.session:
            raise BackendCallError("Invalid email or password")

        logger.info(f"Signed in user {response.user.id}")
        return AuthResult(
            user_id=response.user.id,
            email=response.user.email,
            access_token=response.session.access_token,
        )

    async def sign_out(self) -> None:
        """End the current session"""
        self._client.auth.sign_out()

    async def get_current_user_id(self) -> Optional[str]:
        """Return the signed-in user's id, or None without a session"""
        response = self._client.auth.get_user()
        if not response or not response.user:
            return None
        return response.user.id

    async def get_access_token(self) -> Optional[str]:
        """Return the current session's bearer token, or None"""
        session = self._client.auth.get_session()
        if not session:
            return None
        return session.access_token

    async def require_user_id(self, message: str = "Please log in to continue") -> str:
        """Return the signed-in user's id or raise UnauthenticatedError"""
        try:
            user_id = await self.get_current_user_id()
        except Exception as e:
            logger.warning(f"Could not resolve current user: {e}")
            user_id = None

        if not user_id:
            raise UnauthenticatedError(message)
        return user_id

    async def require_access_token(self, message: str = "Please log in to continue") -> str:
        """Return the current bearer token or raise UnauthenticatedError"""
        token = await self.get_access_token()
        if not token:
            raise UnauthenticatedError(message)
        return token
