"""Login / signup view-model with the first-login onboarding flow"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from app.errors import AppError
from app.views.context import ViewContext
from app.views.navigation import Navigator, Page

logger = logging.getLogger(__name__)


class OnboardingState(str, Enum):
    """Where the signed-in user is in the first-login flow"""
    SIGNED_OUT = "signed_out"
    FIRST_LOGIN = "first_login"   # signed in, profile not checked yet
    NEEDS_NAME = "needs_name"     # profile exists but has no name
    READY = "ready"


@dataclass
class AuthState:
    onboarding: OnboardingState = OnboardingState.SIGNED_OUT
    user_id: Optional[str] = None
    loading: bool = False
    error: Optional[str] = None
    info: Optional[str] = None
    saving_name: bool = False
    name_error: Optional[str] = None


async def end_session(ctx: ViewContext, navigator: Navigator) -> None:
    """Sign out and return home; a failing provider call does not keep the user signed in"""
    try:
        await ctx.auth.sign_out()
    except Exception as e:
        logger.error(f"Sign-out failed: {e}", exc_info=True)
    await navigator.go(Page.HOME)


class AuthViewModel:
    """Backs the login, signup and name-prompt screens"""

    def __init__(self, ctx: ViewContext, navigator: Navigator):
        self.ctx = ctx
        self.navigator = navigator
        self.state = AuthState()

    def reset(self) -> None:
        self.state = AuthState()

    @staticmethod
    def _validate_credentials(email: str, password: str) -> Optional[str]:
        if not email.strip() or not password:
            return "Please enter your email and password"
        return None

    async def sign_up(self, email: str, password: str) -> bool:
        """Create an account; continues into onboarding when a session is issued"""
        self.state.error = self._validate_credentials(email, password)
        self.state.info = None
        if self.state.error:
            return False

        self.state.loading = True
        try:
            result = await self.ctx.auth.sign_up(email.strip(), password)
        except AppError as e:
            self.state.error = e.message
            return False
        except Exception as e:
            logger.error(f"Unexpected sign-up failure: {e}", exc_info=True)
            self.state.error = "An unexpected error occurred"
            return False
        finally:
            self.state.loading = False

        if not result.has_session:
            self.state.info = "Check your email to confirm your account, then log in."
            await self.navigator.go(Page.LOGIN)
            return True

        await self._complete_login(result.user_id)
        return True

    async def sign_in(self, email: str, password: str) -> bool:
        """Sign in with email and password, then run onboarding"""
        self.state.error = self._validate_credentials(email, password)
        self.state.info = None
        if self.state.error:
            return False

        self.state.loading = True
        try:
            result = await self.ctx.auth.sign_in(email.strip(), password)
        except AppError as e:
            self.state.error = e.message
            return False
        except Exception as e:
            logger.error(f"Unexpected sign-in failure: {e}", exc_info=True)
            self.state.error = "An unexpected error occurred"
            return False
        finally:
            self.state.loading = False

        await self._complete_login(result.user_id)
        return True

    async def _complete_login(self, user_id: str) -> None:
        self.state.user_id = user_id
        self.state.onboarding = OnboardingState.FIRST_LOGIN

        try:
            profile = await self.ctx.profiles.ensure_profile(user_id)
        except Exception as e:
            logger.error(f"Profile check failed for user {user_id}: {e}", exc_info=True)
            self.state.error = "Could not load your profile. Please try again."
            return

        if profile.has_name:
            self.state.onboarding = OnboardingState.READY
            await self.navigator.go(Page.DASHBOARD)
        else:
            self.state.onboarding = OnboardingState.NEEDS_NAME
            await self.navigator.go(Page.NAME_PROMPT)

    async def save_name(self, name: str) -> bool:
        """Answer the name prompt and continue to the dashboard"""
        if self.state.onboarding != OnboardingState.NEEDS_NAME or not self.state.user_id:
            self.state.name_error = "Please log in to continue"
            return False

        self.state.saving_name = True
        self.state.name_error = None
        try:
            await self.ctx.profiles.update_name(self.state.user_id, name)
        except AppError as e:
            self.state.name_error = e.message
            return False
        except Exception as e:
            logger.error(f"Failed to save name for user {self.state.user_id}: {e}", exc_info=True)
            self.state.name_error = "Failed to save your name"
            return False
        finally:
            self.state.saving_name = False

        self.state.onboarding = OnboardingState.READY
        await self.navigator.go(Page.DASHBOARD)
        return True

    async def sign_out(self) -> None:
        await end_session(self.ctx, self.navigator)
        self.reset()
