"""Profile page view-model"""
import logging
from dataclasses import dataclass
from typing import Optional

from app.errors import AppError
from app.services.profile import validate_profile_picture
from app.views.auth_view import end_session
from app.views.context import ViewContext
from app.views.navigation import Navigator, Page

logger = logging.getLogger(__name__)


@dataclass
class ProfileState:
    name: str = ""
    profile_picture_url: Optional[str] = None
    loading: bool = False
    uploading: bool = False
    saving_name: bool = False
    error: Optional[str] = None
    success: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.name or "User"


class ProfileViewModel:
    """Backs the profile screen: name and profile picture"""

    def __init__(self, ctx: ViewContext, navigator: Navigator):
        self.ctx = ctx
        self.navigator = navigator
        self.state = ProfileState()

    def reset(self) -> None:
        self.state = ProfileState()

    async def mount(self) -> None:
        await self.fetch_profile()

    async def fetch_profile(self) -> None:
        self.state.loading = True
        self.state.error = None
        try:
            user_id = await self.ctx.auth.require_user_id("Please log in to view profile")
            profile = await self.ctx.profiles.get_profile(user_id)
        except AppError as e:
            self.state.error = e.message
            return
        except Exception as e:
            logger.error(f"Error fetching profile: {e}", exc_info=True)
            self.state.error = "Failed to load profile"
            return
        finally:
            self.state.loading = False

        if profile:
            self.state.name = profile.name or ""
            self.state.profile_picture_url = profile.profile_picture_url or None

    async def save_name(self, name: str) -> bool:
        self.state.saving_name = True
        self.state.error = None
        self.state.success = None
        try:
            user_id = await self.ctx.auth.require_user_id("Please log in to update your name")
            profile = await self.ctx.profiles.update_name(user_id, name)
        except AppError as e:
            self.state.error = e.message
            return False
        except Exception as e:
            logger.error(f"Error updating name: {e}", exc_info=True)
            self.state.error = "Failed to update name"
            return False
        finally:
            self.state.saving_name = False

        self.state.name = profile.name or ""
        self.state.success = "Name updated successfully!"
        return True

    async def upload_picture(self, file_name: str, content: bytes, content_type: Optional[str]) -> bool:
        """Validate locally, then replace the stored picture"""
        self.state.error = None
        self.state.success = None

        try:
            validate_profile_picture(content_type, len(content))
        except AppError as e:
            self.state.error = e.message
            return False

        self.state.uploading = True
        try:
            user_id = await self.ctx.auth.require_user_id("Please log in to upload")
            url = await self.ctx.profiles.upload_profile_picture(
                user_id=user_id,
                file_name=file_name,
                content=content,
                content_type=content_type,
                current_url=self.state.profile_picture_url,
            )
        except AppError as e:
            self.state.error = e.message
            return False
        except Exception as e:
            logger.error(f"Error uploading profile picture: {e}", exc_info=True)
            self.state.error = "Failed to upload profile picture"
            return False
        finally:
            self.state.uploading = False

        self.state.profile_picture_url = url
        self.state.success = "Profile picture updated successfully!"
        return True

    async def back_to_dashboard(self) -> None:
        await self.navigator.go(Page.DASHBOARD)

    async def logout(self) -> None:
        await end_session(self.ctx, self.navigator)
        self.reset()
