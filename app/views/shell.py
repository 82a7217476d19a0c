"""Application shell: one navigator and the view-model of every screen"""
import logging
from typing import Optional

from app.views.auth_view import AuthViewModel
from app.views.context import ViewContext
from app.views.dashboard_view import DashboardViewModel
from app.views.navigation import Navigator, Page
from app.views.profile_view import ProfileViewModel

logger = logging.getLogger(__name__)


class TaskManagerApp:
    """
    Wires the screens together.

    Entering the dashboard loads tasks and profile; entering the profile page
    loads the profile; returning home clears every screen's state.
    """

    def __init__(self, ctx: Optional[ViewContext] = None):
        self.ctx = ctx or ViewContext.create()
        self.navigator = Navigator()
        self.auth = AuthViewModel(self.ctx, self.navigator)
        self.dashboard = DashboardViewModel(self.ctx, self.navigator)
        self.profile = ProfileViewModel(self.ctx, self.navigator)
        self.navigator.subscribe(self._on_page_change)

    @property
    def page(self) -> Page:
        return self.navigator.page

    async def navigate(self, page: Page) -> Page:
        return await self.navigator.go(page)

    async def _on_page_change(self, previous: Page, current: Page) -> None:
        if current == Page.DASHBOARD:
            await self.dashboard.mount()
        elif current == Page.PROFILE:
            await self.profile.mount()
        elif current == Page.HOME:
            self.auth.reset()
            self.dashboard.reset()
            self.profile.reset()
