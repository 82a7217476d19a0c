"""Page navigation state machine"""
import logging
from enum import Enum
from typing import Awaitable, Callable, Dict, FrozenSet, List

logger = logging.getLogger(__name__)


class Page(str, Enum):
    """Screens of the application"""
    HOME = "home"
    LOGIN = "login"
    SIGNUP = "signup"
    NAME_PROMPT = "name_prompt"
    DASHBOARD = "dashboard"
    PROFILE = "profile"


TRANSITIONS: Dict[Page, FrozenSet[Page]] = {
    Page.HOME: frozenset({Page.LOGIN, Page.SIGNUP, Page.DASHBOARD}),
    Page.LOGIN: frozenset({Page.SIGNUP, Page.HOME, Page.NAME_PROMPT, Page.DASHBOARD}),
    Page.SIGNUP: frozenset({Page.LOGIN, Page.HOME, Page.NAME_PROMPT, Page.DASHBOARD}),
    Page.NAME_PROMPT: frozenset({Page.DASHBOARD, Page.HOME}),
    Page.DASHBOARD: frozenset({Page.PROFILE, Page.HOME}),
    Page.PROFILE: frozenset({Page.DASHBOARD, Page.HOME}),
}

PageListener = Callable[[Page, Page], Awaitable[None]]


class InvalidTransition(Exception):
    """Navigation to a page not reachable from the current one"""

    def __init__(self, source: Page, target: Page):
        super().__init__(f"Cannot navigate from {source.value} to {target.value}")
        self.source = source
        self.target = target


class Navigator:
    """Holds the current page and notifies listeners on every change"""

    def __init__(self, start: Page = Page.HOME):
        self.page = start
        self._listeners: List[PageListener] = []

    def subscribe(self, listener: PageListener) -> None:
        """Register ``listener(previous, current)``, awaited after each transition"""
        self._listeners.append(listener)

    def can_go(self, target: Page) -> bool:
        return target == self.page or target in TRANSITIONS[self.page]

    async def go(self, target: Page) -> Page:
        """
        Move to ``target`` and run listeners.

        Raises:
            InvalidTransition: If ``target`` is not reachable from the current page
        """
        if target == self.page:
            return self.page

        if not self.can_go(target):
            raise InvalidTransition(self.page, target)

        previous = self.page
        self.page = target
        logger.info(f"Navigated {previous.value} -> {target.value}")

        for listener in self._listeners:
            await listener(previous, target)

        return self.page
