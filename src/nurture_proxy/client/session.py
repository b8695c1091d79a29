"""Signed-in user context with an explicit lifecycle."""

import logging

from nurture_proxy.client.subscription import Subscription
from nurture_proxy.features.assistant import PeerChat, WellnessAssistant
from nurture_proxy.features.journal import JournalBook
from nurture_proxy.models.wellness import UserProfile

logger = logging.getLogger(__name__)

DEFAULT_DISPLAY_NAME = "Mom"


class NotSignedInError(Exception):
    """Raised when a feature needs a session and none is active."""

    pass


class Session:
    """State owned by one signed-in user.

    Created on sign-in, closed on sign-out. Subscriptions registered with
    ``track`` are torn down on close.
    """

    def __init__(
        self,
        user_id: str,
        assistant: WellnessAssistant,
        display_name: str = DEFAULT_DISPLAY_NAME,
    ):
        self.user_id = user_id
        self.display_name = display_name
        self.journal = JournalBook(assistant)
        self.peer_chat: PeerChat | None = None
        self.profile: UserProfile | None = None
        self._subscriptions: list[Subscription] = []
        self.closed = False

    def apply_profile(self, profile: UserProfile) -> None:
        """Store a saved profile and refresh the display name."""
        self.profile = profile
        self.display_name = profile.name or DEFAULT_DISPLAY_NAME

    def track(self, subscription: Subscription) -> Subscription:
        self._subscriptions.append(subscription)
        return subscription

    def close(self) -> None:
        for subscription in self._subscriptions:
            subscription.unsubscribe()
        self._subscriptions.clear()
        self.peer_chat = None
        self.closed = True


class SessionManager:
    """Holds at most one active session."""

    def __init__(self, assistant: WellnessAssistant):
        self.assistant = assistant
        self.current: Session | None = None

    def sign_in(
        self,
        user_id: str,
        display_name: str = DEFAULT_DISPLAY_NAME,
        profile: UserProfile | None = None,
    ) -> Session:
        """Start a session, closing any previous one.

        A stored profile, when given, sets the display name.
        """
        if self.current is not None:
            self.current.close()
        self.current = Session(user_id, self.assistant, display_name=display_name)
        if profile is not None:
            self.current.apply_profile(profile)
        logger.info(f"Session started user_id={user_id}")
        return self.current

    def sign_out(self) -> None:
        if self.current is None:
            return
        logger.info(f"Session ended user_id={self.current.user_id}")
        self.current.close()
        self.current = None

    def require(self) -> Session:
        if self.current is None:
            raise NotSignedInError("You must be logged in to use this feature.")
        return self.current
