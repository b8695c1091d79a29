"""Tests for session lifecycle and subscriptions."""

from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from nurture_proxy.client.session import NotSignedInError, SessionManager
from nurture_proxy.client.subscription import Feed
from nurture_proxy.features.assistant import WellnessAssistant
from nurture_proxy.models.wellness import UserProfile


@pytest.fixture
def sessions():
    return SessionManager(MagicMock(spec=WellnessAssistant))


def test_require_without_session(sessions):
    with pytest.raises(NotSignedInError):
        sessions.require()


def test_sign_in_creates_session(sessions):
    session = sessions.sign_in("uid-1", display_name="Asha")

    assert sessions.require() is session
    assert session.user_id == "uid-1"
    assert session.display_name == "Asha"
    assert session.journal.entries() == []


def test_default_display_name(sessions):
    assert sessions.sign_in("uid-1").display_name == "Mom"


def test_sign_out_tears_down_subscriptions(sessions):
    """Tracked listeners are unsubscribed on sign-out."""
    session = sessions.sign_in("uid-1")
    snapshots = []
    subscription = session.track(session.journal.subscribe(snapshots.append))

    sessions.sign_out()

    assert not subscription.active
    assert session.closed
    assert sessions.current is None


def test_sign_in_replaces_previous_session(sessions):
    """A new sign-in closes the old session."""
    first = sessions.sign_in("uid-1")
    second = sessions.sign_in("uid-2")

    assert first.closed
    assert sessions.require() is second
    assert first.journal is not second.journal


def test_sign_out_when_signed_out(sessions):
    sessions.sign_out()
    assert sessions.current is None


def test_feed_handler_may_unsubscribe_during_publish():
    """Unsubscribing inside a handler does not disturb delivery."""
    feed = Feed()
    received = []
    subscriptions = []

    def once(value):
        received.append(value)
        subscriptions[0].unsubscribe()

    subscriptions.append(feed.subscribe(once))
    feed.subscribe(received.append)

    feed.publish(1)
    feed.publish(2)

    assert received == [1, 1, 2]
    assert len(feed) == 1


def test_sign_in_with_stored_profile(sessions):
    """A stored profile sets the display name at sign-in."""
    profile = UserProfile(name="Meera", email="meera@example.com", age=31)

    session = sessions.sign_in("uid-1", profile=profile)

    assert session.profile is profile
    assert session.display_name == "Meera"


def test_user_profile_strips_whitespace():
    profile = UserProfile(name="  Meera ", email=" meera@example.com ", age="31", location=" Delhi ")
    assert (profile.name, profile.email, profile.age, profile.location) == (
        "Meera",
        "meera@example.com",
        31,
        "Delhi",
    )


@pytest.mark.parametrize(
    "fields",
    [
        {"name": " M ", "email": "m@example.com", "age": 30},
        {"name": "Meera", "email": "meera", "age": 30},
        {"name": "Meera", "email": "meera@example.com", "age": 17},
        {"name": "Meera", "email": "meera@example.com"},
    ],
)
def test_user_profile_validation(fields):
    with pytest.raises(ValidationError):
        UserProfile(**fields)
