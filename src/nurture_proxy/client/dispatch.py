"""Explicit table of UI action name to handler."""

import logging
from typing import Any, Callable

from pydantic import ValidationError

from nurture_proxy.client.session import SessionManager
from nurture_proxy.features.assistant import InputValidationError, WellnessAssistant
from nurture_proxy.models.wellness import PeerProfile, UserProfile

logger = logging.getLogger(__name__)


class UnknownCommandError(Exception):
    """Raised when dispatching an action that was never registered."""

    pass


class CommandDispatcher:
    """Maps action names to callables."""

    def __init__(self):
        self._handlers: dict[str, Callable[..., Any]] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._handlers

    @property
    def commands(self) -> list[str]:
        return sorted(self._handlers)

    def register(self, name: str, handler: Callable[..., Any]) -> None:
        if name in self._handlers:
            raise ValueError(f"Command '{name}' already registered")
        self._handlers[name] = handler

    def dispatch(self, name: str, *args: Any, **kwargs: Any) -> Any:
        handler = self._handlers.get(name)
        if handler is None:
            raise UnknownCommandError(
                f"Unknown command '{name}'. Available commands: {self.commands}"
            )
        logger.debug(f"Dispatching {name}")
        return handler(*args, **kwargs)


def build_command_table(
    sessions: SessionManager, assistant: WellnessAssistant
) -> CommandDispatcher:
    """Register the application's actions.

    Every action except ``sign_out`` requires an active session.
    """
    dispatcher = CommandDispatcher()

    def daily_thought():
        session = sessions.require()
        return assistant.daily_thought(session.display_name)

    def generate_care_plan(query: str | None = None):
        session = sessions.require()
        if not query:
            # Default to the most recent journal entry
            latest = session.journal.latest()
            query = latest.content if latest else ""
        return assistant.care_plan(query)

    def save_journal_entry(content: str):
        return sessions.require().journal.add(content)

    def delete_journal_entry(entry_id: str):
        sessions.require().journal.delete(entry_id)

    def save_user_profile(name: str, email: str, age: int | str, location: str = ""):
        session = sessions.require()
        try:
            profile = UserProfile(name=name, email=email, age=age, location=location)
        except ValidationError as e:
            raise InputValidationError(
                "Please enter a valid name, email, and age."
            ) from e
        session.apply_profile(profile)
        logger.info(f"Profile saved user_id={session.user_id}")
        return profile

    def start_peer_match(
        problem: str, mood: str = "", health: str = "", preference: str = ""
    ):
        session = sessions.require()
        profile = PeerProfile(
            problem=problem, mood=mood, health=health, preference=preference
        )
        session.peer_chat = assistant.start_peer_chat(profile)
        return session.peer_chat.opener

    def send_reply(message: str):
        session = sessions.require()
        if session.peer_chat is None:
            raise ValueError("No peer chat in progress.")
        return session.peer_chat.reply(message)

    dispatcher.register("daily_thought", daily_thought)
    dispatcher.register("generate_care_plan", generate_care_plan)
    dispatcher.register("save_journal_entry", save_journal_entry)
    dispatcher.register("delete_journal_entry", delete_journal_entry)
    dispatcher.register("save_user_profile", save_user_profile)
    dispatcher.register("start_peer_match", start_peer_match)
    dispatcher.register("send_reply", send_reply)
    dispatcher.register("sign_out", sessions.sign_out)
    return dispatcher
