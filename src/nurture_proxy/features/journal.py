"""Per-session journal with mood analysis and live listeners."""

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable

from nurture_proxy.client.subscription import Feed, Subscription
from nurture_proxy.features.assistant import InputValidationError, WellnessAssistant
from nurture_proxy.models.wellness import JournalEntry

logger = logging.getLogger(__name__)

MIN_ENTRY_LENGTH = 5


class JournalBook:
    """A user's journal entries, newest first.

    Listeners receive the full, ordered list on subscribe and after every
    change.
    """

    def __init__(self, assistant: WellnessAssistant):
        self.assistant = assistant
        self._entries: dict[str, JournalEntry] = {}
        self._feed: Feed[list[JournalEntry]] = Feed()

    def entries(self) -> list[JournalEntry]:
        # Stable sort over reversed insertion order breaks timestamp ties
        return sorted(
            reversed(list(self._entries.values())),
            key=lambda e: e.timestamp,
            reverse=True,
        )

    def latest(self) -> JournalEntry | None:
        entries = self.entries()
        return entries[0] if entries else None

    def subscribe(self, handler: Callable[[list[JournalEntry]], None]) -> Subscription:
        subscription = self._feed.subscribe(handler)
        handler(self.entries())
        return subscription

    def add(self, content: str) -> JournalEntry:
        """Analyse and save an entry.

        Raises:
            InputValidationError: If the entry is too short.
        """
        content = content.strip()
        if len(content) < MIN_ENTRY_LENGTH:
            raise InputValidationError(
                "Please write a more complete thought before saving."
            )

        analysis = self.assistant.analyze_mood(content)
        entry = JournalEntry(
            id=uuid.uuid4().hex,
            content=content,
            timestamp=datetime.now(timezone.utc),
            mood=analysis.mood,
            insight=analysis.insight,
        )
        self._entries[entry.id] = entry
        logger.info(f"Journal entry saved id={entry.id} mood={entry.mood}")
        self._feed.publish(self.entries())
        return entry

    def delete(self, entry_id: str) -> None:
        """Remove an entry.

        Raises:
            KeyError: If no entry has that id.
        """
        if entry_id not in self._entries:
            raise KeyError(entry_id)
        del self._entries[entry_id]
        self._feed.publish(self.entries())
