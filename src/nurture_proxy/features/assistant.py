"""AI-assisted wellness features driven through the proxy client."""

import logging
from typing import Any

from nurture_proxy.client.proxy_client import GEMINI_URLS, ProxyClient, UpstreamCallError
from nurture_proxy.features import payloads, prompts
from nurture_proxy.models.wellness import CarePlan, MoodAnalysis, PeerProfile

logger = logging.getLogger(__name__)

MIN_CARE_PLAN_QUERY = 10
MIN_PEER_PROBLEM = 10

QUOTE_CHARS = str.maketrans("", "", "\"“”")


class InputValidationError(ValueError):
    """Raised when user input is too short or otherwise unusable."""

    pass


class PeerChat:
    """A simulated peer conversation.

    History is kept as ``contents`` turns and sent in full with each reply.
    """

    def __init__(self, assistant: "WellnessAssistant", opener: str):
        self.assistant = assistant
        self.history: list[dict[str, Any]] = [payloads.chat_turn("model", opener)]

    @property
    def opener(self) -> str:
        return self.history[0]["parts"][0]["text"]

    def reply(self, message: str) -> str | None:
        """Send a user message and return the peer's reply.

        Returns None, without calling upstream, for a blank message.
        """
        message = message.strip()
        if not message:
            return None

        self.history.append(payloads.chat_turn("user", message))
        try:
            result = self.assistant.call(payloads.build_peer_reply_payload(self.history))
        except UpstreamCallError as e:
            logger.error(f"AI chat reply error: {e}")
            return prompts.PEER_REPLY_ERROR_FALLBACK

        text = payloads.extract_text(result) or prompts.PEER_REPLY_EMPTY_FALLBACK
        self.history.append(payloads.chat_turn("model", text))
        return text


class WellnessAssistant:
    """Prompts the generative model for the app's four AI features."""

    def __init__(self, client: ProxyClient, model_url: str = GEMINI_URLS["flash"]):
        self.client = client
        self.model_url = model_url

    def call(self, payload: dict[str, Any]) -> Any:
        return self.client.call_upstream(self.model_url, payload)

    def daily_thought(self, name: str) -> str:
        """Greeting plus a short affirmation. Never raises on upstream failure."""
        greeting = prompts.GREETING.format(name=name)
        try:
            result = self.call(payloads.build_affirmation_payload())
        except UpstreamCallError as e:
            logger.error(f"Error generating daily thought: {e}")
            return f"{greeting} {prompts.AFFIRMATION_ERROR_FALLBACK}"

        text = (payloads.extract_text(result) or "").strip()
        text = text.translate(QUOTE_CHARS) or prompts.AFFIRMATION_EMPTY_FALLBACK
        return f"{greeting} {text}"

    def care_plan(self, query: str) -> CarePlan:
        """Generate a Food/Body/Mind plan for the described state.

        Raises:
            InputValidationError: If the description is too short.
            UpstreamCallError: If the proxy call fails.
        """
        query = query.strip()
        if len(query) < MIN_CARE_PLAN_QUERY:
            raise InputValidationError(
                "Please provide a detailed description of your current state "
                "(mood, symptoms, energy)."
            )

        result = self.call(payloads.build_care_plan_payload(query))
        return CarePlan(
            text=payloads.extract_text(result) or prompts.CARE_PLAN_FALLBACK,
            sources=payloads.extract_sources(result),
        )

    def analyze_mood(self, entry: str) -> MoodAnalysis:
        """Analyse a journal entry; falls back to a neutral analysis on failure."""
        try:
            result = self.call(payloads.build_mood_analysis_payload(entry))
            return payloads.parse_mood_analysis(result)
        except (UpstreamCallError, ValueError) as e:
            logger.error(f"AI mood analysis error: {e}")
            return MoodAnalysis(**prompts.MOOD_FALLBACK)

    def start_peer_chat(self, profile: PeerProfile) -> PeerChat:
        """Open a peer conversation with a first message from the peer.

        Raises:
            InputValidationError: If the problem description is too short.
        """
        if len(profile.problem.strip()) < MIN_PEER_PROBLEM:
            raise InputValidationError(
                "Please describe the problem you want to discuss."
            )

        try:
            result = self.call(payloads.build_peer_match_payload(profile))
            opener = payloads.extract_text(result) or prompts.PEER_MATCH_EMPTY_FALLBACK
        except UpstreamCallError as e:
            logger.error(f"AI chat generation error: {e}")
            opener = prompts.PEER_MATCH_ERROR_FALLBACK

        return PeerChat(self, opener)
