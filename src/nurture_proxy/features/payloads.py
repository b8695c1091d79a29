"""Build generateContent request bodies and read their responses."""

import json
from typing import Any

from nurture_proxy.features import prompts
from nurture_proxy.models.wellness import MoodAnalysis, PeerProfile, Source

MOOD_RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "mood": {
            "type": "STRING",
            "description": "The primary single-word mood detected.",
        },
        "insight": {
            "type": "STRING",
            "description": "A single, supportive sentence of insight based on the entry.",
        },
    },
    "propertyOrdering": ["mood", "insight"],
}


def text_part(text: str) -> dict[str, Any]:
    return {"parts": [{"text": text}]}


def chat_turn(role: str, text: str) -> dict[str, Any]:
    """A ``contents`` item with an explicit role ("user" or "model")."""
    return {"role": role, "parts": [{"text": text}]}


def build_payload(
    contents: list[dict[str, Any]], system_prompt: str, **extra: Any
) -> dict[str, Any]:
    """Assemble a request body with a system instruction."""
    payload = {
        "contents": contents,
        "systemInstruction": text_part(system_prompt),
    }
    payload.update(extra)
    return payload


def build_affirmation_payload() -> dict[str, Any]:
    return build_payload(
        [text_part(prompts.AFFIRMATION_USER_PROMPT)],
        prompts.AFFIRMATION_SYSTEM_PROMPT,
    )


def build_care_plan_payload(query: str) -> dict[str, Any]:
    """Care plan request, grounded with Google Search."""
    return build_payload(
        [text_part(prompts.CARE_PLAN_USER_PROMPT.format(query=query))],
        prompts.CARE_PLAN_SYSTEM_PROMPT,
        tools=[{"google_search": {}}],
    )


def build_mood_analysis_payload(entry: str) -> dict[str, Any]:
    """Mood analysis request constrained to a JSON response."""
    return build_payload(
        [text_part(prompts.MOOD_USER_PROMPT.format(entry=entry))],
        prompts.MOOD_SYSTEM_PROMPT,
        generationConfig={
            "responseMimeType": "application/json",
            "responseSchema": MOOD_RESPONSE_SCHEMA,
        },
    )


def build_peer_match_payload(profile: PeerProfile) -> dict[str, Any]:
    user_query = prompts.PEER_MATCH_USER_PROMPT.format(
        problem=profile.problem,
        mood=profile.mood,
        health=profile.health,
        preference=profile.preference,
    )
    return build_payload([text_part(user_query)], prompts.PEER_MATCH_SYSTEM_PROMPT)


def build_peer_reply_payload(history: list[dict[str, Any]]) -> dict[str, Any]:
    """Reply request carrying the whole conversation so far."""
    return build_payload(list(history), prompts.PEER_REPLY_SYSTEM_PROMPT)


def first_candidate(response: Any) -> dict[str, Any]:
    if not isinstance(response, dict):
        return {}
    candidates = response.get("candidates")
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return {}
    return candidates[0]


def extract_text(response: Any) -> str | None:
    """Text of the first part of the first candidate, if any."""
    content = first_candidate(response).get("content")
    if not isinstance(content, dict):
        return None
    parts = content.get("parts")
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return None
    text = parts[0].get("text")
    return text if isinstance(text, str) else None


def extract_sources(response: Any) -> list[Source]:
    """Grounding attributions that carry both a uri and a title."""
    metadata = first_candidate(response).get("groundingMetadata")
    if not isinstance(metadata, dict):
        return []
    attributions = metadata.get("groundingAttributions")
    if not isinstance(attributions, list):
        return []
    sources = []
    for attribution in attributions:
        web = attribution.get("web") if isinstance(attribution, dict) else None
        if not isinstance(web, dict):
            continue
        if web.get("uri") and web.get("title"):
            sources.append(Source(uri=web["uri"], title=web["title"]))
    return sources


def parse_mood_analysis(response: Any) -> MoodAnalysis:
    """Parse the JSON mood analysis out of a response.

    Raises:
        ValueError: If the response has no text or the text is not a valid
            mood analysis object.
    """
    text = extract_text(response)
    if not text:
        raise ValueError("Invalid JSON response from AI.")
    return MoodAnalysis.model_validate(json.loads(text))
