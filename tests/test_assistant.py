"""Tests for the wellness assistant features."""

from unittest.mock import MagicMock

import httpx
import pytest
from fastapi.testclient import TestClient

from nurture_proxy.client.proxy_client import GEMINI_URLS, ProxyClient, UpstreamCallError
from nurture_proxy.features import prompts
from nurture_proxy.features.assistant import InputValidationError, WellnessAssistant
from nurture_proxy.main import create_app
from nurture_proxy.models.wellness import MoodAnalysis, PeerProfile


def text_response(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


@pytest.fixture
def client():
    """Mock proxy client."""
    return MagicMock(spec=ProxyClient)


@pytest.fixture
def assistant(client):
    return WellnessAssistant(client)


def sent_payload(client) -> dict:
    url, payload = client.call_upstream.call_args.args
    assert url == GEMINI_URLS["flash"]
    return payload


def test_daily_thought_strips_quotes(assistant, client):
    """Affirmation is trimmed and unquoted."""
    client.call_upstream.return_value = text_response(' "You are doing amazing.” \n')

    thought = assistant.daily_thought("Asha")

    assert thought == "Hello Asha, You got this. You are doing amazing."


def test_daily_thought_empty_response(assistant, client):
    client.call_upstream.return_value = {"candidates": []}
    thought = assistant.daily_thought("Mom")
    assert thought.endswith(prompts.AFFIRMATION_EMPTY_FALLBACK)


def test_daily_thought_upstream_failure(assistant, client):
    """Failures degrade to a fixed affirmation."""
    client.call_upstream.side_effect = UpstreamCallError("Proxy error: boom", 500)
    thought = assistant.daily_thought("Mom")
    assert thought == f"Hello Mom, You got this. {prompts.AFFIRMATION_ERROR_FALLBACK}"


def test_care_plan(assistant, client):
    """Plan text and sources are read from the response."""
    response = text_response("1. Based on your description...")
    response["candidates"][0]["groundingMetadata"] = {
        "groundingAttributions": [{"web": {"uri": "https://ayur.example", "title": "Ayurveda"}}]
    }
    client.call_upstream.return_value = response

    plan = assistant.care_plan("  low energy and a mild headache  ")

    assert plan.text == "1. Based on your description..."
    assert plan.sources[0].title == "Ayurveda"
    assert "low energy and a mild headache" in sent_payload(client)["contents"][0]["parts"][0]["text"]


def test_care_plan_short_query(assistant, client):
    """Short descriptions are rejected without calling upstream."""
    with pytest.raises(InputValidationError):
        assistant.care_plan("tired")
    client.call_upstream.assert_not_called()


def test_care_plan_empty_candidate(assistant, client):
    client.call_upstream.return_value = {}
    assert assistant.care_plan("feeling very low today").text == prompts.CARE_PLAN_FALLBACK


def test_care_plan_propagates_upstream_error(assistant, client):
    client.call_upstream.side_effect = UpstreamCallError("Proxy error: boom", 503)
    with pytest.raises(UpstreamCallError):
        assistant.care_plan("feeling very low today")


def test_analyze_mood(assistant, client):
    client.call_upstream.return_value = text_response('{"mood": "Joyful", "insight": "Savor it."}')
    analysis = assistant.analyze_mood("First smile today!")
    assert analysis.mood == "Joyful"


@pytest.mark.parametrize(
    "effect",
    [UpstreamCallError("Proxy error: boom", 500), None],
)
def test_analyze_mood_fallback(assistant, client, effect):
    """Upstream or parse failures yield the reflective fallback."""
    if effect is None:
        client.call_upstream.return_value = text_response("not json")
    else:
        client.call_upstream.side_effect = effect

    analysis = assistant.analyze_mood("Hard day")

    assert analysis.mood == "Reflective"


def test_peer_chat_conversation(assistant, client):
    """Replies carry the whole history and extend it."""
    client.call_upstream.side_effect = [
        text_response("I hear you. - Peer Mom"),
        text_response("That sounds hard."),
    ]
    chat = assistant.start_peer_chat(PeerProfile(problem="I feel isolated at home"))

    reply = chat.reply("  Nobody visits anymore  ")

    assert chat.opener == "I hear you. - Peer Mom"
    assert reply == "That sounds hard."
    contents = sent_payload(client)["contents"]
    assert [turn["role"] for turn in contents] == ["model", "user"]
    assert contents[1]["parts"][0]["text"] == "Nobody visits anymore"
    assert [turn["role"] for turn in chat.history] == ["model", "user", "model"]


def test_peer_chat_blank_reply_ignored(assistant, client):
    client.call_upstream.return_value = text_response("Hello")
    chat = assistant.start_peer_chat(PeerProfile(problem="I feel isolated at home"))

    assert chat.reply("   ") is None
    assert client.call_upstream.call_count == 1


def test_peer_chat_failures_use_fallbacks(assistant, client):
    client.call_upstream.side_effect = UpstreamCallError("Proxy error: boom", 500)

    chat = assistant.start_peer_chat(PeerProfile(problem="I feel isolated at home"))

    assert chat.opener == prompts.PEER_MATCH_ERROR_FALLBACK
    assert chat.reply("Are you there?") == prompts.PEER_REPLY_ERROR_FALLBACK


def test_peer_chat_short_problem(assistant, client):
    with pytest.raises(InputValidationError):
        assistant.start_peer_chat(PeerProfile(problem="sad"))
    client.call_upstream.assert_not_called()


@pytest.fixture
def html_assistant(full_config):
    """Assistant whose upstream answers 200 with an HTML page."""
    transport = httpx.MockTransport(
        lambda request: httpx.Response(
            200, text="<html>oops</html>", headers={"content-type": "text/html"}
        )
    )
    proxy = ProxyClient(http_client=TestClient(create_app(full_config, transport=transport)))
    return WellnessAssistant(proxy)


def test_daily_thought_non_json_upstream(html_assistant):
    """A non-JSON success body degrades to the fixed affirmation."""
    thought = html_assistant.daily_thought("Mom")
    assert thought == f"Hello Mom, You got this. {prompts.AFFIRMATION_ERROR_FALLBACK}"


def test_peer_chat_non_json_upstream(html_assistant):
    chat = html_assistant.start_peer_chat(PeerProfile(problem="I feel isolated at home"))

    assert chat.opener == prompts.PEER_MATCH_ERROR_FALLBACK
    assert chat.reply("Are you there?") == prompts.PEER_REPLY_ERROR_FALLBACK


def test_analyze_mood_non_json_upstream(html_assistant):
    assert html_assistant.analyze_mood("Hard day").mood == "Reflective"


@pytest.mark.parametrize(
    "response",
    [
        {"candidates": [{"content": None, "finishReason": "SAFETY"}]},
        {"candidates": [{"content": {"parts": ["raw text"]}}]},
        {"candidates": [{"content": {"parts": None}}]},
        {"candidates": "none"},
        ["unexpected"],
    ],
)
def test_analyze_mood_malformed_candidates(assistant, client, response):
    """Blocked or oddly shaped candidates yield the reflective fallback."""
    client.call_upstream.return_value = response

    analysis = assistant.analyze_mood("I feel tired today")

    assert analysis == MoodAnalysis(**prompts.MOOD_FALLBACK)


def test_care_plan_blocked_candidate(assistant, client):
    client.call_upstream.return_value = {
        "candidates": [{"content": None, "groundingMetadata": {"groundingAttributions": None}}]
    }

    plan = assistant.care_plan("feeling very low today")

    assert plan.text == prompts.CARE_PLAN_FALLBACK
    assert plan.sources == []
