"""Pydantic models for the wellness features."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MoodAnalysis(BaseModel):
    """Single-word mood plus a supportive one-sentence insight."""

    mood: str
    insight: str


class Source(BaseModel):
    """A grounding source cited by the model."""

    uri: str
    title: str


class CarePlan(BaseModel):
    """Food/Body/Mind plan text and its cited sources."""

    text: str
    sources: list[Source] = Field(default_factory=list)


class PeerProfile(BaseModel):
    """What the user shares to be matched with a peer."""

    problem: str
    mood: str = ""
    health: str = ""
    preference: str = ""


class UserProfile(BaseModel):
    """Profile saved at sign-up and from the profile screen."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=2)
    email: str
    age: int = Field(ge=18)
    location: str = ""

    @field_validator("email")
    @classmethod
    def email_has_at(cls, value: str) -> str:
        if "@" not in value:
            raise ValueError("email must contain @")
        return value


class JournalEntry(BaseModel):
    """A saved journal entry with its mood analysis."""

    id: str
    content: str
    timestamp: datetime
    mood: str
    insight: str
