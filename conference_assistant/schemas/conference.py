"""Schemas for conference sessions (dataset, preferences, search results)."""

from pydantic import BaseModel, ConfigDict, Field


class ConferenceSession(BaseModel):
    """A session from the venue dataset. Frozen so it can live in preference sets."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    title: str
    startsAt: str
    endsAt: str
    category: tuple[str, ...] = ()
    speakers: tuple[str, ...] = ()
    room: str


class Dataset(BaseModel):
    """Top-level venue dataset; only the session list is modelled."""

    model_config = ConfigDict(extra="ignore")

    sessions: list[ConferenceSession] = Field(default_factory=list)


class ConferenceSessionSearchResult(BaseModel):
    """Best matching chunk per session title, with local start/end times."""

    title: str
    startsAt: str
    endsAt: str
    room: str
    speakers: list[str] = Field(default_factory=list)
    score: float
