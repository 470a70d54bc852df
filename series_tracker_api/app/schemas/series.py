"""
Pydantic schemas for series and their episodes.

A series is created with a fixed number of episodes (``qt_episodes``).
Episodes are generated at creation time, numbered from 1, and can only
move from unwatched to watched.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field


class EpisodeRead(BaseModel):
    """A single episode inside a series."""

    number: int
    watched: bool = False


class SeriesCreate(BaseModel):
    """Schema for creating a new series.

    A ``qt_episodes`` value that is not a JSON integer is treated as
    absent: the series is stored without a count and without episodes.
    """

    name: Optional[str] = Field(None, examples=["Twin Peaks"])
    qt_episodes: Any = Field(None, examples=[8], description="Number of episodes to generate; only JSON integers count")


class EpisodeWatched(BaseModel):
    """Payload for marking an episode as watched.

    ``ep_number`` is kept exactly as sent.  Only a JSON integer can match
    an episode; strings, floats and booleans are reported as an invalid
    episode rather than rejected by validation.
    """

    ep_number: Any = Field(None, examples=[1], description="Number of the episode within the series")


class SeriesRead(BaseModel):
    """Schema for reading a series together with its episodes."""

    id: str
    name: Optional[str] = None
    qt_episodes: Optional[int] = None
    episodes: List[EpisodeRead] = Field(default_factory=list)

    model_config = {
        "from_attributes": True,
    }
