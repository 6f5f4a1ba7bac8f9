"""Pydantic models for version-control history."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Commit(BaseModel):
    """A single commit touching a path, as reported by the backend."""

    model_config = ConfigDict(frozen=True)

    hash: str = Field(min_length=1)
    date: datetime
    message: str
    author: str = ""


class EffectiveUpdate(BaseModel):
    """The most recent commit on a path that survived noise filtering."""

    model_config = ConfigDict(frozen=True)

    hash: str
    date: datetime
    message: str

    @classmethod
    def from_commit(cls, commit: Commit) -> "EffectiveUpdate":
        return cls(hash=commit.hash, date=commit.date, message=commit.message)
