"""Pydantic models for documentation coverage."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class Entity(BaseModel):
    """A named class or function found in source code."""

    model_config = ConfigDict(frozen=True)

    name: str
    kind: Literal["class", "function"]
    line: int = Field(ge=1)


class CoverageReport(BaseModel):
    """How many of a file's entities the documentation mentions."""

    model_config = ConfigDict(frozen=True)

    file: str
    score: float = Field(ge=0.0, le=1.0)
    present: list[Entity] = Field(default_factory=list)
    missing: list[Entity] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.present) + len(self.missing)
