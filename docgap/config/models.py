from pathlib import PurePosixPath, PureWindowsPath
from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def _is_absolute(pattern: str) -> bool:
    return PurePosixPath(pattern).is_absolute() or PureWindowsPath(pattern).is_absolute()


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class RuleConfig(_Frozen):
    """Maps a documentation glob to the source globs it describes."""

    doc: str = Field(min_length=1)
    source: str | list[str]
    ignore: list[str] = Field(default_factory=list)
    max_staleness: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices("max_staleness", "maxStaleness"),
        description="Grace period in days before a newer source counts as drift",
    )

    @field_validator("doc", "source")
    @classmethod
    def validate_relative(cls, v: str | list[str]) -> str | list[str]:
        for pattern in [v] if isinstance(v, str) else v:
            if _is_absolute(pattern):
                raise ValueError(f"pattern must be relative to the project root: {pattern!r}")
        return v

    @property
    def source_patterns(self) -> list[str]:
        if isinstance(self.source, str):
            return [self.source]
        return list(self.source)


class GitConfig(_Frozen):
    ignore_commit_patterns: list[str] = Field(
        default_factory=lambda: ["^chore:", "^style:", "^test:", "^ci:", "^docs:"],
        validation_alias=AliasChoices("ignore_commit_patterns", "ignoreCommitPatterns"),
    )
    shallow: bool = True


class SemanticConfig(_Frozen):
    enabled: bool = True
    strict: bool = False
    normalizer: Literal["regex", "external"] = "regex"
    external_command: list[str] = Field(
        default_factory=lambda: ["repomix", "--compress", "--style", "xml"],
        validation_alias=AliasChoices("external_command", "externalCommand"),
    )
    timeout: float = Field(default=30.0, gt=0)


class DocGapConfig(_Frozen):
    ignore: list[str] = Field(default_factory=lambda: ["node_modules", "dist", ".git"])
    rules: list[RuleConfig]
    git: GitConfig = Field(default_factory=GitConfig)
    semantic: SemanticConfig = Field(default_factory=SemanticConfig)
    concurrency: int = Field(default=10, gt=0)
    log_level: Literal["debug", "info", "warn", "error"] = Field(
        default="info", validation_alias=AliasChoices("log_level", "logLevel")
    )
    log_format: Literal["text", "json"] = Field(
        default="text", validation_alias=AliasChoices("log_format", "logFormat")
    )
