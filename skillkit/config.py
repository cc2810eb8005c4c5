"""
Validator configuration.

The numeric limits come from the skill authoring conventions; every run
gets its own ValidatorConfig, built from CLI flags.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

MAX_NAME_LENGTH = 64
MAX_DESCRIPTION_LENGTH = 1024
MAX_BODY_LINES = 500
TOC_THRESHOLD_LINES = 100


class ValidatorConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    max_name_length: int = Field(default=MAX_NAME_LENGTH, ge=1)
    max_description_length: int = Field(default=MAX_DESCRIPTION_LENGTH, ge=1)
    max_body_lines: int = Field(
        default=MAX_BODY_LINES,
        ge=1,
        description="SKILL.md bodies must stay under this many lines",
    )
    toc_threshold_lines: int = Field(
        default=TOC_THRESHOLD_LINES,
        ge=1,
        description="Reference files longer than this need a table of contents",
    )
    strict: bool = Field(default=False, description="Treat warnings as errors")
    jobs: int = Field(default=1, ge=1, description="Skill folders validated in parallel")
