"""
Intent rule models for the MindEase companion.

Defines the closed set of intent categories and the Pydantic model for
an ordered intent rule (substring, regex, or catch-all).
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field, model_validator


class IntentCategory(str, enum.Enum):
    """Response categories of the companion chat."""

    ANXIETY = "anxiety"
    SLEEP = "sleep"
    OVERWHELM = "overwhelm"
    STRESS = "stress"
    LOW_MOOD = "low_mood"
    LONELINESS = "loneliness"
    MOTIVATION = "motivation"
    GRATITUDE = "gratitude"
    GREETING = "greeting"
    THANKS = "thanks"
    FEATURE_INQUIRY = "feature_inquiry"
    DEFAULT = "default"


class IntentMatchType(str, enum.Enum):
    """Intent-rule matching mode."""

    SUBSTRING = "substring"
    REGEX = "regex"
    ANY = "any"


class IntentRule(BaseModel):
    """One entry of the ordered intent rule table.

    Attributes:
        category: Category returned when the rule matches.
        match_type: Matching mode.
        keywords: Lower-case substrings (``substring`` rules).
        pattern: Regular expression (``regex`` rules).
    """

    model_config = {"frozen": True}

    category: IntentCategory = Field(..., description="Category returned on match.")
    match_type: IntentMatchType = Field(
        default=IntentMatchType.SUBSTRING,
        description="Matching mode.",
    )
    keywords: tuple[str, ...] = Field(default=(), description="Lower-case substrings.")
    pattern: str | None = Field(default=None, description="Regular expression.")

    @model_validator(mode="after")
    def _check_matcher(self) -> IntentRule:
        if self.match_type is IntentMatchType.SUBSTRING and not self.keywords:
            raise ValueError("substring rules need at least one keyword")
        if self.match_type is IntentMatchType.REGEX and not self.pattern:
            raise ValueError("regex rules need a pattern")
        return self

    @property
    def is_catch_all(self) -> bool:
        return self.match_type is IntentMatchType.ANY
