"""
Rule-based intent classifier for the MindEase companion.

Maps free text to exactly one :class:`IntentCategory` by evaluating an
ordered rule table: substring rules check lower-cased keywords, regex
rules run precompiled case-insensitive patterns, and the final
catch-all rule matches anything.  First match wins; nothing is scored
or combined.  The classifier holds no mutable state, so one instance
can be shared freely.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from functools import lru_cache

import structlog

from mindease_common.models import IntentCategory, IntentMatchType, IntentRule

from companion.intent_rules import DEFAULT_INTENT_RULES

logger = structlog.get_logger()


@dataclass(frozen=True)
class IntentMatch:
    """Result of classifying one message.

    Attributes:
        category: The winning category.
        rule_index: Position of the winning rule in the table.
        matched: The keyword or matched text that triggered the rule
            (``None`` for the catch-all).
    """

    category: IntentCategory
    rule_index: int
    matched: str | None


class IntentClassifier:
    """Evaluates an ordered intent rule table.

    Args:
        rules: Rules in priority order; the last one must be a catch-all.

    Raises:
        ValueError: If the table is empty, does not end with a catch-all,
            or contains an invalid regular expression.
    """

    def __init__(self, rules: Sequence[IntentRule] = DEFAULT_INTENT_RULES) -> None:
        if not rules:
            raise ValueError("intent rule table is empty")
        if not rules[-1].is_catch_all:
            raise ValueError("intent rule table must end with a catch-all rule")

        self._rules: tuple[IntentRule, ...] = tuple(rules)
        self._compiled: dict[int, re.Pattern[str]] = {}
        for index, rule in enumerate(self._rules):
            if rule.match_type is IntentMatchType.REGEX:
                assert rule.pattern is not None
                try:
                    self._compiled[index] = re.compile(rule.pattern, re.IGNORECASE)
                except re.error as exc:
                    raise ValueError(
                        f"Invalid regex '{rule.pattern}' for {rule.category.value}: {exc}"
                    ) from exc
        logger.debug(
            "intent_classifier_loaded",
            rules=len(self._rules),
            regex=len(self._compiled),
        )

    @property
    def rules(self) -> tuple[IntentRule, ...]:
        return self._rules

    def match(self, text: str) -> IntentMatch:
        """Return the first rule matching *text*, with what triggered it."""
        lowered = (text or "").lower()
        for index, rule in enumerate(self._rules):
            if rule.match_type is IntentMatchType.ANY:
                return IntentMatch(rule.category, index, None)
            if rule.match_type is IntentMatchType.REGEX:
                found = self._compiled[index].search(lowered)
                if found is not None:
                    return IntentMatch(rule.category, index, found.group())
                continue
            for keyword in rule.keywords:
                if keyword in lowered:
                    return IntentMatch(rule.category, index, keyword)

        # Unreachable: the constructor guarantees a trailing catch-all.
        raise AssertionError("intent rule table has no catch-all")

    def classify(self, text: str) -> IntentCategory:
        """Return the category of the first rule matching *text*."""
        return self.match(text).category


@lru_cache(maxsize=1)
def get_default_classifier() -> IntentClassifier:
    """Return the shared classifier over :data:`DEFAULT_INTENT_RULES`."""
    return IntentClassifier(DEFAULT_INTENT_RULES)


def classify(text: str) -> IntentCategory:
    """Classify *text* with the default rule table."""
    return get_default_classifier().classify(text)
