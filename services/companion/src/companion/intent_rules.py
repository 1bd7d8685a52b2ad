"""
Default intent rule table for the MindEase companion.

Rules are evaluated top to bottom and the first match wins, so more
specific intents sit above broader ones that could match the same
message ("overwhelmed at work" is overwhelm, not stress; "sad and
alone" is loneliness, not low mood).  Emotional intents come before
conversational ones so "hi, I'm anxious" is answered as anxiety.  The
table ends with the catch-all rule.
"""

from __future__ import annotations

from mindease_common.models import IntentCategory, IntentMatchType, IntentRule

DEFAULT_INTENT_RULES: tuple[IntentRule, ...] = (
    IntentRule(
        category=IntentCategory.ANXIETY,
        keywords=("anxious", "anxiety", "panic", "nervous", "worried", "worrying", "on edge"),
    ),
    IntentRule(
        category=IntentCategory.SLEEP,
        keywords=("sleep", "insomnia", "tired", "exhausted", "nightmare", "awake at night"),
    ),
    IntentRule(
        category=IntentCategory.OVERWHELM,
        keywords=(
            "overwhelm",
            "too much to handle",
            "can't cope",
            "cannot cope",
            "burnt out",
            "burned out",
            "burnout",
            "drowning in",
        ),
    ),
    IntentRule(
        category=IntentCategory.STRESS,
        match_type=IntentMatchType.REGEX,
        pattern=r"\b(stress\w*|work|working|job|pressure|deadlines?|tense)\b",
    ),
    IntentRule(
        category=IntentCategory.LONELINESS,
        keywords=("lonely", "loneliness", "alone", "isolated", "no friends", "left out", "nobody"),
    ),
    IntentRule(
        category=IntentCategory.LOW_MOOD,
        match_type=IntentMatchType.REGEX,
        pattern=(
            r"\b(sad|sadness|depress\w*|unhappy|hopeless|miserable|crying|heartbroken)\b"
            r"|\bfeeling (down|low|blue)\b"
            r"|\bnot (feeling )?(happy|good|great|okay|ok)\b"
            r"|\bempty inside\b"
        ),
    ),
    IntentRule(
        category=IntentCategory.MOTIVATION,
        keywords=("motivat", "lazy", "energy", "procrastinat", "unproductive", "can't focus", "stuck"),
    ),
    IntentRule(
        category=IntentCategory.GRATITUDE,
        keywords=(
            "grateful",
            "gratitude",
            "thankful",
            "blessed",
            "happy",
            "great day",
            "feeling good",
            "feeling great",
            "excited",
            "proud of",
        ),
    ),
    IntentRule(
        category=IntentCategory.THANKS,
        match_type=IntentMatchType.REGEX,
        pattern=r"\b(thanks|thank you|thank u|thx|ty|cheers|appreciate (it|you|that))\b",
    ),
    IntentRule(
        category=IntentCategory.FEATURE_INQUIRY,
        match_type=IntentMatchType.REGEX,
        pattern=(
            r"\b(what can you do|what do you do|how (do|does|can) (i|you|this)"
            r"|features?|meditat\w*|breathing|journal\w*|habits?|rewards?|leaderboard|sos)\b"
        ),
    ),
    IntentRule(
        category=IntentCategory.GREETING,
        match_type=IntentMatchType.REGEX,
        pattern=r"\b(hi|hello|hey|hiya|howdy|greetings|good (morning|afternoon|evening))\b",
    ),
    IntentRule(category=IntentCategory.DEFAULT, match_type=IntentMatchType.ANY),
)
