"""
Companion response templates.

One static reply per intent category, plus the welcome message and the
quick-start prompts offered on an empty conversation.
"""

from __future__ import annotations

from mindease_common.models import IntentCategory

WELCOME_MESSAGE = (
    "Hi there! 👋 I'm your wellness companion. I'm here to listen, support, "
    "and guide you. How are you feeling today?"
)

CRISIS_NOTE = "This is a supportive companion. For crisis support, call 988."

QUICK_PROMPTS: tuple[str, ...] = (
    "I'm feeling anxious",
    "Can't sleep tonight",
    "Feeling stressed at work",
    "Need motivation",
    "Feeling lonely",
)

RESPONSE_TEMPLATES: dict[IntentCategory, str] = {
    IntentCategory.ANXIETY: (
        "I hear you. Anxiety can be overwhelming. Try the 5-4-3-2-1 grounding technique: "
        "Name 5 things you see, 4 you can touch, 3 you hear, 2 you smell, and 1 you taste. "
        "Would you like to try our SOS Quick Relief exercises?"
    ),
    IntentCategory.SLEEP: (
        "Sleep troubles are challenging. Consider creating a bedtime routine: dim lights "
        "30 minutes before bed, try our Sleep Sounds, avoid screens, and practice gentle "
        "breathing. Have you tried our guided sleep meditation?"
    ),
    IntentCategory.OVERWHELM: (
        "It sounds like a lot is landing on you at once. Let's make it smaller: write down "
        "everything on your mind, then pick just one thing to do next and let the rest wait. "
        "A 2-minute box-breathing break (in 4, hold 4, out 4, hold 4) can help you reset."
    ),
    IntentCategory.STRESS: (
        "Work stress is common. Remember to take breaks every hour, practice deep breathing, "
        "and set boundaries. Our meditation timer can help you recharge. Would you like a "
        "5-minute stress relief session?"
    ),
    IntentCategory.LOW_MOOD: (
        "I'm sorry you're feeling this way. Your feelings are valid. Logging your mood and "
        "one small thing you're grateful for can help you notice patterns over time. "
        f"If things feel too heavy, please reach out to someone you trust. {CRISIS_NOTE}"
    ),
    IntentCategory.LONELINESS: (
        "Feeling lonely is valid. Connection matters. Consider journaling your thoughts, "
        "joining our community challenges, or reaching out to someone. I'm here to listen. "
        "What's on your mind?"
    ),
    IntentCategory.MOTIVATION: (
        "You're doing great by being here! Small steps matter. Set one tiny goal for today. "
        "Check out your Rewards page to see your progress - you've come so far! 🌟"
    ),
    IntentCategory.GRATITUDE: (
        "That's wonderful to hear! 🌈 Savouring good moments makes them last longer. "
        "Why not add this to your Gratitude Journal so you can look back on it later?"
    ),
    IntentCategory.GREETING: (
        "Hello! 😊 It's good to see you. How are you feeling right now?"
    ),
    IntentCategory.THANKS: (
        "You're very welcome! I'm always here whenever you want to talk. 💜"
    ),
    IntentCategory.FEATURE_INQUIRY: (
        "I can listen and suggest exercises, and the app has plenty more: mood and habit "
        "tracking, a gratitude and voice journal, guided meditation and breathing timers, "
        "sleep sounds, SOS quick relief, and rewards for your progress. "
        "What would you like to try?"
    ),
    IntentCategory.DEFAULT: (
        "I'm here to support you. Could you tell me more about how you're feeling? I can "
        "suggest mindfulness exercises, breathing techniques, or simply listen."
    ),
}


def get_response(category: IntentCategory) -> str:
    """Return the reply for *category* (the default reply if none is defined)."""
    return RESPONSE_TEMPLATES.get(category, RESPONSE_TEMPLATES[IntentCategory.DEFAULT])
