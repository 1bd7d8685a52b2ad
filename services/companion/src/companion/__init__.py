"""
MindEase companion service.

Rule-based intent classification of user messages and the
conversation manager that answers them from a template table.
"""

from companion.intent_classifier import IntentClassifier, IntentMatch, classify

__all__ = ["IntentClassifier", "IntentMatch", "classify"]
