"""
Prometheus metrics helpers for MindEase.

Provides shared metric definitions for exposing Prometheus-format
metrics from all services: transcription submissions, status polls,
in-flight jobs, and classified companion intents.
"""

from __future__ import annotations

from prometheus_client import Counter, Gauge

transcription_submissions_total = Counter(
    "mindease_transcription_submissions_total",
    "Transcription job submissions by outcome",
    ["outcome"],
)
transcription_polls_total = Counter(
    "mindease_transcription_polls_total",
    "Transcription status polls by result",
    ["result"],
)
transcription_jobs_in_flight = Gauge(
    "mindease_transcription_jobs_in_flight",
    "Transcription jobs currently pending a terminal status",
)
intent_classifications_total = Counter(
    "mindease_intent_classifications_total",
    "Companion messages classified per intent category",
    ["category"],
)
