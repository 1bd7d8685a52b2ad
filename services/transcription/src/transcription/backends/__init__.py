"""Concrete transcription backend implementations."""

from transcription.backends.assemblyai import AssemblyAIBackend
from transcription.backends.proxy import ProxyBackend

__all__ = ["AssemblyAIBackend", "ProxyBackend"]
