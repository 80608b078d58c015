"""
External integrations.

Modules:
- gemini_client: Gemini text generation with bounded retries
"""
from .gemini_client import GeminiClient, RetrySchedule

__all__ = ["GeminiClient", "RetrySchedule"]
