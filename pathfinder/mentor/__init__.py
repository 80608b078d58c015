"""
AI mentor: prompt templates and the interaction state machine.
"""
from .interaction import InteractionSession, InteractionStatus, MentorInteraction

__all__ = ["InteractionSession", "InteractionStatus", "MentorInteraction"]
