"""Subtask suggestion schema models for AI processing"""
from .suggestion_schema import SubtaskSuggestions

__all__ = [
    "SubtaskSuggestions",
]
