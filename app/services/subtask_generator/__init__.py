"""Subtask generator service module"""
from .subtask_generator_service import SubtaskGeneratorService, clean_suggestions, get_default_chain
from .models import SubtaskSuggestions
from .prompts import prompt_template

__all__ = [
    "SubtaskGeneratorService",
    "SubtaskSuggestions",
    "clean_suggestions",
    "get_default_chain",
    "prompt_template",
]
