"""Prompt templates for subtask generation"""
from .subtask_prompt import prompt_template

__all__ = [
    "prompt_template",
]
