"""Subtask suggestion schema for structured LLM output"""
from typing import List

from pydantic import BaseModel, Field


class SubtaskSuggestions(BaseModel):
    """Suggested subtasks for a single task"""
    subtasks: List[str] = Field(
        default_factory=list,
        description="Short, concrete, actionable subtask titles in the order they should be done. "
                    "Each title is a single imperative phrase without numbering or bullet characters. "
                    "Empty when the task cannot be meaningfully broken down."
    )
