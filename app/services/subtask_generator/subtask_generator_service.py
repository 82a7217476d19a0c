"""AI subtask generation with LangChain"""
from typing import Any, List, Optional
import logging

from langchain_openai import ChatOpenAI

from app import config
from .models import SubtaskSuggestions
from .prompts import prompt_template

logger = logging.getLogger(__name__)

_default_chain: Optional[Any] = None


def get_default_chain():
    """Prompt | structured LLM, built on first use"""
    global _default_chain

    if _default_chain is None:
        llm = ChatOpenAI(model=config.SUBTASK_MODEL, temperature=0.4)
        _default_chain = prompt_template | llm.with_structured_output(SubtaskSuggestions)

    return _default_chain


def clean_suggestions(raw: List[str], limit: int) -> List[str]:
    """Strip list markers and whitespace, drop blanks and duplicates, keep order"""
    cleaned: List[str] = []
    seen = set()

    for item in raw:
        text = item.strip().lstrip("-*•").strip()
        if not text:
            continue
        key = text.casefold()
        if key in seen:
            continue
        seen.add(key)
        cleaned.append(text)

    return cleaned[:limit]


class SubtaskGeneratorService:
    """Suggests subtask titles for a task title"""

    def __init__(self, chain: Optional[Any] = None, limit: Optional[int] = None):
        self._chain = chain
        self.limit = limit if limit is not None else config.SUBTASK_SUGGESTION_LIMIT

    @property
    def chain(self):
        if self._chain is None:
            self._chain = get_default_chain()
        return self._chain

    async def generate(self, task_title: str) -> List[str]:
        """
        Ask the LLM for subtask suggestions.

        Args:
            task_title: Title of the parent task

        Returns:
            Suggested subtask titles (possibly empty)

        Raises:
            ValueError: If the title is blank
        """
        task_title = task_title.strip()
        if not task_title:
            raise ValueError("taskTitle is required")

        logger.info(f"Generating subtasks for task: {task_title}")

        result: SubtaskSuggestions = await self.chain.ainvoke({
            "task_title": task_title,
            "max_subtasks": self.limit,
        })

        suggestions = clean_suggestions(result.subtasks, self.limit)
        logger.info(f"Generated {len(suggestions)} subtasks for task: {task_title}")
        return suggestions
