"""Prompt template for breaking a task into subtasks"""
from langchain_core.prompts import ChatPromptTemplate


prompt_template = ChatPromptTemplate.from_messages([
    (
        "system",
        """You help people break personal tasks into small, concrete steps.

=== RULES ===
- Return between 3 and {max_subtasks} subtasks.
- Each subtask is a short imperative phrase (at most 10 words).
- No numbering, bullets, or trailing punctuation.
- Keep the language of the task title.
- Do not repeat the task title itself as a subtask.
- If the task is already a single atomic action, return an empty list.
"""
    ),
    (
        "user",
        """Suggest subtasks for this task.

Task title: {task_title}
"""
    )
])
