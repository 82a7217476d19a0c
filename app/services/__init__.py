"""Services module"""

from app.services.embeddings import TaskEmbeddingService
from app.services.profile import ProfileService
from app.services.smart_search import SmartSearchService
from app.services.subtask_generator import SubtaskGeneratorService

__all__ = [
    "TaskEmbeddingService",
    "ProfileService",
    "SmartSearchService",
    "SubtaskGeneratorService",
]
