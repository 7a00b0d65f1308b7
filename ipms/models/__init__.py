"""Database models."""

from ipms.models.department import Department
from ipms.models.idea import Idea, IdeaComment, IdeaReview
from ipms.models.history import IdeaStageHistory

__all__ = ["Department", "Idea", "IdeaComment", "IdeaReview", "IdeaStageHistory"]
