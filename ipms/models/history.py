"""Stage history model."""

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from ipms.database import Base


class IdeaStageHistory(Base):
    """Stage transition audit records - append-only."""

    __tablename__ = "idea_stage_history"

    history_id: Mapped[str] = mapped_column(UUID(as_uuid=False), primary_key=True)
    idea_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False), ForeignKey("ideas.idea_id"), nullable=False, index=True
    )
    from_stage: Mapped[str | None] = mapped_column(String(2), nullable=True)
    to_stage: Mapped[str] = mapped_column(String(2), nullable=False)
    from_status: Mapped[str | None] = mapped_column(String(20), nullable=True)
    to_status: Mapped[str] = mapped_column(String(20), nullable=False)
    changed_by: Mapped[str] = mapped_column(Text, nullable=False)
    change_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[str] = mapped_column(String(50), nullable=False)
