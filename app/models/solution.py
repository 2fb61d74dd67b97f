"""Labyrinth solution model."""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Integer, DateTime, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.database import Base

if TYPE_CHECKING:
    from app.models.labyrinth import Labyrinth


class LabyrinthSolution(Base):
    """A player's completed run through a labyrinth."""

    __tablename__ = "labyrinth_solutions"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    labyrinth_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("labyrinths.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    username: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        index=True,
    )
    solution_time_ms: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    step_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    completed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    labyrinth: Mapped["Labyrinth"] = relationship(back_populates="solutions")

    def __repr__(self) -> str:
        return f"<LabyrinthSolution {self.username} steps={self.step_count}>"
