"""Labyrinth model."""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import String, Integer, Text, DateTime, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.database import Base

if TYPE_CHECKING:
    from app.models.solution import LabyrinthSolution


class Labyrinth(Base):
    """Labyrinth model for storing uploaded mazes."""

    __tablename__ = "labyrinths"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )
    data: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )  # canonical grid text with S and E marked
    size: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
    )  # e.g. "10 x 10"
    width: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    height: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    grid_format: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
    )  # dense, lattice
    difficulty: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )  # 1-5 stars
    remarks: Mapped[str] = mapped_column(
        Text,
        default="",
        nullable=False,
    )
    solution_length: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    creator_name: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    solutions: Mapped[list["LabyrinthSolution"]] = relationship(
        back_populates="labyrinth",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Labyrinth {self.name}>"
