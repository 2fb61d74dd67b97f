"""Attempt and leaderboard schemas."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.labyrinth import GridPosition


class AttemptRequest(BaseModel):
    """Schema for a player's drawn route through a labyrinth."""

    username: str = Field(..., min_length=1, max_length=50)
    moves: list[GridPosition] = Field(..., max_length=250_000)
    solution_time_ms: int = Field(0, ge=0)


class AttemptResponse(BaseModel):
    """Schema for the outcome of a replayed route."""

    status: str  # completed, blocked, invalid, incomplete
    position: GridPosition
    step_count: int
    optimal_step_count: int
    message: Optional[str] = None
    solution_id: Optional[uuid.UUID] = None
    is_personal_best: bool = False
    rank: Optional[int] = None


class LeaderboardEntryResponse(BaseModel):
    """Schema for a leaderboard entry."""

    model_config = ConfigDict(from_attributes=True)

    username: str
    labyrinth_id: str
    step_count: int
    solution_time_ms: int
    rank: int
    completed_at: datetime


class LeaderboardResponse(BaseModel):
    """Schema for leaderboard response."""

    entries: list[LeaderboardEntryResponse]
    total: int
    labyrinth_id: str


class UserSolutionResponse(BaseModel):
    """Schema for one of a player's completed runs."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    labyrinth_id: uuid.UUID
    labyrinth_name: str
    step_count: int
    solution_time_ms: int
    completed_at: datetime


class UserSolutionsResponse(BaseModel):
    """Schema for a player's run history."""

    username: str
    solutions: list[UserSolutionResponse]
    total: int
