"""API dependencies for dependency injection."""

import uuid
from typing import Annotated

from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.database import get_db
from app.models.labyrinth import Labyrinth
from app.services.leaderboard_service import LeaderboardService, get_leaderboard_service


async def get_labyrinth_or_404(
    labyrinth_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> Labyrinth:
    """Load the labyrinth named in the path or fail with 404."""
    labyrinth = await db.get(Labyrinth, labyrinth_id)
    if labyrinth is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Labyrinth not found: {labyrinth_id}",
        )
    return labyrinth


def ensure_creator(labyrinth: Labyrinth, creator_name: str, action: str) -> None:
    """Only the player who uploaded a labyrinth may change it."""
    if labyrinth.creator_name != creator_name:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"You can only {action} your own labyrinths",
        )


# Type aliases for cleaner route signatures
DbSession = Annotated[AsyncSession, Depends(get_db)]
StoredLabyrinth = Annotated[Labyrinth, Depends(get_labyrinth_or_404)]
Leaderboard = Annotated[LeaderboardService, Depends(get_leaderboard_service)]
