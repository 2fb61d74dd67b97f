"""Leaderboard routes for labyrinth rankings and player history."""

from fastapi import APIRouter, Query
from sqlalchemy import select

from app.api.deps import DbSession, Leaderboard, StoredLabyrinth
from app.config import get_settings
from app.models.labyrinth import Labyrinth
from app.models.solution import LabyrinthSolution
from app.schemas.solution import (
    LeaderboardEntryResponse,
    LeaderboardResponse,
    UserSolutionResponse,
    UserSolutionsResponse,
)

settings = get_settings()

router = APIRouter(prefix="/leaderboard", tags=["Leaderboard"])


@router.get(
    "/{labyrinth_id}",
    response_model=LeaderboardResponse,
)
async def get_labyrinth_leaderboard(
    labyrinth: StoredLabyrinth,
    leaderboard: Leaderboard,
    n: int = Query(settings.leaderboard_size, ge=1, le=100, description="Number of top entries"),
) -> LeaderboardResponse:
    """Get the best runs on a labyrinth.

    Fewer steps rank higher; equal step counts are ordered by solution time.
    """
    entries = await leaderboard.get_top_n(labyrinth.id, n=n)

    return LeaderboardResponse(
        entries=[LeaderboardEntryResponse.model_validate(e) for e in entries],
        total=len(entries),
        labyrinth_id=str(labyrinth.id),
    )


@router.get(
    "/users/{username}/solutions",
    response_model=UserSolutionsResponse,
)
async def get_user_solutions(
    username: str,
    db: DbSession,
    limit: int = Query(100, ge=1, le=500, description="Maximum entries to return"),
) -> UserSolutionsResponse:
    """Get a player's completed runs, newest first."""
    query = (
        select(LabyrinthSolution, Labyrinth.name)
        .join(Labyrinth, LabyrinthSolution.labyrinth_id == Labyrinth.id)
        .where(LabyrinthSolution.username == username)
        .order_by(LabyrinthSolution.completed_at.desc())
        .limit(limit)
    )
    result = await db.execute(query)

    solutions = [
        UserSolutionResponse(
            id=solution.id,
            labyrinth_id=solution.labyrinth_id,
            labyrinth_name=name,
            step_count=solution.step_count,
            solution_time_ms=solution.solution_time_ms,
            completed_at=solution.completed_at,
        )
        for solution, name in result.all()
    ]

    return UserSolutionsResponse(
        username=username,
        solutions=solutions,
        total=len(solutions),
    )
