"""Labyrinth routes for uploading, browsing, editing and playing mazes."""

import logging
from typing import Optional

import redis.asyncio as redis
from fastapi import APIRouter, HTTPException, Query, Request, status
from sqlalchemy import select

from app.api.deps import DbSession, Leaderboard, StoredLabyrinth, ensure_creator
from app.api.rate_limit import limiter
from app.config import get_settings
from app.core.grid import GridFormat, Position
from app.core.maze_solver import ReplayStatus
from app.core.maze_validator import ValidationResult, validate_maze
from app.models.labyrinth import Labyrinth
from app.models.solution import LabyrinthSolution
from app.schemas.labyrinth import (
    LabyrinthCreateRequest,
    LabyrinthCreateResponse,
    LabyrinthDeleteRequest,
    LabyrinthDetail,
    LabyrinthListItem,
    LabyrinthListResponse,
    LabyrinthUpdateRequest,
    SolveRequest,
    SolveResponse,
    ValidateRequest,
    ValidateResponse,
)
from app.schemas.solution import AttemptRequest, AttemptResponse
from app.services.labyrinth_service import (
    load_labyrinth,
    replay_attempt,
    solve_labyrinth,
    to_grid_position,
    to_validate_response,
    validate_upload,
)

logger = logging.getLogger(__name__)

settings = get_settings()

router = APIRouter(prefix="/labyrinths", tags=["Labyrinths"])


def _reject(result: ValidationResult) -> HTTPException:
    """Build the 422 response for a maze that failed validation."""
    return HTTPException(
        status_code=422,
        detail={
            "reason": result.reason.value,
            "message": result.message,
        },
    )


@router.post(
    "/validate",
    response_model=ValidateResponse,
)
async def validate_labyrinth(request: ValidateRequest) -> ValidateResponse:
    """Check maze text without saving it.

    Reports the detected format, size, endpoints and shortest path, or the
    reason the maze was rejected.
    """
    result = validate_upload(request.data, request.compact, request.grid_format)
    return to_validate_response(result)


@router.post(
    "",
    response_model=LabyrinthCreateResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(settings.rate_limit_uploads)
async def create_labyrinth(
    request: Request,
    payload: LabyrinthCreateRequest,
    db: DbSession,
) -> LabyrinthCreateResponse:
    """Upload a new labyrinth.

    The maze must have a reachable exit. The stored grid carries exactly one
    S and one E, and the shortest solution length is saved alongside it.
    """
    result = validate_upload(payload.data, payload.compact, payload.grid_format)
    if not result.ok:
        raise _reject(result)

    labyrinth = Labyrinth(
        name=payload.name,
        data=result.serialized_grid(),
        size=result.size,
        width=result.grid.width,
        height=result.grid.height,
        grid_format=result.fmt.value,
        difficulty=payload.difficulty,
        remarks=payload.remarks,
        solution_length=result.solution_length,
        creator_name=payload.creator_name,
    )

    db.add(labyrinth)
    await db.commit()
    await db.refresh(labyrinth)

    logger.info(
        f"Labyrinth {labyrinth.id} '{labyrinth.name}' uploaded by {labyrinth.creator_name} "
        f"({labyrinth.size}, {labyrinth.grid_format}, {labyrinth.solution_length} steps)"
    )

    return LabyrinthCreateResponse(
        id=labyrinth.id,
        message=(
            f'Labyrinth "{labyrinth.name}" successfully uploaded! '
            f"The solution length is {labyrinth.solution_length} steps."
        ),
        size=labyrinth.size,
        grid_format=result.fmt,
        solution_length=labyrinth.solution_length,
    )


@router.get(
    "",
    response_model=LabyrinthListResponse,
)
async def list_labyrinths(
    db: DbSession,
    difficulty: Optional[int] = Query(None, ge=1, le=5, description="Filter by star rating"),
    size: Optional[int] = Query(None, ge=1, description="Filter by width (first number of the size)"),
    creator_name: Optional[str] = Query(None, description="Filter by creator"),
) -> LabyrinthListResponse:
    """List labyrinths, newest first.

    Grid data is not included - use GET /v1/labyrinths/{id} for full details.
    """
    query = select(Labyrinth)

    if difficulty is not None:
        query = query.where(Labyrinth.difficulty == difficulty)

    if size is not None:
        query = query.where(Labyrinth.size.like(f"{size} x %"))

    if creator_name:
        query = query.where(Labyrinth.creator_name == creator_name)

    query = query.order_by(Labyrinth.created_at.desc(), Labyrinth.name)

    result = await db.execute(query)
    labyrinths = result.scalars().all()

    items = [LabyrinthListItem.model_validate(labyrinth) for labyrinth in labyrinths]

    return LabyrinthListResponse(labyrinths=items, total=len(items))


@router.get(
    "/{labyrinth_id}",
    response_model=LabyrinthDetail,
)
async def get_labyrinth(labyrinth: StoredLabyrinth) -> LabyrinthDetail:
    """Get a labyrinth including its grid data."""
    return LabyrinthDetail.model_validate(labyrinth)


@router.put(
    "/{labyrinth_id}",
    response_model=LabyrinthDetail,
)
async def update_labyrinth(
    payload: LabyrinthUpdateRequest,
    labyrinth: StoredLabyrinth,
    db: DbSession,
) -> LabyrinthDetail:
    """Edit a labyrinth's name, difficulty and remarks.

    The grid itself cannot be changed. It is re-checked with its stored
    format and explicit markers so the saved solution length stays correct.
    """
    ensure_creator(labyrinth, payload.creator_name, "edit")

    result = validate_maze(
        labyrinth.data,
        fmt=GridFormat(labyrinth.grid_format),
        require_markers=True,
    )
    if not result.ok:
        logger.warning(f"Stored labyrinth {labyrinth.id} no longer validates: {result.reason.value}")
        raise _reject(result)

    labyrinth.name = payload.name
    labyrinth.difficulty = payload.difficulty
    labyrinth.remarks = payload.remarks
    labyrinth.solution_length = result.solution_length

    await db.commit()
    await db.refresh(labyrinth)

    return LabyrinthDetail.model_validate(labyrinth)


@router.delete(
    "/{labyrinth_id}",
    status_code=status.HTTP_200_OK,
)
async def delete_labyrinth(
    payload: LabyrinthDeleteRequest,
    labyrinth: StoredLabyrinth,
    db: DbSession,
    leaderboard: Leaderboard,
) -> dict:
    """Delete a labyrinth together with its runs and leaderboard."""
    ensure_creator(labyrinth, payload.creator_name, "delete")

    labyrinth_id = labyrinth.id
    await db.delete(labyrinth)
    await db.commit()

    try:
        await leaderboard.remove_labyrinth(labyrinth_id)
    except redis.RedisError as e:
        logger.warning(f"Could not clear leaderboard for {labyrinth_id}: {e}")

    logger.info(f"Labyrinth {labyrinth_id} deleted by {payload.creator_name}")
    return {"message": "Labyrinth deleted successfully"}


@router.post(
    "/{labyrinth_id}/solve",
    response_model=SolveResponse,
)
async def solve_stored_labyrinth(
    labyrinth: StoredLabyrinth,
    request: Optional[SolveRequest] = None,
) -> SolveResponse:
    """Compute the shortest path through a stored labyrinth.

    Uses the format saved at upload time unless one is given.
    """
    loaded = load_labyrinth(labyrinth, request.grid_format if request else None)
    solution = solve_labyrinth(loaded)

    return SolveResponse(
        labyrinth_id=labyrinth.id,
        grid_format=loaded.grid_format,
        start=to_grid_position(loaded.endpoints.start),
        end=to_grid_position(loaded.endpoints.end),
        solvable=solution.solvable,
        path=[to_grid_position(pos) for pos in solution.path],
        step_count=solution.step_count,
    )


@router.post(
    "/{labyrinth_id}/attempts",
    response_model=AttemptResponse,
)
async def submit_attempt(
    payload: AttemptRequest,
    labyrinth: StoredLabyrinth,
    db: DbSession,
    leaderboard: Leaderboard,
) -> AttemptResponse:
    """Replay a route drawn by a player.

    Completed routes are saved to the player's history and submitted to the
    labyrinth's leaderboard.
    """
    loaded = load_labyrinth(labyrinth)
    replay = replay_attempt(loaded, (Position(m.x, m.y) for m in payload.moves))

    if replay is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Labyrinth has no start or exit",
        )

    response = AttemptResponse(
        status=replay.status.value,
        position=to_grid_position(replay.position),
        step_count=replay.step_count,
        optimal_step_count=labyrinth.solution_length,
        message=replay.message,
    )

    if replay.status != ReplayStatus.COMPLETED:
        return response

    solution = LabyrinthSolution(
        labyrinth_id=labyrinth.id,
        username=payload.username,
        solution_time_ms=payload.solution_time_ms,
        step_count=replay.step_count,
    )
    db.add(solution)
    await db.commit()
    await db.refresh(solution)

    response.solution_id = solution.id
    response.message = f"You solved the maze in {replay.step_count} steps!"

    try:
        is_best, rank = await leaderboard.update_score(
            labyrinth_id=labyrinth.id,
            username=payload.username,
            step_count=replay.step_count,
            solution_time_ms=payload.solution_time_ms,
        )
        response.is_personal_best = is_best
        response.rank = rank if is_best else await leaderboard.get_user_rank(
            labyrinth.id, payload.username
        )
    except redis.RedisError as e:
        logger.warning(f"Leaderboard update failed for {labyrinth.id}: {e}")

    return response
