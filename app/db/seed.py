"""Seed script to load the bundled sample labyrinths."""

import asyncio
import logging
from pathlib import Path
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.core.maze_parser import MazeFile, load_grid_files
from app.db.database import async_session_maker
from app.models.labyrinth import Labyrinth
from app.services.labyrinth_service import validate_upload

logger = logging.getLogger(__name__)

SEED_CREATOR = "labyrinth"


async def seed_labyrinth(session: AsyncSession, maze: MazeFile) -> Optional[Labyrinth]:
    """Seed a single labyrinth into the database.

    Args:
        session: Database session
        maze: Maze text and metadata loaded from disk

    Returns:
        Created or updated Labyrinth, or None if the maze does not validate
    """
    result = validate_upload(maze.text, compact=maze.compact)
    if not result.ok:
        logger.warning(f"Skipping sample maze {maze.name}: {result.message}")
        return None

    existing = (
        await session.execute(
            select(Labyrinth).where(
                Labyrinth.name == maze.name,
                Labyrinth.creator_name == SEED_CREATOR,
            )
        )
    ).scalar_one_or_none()

    if existing:
        # Update existing labyrinth with latest data from file
        existing.data = result.serialized_grid()
        existing.size = result.size
        existing.width = result.grid.width
        existing.height = result.grid.height
        existing.grid_format = result.fmt.value
        existing.solution_length = result.solution_length
        logger.info(f"Updated labyrinth: {maze.name} ({result.size})")
        return existing

    labyrinth = Labyrinth(
        name=maze.name,
        data=result.serialized_grid(),
        size=result.size,
        width=result.grid.width,
        height=result.grid.height,
        grid_format=result.fmt.value,
        difficulty=maze.difficulty,
        remarks="Sample labyrinth",
        solution_length=result.solution_length,
        creator_name=SEED_CREATOR,
    )

    session.add(labyrinth)
    await session.flush()

    logger.info(f"Created labyrinth: {labyrinth.name} ({labyrinth.size})")
    return labyrinth


async def seed_labyrinths(
    session: Optional[AsyncSession] = None,
    mazes_dir: Optional[Path] = None,
) -> list[Labyrinth]:
    """Seed every maze file in the mazes directory.

    Args:
        session: Optional database session. If not provided, creates one.
        mazes_dir: Optional directory override. Defaults to settings.mazes_dir.

    Returns:
        List of created or updated Labyrinth objects
    """
    mazes = load_grid_files(mazes_dir or get_settings().mazes_dir)

    async def _seed(db: AsyncSession) -> list[Labyrinth]:
        seeded = []
        for maze in mazes:
            labyrinth = await seed_labyrinth(db, maze)
            if labyrinth:
                seeded.append(labyrinth)
        await db.commit()
        return seeded

    if session is None:
        async with async_session_maker() as session:
            seeded = await _seed(session)
    else:
        seeded = await _seed(session)

    logger.info(f"Seeded {len(seeded)} labyrinths")
    return seeded


async def main():
    """Main entry point for running seed script."""
    logging.basicConfig(level=logging.INFO)
    await seed_labyrinths()


if __name__ == "__main__":
    asyncio.run(main())
