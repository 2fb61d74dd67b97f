"""Database models package."""

from app.models.labyrinth import Labyrinth
from app.models.solution import LabyrinthSolution

__all__ = ["Labyrinth", "LabyrinthSolution"]
