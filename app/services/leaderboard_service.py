"""Labyrinth leaderboards using Redis sorted sets."""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

import redis.asyncio as redis

from app.db.redis import get_redis

logger = logging.getLogger(__name__)

# Solution times are capped so they never outweigh a single step
TIME_CAP_MS = 9_999_999
STEP_WEIGHT = TIME_CAP_MS + 1


def leaderboard_score(step_count: int, solution_time_ms: int) -> int:
    """Combine steps and time into one sortable score. Lower is better."""
    return step_count * STEP_WEIGHT + min(max(solution_time_ms, 0), TIME_CAP_MS)


@dataclass
class LeaderboardEntry:
    """A single leaderboard entry."""

    username: str
    labyrinth_id: str
    step_count: int
    solution_time_ms: int
    completed_at: datetime
    rank: int = 0


class LeaderboardService:
    """Service for ranking labyrinth runs by steps, then time."""

    LABYRINTH_LEADERBOARD_KEY = "leaderboard:labyrinth:{labyrinth_id}"
    ENTRY_DATA_KEY = "leaderboard:entry:{labyrinth_id}:{username}"

    def __init__(self):
        self._redis: Optional[redis.Redis] = None

    async def _get_redis(self) -> redis.Redis:
        """Get Redis client."""
        if self._redis is None:
            self._redis = await get_redis()
        return self._redis

    async def update_score(
        self,
        labyrinth_id: uuid.UUID,
        username: str,
        step_count: int,
        solution_time_ms: int,
    ) -> tuple[bool, Optional[int]]:
        """
        Record a completed run if it beats the player's previous best.

        Args:
            labyrinth_id: Labyrinth the run belongs to
            username: Player name
            step_count: Steps taken (lower is better)
            solution_time_ms: Time taken, used to break ties on steps

        Returns:
            Tuple of (is_personal_best, new_rank) or (False, None) if not a best
        """
        r = await self._get_redis()

        board_key = self.LABYRINTH_LEADERBOARD_KEY.format(labyrinth_id=str(labyrinth_id))
        score = leaderboard_score(step_count, solution_time_ms)

        existing = await r.zscore(board_key, username)
        if existing is not None and score >= int(existing):
            return False, None

        entry_data = {
            "username": username,
            "labyrinth_id": str(labyrinth_id),
            "step_count": step_count,
            "solution_time_ms": solution_time_ms,
            "completed_at": datetime.now(timezone.utc).isoformat(),
        }

        await r.hset(
            self.ENTRY_DATA_KEY.format(labyrinth_id=str(labyrinth_id), username=username),
            mapping=entry_data,
        )
        await r.zadd(board_key, {username: score})

        rank = await r.zrank(board_key, username)
        new_rank = rank + 1 if rank is not None else 1

        logger.info(
            f"New best on {labyrinth_id} for {username}: "
            f"{step_count} steps, {solution_time_ms}ms (rank {new_rank})"
        )
        return True, new_rank

    async def get_top_n(
        self,
        labyrinth_id: uuid.UUID,
        n: int = 10,
    ) -> list[LeaderboardEntry]:
        """
        Get the best runs on a labyrinth.

        Returns:
            Entries sorted by steps, then time, ranked from 1
        """
        r = await self._get_redis()

        board_key = self.LABYRINTH_LEADERBOARD_KEY.format(labyrinth_id=str(labyrinth_id))
        members = await r.zrange(board_key, 0, n - 1, withscores=True)

        result = []
        for username, score in members:
            entry_data = await r.hgetall(
                self.ENTRY_DATA_KEY.format(labyrinth_id=str(labyrinth_id), username=username)
            )
            if not entry_data:
                continue

            score = int(score)
            result.append(
                LeaderboardEntry(
                    username=entry_data.get("username", username),
                    labyrinth_id=entry_data.get("labyrinth_id", str(labyrinth_id)),
                    step_count=int(entry_data.get("step_count", score // STEP_WEIGHT)),
                    solution_time_ms=int(entry_data.get("solution_time_ms", score % STEP_WEIGHT)),
                    completed_at=datetime.fromisoformat(
                        entry_data.get("completed_at", datetime.now(timezone.utc).isoformat())
                    ),
                    rank=len(result) + 1,
                )
            )

        return result

    async def get_user_rank(
        self,
        labyrinth_id: uuid.UUID,
        username: str,
    ) -> Optional[int]:
        """Get a player's rank on a labyrinth, or None if unranked."""
        r = await self._get_redis()

        board_key = self.LABYRINTH_LEADERBOARD_KEY.format(labyrinth_id=str(labyrinth_id))
        rank = await r.zrank(board_key, username)
        return rank + 1 if rank is not None else None

    async def remove_labyrinth(self, labyrinth_id: uuid.UUID) -> None:
        """Drop the leaderboard and entry data of a deleted labyrinth."""
        r = await self._get_redis()

        board_key = self.LABYRINTH_LEADERBOARD_KEY.format(labyrinth_id=str(labyrinth_id))
        usernames = await r.zrange(board_key, 0, -1)

        keys = [board_key] + [
            self.ENTRY_DATA_KEY.format(labyrinth_id=str(labyrinth_id), username=username)
            for username in usernames
        ]
        await r.delete(*keys)


_leaderboard_service: Optional[LeaderboardService] = None


def get_leaderboard_service() -> LeaderboardService:
    """Get singleton leaderboard service."""
    global _leaderboard_service
    if _leaderboard_service is None:
        _leaderboard_service = LeaderboardService()
    return _leaderboard_service
