# burnmate/leaderboard.py
"""
Global calorie leaderboard.

Workouts are grouped per user (sum of calories, number of workouts), the
owning user is left-outer-joined for display fields and the result is ranked
by total calories, highest first. Users without workouts never show up.
Nothing is stored; every read recomputes the ranking.
"""
from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import func

from . import db
from .models.user import User
from .models.workout import Workout

ANONYMOUS_NAME = "Anonymous"


@dataclass
class LeaderboardEntry:
    user_id: str
    name: str
    avatar_url: str
    total_calories: float
    workouts_count: int
    rank: int

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        return {
            "userId": d["user_id"],
            "name": d["name"],
            "avatarUrl": d["avatar_url"],
            "totalCalories": d["total_calories"],
            "workoutsCount": d["workouts_count"],
            "rank": d["rank"],
        }


def rank_rows(rows: Iterable[Any]) -> List[LeaderboardEntry]:
    """
    Map already-sorted aggregate rows to ranked entries (rank = 1-based
    position). Missing users fall back to "Anonymous" and an empty avatar.
    """
    entries = []
    for i, row in enumerate(rows, start=1):
        name: Optional[str] = row.name
        avatar: Optional[str] = row.avatar_url
        entries.append(
            LeaderboardEntry(
                user_id=str(row.user_id),
                name=name if name is not None else ANONYMOUS_NAME,
                avatar_url=avatar if avatar is not None else "",
                total_calories=row.total_calories or 0,
                workouts_count=int(row.workouts_count or 0),
                rank=i,
            )
        )
    return entries


def build_leaderboard() -> List[LeaderboardEntry]:
    totals = (
        db.session.query(
            Workout.user_id.label("user_id"),
            func.coalesce(func.sum(Workout.calories_burned), 0).label("total_calories"),
            func.count(Workout.id).label("workouts_count"),
        )
        .group_by(Workout.user_id)
        .subquery()
    )

    rows = (
        db.session.query(
            totals.c.user_id,
            totals.c.total_calories,
            totals.c.workouts_count,
            User.name.label("name"),
            User.avatar_url.label("avatar_url"),
        )
        .outerjoin(User, User.id == totals.c.user_id)
        # ties resolved by user id so the ranking is stable between reads
        .order_by(totals.c.total_calories.desc(), totals.c.user_id.asc())
        .all()
    )

    return rank_rows(rows)
