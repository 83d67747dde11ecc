"""
Merge server-confirmed workouts with the locally cached activities.

A local activity counts as already synced when a server workout has the same
key ``(name, duration or 0, calories, calendar day)``. Only the remaining
("unsynced") activities add to the server totals, so nothing is counted
twice once the server has confirmed it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .dto import WorkoutDto
from .timeutil import calendar_day, local_time, now_local

WEEKLY_GOAL_CALORIES = 2000

ActivityKey = Tuple[str, float, float, date]


class SyncState(str, Enum):
    LOCAL_ONLY = "local-only"
    PENDING_SYNC = "pending-sync"
    SYNCED = "synced"
    SYNC_FAILED = "sync-failed"


ALLOWED_TRANSITIONS = {
    SyncState.LOCAL_ONLY: {SyncState.PENDING_SYNC, SyncState.SYNCED},
    SyncState.PENDING_SYNC: {SyncState.SYNCED, SyncState.SYNC_FAILED},
    SyncState.SYNCED: set(),
    # no retry; only a later server fetch can confirm a failed write
    SyncState.SYNC_FAILED: {SyncState.SYNCED},
}


class InvalidSyncTransition(Exception):
    def __init__(self, current: SyncState, target: SyncState):
        super().__init__(f"cannot move activity from {current.value} to {target.value}")
        self.current = current
        self.target = target


@dataclass
class Activity:
    id: str
    user_id: str
    name: str
    calories: float
    timestamp: datetime
    duration: Optional[float] = None
    sync_state: SyncState = SyncState.LOCAL_ONLY
    server_id: Optional[str] = None

    def __post_init__(self):
        self.timestamp = local_time(self.timestamp)

    @property
    def key(self) -> ActivityKey:
        return activity_key(self.name, self.duration, self.calories, self.timestamp)

    def transition(self, target: SyncState) -> None:
        if target not in ALLOWED_TRANSITIONS[self.sync_state]:
            raise InvalidSyncTransition(self.sync_state, target)
        self.sync_state = target

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "name": self.name,
            "calories": self.calories,
            "duration": self.duration,
            "timestamp": self.timestamp.isoformat(),
            "syncState": self.sync_state.value,
            "serverId": self.server_id,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Activity":
        return cls(
            id=str(d["id"]),
            user_id=str(d.get("userId", "")),
            name=d["name"],
            calories=float(d.get("calories") or 0),
            duration=d.get("duration"),
            timestamp=datetime.fromisoformat(d["timestamp"]),
            sync_state=SyncState(d.get("syncState", SyncState.LOCAL_ONLY.value)),
            server_id=d.get("serverId"),
        )

    @classmethod
    def from_workout(cls, workout: WorkoutDto, user_id: str = "") -> "Activity":
        return cls(
            id=f"srv-{workout.id}",
            user_id=workout.user_id or user_id,
            name=workout.type,
            calories=workout.calories_burned,
            duration=workout.duration,
            timestamp=workout.date or now_local(),
            sync_state=SyncState.SYNCED,
            server_id=workout.id,
        )


def activity_key(
    name: str, duration: Optional[float], calories: Optional[float], when: datetime
) -> ActivityKey:
    return (name.strip(), float(duration or 0), float(calories or 0), calendar_day(when))


def workout_key(workout: WorkoutDto) -> ActivityKey:
    return activity_key(
        workout.type,
        workout.duration,
        workout.calories_burned,
        workout.date or now_local(),
    )


def unsynced_activities(
    activities: Iterable[Activity], workouts: Iterable[WorkoutDto]
) -> List[Activity]:
    server_keys = {workout_key(w) for w in workouts}
    return [a for a in activities if a.key not in server_keys]


def merge_activities(
    workouts: Iterable[WorkoutDto], activities: Iterable[Activity], user_id: str = ""
) -> List[Activity]:
    """Server workouts plus unsynced local activities, newest first."""
    workouts = list(workouts)
    merged = [Activity.from_workout(w, user_id) for w in workouts]
    merged.extend(unsynced_activities(activities, workouts))
    merged.sort(key=lambda a: a.timestamp, reverse=True)
    return merged


@dataclass
class ActivitySummary:
    total_calories: float = 0
    total_duration: float = 0
    total_workouts: int = 0
    avg_calories_per_workout: int = 0
    weekly_progress: float = 0
    activities: List[Activity] = field(default_factory=list)


def summarize(
    workouts: Iterable[WorkoutDto],
    activities: Iterable[Activity],
    weekly_goal: float = WEEKLY_GOAL_CALORIES,
    user_id: str = "",
) -> ActivitySummary:
    workouts = list(workouts)
    extra = unsynced_activities(activities, workouts)

    total_calories = sum(w.calories_burned or 0 for w in workouts) + sum(
        a.calories or 0 for a in extra
    )
    total_duration = sum(w.duration or 0 for w in workouts) + sum(
        a.duration or 0 for a in extra
    )
    total_workouts = len(workouts) + len(extra)
    avg = round(total_calories / total_workouts) if total_workouts else 0
    progress = min(total_calories / weekly_goal * 100, 100) if weekly_goal else 0

    return ActivitySummary(
        total_calories=total_calories,
        total_duration=total_duration,
        total_workouts=total_workouts,
        avg_calories_per_workout=avg,
        weekly_progress=progress,
        activities=merge_activities(workouts, extra, user_id),
    )


def daily_total(activities: Iterable[Activity], today: Optional[date] = None) -> float:
    today = today or date.today()
    return sum(a.calories for a in activities if calendar_day(a.timestamp) == today)


def calculate_streak(activities: Iterable[Activity], today: Optional[date] = None) -> int:
    """Consecutive days with activity, walking back from today."""
    days = {calendar_day(a.timestamp) for a in activities}
    current = today or date.today()
    streak = 0
    while current in days:
        streak += 1
        current -= timedelta(days=1)
    return streak
