"""
Per-user activity tracker.

Keeps the local activity cache and the local leaderboard feed for one signed
in user. Every new activity is written to the cache first and then sent to
the API exactly once; a failed send leaves the activity in the cache as
``sync-failed`` and is only logged. A later :meth:`ActivityTracker.sync_with_server`
marks activities the server turns out to hold as ``synced``.
"""
from __future__ import annotations

import logging
import random
import re
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

import requests

from .api import ApiError
from .dto import AuthUser, WorkoutDto
from .reconciler import (
    Activity,
    ActivitySummary,
    SyncState,
    calculate_streak,
    daily_total,
    summarize,
    workout_key,
)
from .repository import ActivityRepository
from .timeutil import calendar_day, now_local

logger = logging.getLogger(__name__)

_LABEL_RE = re.compile(r"^(.*)\s*\((\d+)\s*min\)$", re.IGNORECASE)

FUN_CAPTIONS = (
    "{name} crushed it! 💪",
    "{name} is on fire! 🔥",
    "{name} just leveled up! ⚡",
    "{name} burned through that workout! 🌟",
    "{name} is unstoppable! 🚀",
)


def activity_label(name: str, duration: Optional[float] = None) -> str:
    if duration:
        return f"{name} ({duration:g} min)"
    return name


def parse_activity_label(label: str) -> Tuple[str, Optional[int]]:
    """'Running (30 min)' -> ('Running', 30); anything else -> (label, None)."""
    match = _LABEL_RE.match(label)
    if match:
        return match.group(1).strip(), int(match.group(2))
    return label.strip(), None


@dataclass
class LocalLeaderboardEntry:
    id: str
    user_id: str
    name: str
    activity: str
    calories: float
    fun_caption: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "name": self.name,
            "activity": self.activity,
            "calories": self.calories,
            "funCaption": self.fun_caption,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "LocalLeaderboardEntry":
        return cls(
            id=str(d["id"]),
            user_id=str(d.get("userId", "")),
            name=d.get("name", ""),
            activity=d.get("activity", ""),
            calories=float(d.get("calories") or 0),
            fun_caption=d.get("funCaption"),
        )


class ActivityTracker:
    def __init__(
        self,
        user: AuthUser,
        api,
        repository: ActivityRepository,
        clock: Optional[Callable[[], datetime]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.user = user
        self.api = api
        self.repository = repository
        self._clock = clock or now_local
        self._rng = rng or random.Random()
        self._activities: List[Activity] = []
        self._leaderboard: List[LocalLeaderboardEntry] = []

    # ---- cache -------------------------------------------------------
    def load(self) -> None:
        snapshot = self.repository.load(self.user.id)
        self._activities = [Activity.from_dict(a) for a in snapshot.get("activities", [])]
        self._leaderboard = [
            LocalLeaderboardEntry.from_dict(e) for e in snapshot.get("leaderboard", [])
        ]

    def _save(self) -> None:
        self.repository.save(
            self.user.id,
            {
                "activities": [a.to_dict() for a in self._activities],
                "leaderboard": [e.to_dict() for e in self._leaderboard],
            },
        )

    # ---- derived values ----------------------------------------------
    @property
    def activities(self) -> List[Activity]:
        return list(self._activities)

    @property
    def leaderboard(self) -> List[LocalLeaderboardEntry]:
        return list(self._leaderboard)

    @property
    def daily_total(self) -> float:
        return daily_total(self._activities, calendar_day(self._clock()))

    @property
    def streak(self) -> int:
        return calculate_streak(self._activities, calendar_day(self._clock()))

    # ---- mutations ---------------------------------------------------
    def add_activity(
        self, name: str, calories: float, duration: Optional[float] = None
    ) -> Activity:
        activity = self._new_activity(name, calories, duration)
        self._push_leaderboard(activity_label(activity.name, duration), calories, self._caption())
        self._save()
        self._persist(activity)
        return activity

    def reflect_workout(self, workout: WorkoutDto) -> Activity:
        """Mirror a workout the server already holds into the local cache."""
        activity = self._new_activity(
            workout.type, workout.calories_burned, workout.duration, when=workout.date
        )
        activity.server_id = workout.id
        activity.transition(SyncState.SYNCED)
        self._push_leaderboard(
            activity_label(workout.type, workout.duration),
            workout.calories_burned,
            self._caption(),
        )
        self._save()
        return activity

    def add_to_leaderboard(
        self, activity: str, calories: float, fun_caption: Optional[str] = None
    ) -> LocalLeaderboardEntry:
        entry = self._push_leaderboard(activity, calories, fun_caption)
        name, duration = parse_activity_label(activity)
        new_activity = self._new_activity(name, calories, duration)
        self._save()
        self._persist(new_activity)
        return entry

    def sync_with_server(
        self, workouts: Optional[Iterable[WorkoutDto]] = None
    ) -> ActivitySummary:
        """
        Reconcile the cache with the server's workouts (fetched when not
        given). Errors while fetching propagate to the caller.
        """
        if workouts is None:
            workouts = self.api.get_workouts(self.user.id)
        workouts = list(workouts)
        server_keys = {workout_key(w) for w in workouts}

        for activity in self._activities:
            if activity.sync_state != SyncState.SYNCED and activity.key in server_keys:
                activity.transition(SyncState.SYNCED)
        self._save()

        return summarize(workouts, self._activities, user_id=self.user.id)

    def clear_user_data(self) -> None:
        self._activities = []
        self._leaderboard = []
        self.repository.clear(self.user.id)

    # ---- internals ---------------------------------------------------
    def _new_activity(
        self,
        name: str,
        calories: float,
        duration: Optional[float],
        when: Optional[datetime] = None,
    ) -> Activity:
        activity = Activity(
            id=f"act-{uuid.uuid4().hex}",
            user_id=self.user.id,
            name=name.strip(),
            calories=calories,
            duration=duration,
            timestamp=when or self._clock(),
        )
        self._activities.insert(0, activity)
        return activity

    def _push_leaderboard(
        self, label: str, calories: float, fun_caption: Optional[str]
    ) -> LocalLeaderboardEntry:
        entry = LocalLeaderboardEntry(
            id=f"lb-{uuid.uuid4().hex}",
            user_id=self.user.id,
            name=self.user.name,
            activity=label,
            calories=calories,
            fun_caption=fun_caption,
        )
        self._leaderboard.insert(0, entry)
        self._leaderboard.sort(key=lambda e: e.calories, reverse=True)
        return entry

    def _caption(self) -> str:
        return self._rng.choice(FUN_CAPTIONS).format(name=self.user.name)

    def _persist(self, activity: Activity) -> None:
        activity.transition(SyncState.PENDING_SYNC)
        self._save()
        try:
            created = self.api.add_workout(
                WorkoutDto(
                    type=activity.name,
                    duration=activity.duration or 0,
                    calories_burned=activity.calories,
                    date=activity.timestamp,
                )
            )
        except (ApiError, requests.RequestException):
            logger.warning(
                "Failed to persist activity %s to backend workout", activity.id, exc_info=True
            )
            activity.transition(SyncState.SYNC_FAILED)
        else:
            activity.server_id = created.id
            activity.transition(SyncState.SYNCED)
        self._save()
