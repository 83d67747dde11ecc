"""
Typed views of the JSON the API returns.

Every response crosses into client code through one of the ``from_dict``
mappers below, so the rest of the package never handles raw dicts.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from .timeutil import local_time, parse_server_timestamp


def _str_or_none(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _num(value: Any, default: float = 0) -> float:
    if value is None:
        return default
    return float(value)


@dataclass
class AuthUser:
    id: str
    name: str
    email: str
    age: Optional[int] = None
    gender: Optional[str] = None
    bio: str = ""
    avatar_url: str = ""

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "AuthUser":
        return cls(
            id=str(d.get("id") or d.get("_id")),
            name=d.get("name") or "",
            email=d.get("email") or "",
            age=d.get("age"),
            gender=d.get("gender"),
            bio=d.get("bio") or "",
            avatar_url=d.get("avatarUrl") or "",
        )


@dataclass
class WorkoutDto:
    type: str
    duration: float
    calories_burned: float
    date: Optional[datetime] = None
    id: Optional[str] = None
    user_id: Optional[str] = None

    def __post_init__(self):
        if self.date is not None:
            self.date = local_time(self.date)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "WorkoutDto":
        return cls(
            id=_str_or_none(d.get("id") or d.get("_id")),
            user_id=_str_or_none(d.get("userId")),
            type=d.get("type") or "",
            duration=_num(d.get("duration")),
            calories_burned=_num(d.get("caloriesBurned")),
            date=parse_server_timestamp(d.get("date")),
        )

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "type": self.type,
            "duration": self.duration,
            "caloriesBurned": self.calories_burned,
        }
        if self.date is not None:
            payload["date"] = self.date.isoformat()
        return payload


@dataclass
class IntakeDto:
    name: str
    calories: float
    protein: float = 0
    timestamp: Optional[datetime] = None
    id: Optional[str] = None
    user_id: Optional[str] = None

    def __post_init__(self):
        if self.timestamp is not None:
            self.timestamp = local_time(self.timestamp)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "IntakeDto":
        return cls(
            id=_str_or_none(d.get("id") or d.get("_id")),
            user_id=_str_or_none(d.get("userId")),
            name=d.get("name") or "",
            calories=_num(d.get("calories")),
            protein=_num(d.get("protein")),
            timestamp=parse_server_timestamp(d.get("timestamp")),
        )

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "name": self.name,
            "calories": self.calories,
            "protein": self.protein or 0,
        }
        if self.timestamp is not None:
            payload["timestamp"] = self.timestamp.isoformat()
        return payload


@dataclass
class LeaderboardEntryDto:
    user_id: str
    name: str
    total_calories: float
    workouts_count: int
    rank: int
    avatar_url: str = ""

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "LeaderboardEntryDto":
        return cls(
            user_id=str(d.get("userId")),
            name=d.get("name") or "Anonymous",
            avatar_url=d.get("avatarUrl") or "",
            total_calories=_num(d.get("totalCalories")),
            workouts_count=int(d.get("workoutsCount") or 0),
            rank=int(d["rank"]),
        )
