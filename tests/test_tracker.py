import logging
import random
from datetime import date, datetime, timedelta, timezone

import pytest
import requests

from burnmate.client.api import ApiError
from burnmate.client.dto import AuthUser, WorkoutDto
from burnmate.client.reconciler import SyncState
from burnmate.client.repository import InMemoryActivityRepository
from burnmate.client.tracker import ActivityTracker, activity_label, parse_activity_label

NOW = datetime(2025, 6, 10, 9, 30)


class FakeApi:
    def __init__(self, fail_with=None):
        self.fail_with = fail_with
        self.created = []
        self.server_workouts = []

    def add_workout(self, workout):
        self.created.append(workout)
        if self.fail_with is not None:
            raise self.fail_with
        saved = WorkoutDto(
            id=str(len(self.created)),
            user_id="1",
            type=workout.type,
            duration=workout.duration,
            calories_burned=workout.calories_burned,
            date=workout.date,
        )
        self.server_workouts.append(saved)
        return saved

    def get_workouts(self, user_id):
        return list(self.server_workouts)


@pytest.fixture
def user():
    return AuthUser(id="1", name="Asha", email="asha@example.com")


@pytest.fixture
def repo():
    return InMemoryActivityRepository()


def _tracker(user, api, repo, now=NOW):
    return ActivityTracker(user, api, repo, clock=lambda: now, rng=random.Random(7))


def test_add_activity_syncs_and_updates_totals(user, repo):
    api = FakeApi()
    tracker = _tracker(user, api, repo)

    activity = tracker.add_activity("Dance", 90, duration=15)

    assert activity.sync_state == SyncState.SYNCED
    assert activity.server_id == "1"
    assert api.created[0].date == NOW.astimezone()
    assert api.created[0].duration == 15
    assert tracker.daily_total == 90
    assert tracker.streak == 1
    assert tracker.leaderboard[0].activity == "Dance (15 min)"
    assert "Asha" in tracker.leaderboard[0].fun_caption


@pytest.mark.parametrize(
    "error",
    [ApiError(500, "Server error"), requests.ConnectionError("backend down")],
)
def test_failed_persist_keeps_local_state_and_logs(user, repo, caplog, error):
    api = FakeApi(fail_with=error)
    tracker = _tracker(user, api, repo)

    with caplog.at_level(logging.WARNING, logger="burnmate.client.tracker"):
        activity = tracker.add_activity("Cycling", 220, duration=20)

    assert activity.sync_state == SyncState.SYNC_FAILED
    assert len(api.created) == 1  # single attempt, no retry
    assert tracker.daily_total == 220
    assert "Failed to persist activity" in caplog.text

    stored = repo.load("1")["activities"]
    assert stored[0]["syncState"] == "sync-failed"


def test_cache_survives_reload(user, repo):
    tracker = _tracker(user, FakeApi(), repo)
    tracker.add_activity("Yoga", 40, duration=10)

    reloaded = _tracker(user, FakeApi(), repo)
    reloaded.load()
    assert [a.name for a in reloaded.activities] == ["Yoga"]
    assert reloaded.activities[0].sync_state == SyncState.SYNCED
    assert len(reloaded.leaderboard) == 1


def test_sync_with_server_confirms_failed_write(user, repo):
    api = FakeApi(fail_with=ApiError(503, "busy"))
    tracker = _tracker(user, api, repo)
    activity = tracker.add_activity("Running", 300, duration=30)
    assert activity.sync_state == SyncState.SYNC_FAILED

    # the write did land after all
    api.server_workouts.append(
        WorkoutDto(id="77", type="Running", duration=30, calories_burned=300, date=NOW.replace(hour=10))
    )
    summary = tracker.sync_with_server()

    assert tracker.activities[0].sync_state == SyncState.SYNCED
    assert summary.total_calories == 300
    assert summary.total_workouts == 1


def test_sync_with_server_counts_unsynced_once(user, repo):
    api = FakeApi(fail_with=ApiError(500, "nope"))
    tracker = _tracker(user, api, repo)
    tracker.add_activity("Walk the dog", 60, duration=15)

    server = [WorkoutDto(id="5", type="Running", duration=30, calories_burned=300, date=NOW)]
    summary = tracker.sync_with_server(server)
    assert summary.total_calories == 360
    assert tracker.activities[0].sync_state == SyncState.SYNC_FAILED


def test_reflect_workout_is_not_resent(user, repo):
    api = FakeApi()
    tracker = _tracker(user, api, repo)
    workout = WorkoutDto(id="9", type="Squats", duration=10, calories_burned=70)

    activity = tracker.reflect_workout(workout)

    assert api.created == []
    assert activity.sync_state == SyncState.SYNCED
    assert activity.server_id == "9"
    assert tracker.daily_total == 70


def test_add_to_leaderboard_infers_activity(user, repo):
    api = FakeApi()
    tracker = _tracker(user, api, repo)

    entry = tracker.add_to_leaderboard("Play football (45 min)", 540, fun_caption="Goal!")

    assert entry.name == "Asha"
    assert entry.fun_caption == "Goal!"
    assert api.created[0].type == "Play football"
    assert api.created[0].duration == 45
    assert tracker.activities[0].name == "Play football"


def test_local_leaderboard_sorted_by_calories(user, repo):
    tracker = _tracker(user, FakeApi(), repo)
    tracker.add_activity("Walk", 50)
    tracker.add_activity("Run", 400)
    tracker.add_activity("Stairs", 120)
    assert [e.calories for e in tracker.leaderboard] == [400, 120, 50]


def test_streak_over_days(user, repo):
    api = FakeApi()
    for days_ago in (2, 1, 0):
        tracker = _tracker(user, api, repo, now=NOW - timedelta(days=days_ago))
        tracker.load()
        tracker.add_activity("Run", 100)
    assert tracker.streak == 3

    later = _tracker(user, api, repo, now=NOW + timedelta(days=2))
    later.load()
    assert later.streak == 0


def test_clear_user_data(user, repo):
    tracker = _tracker(user, FakeApi(), repo)
    tracker.add_activity("Run", 100)
    tracker.clear_user_data()
    assert tracker.activities == []
    assert tracker.leaderboard == []
    assert repo.load("1") == {"activities": [], "leaderboard": []}


def test_label_helpers():
    assert activity_label("Running", 30) == "Running (30 min)"
    assert activity_label("Running") == "Running"
    assert parse_activity_label("Running (30 min)") == ("Running", 30)
    assert parse_activity_label("Gardening") == ("Gardening", None)


def test_names_are_stripped(user, repo):
    api = FakeApi()
    tracker = _tracker(user, api, repo)

    activity = tracker.add_activity("Running ", 300, duration=30)

    assert activity.name == "Running"
    assert api.created[0].type == "Running"
    assert tracker.leaderboard[0].activity == "Running (30 min)"
    summary = tracker.sync_with_server()
    assert summary.total_calories == 300
    assert summary.total_workouts == 1


def test_reflect_workout_keeps_server_date(user, repo, los_angeles_tz):
    clock = datetime(2025, 6, 12, 9, 0, tzinfo=los_angeles_tz)
    tracker = _tracker(user, FakeApi(), repo, now=clock)
    # 20:00 on the 10th in Los Angeles
    workout = WorkoutDto(
        id="9",
        type="Squats",
        duration=10,
        calories_burned=70,
        date=datetime(2025, 6, 11, 3, 0, tzinfo=timezone.utc),
    )

    activity = tracker.reflect_workout(workout)

    assert activity.timestamp == workout.date
    assert activity.timestamp.date() == date(2025, 6, 10)
    assert tracker.daily_total == 0

    summary = tracker.sync_with_server([workout])
    assert summary.total_calories == 70
    assert summary.total_workouts == 1
