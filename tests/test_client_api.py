"""BurnMateClient and ActivityTracker running against the real Flask app."""
from datetime import datetime, timezone

import pytest

from burnmate.client.api import ApiError, BurnMateClient
from burnmate.client.dto import IntakeDto, WorkoutDto
from burnmate.client.reconciler import SyncState
from burnmate.client.repository import InMemoryActivityRepository
from burnmate.client.tracker import ActivityTracker


@pytest.fixture
def api(api_session):
    return BurnMateClient(base_url="http://testserver/api", session=api_session)


def test_register_stores_token(api, api_session):
    user = api.register("Meera", "meera@example.com", "secret123", age=27)
    assert user.name == "Meera"
    assert api_session.headers["Authorization"].startswith("Bearer ")
    assert api.get_profile(user.id).email == "meera@example.com"


def test_login_and_profile_update(api):
    created = api.register("Kabir", "kabir@example.com", "secret123")
    api.logout()
    user = api.login("kabir@example.com", "secret123")
    assert user.id == created.id

    updated = api.update_profile(user.id, bio="Evening cyclist", avatar_url="https://img/k.png")
    assert updated.bio == "Evening cyclist"
    assert updated.avatar_url == "https://img/k.png"


def test_errors_raise_api_error(api):
    with pytest.raises(ApiError) as exc:
        api.login("nobody@example.com", "secret123")
    assert exc.value.status_code == 401
    assert exc.value.message == "invalid credentials"


def test_workout_round_trip_and_leaderboard(api):
    user = api.register("Ravi", "ravi@example.com", "secret123")
    saved = api.add_workout(WorkoutDto(type="Running", duration=30, calories_burned=300))
    assert saved.id

    workouts = api.get_workouts(user.id)
    assert [(w.id, w.type, w.duration, w.calories_burned) for w in workouts] == [
        (saved.id, "Running", 30, 300)
    ]

    board = api.get_leaderboard()
    assert len(board) == 1
    assert board[0].user_id == user.id
    assert board[0].total_calories >= 300
    assert board[0].workouts_count >= 1
    assert board[0].rank == 1

    detail = api.get_leaderboard_user_workouts(user.id)
    assert detail[0].id == saved.id


def test_intake_flow(api):
    user = api.register("Nina", "nina@example.com", "secret123")
    entry = api.add_intake(IntakeDto(name="Apple", calories=80, timestamp=datetime(2025, 6, 10, 8, tzinfo=timezone.utc)))
    assert entry.protein == 0

    listed = api.list_intake(user.id, start="2025-06-10", end="2025-06-10T23:59:59")
    assert [e.id for e in listed] == [entry.id]

    assert api.remove_intake(entry.id) is True
    assert api.list_intake(user.id) == []


def test_health(api):
    assert api.health() == {"status": "ok"}


def test_tracker_end_to_end_no_double_count(api):
    user = api.register("Isha", "isha@example.com", "secret123")
    tracker = ActivityTracker(user, api, InMemoryActivityRepository())

    activity = tracker.add_activity("Jumping jacks", 100, duration=10)
    assert activity.sync_state == SyncState.SYNCED

    summary = tracker.sync_with_server()
    assert summary.total_calories == 100
    assert summary.total_workouts == 1
    assert tracker.daily_total == 100
    assert tracker.streak == 1


def test_tracker_in_los_angeles_evening(api, los_angeles_tz):
    user = api.register("Leo", "leo@example.com", "secret123")
    evening = datetime(2025, 6, 10, 20, 0, tzinfo=los_angeles_tz)
    tracker = ActivityTracker(user, api, InMemoryActivityRepository(), clock=lambda: evening)

    activity = tracker.add_activity("Running", 300, 30)
    assert activity.sync_state == SyncState.SYNCED

    # stored as UTC, already the next calendar day there
    stored = api.get_workouts(user.id)[0]
    assert stored.date == evening
    assert stored.date.astimezone(timezone.utc).day == 11

    summary = tracker.sync_with_server()
    assert summary.total_calories == 300
    assert summary.total_workouts == 1
    assert tracker.daily_total == 300
    assert tracker.streak == 1


def test_tracker_strips_activity_names(api):
    user = api.register("Tara", "tara@example.com", "secret123")
    tracker = ActivityTracker(user, api, InMemoryActivityRepository())

    tracker.add_activity("Running ", 300, duration=30)

    assert [w.type for w in api.get_workouts(user.id)] == ["Running"]
    summary = tracker.sync_with_server()
    assert summary.total_calories == 300
    assert summary.total_workouts == 1
