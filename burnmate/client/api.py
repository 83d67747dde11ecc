"""BurnMate HTTP API client (thin wrapper).

- Adds the bearer header once a token is known (login/register store it);
- one method per endpoint, responses mapped to DTOs;
- any non-2xx answer raises ApiError.
"""

from typing import Any, Dict, List, Optional
import logging
import os

import requests

from .dto import AuthUser, IntakeDto, LeaderboardEntryDto, WorkoutDto


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = os.environ.get("BURNMATE_API_URL", "http://localhost:5000/api")
DEFAULT_TIMEOUT = float(os.environ.get("BURNMATE_API_TIMEOUT", "10"))


class ApiError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"BurnMate API error {status_code}: {message}")
        self.status_code = status_code
        self.message = message


class BurnMateClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self.timeout = timeout or DEFAULT_TIMEOUT
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        self.token = None
        if token:
            self.set_token(token)

    def set_token(self, token: Optional[str]) -> None:
        self.token = token
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"
        else:
            self.session.headers.pop("Authorization", None)

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        if not 200 <= resp.status_code < 300:
            try:
                message = resp.json().get("message") or resp.text
            except ValueError:
                message = resp.text
            raise ApiError(resp.status_code, message)
        return resp.json()

    # ---- auth --------------------------------------------------------
    def register(
        self,
        name: str,
        email: str,
        password: str,
        age: Optional[int] = None,
        gender: Optional[str] = None,
    ) -> AuthUser:
        payload: Dict[str, Any] = {"name": name, "email": email, "password": password}
        if age is not None:
            payload["age"] = age
        if gender is not None:
            payload["gender"] = gender
        data = self._request("POST", "/register", json=payload)
        self.set_token(data["token"])
        return AuthUser.from_dict(data["user"])

    def login(self, email: str, password: str) -> AuthUser:
        data = self._request("POST", "/login", json={"email": email, "password": password})
        self.set_token(data["token"])
        return AuthUser.from_dict(data["user"])

    def logout(self) -> None:
        self.set_token(None)

    # ---- profile -----------------------------------------------------
    def get_profile(self, user_id: str) -> AuthUser:
        return AuthUser.from_dict(self._request("GET", f"/profile/{user_id}"))

    def update_profile(self, user_id: str, **fields: Any) -> AuthUser:
        """Accepts name, age, gender, bio, avatar_url."""
        if "avatar_url" in fields:
            fields["avatarUrl"] = fields.pop("avatar_url")
        return AuthUser.from_dict(self._request("PUT", f"/profile/{user_id}", json=fields))

    # ---- workouts ----------------------------------------------------
    def add_workout(self, workout: WorkoutDto) -> WorkoutDto:
        return WorkoutDto.from_dict(self._request("POST", "/workout", json=workout.to_payload()))

    def get_workouts(self, user_id: str) -> List[WorkoutDto]:
        return [WorkoutDto.from_dict(w) for w in self._request("GET", f"/workouts/{user_id}")]

    # ---- intake ------------------------------------------------------
    def add_intake(self, intake: IntakeDto) -> IntakeDto:
        return IntakeDto.from_dict(self._request("POST", "/intake", json=intake.to_payload()))

    def list_intake(
        self, user_id: str, start: Optional[str] = None, end: Optional[str] = None
    ) -> List[IntakeDto]:
        params = {k: v for k, v in (("from", start), ("to", end)) if v}
        rows = self._request("GET", f"/intake/{user_id}", params=params)
        return [IntakeDto.from_dict(r) for r in rows]

    def remove_intake(self, intake_id: str) -> bool:
        return bool(self._request("DELETE", f"/intake/{intake_id}").get("ok"))

    # ---- leaderboard -------------------------------------------------
    def get_leaderboard(self) -> List[LeaderboardEntryDto]:
        return [LeaderboardEntryDto.from_dict(r) for r in self._request("GET", "/leaderboard")]

    def get_leaderboard_user_workouts(self, user_id: str) -> List[WorkoutDto]:
        rows = self._request("GET", f"/leaderboard/{user_id}/workouts")
        return [WorkoutDto.from_dict(r) for r in rows]

    # ---- meta --------------------------------------------------------
    def health(self) -> Dict[str, Any]:
        return self._request("GET", "/health")
