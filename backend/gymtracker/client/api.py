from __future__ import annotations

from datetime import date, datetime
from typing import Any, Iterable, Optional

import httpx


class RemoteError(Exception):
    """A call to the API failed: transport problem or a non-2xx answer."""

    def __init__(self, status_code: int | None, detail: Any):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"{status_code or 'transport'}: {detail}")


def _iso(value: date | None) -> str | None:
    return value.isoformat() if value is not None else None


class GymTrackerClient:
    """REST client for the GymTracker API.

    Pass ``http`` to reuse an existing ``httpx.Client`` (a FastAPI
    ``TestClient`` works too); otherwise one is created for ``base_url``.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        *,
        token: str | None = None,
        http: httpx.Client | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.http = http or httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout)
        self.token = token

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        try:
            resp = self.http.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as exc:
            raise RemoteError(None, str(exc)) from exc
        if resp.is_error:
            try:
                data = resp.json()
                detail = data.get("detail", data) if isinstance(data, dict) else data
            except ValueError:
                detail = resp.text
            raise RemoteError(resp.status_code, detail)
        return resp

    def _json(self, method: str, path: str, **kwargs) -> Any:
        resp = self._request(method, path, **kwargs)
        if resp.status_code == 204 or not resp.content:
            return None
        return resp.json()

    # auth / profile
    def register(self, email: str, password: str, username: str | None = None) -> dict:
        return self._json("POST", "/auth/register", json={"email": email, "password": password, "username": username})

    def login(self, email: str, password: str) -> str:
        self.token = self._json("POST", "/auth/login", json={"email": email, "password": password})["access_token"]
        return self.token

    def profile(self) -> dict:
        return self._json("GET", "/profile")

    def update_profile(self, username: str | None) -> dict:
        return self._json("PATCH", "/profile", json={"username": username})

    # routine
    def list_training_days(self) -> list[dict]:
        return self._json("GET", "/training-days")

    def create_training_day(self, day_name: str, day_order: int | None = None) -> dict:
        return self._json("POST", "/training-days", json={"day_name": day_name, "day_order": day_order})

    def update_training_day(self, day_id: int, **fields: Any) -> dict:
        return self._json("PATCH", f"/training-days/{day_id}", json=fields)

    def delete_training_day(self, day_id: int) -> None:
        self._json("DELETE", f"/training-days/{day_id}")

    def add_exercise(self, day_id: int, name: str, sets: int = 3, reps: str = "12") -> dict:
        return self._json("POST", f"/training-days/{day_id}/exercises", json={"name": name, "sets": sets, "reps": reps})

    def update_exercise(self, exercise_id: int, **fields: Any) -> dict:
        return self._json("PATCH", f"/exercises/{exercise_id}", json=fields)

    def delete_exercise(self, exercise_id: int) -> None:
        self._json("DELETE", f"/exercises/{exercise_id}")

    # progress
    def add_progress(
        self, exercise_id: int, weight: float, notes: str | None = None, created_at: datetime | None = None
    ) -> dict:
        body: dict[str, Any] = {"weight": weight, "notes": notes}
        if created_at is not None:
            body["created_at"] = created_at.isoformat()
        return self._json("POST", f"/exercises/{exercise_id}/progress", json=body)

    def list_progress(self, exercise_id: int, start: date | None = None, end: date | None = None) -> list[dict]:
        params = {k: v for k, v in {"start": _iso(start), "end": _iso(end)}.items() if v}
        return self._json("GET", f"/exercises/{exercise_id}/progress", params=params)

    def progress_stats(self, exercise_id: int, start: date | None = None, end: date | None = None) -> dict:
        params = {k: v for k, v in {"start": _iso(start), "end": _iso(end)}.items() if v}
        return self._json("GET", f"/exercises/{exercise_id}/stats", params=params)

    def progress_chart(self, exercise_id: int, start: date | None = None, end: date | None = None) -> dict:
        params = {k: v for k, v in {"start": _iso(start), "end": _iso(end)}.items() if v}
        return self._json("GET", f"/exercises/{exercise_id}/chart", params=params)

    # sessions
    def start_session(self, day_id: int) -> dict:
        return self._json("POST", "/sessions", json={"day_id": day_id})

    def open_session(self, day_id: int) -> Optional[dict]:
        return self._json("GET", "/sessions/open", params={"day_id": day_id})

    def complete_session(self, session_id: int) -> dict:
        return self._json("POST", f"/sessions/{session_id}/complete")

    def add_session_exercises(self, session_id: int, rows: Iterable[dict]) -> list[dict]:
        return self._json("POST", f"/sessions/{session_id}/exercises", json=list(rows))

    # reports
    def download_report(
        self,
        *,
        start_date: date,
        end_date: date,
        exercise_ids: list[int],
        title: str | None = None,
        include_charts: bool = True,
        include_stats: bool = True,
    ) -> tuple[str, bytes]:
        body: dict[str, Any] = {
            "start_date": start_date.isoformat(),
            "end_date": end_date.isoformat(),
            "exercise_ids": exercise_ids,
            "include_charts": include_charts,
            "include_stats": include_stats,
        }
        if title:
            body["title"] = title
        resp = self._request("POST", "/reports", json=body)
        disposition = resp.headers.get("content-disposition", "")
        filename = disposition.split("filename=")[-1].strip('"') if "filename=" in disposition else "reporte.pdf"
        return filename, resp.content
