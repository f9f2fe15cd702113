import logging
import os
from typing import Any

import requests

from golf_games.errors import GolfGamesError
from golf_games.models import DEFAULT_PAR, HOLE_COUNT, Course, Hole

API_BASE = "https://api.golfcourseapi.com/v1"
logger = logging.getLogger(__name__)


class GolfApiError(GolfGamesError):
    pass


def _headers(api_key: str) -> dict[str, str]:
    key = api_key or os.getenv("GOLF_API_KEY", "")
    if not key:
        raise GolfApiError("Missing Golf Course API key.")
    return {"Authorization": f"Key {key}"}


def _get_json(path: str, api_key: str, action: str, timeout: int, **params: Any) -> Any:
    try:
        response = requests.get(
            f"{API_BASE}/{path}",
            params=params or None,
            headers=_headers(api_key),
            timeout=timeout,
        )
    except requests.RequestException as exc:
        raise GolfApiError(f"{action} failed: {exc}") from exc
    if response.status_code != 200:
        raise GolfApiError(f"{action} failed: {response.status_code} {response.text}")
    return response.json()


def search_courses(query: str, api_key: str) -> dict[str, Any]:
    if not query:
        return {"courses": []}
    return _get_json("search", api_key, "Search", timeout=15, search_query=query)


def fetch_course(course_id: int, api_key: str) -> dict[str, Any]:
    """The ``course`` object for ``course_id``, with its tees and holes."""
    payload = _get_json(f"courses/{course_id}", api_key, "Course fetch", timeout=20)
    course = payload.get("course") if isinstance(payload, dict) else None
    if not isinstance(course, dict) or "id" not in course:
        raise GolfApiError(f"Course fetch returned no course data for id {course_id}")
    return course


def _pick_tee(course: dict[str, Any], tee_name: str | None) -> dict[str, Any] | None:
    tees_payload = course.get("tees") or {}
    for gender in ("male", "female"):
        for tee in tees_payload.get(gender, []) or []:
            if not tee_name or (tee.get("tee_name") or "").lower() == tee_name.lower():
                return tee
    return None


def course_from_payload(course: dict[str, Any], tee_name: str | None = None) -> Course:
    """Build an 18-hole Course from a course API payload, padding missing holes with par 4."""
    tee = _pick_tee(course, tee_name)
    raw_holes = (tee or {}).get("holes") or []
    holes = []
    for idx in range(1, HOLE_COUNT + 1):
        hole = raw_holes[idx - 1] if idx <= len(raw_holes) else {}
        holes.append(
            Hole(
                number=idx,
                par=hole.get("par") or DEFAULT_PAR,
                yardage=hole.get("yardage"),
                stroke_index=hole.get("handicap") or idx,
            )
        )
    if not raw_holes:
        logger.warning("Course %s has no hole data for tee %s, using defaults", course.get("id"), tee_name)
    return Course(
        holes=tuple(holes),
        name=course.get("course_name") or course.get("club_name") or "",
        course_id=course.get("id"),
    )


def tee_ratings(course: dict[str, Any], tee_name: str | None = None) -> tuple[float | None, int | None]:
    tee = _pick_tee(course, tee_name) or {}
    return tee.get("course_rating"), tee.get("slope_rating")


def load_course(course_id: int, api_key: str, tee_name: str | None = None) -> Course:
    return course_from_payload(fetch_course(course_id, api_key), tee_name)
