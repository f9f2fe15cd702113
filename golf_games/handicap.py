"""Handicap differentials, the progressive handicap index and stroke allocation.

Differential = (gross - course rating) * 113 / slope.
Index = mean of the best N differentials * 0.96, to one decimal, where N
depends on how many of the last 20 rounds are available:

    5-9 rounds    best 2
    10-19 rounds  best 3
    20 rounds     best 8
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable

from golf_games.models import Course

STANDARD_SLOPE = 113
SOFT_CAP = 0.96
MAX_ROUNDS = 20
DEFAULT_COURSE_RATING = 72.0
DEFAULT_SLOPE = 113

# (minimum rounds, best count, method, next tier)
METHOD_TIERS = (
    (20, 8, "best-8-of-20", None),
    (10, 3, "best-3-of-10", 20),
    (5, 2, "best-2-of-5", 10),
    (0, 0, "insufficient", 5),
)

METHOD_DESCRIPTIONS = {
    "best-2-of-5": "Best 2 of your last 5 rounds",
    "best-3-of-10": "Best 3 of your last 10 rounds",
    "best-8-of-20": "Best 8 of your last 20 rounds (USGA/WHS standard)",
    "insufficient": "Not enough rounds to calculate",
}


def calculate_differential(gross: float, course_rating: float, slope: float) -> float:
    if slope <= 0 or course_rating <= 0:
        return 0.0
    return (gross - course_rating) * STANDARD_SLOPE / slope


@dataclass(frozen=True)
class RoundDifferential:
    round_id: str
    gross: int
    course_rating: float = DEFAULT_COURSE_RATING
    slope: int = DEFAULT_SLOPE
    date: int | None = None
    course_name: str | None = None

    @property
    def differential(self) -> float:
        return calculate_differential(self.gross, self.course_rating, self.slope)


@dataclass(frozen=True)
class HandicapResult:
    index: float | None
    rounds_used: int
    rounds_available: int
    method: str
    minimum_rounds_needed: int
    differentials: list[RoundDifferential] = field(default_factory=list)
    best_differentials: list[RoundDifferential] = field(default_factory=list)

    @property
    def description(self) -> str:
        return method_description(self.method)


def calculation_method(round_count: int) -> tuple[str, int, int]:
    """Return ``(method, best_count, rounds_needed_for_next_tier)``."""
    for minimum, best_count, method, next_tier in METHOD_TIERS:
        if round_count >= minimum:
            needed = next_tier - round_count if next_tier else 0
            return method, best_count, needed
    raise ValueError(f"Invalid round count: {round_count}")


def method_description(method: str) -> str:
    return METHOD_DESCRIPTIONS.get(method, method)


def _round_one_decimal(value: float) -> float:
    return math.floor(value * 10 + 0.5) / 10


def calculate_handicap_index(differentials: Iterable[RoundDifferential]) -> HandicapResult:
    recent = list(differentials)[:MAX_ROUNDS]
    method, best_count, needed = calculation_method(len(recent))
    if best_count == 0:
        return HandicapResult(
            index=None,
            rounds_used=0,
            rounds_available=len(recent),
            method=method,
            minimum_rounds_needed=needed,
            differentials=recent,
        )

    best = sorted(recent, key=lambda item: item.differential)[:best_count]
    average = sum(item.differential for item in best) / best_count
    return HandicapResult(
        index=_round_one_decimal(average * SOFT_CAP),
        rounds_used=best_count,
        rounds_available=len(recent),
        method=method,
        minimum_rounds_needed=needed,
        differentials=recent,
        best_differentials=best,
    )


def course_handicap(
    handicap_index: float,
    slope: int,
    course_rating: float | None = None,
    par: int | None = None,
) -> int:
    value = handicap_index * (slope / STANDARD_SLOPE)
    if course_rating is not None and par is not None:
        value += course_rating - par
    return int(round(value))


def strokes_received(handicap: float, stroke_index: int) -> int:
    """
    Strokes a player receives on one hole. Allocation follows the hole
    handicap ranking (1 = hardest); the remainder goes to the hardest holes.
    """
    strokes = int(math.floor(handicap))
    if strokes <= 0:
        return 0
    base = strokes // 18
    remainder = strokes % 18
    extra = 1 if remainder and stroke_index <= remainder else 0
    return base + extra


def allocate_strokes(handicap: float, course: Course) -> dict[int, int]:
    return {hole.number: strokes_received(handicap, hole.handicap_rank) for hole in course.holes}
