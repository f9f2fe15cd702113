from __future__ import annotations

import re
from dataclasses import fields
from typing import Any, Mapping

from golf_games.errors import InvalidRoundError
from golf_games.handicap import strokes_received
from golf_games.models import FormatResult, GameMode, RoundData

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _snake_case(key: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", key).replace("-", "_").lower()


def coerce_config(config_type: type, value: Any):
    """
    Build a config dataclass from ``None``, an instance, or a plain mapping.
    Mapping keys may be snake_case or camelCase; unknown keys are ignored and
    omitted keys keep their defaults.
    """
    if value is None:
        return config_type()
    if isinstance(value, config_type):
        return value
    if not isinstance(value, Mapping):
        raise InvalidRoundError(f"Unsupported config for {config_type.__name__}: {value!r}")
    known = {item.name for item in fields(config_type)}
    kwargs = {}
    for key, item in value.items():
        name = _snake_case(str(key))
        if name in known and item is not None:
            kwargs[name] = item
    try:
        return config_type(**kwargs)
    except (TypeError, ValueError) as exc:
        raise InvalidRoundError(f"Invalid {config_type.__name__}: {exc}") from exc


def rank(
    scores: Mapping[str, float],
    lower_is_better: bool = True,
    key: str = "player_id",
) -> list[dict]:
    """Order entries by score; tied scores share a position (1, 1, 3)."""
    ordered = sorted(scores.items(), key=lambda item: item[1], reverse=not lower_is_better)
    standings: list[dict] = []
    position = 0
    previous = None
    for idx, (name, score) in enumerate(ordered, 1):
        if previous is None or score != previous:
            position = idx
            previous = score
        standings.append({key: name, "score": score, "position": position})
    return standings


def leaders(standings: list[dict], key: str = "player_id") -> list[str]:
    return [entry[key] for entry in standings if entry["position"] == 1]


def unique_low(scores: Mapping[str, float]) -> str | None:
    if not scores:
        return None
    best = min(scores.values())
    winners = [name for name, score in scores.items() if score == best]
    return winners[0] if len(winners) == 1 else None


def hole_score(data: RoundData, player_id: str, hole: int, use_net: bool) -> int | None:
    strokes = data.strokes(player_id, hole)
    if strokes is None or not use_net:
        return strokes
    course_hole = data.course.hole(hole)
    stroke_index = course_hole.handicap_rank if course_hole else hole
    return strokes - strokes_received(data.handicap(player_id), stroke_index)


class ScoringEngine:
    """Common contract for every game format: ``compute(data, config)``."""

    mode: GameMode
    config_type: type
    min_players = 1
    max_players: int | None = None

    @property
    def name(self) -> str:
        return self.mode.display_name

    def compute(self, data: RoundData, config: Any = None) -> FormatResult:
        cfg = coerce_config(self.config_type, config)
        self.validate(data, cfg)
        return self.score(data, cfg)

    def validate(self, data: RoundData, config: Any) -> None:
        count = len(data.players)
        if count < self.min_players:
            raise InvalidRoundError(
                f"{self.name} requires at least {self.min_players} players, got {count}"
            )
        if self.max_players is not None and count > self.max_players:
            raise InvalidRoundError(
                f"{self.name} allows at most {self.max_players} players, got {count}"
            )

    def score(self, data: RoundData, config: Any) -> FormatResult:
        raise NotImplementedError

