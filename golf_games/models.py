from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Iterable, Mapping

DEFAULT_PAR = 4
HOLE_COUNT = 18


class GameMode(str, Enum):
    STROKE_PLAY = "stroke-play"
    SKINS = "skins"
    NASSAU = "nassau"
    MATCH_PLAY = "match-play"
    WOLF = "wolf"
    POINTS = "points"
    VEGAS = "vegas"
    SIXES = "sixes"
    DOTS = "dots"
    SNAKE = "snake"

    @property
    def display_name(self) -> str:
        return MODE_DISPLAY_NAMES[self]


MODE_DISPLAY_NAMES = {
    GameMode.STROKE_PLAY: "Stroke Play",
    GameMode.SKINS: "Skins",
    GameMode.NASSAU: "Nassau",
    GameMode.MATCH_PLAY: "Match Play",
    GameMode.WOLF: "Wolf",
    GameMode.POINTS: "Stableford",
    GameMode.VEGAS: "Vegas",
    GameMode.SIXES: "Sixes",
    GameMode.DOTS: "Dots",
    GameMode.SNAKE: "Snake",
}


class RoundStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Hole:
    number: int
    par: int = DEFAULT_PAR
    yardage: int | None = None
    stroke_index: int | None = None

    @property
    def handicap_rank(self) -> int:
        return self.stroke_index or self.number


@dataclass(frozen=True)
class Course:
    holes: tuple[Hole, ...]
    name: str = ""
    course_id: int | None = None

    @classmethod
    def default(cls) -> "Course":
        return cls(tuple(Hole(number) for number in range(1, HOLE_COUNT + 1)))

    @classmethod
    def from_pars(cls, pars: Iterable[int], name: str = "") -> "Course":
        return cls(tuple(Hole(idx, par) for idx, par in enumerate(pars, 1)), name=name)

    def hole(self, number: int) -> Hole | None:
        for hole in self.holes:
            if hole.number == number:
                return hole
        return None

    def par_for(self, number: int) -> int:
        hole = self.hole(number)
        return hole.par if hole else DEFAULT_PAR

    @property
    def par_total(self) -> int:
        return sum(hole.par for hole in self.holes)


@dataclass(frozen=True)
class MissDirection:
    depth: str | None = None  # "long" | "short"
    side: str | None = None  # "left" | "right"


@dataclass(frozen=True)
class HoleScore:
    hole_number: int
    strokes: int
    putts: int | None = None
    fairway_hit: bool = False
    green_in_regulation: bool = False
    fairway_miss: MissDirection | None = None
    green_miss: MissDirection | None = None
    chips: int = 0
    sand_traps: int = 0
    penalties: int = 0
    notes: str | None = None


def validate_hole_score(score: HoleScore, par: int) -> bool:
    """Advisory check used by score entry; engines tolerate anything."""
    if score.strokes < 0 or (score.putts or 0) < 0:
        return False
    if score.putts is not None and score.putts > score.strokes:
        return False
    return score.strokes <= par + 5


@dataclass(frozen=True)
class Player:
    id: str
    name: str = ""
    handicap: float = 0.0

    @property
    def display_name(self) -> str:
        return self.name or self.id


@dataclass
class Round:
    id: str
    course: Course
    players: list[Player]
    game_mode: GameMode = GameMode.STROKE_PLAY
    game_modes: list[GameMode] = field(default_factory=list)
    scores: dict[str, dict[int, HoleScore]] = field(default_factory=dict)
    status: RoundStatus = RoundStatus.ACTIVE

    def upsert_score(self, player_id: str, score: HoleScore) -> None:
        self.scores.setdefault(player_id, {})[score.hole_number] = score

    def active_modes(self) -> list[GameMode]:
        modes: list[GameMode] = []
        for mode in [self.game_mode, *self.game_modes]:
            if mode not in modes:
                modes.append(mode)
        return modes


@dataclass(frozen=True)
class RoundData:
    """Read-only view of a round handed to every scoring engine."""

    players: tuple[str, ...]
    scores: Mapping[str, Mapping[int, HoleScore]]
    course: Course = field(default_factory=Course.default)
    handicaps: Mapping[str, float] = field(default_factory=dict)
    estimated_putts: bool = False

    @classmethod
    def from_round(cls, golf_round: Round) -> "RoundData":
        return cls(
            players=tuple(player.id for player in golf_round.players),
            scores={pid: dict(holes) for pid, holes in golf_round.scores.items()},
            course=golf_round.course,
            handicaps={player.id: player.handicap for player in golf_round.players},
        )

    @classmethod
    def build(
        cls,
        players: Iterable[str],
        strokes: Mapping[str, Any],
        putts: Mapping[str, Any] | None = None,
        course: Course | None = None,
        handicaps: Mapping[str, float] | None = None,
    ) -> "RoundData":
        """Assemble round data from per-player strokes (and optional putts).

        Each player's entry may be a list (index 0 is hole 1, ``None`` for an
        unplayed hole) or a ``{hole: value}`` mapping.
        """
        player_ids = tuple(players)
        putts = putts or {}
        scores: dict[str, dict[int, HoleScore]] = {}
        for pid in player_ids:
            stroke_map = _as_hole_map(strokes.get(pid))
            putt_map = _as_hole_map(putts.get(pid))
            scores[pid] = {
                hole: HoleScore(hole, value, putts=putt_map.get(hole))
                for hole, value in stroke_map.items()
            }
        return cls(
            players=player_ids,
            scores=scores,
            course=course or Course.default(),
            handicaps=dict(handicaps or {}),
        )

    def for_players(self, player_ids: Iterable[str]) -> "RoundData":
        """The same round restricted to ``player_ids``, in that order."""
        return replace(self, players=tuple(player_ids))

    def score(self, player_id: str, hole: int) -> HoleScore | None:
        return self.scores.get(player_id, {}).get(hole)

    def strokes(self, player_id: str, hole: int) -> int | None:
        entry = self.score(player_id, hole)
        return entry.strokes if entry else None

    def putts(self, player_id: str, hole: int) -> int | None:
        entry = self.score(player_id, hole)
        return entry.putts if entry else None

    def handicap(self, player_id: str) -> float:
        return self.handicaps.get(player_id, 0.0)

    def holes_played(self) -> list[int]:
        holes = {hole for pid in self.players for hole in self.scores.get(pid, {})}
        return sorted(holes)

    def has_putt_data(self) -> bool:
        return any(
            entry.putts is not None
            for pid in self.players
            for entry in self.scores.get(pid, {}).values()
        )


def _as_hole_map(value: Any) -> dict[int, int]:
    if not value:
        return {}
    if isinstance(value, Mapping):
        return {int(hole): int(v) for hole, v in value.items() if v is not None}
    return {idx: int(v) for idx, v in enumerate(value, 1) if v is not None}


@dataclass(frozen=True)
class Payable:
    from_player: str
    to_player: str
    amount: float
    memo: str = ""


@dataclass(frozen=True)
class FormatResult:
    mode: GameMode
    name: str
    standings: list[dict]
    winners: list[str]
    details: dict = field(default_factory=dict)
    ledger: list[Payable] = field(default_factory=list)


def player_totals(golf_round: Round, player_id: str) -> dict:
    player = next((p for p in golf_round.players if p.id == player_id), None)
    holes = golf_round.scores.get(player_id, {})
    scores = [holes[number].strokes for number in sorted(holes)]
    total = sum(scores)
    handicap = player.handicap if player else 0.0
    return {
        "scores": scores,
        "total": total,
        "net_total": max(0, total - math.floor(handicap)),
    }
