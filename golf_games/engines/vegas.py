from __future__ import annotations

from dataclasses import dataclass

from golf_games.engines.base import ScoringEngine, hole_score, leaders, rank
from golf_games.errors import InvalidRoundError
from golf_games.models import FormatResult, GameMode, RoundData

FLIP_THRESHOLD = 10


def vegas_number(first: int, second: int, flip: bool = False) -> int:
    """Concatenate two scores, lower first (higher first when flipped)."""
    low, high = sorted((first, second))
    if flip:
        low, high = high, low
    return int(f"{low}{high}")


@dataclass(frozen=True)
class VegasConfig:
    teams: tuple | None = None
    flip_on_ten: bool = True
    use_net: bool = False

    def __post_init__(self) -> None:
        if self.teams is not None:
            object.__setattr__(self, "teams", tuple(tuple(team) for team in self.teams))


def _team_name(team: tuple[str, ...]) -> str:
    return " & ".join(team)


class VegasEngine(ScoringEngine):
    mode = GameMode.VEGAS
    config_type = VegasConfig
    min_players = 4
    max_players = 4

    def _teams(self, data: RoundData, config: VegasConfig) -> tuple[tuple[str, ...], tuple[str, ...]]:
        teams = config.teams or (data.players[:2], data.players[2:4])
        members = [pid for team in teams for pid in team]
        if len(teams) != 2 or any(len(team) != 2 for team in teams):
            raise InvalidRoundError("Vegas needs two teams of two players")
        if sorted(members) != sorted(data.players):
            raise InvalidRoundError("Vegas teams must use each player exactly once")
        return teams[0], teams[1]

    def score(self, data: RoundData, config: VegasConfig) -> FormatResult:
        team_a, team_b = self._teams(data, config)
        name_a, name_b = _team_name(team_a), _team_name(team_b)
        points = {name_a: 0, name_b: 0}
        hole_by_hole: list[dict] = []
        for hole in data.holes_played():
            scores = {pid: hole_score(data, pid, hole, config.use_net) for pid in data.players}
            if any(value is None for value in scores.values()):
                continue
            flip = config.flip_on_ten and any(value >= FLIP_THRESHOLD for value in scores.values())
            number_a = vegas_number(*(scores[pid] for pid in team_a), flip=flip)
            number_b = vegas_number(*(scores[pid] for pid in team_b), flip=flip)
            winner = None
            if number_a != number_b:
                winner = name_a if number_a < number_b else name_b
                points[winner] += abs(number_a - number_b)
            hole_by_hole.append(
                {
                    "hole": hole,
                    "numbers": {name_a: number_a, name_b: number_b},
                    "flipped": flip,
                    "winner": winner,
                    "points": abs(number_a - number_b),
                }
            )

        standings = rank(points, lower_is_better=False, key="team")
        members = {name_a: list(team_a), name_b: list(team_b)}
        winners = []
        if any(points.values()):
            winners = [pid for team in leaders(standings, key="team") for pid in members[team]]
        return FormatResult(
            mode=self.mode,
            name=self.name,
            standings=standings,
            winners=winners,
            details={"teams": members, "hole_by_hole": hole_by_hole, "totals": points},
        )
