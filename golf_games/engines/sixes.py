"""Sixes: partners rotate every six holes, best ball decides each segment.

Pairings are fixed tables of player positions so every segment's teams can
be inspected without replaying the round.
"""

from __future__ import annotations

from dataclasses import dataclass

from golf_games.engines.base import ScoringEngine, hole_score, leaders, rank
from golf_games.models import FormatResult, GameMode, RoundData

SEGMENTS = ((1, 6), (7, 12), (13, 18))

# Team layouts per segment, as indexes into the player order.
THREE_PLAYER_ROTATION = (
    ((0, 1), (2,)),
    ((0, 2), (1,)),
    ((1, 2), (0,)),
)
FOUR_PLAYER_ROTATION = (
    ((0, 1), (2, 3)),
    ((0, 2), (1, 3)),
    ((0, 3), (1, 2)),
)


def segment_teams(players: tuple[str, ...], segment_index: int) -> tuple[tuple[str, ...], ...]:
    if len(players) == 3:
        layout = THREE_PLAYER_ROTATION[segment_index]
    elif len(players) == 4:
        layout = FOUR_PLAYER_ROTATION[segment_index]
    else:
        return _balanced_teams(players, segment_index)
    return tuple(tuple(players[idx] for idx in team) for team in layout)


def _balanced_teams(players: tuple[str, ...], segment_index: int) -> tuple[tuple[str, ...], ...]:
    shift = segment_index % len(players)
    rotated = players[shift:] + players[:shift]
    first_size = len(players) // 2 + len(players) % 2
    return rotated[:first_size], rotated[first_size:]


@dataclass(frozen=True)
class SixesConfig:
    use_net: bool = False


class SixesEngine(ScoringEngine):
    mode = GameMode.SIXES
    config_type = SixesConfig
    min_players = 3

    def score(self, data: RoundData, config: SixesConfig) -> FormatResult:
        points = {pid: 0 for pid in data.players}
        segments: list[dict] = []

        for index, (start, end) in enumerate(SEGMENTS):
            teams = segment_teams(data.players, index)
            holes = range(start, end + 1)
            best_balls = {
                team: {hole: self._best_ball(data, team, hole, config.use_net) for hole in holes}
                for team in teams
            }
            # Only holes where every team posted a score count toward the segment.
            counted = [
                hole for hole in holes if all(best_balls[team][hole] is not None for team in teams)
            ]
            totals = {team: sum(best_balls[team][hole] for hole in counted) for team in teams}
            winner = None
            if counted:
                low = min(totals.values())
                lowest = [team for team in teams if totals[team] == low]
                if len(lowest) == 1:
                    winner = lowest[0]
                    for pid in winner:
                        points[pid] += 1

            segments.append(
                {
                    "holes": list(holes),
                    "teams": [
                        {"players": list(team), "best_ball_total": totals[team]} for team in teams
                    ],
                    "holes_counted": counted,
                    "winner": list(winner) if winner else None,
                    "points": {pid: int(bool(winner) and pid in winner) for pid in data.players},
                }
            )

        gross = {
            pid: sum(entry.strokes for entry in data.scores.get(pid, {}).values())
            for pid in data.players
        }

        standings = rank(points, lower_is_better=False)
        decided = any(segment["winner"] for segment in segments)
        return FormatResult(
            mode=self.mode,
            name=self.name,
            standings=standings,
            winners=leaders(standings) if decided else [],
            details={"segments": segments, "totals": points, "gross": gross},
        )

    @staticmethod
    def _best_ball(data: RoundData, team: tuple[str, ...], hole: int, use_net: bool) -> int | None:
        scores = [hole_score(data, pid, hole, use_net) for pid in team]
        posted = [value for value in scores if value is not None]
        return min(posted) if posted else None
