from __future__ import annotations

from golf_games.engines.base import hole_score
from golf_games.models import RoundData


def _percent(hits: int, attempts: int) -> float:
    return round(hits / attempts * 100, 1) if attempts else 0.0


def round_stats(data: RoundData, player_id: str) -> dict:
    holes = data.scores.get(player_id, {})
    stats = {
        "player_id": player_id,
        "holes_played": len(holes),
        "gross_total": 0,
        "net_total": 0,
        "birdies_or_better": 0,
        "pars": 0,
        "bogeys": 0,
        "double_bogey_or_worse": 0,
        "putts": 0,
    }
    fairways = greens = sand_visits = sand_saves = 0
    for number, entry in sorted(holes.items()):
        relative = entry.strokes - data.course.par_for(number)
        stats["gross_total"] += entry.strokes
        stats["net_total"] += hole_score(data, player_id, number, use_net=True)
        stats["putts"] += entry.putts or 0
        if relative <= -1:
            stats["birdies_or_better"] += 1
        elif relative == 0:
            stats["pars"] += 1
        elif relative == 1:
            stats["bogeys"] += 1
        else:
            stats["double_bogey_or_worse"] += 1
        fairways += entry.fairway_hit
        greens += entry.green_in_regulation
        if entry.sand_traps > 0:
            sand_visits += 1
            if entry.putts is not None and entry.putts <= 2:
                sand_saves += 1

    played = stats["holes_played"]
    stats.update(
        {
            "average_score": round(stats["gross_total"] / played, 2) if played else 0.0,
            "fairways_hit_pct": _percent(fairways, played),
            "greens_in_regulation_pct": _percent(greens, played),
            "sand_saves_pct": _percent(sand_saves, sand_visits),
        }
    )
    return stats
