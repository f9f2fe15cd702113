"""Approximate putt counts for rounds recorded without putts.

This is a guess drawn from weighted tables keyed by score relative to par.
No engine calls it: a caller has to opt in, and it refuses rounds that
already carry real putt data. Pass a ``seed`` for reproducible draws.
"""

from __future__ import annotations

import random
from dataclasses import replace

from golf_games.errors import InvalidRoundError
from golf_games.models import RoundData

# score relative to par -> (putt counts, weights)
FIXED_TABLES = {
    -2: ((1, 2), (0.8, 0.2)),
    -1: ((1, 2), (0.6, 0.4)),
    1: ((1, 2, 3), (0.02, 0.68, 0.30)),
    2: ((1, 2, 3, 4), (0.01, 0.49, 0.40, 0.10)),
}


def _table(relative: int, one_putt_rate: float, three_putt_rate: float):
    if relative == 0:
        return (1, 2, 3), (one_putt_rate, 1 - one_putt_rate - three_putt_rate, three_putt_rate)
    return FIXED_TABLES[max(-2, min(2, relative))]


def estimate_putts(
    data: RoundData,
    seed: int | None = None,
    one_putt_rate: float = 0.05,
    three_putt_rate: float = 0.15,
) -> RoundData:
    if data.has_putt_data():
        raise InvalidRoundError("Round already has putt data; refusing to estimate")
    rng = random.Random(seed)
    scores = {}
    for pid in data.players:
        holes = {}
        for hole, entry in sorted(data.scores.get(pid, {}).items()):
            counts, weights = _table(
                entry.strokes - data.course.par_for(hole), one_putt_rate, three_putt_rate
            )
            putts = rng.choices(counts, weights=weights)[0]
            holes[hole] = replace(entry, putts=min(putts, entry.strokes))
        scores[pid] = holes
    return replace(data, scores=scores, estimated_putts=True)
