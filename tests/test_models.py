from datetime import datetime, timezone

import psycopg
import pytest

from golf_games import history
from golf_games.engines import ENGINES, get_engine, parse_mode
from golf_games.errors import InvalidRoundError
from golf_games.models import (
    Course,
    GameMode,
    HoleScore,
    Player,
    Round,
    RoundData,
    player_totals,
    validate_hole_score,
)


def test_round_data_build_accepts_lists_and_maps():
    data = RoundData.build(["ann", "ben"], {"ann": [4, None, 5], "ben": {2: 3}}, putts={"ann": {1: 2}})
    assert data.strokes("ann", 2) is None
    assert data.putts("ann", 1) == 2
    assert data.holes_played() == [1, 2, 3]
    assert data.has_putt_data()
    assert data.handicap("ann") == 0.0


def test_active_modes_dedupes_primary():
    golf_round = Round(
        "r1",
        Course.default(),
        [Player("ann")],
        game_mode=GameMode.SKINS,
        game_modes=[GameMode.SKINS, GameMode.DOTS],
    )
    assert golf_round.active_modes() == [GameMode.SKINS, GameMode.DOTS]


def test_validate_hole_score():
    assert validate_hole_score(HoleScore(1, 4, putts=2), par=4)
    assert not validate_hole_score(HoleScore(1, 3, putts=4), par=4)
    assert not validate_hole_score(HoleScore(1, 10), par=4)


def test_player_totals_floors_handicap():
    golf_round = Round("r1", Course.from_pars([4, 4]), [Player("ann", handicap=1.7)])
    golf_round.upsert_score("ann", HoleScore(2, 5))
    golf_round.upsert_score("ann", HoleScore(1, 4))
    assert player_totals(golf_round, "ann") == {"scores": [4, 5], "total": 9, "net_total": 8}


def test_parse_mode():
    assert parse_mode("wolf") is GameMode.WOLF
    assert get_engine(GameMode.SNAKE).mode is GameMode.SNAKE
    with pytest.raises(InvalidRoundError, match="bingo"):
        parse_mode("bingo")


@pytest.mark.parametrize("mode", list(ENGINES))
def test_scoring_twice_gives_the_same_result(mode):
    engine = ENGINES[mode]
    players = ["ann", "ben", "cal", "dee"][: engine.max_players or 4]
    strokes = {pid: [4 + (hole + idx) % 3 for hole in range(18)] for idx, pid in enumerate(players)}
    putts = {pid: [1 + (hole * (idx + 1)) % 3 for hole in range(18)] for idx, pid in enumerate(players)}
    data = RoundData.build(players, strokes, putts=putts, handicaps={"ben": 9})
    assert engine.compute(data) == engine.compute(data)


def test_history_row_to_differential():
    played = datetime(2024, 5, 1, tzinfo=timezone.utc)
    item = history._row_to_differential(("r9", 88, 70.1, 125, "Links", played))
    assert item.round_id == "r9"
    assert item.date == int(played.timestamp())
    assert item.differential == pytest.approx((88 - 70.1) * 113 / 125)


def test_history_unreachable_store_is_empty(monkeypatch, caplog):
    def refuse(*_args, **_kwargs):
        raise psycopg.OperationalError("connection refused")

    monkeypatch.setattr(history, "fetch_recent_differentials", refuse)
    assert history.load_player_history("postgresql://nowhere/db", "ann") == []
    assert "Could not load round history" in caplog.text
