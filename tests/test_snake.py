from golf_games.engines.snake import (
    SnakeConfig,
    SnakeEngine,
    format_three_putt_summary,
    penalty_amount,
    snake_status,
)
from golf_games.models import RoundData

PLAYERS = ["ann", "ben", "cal"]


def _snake_round():
    strokes = {pid: [4] * 9 for pid in PLAYERS}
    putts = {pid: [2] * 9 for pid in PLAYERS}
    putts["ann"][1] = 3
    putts["ben"][8] = 3
    return RoundData.build(PLAYERS, strokes, putts=putts)


def test_last_three_putt_holds_the_snake():
    result = SnakeEngine().compute(_snake_round(), {"penaltyAmount": 1001})
    assert result.details["holder"] == "ben"
    assert result.details["passes"] == 2
    assert result.details["three_putt_summary"] == {"ann": 1, "ben": 1, "cal": 0}
    penalty = result.details["penalty"]
    assert penalty["loser"] == "ben"
    assert penalty["amount"] == 1001
    # 1001 split two ways floors to 500 each; the odd unit is not paid out.
    assert penalty["recipients"] == [
        {"player_id": "ann", "amount": 500},
        {"player_id": "cal", "amount": 500},
    ]
    assert result.winners == ["ann", "cal"]
    assert result.name == "Snake (Fixed)"
    assert {(p.from_player, p.to_player, p.amount) for p in result.ledger} == {
        ("ben", "ann", 500),
        ("ben", "cal", 500),
    }


def test_holder_tracks_every_hole():
    result = SnakeEngine().compute(_snake_round())
    holders = [entry["holder"] for entry in result.details["hole_by_hole"]]
    assert holders == [None, "ann", "ann", "ann", "ann", "ann", "ann", "ann", "ben"]


def test_progressive_penalty_grows_with_passes():
    config = SnakeConfig(variant="progressive")
    assert penalty_amount(config, 0) == 500
    assert penalty_amount(config, 2) == 605
    result = SnakeEngine().compute(_snake_round(), config)
    assert result.name == "Snake (Progressive)"
    assert result.details["penalty"]["amount"] == 605


def test_penalty_to_pot():
    result = SnakeEngine().compute(_snake_round(), {"distribute_to_group": True})
    assert result.details["penalty"]["recipients"] == [{"player_id": "pot", "amount": 500}]
    assert dict((entry["player_id"], entry["score"]) for entry in result.standings)["ben"] == -500


def test_holder_pays_only_what_the_group_receives():
    result = SnakeEngine().compute(_snake_round(), {"penalty_amount": 1001})
    balances = {entry["player_id"]: entry["score"] for entry in result.standings}
    assert [recipient["amount"] for recipient in result.details["penalty"]["recipients"]] == [500, 500]
    assert balances == {"ann": 500, "ben": -1000, "cal": 500}
    assert sum(payable.amount for payable in result.ledger) == -balances["ben"]


def test_no_putt_data_means_no_snake():
    data = RoundData.build(PLAYERS, {pid: [4] * 3 for pid in PLAYERS})
    result = SnakeEngine().compute(data)
    assert result.details["holder"] is None
    assert result.details["penalty"] is None
    assert result.winners == []
    assert snake_status(result) == "No three-putts this round - no snake penalty!"


def test_status_and_summary_text():
    result = SnakeEngine().compute(_snake_round())
    assert snake_status(result) == "ben holds the snake and owes 500 units!"
    assert format_three_putt_summary({"ann": 2, "ben": 1, "cal": 0}) == [
        "ann: 2 three-putts",
        "ben: 1 three-putt",
    ]
