from golf_games.engines.dots import DotsConfig, DotsEngine
from golf_games.engines.points import PointsEngine, stableford_points
from golf_games.engines.stroke import MaxScoreRule, StrokeConfig, StrokePlayEngine
from golf_games.models import Course, HoleScore, RoundData

PARS = [4, 4, 3, 5, 4, 4, 3, 5, 4, 4, 4, 3, 5, 4, 4, 3, 5, 4]


def test_stroke_play_gross_lowest_wins():
    data = RoundData.build(
        ["alice", "bob"],
        {"alice": [4, 5, 3], "bob": [5, 5, 4]},
        course=Course.from_pars(PARS),
    )
    result = StrokePlayEngine().compute(data)
    assert result.winners == ["alice"]
    assert result.standings[0] == {"player_id": "alice", "score": 12, "position": 1}
    assert result.details["totals"]["bob"]["gross"] == 14


def test_stroke_play_ties_share_position():
    data = RoundData.build(
        ["alice", "bob", "carol"],
        {"alice": [4, 4], "bob": [5, 3], "carol": [6, 6]},
    )
    result = StrokePlayEngine().compute(data)
    assert result.winners == ["alice", "bob"]
    assert [entry["position"] for entry in result.standings] == [1, 1, 3]


def test_stroke_play_net_uses_handicap_strokes():
    data = RoundData.build(
        ["alice", "bob"],
        {"alice": [4] * 18, "bob": [5] * 18},
        handicaps={"alice": 0, "bob": 18},
    )
    result = StrokePlayEngine().compute(data, {"useNet": True})
    assert result.details["totals"]["bob"]["net"] == 72
    assert result.winners == ["alice", "bob"]


def test_stroke_play_max_score_rule():
    data = RoundData.build(["alice"], {"alice": [9, 4]}, course=Course.from_pars([4, 4]))
    config = StrokeConfig(max_score=MaxScoreRule("double-bogey"))
    result = StrokePlayEngine().compute(data, config)
    assert result.details["hole_by_hole"]["alice"][1] == {"gross": 9, "net": 6}
    assert result.details["totals"]["alice"] == {"gross": 13, "net": 10, "holes": 2}

    from_dict = StrokePlayEngine().compute(data, {"max_score": {"type": "fixed", "value": 7}})
    assert from_dict.details["totals"]["alice"]["net"] == 11


def test_missing_holes_count_as_zero():
    data = RoundData.build(["alice", "bob"], {"alice": [4, 4, 4], "bob": [4]})
    result = StrokePlayEngine().compute(data)
    assert result.details["totals"]["bob"]["gross"] == 4
    assert result.details["totals"]["bob"]["holes"] == 1


def test_no_scores_has_no_winner():
    data = RoundData.build(["alice", "bob"], {})
    assert StrokePlayEngine().compute(data).winners == []


def test_stableford_table():
    assert [stableford_points(strokes, 4) for strokes in range(0, 8)] == [8, 8, 5, 3, 2, 1, 0, 0]
    assert stableford_points(3, 5) == 5
    assert stableford_points(7, 4, modified=True) == -3
    assert stableford_points(4, 4, modified=True) == 0


def test_points_highest_total_wins():
    data = RoundData.build(
        ["alice", "bob"],
        {"alice": [3, 4, 6], "bob": [4, 4, 4]},
        course=Course.from_pars([4, 4, 4]),
    )
    result = PointsEngine().compute(data)
    assert result.details["totals"] == {"alice": 5, "bob": 6}
    assert result.winners == ["bob"]


def test_modified_points_name_and_totals():
    data = RoundData.build(["alice"], {"alice": [3, 6]}, course=Course.from_pars([4, 4]))
    result = PointsEngine().compute(data, {"modified": True})
    assert result.name == "Modified Stableford"
    assert result.details["totals"]["alice"] == -1


def _dots_round(entries):
    return RoundData(
        players=tuple(entries),
        scores={pid: {score.hole_number: score for score in scores} for pid, scores in entries.items()},
        course=Course.from_pars([4, 5, 3]),
    )


def test_dots_events_are_additive():
    data = _dots_round(
        {
            "alice": [
                HoleScore(1, 3, putts=1, fairway_hit=True, green_in_regulation=True),
                HoleScore(2, 3, putts=1, fairway_hit=True),
            ],
            "bob": [HoleScore(1, 6, putts=3), HoleScore(2, 5, putts=2, green_in_regulation=True)],
        }
    )
    result = DotsEngine().compute(data)
    # hole 1: fairway + gir + one putt + birdie = 5; hole 2 eagle: fairway + one putt + eagle = 7
    assert result.details["totals"]["alice"]["total"] == 12
    assert result.details["totals"]["alice"]["eagle"] == 5
    assert result.details["totals"]["bob"]["total"] == 0
    assert result.details["hole_by_hole"][0]["dots"]["bob"]["double_bogey"] == -1
    assert result.winners == ["alice"]
    assert result.ledger == []


def test_dots_ledger_pays_the_difference():
    data = _dots_round(
        {
            "alice": [HoleScore(1, 4, putts=1, fairway_hit=True)],
            "bob": [HoleScore(1, 4, putts=2)],
        }
    )
    result = DotsEngine().compute(data, DotsConfig(unit_per_dot=10))
    assert len(result.ledger) == 1
    payment = result.ledger[0]
    assert (payment.from_player, payment.to_player, payment.amount) == ("bob", "alice", 20)


def test_dots_player_without_data_scores_zero():
    data = _dots_round({"alice": [HoleScore(3, 2, putts=1)], "bob": []})
    result = DotsEngine().compute(data)
    assert result.details["hole_by_hole"][0]["dots"]["bob"]["total"] == 0
    assert result.details["totals"]["alice"]["total"] == 3
