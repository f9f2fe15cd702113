import pytest

from golf_games.engines.sixes import SixesEngine, segment_teams
from golf_games.engines.vegas import VegasEngine, vegas_number
from golf_games.engines.wolf import WolfEngine
from golf_games.errors import InvalidRoundError
from golf_games.models import Course, RoundData

FOURSOME = ["ann", "ben", "cal", "dee"]


def test_wolf_partner_lone_wolf_and_halved_holes():
    strokes = {
        "ann": [4, 4, 4],
        "ben": [5, 3, 4],
        "cal": [5, 4, 4],
        "dee": [5, 4, 4],
    }
    decisions = {1: "ben", 2: "lone", 3: {"partner": "dee"}}
    result = WolfEngine().compute(RoundData.build(FOURSOME, strokes), {"decisions": decisions})
    holes = result.details["hole_by_hole"]

    assert holes[0]["wolf"] == "ann" and holes[0]["result"] == "wolf"
    assert holes[0]["points"] == {"ann": 2, "ben": 2, "cal": -1, "dee": -1}
    # Ben goes alone on hole 2 and wins, so both sides are doubled.
    assert holes[1]["lone_wolf"] is True
    assert holes[1]["points"] == {"ann": -2, "ben": 4, "cal": -2, "dee": -2}
    assert holes[2]["result"] == "halved"
    assert result.details["totals"] == {"ann": 0, "ben": 6, "cal": -3, "dee": -3}
    assert result.winners == ["ben"]


def test_wolf_incomplete_hole_scores_nothing():
    strokes = {"ann": [4], "ben": [4], "cal": [None]}
    result = WolfEngine().compute(RoundData.build(["ann", "ben", "cal"], strokes), {"decisions": {1: "lone"}})
    assert result.details["hole_by_hole"][0]["result"] == "incomplete"
    assert result.winners == []


def test_wolf_rejects_unknown_partner():
    data = RoundData.build(["ann", "ben", "cal"], {"ann": [4], "ben": [4], "cal": [4]})
    with pytest.raises(InvalidRoundError):
        WolfEngine().compute(data, {"decisions": {1: "zed"}})


def test_wolf_custom_rotation():
    data = RoundData.build(["ann", "ben", "cal"], {"ann": [5], "ben": [5], "cal": [3]})
    result = WolfEngine().compute(data, {"rotation": ["cal", "ann", "ben"], "decisions": {1: "lone"}})
    assert result.details["hole_by_hole"][0]["wolf"] == "cal"
    assert result.details["totals"]["cal"] == 4


def test_wolf_without_decision_is_undecided():
    strokes = {"ann": [5], "ben": [4], "cal": [4], "dee": [4]}
    result = WolfEngine().compute(RoundData.build(FOURSOME, strokes))
    assert result.details["hole_by_hole"] == [
        {"hole": 1, "wolf": "ann", "partner": None, "result": "undecided"}
    ]
    assert result.details["totals"] == {"ann": 0, "ben": 0, "cal": 0, "dee": 0}
    assert result.winners == []


def test_wolf_partner_none_means_lone_wolf():
    strokes = {"ann": [5], "ben": [4], "cal": [4], "dee": [4]}
    result = WolfEngine().compute(RoundData.build(FOURSOME, strokes), {"decisions": {1: {"partner": None}}})
    assert result.details["hole_by_hole"][0]["lone_wolf"] is True
    assert result.details["totals"] == {"ann": -2, "ben": 4, "cal": 4, "dee": 4}


def test_vegas_number():
    assert vegas_number(5, 4) == 45
    assert vegas_number(4, 10) == 410
    assert vegas_number(4, 10, flip=True) == 104


@pytest.mark.parametrize("flip_on_ten, expected", [(True, 40), (False, 355)])
def test_vegas_flip_on_ten(flip_on_ten, expected):
    strokes = {
        "ann": [4, 4],
        "ben": [5, 10],
        "cal": [4, 5],
        "dee": [4, 6],
    }
    result = VegasEngine().compute(RoundData.build(FOURSOME, strokes), {"flipOnTen": flip_on_ten})
    assert result.details["totals"] == {"ann & ben": 0, "cal & dee": expected}
    assert result.details["hole_by_hole"][1]["flipped"] is flip_on_ten
    assert result.winners == ["cal", "dee"]
    assert result.standings[0] == {"team": "cal & dee", "score": expected, "position": 1}


def test_vegas_custom_teams():
    strokes = {"ann": [4], "ben": [4], "cal": [5], "dee": [5]}
    result = VegasEngine().compute(
        RoundData.build(FOURSOME, strokes), {"teams": [["ann", "cal"], ["ben", "dee"]]}
    )
    assert result.details["teams"] == {"ann & cal": ["ann", "cal"], "ben & dee": ["ben", "dee"]}
    assert result.winners == []


def test_vegas_requires_four_players():
    data = RoundData.build(["ann", "ben", "cal"], {"ann": [4], "ben": [4], "cal": [4]})
    with pytest.raises(InvalidRoundError):
        VegasEngine().compute(data)


def test_vegas_rejects_bad_teams():
    data = RoundData.build(FOURSOME, {pid: [4] for pid in FOURSOME})
    with pytest.raises(InvalidRoundError):
        VegasEngine().compute(data, {"teams": [["ann", "ben"], ["ann", "cal"]]})


def test_sixes_three_players_partner_each_other_once():
    strokes = {"ann": [3] * 18, "ben": [5] * 18, "cal": [4] * 18}
    result = SixesEngine().compute(RoundData.build(["ann", "ben", "cal"], strokes))
    pairs = [
        frozenset(team["players"])
        for segment in result.details["segments"]
        for team in segment["teams"]
        if len(team["players"]) == 2
    ]
    assert sorted(map(sorted, pairs)) == [["ann", "ben"], ["ann", "cal"], ["ben", "cal"]]
    assert result.details["totals"] == {"ann": 3, "ben": 1, "cal": 1}
    assert all(0 <= points <= 3 for points in result.details["totals"].values())
    assert result.winners == ["ann"]
    assert result.details["gross"]["cal"] == 72


def test_sixes_four_player_rotation():
    teams = [segment_teams(tuple(FOURSOME), index) for index in range(3)]
    assert teams == [
        (("ann", "ben"), ("cal", "dee")),
        (("ann", "cal"), ("ben", "dee")),
        (("ann", "dee"), ("ben", "cal")),
    ]


def test_sixes_tied_segment_awards_nothing():
    strokes = {pid: [4] * 6 for pid in FOURSOME}
    result = SixesEngine().compute(RoundData.build(FOURSOME, strokes))
    first = result.details["segments"][0]
    assert first["winner"] is None
    assert first["holes_counted"] == [1, 2, 3, 4, 5, 6]
    assert result.details["segments"][1]["holes_counted"] == []
    assert result.winners == []


def test_sixes_needs_three_players():
    with pytest.raises(InvalidRoundError):
        SixesEngine().compute(RoundData.build(["ann", "ben"], {"ann": [4], "ben": [4]}))


def test_sixes_net_zero_counts_as_a_score():
    course = Course.from_pars([3] + [4] * 17)
    strokes = {"ann": [4] * 6, "ben": [4] * 6, "cal": [3] + [5] * 5}
    data = RoundData.build(["ann", "ben", "cal"], strokes, course=course, handicaps={"cal": 54})
    result = SixesEngine().compute(data, {"use_net": True})
    first = result.details["segments"][0]
    assert first["holes_counted"] == [1, 2, 3, 4, 5, 6]
    cal_team = next(team for team in first["teams"] if "cal" in team["players"])
    assert cal_team["best_ball_total"] == 10
