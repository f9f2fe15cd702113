from golf_games.engines.base import ScoringEngine
from golf_games.engines.dots import DotsEngine
from golf_games.engines.match import MatchPlayEngine
from golf_games.engines.nassau import NassauEngine
from golf_games.engines.points import PointsEngine
from golf_games.engines.sixes import SixesEngine
from golf_games.engines.skins import SkinsEngine
from golf_games.engines.snake import SnakeEngine
from golf_games.engines.stroke import StrokePlayEngine
from golf_games.engines.vegas import VegasEngine
from golf_games.engines.wolf import WolfEngine
from golf_games.errors import InvalidRoundError
from golf_games.models import GameMode

ENGINES: dict[GameMode, ScoringEngine] = {
    engine.mode: engine
    for engine in (
        StrokePlayEngine(),
        MatchPlayEngine(),
        SkinsEngine(),
        NassauEngine(),
        PointsEngine(),
        DotsEngine(),
        WolfEngine(),
        VegasEngine(),
        SixesEngine(),
        SnakeEngine(),
    )
}


def parse_mode(value: str | GameMode) -> GameMode:
    try:
        return GameMode(value)
    except ValueError as exc:
        raise InvalidRoundError(f"Unknown game mode: {value}") from exc


def get_engine(mode: str | GameMode) -> ScoringEngine:
    return ENGINES[parse_mode(mode)]
