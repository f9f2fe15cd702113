from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Mapping

from golf_games.engines import ENGINES, parse_mode
from golf_games.models import FormatResult, GameMode, Round, RoundData

logger = logging.getLogger(__name__)
FALLBACK_MODE = GameMode.STROKE_PLAY


@dataclass(frozen=True)
class RoundResult:
    primary: GameMode
    results: dict[str, FormatResult]
    failures: list[dict] = field(default_factory=list)

    @property
    def headline(self) -> FormatResult:
        return self.results[self.primary.value]

    @property
    def winners(self) -> list[str]:
        return self.headline.winners


def _fallback_result(data: RoundData, mode: GameMode, configs: Mapping[GameMode, Any]) -> FormatResult:
    engine = ENGINES[FALLBACK_MODE]
    try:
        result = engine.compute(data, configs.get(FALLBACK_MODE))
    except Exception:  # noqa: BLE001
        result = engine.compute(data)
    return replace(result, details={**result.details, "fallback_for": mode.value})


def score_round_data(
    data: RoundData,
    modes: Iterable[str | GameMode],
    configs: Mapping[str | GameMode, Any] | None = None,
) -> RoundResult:
    """
    Run every requested format over the same round data. A format whose engine
    fails gets the stroke play result in its place; the failure is reported
    next to it and never affects the other formats.
    """
    ordered: list[GameMode] = []
    for mode in modes:
        parsed = parse_mode(mode)
        if parsed not in ordered:
            ordered.append(parsed)
    if not ordered:
        ordered.append(FALLBACK_MODE)
    mode_configs = {parse_mode(key): value for key, value in (configs or {}).items()}

    results: dict[str, FormatResult] = {}
    failures: list[dict] = []
    for mode in ordered:
        try:
            results[mode.value] = ENGINES[mode].compute(data, mode_configs.get(mode))
        except Exception as exc:  # noqa: BLE001
            logger.warning("%s scoring failed, using stroke play instead: %s", mode.value, exc)
            failures.append(
                {"mode": mode.value, "error": str(exc), "fallback": FALLBACK_MODE.value}
            )
            results[mode.value] = _fallback_result(data, mode, mode_configs)

    return RoundResult(primary=ordered[0], results=results, failures=failures)


def score_round(golf_round: Round, configs: Mapping[str | GameMode, Any] | None = None) -> RoundResult:
    return score_round_data(RoundData.from_round(golf_round), golf_round.active_modes(), configs)
