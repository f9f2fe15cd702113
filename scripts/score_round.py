#!/usr/bin/env python3
"""Score a round stored as JSON and print the merged results."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from fastapi.encoders import jsonable_encoder
from pydantic import ValidationError

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from golf_games.aggregator import score_round
from golf_games.main import RoundPayload
from golf_games.models import GameMode
from golf_games.settlement import collect_ledger, net_ledger


def main() -> None:
    parser = argparse.ArgumentParser(description="Score a round JSON file under its game modes.")
    parser.add_argument("path", type=Path, help="Round JSON (same shape as POST /api/rounds/score).")
    parser.add_argument(
        "--mode",
        action="append",
        default=[],
        type=GameMode,
        choices=list(GameMode),
        help="Extra game mode to score alongside the round's own modes.",
    )
    parser.add_argument("--settle", action="store_true", help="Include the netted ledger.")
    args = parser.parse_args()

    try:
        payload = RoundPayload.model_validate(json.loads(args.path.read_text()))
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        raise SystemExit(f"Could not read round from {args.path}: {exc}")

    payload.game_modes.extend(args.mode)
    result = score_round(payload.to_round(), payload.configs)
    output = {
        "primary": result.primary.value,
        "winners": result.winners,
        "results": result.results,
        "failures": result.failures,
    }
    if args.settle:
        output["settlement"] = net_ledger(collect_ledger(result.results.values()))
    json.dump(jsonable_encoder(output), sys.stdout, indent=2)
    sys.stdout.write("\n")
    if result.failures:
        sys.exit(1)


if __name__ == "__main__":
    main()
