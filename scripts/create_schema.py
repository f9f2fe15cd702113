#!/usr/bin/env python3
"""Ensure the round history schema exists and echo the DDL for reference."""

from golf_games.history import SCHEMA_STATEMENTS, ensure_schema
from golf_games.settings import load_settings


def main() -> None:
    settings = load_settings()
    ensure_schema(settings.database_url)
    print("Round history schema ensured.")
    print(f"Database url: {settings.database_url}")

    print("\nSchema DDL dump:")
    for statement in SCHEMA_STATEMENTS:
        print(statement.strip())


if __name__ == "__main__":
    main()
