"""Read-only access to a player's completed rounds for handicap calculation."""

import logging

import psycopg

from golf_games.handicap import MAX_ROUNDS, RoundDifferential

logger = logging.getLogger(__name__)

SCHEMA_STATEMENTS = (
    """
    create table if not exists round_history (
        id serial primary key,
        round_id text not null,
        player_id text not null,
        gross integer not null,
        course_rating real not null default 72.0,
        slope integer not null default 113,
        course_name text,
        status text not null default 'completed',
        played_at timestamptz not null default now(),
        unique (round_id, player_id)
    );
    """,
    """
    create index if not exists round_history_player_idx
    on round_history (player_id, played_at desc);
    """,
)


def ensure_schema(database_url: str) -> None:
    with psycopg.connect(database_url) as conn:
        with conn.cursor() as cur:
            for statement in SCHEMA_STATEMENTS:
                cur.execute(statement)


def _row_to_differential(row: tuple) -> RoundDifferential:
    return RoundDifferential(
        round_id=row[0],
        gross=row[1],
        course_rating=row[2],
        slope=row[3],
        course_name=row[4],
        date=int(row[5].timestamp()) if row[5] else None,
    )


def fetch_recent_differentials(
    database_url: str,
    player_id: str,
    limit: int = MAX_ROUNDS,
    timeout: int = 5,
) -> list[RoundDifferential]:
    with psycopg.connect(database_url, connect_timeout=timeout) as conn:
        with conn.cursor() as cur:
            cur.execute(
                """
                select round_id, gross, course_rating, slope, course_name, played_at
                from round_history
                where player_id = %s and status = 'completed'
                order by played_at desc
                limit %s;
                """,
                (player_id, limit),
            )
            rows = cur.fetchall()
            return [_row_to_differential(row) for row in rows]


def load_player_history(database_url: str, player_id: str, timeout: int = 5) -> list[RoundDifferential]:
    """Recent differentials, or an empty history when the store is unreachable."""
    try:
        return fetch_recent_differentials(database_url, player_id, timeout=timeout)
    except psycopg.Error as exc:
        logger.warning("Could not load round history for %s: %s", player_id, exc)
        return []
