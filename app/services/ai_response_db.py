"""
PostgreSQL service – manages the ai_responses table (cached AI profile text).

Uses psycopg2 for synchronous access.
Connection is created once and reused (singleton pattern).
"""

import logging

import psycopg2
import psycopg2.extras

from app.config import get_settings
from app.schemas.ai import Category, StoredResponse

logger = logging.getLogger(__name__)

_CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS ai_responses (
    id          SERIAL PRIMARY KEY,
    category    TEXT NOT NULL,
    role        TEXT,
    prompt      TEXT NOT NULL,
    answer      TEXT NOT NULL,
    created_at  TIMESTAMPTZ NOT NULL DEFAULT now()
);
CREATE INDEX IF NOT EXISTS ai_responses_category_idx ON ai_responses (category);
"""

# ── Singleton connection ────────────────────────────────────────────────────

_conn = None


def _get_connection():
    """Return a reusable psycopg2 connection (created once)."""
    global _conn
    if _conn is None or _conn.closed:
        settings = get_settings()
        if not settings.database_url:
            raise RuntimeError("DATABASE_URL is not configured")
        _conn = psycopg2.connect(settings.database_url)
        _conn.autocommit = True
        logger.info("PostgreSQL connection established")
    return _conn


def _category_value(category: Category | str) -> str:
    # psycopg2 only adapts exact str values
    return category.value if isinstance(category, Category) else str(category)


def ensure_table() -> None:
    """Create the ai_responses table if it does not exist yet."""
    conn = _get_connection()
    with conn.cursor() as cur:
        cur.execute(_CREATE_TABLE_SQL)
    logger.info("ai_responses table ready")


def fetch_by_category(category: Category | str) -> list[StoredResponse]:
    """
    Return every cached response of ``category`` in insertion order.

    Parameters
    ----------
    category : Category | str
        Profile section to load.

    Returns
    -------
    list[StoredResponse]
        Possibly empty; unknown categories simply match no rows.
    """
    conn = _get_connection()

    with conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor) as cur:
        cur.execute(
            """
            SELECT id, category, role, prompt, answer, created_at
            FROM ai_responses
            WHERE category = %s
            ORDER BY id
            """,
            (_category_value(category),),
        )
        rows = cur.fetchall()

    return [StoredResponse(**row) for row in rows]


def insert_response(
    category: Category | str,
    prompt: str,
    answer: str,
    role: str | None = None,
) -> int:
    """
    Insert a generated answer into the cache.

    ``role`` is only stored for Experience; other categories store NULL.

    Returns
    -------
    int
        The id of the newly inserted row.
    """
    conn = _get_connection()
    category_value = _category_value(category)
    stored_role = role if category_value == Category.EXPERIENCE.value else None

    with conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor) as cur:
        cur.execute(
            """
            INSERT INTO ai_responses (category, role, prompt, answer)
            VALUES (%s, %s, %s, %s)
            RETURNING id
            """,
            (category_value, stored_role, prompt, answer),
        )
        row = cur.fetchone()

    response_id = int(row["id"])
    logger.info(
        "Stored AI response  id=%d  category=%s  chars=%d",
        response_id,
        category_value,
        len(answer),
    )
    return response_id
