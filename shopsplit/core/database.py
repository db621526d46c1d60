"""SQLite database setup and CRUD operations."""

import json
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from typing import Generator

from shopsplit.core.config import DB_PATH
from shopsplit.models.shopping import ShoppingGroup, ShoppingItem, ShoppingList

# Maximum number of remembered item names for autocomplete
MAX_ITEM_NAMES = 100

SCHEMA = """
-- Shopping lists; items and groups are stored as JSON documents
CREATE TABLE IF NOT EXISTS shopping_lists (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    list_date TEXT NOT NULL,
    items TEXT NOT NULL DEFAULT '[]',
    groups TEXT,
    total REAL NOT NULL DEFAULT 0,
    is_split_mode INTEGER NOT NULL DEFAULT 0,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

-- Item names for autocomplete
CREATE TABLE IF NOT EXISTS item_names (
    id INTEGER PRIMARY KEY,
    name TEXT NOT NULL UNIQUE COLLATE NOCASE,
    added_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE INDEX IF NOT EXISTS idx_shopping_lists_date ON shopping_lists(list_date);
"""


def init_db() -> None:
    """Initialize the database with schema."""
    with get_connection() as conn:
        conn.executescript(SCHEMA)


@contextmanager
def get_connection() -> Generator[sqlite3.Connection, None, None]:
    """Get a database connection with row factory."""
    DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(DB_PATH)
    conn.row_factory = sqlite3.Row
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def _row_to_list(row: sqlite3.Row) -> ShoppingList:
    """Convert a database row to a ShoppingList."""
    groups = None
    if row["groups"] is not None:
        groups = [ShoppingGroup.model_validate(g) for g in json.loads(row["groups"])]

    return ShoppingList(
        id=row["id"],
        name=row["name"],
        date=row["list_date"],
        items=[ShoppingItem.model_validate(i) for i in json.loads(row["items"])],
        groups=groups,
        total=row["total"],
        is_split_mode=bool(row["is_split_mode"]),
    )


# Shopping list CRUD operations


def get_all_lists() -> list[ShoppingList]:
    """Get all shopping lists, newest first."""
    with get_connection() as conn:
        rows = conn.execute(
            "SELECT * FROM shopping_lists ORDER BY list_date DESC, updated_at DESC"
        ).fetchall()
        return [_row_to_list(row) for row in rows]


def get_list(list_id: str) -> ShoppingList | None:
    """Get a shopping list by ID."""
    with get_connection() as conn:
        row = conn.execute("SELECT * FROM shopping_lists WHERE id = ?", (list_id,)).fetchone()
        if row:
            return _row_to_list(row)
        return None


def save_list(shopping_list: ShoppingList) -> ShoppingList:
    """Insert or update a shopping list by ID."""
    groups_json = None
    if shopping_list.groups is not None:
        groups_json = json.dumps([g.model_dump() for g in shopping_list.groups])

    with get_connection() as conn:
        conn.execute(
            """
            INSERT INTO shopping_lists (id, name, list_date, items, groups, total, is_split_mode, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                name = excluded.name,
                list_date = excluded.list_date,
                items = excluded.items,
                groups = excluded.groups,
                total = excluded.total,
                is_split_mode = excluded.is_split_mode,
                updated_at = excluded.updated_at
            """,
            (
                shopping_list.id,
                shopping_list.name,
                shopping_list.date,
                json.dumps([i.model_dump() for i in shopping_list.items]),
                groups_json,
                shopping_list.total,
                int(shopping_list.is_split_mode),
                datetime.now().isoformat(),
            ),
        )
    return shopping_list


def delete_list(list_id: str) -> bool:
    """Delete a shopping list. Returns True if a list was deleted."""
    with get_connection() as conn:
        cursor = conn.execute("DELETE FROM shopping_lists WHERE id = ?", (list_id,))
        return cursor.rowcount > 0


# Item name autocomplete


def get_item_names(prefix: str | None = None) -> list[str]:
    """Get remembered item names, alphabetically.

    Args:
        prefix: Optional case-insensitive name prefix filter
    """
    with get_connection() as conn:
        if prefix:
            rows = conn.execute(
                "SELECT name FROM item_names WHERE name LIKE ? ESCAPE '\\' ORDER BY name COLLATE NOCASE",
                (_escape_like(prefix) + "%",),
            ).fetchall()
        else:
            rows = conn.execute("SELECT name FROM item_names ORDER BY name COLLATE NOCASE").fetchall()
        return [row["name"] for row in rows]


def save_item_names(names: list[str]) -> None:
    """Remember item names, keeping only the most recent ones.

    Names are trimmed. A name already known (compared case-insensitively)
    keeps its spelling and counts as just added.
    """
    cleaned = [n.strip() for n in names if n and n.strip()]
    if not cleaned:
        return

    with get_connection() as conn:
        conn.executemany(
            """
            INSERT INTO item_names (name, added_at) VALUES (?, ?)
            ON CONFLICT(name) DO UPDATE SET added_at = excluded.added_at
            """,
            [(name, datetime.now().isoformat()) for name in cleaned],
        )
        conn.execute(
            """
            DELETE FROM item_names WHERE id NOT IN (
                SELECT id FROM item_names ORDER BY added_at DESC, id DESC LIMIT ?
            )
            """,
            (MAX_ITEM_NAMES,),
        )


def add_item_name(name: str) -> None:
    """Remember a single item name (ignored if blank)."""
    if not name or not name.strip():
        return
    save_item_names([name])


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
