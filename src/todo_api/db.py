from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Generator, List, Optional
from uuid import UUID

from .models import Todo
from .repositories import TodoStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Cols:
    table: str = "todos"
    id: str = "id"
    title: str = "title"
    is_complete: str = "is_complete"


_COLS = _Cols()


class SQLiteTodoStore(TodoStore):
    """
    SQLite store implementing every use case's repository contract.

    The database path is passed in explicitly; each operation opens its own
    connection and commits on success or rolls back on error.
    """

    def __init__(self, db_path: str) -> None:
        os.makedirs(os.path.dirname(db_path) or ".", exist_ok=True)
        self._db_path = db_path
        self._init_db()

    @contextmanager
    def _conn(self) -> Generator[sqlite3.Connection, None, None]:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_db(self) -> None:
        with self._conn() as conn:
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {_COLS.table} (
                    {_COLS.id} TEXT PRIMARY KEY NOT NULL,
                    {_COLS.title} VARCHAR(160) NOT NULL,
                    {_COLS.is_complete} INTEGER NOT NULL DEFAULT 0
                )
                """
            )
        logger.info("SQLite store ready at %s", self._db_path)

    def _row_to_entity(self, row: sqlite3.Row) -> Todo:
        return Todo(
            id=UUID(row[_COLS.id]),
            title=str(row[_COLS.title]),
            is_complete=bool(row[_COLS.is_complete]),
        )

    def insert(self, todo: Todo) -> Todo:
        with self._conn() as conn:
            conn.execute(
                f"INSERT INTO {_COLS.table} ({_COLS.id}, {_COLS.title}, {_COLS.is_complete}) VALUES (?, ?, ?)",
                (str(todo.id), todo.title, 1 if todo.is_complete else 0),
            )
        return todo

    def get_by_id(self, todo_id: UUID) -> Optional[Todo]:
        with self._conn() as conn:
            row = conn.execute(
                f"SELECT * FROM {_COLS.table} WHERE {_COLS.id} = ?", (str(todo_id),)
            ).fetchone()
            return self._row_to_entity(row) if row else None

    def get_all(self, todo_id: Optional[UUID] = None) -> List[Todo]:
        with self._conn() as conn:
            if todo_id is not None:
                rows = conn.execute(
                    f"SELECT * FROM {_COLS.table} WHERE {_COLS.id} = ?", (str(todo_id),)
                ).fetchall()
            else:
                rows = conn.execute(f"SELECT * FROM {_COLS.table}").fetchall()
            return [self._row_to_entity(r) for r in rows]

    def update(self, todo: Todo) -> None:
        with self._conn() as conn:
            conn.execute(
                f"UPDATE {_COLS.table} SET {_COLS.title} = ?, {_COLS.is_complete} = ? WHERE {_COLS.id} = ?",
                (todo.title, 1 if todo.is_complete else 0, str(todo.id)),
            )

    def delete(self, todo_id: UUID) -> None:
        with self._conn() as conn:
            conn.execute(f"DELETE FROM {_COLS.table} WHERE {_COLS.id} = ?", (str(todo_id),))
