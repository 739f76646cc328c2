"""SQLite storage for habits, days and completions."""

import logging
import sqlite3
import uuid
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional

from habit_tracker.habits.models import Day, Habit

logger = logging.getLogger(__name__)


def _to_db(value: datetime) -> str:
    return value.isoformat(timespec="seconds")


class HabitDatabase:
    """SQLite database for habits and their daily completions."""

    def __init__(self, db_path: str = "data/habits.db", timeout: float = 5.0):
        """Initialize database."""
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.timeout = timeout
        self._init_db()

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """Open a connection that commits on success and rolls back on error."""
        conn = sqlite3.connect(self.db_path, timeout=self.timeout)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    def _init_db(self):
        """Create database tables if they don't exist."""
        with self._connect() as conn:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS habits (
                    id TEXT PRIMARY KEY,
                    title TEXT NOT NULL,
                    created_at TEXT NOT NULL
                );

                CREATE TABLE IF NOT EXISTS habit_week_days (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    habit_id TEXT NOT NULL REFERENCES habits (id),
                    week_day INTEGER NOT NULL,
                    UNIQUE (habit_id, week_day)
                );

                CREATE TABLE IF NOT EXISTS days (
                    id TEXT PRIMARY KEY,
                    date TEXT NOT NULL UNIQUE
                );

                CREATE TABLE IF NOT EXISTS day_habits (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    day_id TEXT NOT NULL REFERENCES days (id),
                    habit_id TEXT NOT NULL REFERENCES habits (id),
                    UNIQUE (day_id, habit_id)
                );
            """)
        logger.info(f"Database initialized at {self.db_path}")

    # ----- Habits -----

    def create_habit(self, title: str, created_at: datetime, week_days: list[int]) -> Habit:
        """Insert a habit and one scheduling entry per weekday (already de-duplicated)."""
        habit = Habit(
            id=str(uuid.uuid4()),
            title=title,
            created_at=created_at,
            week_days=list(week_days),
        )

        with self._connect() as conn:
            conn.execute(
                "INSERT INTO habits (id, title, created_at) VALUES (?, ?, ?)",
                (habit.id, habit.title, _to_db(habit.created_at)),
            )
            conn.executemany(
                "INSERT INTO habit_week_days (habit_id, week_day) VALUES (?, ?)",
                [(habit.id, week_day) for week_day in habit.week_days],
            )

        logger.info(f"Created habit: {habit.title} ({habit.id})")
        return habit

    def list_habits(self, created_on_or_before: Optional[datetime] = None) -> list[Habit]:
        """
        Get habits with their scheduled weekdays, in insertion order.

        Args:
            created_on_or_before: Only return habits created on or before this day

        Returns:
            List of Habit objects
        """
        query = "SELECT id, title, created_at FROM habits"
        params: tuple = ()
        if created_on_or_before is not None:
            query += " WHERE created_at <= ?"
            params = (_to_db(created_on_or_before),)
        query += " ORDER BY rowid"

        with self._connect() as conn:
            rows = conn.execute(query, params).fetchall()
            week_days: dict[str, list[int]] = {}
            for row in conn.execute(
                "SELECT habit_id, week_day FROM habit_week_days ORDER BY week_day"
            ):
                week_days.setdefault(row["habit_id"], []).append(row["week_day"])

        return [
            Habit(
                id=row["id"],
                title=row["title"],
                created_at=datetime.fromisoformat(row["created_at"]),
                week_days=week_days.get(row["id"], []),
            )
            for row in rows
        ]

    def habit_exists(self, habit_id: str) -> bool:
        """Check whether a habit id is known."""
        with self._connect() as conn:
            row = conn.execute(
                "SELECT 1 FROM habits WHERE id = ?", (habit_id,)
            ).fetchone()
        return row is not None

    # ----- Days -----

    def get_day(self, date: datetime) -> Optional[Day]:
        """Get the Day row for a date, or None if nothing was toggled that day."""
        with self._connect() as conn:
            row = conn.execute(
                "SELECT id, date FROM days WHERE date = ?", (_to_db(date),)
            ).fetchone()

        if not row:
            return None

        return Day(id=row["id"], date=datetime.fromisoformat(row["date"]))

    def list_days(self) -> list[Day]:
        """Get every stored Day ordered by date."""
        with self._connect() as conn:
            rows = conn.execute("SELECT id, date FROM days ORDER BY date").fetchall()

        return [Day(id=row["id"], date=datetime.fromisoformat(row["date"])) for row in rows]

    def _find_or_create_day(self, conn: sqlite3.Connection, date: datetime) -> str:
        """Insert the Day row if absent, then fetch it. Returns the day id."""
        cursor = conn.execute(
            "INSERT OR IGNORE INTO days (id, date) VALUES (?, ?)",
            (str(uuid.uuid4()), _to_db(date)),
        )
        if cursor.rowcount:
            logger.info(f"Created day: {date.date()}")

        row = conn.execute(
            "SELECT id FROM days WHERE date = ?", (_to_db(date),)
        ).fetchone()
        return row["id"]

    # ----- Completions -----

    def completed_habit_ids(self, day_id: str) -> list[str]:
        """Get ids of habits completed on a stored day."""
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT habit_id FROM day_habits WHERE day_id = ? ORDER BY id",
                (day_id,),
            ).fetchall()
        return [row["habit_id"] for row in rows]

    def completion_counts(self) -> dict[str, int]:
        """Number of completion records per day id."""
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT day_id, count(*) AS completed FROM day_habits GROUP BY day_id"
            ).fetchall()
        return {row["day_id"]: row["completed"] for row in rows}

    def toggle_completion(self, date: datetime, habit_id: str) -> bool:
        """
        Flip the completion record for (date, habit) in a single transaction.

        BEGIN IMMEDIATE takes the write lock up front, so concurrent toggles of
        the same pair serialize on the existence check.

        Args:
            date: Day identity to toggle on
            habit_id: Habit to toggle

        Returns:
            True if the habit is now completed, False if the record was removed
        """
        with self._connect() as conn:
            conn.execute("BEGIN IMMEDIATE")
            day_id = self._find_or_create_day(conn, date)

            row = conn.execute(
                "SELECT id FROM day_habits WHERE day_id = ? AND habit_id = ?",
                (day_id, habit_id),
            ).fetchone()

            if row:
                conn.execute("DELETE FROM day_habits WHERE id = ?", (row["id"],))
                return False

            conn.execute(
                "INSERT INTO day_habits (day_id, habit_id) VALUES (?, ?)",
                (day_id, habit_id),
            )
            return True
