"""Completion toggling and summaries."""

import logging
from datetime import date, datetime
from typing import Optional, Union

from habit_tracker.calendar.days import Clock, day_identity, today
from habit_tracker.errors import HabitNotFound
from habit_tracker.habits.models import DaySummary, SummaryEntry, ToggleResult
from habit_tracker.habits.scheduling import HabitScheduler, is_possible
from habit_tracker.storage.database import HabitDatabase

logger = logging.getLogger(__name__)


class CompletionLedger:
    """Tracks which habits were completed on which days."""

    def __init__(self, db: HabitDatabase, clock: Clock = datetime.now):
        """Initialize with the habit store and a clock for "today"."""
        self.db = db
        self.clock = clock
        self.scheduler = HabitScheduler(db, clock)

    def get_day_summary(self, on: Union[datetime, date]) -> DaySummary:
        """
        Get the possible and completed habits for a date.

        Does not create a Day row. A date with no toggles has no
        completed habits.

        Args:
            on: Date to summarize

        Returns:
            DaySummary with possible habits and completed habit ids
        """
        day = day_identity(on)
        possible = self.scheduler.possible_habits(day)

        stored_day = self.db.get_day(day)
        completed = self.db.completed_habit_ids(stored_day.id) if stored_day else []

        return DaySummary(possible_habits=possible, completed_habits=completed)

    def toggle_habit(
        self, habit_id: str, at_date: Optional[Union[datetime, date]] = None
    ) -> ToggleResult:
        """
        Flip a habit between completed and not completed for a day.

        Args:
            habit_id: Habit to toggle
            at_date: Day to toggle on (defaults to today)

        Returns:
            ToggleResult with the new completion state

        Raises:
            HabitNotFound: If no habit has this id
        """
        if not self.db.habit_exists(habit_id):
            raise HabitNotFound(habit_id)

        day = day_identity(at_date) if at_date is not None else today(self.clock)
        completed = self.db.toggle_completion(day, habit_id)

        logger.info(
            f"Toggled habit {habit_id} on {day.date()}: "
            f"{'completed' if completed else 'not completed'}"
        )
        return ToggleResult(completed=completed)

    def get_summary(self) -> list[SummaryEntry]:
        """
        Get completed and possible counts for every stored day.

        Only days with at least one toggle have a row, so untouched days
        never appear.

        Returns:
            List of SummaryEntry ordered by date
        """
        days = self.db.list_days()
        if not days:
            return []

        completed_counts = self.db.completion_counts()
        habits = self.db.list_habits()

        summary = []
        for day in days:
            amount = sum(1 for habit in habits if is_possible(habit, day.date))
            summary.append(
                SummaryEntry(
                    id=day.id,
                    date=day.date,
                    completed=float(completed_counts.get(day.id, 0)),
                    amount=float(amount),
                )
            )

        logger.debug(f"Summary covers {len(summary)} days")
        return summary
