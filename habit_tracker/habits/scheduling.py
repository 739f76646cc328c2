"""Habit creation and per-day eligibility."""

import logging
from datetime import date, datetime
from typing import Union

import pydantic

from habit_tracker.calendar.days import Clock, day_identity, today, weekday_of
from habit_tracker.errors import ValidationError
from habit_tracker.habits.models import Habit, HabitCreate
from habit_tracker.storage.database import HabitDatabase

logger = logging.getLogger(__name__)


def is_possible(habit: Habit, day: Union[datetime, date]) -> bool:
    """
    Check whether a habit is possible on a day.

    A habit is possible when it was created on or before the day and is
    scheduled for the day's weekday.
    """
    day = day_identity(day)
    return habit.created_at <= day and weekday_of(day) in habit.week_days


class HabitScheduler:
    """Creates habits and works out which ones are possible on a date."""

    def __init__(self, db: HabitDatabase, clock: Clock = datetime.now):
        """
        Initialize scheduler.

        Args:
            db: Habit store
            clock: Returns the current instant, used to stamp created_at
        """
        self.db = db
        self.clock = clock

    def create_habit(self, title: str, week_days: list[int]) -> str:
        """
        Create a habit scheduled on the given weekdays.

        Args:
            title: Non-empty habit title
            week_days: Weekdays (0=Sunday, 6=Saturday) the habit recurs on

        Returns:
            New habit id

        Raises:
            ValidationError: If the title is blank or a weekday is out of range
        """
        try:
            data = HabitCreate(title=title, week_days=week_days)
        except pydantic.ValidationError as e:
            raise ValidationError(str(e)) from e

        habit = self.db.create_habit(
            title=data.title,
            created_at=today(self.clock),
            week_days=data.week_days,
        )
        return habit.id

    def possible_habits(self, on: Union[datetime, date]) -> list[Habit]:
        """Get every habit possible on a date, in creation order."""
        day = day_identity(on)
        habits = [
            habit
            for habit in self.db.list_habits(created_on_or_before=day)
            if is_possible(habit, day)
        ]
        logger.debug(f"{len(habits)} possible habits on {day.date()}")
        return habits
