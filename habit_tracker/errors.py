"""Errors raised by the habit tracker."""


class HabitTrackerError(Exception):
    """Base class for habit tracker errors."""


class ValidationError(HabitTrackerError):
    """Input was rejected before anything was persisted."""


class InvalidDate(ValidationError):
    """A date string could not be parsed."""


class HabitNotFound(HabitTrackerError):
    """No habit exists with the given id."""

    def __init__(self, habit_id: str):
        super().__init__(f"Habit not found: {habit_id}")
        self.habit_id = habit_id
