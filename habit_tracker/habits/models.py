"""Habit domain and API models."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

WeekDay = Annotated[int, Field(ge=0, le=6, strict=True)]


class HabitCreate(BaseModel):
    """Request body for POST /habits."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    week_days: list[WeekDay] = Field(alias="weekDays")

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title must not be empty")
        return value

    @field_validator("week_days")
    @classmethod
    def collapse_duplicates(cls, value: list[int]) -> list[int]:
        return sorted(set(value))


class Habit(BaseModel):
    """Habit record."""

    id: str
    title: str
    created_at: datetime
    week_days: list[int] = []


class Day(BaseModel):
    """Day record, created the first time a habit is toggled on that date."""

    id: str
    date: datetime


class DaySummary(BaseModel):
    """Response for GET /day."""

    model_config = ConfigDict(populate_by_name=True)

    possible_habits: list[Habit] = Field(alias="possibleHabits")
    completed_habits: list[str] = Field(alias="completedHabits")


class ToggleResult(BaseModel):
    """Completion state after a toggle."""

    completed: bool


class SummaryEntry(BaseModel):
    """One stored day in GET /summary."""

    id: str
    date: datetime
    completed: float = 0.0
    amount: float = 0.0

    @property
    def ratio(self) -> float:
        """Completed share of the day's possible habits (0.0 when none were possible)."""
        if self.amount == 0:
            return 0.0
        return min(self.completed / self.amount, 1.0)
