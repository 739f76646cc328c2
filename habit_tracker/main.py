"""Main FastAPI application."""

import logging
from datetime import datetime
from functools import lru_cache
from typing import Optional
from uuid import UUID

from fastapi import Depends, FastAPI, Query, Request, Response, status
from fastapi.responses import JSONResponse

from .calendar.days import Clock, parse_date, today
from .config import settings
from .dashboard.renderer import SummaryRenderer
from .errors import HabitNotFound, ValidationError
from .habits.ledger import CompletionLedger
from .habits.models import DaySummary, HabitCreate, SummaryEntry
from .habits.scheduling import HabitScheduler
from .storage.database import HabitDatabase

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Habit Tracker",
    description="Recurring habits and daily completion tracking",
    version="1.0.0",
)


@lru_cache
def get_database() -> HabitDatabase:
    """Shared habit store."""
    return HabitDatabase(settings.database_path, timeout=settings.database_timeout)


@lru_cache
def get_renderer() -> SummaryRenderer:
    """Shared heatmap renderer."""
    return SummaryRenderer()


def get_clock() -> Clock:
    """Clock used to decide what "today" is."""
    return datetime.now


def get_scheduler(
    db: HabitDatabase = Depends(get_database), clock: Clock = Depends(get_clock)
) -> HabitScheduler:
    return HabitScheduler(db, clock)


def get_ledger(
    db: HabitDatabase = Depends(get_database), clock: Clock = Depends(get_clock)
) -> CompletionLedger:
    return CompletionLedger(db, clock)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    logger.warning(f"Rejected {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


@app.exception_handler(HabitNotFound)
async def habit_not_found_handler(request: Request, exc: HabitNotFound):
    logger.warning(str(exc))
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Habit Tracker",
        "version": "1.0.0",
        "endpoints": {
            "habits": "/habits",
            "toggle": "/habits/{id}/toggle",
            "day": "/day",
            "summary": "/summary",
            "summary_image": "/summary/image",
            "status": "/status",
        },
    }


@app.get("/status")
async def server_status():
    """Server status endpoint."""
    return {
        "status": "running",
        "version": "1.0.0",
        "timestamp": datetime.utcnow().isoformat(),
    }


@app.post("/habits", status_code=status.HTTP_201_CREATED)
def create_habit(
    habit_in: HabitCreate, scheduler: HabitScheduler = Depends(get_scheduler)
):
    """Create a habit scheduled on the given weekdays (0=Sunday)."""
    scheduler.create_habit(habit_in.title, habit_in.week_days)
    return Response(status_code=status.HTTP_201_CREATED)


@app.get("/day", response_model=DaySummary)
def get_day(
    date: str = Query(..., description="ISO-8601 date"),
    ledger: CompletionLedger = Depends(get_ledger),
):
    """Possible habits for a date and the ids of those already completed."""
    return ledger.get_day_summary(parse_date(date))


@app.patch("/habits/{habit_id}/toggle", status_code=status.HTTP_204_NO_CONTENT)
def toggle_habit(habit_id: UUID, ledger: CompletionLedger = Depends(get_ledger)):
    """Complete or un-complete a habit for today."""
    ledger.toggle_habit(str(habit_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@app.get("/summary", response_model=list[SummaryEntry])
def get_summary(ledger: CompletionLedger = Depends(get_ledger)):
    """Completed and possible habit counts for every day with a toggle."""
    return ledger.get_summary()


@app.get("/summary/image")
def get_summary_image(
    weeks: Optional[int] = Query(None, ge=1, le=53),
    ledger: CompletionLedger = Depends(get_ledger),
    renderer: SummaryRenderer = Depends(get_renderer),
):
    """Render the summary as a PNG heatmap."""
    image = renderer.render(
        ledger.get_summary(),
        today(ledger.clock),
        weeks or settings.summary_weeks,
    )
    return Response(content=image, media_type="image/png")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )
