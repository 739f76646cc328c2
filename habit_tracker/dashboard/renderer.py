"""Summary heatmap renderer."""

import io
import logging
from datetime import datetime, timedelta
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from habit_tracker.calendar.days import WEEKDAY_NAMES, day_identity, weekday_of
from habit_tracker.habits.models import SummaryEntry

logger = logging.getLogger(__name__)

# Fill colours from "nothing done" to "everything done"
RATIO_COLORS = ["#27272a", "#4c1d95", "#5b21b6", "#6d28d9", "#7c3aed", "#8b5cf6"]
EMPTY_COLOR = "#18181b"
BACKGROUND = "#09090b"


def ratio_bucket(ratio: float) -> int:
    """Map a completion ratio to an index into RATIO_COLORS."""
    if ratio <= 0:
        return 0
    if ratio >= 1:
        return len(RATIO_COLORS) - 1
    # 0 < ratio < 1 falls into one of the middle buckets
    return min(int(ratio * (len(RATIO_COLORS) - 2)) + 1, len(RATIO_COLORS) - 2)


class SummaryRenderer:
    """Renders the completion summary as a weekday-by-week grid."""

    def __init__(self, cell_size: int = 24, gap: int = 6):
        """
        Initialize renderer.

        Args:
            cell_size: Side of one day square in pixels
            gap: Space between squares in pixels
        """
        self.cell_size = cell_size
        self.gap = gap
        self.font = self._load_font()

    def _load_font(self):
        """Load a label font, falling back to Pillow's default."""
        font_paths = [
            "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
            "/System/Library/Fonts/Helvetica.ttc",  # macOS
        ]

        for path in font_paths:
            if Path(path).exists():
                try:
                    return ImageFont.truetype(path, 12)
                except OSError as e:
                    logger.warning(f"Could not load font {path}: {e}")

        return ImageFont.load_default()

    def grid_start(self, today: datetime, weeks: int) -> datetime:
        """First Sunday shown in a grid of `weeks` columns ending at today's week."""
        today = day_identity(today)
        week_start = today - timedelta(days=weekday_of(today))
        return week_start - timedelta(weeks=weeks - 1)

    def render(
        self, entries: list[SummaryEntry], today: datetime, weeks: int = 18
    ) -> bytes:
        """
        Render the heatmap.

        Args:
            entries: Summary entries from the completion ledger
            today: Last day drawn; later days are left out
            weeks: Number of week columns

        Returns:
            PNG image bytes
        """
        weeks = max(weeks, 1)
        today = day_identity(today)
        logger.info(f"Rendering summary heatmap for {len(entries)} days over {weeks} weeks")

        by_date = {day_identity(entry.date): entry for entry in entries}
        step = self.cell_size + self.gap
        label_width = 40
        width = label_width + weeks * step + self.gap
        height = 7 * step + self.gap

        image = Image.new("RGB", (width, height), BACKGROUND)
        draw = ImageDraw.Draw(image)

        for row, name in enumerate(WEEKDAY_NAMES):
            draw.text(
                (self.gap, self.gap + row * step + self.cell_size // 4),
                name[:3],
                fill="#a1a1aa",
                font=self.font,
            )

        start = self.grid_start(today, weeks)
        day = start
        while day <= today:
            column = (day - start).days // 7
            row = weekday_of(day)
            x = label_width + column * step
            y = self.gap + row * step

            entry = by_date.get(day)
            fill = RATIO_COLORS[ratio_bucket(entry.ratio)] if entry else EMPTY_COLOR
            outline = "#ffffff" if day == today else None
            draw.rounded_rectangle(
                [x, y, x + self.cell_size, y + self.cell_size],
                radius=4,
                fill=fill,
                outline=outline,
                width=2,
            )
            day += timedelta(days=1)

        buffer = io.BytesIO()
        image.save(buffer, "PNG")
        return buffer.getvalue()
