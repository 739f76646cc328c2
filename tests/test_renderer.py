"""Tests for the summary heatmap renderer."""

import io
from datetime import datetime

import pytest
from PIL import Image

from habit_tracker.dashboard.renderer import EMPTY_COLOR, RATIO_COLORS, ratio_bucket
from habit_tracker.habits.models import SummaryEntry


@pytest.mark.parametrize(
    "ratio, bucket",
    [(0.0, 0), (0.01, 1), (0.3, 2), (0.5, 3), (0.99, 4), (1.0, 5), (1.5, 5)],
)
def test_ratio_bucket(ratio, bucket):
    assert ratio_bucket(ratio) == bucket


def test_summary_entry_ratio_handles_zero_amount():
    entry = SummaryEntry(id="d", date=datetime(2024, 1, 10), completed=1, amount=0)
    assert entry.ratio == 0.0


def test_grid_starts_on_sunday(renderer):
    start = renderer.grid_start(datetime(2024, 1, 10, 15, 0), weeks=2)
    assert start == datetime(2023, 12, 31)


def test_render_returns_png_bytes(renderer):
    entries = [
        SummaryEntry(id="a", date=datetime(2024, 1, 8), completed=2, amount=2),
        SummaryEntry(id="b", date=datetime(2024, 1, 9), completed=0, amount=3),
    ]

    data = renderer.render(entries, datetime(2024, 1, 10), weeks=3)

    assert data.startswith(b"\x89PNG")
    with Image.open(io.BytesIO(data)) as image:
        assert image.format == "PNG"
        step = renderer.cell_size + renderer.gap
        assert image.size == (40 + 3 * step + renderer.gap, 7 * step + renderer.gap)


def test_render_writes_no_files(renderer, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    for _ in range(3):
        renderer.render([], datetime(2024, 1, 10), weeks=2)

    assert list(tmp_path.iterdir()) == []


def test_render_colors_cells_by_ratio(renderer):
    entries = [SummaryEntry(id="a", date=datetime(2024, 1, 8), completed=2, amount=2)]

    data = renderer.render(entries, datetime(2024, 1, 10), weeks=1)

    step = renderer.cell_size + renderer.gap
    center = renderer.cell_size // 2

    with Image.open(io.BytesIO(data)) as image:
        image = image.convert("RGB")

        def pixel(weekday):
            return image.getpixel((40 + center, renderer.gap + weekday * step + center))

        assert pixel(1) == _rgb(RATIO_COLORS[-1])  # Monday, all done
        assert pixel(2) == _rgb(EMPTY_COLOR)  # Tuesday, no row


def _rgb(hex_color):
    return tuple(int(hex_color[i:i + 2], 16) for i in (1, 3, 5))
