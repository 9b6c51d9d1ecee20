from __future__ import annotations

from datetime import datetime

import pytest

from src.school_management.school_management.attendance import period
from src.school_management.school_management.attendance.period import MonthYearSelection
from src.school_management.school_management.core.exceptions import ValidationError


def test_defaults_to_current_month_and_year(monkeypatch):
    monkeypatch.setattr(period, "now_local", lambda: datetime(2026, 10, 19, 9, 0))

    sel = MonthYearSelection()

    assert sel.month == 9
    assert sel.month_name == "October"
    assert sel.year == 2026
    assert sel.year_options() == [2025, 2026]


def test_year_options_follow_selected_year():
    sel = MonthYearSelection(month=0, year=2024)

    sel.select_year("2023")

    assert sel.year_options() == [2022, 2023]


def test_select_month_accepts_string_index():
    sel = MonthYearSelection(month=0, year=2024)

    sel.select_month("11")

    assert sel.month_name == "December"


@pytest.mark.parametrize("bad", [-1, 12, "x"])
def test_month_out_of_range_is_rejected(bad):
    sel = MonthYearSelection(month=0, year=2024)

    with pytest.raises(ValidationError):
        sel.select_month(bad)


def test_invalid_year_is_rejected():
    with pytest.raises(ValidationError):
        MonthYearSelection(month=1, year="soon")
