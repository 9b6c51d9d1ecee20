from __future__ import annotations

from typing import Optional

from ..common.datetime_utils import now_local
from ..common.validators import require_month_index
from ..core.constants import MONTH_NAMES
from ..core.exceptions import ValidationError


class MonthYearSelection:
    """Month/year picked by the user on the attendance view.

    Months are 0-based (0 = January). The selection is display state only;
    callers aggregate the full record set whatever is selected here.
    """

    def __init__(self, month: Optional[int] = None, year: Optional[int] = None):
        today = now_local()
        self._month = require_month_index(today.month - 1 if month is None else month)
        self._year = self._check_year(today.year if year is None else year)

    @staticmethod
    def _check_year(value) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid year {value!r}") from None

    @property
    def month(self) -> int:
        return self._month

    @property
    def year(self) -> int:
        return self._year

    @property
    def month_name(self) -> str:
        return MONTH_NAMES[self._month]

    def select_month(self, month) -> None:
        self._month = require_month_index(month)

    def select_year(self, year) -> None:
        self._year = self._check_year(year)

    def year_options(self) -> list[int]:
        return [self._year - 1, self._year]

    def as_dict(self) -> dict:
        return {
            "month": self._month,
            "monthName": self.month_name,
            "year": self._year,
            "yearOptions": self.year_options(),
            "months": list(MONTH_NAMES),
        }
