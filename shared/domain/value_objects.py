"""
Common Value Objects

Value objects used across the booking domain:
- DateRange: Represents a stay (check-in to check-out)
"""

import math
from dataclasses import dataclass
from datetime import date, timedelta

from shared.domain.base import ValueObject

ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class DateRange(ValueObject):
    """
    Date range value object

    Represents a range from start_date (inclusive) to end_date (exclusive).
    Accepts plain dates or datetimes, as long as both ends are of the same kind.
    """
    start_date: date
    end_date: date

    def __post_init__(self):
        if self.start_date >= self.end_date:
            raise ValueError(f"Start date ({self.start_date}) must be before end date ({self.end_date})")

    @property
    def nights(self) -> int:
        """
        Number of nights in the stay

        A partial day counts as a full night, so datetimes are rounded up.
        """
        return math.ceil((self.end_date - self.start_date) / ONE_DAY)
