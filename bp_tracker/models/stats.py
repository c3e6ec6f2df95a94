"""Models for the server-computed statistics summary."""

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from bp_tracker.models.reading import Reading


class AveragePeriod(str, Enum):
    """Averaging windows offered by the summary screen."""

    SEVEN_DAY = "7 Day Avg"
    THIRTY_DAY = "30 Day Avg"
    ALL_TIME = "All Time Avg"

    @property
    def days(self) -> Optional[int]:
        """Window length in days; None for all time."""
        return {AveragePeriod.SEVEN_DAY: 7, AveragePeriod.THIRTY_DAY: 30}.get(self)


class Stats(BaseModel):
    """Aggregate snapshot. Averages are None when a window holds no readings."""

    model_config = ConfigDict(frozen=True)

    last_reading: Optional[Reading] = Field(None, description="Most recent reading")
    seven_day_avg: Optional[Reading] = Field(None, description="Average over the last 7 days")
    seven_day_count: int = Field(0, ge=0, description="Readings in the last 7 days")
    thirty_day_avg: Optional[Reading] = Field(None, description="Average over the last 30 days")
    thirty_day_count: int = Field(0, ge=0, description="Readings in the last 30 days")
    all_time_avg: Optional[Reading] = Field(None, description="Average over all readings")
    all_time_count: int = Field(0, ge=0, description="Total number of readings")

    @classmethod
    def empty(cls) -> "Stats":
        return cls()

    @property
    def has_data(self) -> bool:
        return self.all_time_count > 0 or self.last_reading is not None

    def average_for(self, period: AveragePeriod) -> Tuple[Optional[Reading], int]:
        """Return the (average, count) pair for an averaging window."""
        if period is AveragePeriod.SEVEN_DAY:
            return self.seven_day_avg, self.seven_day_count
        if period is AveragePeriod.THIRTY_DAY:
            return self.thirty_day_avg, self.thirty_day_count
        return self.all_time_avg, self.all_time_count
