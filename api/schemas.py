from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

from gencore.settings import DEFAULT_MONTHLY_WINDOW, DEFAULT_RANGE_DAYS


class SeriesFiltersModel(BaseModel):
    from_iso: Optional[str] = None
    to_iso: Optional[str] = None
    range_days: int = DEFAULT_RANGE_DAYS
    frequency: Literal["daily", "rolling30"] = "daily"
    monthly_window: int = DEFAULT_MONTHLY_WINDOW
    show_units: bool = True
    show_prev_year: bool = True
    show_yoy: bool = True
    show_mom: bool = True


class MonthlyFiltersModel(BaseModel):
    monthly_window: int = DEFAULT_MONTHLY_WINDOW


class ObservationModel(BaseModel):
    date: str = Field(description="DD-MM-YYYY or YYYY-MM-DD")
    value: float


class CsvImportModel(BaseModel):
    text: str

