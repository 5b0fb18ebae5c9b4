"""Pydantic models for API requests and responses."""

from datetime import datetime

from pydantic import BaseModel, Field


class FoodOut(BaseModel):
    """Canonical food."""

    name: str
    category: str


class AliasOut(BaseModel):
    """An alias recognized for a food."""

    alias: str
    food: str
    category: str


class MatchRequest(BaseModel):
    """Free text to scan for foods, usually a dictated transcript."""

    text: str


class MatchResponse(BaseModel):
    matches: list[AliasOut]


class ConfirmedEntry(BaseModel):
    """A match the user confirmed, identified by alias and food name."""

    alias: str
    food: str


class ConfirmRequest(BaseModel):
    entries: list[ConfirmedEntry] = Field(min_length=1)


class HistoryEntryOut(BaseModel):
    """One eaten food."""

    food: str
    consumed_name: str
    date: datetime
    label: str


class WeekSummaryOut(BaseModel):
    """Distinct food count for a week window."""

    start_date: datetime
    end_date: datetime
    start_label: str
    end_label: str
    count: int
    goal: int
    goal_reached: bool


class CurrentWeekOut(WeekSummaryOut):
    today_label: str
    days_remaining: int
    foods: list[FoodOut]


class WeekFoodOut(FoodOut):
    """A food eaten in a week with the entries that recorded it."""

    entries: list[HistoryEntryOut]


class WeekDetailOut(WeekSummaryOut):
    foods: list[WeekFoodOut]


class WeekStartSetting(BaseModel):
    """First day of the week, 0 for Sunday through 6 for Saturday."""

    value: int = Field(ge=0, le=6)


class FragmentRequest(BaseModel):
    """A speech recognition result."""

    text: str
    is_final: bool = True


class DictationStateOut(BaseModel):
    transcript: str
    interim_text: str
    stop_requested: bool
