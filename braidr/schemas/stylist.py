from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional
from datetime import date

from braidr.utils.time_utils import parse_time

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

class DaySchedule(BaseModel):
    isOpen: bool = False
    startTime: Optional[str] = None  # HH:MM
    endTime: Optional[str] = None  # HH:MM, "24:00" allowed

    @field_validator("startTime")
    @classmethod
    def check_start(cls, value: Optional[str]) -> Optional[str]:
        if value is not None:
            parse_time(value)
        return value

    @field_validator("endTime")
    @classmethod
    def check_end(cls, value: Optional[str]) -> Optional[str]:
        if value is not None:
            parse_time(value, allow_end_of_day=True)
        return value

    @model_validator(mode="after")
    def check_open_hours(self) -> "DaySchedule":
        if self.isOpen and (self.startTime is None or self.endTime is None):
            raise ValueError("An open day needs both startTime and endTime")
        return self

class BusinessHours(BaseModel):
    monday: DaySchedule = Field(default_factory=DaySchedule)
    tuesday: DaySchedule = Field(default_factory=DaySchedule)
    wednesday: DaySchedule = Field(default_factory=DaySchedule)
    thursday: DaySchedule = Field(default_factory=DaySchedule)
    friday: DaySchedule = Field(default_factory=DaySchedule)
    saturday: DaySchedule = Field(default_factory=DaySchedule)
    sunday: DaySchedule = Field(default_factory=DaySchedule)

    def for_day(self, day: date) -> DaySchedule:
        """Working hours for the weekday the given date falls on."""
        return getattr(self, WEEKDAYS[day.weekday()])

class StylistProfile(BaseModel):
    id: str  # the stylist's user id
    isAvailable: bool = True
    businessHours: BusinessHours = Field(default_factory=BusinessHours)
