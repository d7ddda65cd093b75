import datetime as dt
import uuid

from pydantic import BaseModel, ConfigDict, Field


class ConferenceRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    description: str | None = None
    date: dt.date | None = None
    location: str | None = None
    status: str


class ConferenceCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    date: dt.date | None = None
    location: str | None = None


class ScheduleItemRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    conference_id: uuid.UUID
    title: str
    start_time: dt.time
    end_time: dt.time
    room: str | None = None
