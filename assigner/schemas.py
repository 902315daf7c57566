"""Pydantic schemas for the input document."""
from typing import List, Optional

from pydantic import BaseModel, Field, StrictInt, StrictStr


class AttendeeIn(BaseModel):
    name: StrictStr


class TimeslotIn(BaseModel):
    name: StrictStr
    capacity: Optional[StrictInt] = Field(default=None, ge=0)


class AssignmentDocument(BaseModel):
    attendees: List[AttendeeIn]
    timeslots: List[TimeslotIn]
