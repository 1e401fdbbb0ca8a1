# coursecart/schemas/section.py
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

SectionStatus = Literal["Open", "Waitlist", "Closed"]


class SectionIn(BaseModel):
    """Section snapshot as the presentation layer got it from the catalog feed."""
    class_number: str = Field(min_length=1)   # registration number
    course_code: str = Field(min_length=1)    # e.g. "CSCI-UA 101"
    course_name: str
    description: Optional[str] = None
    subject_code: Optional[str] = None
    section: Optional[str] = None
    instructor: str = "TBA"
    location: str = "TBA"
    course_type: str = "In-Person"
    schedule: str = "TBA"
    status: SectionStatus = "Open"
    capacity: int = 0
    enrolled: int = 0


class SectionOut(SectionIn):
    model_config = ConfigDict(from_attributes=True)
