# coursecart/schemas/catalog.py
from typing import List, Optional

from pydantic import BaseModel

from coursecart.schemas.section import SectionStatus


class CatalogSection(BaseModel):
    class_number: str
    section: str = "001"
    instructor: str = "TBA"
    schedule: str = "TBA"
    location: str = "TBA"
    course_type: str = "In-Person"
    status: SectionStatus = "Open"
    capacity: int = 0
    enrolled: int = 0


class CatalogCourse(BaseModel):
    code: str
    name: str
    description: str = "No description available"
    subject_code: Optional[str] = None
    sections: List[CatalogSection] = []
