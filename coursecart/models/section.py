from sqlalchemy import Column, Integer, String, Text
from coursecart.database import Base

class Section(Base):
    """Catalog snapshot of one section; written once, never updated."""
    __tablename__ = "sections"

    class_number = Column(String(20), primary_key=True)

    course_code = Column(String(40), nullable=False, index=True)
    course_name = Column(String(255), nullable=False)
    description = Column(Text)
    subject_code = Column(String(20))

    section = Column(String(20))
    instructor = Column(String(255))
    location = Column(String(255))
    course_type = Column(String(50))
    schedule = Column(String(120), nullable=False, default="TBA")
    status = Column(String(20), nullable=False, default="Open")

    capacity = Column(Integer, default=0)
    enrolled = Column(Integer, default=0)
