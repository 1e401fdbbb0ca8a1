from datetime import datetime

from sqlalchemy import Column, ForeignKey, Integer, String, TIMESTAMP, UniqueConstraint
from sqlalchemy.orm import relationship

from coursecart.database import Base

class Enrollment(Base):
    __tablename__ = "enrollments"
    __table_args__ = (
        UniqueConstraint("user_id", "course_code", name="uq_enrollment_user_course"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    course_code = Column(String(40), nullable=False)
    class_number = Column(String(20), nullable=False)

    # snapshot taken at commit time, used by later conflict checks
    course_name = Column(String(255), nullable=False)
    schedule = Column(String(120), nullable=False, default="TBA")

    created_at = Column(TIMESTAMP, default=datetime.utcnow)

    user = relationship("User", back_populates="enrollments")
