from datetime import datetime

from sqlalchemy import Column, ForeignKey, Integer, String, TIMESTAMP, UniqueConstraint
from sqlalchemy.orm import relationship

from coursecart.database import Base

class CartEntry(Base):
    __tablename__ = "cart_entries"
    __table_args__ = (
        UniqueConstraint("session_id", "class_number", name="uq_cart_session_section"),
    )

    # autoincrement id doubles as insertion order
    id = Column(Integer, primary_key=True)
    session_id = Column(String(64), ForeignKey("sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    class_number = Column(String(20), ForeignKey("sections.class_number"), nullable=False)
    created_at = Column(TIMESTAMP, default=datetime.utcnow)

    session = relationship("CartSession", back_populates="entries")
    section = relationship("Section", lazy="joined")

    @property
    def course_code(self) -> str:
        return self.section.course_code

    @property
    def course_name(self) -> str:
        return self.section.course_name

    @property
    def schedule(self) -> str:
        return self.section.schedule
