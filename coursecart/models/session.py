from datetime import datetime

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, TIMESTAMP
from sqlalchemy.orm import relationship

from coursecart.database import Base

class CartSession(Base):
    __tablename__ = "sessions"

    id = Column(String(64), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    is_demo = Column(Boolean, nullable=False, default=False)
    created_at = Column(TIMESTAMP, default=datetime.utcnow)

    user = relationship("User", back_populates="sessions", lazy="joined")
    entries = relationship(
        "CartEntry",
        back_populates="session",
        cascade="all, delete-orphan",
        order_by="CartEntry.id",
    )
