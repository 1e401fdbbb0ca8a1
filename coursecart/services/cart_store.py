"""
Cart store.

Per-session set of held sections. Invariants:
- one entry per (session, class_number)
- at most MAX_SECTIONS_PER_COURSE entries sharing a course code

No conflict detection happens here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from coursecart.config import settings
from coursecart.errors import ErrorCode
from coursecart.models.cart import CartEntry
from coursecart.models.section import Section
from coursecart.models.session import CartSession
from coursecart.services.locks import session_lock

logger = logging.getLogger("coursecart.cart")


@dataclass
class CartResult:
    ok: bool
    entry: Optional[CartEntry] = None
    created: bool = False
    code: Optional[ErrorCode] = None
    error: Optional[str] = None


def add(
    db: Session,
    session_id: str,
    section: Section,
    max_per_course: Optional[int] = None,
) -> CartResult:
    limit = settings.MAX_SECTIONS_PER_COURSE if max_per_course is None else max_per_course

    with session_lock(session_id):
        # a logout may have won the race for the lock
        if not db.query(CartSession.id).filter(CartSession.id == session_id).first():
            logger.info("add: session %s is gone", session_id)
            return CartResult(ok=False, code=ErrorCode.UNKNOWN_SESSION, error="Session not found")

        entries = list_entries(db, session_id)

        # already held -> hand back the same row
        for e in entries:
            if e.class_number == section.class_number:
                logger.info("add: %s already in cart of %s", section.class_number, session_id)
                return CartResult(ok=True, entry=e, created=False)

        same_course = [e for e in entries if e.course_code == section.course_code]
        if len(same_course) >= limit:
            logger.info(
                "add: capacity exceeded for %s in %s (%d held)",
                section.course_code, session_id, len(same_course),
            )
            return CartResult(
                ok=False,
                code=ErrorCode.CAPACITY_EXCEEDED,
                error=f"Maximum of {limit} sections per course allowed ({section.course_code})",
            )

        entry = CartEntry(session_id=session_id, class_number=section.class_number)
        db.add(entry)
        try:
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception("add: %s -> cart of %s failed", section.class_number, session_id)
            return CartResult(ok=False, code=ErrorCode.CART_UPDATE_FAILED, error="Failed to add to cart")
        db.refresh(entry)
        logger.info("add: %s -> cart of %s (entry %s)", section.class_number, session_id, entry.id)
        return CartResult(ok=True, entry=entry, created=True)


def remove(db: Session, session_id: str, class_number: str) -> bool:
    with session_lock(session_id):
        deleted = (
            db.query(CartEntry)
            .filter(CartEntry.session_id == session_id, CartEntry.class_number == class_number)
            .delete(synchronize_session=False)
        )
        db.commit()
    logger.info("remove: %s from cart of %s -> %d row(s)", class_number, session_id, deleted)
    return deleted > 0


def list_entries(db: Session, session_id: str) -> List[CartEntry]:
    return (
        db.query(CartEntry)
        .filter(CartEntry.session_id == session_id)
        .order_by(CartEntry.id.asc())
        .all()
    )


def clear(db: Session, session_id: str, commit: bool = True) -> int:
    with session_lock(session_id):
        deleted = (
            db.query(CartEntry)
            .filter(CartEntry.session_id == session_id)
            .delete(synchronize_session=False)
        )
        if commit:
            db.commit()
    logger.info("clear: cart of %s -> %d row(s)", session_id, deleted)
    return deleted
