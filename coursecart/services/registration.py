"""
Validation & enrollment.

Per session:  Idle -> Validating -> {Valid, Invalid} -> Enrolling -> {Enrolled, Failed}

validate() checks, in order:
1) cart not empty
2) no course code held twice
3) no course the user is already enrolled in
4) no pairwise time conflict among cart entries, or between a cart entry
   and an existing enrollment

enroll() re-runs validate() under the session lock and then commits every
entry as an Enrollment and empties the cart in one transaction.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from coursecart.errors import ErrorCode
from coursecart.models.cart import CartEntry
from coursecart.models.enrollment import Enrollment
from coursecart.models.section import Section
from coursecart.models.session import CartSession
from coursecart.schemas.registration import EnrollResult, ValidationResult
from coursecart.schemas.section import SectionIn
from coursecart.services import cart_store
from coursecart.services.cart_store import CartResult
from coursecart.services.locks import session_lock
from coursecart.utils.conflict import has_conflict
from coursecart.utils.schedule import parse_schedule

logger = logging.getLogger("coursecart.registration")


def _label(name: str, code: str) -> str:
    return f"{name} ({code})" if name and name != code else code


def _invalid(code: ErrorCode, error: str) -> ValidationResult:
    return ValidationResult(valid=False, state="invalid", code=code, error=error)


def list_enrollments(db: Session, user_id: Optional[int]) -> List[Enrollment]:
    if user_id is None:
        return []
    return (
        db.query(Enrollment)
        .filter(Enrollment.user_id == user_id)
        .order_by(Enrollment.id.asc())
        .all()
    )


def upsert_section(db: Session, data: SectionIn) -> Section:
    """Insert the snapshot if unseen; an existing snapshot is left untouched."""
    section = db.query(Section).filter(Section.class_number == data.class_number).first()
    if section:
        return section
    section = Section(**data.model_dump())
    db.add(section)
    try:
        db.commit()
    except IntegrityError:
        # another session stored the same snapshot first
        db.rollback()
        section = db.query(Section).filter(Section.class_number == data.class_number).one()
    return section


def add_section(db: Session, session_id: str, data: SectionIn) -> CartResult:
    with session_lock(session_id):
        cart_session = db.query(CartSession).filter(CartSession.id == session_id).first()
        if cart_session is None:
            return CartResult(ok=False, code=ErrorCode.UNKNOWN_SESSION, error="Session not found")

        section = upsert_section(db, data)

        if section.status == "Closed":
            return CartResult(
                ok=False,
                code=ErrorCode.SECTION_CLOSED,
                error=f"Section {section.class_number} of {section.course_code} is closed",
            )

        enrolled_codes = {e.course_code for e in list_enrollments(db, cart_session.user_id)}
        if section.course_code in enrolled_codes:
            return CartResult(
                ok=False,
                code=ErrorCode.ALREADY_ENROLLED,
                error=f"Already enrolled in {section.course_code}",
            )

        return cart_store.add(db, session_id, section)


def _validate_locked(db: Session, session_id: str) -> Tuple[ValidationResult, List[CartEntry], Optional[CartSession]]:
    entries = cart_store.list_entries(db, session_id)
    if not entries:
        return _invalid(ErrorCode.EMPTY_CART, "Cart is empty"), entries, None

    cart_session = db.query(CartSession).filter(CartSession.id == session_id).first()
    enrollments = list_enrollments(db, cart_session.user_id if cart_session else None)

    seen = set()
    for e in entries:
        if e.course_code in seen:
            return _invalid(
                ErrorCode.DUPLICATE_COURSE,
                f"Multiple sections of {_label(e.course_name, e.course_code)} in cart",
            ), entries, cart_session
        seen.add(e.course_code)

    enrolled_codes = {en.course_code for en in enrollments}
    for e in entries:
        if e.course_code in enrolled_codes:
            return _invalid(
                ErrorCode.ALREADY_ENROLLED,
                f"Already enrolled in {_label(e.course_name, e.course_code)}",
            ), entries, cart_session

    labels = [_label(e.course_name, e.course_code) for e in entries]
    labels += [_label(en.course_name, en.course_code) for en in enrollments]

    check = has_conflict(
        [parse_schedule(e.schedule) for e in entries],
        [parse_schedule(en.schedule) for en in enrollments],
    )
    if check.conflict:
        i, j = check.pair
        return _invalid(
            ErrorCode.TIME_CONFLICT,
            f"Time conflict between {labels[i]} and {labels[j]}",
        ), entries, cart_session

    return ValidationResult(
        valid=True,
        state="valid",
        message=f"Schedule validated! {len(entries)} course(s) ready to enroll.",
    ), entries, cart_session


def validate(db: Session, session_id: str) -> ValidationResult:
    with session_lock(session_id):
        result, _, _ = _validate_locked(db, session_id)
    logger.info("validate %s -> %s %s", session_id, result.state, result.code.value if result.code else "")
    return result


def enroll(db: Session, session_id: str) -> EnrollResult:
    with session_lock(session_id):
        check, entries, cart_session = _validate_locked(db, session_id)
        if not check.valid:
            logger.info("enroll %s refused: %s", session_id, check.code.value)
            return EnrollResult(success=False, state="failed", code=check.code, error=check.error)

        try:
            for e in entries:
                db.add(Enrollment(
                    user_id=cart_session.user_id,
                    course_code=e.course_code,
                    class_number=e.class_number,
                    course_name=e.course_name,
                    schedule=e.schedule,
                ))
            cart_store.clear(db, session_id, commit=False)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception("enroll %s failed, cart left untouched", session_id)
            return EnrollResult(
                success=False,
                state="failed",
                code=ErrorCode.ENROLLMENT_FAILED,
                error="Failed to enroll in courses",
            )

    codes = [e.course_code for e in entries]
    logger.info("enroll %s -> %s", session_id, ", ".join(codes))
    return EnrollResult(
        success=True,
        state="enrolled",
        message="Successfully enrolled in courses!",
        enrolled=codes,
    )
