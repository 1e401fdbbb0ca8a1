from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from coursecart.database import get_db
from coursecart.errors import ErrorCode
from coursecart.models.session import CartSession
from coursecart.schemas.cart import CartAddOut, CartEntryOut, CartOut
from coursecart.schemas.registration import EnrollResult, ValidationResult
from coursecart.schemas.section import SectionIn
from coursecart.services import cart_store, registration
from coursecart.utils.auth import get_current_session

import logging
logger = logging.getLogger("coursecart.cart")


router = APIRouter(prefix="/cart", tags=["Cart"])


@router.get("", response_model=CartOut)
def list_cart(
    db: Session = Depends(get_db),
    cart_session: CartSession = Depends(get_current_session),
):
    entries = cart_store.list_entries(db, cart_session.id)
    return CartOut(
        session_id=cart_session.id,
        items=[CartEntryOut.model_validate(e) for e in entries],
    )


@router.post("", response_model=CartAddOut)
def add_to_cart(
    body: SectionIn,
    db: Session = Depends(get_db),
    cart_session: CartSession = Depends(get_current_session),
):
    result = registration.add_section(db, cart_session.id, body)
    if not result.ok:
        if result.code == ErrorCode.UNKNOWN_SESSION:
            status = 401
        elif result.code == ErrorCode.SECTION_CLOSED:
            status = 400
        else:
            status = 409
        raise HTTPException(status, {"code": result.code.value, "message": result.error})

    return CartAddOut(created=result.created, entry=CartEntryOut.model_validate(result.entry))


# removing something that is not there is not an error
@router.delete("/{class_number}")
def remove_from_cart(
    class_number: str,
    db: Session = Depends(get_db),
    cart_session: CartSession = Depends(get_current_session),
):
    removed = cart_store.remove(db, cart_session.id, class_number)
    return {"removed": removed, "class_number": class_number}


@router.delete("")
def clear_cart(
    db: Session = Depends(get_db),
    cart_session: CartSession = Depends(get_current_session),
):
    deleted = cart_store.clear(db, cart_session.id)
    return {"message": "Cleared", "deleted": deleted}


@router.post("/validate", response_model=ValidationResult)
def validate_cart(
    db: Session = Depends(get_db),
    cart_session: CartSession = Depends(get_current_session),
):
    return registration.validate(db, cart_session.id)


@router.post("/enroll", response_model=EnrollResult)
def enroll_cart(
    db: Session = Depends(get_db),
    cart_session: CartSession = Depends(get_current_session),
):
    return registration.enroll(db, cart_session.id)
