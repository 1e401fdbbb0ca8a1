from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from coursecart.database import get_db
from coursecart.models.session import CartSession
from coursecart.schemas.registration import EnrollmentOut
from coursecart.services.registration import list_enrollments
from coursecart.utils.auth import get_current_session

router = APIRouter(prefix="/enrollments", tags=["Enrollments"])


@router.get("", response_model=list[EnrollmentOut])
def my_enrollments(
    db: Session = Depends(get_db),
    cart_session: CartSession = Depends(get_current_session),
):
    return list_enrollments(db, cart_session.user_id)
