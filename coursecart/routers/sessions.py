from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from coursecart.database import get_db
from coursecart.models.session import CartSession
from coursecart.schemas.session import SessionOut, SessionTokenOut
from coursecart.services.sessions import close_session, create_demo_session
from coursecart.utils.auth import create_session_token, get_current_session

import logging
logger = logging.getLogger("coursecart.sessions")


router = APIRouter(prefix="/sessions", tags=["Sessions"])


@router.post("/demo", response_model=SessionTokenOut)
def start_demo_session(db: Session = Depends(get_db)):
    s = create_demo_session(db)
    return SessionTokenOut(access_token=create_session_token(s.id), session_id=s.id)


@router.get("/current", response_model=SessionOut)
def current_session(cart_session: CartSession = Depends(get_current_session)):
    return cart_session


# logout; for demo sessions the demo user goes too
@router.delete("/current")
def end_session(
    db: Session = Depends(get_db),
    cart_session: CartSession = Depends(get_current_session),
):
    session_id = cart_session.id
    close_session(db, session_id)
    return {"message": "Logged out", "session_id": session_id}
