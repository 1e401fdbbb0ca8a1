# coursecart/services/sessions.py
import logging
import secrets
import time

from sqlalchemy.orm import Session

from coursecart.models.session import CartSession
from coursecart.models.user import User
from coursecart.services import cart_store
from coursecart.services.locks import session_lock

logger = logging.getLogger("coursecart.sessions")


def _new_session_id() -> str:
    return secrets.token_urlsafe(24)


def open_session(db: Session, user: User) -> CartSession:
    s = CartSession(id=_new_session_id(), user_id=user.id, is_demo=bool(user.is_demo))
    db.add(s)
    db.commit()
    db.refresh(s)
    logger.info("session opened: user=%s demo=%s", user.id, s.is_demo)
    return s


def create_demo_session(db: Session) -> CartSession:
    stamp = f"{int(time.time() * 1000)}-{secrets.token_hex(3)}"
    user = User(username=f"demo_{stamp}", is_demo=True)
    db.add(user)
    db.flush()
    return open_session(db, user)


def close_session(db: Session, session_id: str) -> bool:
    """
    Logout / demo clear:
    cart entries go first, then the session, then the user if it was a demo user.
    """
    with session_lock(session_id):
        s = db.query(CartSession).filter(CartSession.id == session_id).first()
        if not s:
            return False

        cart_store.clear(db, session_id, commit=False)
        db.expire(s, ["entries"])

        user = s.user
        db.delete(s)
        if user is not None and user.is_demo:
            db.delete(user)
        db.commit()

    logger.info("session closed: %s", session_id)
    return True
