from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from coursecart.database import get_db
from coursecart.models.user import User
from coursecart.schemas.session import SessionTokenOut
from coursecart.schemas.user import UserCreate, UserOut
from coursecart.services.sessions import open_session
from coursecart.utils.auth import create_session_token
from coursecart.utils.hashing import can_log_in, hash_password

import logging
logger = logging.getLogger("coursecart.auth")


router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/register", response_model=UserOut)
def register(user_data: UserCreate, db: Session = Depends(get_db)):
    username = user_data.username.strip()
    if not username:
        raise HTTPException(status_code=400, detail="Username is required")

    exists = db.query(User).filter(User.username == username).first()
    if exists:
        raise HTTPException(status_code=400, detail="Username already exists")

    new_user = User(
        username=username,
        password_hash=hash_password(user_data.password),
        is_demo=False,
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)
    logger.info("registered user %s", new_user.id)
    return new_user


# every login opens a fresh cart session for the user
@router.post("/login", response_model=SessionTokenOut)
def login(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    user = db.query(User).filter(User.username == form_data.username).first()
    if not user or not can_log_in(user, form_data.password):
        raise HTTPException(status_code=403, detail="Invalid credentials")

    s = open_session(db, user)
    return SessionTokenOut(access_token=create_session_token(s.id), session_id=s.id)
