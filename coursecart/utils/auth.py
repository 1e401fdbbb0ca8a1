from datetime import datetime, timedelta

from jose import jwt, JWTError
from fastapi import HTTPException, Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from coursecart.config import settings
from coursecart.database import get_db
from coursecart.models.session import CartSession

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")

def create_session_token(session_id: str, expires_minutes=None):
    minutes = expires_minutes or settings.SESSION_TOKEN_EXPIRE_MINUTES
    expire = datetime.utcnow() + timedelta(minutes=minutes)
    to_encode = {"sid": session_id, "exp": expire}
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)

def decode_session_token(token: str) -> str:
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise HTTPException(status_code=403, detail="Invalid session token")

    session_id = payload.get("sid")
    if not session_id:
        raise HTTPException(status_code=403, detail="Invalid session token")
    return session_id

def get_current_session(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> CartSession:
    session_id = decode_session_token(token)
    cart_session = db.query(CartSession).filter(CartSession.id == session_id).first()
    if not cart_session:
        # signed but already torn down (logout)
        raise HTTPException(status_code=401, detail="Session not found")
    return cart_session
