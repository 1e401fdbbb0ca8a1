from passlib.context import CryptContext
from fastapi import HTTPException

from coursecart.models.user import User

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

BCRYPT_MAX_BYTES = 72

def hash_password(password: str) -> str:
    if not password:
        raise HTTPException(status_code=400, detail="Password is required")
    if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise HTTPException(status_code=400, detail="Password too long (bcrypt max 72 bytes)")
    return pwd_context.hash(password)

def can_log_in(user: User, plain_password: str) -> bool:
    # demo users have no password and only live inside their demo session
    if user.is_demo or not user.password_hash:
        return False
    if len(plain_password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        return False
    return pwd_context.verify(plain_password, user.password_hash)
