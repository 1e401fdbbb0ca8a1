from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from coursecart.schemas.user import UserOut


class SessionTokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    session_id: str


class SessionOut(BaseModel):
    id: str
    is_demo: bool
    created_at: Optional[datetime] = None
    user: UserOut

    model_config = ConfigDict(from_attributes=True)
