from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from coursecart.schemas.section import SectionOut


class CartEntryOut(BaseModel):
    id: int
    class_number: str
    created_at: Optional[datetime] = None
    section: SectionOut

    model_config = ConfigDict(from_attributes=True)


class CartOut(BaseModel):
    session_id: str
    items: List[CartEntryOut]


class CartAddOut(BaseModel):
    created: bool
    entry: CartEntryOut
