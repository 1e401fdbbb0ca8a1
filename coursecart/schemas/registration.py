from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

from coursecart.errors import ErrorCode


class ValidationResult(BaseModel):
    valid: bool
    state: Literal["valid", "invalid"]
    code: Optional[ErrorCode] = None
    error: Optional[str] = None
    message: Optional[str] = None


class EnrollResult(BaseModel):
    success: bool
    state: Literal["enrolled", "failed"]
    code: Optional[ErrorCode] = None
    error: Optional[str] = None
    message: Optional[str] = None
    enrolled: list[str] = []   # course codes committed by this call


class EnrollmentOut(BaseModel):
    id: int
    course_code: str
    class_number: str
    course_name: str
    schedule: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
