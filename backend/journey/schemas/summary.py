from datetime import datetime
from typing import Any
from pydantic import BaseModel, EmailStr


class SummaryOut(BaseModel):
    id: int
    user_id: str
    date: datetime
    content: str
    vocab: list[Any] | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class SendEmailRequest(BaseModel):
    email: EmailStr
    summaryId: int | None = None


class MessageResponse(BaseModel):
    message: str


class SendEmailResponse(BaseModel):
    success: bool
    message: str
