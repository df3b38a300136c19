from datetime import datetime
from pydantic import BaseModel, Field


class TranslationCreate(BaseModel):
    text: str = Field(min_length=1)


class TranslationOut(BaseModel):
    id: int
    user_id: str
    original_text: str
    japanese: str | None = None
    english: str | None = None
    romaji: str | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class TranslationDayCount(BaseModel):
    date: str
    count: int
