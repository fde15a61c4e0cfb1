from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr


class UserCreate(BaseModel):
    first_name: str
    last_name: Optional[str] = None
    email: EmailStr


class UserRead(BaseModel):
    id: int
    first_name: str
    last_name: Optional[str]
    email: str
    created_at: datetime

    model_config = {"from_attributes": True}
