from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from growtrack.schemas.common import ORMModel


class LoginRequest(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserSummary(ORMModel):
    id: UUID
    email: str
    name: Optional[str] = None


class UserOut(UserSummary):
    is_active: bool
    created_at: datetime
