import uuid
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from taskhub.models.enums import Role

class RegisterIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=200)
    email: EmailStr
    password: str = Field(min_length=1)
    organization_id: uuid.UUID
    role: Role | None = None

class LoginIn(BaseModel):
    email: str
    password: str
