import uuid
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from taskhub.models.enums import Role
from taskhub.schemas.envelope import Envelope
from taskhub.schemas.orgs import OrgOut

class UserUpdateIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str | None = Field(default=None, min_length=1, max_length=200)
    email: EmailStr | None = None
    role: Role | None = None

class UserRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str

class UserOut(UserRef):
    email: str
    role: Role
    organization: OrgOut

UserEnvelope = Envelope[UserOut]
UserListEnvelope = Envelope[list[UserOut]]
