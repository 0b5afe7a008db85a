import uuid
from pydantic import BaseModel, ConfigDict, Field

from taskhub.schemas.envelope import Envelope

class OrgCreateIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=120)

class OrgUpdateIn(OrgCreateIn):
    pass

class OrgOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str

OrgEnvelope = Envelope[OrgOut]
OrgListEnvelope = Envelope[list[OrgOut]]
