import uuid
from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from taskhub.schemas.envelope import Envelope
from taskhub.schemas.orgs import OrgOut
from taskhub.schemas.users import UserRef

class TaskCreateIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=300)
    description: str = Field(min_length=1)
    status: str | None = Field(default=None, max_length=50)
    due_date: date | None = None
    assigned_to: uuid.UUID

class TaskUpdateIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str | None = Field(default=None, min_length=1, max_length=300)
    description: str | None = Field(default=None, min_length=1)
    status: str | None = Field(default=None, max_length=50)
    due_date: date | None = None
    assigned_to: uuid.UUID | None = None

class TaskOut(BaseModel):
    id: uuid.UUID
    title: str
    description: str
    status: str
    due_date: date | None
    organization: OrgOut
    created_by: UserRef
    assigned_to: UserRef

TaskEnvelope = Envelope[TaskOut]
TaskListEnvelope = Envelope[list[TaskOut]]
