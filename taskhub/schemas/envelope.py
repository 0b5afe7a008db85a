from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")

class Result(BaseModel):
    success: bool
    message: str

class Envelope(Result, Generic[T]):
    data: T | None = None

class LoginResult(Result):
    token: str | None = None
