from typing import Literal

from pydantic import BaseModel, Field


class MessageOut(BaseModel):
    message: str = Field(..., description="Human readable outcome")


class VerifyOTPOut(MessageOut):
    verified: Literal[True] = True
    expires_in_seconds: int | None = Field(
        None, description="Time left to complete the reset with this code"
    )


class ErrorOut(BaseModel):
    error: str
    detail: str
