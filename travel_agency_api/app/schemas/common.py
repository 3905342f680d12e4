"""Shared response models."""

from pydantic import BaseModel, Field


class Message(BaseModel):
    """Plain confirmation or informational message."""

    message: str = Field(..., example="Client 1 successfully registered for trip 5")
