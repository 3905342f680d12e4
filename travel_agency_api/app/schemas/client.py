"""
Pydantic models for clients and their trip registrations.

``ClientCreate`` deliberately declares every field optional: presence
of the required fields is checked by ``ClientService.create_client`` so
that a missing first name is reported as ``FirstName is required``
rather than as a generic schema error.
"""

from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from .trip import TripBase


class ClientCreate(BaseModel):
    """Schema for creating a client."""

    first_name: Optional[str] = Field(None, example="Ann")
    last_name: Optional[str] = Field(None, example="Lee")
    email: Optional[str] = Field(None, example="ann@example.com")
    telephone: Optional[str] = Field(None, example="+48 600 100 200")
    pesel: Optional[str] = Field(None, example="90010112345")

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class ClientCreated(BaseModel):
    id_client: int

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class ClientTripRead(TripBase):
    """A trip the client is registered for, with the registration stamps.

    ``registered_at`` and ``payment_date`` are ``YYYYMMDD`` integers.
    """

    registered_at: int = Field(..., example=20250301)
    payment_date: Optional[int] = Field(None, example=20250315)
