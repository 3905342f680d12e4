"""
Pydantic models for trips.

A ``TripRead`` is one row of the trip listing: the trip columns plus
the names of all countries the trip visits, joined into one string.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class TripBase(BaseModel):
    id_trip: int
    name: str = Field(..., example="Alpine Escape")
    description: Optional[str] = Field(None, example="A week of hiking in the Alps")
    date_from: datetime
    date_to: datetime
    max_people: int = Field(..., example=20)

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class TripRead(TripBase):
    """Trip as returned by ``GET /trips``."""

    countries: str = Field(..., example="Austria, Switzerland")
