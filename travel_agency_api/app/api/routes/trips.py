"""Trip endpoints."""

from typing import List

from fastapi import APIRouter, Depends

from travel_agency_api.app.api.deps import get_trip_service
from travel_agency_api.app.schemas.trip import TripRead
from travel_agency_api.app.services.trip_service import TripService


router = APIRouter()


@router.get("", response_model=List[TripRead])
async def list_trips(service: TripService = Depends(get_trip_service)) -> List[TripRead]:
    """List all trips with their countries, ordered by start date.

    Trips without any associated country are not included.
    """
    return await service.list_trips()
