"""
Client endpoints.

These routes create clients and manage their trip registrations.  All
checks (existence, duplicates, capacity) live in ``ClientService``.
"""

from typing import List, Union

from fastapi import APIRouter, Depends, Path, Request, Response, status

from travel_agency_api.app.api.deps import get_client_service
from travel_agency_api.app.schemas.client import ClientCreate, ClientCreated, ClientTripRead
from travel_agency_api.app.schemas.common import Message
from travel_agency_api.app.services.client_service import ClientService


# Ids are bound as SQLite INTEGER, a signed 64-bit value.
SQLITE_MIN_ID = -(2**63)
SQLITE_MAX_ID = 2**63 - 1

router = APIRouter()


@router.get("/{client_id}/trips", response_model=Union[List[ClientTripRead], Message])
async def get_client_trips(
    client_id: int = Path(..., ge=SQLITE_MIN_ID, le=SQLITE_MAX_ID, description="ID of the client"),
    service: ClientService = Depends(get_client_service),
) -> Union[List[ClientTripRead], Message]:
    """Return the trips a client is registered for.

    A client without registrations gets an informational message
    instead of an empty list.  Unknown clients yield 404.
    """
    trips = await service.get_client_trips(client_id)
    if not trips:
        return Message(message=f"Client with ID {client_id} has no registered trips")
    return trips


@router.post("", response_model=ClientCreated, status_code=status.HTTP_201_CREATED)
async def create_client(
    client: ClientCreate,
    request: Request,
    response: Response,
    service: ClientService = Depends(get_client_service),
) -> ClientCreated:
    """Create a client.

    Responds with the new identifier and a ``Location`` header pointing
    at the client's trip list.  A duplicate email yields 409.
    """
    client_id = await service.create_client(client)
    response.headers["Location"] = str(request.url_for("get_client_trips", client_id=client_id))
    return ClientCreated(id_client=client_id)


@router.put("/{client_id}/trips/{trip_id}", response_model=Message)
async def register_for_trip(
    client_id: int = Path(..., ge=SQLITE_MIN_ID, le=SQLITE_MAX_ID, description="ID of the client"),
    trip_id: int = Path(..., ge=SQLITE_MIN_ID, le=SQLITE_MAX_ID, description="ID of the trip"),
    service: ClientService = Depends(get_client_service),
) -> Message:
    """Register a client for a trip.

    404 if the client or trip is missing, 409 if already registered,
    400 if the trip is full.
    """
    return Message(message=await service.register_client_for_trip(client_id, trip_id))


@router.delete("/{client_id}/trips/{trip_id}", response_model=Message)
async def cancel_trip_registration(
    client_id: int = Path(..., ge=SQLITE_MIN_ID, le=SQLITE_MAX_ID, description="ID of the client"),
    trip_id: int = Path(..., ge=SQLITE_MIN_ID, le=SQLITE_MAX_ID, description="ID of the trip"),
    service: ClientService = Depends(get_client_service),
) -> Message:
    """Cancel a client's registration for a trip (404 if there is none)."""
    return Message(message=await service.cancel_registration(client_id, trip_id))
