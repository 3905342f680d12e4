"""FastAPI dependencies that build services for a request."""

from fastapi import Depends, Request

from travel_agency_api.app.core.db import ConnectionFactory, get_connection_factory
from travel_agency_api.app.services.client_service import ClientService
from travel_agency_api.app.services.trip_service import TripService


def get_trip_service(connections: ConnectionFactory = Depends(get_connection_factory)) -> TripService:
    return TripService(connections)


def get_client_service(
    request: Request,
    connections: ConnectionFactory = Depends(get_connection_factory),
) -> ClientService:
    return ClientService(
        connections,
        atomic_registration=request.app.state.settings.atomic_registration,
    )
