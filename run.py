"""Entry point for the Travel Agency API.

Starts the FastAPI application under Uvicorn.  Host and port are read
from the ``HOST`` and ``PORT`` environment variables (see
``travel_agency_api.app.core.config``).

Usage:
    python run.py
"""
import asyncio

from uvicorn import Config, Server

from travel_agency_api.app.core.config import settings
from travel_agency_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
