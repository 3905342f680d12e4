"""
Route modules.

Each module defines an ``APIRouter`` for one domain.  Handlers only
extract parameters and call a service; errors raised by services are
translated to status codes by the handlers registered in ``main.py``.
"""
