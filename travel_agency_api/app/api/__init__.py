"""
HTTP layer.

``router.py`` aggregates the domain routers defined in ``routes`` and
is mounted by ``main.create_app`` under the configured API prefix.
``deps.py`` builds services for each request from the objects stored on
``app.state``.
"""
