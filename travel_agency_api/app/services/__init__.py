"""
Service layer.

Each service encapsulates the SQL for one domain and receives its
``ConnectionFactory`` at construction, so route handlers and tests can
point it at any database.
"""
