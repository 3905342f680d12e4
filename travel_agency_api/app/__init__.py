"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules: ``core`` (configuration, database access, errors, logging),
``schemas`` (request and response models), ``services`` (SQL and
business rules) and ``api`` (routers).
"""

from .main import app  # noqa: F401
