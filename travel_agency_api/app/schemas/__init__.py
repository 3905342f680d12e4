"""
Pydantic schema definitions for API payloads.

Each domain (clients, trips) defines its own models for request and
response bodies.  Field names are snake_case in Python and camelCase on
the wire; incoming payloads may use either form.
"""
