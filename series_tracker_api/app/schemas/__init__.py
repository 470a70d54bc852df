"""
Pydantic schema definitions for API payloads.

Each domain (users, series) defines its own Pydantic models for request
and response bodies.  Schemas are separated from database rows to
decouple the API representation from persistence.
"""
