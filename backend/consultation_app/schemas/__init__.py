"""Pydantic schemas exchanged with the consultation request services."""
