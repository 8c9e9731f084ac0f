"""Pydantic Schemas — response contracts at the API boundary."""
