"""Pydantic models for backend documents and request bodies."""
