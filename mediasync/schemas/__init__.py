"""Pydantic schemas for server payloads."""
