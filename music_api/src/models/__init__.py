"""Data models for the music catalog service.

This package contains SQLAlchemy entities and Pydantic models for
request/response validation.
"""
