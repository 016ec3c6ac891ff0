"""Business logic services.

This package contains service classes that implement business logic,
orchestrate operations across repositories and mappers, and provide
high-level functionality to API endpoints.
"""
