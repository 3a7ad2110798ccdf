"""
Feature modules for District Run.

Each feature is a self-contained module with:
- models.py - SQLAlchemy models
- schemas.py - Pydantic schemas
- service.py - Business logic (optional)
- repository.py - Data access
"""
