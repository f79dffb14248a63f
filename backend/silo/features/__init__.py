"""
Feature modules for SILO.

Each feature is a self-contained module with:
- models.py - dataclasses (or SQLAlchemy models for storage)
- service.py / stats.py / builder.py - Business logic
- repository.py - Data access (optional)
"""
