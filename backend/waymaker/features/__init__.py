"""
Feature modules for WayMaker.

Each feature is a self-contained module with:
- models.py - Domain dataclasses
- schemas.py - Pydantic schemas
- service.py - Business logic
- client.py - Remote service access (optional)
"""
