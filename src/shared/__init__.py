"""Cluster Registry shared package.

This package contains components shared by the registry services:
- models: Pydantic data models
- database: SQLAlchemy ORM models
- config: Configuration management
- observability: Structured logging
"""

__version__ = "0.1.0"
