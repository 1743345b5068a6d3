"""
Book Review API Application Package

Authenticated users register books and post one review per book; readers
fetch books with an average rating and paginated reviews.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy database connection and session management
- exceptions.py: Domain error taxonomy shared by services and handlers
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection functions
- models/: SQLAlchemy ORM models
- schemas/: Pydantic request/response schemas
- routers/: API route handlers
- services/: Business logic (book store, review aggregation, identity)
"""

__version__ = "0.1.0"
